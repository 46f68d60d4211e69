import os
from configparser import ConfigParser
from logging.config import dictConfig

import redis
from flask import Flask
from sqlalchemy.pool import StaticPool

from misp.database import db
from misp.domain.signing import SigningServices
from misp.queue import celery, update_celery
from misp.utils import mailer
from misp.utils.logging import JsonFormatter, RequestContextFilter
from misp.utils.notification_sender import NotificationSender


ENV = os.getenv("FLASK_ENV", "dev")
CONFIG_DIR = os.path.join(os.path.dirname(__file__), "..", "config")


def make_app(config):
    if ENV == "prod" or config.get("LOG_JSON"):
        apply_json_logger()

    app = Flask(__name__)
    make_redis(app, config)

    app.config.update(config)

    update_celery(celery, app)

    make_mailer(app)
    make_notification_sender(app)
    # Fails fast on a broken Mobile-ID trust store
    make_signing_services(app)

    db.init_app(app)

    return app


def map_config(config):
    default = config["default"]
    database_uri = default["DATABASE_URI"]

    return {
        **default,
        "ENV": default["ENVIRONMENT"],
        "DEBUG": default.getboolean("DEBUG"),
        "DEBUG_MAILER": default.getboolean("DEBUG_MAILER"),
        "DEBUG_SMTP": default.getint("DEBUG_SMTP"),
        "LOG_JSON": default.getboolean("LOG_JSON"),
        "PORT": default.getint("PORT"),
        "MAIL_PORT": default.getint("MAIL_PORT"),
        "MAIL_TLS": default.getboolean("MAIL_TLS"),
        "SQLALCHEMY_DATABASE_URI": database_uri,
        "SQLALCHEMY_ECHO": default.getboolean("SQLALCHEMY_ECHO"),
        "SQLALCHEMY_TRACK_MODIFICATIONS": False,
        "SQLALCHEMY_ENGINE_OPTIONS": make_engine_options(default, database_uri),
    }


def make_engine_options(default, database_uri):
    if database_uri.startswith("postgresql"):
        return {
            "connect_args": {
                "sslmode": default["PGSSLMODE"],
                "sslrootcert": default["PGSSLROOTCERT"],
            },
        }
    if database_uri == "sqlite://":
        # An in-memory database only lives as long as its single connection
        return {
            "poolclass": StaticPool,
            "connect_args": {"check_same_thread": False},
        }
    return {}


def make_config(direct_config=None):
    """Build the Flask config dict.

    Later sources win over earlier ones:
    1. config/base.ini
    2. config/<FLASK_ENV>.ini
    3. one file per setting in OVERRIDE_CONFIG_DIRECTORY, if it is set
    4. environment variables named like the settings
    5. `direct_config`, a dict of sections

    Only settings declared in base.ini can be overridden by steps 3 and 4.
    """
    config = ConfigParser(allow_no_value=True, interpolation=None)
    config.optionxform = str

    config.read(
        [
            os.path.join(CONFIG_DIR, "base.ini"),
            os.path.join(CONFIG_DIR, "{}.ini".format(ENV.lower())),
        ]
    )

    override_dir = os.getenv("OVERRIDE_CONFIG_DIRECTORY")
    if override_dir:
        apply_config_from_directory(override_dir, config)

    apply_config_from_environment(config)

    if direct_config:
        config.read_dict(direct_config)

    default = config["default"]
    if not default.get("DATABASE_URI"):
        config.set("default", "DATABASE_URI", postgres_uri(default))

    redis_uri = redis_uri_from(default)
    config.set("default", "REDIS_URI", redis_uri)
    config.set("default", "BROKER_URL", redis_uri)

    return map_config(config)


def postgres_uri(default):
    return "postgresql://{}:{}@{}:{}/{}".format(  # pragma: allowlist secret
        default.get("PGUSER"),
        default.get("PGPASSWORD") or "",
        default.get("PGHOST"),
        default.get("PGPORT"),
        default.get("PGDATABASE"),
    )


def redis_uri_from(default):
    use_tls = default.getboolean("REDIS_TLS")
    uri = "redis{}://{}:{}@{}".format(  # pragma: allowlist secret
        "s" if use_tls else "",
        default.get("REDIS_USER") or "",
        default.get("REDIS_PASSWORD") or "",
        default.get("REDIS_HOST"),
    )
    if use_tls:
        cert_reqs = (default.get("REDIS_SSLMODE") or "none").lower()
        uri = f"{uri}/?ssl_cert_reqs={cert_reqs}"
    return uri


def apply_config_from_directory(config_dir, config, section="default"):
    """Mounted secrets: a file named after a known setting replaces its value
    with the file's stripped contents. Other files are ignored.
    """
    known = config.options(section)
    for setting in os.listdir(config_dir):
        if setting not in known:
            continue
        with open(os.path.join(config_dir, setting), "r") as setting_file:
            config.set(section, setting, setting_file.read().strip())

    return config


def apply_config_from_environment(config, section="default"):
    """A non-empty environment variable named after a known setting replaces
    its value.
    """
    for setting in config.options(section):
        value = os.getenv(setting.upper())
        if value:
            config.set(section, setting, value)

    return config


def make_redis(app, config):
    app.redis = redis.Redis.from_url(config["REDIS_URI"])


def make_mailer(app):
    if app.config["DEBUG"] or app.config["DEBUG_MAILER"]:
        connection = mailer.RedisConnection(app.redis)
    else:
        connection = mailer.SMTPConnection(
            server=app.config.get("MAIL_SERVER"),
            port=app.config.get("MAIL_PORT"),
            username=app.config.get("MAIL_SENDER"),
            password=app.config.get("MAIL_PASSWORD"),
            use_tls=app.config.get("MAIL_TLS"),
            debug_smtp=app.config.get("DEBUG_SMTP"),
        )
    app.mailer = mailer.Mailer(connection, app.config.get("MAIL_SENDER"))


def make_notification_sender(app):
    app.notification_sender = NotificationSender(
        subject=app.config.get("NOTIFICATION_SUBJECT")
    )


def make_signing_services(app):
    app.signing = SigningServices(app.config, logger=app.logger)


def apply_json_logger():
    dictConfig(
        {
            "version": 1,
            "formatters": {"default": {"()": lambda *a, **k: JsonFormatter()}},
            "filters": {"requests": {"()": lambda *a, **k: RequestContextFilter()}},
            "handlers": {
                "wsgi": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://flask.logging.wsgi_errors_stream",
                    "formatter": "default",
                    "filters": ["requests"],
                }
            },
            "root": {"level": "INFO", "handlers": ["wsgi"]},
        }
    )
