import os

os.environ["FLASK_ENV"] = "test"

from logging.config import dictConfig

import pytest

import alembic.command
import alembic.config
import tests.factories as factories
from misp.app import make_app, make_config
from misp.database import db as _db
from misp.models import Base
from tests.utils import FakeLogger, FakeNotificationSender

dictConfig({"version": 1, "handlers": {"wsgi": {"class": "logging.NullHandler"}}})


@pytest.fixture(scope="session")
def database_uri(tmp_path_factory):
    database_file = tmp_path_factory.mktemp("database") / "misp_test.db"
    return f"sqlite:///{database_file}"


@pytest.fixture(scope="session")
def app(database_uri):
    config = make_config(direct_config={"default": {"DATABASE_URI": database_uri}})
    _app = make_app(config)

    ctx = _app.app_context()
    ctx.push()

    yield _app

    ctx.pop()


def apply_migrations(database_uri):
    """Applies all alembic migrations."""
    alembic_config = os.path.join(os.path.dirname(__file__), "../", "alembic.ini")
    config = alembic.config.Config(alembic_config)
    config.set_main_option("sqlalchemy.url", database_uri)
    alembic.command.upgrade(config, "head")


@pytest.fixture(scope="session")
def db(app, database_uri):
    apply_migrations(database_uri)

    yield _db

    Base.metadata.drop_all(bind=_db.engine)


@pytest.fixture(scope="function", autouse=True)
def session(db):
    """Hands each test a clean database session and empties the tables after."""
    session = db.session

    factory_list = [
        cls
        for _name, cls in factories.__dict__.items()
        if isinstance(cls, type) and cls.__module__ == "tests.factories"
    ]
    for factory in factory_list:
        factory._meta.sqlalchemy_session = session
        factory._meta.sqlalchemy_session_persistence = "commit"

    yield session

    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.remove()


@pytest.fixture
def mock_logger(app):
    real_logger = app.logger
    app.logger = FakeLogger()

    yield app.logger

    app.logger = real_logger


@pytest.fixture(scope="function", autouse=True)
def notification_sender(app):
    real_notification_sender = app.notification_sender
    app.notification_sender = FakeNotificationSender()

    yield app.notification_sender

    app.notification_sender = real_notification_sender
