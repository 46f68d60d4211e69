from logging.config import fileConfig

from alembic import context
from sqlalchemy import engine_from_config, pool

from misp.app import make_config
from misp.models import Base

config = context.config

# Tests configure logging themselves and set the url directly
if config.config_file_name is not None and not config.get_main_option(
    "sqlalchemy.url"
):
    fileConfig(config.config_file_name)
    config.set_main_option("sqlalchemy.url", make_config()["DATABASE_URI"])

target_metadata = Base.metadata


def run_migrations_offline():
    """Emit the migrations as SQL without connecting to a database"""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url, target_metadata=target_metadata, literal_binds=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    connectable = engine_from_config(
        config.get_section(config.config_ini_section),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
