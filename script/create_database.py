# Add root application dir to the python path
import os
import sys
import argparse

parent_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.append(parent_dir)

import sqlalchemy

from misp.app import make_config


def _create_engine(config, dbname):
    database_uri = "postgresql://{}:{}@{}:{}/{}".format(  # pragma: allowlist secret
        config.get("PGUSER"),
        config.get("PGPASSWORD") or "",
        config.get("PGHOST"),
        config.get("PGPORT"),
        dbname,
    )
    # CREATE DATABASE cannot run inside a transaction
    return sqlalchemy.create_engine(database_uri, isolation_level="AUTOCOMMIT")


def create_database(engine, dbname):
    with engine.connect() as conn:
        exists = conn.execute(
            sqlalchemy.text("SELECT 1 FROM pg_database WHERE datname = :dbname"),
            {"dbname": dbname},
        ).scalar()
        if exists:
            return False

        conn.execute(sqlalchemy.text(f'CREATE DATABASE "{dbname}"'))

    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "dbname",
        nargs="?",
        help="Name of DB to create. Defaults to the configured PGDATABASE",
    )
    args = parser.parse_args()
    config = make_config()
    dbname = args.dbname or config.get("PGDATABASE")

    engine = _create_engine(config, "postgres")

    if create_database(engine, dbname):
        print(f"Created database {dbname}, run `alembic upgrade head` to apply the schema")
    else:
        print(f"Database {dbname} already exists")
