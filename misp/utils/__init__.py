from sqlalchemy.exc import IntegrityError

from misp.database import db
from misp.domain.exceptions import AlreadyExistsError


def commit_or_raise_already_exists_error(message):
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise AlreadyExistsError(message)


def snake_to_camel(snake_cased):
    parts = snake_cased.split("_")
    return f"{parts[0]}{''.join([w.capitalize() for w in parts[1:]])}"
