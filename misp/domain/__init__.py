from sqlalchemy.orm.exc import NoResultFound

from misp.database import db

from .exceptions import NotFoundError


class BaseDomainClass(object):
    model = None
    resource_name = None

    @classmethod
    def get(cls, resource_id, **kwargs):
        try:
            resource = (
                db.session.query(cls.model).filter_by(id=resource_id, **kwargs).one()
            )

            return resource
        except NoResultFound:
            raise NotFoundError(cls.resource_name, resource_id)

    @classmethod
    def get_all(cls):
        return db.session.query(cls.model).order_by(cls.model.id).all()
