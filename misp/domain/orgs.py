from sqlalchemy.orm.exc import NoResultFound

from misp.database import db
from misp.models import Org
from misp.utils import commit_or_raise_already_exists_error

from . import BaseDomainClass
from .exceptions import NotFoundError


class Orgs(BaseDomainClass):
    model = Org
    resource_name = "org"

    @classmethod
    def create(
        cls, member_class, member_code, subsystem_code=None, name=None, sup_org=None
    ):
        org = Org(
            member_class=member_class,
            member_code=member_code,
            subsystem_code=subsystem_code,
            name=name,
            sup_org=sup_org,
        )
        db.session.add(org)
        commit_or_raise_already_exists_error(message="org")
        return org

    @classmethod
    def get_by_identifier(cls, member_class, member_code, subsystem_code=None):
        try:
            return (
                db.session.query(Org)
                .filter_by(
                    member_class=member_class,
                    member_code=member_code,
                    subsystem_code=subsystem_code,
                )
                .one()
            )
        except NoResultFound:
            raise NotFoundError("org")
