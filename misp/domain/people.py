from sqlalchemy.orm.exc import NoResultFound

from misp.database import db
from misp.models import Person
from misp.utils import commit_or_raise_already_exists_error

from . import BaseDomainClass
from .exceptions import NotFoundError


class People(BaseDomainClass):
    model = Person
    resource_name = "person"

    @classmethod
    def get_by_ssn(cls, ssn):
        try:
            return db.session.query(Person).filter_by(ssn=ssn).one()
        except NoResultFound:
            raise NotFoundError("person")

    @classmethod
    def create(cls, ssn, surname, givenname=None, **kwargs):
        person = Person(ssn=ssn, surname=surname, givenname=givenname, **kwargs)
        db.session.add(person)
        commit_or_raise_already_exists_error(message="person")
        return person

    @classmethod
    def get_or_create_by_ssn(cls, ssn, surname, givenname=None, **kwargs):
        try:
            return cls.get_by_ssn(ssn)
        except NotFoundError:
            return cls.create(ssn, surname, givenname=givenname, **kwargs)

    @classmethod
    def update(cls, person, new_data):
        for attr in ("givenname", "surname", "certificate", "last_portal"):
            if attr in new_data:
                setattr(person, attr, new_data[attr])

        db.session.add(person)
        commit_or_raise_already_exists_error(message="person")
        return person
