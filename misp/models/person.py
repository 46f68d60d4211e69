from sqlalchemy import Column, String, Text

import misp.models.mixins as mixins
import misp.models.types as types
from misp.models.base import Base


class Person(
    Base,
    mixins.AuditMixin,
    mixins.SurrogateKeyEqualityMixin,
):
    __tablename__ = "person"

    id = types.Id("person_id_seq")
    # Personal identification code, prefixed with the issuing country
    ssn = Column(String(20), nullable=False, unique=True)
    givenname = Column(String(50))
    surname = Column(String(50), nullable=False)
    certificate = Column(Text)
    last_portal = Column(String(32))

    @property
    def full_name(self):
        return " ".join(name for name in (self.givenname, self.surname) if name)

    def __repr__(self):
        return "<Person(ssn='{}', id='{}')>".format(self.ssn, self.id)
