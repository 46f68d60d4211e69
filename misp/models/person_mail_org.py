from sqlalchemy import Boolean, Column, ForeignKey, String
from sqlalchemy.orm import backref, relationship
from sqlalchemy.sql import expression

import misp.models.mixins as mixins
import misp.models.types as types
from misp.models.base import Base

MAIL_LENGTH = 75


class PersonMailOrg(
    Base,
    mixins.AuditMixin,
    mixins.SurrogateKeyEqualityMixin,
):
    """
    Mail address a person uses within one organization, and whether the
    person wants to be notified about changes made there.

    `org` may be empty, in which case the row holds the person's
    organization independent address.
    """

    __tablename__ = "person_mail_org"

    id = types.Id("person_mail_org_id_seq")
    mail = Column(String(MAIL_LENGTH))
    notify_changes = Column(
        Boolean,
        nullable=False,
        default=False,
        server_default=expression.false(),
    )

    person_id = Column(ForeignKey("person.id"), nullable=False, index=True)
    person = relationship(
        "Person",
        lazy="select",
        backref=backref("mail_orgs", cascade="all, delete-orphan"),
    )

    org_id = Column(ForeignKey("org.id"), index=True)
    org = relationship(
        "Org",
        lazy="select",
        backref=backref("person_mails", cascade="all"),
    )

    @property
    def wants_notifications(self):
        return bool(self.notify_changes and self.mail)

    def __repr__(self):
        return "<PersonMailOrg(id={})>".format(self.id)
