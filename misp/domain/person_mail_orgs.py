from typing import List

from misp.database import db
from misp.models import PersonMailOrg
from misp.utils import commit_or_raise_already_exists_error

from . import BaseDomainClass


class PersonMailOrgs(BaseDomainClass):
    model = PersonMailOrg
    resource_name = "person_mail_org"

    @classmethod
    def create(cls, person, org=None, mail=None, notify_changes=False):
        person_mail_org = PersonMailOrg(
            person=person, org=org, mail=mail, notify_changes=notify_changes
        )
        db.session.add(person_mail_org)
        commit_or_raise_already_exists_error(message="person_mail_org")
        return person_mail_org

    @classmethod
    def update(cls, person_mail_org, new_data):
        if "mail" in new_data:
            person_mail_org.mail = new_data["mail"] or None
        if "notify_changes" in new_data:
            person_mail_org.notify_changes = bool(new_data["notify_changes"])

        db.session.add(person_mail_org)
        commit_or_raise_already_exists_error(message="person_mail_org")
        return person_mail_org

    @classmethod
    def delete(cls, person_mail_org):
        db.session.delete(person_mail_org)
        commit_or_raise_already_exists_error(message="person_mail_org")

    @classmethod
    def for_person(cls, person) -> List[PersonMailOrg]:
        return (
            db.session.query(PersonMailOrg)
            .filter(PersonMailOrg.person_id == person.id)
            .order_by(PersonMailOrg.id)
            .all()
        )

    @classmethod
    def for_person_and_org(cls, person, org=None):
        """
        The subscription of a person within an organization, or the
        organization independent one when `org` is None.
        """
        query = db.session.query(PersonMailOrg).filter(
            PersonMailOrg.person_id == person.id
        )
        if org is None:
            query = query.filter(PersonMailOrg.org_id.is_(None))
        else:
            query = query.filter(PersonMailOrg.org_id == org.id)

        return query.order_by(PersonMailOrg.id).first()

    @classmethod
    def notification_recipients(cls, org) -> List[str]:
        results = (
            db.session.query(PersonMailOrg.mail)
            .filter(
                PersonMailOrg.org_id == org.id,
                PersonMailOrg.notify_changes == True,
                PersonMailOrg.mail != None,
                PersonMailOrg.mail != "",
            )
            .order_by(PersonMailOrg.id)
            .all()
        )
        return [mail for mail, in results]
