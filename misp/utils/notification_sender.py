from flask import current_app as app

from misp.domain.person_mail_orgs import PersonMailOrgs
from misp.jobs import send_notification_mail


class NotificationSender(object):
    EMAIL_SUBJECT = "MISP portal changes"

    def __init__(self, subject=None):
        self.subject = subject or self.EMAIL_SUBJECT

    def send(self, org, body):
        """Queue a mail about a change in `org` to everyone subscribed to it.
        Returns the addresses the mail was queued for.
        """
        recipients = tuple(PersonMailOrgs.notification_recipients(org))
        if not recipients:
            app.logger.info("No one to notify about changes in %s", org)
            return ()

        send_notification_mail.delay(recipients, self.subject, body)
        return recipients
