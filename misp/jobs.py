from flask import current_app as app

from misp.queue import celery


@celery.task(ignore_result=True)
def send_notification_mail(recipients, subject, body):
    app.logger.info(
        "Sending a notification to these recipients: %s\n\nSubject: %s\n\n%s",
        recipients,
        subject,
        body,
    )
    app.mailer.send(recipients, subject, body)
