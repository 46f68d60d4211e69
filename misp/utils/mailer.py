from contextlib import contextmanager
import smtplib
from email.message import EmailMessage
from email.utils import formatdate, make_msgid


class MailConnection(object):
    def send(self, message):
        raise NotImplementedError()

    @property
    def messages(self):
        raise NotImplementedError()


class SMTPConnection(MailConnection):
    def __init__(self, server, port, username, password, use_tls=False, debug_smtp=0):
        self.server = server
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.debug_smtp = debug_smtp

    @contextmanager
    def _connected_host(self):
        if self.use_tls:
            host = smtplib.SMTP(self.server, self.port)
            host.starttls()
        else:
            host = smtplib.SMTP_SSL(self.server, self.port)

        try:
            host.set_debuglevel(self.debug_smtp)
            # Local relays accept mail without authentication
            if self.password:
                host.login(self.username, self.password)

            yield host
        finally:
            host.quit()

    @property
    def messages(self):
        return []

    def send(self, message):
        with self._connected_host() as host:
            host.send_message(message)


class RedisConnection(MailConnection):
    """Keeps sent mail in a Redis list so developers can read it back"""

    INBOX_KEY = "misp_inbox"

    def __init__(self, redis, inbox_key=INBOX_KEY):
        self.redis = redis
        self.inbox_key = inbox_key
        self._reset()

    def _reset(self):
        self.redis.delete(self.inbox_key)

    @property
    def messages(self):
        return [msg.decode() for msg in self.redis.lrange(self.inbox_key, 0, -1)]

    def send(self, message):
        self.redis.lpush(self.inbox_key, str(message))


def unique_recipients(recipients):
    """Drop empty and repeated addresses, comparing them case-insensitively"""
    seen = set()
    result = []
    for recipient in recipients:
        address = (recipient or "").strip()
        if address and address.lower() not in seen:
            seen.add(address.lower())
            result.append(address)
    return result


class Mailer(object):
    def __init__(self, connection, sender):
        self.connection = connection
        self.sender = sender

    def _build_message(self, recipients, subject, body):
        msg = EmailMessage()
        msg.set_content(body)
        msg["From"] = self.sender
        msg["To"] = ", ".join(recipients)
        msg["Subject"] = subject
        msg["Date"] = formatdate(localtime=True)
        msg["Message-ID"] = make_msgid()

        return msg

    def send(self, recipients, subject, body, attachments=None):
        """
        Send a message, optionally with attachments. Returns False when there
        is nobody to send to.
        Attachments should be provided as a list of dictionaries of the form:
        {
            content: bytes,
            maintype: string,
            subtype: string,
            filename: string,
        }
        """
        recipients = unique_recipients(recipients)
        if not recipients:
            return False

        message = self._build_message(recipients, subject, body)
        for attachment in attachments or []:
            message.add_attachment(
                attachment["content"],
                filename=attachment["filename"],
                maintype=attachment.get("maintype", "application"),
                subtype=attachment.get("subtype", "octet-stream"),
            )
        self.connection.send(message)
        return True

    @property
    def messages(self):
        return self.connection.messages
