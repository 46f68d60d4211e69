from unittest.mock import Mock

from misp.utils.notification_sender import NotificationSender


class FakeLogger:
    """Stands in for `app.logger` and keeps every formatted message"""

    def __init__(self):
        self.records = []

    @property
    def messages(self):
        return [message for _level, message in self.records]

    def messages_at(self, level):
        return [message for lvl, message in self.records if lvl == level]

    def log(self, level, msg, *args, **kwargs):
        self.records.append((level, msg % args))

    def debug(self, msg, *args, **kwargs):
        self.log("debug", msg, *args)

    def info(self, msg, *args, **kwargs):
        self.log("info", msg, *args)

    def warning(self, msg, *args, **kwargs):
        self.log("warning", msg, *args)

    def error(self, msg, *args, **kwargs):
        self.log("error", msg, *args)

    def exception(self, msg, *args, **kwargs):
        self.log("exception", msg, *args)


def FakeNotificationSender():
    return Mock(spec=NotificationSender)
