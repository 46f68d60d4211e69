import datetime
import json
import logging

from flask import g, has_request_context, request


class RequestContextFilter(logging.Filter):
    def filter(self, record):
        if has_request_context():
            record.method = request.method
            record.request_id = request.headers.get("X-Request-Id")
            user = getattr(g, "current_user", None)
            if user is not None:
                record.user_id = str(user.id)

        return True


def epoch_to_iso8601(ts):
    dt = datetime.datetime.fromtimestamp(ts, tz=datetime.timezone.utc)
    return dt.isoformat()


class JsonFormatter(logging.Formatter):
    _DEFAULT_RECORD_FIELDS = [
        ("timestamp", lambda r: epoch_to_iso8601(r.created)),
        ("version", lambda r: 1),
        ("request_id", lambda r: r.__dict__.get("request_id")),
        ("user_id", lambda r: r.__dict__.get("user_id")),
        ("method", lambda r: r.__dict__.get("method")),
        ("severity", lambda r: r.levelname),
        ("logger", lambda r: r.name),
        ("tags", lambda r: r.__dict__.get("tags")),
    ]

    def __init__(self, *args, source="app", **kwargs):
        self.source = source
        super().__init__(*args, **kwargs)

    def format(self, record, *args, **kwargs):
        message_dict = {"source": self.source}

        for field, func in self._DEFAULT_RECORD_FIELDS:
            result = func(record)
            if result:
                message_dict[field] = result

        message_dict["message"] = record.getMessage()

        if record.exc_info:
            message_dict["details"] = {"backtrace": self.formatException(record.exc_info)}

        return json.dumps(message_dict)
