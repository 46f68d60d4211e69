class MobileIdError(Exception):
    @property
    def message(self):
        return "Mobile-ID request failed"

    def __str__(self):
        return self.message


class ConnectionException(MobileIdError):
    """A general problem with the connection, timeouts or unresolved endpoints
    """

    def __init__(self, connection_error):
        self.connection_error = connection_error

    @property
    def message(self):
        return "Could not connect to Mobile-ID service: {}".format(
            self.connection_error
        )


class MissingOrInvalidParameterException(MobileIdError):
    """The service rejected the request (HTTP 400)"""

    def __init__(self, reason):
        self.reason = reason

    @property
    def message(self):
        return "Mobile-ID request has missing or invalid parameters: {}".format(
            self.reason
        )


class UnauthorizedException(MobileIdError):
    """The relying party UUID and name are not known to the service (HTTP 401)
    """

    def __init__(self, relying_party_name):
        self.relying_party_name = relying_party_name

    @property
    def message(self):
        return "Relying party '{}' is not authorized to use Mobile-ID".format(
            self.relying_party_name
        )


class SessionNotFoundException(MobileIdError):
    def __init__(self, session_id):
        self.session_id = session_id

    @property
    def message(self):
        return "Mobile-ID session {} was not found or has expired".format(
            self.session_id
        )


class NotMidClientException(MobileIdError):
    """The phone number and identity code do not belong to an active
    Mobile-ID user
    """

    @property
    def message(self):
        return "User is not a Mobile-ID client or has no active certificates"


class InternalErrorException(MobileIdError):
    """An error occured on the Mobile-ID side (5xx) or the response made no sense
    """

    def __init__(self, status_code, server_error):
        self.status_code = status_code
        self.server_error = server_error

    @property
    def message(self):
        return f"A server error with status code [{self.status_code}] occured: {self.server_error}"


class SessionTimeoutException(MobileIdError):
    @property
    def message(self):
        return "User did not enter the PIN in time"


class UserCancellationException(MobileIdError):
    @property
    def message(self):
        return "User cancelled the operation"


class InvalidUserConfigurationException(MobileIdError):
    """The SIM returned a signature that does not match the hash sent to it"""

    @property
    def message(self):
        return "Mobile-ID configuration on the user's SIM card does not match the service configuration"


class PhoneNotAvailableException(MobileIdError):
    @property
    def message(self):
        return "Phone is not reachable"


class DeliveryException(MobileIdError):
    """SMS could not be delivered to the phone, or the SIM reported an error
    """

    def __init__(self, result):
        self.result = result

    @property
    def message(self):
        return "Message delivery to the phone failed: {}".format(self.result)


class NotTrustedException(MobileIdError):
    """The authentication response did not pass validation"""

    def __init__(self, reason):
        self.reason = reason

    @property
    def message(self):
        return "Mobile-ID authentication result is not trusted: {}".format(
            self.reason
        )


class IdentityMismatchException(MobileIdError):
    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual

    @property
    def message(self):
        return "Authenticated identity code {} does not match the requested {}".format(
            self.actual, self.expected
        )
