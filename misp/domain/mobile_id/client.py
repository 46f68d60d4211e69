import base64
import json
import logging
import ssl
from functools import wraps

import requests
from cryptography import x509
from requests.adapters import HTTPAdapter

from .exceptions import (
    ConnectionException,
    DeliveryException,
    InternalErrorException,
    InvalidUserConfigurationException,
    MissingOrInvalidParameterException,
    NotMidClientException,
    PhoneNotAvailableException,
    SessionNotFoundException,
    SessionTimeoutException,
    UnauthorizedException,
    UserCancellationException,
)
from .models import (
    AuthenticationPayload,
    AuthenticationResult,
    CertificatePayload,
    CertificateResult,
    Language,
    SessionStatus,
)

DEFAULT_POLLING_TIMEOUT_SECONDS = 60
CONNECT_TIMEOUT_SECONDS = 10
# Extra time the HTTP read may take on top of the long polling window
READ_TIMEOUT_MARGIN_SECONDS = 5

RESULT_EXCEPTIONS = {
    "TIMEOUT": SessionTimeoutException,
    "NOT_MID_CLIENT": NotMidClientException,
    "USER_CANCELLED": UserCancellationException,
    "SIGNATURE_HASH_MISMATCH": InvalidUserConfigurationException,
    "PHONE_ABSENT": PhoneNotAvailableException,
}
DELIVERY_RESULTS = ("DELIVERY_ERROR", "SIM_ERROR")


class TrustStoreAdapter(HTTPAdapter):
    """Verifies the service's TLS certificate against the trust store"""

    def __init__(self, trust_store, **kwargs):
        self.ca_data = trust_store.to_pem()
        super().__init__(**kwargs)

    def init_poolmanager(self, *args, **kwargs):
        kwargs["ssl_context"] = ssl.create_default_context(cadata=self.ca_data)
        return super().init_poolmanager(*args, **kwargs)


def make_session(trust_store=None):
    session = requests.Session()
    if trust_store is not None and len(trust_store) > 0:
        session.mount("https://", TrustStoreAdapter(trust_store))
    return session


def log_and_raise_exceptions(func):
    """Wraps Mobile-ID API calls to catch `requests` exceptions,
    log them, and re-raise them as our Mobile-ID exceptions.
    """

    @wraps(func)
    def wrapped_func(client, *args, **kwargs):
        try:
            return func(client, *args, **kwargs)

        except requests.exceptions.ConnectionError:
            message = f"Connection Error calling {func.__name__}"
            client.logger.error(message, exc_info=1)
            raise ConnectionException(message)

        except requests.exceptions.Timeout:
            message = f"Timeout Error calling {func.__name__}"
            client.logger.error(message, exc_info=1)
            raise ConnectionException(message)

        except requests.exceptions.HTTPError as exc:
            status_code = exc.response.status_code if exc.response is not None else None
            message = f"error calling {func.__name__}"

            log_format = "%s %s"
            log_values = [status_code, message]
            response_body = None

            try:
                response_body = exc.response.json()
                if response_body:
                    log_format += "\n\nResponse Body:\n%s"
                    log_values.append(json.dumps(response_body))
            # No response or body is not parsable to JSON
            except (AttributeError, ValueError):
                pass

            client.logger.error(log_format, *log_values, exc_info=1)

            if status_code == 400:
                raise MissingOrInvalidParameterException(
                    (response_body or {}).get("error", str(exc))
                )
            if status_code == 401:
                raise UnauthorizedException(client.relying_party_name)
            raise InternalErrorException(
                status_code, f"{message.capitalize()}. {exc}"
            )

    return wrapped_func


class MobileIdClient(object):
    """Client for the Mobile-ID REST API (https://github.com/SK-EID/MID)"""

    def __init__(
        self,
        host_url,
        relying_party_uuid,
        relying_party_name,
        long_polling_timeout_seconds=DEFAULT_POLLING_TIMEOUT_SECONDS,
        trust_store=None,
        session=None,
        logger=None,
    ):
        if not host_url:
            raise ValueError("Mobile-ID host url is required")
        if not relying_party_uuid or not relying_party_name:
            raise ValueError("Mobile-ID relying party UUID and name are required")

        self.host_url = host_url.rstrip("/")
        self.relying_party_uuid = relying_party_uuid
        self.relying_party_name = relying_party_name
        self.long_polling_timeout_seconds = int(long_polling_timeout_seconds)
        self.trust_store = trust_store
        self.session = session if session is not None else make_session(trust_store)
        self.logger = logger or logging.getLogger(__name__)

    def _url(self, path):
        return f"{self.host_url}/{path}"

    @log_and_raise_exceptions
    def authenticate(
        self,
        phone_number,
        national_identity_number,
        authentication_hash,
        language=Language.EST,
        display_text=None,
        display_text_format=None,
    ) -> str:
        """Start an authentication session and return its id.

        The caller shows `authentication_hash.verification_code` to the user
        and then polls the session for the outcome.
        """
        payload = AuthenticationPayload(
            relying_party_uuid=self.relying_party_uuid,
            relying_party_name=self.relying_party_name,
            phone_number=phone_number,
            national_identity_number=national_identity_number,
            hash=authentication_hash.b64,
            hash_type=authentication_hash.hash_type,
            language=language,
            display_text=display_text,
            display_text_format=display_text_format,
        )
        response = self.session.post(
            self._url("authentication"),
            json=payload.to_json(),
            timeout=CONNECT_TIMEOUT_SECONDS,
        )
        response.raise_for_status()

        result = AuthenticationResult.model_validate(response.json())
        self.logger.debug("Started Mobile-ID session %s", result.session_id)
        return result.session_id

    @log_and_raise_exceptions
    def get_session_status(self, session_id) -> SessionStatus:
        response = self.session.get(
            self._url(f"authentication/session/{session_id}"),
            params={"timeoutMs": self.long_polling_timeout_seconds * 1000},
            timeout=(
                CONNECT_TIMEOUT_SECONDS,
                self.long_polling_timeout_seconds + READ_TIMEOUT_MARGIN_SECONDS,
            ),
        )
        if response.status_code == 404:
            raise SessionNotFoundException(session_id)
        response.raise_for_status()

        return SessionStatus.model_validate(response.json())

    def poll_final_session_status(self, session_id) -> SessionStatus:
        """Poll until the session completes. Raises the exception matching the
        result code unless the user authenticated successfully.
        """
        status = self.get_session_status(session_id)
        while not status.is_complete:
            status = self.get_session_status(session_id)

        self._raise_for_result(status)
        if status.signature is None or status.cert is None:
            raise InternalErrorException(
                200, f"Session {session_id} completed without a signature"
            )

        return status

    def _raise_for_result(self, status):
        result = status.result
        if result == "OK":
            return

        self.logger.info("Mobile-ID session ended with result %s", result)
        if result in RESULT_EXCEPTIONS:
            raise RESULT_EXCEPTIONS[result]()
        if result in DELIVERY_RESULTS:
            raise DeliveryException(result)
        raise InternalErrorException(200, f"Unexpected session result {result}")

    @log_and_raise_exceptions
    def get_certificate(self, phone_number, national_identity_number):
        payload = CertificatePayload(
            relying_party_uuid=self.relying_party_uuid,
            relying_party_name=self.relying_party_name,
            phone_number=phone_number,
            national_identity_number=national_identity_number,
        )
        response = self.session.post(
            self._url("certificate"),
            json=payload.to_json(),
            timeout=CONNECT_TIMEOUT_SECONDS,
        )
        response.raise_for_status()

        result = CertificateResult.model_validate(response.json())
        if result.result == "NOT_FOUND":
            raise NotMidClientException()
        if result.result != "OK" or not result.cert:
            raise InternalErrorException(
                response.status_code, f"Unexpected certificate result {result.result}"
            )

        return x509.load_der_x509_certificate(base64.b64decode(result.cert))
