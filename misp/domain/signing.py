import logging
import os
from configparser import ConfigParser
from enum import Enum
from typing import List

from cryptography.exceptions import UnsupportedAlgorithm
from pydantic import BaseModel, ConfigDict

from misp.domain.exceptions import MissingSettingError, TrustStoreInitialisationError
from misp.domain.mobile_id import (
    AuthenticationResponseValidator,
    MobileIdAuthenticator,
    MobileIdClient,
    TrustStore,
)

PARAM_TEST_MODE = "DIGIDOC_TEST_MODE"
PARAM_OCSP_SOURCE = "DIGIDOC_OCSP_SOURCE"
PARAM_TRUSTED_TERRITORIES = "DIGIDOC_TRUSTED_TERRITORIES"
PARAM_MID_ENABLED = "AUTH_MOBILE_ID"
PARAM_MID_HOST = "MOBILE_ID_HOST_URL"
PARAM_MID_PARTY_UUID = "MOBILE_ID_RELYING_PARTY_UUID"
PARAM_MID_PARTY_NAME = "MOBILE_ID_RELYING_PARTY_NAME"
PARAM_MID_POLLING_TIMEOUT_SECONDS = "MOBILE_ID_POLLING_TIMEOUT_SECONDS"
PARAM_MID_TRUST_STORE_PATH = "MOBILE_ID_TRUST_STORE_PATH"
PARAM_MID_TRUST_STORE_PASSWORD = "MOBILE_ID_TRUST_STORE_PASSWORD"

DEFAULT_TEST_MODE = False
DEFAULT_OCSP_SOURCE = "http://ocsp.sk.ee/"
DEFAULT_TRUSTED_TERRITORIES = ["EE"]
DEFAULT_TEST_TRUSTED_TERRITORIES = ["EE_T"]
DEFAULT_MID_ENABLED = False
DEFAULT_MID_POLLING_TIMEOUT_SECONDS = 60
DEFAULT_MID_TRUST_STORE_PATH = "/mobiili_id_trust_store.p12"

# Trust store paths are looked up here before the filesystem
RESOURCES_DIR = os.path.join(os.path.dirname(__file__), "..", "resources")


class Mode(Enum):
    TEST = "TEST"
    PROD = "PROD"


class SigningConfiguration(BaseModel):
    """Settings handed to the signature creation and validation services"""

    model_config = ConfigDict(frozen=True)

    mode: Mode
    ocsp_source: str
    trusted_territories: List[str]

    @property
    def is_test(self):
        return self.mode == Mode.TEST


class SigningServices(object):
    """
    Built once at startup from the application config. Exposes the signing
    configuration and, when Mobile-ID authentication is enabled, a Mobile-ID
    client; `mid_client` is None otherwise.

    Raises MissingSettingError if Mobile-ID is enabled without a trust store
    password, and TrustStoreInitialisationError if the trust store cannot be
    read or parsed.
    """

    def __init__(self, config, logger=None):
        self.config = config
        self.logger = logger or logging.getLogger(__name__)

        mode = Mode.TEST if self._using_test_mode() else Mode.PROD
        self._configuration = SigningConfiguration(
            mode=mode,
            ocsp_source=self._ocsp_source(),
            trusted_territories=self._trusted_territories(),
        )
        self.logger.info("Initialised DigiDoc in %s mode", mode.name)

        self._trust_store = None
        # Don't touch the trust store unless Mobile-ID has been enabled
        self._mid_client = self._initialise_mid_client() if self._mid_enabled() else None

    @property
    def configuration(self) -> SigningConfiguration:
        return self._configuration

    @property
    def mid_client(self):
        return self._mid_client

    def make_mid_authenticator(self):
        if self._mid_client is None:
            return None

        validator = AuthenticationResponseValidator(self._trust_store.certificates)
        return MobileIdAuthenticator(self._mid_client, validator)

    def _initialise_mid_client(self):
        password = self._mid_trust_store_password()
        path = self._mid_trust_store_path()

        try:
            with self._open_trust_store(path) as trust_store_file:
                trust_store = TrustStore.load_pkcs12(trust_store_file.read(), password)
        except (ValueError, UnsupportedAlgorithm) as exc:
            raise TrustStoreInitialisationError(
                "Problem creating truststore with PKCS12 file:" + path
            ) from exc
        except OSError as exc:
            raise TrustStoreInitialisationError(
                "Truststore reading failed from PKCS12 file:" + path
            ) from exc

        self.logger.info(
            "Initialising MidClient with host: %s, name: %s, trustStore: %s",
            self._mid_host(),
            self._mid_party_name(),
            ", ".join(["aliases:"] + trust_store.aliases),
        )

        self._trust_store = trust_store
        return MobileIdClient(
            host_url=self._mid_host(),
            relying_party_uuid=self._mid_party_uuid(),
            relying_party_name=self._mid_party_name(),
            long_polling_timeout_seconds=self._mid_polling_timeout_seconds(),
            trust_store=trust_store,
            logger=self.logger,
        )

    def _open_trust_store(self, path):
        resource_path = os.path.join(RESOURCES_DIR, path.lstrip("/"))
        if os.path.isfile(resource_path):
            return open(resource_path, "rb")

        self.logger.debug(
            "Was not able to open the trust store from package resources, trying filesystem"
        )
        return open(path, "rb")

    def _get(self, key, default=None):
        value = self.config.get(key)
        if value is None or value == "":
            return default
        return value

    def _get_boolean(self, key, default):
        value = self._get(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value

        try:
            return ConfigParser.BOOLEAN_STATES[str(value).lower()]
        except KeyError:
            raise ValueError(f"Config parameter {key} is not a boolean: {value}")

    def _using_test_mode(self):
        return self._get_boolean(PARAM_TEST_MODE, DEFAULT_TEST_MODE)

    def _ocsp_source(self):
        return self._get(PARAM_OCSP_SOURCE, DEFAULT_OCSP_SOURCE)

    def _mid_enabled(self):
        return self._get_boolean(PARAM_MID_ENABLED, DEFAULT_MID_ENABLED)

    def _trusted_territories(self):
        """Comma separated list of territories whose trusted lists are loaded.
        Defaults to the test territory in test mode.
        """
        value = self._get(PARAM_TRUSTED_TERRITORIES)
        if isinstance(value, str):
            value = value.split(",")
        territories = [t.strip() for t in value or [] if t and t.strip()]

        if not territories:
            if self._using_test_mode():
                territories = list(DEFAULT_TEST_TRUSTED_TERRITORIES)
            else:
                territories = list(DEFAULT_TRUSTED_TERRITORIES)
        return territories

    def _mid_host(self):
        return self._get(PARAM_MID_HOST)

    def _mid_party_uuid(self):
        return self._get(PARAM_MID_PARTY_UUID)

    def _mid_party_name(self):
        return self._get(PARAM_MID_PARTY_NAME)

    def _mid_polling_timeout_seconds(self):
        """How long, in seconds, a single status request waits for the user
        to enter the PIN
        """
        return int(
            self._get(
                PARAM_MID_POLLING_TIMEOUT_SECONDS, DEFAULT_MID_POLLING_TIMEOUT_SECONDS
            )
        )

    def _mid_trust_store_path(self):
        return self._get(PARAM_MID_TRUST_STORE_PATH, DEFAULT_MID_TRUST_STORE_PATH)

    def _mid_trust_store_password(self):
        password = self._get(PARAM_MID_TRUST_STORE_PASSWORD)
        if password is None:
            raise MissingSettingError(
                PARAM_MID_TRUST_STORE_PASSWORD,
                "MID trust store:" + self._mid_trust_store_path(),
            )
        return password
