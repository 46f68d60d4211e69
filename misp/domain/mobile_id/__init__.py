from .authenticator import AuthenticationSession, MobileIdAuthenticator
from .client import MobileIdClient
from .hashes import AuthenticationHash, calculate_verification_code
from .models import AuthenticationIdentity, Language, SessionStatus
from .trust_store import TrustStore
from .validator import AuthenticationResponseValidator
