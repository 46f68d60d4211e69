from misp.domain.people import People

from .exceptions import IdentityMismatchException
from .hashes import AuthenticationHash
from .models import Language


class AuthenticationSession(object):
    def __init__(
        self, session_id, phone_number, national_identity_number, authentication_hash
    ):
        self.session_id = session_id
        self.phone_number = phone_number
        self.national_identity_number = national_identity_number
        self.authentication_hash = authentication_hash

    @property
    def verification_code(self):
        return self.authentication_hash.verification_code


class MobileIdAuthenticator(object):
    """Logs a person in with Mobile-ID in two steps: `start` sends the
    request to the phone and returns the code to display, `finish` waits for
    the user and returns the matching `Person`.
    """

    def __init__(self, client, validator):
        self.client = client
        self.validator = validator

    def start(
        self, phone_number, national_identity_number, language=Language.EST
    ) -> AuthenticationSession:
        authentication_hash = AuthenticationHash.generate_random()
        session_id = self.client.authenticate(
            phone_number, national_identity_number, authentication_hash, language
        )
        return AuthenticationSession(
            session_id=session_id,
            phone_number=phone_number,
            national_identity_number=national_identity_number,
            authentication_hash=authentication_hash,
        )

    def finish(self, session: AuthenticationSession):
        status = self.client.poll_final_session_status(session.session_id)
        identity = self.validator.validate(status, session.authentication_hash)

        if identity.identity_code != session.national_identity_number:
            raise IdentityMismatchException(
                session.national_identity_number, identity.identity_code
            )

        return People.get_or_create_by_ssn(
            identity.ssn, identity.surname, givenname=identity.given_name
        )
