from unittest.mock import Mock

import pytest

from misp.domain.mobile_id import (
    AuthenticationHash,
    AuthenticationIdentity,
    MobileIdAuthenticator,
)
from misp.domain.mobile_id.authenticator import AuthenticationSession
from misp.domain.mobile_id.exceptions import (
    IdentityMismatchException,
    UserCancellationException,
)
from misp.domain.mobile_id.models import Language
from misp.domain.people import People
from tests.factories import PersonFactory

PHONE_NUMBER = "+37200000766"
IDENTITY_CODE = "60001019906"


@pytest.fixture
def client():
    client = Mock()
    client.authenticate.return_value = "session-1"
    return client


@pytest.fixture
def validator():
    validator = Mock()
    validator.validate.return_value = AuthenticationIdentity(
        given_name="MARY ÄNN",
        surname="O’CONNEŽ-ŠUSLIK TESTNUMBER",
        identity_code=IDENTITY_CODE,
        country="EE",
    )
    return validator


@pytest.fixture
def authenticator(client, validator):
    return MobileIdAuthenticator(client, validator)


def make_session(national_identity_number=IDENTITY_CODE):
    return AuthenticationSession(
        session_id="session-1",
        phone_number=PHONE_NUMBER,
        national_identity_number=national_identity_number,
        authentication_hash=AuthenticationHash.generate_random(),
    )


def test_start(authenticator, client):
    session = authenticator.start(PHONE_NUMBER, IDENTITY_CODE)

    assert session.session_id == "session-1"
    assert session.phone_number == PHONE_NUMBER
    assert session.national_identity_number == IDENTITY_CODE
    assert session.verification_code == session.authentication_hash.verification_code
    client.authenticate.assert_called_once_with(
        PHONE_NUMBER, IDENTITY_CODE, session.authentication_hash, Language.EST
    )


def test_start_in_another_language(authenticator, client):
    session = authenticator.start(PHONE_NUMBER, IDENTITY_CODE, language=Language.RUS)

    client.authenticate.assert_called_once_with(
        PHONE_NUMBER, IDENTITY_CODE, session.authentication_hash, Language.RUS
    )


def test_finish_creates_person(authenticator, client, validator):
    session = make_session()

    person = authenticator.finish(session)

    assert person.id is not None
    assert person.ssn == f"EE{IDENTITY_CODE}"
    assert person.givenname == "MARY ÄNN"
    assert person.surname == "O’CONNEŽ-ŠUSLIK TESTNUMBER"
    assert People.get_by_ssn(f"EE{IDENTITY_CODE}") == person
    client.poll_final_session_status.assert_called_once_with("session-1")
    validator.validate.assert_called_once_with(
        client.poll_final_session_status.return_value, session.authentication_hash
    )


def test_finish_returns_existing_person(authenticator):
    existing = PersonFactory.create(ssn=f"EE{IDENTITY_CODE}", givenname="Mary")

    person = authenticator.finish(make_session())

    assert person == existing
    assert person.givenname == "Mary"
    assert len(People.get_all()) == 1


def test_finish_with_someone_elses_phone(authenticator):
    with pytest.raises(IdentityMismatchException) as exc_info:
        authenticator.finish(make_session(national_identity_number="38001085718"))

    assert exc_info.value.expected == "38001085718"
    assert exc_info.value.actual == IDENTITY_CODE
    assert People.get_all() == []


def test_finish_propagates_session_failures(authenticator, client, validator):
    client.poll_final_session_status.side_effect = UserCancellationException()

    with pytest.raises(UserCancellationException):
        authenticator.finish(make_session())

    validator.validate.assert_not_called()
