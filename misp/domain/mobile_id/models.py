from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from misp.utils import snake_to_camel


class AliasModel(BaseModel):
    """
    This provides automatic camel <-> snake conversion for serializing to/from json
    Fields whose wire name is not plain camel case, such as
    * relying_party_uuid:relyingPartyUUID
    * session_id:sessionID
    declare their alias explicitly.
    """

    model_config = ConfigDict(alias_generator=snake_to_camel, populate_by_name=True)

    def to_json(self):
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Language(str, Enum):
    EST = "EST"
    ENG = "ENG"
    RUS = "RUS"
    LIT = "LIT"


class DisplayTextFormat(str, Enum):
    GSM7 = "GSM7"
    UCS2 = "UCS2"


class SessionState(str, Enum):
    RUNNING = "RUNNING"
    COMPLETE = "COMPLETE"


class RelyingPartyPayload(AliasModel):
    relying_party_uuid: str = Field(alias="relyingPartyUUID")
    relying_party_name: str
    phone_number: str
    national_identity_number: str


class AuthenticationPayload(RelyingPartyPayload):
    hash: str
    hash_type: str = "SHA256"
    language: Language = Language.EST
    display_text: Optional[str] = None
    display_text_format: Optional[DisplayTextFormat] = None


class CertificatePayload(RelyingPartyPayload):
    pass


class AuthenticationResult(AliasModel):
    session_id: str = Field(alias="sessionID")


class CertificateResult(AliasModel):
    result: str
    cert: Optional[str] = None


class SessionSignature(AliasModel):
    value: str
    algorithm: str


class SessionStatus(AliasModel):
    state: SessionState
    result: Optional[str] = None
    signature: Optional[SessionSignature] = None
    cert: Optional[str] = None
    time: Optional[str] = None
    trace_id: Optional[str] = None

    @property
    def is_complete(self):
        return self.state == SessionState.COMPLETE


class AuthenticationIdentity(AliasModel):
    given_name: Optional[str] = None
    surname: Optional[str] = None
    identity_code: str
    country: Optional[str] = None

    @property
    def ssn(self):
        """Personal code in the form the portal stores it, e.g. EE38001085718"""
        return f"{self.country or ''}{self.identity_code}"
