import base64

import pendulum
from cryptography import x509
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa
from cryptography.hazmat.primitives.asymmetric.utils import (
    Prehashed,
    encode_dss_signature,
)
from cryptography.x509.oid import NameOID

from .exceptions import NotTrustedException
from .models import AuthenticationIdentity

HASH_ALGORITHMS = {
    "SHA256": hashes.SHA256,
    "SHA384": hashes.SHA384,
    "SHA512": hashes.SHA512,
}


def _name_attribute(name, oid):
    attributes = name.get_attributes_for_oid(oid)
    return attributes[0].value if attributes else None


def parse_identity(certificate) -> AuthenticationIdentity:
    """
    Mobile-ID certificates carry the identity code in the subject serial
    number, either bare or in the ETSI form PNOEE-38001085718.
    """
    subject = certificate.subject
    serial_number = _name_attribute(subject, NameOID.SERIAL_NUMBER)
    country = _name_attribute(subject, NameOID.COUNTRY_NAME)

    if not serial_number:
        raise NotTrustedException("certificate has no subject serial number")

    identity_code = serial_number
    if serial_number.startswith("PNO") and "-" in serial_number:
        prefix, identity_code = serial_number.split("-", 1)
        country = prefix[3:] or country

    return AuthenticationIdentity(
        given_name=_name_attribute(subject, NameOID.GIVEN_NAME),
        surname=_name_attribute(subject, NameOID.SURNAME),
        identity_code=identity_code,
        country=country,
    )


class AuthenticationResponseValidator(object):
    """Checks the outcome of a completed authentication session.

    The signature must be made over the hash the portal sent, the signer's
    certificate must be within its validity period, and it must be issued by
    one of the trusted certificates.
    """

    def __init__(self, trusted_certificates):
        self.trusted_certificates = list(trusted_certificates)

    def validate(self, session_status, authentication_hash) -> AuthenticationIdentity:
        certificate = x509.load_der_x509_certificate(
            base64.b64decode(session_status.cert)
        )
        signature = base64.b64decode(session_status.signature.value)

        self._verify_signature(
            certificate, signature, session_status.signature.algorithm, authentication_hash
        )
        self._verify_validity(certificate)
        self._verify_issuer(certificate)

        return parse_identity(certificate)

    def _verify_signature(self, certificate, signature, algorithm, authentication_hash):
        hash_algorithm = HASH_ALGORITHMS[authentication_hash.hash_type]()
        public_key = certificate.public_key()

        try:
            if isinstance(public_key, ec.EllipticCurvePublicKey):
                public_key.verify(
                    _to_der_signature(signature),
                    authentication_hash.digest,
                    ec.ECDSA(Prehashed(hash_algorithm)),
                )
            elif isinstance(public_key, rsa.RSAPublicKey):
                public_key.verify(
                    signature,
                    authentication_hash.digest,
                    padding.PKCS1v15(),
                    Prehashed(hash_algorithm),
                )
            else:
                raise NotTrustedException(f"unsupported signature algorithm {algorithm}")
        except InvalidSignature:
            raise NotTrustedException("signature does not match the hash")

    def _verify_validity(self, certificate):
        now = pendulum.now(tz="UTC")
        not_before = pendulum.instance(certificate.not_valid_before_utc)
        not_after = pendulum.instance(certificate.not_valid_after_utc)
        if not not_before <= now <= not_after:
            raise NotTrustedException("signer's certificate is expired or not yet valid")

    def _verify_issuer(self, certificate):
        for trusted in self.trusted_certificates:
            if trusted.subject != certificate.issuer:
                continue
            try:
                certificate.verify_directly_issued_by(trusted)
                return
            except (ValueError, TypeError, InvalidSignature):
                continue

        raise NotTrustedException("signer's certificate is not issued by a trusted CA")


def _to_der_signature(signature):
    """Mobile-ID returns ECDSA signatures as the plain concatenation r || s"""
    half = len(signature) // 2
    r = int.from_bytes(signature[:half], "big")
    s = int.from_bytes(signature[half:], "big")
    return encode_dss_signature(r, s)
