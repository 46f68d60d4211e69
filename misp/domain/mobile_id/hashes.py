import base64
import hashlib
import secrets

HASH_TYPES = {
    "SHA256": hashlib.sha256,
    "SHA384": hashlib.sha384,
    "SHA512": hashlib.sha512,
}


def calculate_verification_code(digest: bytes) -> str:
    """The four digit code shown to the user both in the portal and on the
    phone. It is built from the six leading bits of the hash followed by its
    seven trailing bits.
    """
    if not digest:
        raise ValueError("Cannot calculate a verification code for an empty hash")

    code = ((digest[0] & 0xFC) << 5) | (digest[-1] & 0x7F)
    return f"{code:04d}"


class AuthenticationHash(object):
    def __init__(self, digest, hash_type="SHA256"):
        if hash_type not in HASH_TYPES:
            raise ValueError(f"Unsupported hash type {hash_type}")
        expected_length = HASH_TYPES[hash_type]().digest_size
        if len(digest) != expected_length:
            raise ValueError(
                f"{hash_type} hash must be {expected_length} bytes, got {len(digest)}"
            )

        self.digest = digest
        self.hash_type = hash_type

    @classmethod
    def generate_random(cls, hash_type="SHA256"):
        digest = HASH_TYPES[hash_type](secrets.token_bytes(64)).digest()
        return cls(digest, hash_type)

    @property
    def b64(self):
        return base64.b64encode(self.digest).decode("ascii")

    @property
    def verification_code(self):
        return calculate_verification_code(self.digest)
