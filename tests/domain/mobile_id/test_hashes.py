import pytest

from misp.domain.mobile_id import AuthenticationHash, calculate_verification_code


@pytest.mark.parametrize(
    "digest,code",
    [
        (bytes([0xFF] * 32), "8191"),
        (bytes(32), "0000"),
        (bytes([0x04] + [0x00] * 30 + [0x05]), "0133"),
    ],
)
def test_calculate_verification_code(digest, code):
    assert calculate_verification_code(digest) == code


def test_verification_code_uses_only_the_first_and_last_bytes():
    digest = bytearray(32)
    digest[0] = 0x80
    digest[-1] = 0x01
    middle_changed = bytearray(digest)
    middle_changed[10] = 0xAB

    assert calculate_verification_code(bytes(digest)) == calculate_verification_code(
        bytes(middle_changed)
    )


def test_calculate_verification_code_needs_a_hash():
    with pytest.raises(ValueError):
        calculate_verification_code(b"")


def test_generate_random_hash():
    first = AuthenticationHash.generate_random()
    second = AuthenticationHash.generate_random()

    assert len(first.digest) == 32
    assert first.hash_type == "SHA256"
    assert first.digest != second.digest
    assert len(first.verification_code) == 4
    assert first.verification_code.isdigit()


def test_generate_random_hash_of_other_types():
    assert len(AuthenticationHash.generate_random("SHA512").digest) == 64


def test_hash_b64():
    authentication_hash = AuthenticationHash(bytes(32))
    assert authentication_hash.b64 == "AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA="


def test_hash_length_must_match_hash_type():
    with pytest.raises(ValueError):
        AuthenticationHash(bytes(20))


def test_unsupported_hash_type():
    with pytest.raises(ValueError):
        AuthenticationHash(bytes(32), hash_type="MD5")
