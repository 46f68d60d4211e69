import pytest
from cryptography.hazmat.primitives.serialization import BestAvailableEncryption, pkcs12

from misp.domain.mobile_id import TrustStore
from tests.mock_mobile_id import (
    TRUST_STORE_PASSWORD,
    make_ca,
    write_trust_store,
)


@pytest.fixture
def trust_store_file(tmp_path):
    _, first = make_ca("TEST of EID-SK 2016")
    _, second = make_ca("TEST of ESTEID-SK 2015")
    path = write_trust_store(
        tmp_path / "trust_store.p12", {"mid_ca": first, "tls_ca": second}
    )
    return path, first, second


def test_load_pkcs12(trust_store_file):
    path, first, second = trust_store_file
    trust_store = TrustStore.load_pkcs12(path.read_bytes(), TRUST_STORE_PASSWORD)

    assert len(trust_store) == 2
    assert sorted(trust_store.aliases) == ["mid_ca", "tls_ca"]
    certificates = dict(zip(trust_store.aliases, trust_store.certificates))
    assert certificates["mid_ca"] == first
    assert certificates["tls_ca"] == second


def test_load_pkcs12_with_wrong_password(trust_store_file):
    path, _, _ = trust_store_file
    with pytest.raises(ValueError):
        TrustStore.load_pkcs12(path.read_bytes(), "wrong")


def test_load_pkcs12_from_garbage():
    with pytest.raises(ValueError):
        TrustStore.load_pkcs12(b"not a trust store", TRUST_STORE_PASSWORD)


def test_certificate_without_friendly_name_is_aliased_by_subject():
    _, certificate = make_ca("Nameless CA")
    data = pkcs12.serialize_key_and_certificates(
        name=None,
        key=None,
        cert=None,
        cas=[certificate],
        encryption_algorithm=BestAvailableEncryption(TRUST_STORE_PASSWORD.encode()),
    )
    trust_store = TrustStore.load_pkcs12(data, TRUST_STORE_PASSWORD)

    assert trust_store.aliases == [certificate.subject.rfc4514_string()]
    assert "CN=Nameless CA" in trust_store.aliases[0]


def test_to_pem(trust_store_file):
    path, _, _ = trust_store_file
    trust_store = TrustStore.load_pkcs12(path.read_bytes(), TRUST_STORE_PASSWORD)

    pem = trust_store.to_pem()
    assert pem.count("-----BEGIN CERTIFICATE-----") == 2


def test_empty_trust_store():
    trust_store = TrustStore({})

    assert len(trust_store) == 0
    assert trust_store.aliases == []
    assert trust_store.to_pem() == ""
