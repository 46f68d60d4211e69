from typing import Dict, List

from cryptography import x509
from cryptography.hazmat.primitives.serialization import Encoding, pkcs12


class TrustStore(object):
    """Certificates, keyed by alias, that the Mobile-ID service must chain to"""

    def __init__(self, certificates: Dict[str, x509.Certificate]):
        self._certificates = dict(certificates)

    @classmethod
    def load_pkcs12(cls, data: bytes, password: str):
        """
        Raises ValueError when the data is not PKCS12 or the password is wrong,
        and cryptography's UnsupportedAlgorithm when the file is protected with
        an algorithm the backend cannot decrypt.
        """
        bundle = pkcs12.load_pkcs12(data, password.encode("utf-8"))

        entries = []
        if bundle.cert is not None:
            entries.append(bundle.cert)
        entries.extend(bundle.additional_certs)

        certificates = {}
        for entry in entries:
            certificates[_alias(entry)] = entry.certificate

        return cls(certificates)

    @property
    def aliases(self) -> List[str]:
        return list(self._certificates.keys())

    @property
    def certificates(self) -> List[x509.Certificate]:
        return list(self._certificates.values())

    def to_pem(self) -> str:
        return "".join(
            cert.public_bytes(Encoding.PEM).decode("ascii")
            for cert in self._certificates.values()
        )

    def __len__(self):
        return len(self._certificates)


def _alias(entry):
    if entry.friendly_name:
        return entry.friendly_name.decode("utf-8")
    return entry.certificate.subject.rfc4514_string()
