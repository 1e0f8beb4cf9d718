"""Tests for signed consent decryption."""

import base64
import json
import os

import pytest
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from connector.services.consent.decryption import SignedConsentDecryptor


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _pem(private_key) -> str:
    return private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")


def _oaep():
    return padding.OAEP(
        mgf=padding.MGF1(algorithm=hashes.SHA256()),
        algorithm=hashes.SHA256(),
        label=None,
    )


@pytest.fixture(scope="module")
def private_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture
def decryptor(private_key):
    return SignedConsentDecryptor(_pem(private_key))


def seal_consent(public_key, consent: dict):
    """Encrypt a consent the way the consent manager exports it."""
    aes_key = os.urandom(32)
    iv = os.urandom(12)
    sealed = AESGCM(aes_key).encrypt(iv, json.dumps(consent).encode("utf-8"), None)
    signed_consent = {
        "data": _b64(sealed[:-16]),
        "iv": _b64(iv),
        "authTag": _b64(sealed[-16:]),
    }
    encrypted = _b64(public_key.encrypt(aes_key, _oaep()))
    return signed_consent, encrypted


class TestSignedConsentDecryptor:
    def test_decrypts_exported_consent(self, decryptor, private_key):
        consent = {"_id": "65f0c0ffee", "user": "cm-user", "status": "granted"}
        signed_consent, encrypted = seal_consent(private_key.public_key(), consent)

        assert decryptor.decrypt(signed_consent, encrypted) == consent

    def test_tampered_auth_tag_is_rejected(self, decryptor, private_key):
        signed_consent, encrypted = seal_consent(private_key.public_key(), {"_id": "c1"})
        signed_consent["authTag"] = _b64(os.urandom(16))

        with pytest.raises(ValueError, match="authentication"):
            decryptor.decrypt(signed_consent, encrypted)

    def test_key_wrapped_for_another_connector_is_rejected(self, decryptor):
        other_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
        signed_consent, encrypted = seal_consent(other_key.public_key(), {"_id": "c1"})

        with pytest.raises(ValueError):
            decryptor.decrypt(signed_consent, encrypted)

    def test_missing_field_is_rejected(self, decryptor, private_key):
        signed_consent, encrypted = seal_consent(private_key.public_key(), {"_id": "c1"})
        del signed_consent["iv"]

        with pytest.raises(ValueError, match="missing"):
            decryptor.decrypt(signed_consent, encrypted)

    def test_invalid_base64_is_rejected(self, decryptor, private_key):
        signed_consent, _ = seal_consent(private_key.public_key(), {"_id": "c1"})

        with pytest.raises(ValueError, match="base64"):
            decryptor.decrypt(signed_consent, "not base64!!")

    def test_non_rsa_key_is_refused(self):
        from cryptography.hazmat.primitives.asymmetric import ec

        ec_key = ec.generate_private_key(ec.SECP256R1())

        with pytest.raises(ValueError):
            SignedConsentDecryptor(_pem(ec_key))
