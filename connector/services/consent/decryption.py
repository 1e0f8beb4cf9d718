"""
Signed consent decryption.

Exported consents arrive as an AES-256-GCM payload whose key is wrapped
with this connector's RSA public key (OAEP, SHA-256).
"""

import base64
import binascii
import json
import logging
from typing import Any, Dict

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

logger = logging.getLogger(__name__)


class SignedConsentDecryptor:
    """
    Unwraps the AES key with the connector's private key and decrypts the consent.
    """

    AES_KEY_SIZE = 32

    def __init__(self, private_key_pem: str):
        """
        Initialize SignedConsentDecryptor.

        Args:
            private_key_pem: PEM-encoded RSA private key (unencrypted)
        """
        key = serialization.load_pem_private_key(
            private_key_pem.encode("utf-8"),
            password=None,
        )
        if not isinstance(key, rsa.RSAPrivateKey):
            raise ValueError("Consent private key must be an RSA key")
        self._private_key = key

    def decrypt(self, signed_consent: Dict[str, Any], encrypted: str) -> Dict[str, Any]:
        """
        Decrypt a signed consent.

        Args:
            signed_consent: {"data", "iv", "authTag"} as base64 strings
            encrypted: Base64 RSA-OAEP wrapped AES key

        Returns:
            The decrypted consent document

        Raises:
            ValueError: If any part is missing, malformed, or fails authentication
        """
        try:
            data = _b64decode(signed_consent["data"])
            iv = _b64decode(signed_consent["iv"])
            auth_tag = _b64decode(signed_consent["authTag"])
        except (KeyError, TypeError) as e:
            raise ValueError(f"Signed consent is missing a field: {e}")

        aes_key = self._unwrap_key(encrypted)

        decryptor = Cipher(
            algorithms.AES(aes_key),
            modes.GCM(iv, auth_tag),
        ).decryptor()

        try:
            plaintext = decryptor.update(data) + decryptor.finalize()
        except InvalidTag:
            raise ValueError("Signed consent failed authentication")

        try:
            consent = json.loads(plaintext.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ValueError(f"Decrypted consent is not valid JSON: {e}")

        if not isinstance(consent, dict):
            raise ValueError("Decrypted consent is not an object")

        logger.debug(f"Decrypted consent {consent.get('_id')}")
        return consent

    def _unwrap_key(self, encrypted: str) -> bytes:
        try:
            aes_key = self._private_key.decrypt(
                _b64decode(encrypted),
                padding.OAEP(
                    mgf=padding.MGF1(algorithm=hashes.SHA256()),
                    algorithm=hashes.SHA256(),
                    label=None,
                ),
            )
        except ValueError as e:
            raise ValueError(f"Unable to unwrap consent key: {e}")

        if len(aes_key) != self.AES_KEY_SIZE:
            raise ValueError("Unwrapped consent key must be 32 bytes")
        return aes_key


def _b64decode(value: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except (binascii.Error, TypeError) as e:
        raise ValueError(f"Invalid base64 value: {e}")
