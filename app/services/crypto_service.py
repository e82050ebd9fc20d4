# /app/services/crypto_service.py

"""
Symmetric encryption of users' Gemini API keys at rest.

Keys are encrypted with Fernet (AES-CBC with an HMAC-SHA256 tag and a random
IV embedded in every token). The Fernet key itself is derived from a single
process-wide passphrase, so one `ENCRYPTION_KEY` is all an operator manages.
"""

import base64
import logging
from functools import lru_cache

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from ..core.config import get_settings
from ..core.errors import DecryptionFailedError

logger = logging.getLogger(__name__)

# Fixed salt: the passphrase is the only secret and there is no per-user salt.
KDF_SALT = b"content-studio/apikey-cipher/v1"
KDF_ITERATIONS = 200_000


def derive_key(passphrase: str) -> bytes:
    """Stretches a passphrase into a urlsafe-base64 Fernet key."""
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=KDF_SALT,
        iterations=KDF_ITERATIONS,
    )
    return base64.urlsafe_b64encode(kdf.derive(passphrase.encode("utf-8")))


class Cipher:
    def __init__(self, secret: str):
        if not secret:
            raise ValueError("Cipher secret must not be empty.")
        self._fernet = Fernet(derive_key(secret))

    def encrypt(self, plaintext: str) -> str:
        if not plaintext:
            return ""
        return self._fernet.encrypt(plaintext.encode("utf-8")).decode("ascii")

    def decrypt_strict(self, ciphertext: str) -> str:
        """Like decrypt(), but raises DecryptionFailedError instead of returning ''."""
        if not ciphertext:
            return ""
        try:
            return self._fernet.decrypt(ciphertext.encode("utf-8")).decode("utf-8")
        except (InvalidToken, ValueError, TypeError) as e:
            raise DecryptionFailedError() from e

    def decrypt(self, ciphertext: str) -> str:
        """
        Returns the plaintext, or '' when the ciphertext is empty, tampered with,
        or was produced under a different secret.
        """
        try:
            return self.decrypt_strict(ciphertext)
        except DecryptionFailedError:
            logger.warning("Decryption failed; returning empty string.")
            return ""


@lru_cache
def get_cipher() -> Cipher:
    return Cipher(get_settings().encryption_key)
