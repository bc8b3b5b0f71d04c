"""Encryption of personal profile fields at rest."""
import logging
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken

from healfit.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


class FieldEncryption:
    """
    Encrypts and decrypts profile fields (full name, photo) with Fernet.

    Every ciphertext carries its own random IV and an HMAC, so equal
    plaintexts produce different ciphertexts and tampering is detected.
    """

    def __init__(self, key: Optional[str] = None):
        """
        Initialize the cipher.

        Args:
            key: Fernet key (urlsafe base64). Falls back to settings.

        Raises:
            RuntimeError: If no key is configured in production
            ValueError: If the key is malformed
        """
        encryption_key = key or settings.field_encryption_key

        if not encryption_key:
            if settings.is_production:
                raise RuntimeError(
                    "FIELD_ENCRYPTION_KEY must be set in production. "
                    "Generate with: python -c \"from cryptography.fernet import Fernet; "
                    "print(Fernet.generate_key().decode())\""
                )
            logger.warning("FIELD_ENCRYPTION_KEY not set. Generating temporary key (NOT FOR PRODUCTION)")
            encryption_key = Fernet.generate_key().decode()

        if isinstance(encryption_key, str):
            encryption_key = encryption_key.encode()

        try:
            self.cipher = Fernet(encryption_key)
        except ValueError as e:
            raise ValueError(f"Invalid encryption key format: {e}") from e

    def encrypt(self, plaintext: Optional[str]) -> str:
        """
        Encrypt a field value.

        Args:
            plaintext: Value to encrypt

        Returns:
            Fernet token as text, or "" for an empty value
        """
        if not plaintext:
            return ""
        return self.cipher.encrypt(plaintext.encode("utf-8")).decode("ascii")

    def decrypt(self, ciphertext: Optional[str]) -> str:
        """
        Decrypt a stored field value.

        Args:
            ciphertext: Fernet token as stored

        Returns:
            Plain text, or "" when empty or undecryptable
        """
        if not ciphertext:
            return ""

        try:
            return self.cipher.decrypt(ciphertext.encode("ascii")).decode("utf-8")
        except (InvalidToken, UnicodeError):
            logger.warning("Stored field could not be decrypted; returning empty value")
            return ""


# Global instance
_field_encryption: Optional[FieldEncryption] = None


def get_field_encryption() -> FieldEncryption:
    """Get or create global field encryption instance."""
    global _field_encryption
    if _field_encryption is None:
        _field_encryption = FieldEncryption()
    return _field_encryption
