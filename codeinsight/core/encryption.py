"""Encryption for the GitHub access token carried inside bearer tokens.

Uses Fernet symmetric encryption (AES-128-CBC with HMAC-SHA256).
The encryption key must be a 32-byte URL-safe base64-encoded string.

Generate a new key:
    python -c "from cryptography.fernet import Fernet; print(Fernet.generate_key().decode())"
"""

import logging

from cryptography.fernet import Fernet, InvalidToken

from codeinsight.config import settings

logger = logging.getLogger(__name__)


class TokenEncryption:
    """Handles encryption/decryption of GitHub access tokens.

    The bearer token we hand to the browser is only signed, not encrypted,
    so the GitHub token inside it is sealed separately with Fernet.

    If no key is configured, encryption operations are disabled and
    plaintext values pass through unchanged.
    """

    def __init__(self, key: str | None = None) -> None:
        self._cipher: Fernet | None = None

        key = settings.token_encryption_key if key is None else key
        if key:
            try:
                self._cipher = Fernet(key.encode())
            except (ValueError, TypeError):
                logger.warning("token_encryption_key has invalid format, encryption disabled")
        elif not settings.debug:
            logger.warning(
                "SECURITY: token_encryption_key is not configured. "
                "GitHub tokens inside bearer tokens will be readable by the client."
            )

    @property
    def is_enabled(self) -> bool:
        """Check if encryption is properly configured."""
        return self._cipher is not None

    def encrypt(self, plaintext: str) -> str:
        """Encrypt a plaintext string, or return it unchanged when disabled."""
        if not self._cipher:
            return plaintext

        return self._cipher.encrypt(plaintext.encode()).decode()

    def decrypt(self, ciphertext: str) -> str:
        """Decrypt an encrypted string.

        Raises:
            ValueError: If encryption is enabled and the value is not a valid
                Fernet token for the configured key.
        """
        if not self._cipher:
            return ciphertext

        try:
            return self._cipher.decrypt(ciphertext.encode()).decode()
        except InvalidToken as e:
            raise ValueError("GitHub token could not be decrypted") from e


# Singleton instance for application-wide use
token_encryption = TokenEncryption()
