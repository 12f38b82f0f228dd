"""
CarLookup Backend: Password Service
====================================

What:  Salted password hashing and verification.
How:   PBKDF2-HMAC-SHA256, 10,000 iterations, 32-byte derived key. Salt and
       hash are stored base64-encoded next to the user row.

Verification never raises: malformed salts, blank input and mismatches all
come back as False so the login path has a single failure branch.
"""

import base64
import hashlib
import hmac
import logging
import secrets

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 10_000
HASH_BYTES = 32
SALT_BYTES = 32


class PasswordService:
    def __init__(self, iterations: int = PBKDF2_ITERATIONS):
        self.iterations = iterations

    def generate_salt(self) -> str:
        """32 random bytes from the OS CSPRNG, base64-encoded."""
        return base64.b64encode(secrets.token_bytes(SALT_BYTES)).decode("ascii")

    def hash_password(self, password: str, salt: str) -> str:
        """
        Derive the base64 PBKDF2 hash of `password` under `salt`.

        Raises:
            ValueError: password or salt is blank, or salt is not base64.
        """
        if not password or not password.strip():
            raise ValueError("Password cannot be empty")
        if not salt or not salt.strip():
            raise ValueError("Salt cannot be empty")

        salt_bytes = base64.b64decode(salt, validate=True)
        derived = hashlib.pbkdf2_hmac(
            "sha256",
            password.encode("utf-8"),
            salt_bytes,
            self.iterations,
            dklen=HASH_BYTES,
        )
        return base64.b64encode(derived).decode("ascii")

    def verify_password(self, password: str, salt: str, password_hash: str) -> bool:
        if not password or not salt or not password_hash:
            return False
        try:
            computed = self.hash_password(password, salt)
            return hmac.compare_digest(
                computed.encode("ascii"), password_hash.encode("ascii")
            )
        except Exception as exc:
            logger.debug("Password verification failed: %s", exc)
            return False
