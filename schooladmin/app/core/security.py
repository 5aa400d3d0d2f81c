"""Security primitives: salted password hashing and opaque session tokens.

Passwords are hashed with PBKDF2-SHA256 through passlib using a per-account
random salt kept next to the digest. Session tokens are random values handed
to the client once; only their SHA-256 digest is ever persisted.
"""

import base64
import hashlib
import hmac
import secrets

from passlib.hash import pbkdf2_sha256

SALT_BYTES = 16
TOKEN_BYTES = 20


def generate_salt() -> str:
    return secrets.token_hex(SALT_BYTES)


class PasswordHasher:
    def __init__(self, rounds: int):
        self.rounds = rounds
        self._dummy_salt = None
        self._dummy_digest = None

    def hash(self, password: str, salt: str, rounds: int | None = None) -> str:
        handler = pbkdf2_sha256.using(salt=bytes.fromhex(salt), rounds=rounds or self.rounds)
        return handler.hash(password)

    def verify(self, password: str, salt: str | None, digest: str | None) -> bool:
        # Stored material may be missing or corrupt; that is a failed login, not a crash.
        if not password or not salt or not digest:
            return False
        try:
            parsed = pbkdf2_sha256.from_string(digest)
            expected = self.hash(password, salt, rounds=parsed.rounds)
        except (ValueError, TypeError):
            return False
        return hmac.compare_digest(expected.encode("utf-8"), digest.encode("utf-8"))

    def dummy_verify(self, password: str) -> bool:
        """Spend the same PBKDF2 work as a real check for an unknown account. Always False."""
        if self._dummy_digest is None:
            self._dummy_salt = generate_salt()
            self._dummy_digest = self.hash(secrets.token_hex(16), self._dummy_salt)
        self.verify(password, self._dummy_salt, self._dummy_digest)
        return False


def generate_session_token() -> str:
    raw = secrets.token_bytes(TOKEN_BYTES)
    return base64.b32encode(raw).decode("ascii").lower().rstrip("=")


def session_id_for_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
