"""
Password hashing with bcrypt (passlib).

Every hash carries its own random salt; the cost factor comes from settings.
"""

from passlib.context import CryptContext


class PasswordHasher:
    def __init__(self, rounds: int = 10):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        """Hash password with bcrypt."""
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """Verify password against hash."""
        return self._context.verify(plain_password, hashed_password)

    def dummy_verify(self) -> bool:
        """Burn one verification so unknown emails cost as much as wrong passwords."""
        return self._context.dummy_verify()
