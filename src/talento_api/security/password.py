"""bcrypt hashing for admin console passwords."""

import bcrypt


class PasswordService:
    """Hashes and checks administrator passwords."""

    BCRYPT_ROUNDS = 12

    def __init__(self, rounds: int | None = None) -> None:
        self.rounds = rounds or self.BCRYPT_ROUNDS

    def hash_password(self, password: str) -> str:
        """Return the bcrypt hash of a plain text password."""
        digest = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds))
        return digest.decode("ascii")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Check a plain text password against a stored hash.

        Args:
            password: Password typed on the login form
            password_hash: Value stored for the administrator

        Returns:
            True on a match; False on a mismatch or a malformed hash
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("ascii"))
        except (ValueError, UnicodeError):
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        """Whether a stored hash was made with a different cost factor."""
        parts = password_hash.split("$")
        if len(parts) < 4 or not parts[2].isdigit():
            return True
        return int(parts[2]) != self.rounds
