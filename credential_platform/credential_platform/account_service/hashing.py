from passlib.context import CryptContext
from passlib.utils import MAX_PASSWORD_SIZE

DEFAULT_ROUNDS = 29000
# passlib rejects longer secrets with PasswordSizeError
MAX_PASSWORD_BYTES = MAX_PASSWORD_SIZE


class PasswordHasher:
    """
    One-way salted password hashing.

    Uses pbkdf2_sha256 to avoid external bcrypt backend issues in some
    environments. The salt and round count are embedded in each hash, so
    verification needs nothing but the stored string.
    """

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["pbkdf2_sha256"],
            deprecated="auto",
            pbkdf2_sha256__default_rounds=rounds,
        )

    def hash(self, plaintext: str) -> str:
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, hashed: str) -> bool:
        if not hashed:
            return False
        try:
            return self._context.verify(plaintext, hashed)
        except (ValueError, TypeError):
            # Unrecognised or corrupted hash
            return False
