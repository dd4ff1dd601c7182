"""
Account service: register, login and session verification.

Orchestrates the credential store, password hasher and token issuer, all of
which are injected so tests can swap in doubles.
"""
from typing import List, Optional
import logging

from .errors import AuthenticationError, ConflictError, ValidationError
from .hashing import MAX_PASSWORD_BYTES, PasswordHasher
from .schemas import AccountPublic, AccountSummary, AuthResult, SessionVerification
from .store import CredentialStore
from .tokens import TokenIssuer

logger = logging.getLogger(__name__)

USERNAME_MAX_LENGTH = 50
EMAIL_MAX_LENGTH = 100
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_BYTES = MAX_PASSWORD_BYTES


class AccountService:
    def __init__(self, store: CredentialStore, hasher: PasswordHasher, tokens: TokenIssuer):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens

    def register(self, username: Optional[str], email: Optional[str], password: Optional[str]) -> AuthResult:
        """
        Create an account and issue its first token.

        Args:
            username: 1..50 characters, case-sensitive
            email: 1..100 characters
            password: at least 6 characters

        Returns:
            AuthResult with the token and the public account fields

        Raises:
            ValidationError: If a field is missing, empty or out of range
            ConflictError: If the username or email is already registered
            StorageError: If the store fails
        """
        self._validate_registration(username, email, password)

        # Fast path only; the unique constraint in insert() is what guarantees uniqueness
        if self.store.exists_by_username_or_email(username, email):
            logger.info("Registration rejected: username=%s already exists", username)
            raise ConflictError("account already exists")

        password_hash = self.hasher.hash(password)
        account = self.store.insert(username, email, password_hash)
        logger.info("Account registered: account_id=%s username=%s", account.id, account.username)

        return self._issue(account)

    def login(self, identifier: Optional[str], password: Optional[str]) -> AuthResult:
        """
        Authenticate by username or email.

        Unknown identifiers and wrong passwords raise the same
        AuthenticationError so callers cannot tell which one was wrong.
        """
        if not identifier or not password:
            raise AuthenticationError()

        # A username may equal another account's email, so try every match
        account = next(
            (candidate for candidate in self.store.find_all_by_username_or_email(identifier)
             if self.hasher.verify(password, candidate.password_hash)),
            None,
        )
        if account is None:
            logger.info("Login failed: identifier=%s", identifier)
            raise AuthenticationError()

        logger.info("Login succeeded: account_id=%s username=%s", account.id, account.username)
        return self._issue(account)

    def verify_session(self, token: Optional[str]) -> SessionVerification:
        # Returns the identity carried by the token; the store is not consulted
        return self.tokens.verify(token)

    def check_username_available(self, username: Optional[str]) -> bool:
        if not username or len(username) > USERNAME_MAX_LENGTH:
            return False
        return not self.store.exists_by_username(username)

    def list_accounts(self) -> List[AccountPublic]:
        return self.store.list_all()

    def _issue(self, account) -> AuthResult:
        token = self.tokens.issue(account.id, account.username)
        return AuthResult(token=token, account=AccountSummary.model_validate(account))

    @staticmethod
    def _validate_registration(username, email, password) -> None:
        missing = [
            name for name, value in (("username", username), ("email", email))
            if not isinstance(value, str) or not value.strip()
        ]
        if not isinstance(password, str) or not password:
            missing.append("password")
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        if len(username) > USERNAME_MAX_LENGTH:
            raise ValidationError(f"Username must be at most {USERNAME_MAX_LENGTH} characters")
        if len(email) > EMAIL_MAX_LENGTH:
            raise ValidationError(f"Email must be at most {EMAIL_MAX_LENGTH} characters")
        if len(password) < PASSWORD_MIN_LENGTH:
            raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
        if len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValidationError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
