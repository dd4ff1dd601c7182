"""
Error kinds raised by the account service core.

Every error carries a ``kind`` tag so the transport layer can translate it
without inspecting messages.
"""


class AccountServiceError(Exception):
    kind = "server_error"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(AccountServiceError):
    """Missing, empty or out-of-range input fields."""
    kind = "validation_error"


class ConflictError(AccountServiceError):
    """Username or email already taken."""
    kind = "conflict"


class AuthenticationError(AccountServiceError):
    """Unknown identifier or wrong password. Always the same wording."""
    kind = "authentication_error"

    def __init__(self, message: str = "invalid credentials"):
        super().__init__(message)


class ConfigurationError(AccountServiceError):
    """Fatal at startup, never raised per request."""
    kind = "configuration_error"


class StorageError(AccountServiceError):
    """The underlying store failed or timed out."""
    kind = "storage_error"


class TokenError(AccountServiceError):
    kind = "token_error"

    def __init__(self, reason: str, message: str = ""):
        super().__init__(message or reason)
        self.reason = reason
