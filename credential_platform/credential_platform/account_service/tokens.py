"""
Signed, time-bounded bearer tokens.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
import logging

import jwt

from .errors import ConfigurationError, TokenError
from .schemas import SessionPayload, SessionVerification

logger = logging.getLogger(__name__)

DEFAULT_EXPIRE_DAYS = 30


class TokenIssuer:
    def __init__(self, secret: str, algorithm: str = "HS256", expire_days: int = DEFAULT_EXPIRE_DAYS):
        if not secret:
            raise ConfigurationError("A token signing secret is required")
        self._secret = secret
        self.algorithm = algorithm
        self.expires_in = timedelta(days=expire_days)

    def issue(self, account_id: int, username: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "account_id": account_id,
            "username": username,
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def decode(self, token: str) -> SessionPayload:
        """
        Decode and validate a token.

        Raises:
            TokenError: With reason missing, expired, invalid_signature or
                malformed
        """
        if not token:
            raise TokenError("missing")
        try:
            data = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenError("expired") from e
        except jwt.InvalidSignatureError as e:
            raise TokenError("invalid_signature") from e
        except jwt.InvalidTokenError as e:
            raise TokenError("malformed", str(e)) from e

        account_id = data.get("account_id")
        username = data.get("username")
        if not isinstance(account_id, int) or not isinstance(username, str):
            raise TokenError("malformed", "token payload is missing identity claims")
        return SessionPayload(
            account_id=account_id,
            username=username,
            issued_at=datetime.fromtimestamp(data["iat"], tz=timezone.utc),
        )

    def verify(self, token: Optional[str]) -> SessionVerification:
        """Validate a token without raising; failures come back with a reason."""
        try:
            payload = self.decode(token)
        except TokenError as e:
            logger.debug("Token rejected: reason=%s", e.reason)
            return SessionVerification(valid=False, reason=e.reason)
        return SessionVerification(valid=True, payload=payload)
