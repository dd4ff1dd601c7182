"""
Credential store backed by SQLAlchemy.

The unique constraints on ``users.username`` and ``users.email`` are the final
authority on uniqueness; callers may pre-check, but a concurrent insert that
loses the race surfaces here as a ConflictError.
"""
from datetime import datetime
from typing import List, Optional
import logging

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .errors import ConflictError, StorageError
from .models import Account
from .schemas import AccountPublic

logger = logging.getLogger(__name__)


class CredentialStore:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def find_by_username_or_email(self, identifier: str) -> Optional[Account]:
        matches = self.find_all_by_username_or_email(identifier)
        return matches[0] if matches else None

    def find_all_by_username_or_email(self, identifier: str) -> List[Account]:
        """Accounts whose username or email equals identifier, username matches first."""
        try:
            with self._session_factory() as db:
                rows = db.execute(
                    select(Account).where(
                        or_(Account.username == identifier, Account.email == identifier)
                    )
                ).scalars().all()
        except SQLAlchemyError as e:
            raise self._storage_error("find_all_by_username_or_email", e) from e
        return sorted(rows, key=lambda account: account.username != identifier)

    def exists_by_username_or_email(self, username: str, email: str) -> bool:
        # Checks across both columns so a login identifier stays unambiguous
        try:
            with self._session_factory() as db:
                found = db.execute(
                    select(Account.id).where(
                        or_(Account.username.in_((username, email)), Account.email.in_((username, email)))
                    ).limit(1)
                ).first()
                return found is not None
        except SQLAlchemyError as e:
            raise self._storage_error("exists_by_username_or_email", e) from e

    def exists_by_username(self, username: str) -> bool:
        try:
            with self._session_factory() as db:
                found = db.execute(
                    select(Account.id).where(Account.username == username).limit(1)
                ).first()
                return found is not None
        except SQLAlchemyError as e:
            raise self._storage_error("exists_by_username", e) from e

    def insert(self, username: str, email: str, password_hash: str) -> Account:
        """
        Insert a new account.

        Raises:
            ConflictError: If the username or email unique constraint rejects the row
            StorageError: On any other database failure
        """
        account = Account(username=username, email=email, password_hash=password_hash)
        try:
            with self._session_factory() as db:
                db.add(account)
                try:
                    db.commit()
                except IntegrityError as e:
                    db.rollback()
                    logger.info("Insert rejected by unique constraint: username=%s", username)
                    raise ConflictError("account already exists") from e
                db.refresh(account)
                return account
        except SQLAlchemyError as e:
            raise self._storage_error("insert", e) from e

    def list_all(self) -> List[AccountPublic]:
        try:
            with self._session_factory() as db:
                rows = db.execute(select(Account).order_by(Account.id)).scalars().all()
                return [AccountPublic.model_validate(row) for row in rows]
        except SQLAlchemyError as e:
            raise self._storage_error("list_all", e) from e

    def ping(self) -> datetime:
        """Round-trip to the database and return its current time."""
        try:
            with self._session_factory() as db:
                return db.execute(select(func.current_timestamp())).scalar_one()
        except SQLAlchemyError as e:
            raise self._storage_error("ping", e) from e

    @staticmethod
    def _storage_error(operation: str, exc: SQLAlchemyError) -> StorageError:
        logger.error("Credential store %s failed: %s", operation, exc)
        return StorageError(f"{operation} failed: {exc.__class__.__name__}")
