from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime
from .db import Base


class Account(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True, index=True)
    # unique=True puts the uniqueness guarantee in the database itself
    username = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(100), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Account id={self.id} username={self.username!r}>"
