from datetime import datetime
from pydantic import BaseModel, ConfigDict

from typing import Optional


class RegisterRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(BaseModel):
    # Either the username or the email address
    username: Optional[str] = None
    password: Optional[str] = None


class AccountSummary(BaseModel):
    id: int
    username: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class AccountPublic(AccountSummary):
    created_at: datetime


class AuthResult(BaseModel):
    token: str
    account: AccountSummary


class AuthResponse(BaseModel):
    message: str
    token: str
    user: AccountSummary


class SessionPayload(BaseModel):
    account_id: int
    username: str
    issued_at: datetime


class SessionVerification(BaseModel):
    valid: bool
    payload: Optional[SessionPayload] = None
    reason: Optional[str] = None


class VerifyTokenResponse(BaseModel):
    valid: bool
    user: Optional[SessionPayload] = None


class UsernameAvailability(BaseModel):
    username: str
    available: bool


class StatusResponse(BaseModel):
    status: str
    version: str


class DatabaseCheckResponse(BaseModel):
    success: bool
    time: datetime
