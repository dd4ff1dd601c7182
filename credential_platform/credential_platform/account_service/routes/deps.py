from fastapi import Request

from ..config import Settings
from ..service import AccountService


def get_account_service(request: Request) -> AccountService:
    return request.app.state.account_service


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
