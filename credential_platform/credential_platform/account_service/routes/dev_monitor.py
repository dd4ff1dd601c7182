"""
Dev Monitor Router - Development-only endpoints for account inspection.
"""
import logging
from typing import List
from fastapi import APIRouter, Request, Depends, HTTPException

from ..schemas import AccountPublic
from ..service import AccountService
from .deps import get_account_service, get_settings

router = APIRouter(prefix="/dev", tags=["dev-monitor"])
logger = logging.getLogger(__name__)


def is_local_request(request: Request) -> bool:
    """Check if request originates from localhost or internal IP."""
    if not request.client:
        # If no client info, allow in dev mode (likely internal Docker request)
        return True

    client_ip = request.client.host

    # Check for localhost
    if client_ip in ("127.0.0.1", "::1", "localhost"):
        return True

    # Check for private IP ranges (Docker networks use 172.x.x.x)
    if client_ip.startswith(("10.", "172.", "192.168.")):
        return True

    return False


@router.get("/users", response_model=List[AccountPublic])
def list_users(
    request: Request,
    service: AccountService = Depends(get_account_service),
):
    """
    List every registered account (development only).

    Returns:
        Accounts with id, username, email and created_at. Password hashes
        are never included.

    Raises:
        404: If DEV_MODE is not enabled
    """
    settings = get_settings(request)
    if not settings.DEV_MODE:
        logger.warning(
            "Attempt to access /dev/users with DEV_MODE disabled from IP %s",
            request.client.host if request.client else 'unknown'
        )
        raise HTTPException(status_code=404, detail="Not found")

    # DEV_MODE is the access control; the IP check only adds logging
    if not is_local_request(request):
        logger.info(
            "Dev account listing accessed from non-local IP: %s (allowed in DEV_MODE)",
            request.client.host if request.client else 'unknown'
        )

    accounts = service.list_accounts()
    logger.info("Dev account listing accessed: results=%s", len(accounts))
    return accounts
