"""
Event logger utility for account events.
"""
from datetime import datetime
from typing import Optional
from fastapi import Request
import sys
import logging
import os

logger = logging.getLogger(__name__)


ALLOWED_EVENT_TYPES = {
    "register_success",
    "register_conflict",
    "login_success",
    "login_failure",
    "token_invalid",
}


def configure_logging(level: str = "INFO", log_dir: Optional[str] = None) -> None:
    """
    Configure stdout logging and, when log_dir is given, a file log.

    Args:
        level: Logging level name
        log_dir: Directory for account_events.log (optional)
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    # Try to add file handler, but continue without it if directory creation fails
    if log_dir:
        try:
            os.makedirs(log_dir, exist_ok=True)
            handlers.append(logging.FileHandler(os.path.join(log_dir, "account_events.log")))
        except OSError as e:
            print(f"WARNING: Could not set up file logging: {e}", file=sys.stderr)

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers
    )


def client_ip(request: Request) -> Optional[str]:
    """Client address with X-Forwarded-For fallback."""
    ip_address = None
    if request.client:
        ip_address = request.client.host

    # Check for X-Forwarded-For header (proxy/load balancer scenarios)
    if not ip_address and request.headers.get("x-forwarded-for"):
        # X-Forwarded-For can contain multiple IPs, take the first one
        ip_address = request.headers.get("x-forwarded-for").split(",")[0].strip()

    return ip_address


def log_account_event(
    event_type: str,
    request: Request,
    username: Optional[str] = None,
    account_id: Optional[int] = None
) -> None:
    """
    Log an account event.

    Args:
        event_type: One of: register_success, register_conflict,
                    login_success, login_failure, token_invalid
        request: FastAPI Request object
        username: Username or login identifier, if known
        account_id: Account id, if known

    Raises:
        ValueError: If event_type is invalid
    """
    if event_type not in ALLOWED_EVENT_TYPES:
        raise ValueError(
            f"Invalid event_type '{event_type}'. Must be one of: {', '.join(sorted(ALLOWED_EVENT_TYPES))}"
        )

    logger.info(
        "ACCOUNT %s account_id=%s username=%s ip=%s user_agent=%s timestamp=%s",
        event_type, account_id, username, client_ip(request),
        request.headers.get("user-agent"), datetime.utcnow().isoformat()
    )
