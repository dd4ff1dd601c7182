"""
Unit tests for event logger utility.
"""
import logging
import pytest
from unittest.mock import Mock

from credential_platform.credential_platform.account_service.utils.event_logger import (
    client_ip,
    configure_logging,
    log_account_event,
)

LOGGER_NAME = "credential_platform.credential_platform.account_service.utils.event_logger"


@pytest.fixture
def mock_request():
    """Create a mock FastAPI Request object."""
    request = Mock()
    request.client = Mock()
    request.client.host = "192.168.1.1"
    request.headers = {"user-agent": "Mozilla/5.0 Test Browser"}
    return request


def test_log_account_event_writes_record(caplog, mock_request):
    """Test that log_account_event emits an INFO record with identity fields."""
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        log_account_event("login_success", mock_request, username="tony", account_id=1)

    assert len(caplog.records) == 1
    message = caplog.records[0].getMessage()
    assert message.startswith("ACCOUNT login_success")
    assert "account_id=1" in message
    assert "username=tony" in message
    assert "ip=192.168.1.1" in message
    assert "Mozilla/5.0 Test Browser" in message


def test_client_ip_uses_forwarded_for_without_client():
    """Test X-Forwarded-For fallback when request.client is missing."""
    request = Mock()
    request.client = None
    request.headers = {"x-forwarded-for": "203.0.113.1, 10.0.0.1"}

    assert client_ip(request) == "203.0.113.1"


def test_client_ip_none_without_any_source():
    request = Mock()
    request.client = None
    request.headers = {}

    assert client_ip(request) is None


def test_log_account_event_rejects_unknown_type(mock_request):
    """Test that an invalid event_type raises ValueError."""
    with pytest.raises(ValueError) as exc_info:
        log_account_event("password_reset", mock_request)

    assert "Invalid event_type" in str(exc_info.value)


@pytest.mark.parametrize("event_type", [
    "register_success", "register_conflict", "login_success", "login_failure", "token_invalid"
])
def test_log_account_event_accepts_all_types(caplog, mock_request, event_type):
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        log_account_event(event_type, mock_request, username="tony")

    assert f"ACCOUNT {event_type}" in caplog.text


def test_log_account_event_does_not_log_secrets(caplog, mock_request):
    mock_request.headers = {"user-agent": "test", "authorization": "Bearer secret-token"}
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        log_account_event("token_invalid", mock_request)

    assert "secret-token" not in caplog.text


def test_configure_logging_with_unwritable_dir_keeps_stdout(tmp_path, capsys):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file")

    configure_logging("INFO", str(blocker / "logs"))

    assert "Could not set up file logging" in capsys.readouterr().err
