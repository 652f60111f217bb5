"""Unit tests for the structlog console adapter."""

import json

import pytest

from storefront_auth.infrastructure.logging import ConsoleAdapter
from storefront_auth.infrastructure.logging.console_adapter import redact_credentials


@pytest.mark.unit
class TestRedactCredentials:
    def test_masks_sensitive_keys(self):
        event = {
            "event": "login_succeeded",
            "user_id": "u1",
            "password": "Secret123",
            "refresh_token": "eyJ...",
        }

        result = redact_credentials(None, "info", event)

        assert result["password"] == "***"
        assert result["refresh_token"] == "***"
        assert result["user_id"] == "u1"


@pytest.mark.unit
class TestConsoleAdapter:
    def test_json_output_includes_error_fields(self, capsys):
        logger = ConsoleAdapter(use_json=True, level="DEBUG")

        logger.error("session_reaper_failed", error=RuntimeError("db down"), run=1)

        entry = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert entry["event"] == "session_reaper_failed"
        assert entry["error_type"] == "RuntimeError"
        assert entry["error_message"] == "db down"
        assert entry["level"] == "error"

    def test_bound_context_and_redaction(self, capsys):
        logger = ConsoleAdapter(use_json=True, level="DEBUG").bind(user_id="u1")

        logger.info("token_refreshed", access_token="eyJ...")

        entry = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert entry["user_id"] == "u1"
        assert entry["access_token"] == "***"
