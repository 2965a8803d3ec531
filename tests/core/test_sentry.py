"""Tests for Sentry initialization."""

from unittest.mock import patch

from src.core.config import settings
from src.core.sentry import init_sentry


def test_init_sentry_skipped_without_dsn() -> None:
    original = settings.sentry_dsn
    try:
        settings.sentry_dsn = None
        with patch("src.core.sentry.sentry_sdk.init") as mock_init:
            assert init_sentry() is False
        mock_init.assert_not_called()
    finally:
        settings.sentry_dsn = original


def test_init_sentry_reports_only_server_errors() -> None:
    original = settings.sentry_dsn
    try:
        settings.sentry_dsn = "https://public@example.ingest.sentry.io/1"
        with patch("src.core.sentry.sentry_sdk.init") as mock_init:
            assert init_sentry() is True
    finally:
        settings.sentry_dsn = original

    kwargs = mock_init.call_args.kwargs
    assert kwargs["dsn"] == "https://public@example.ingest.sentry.io/1"
    assert kwargs["send_default_pii"] is False
    assert len(kwargs["integrations"]) == 2
