"""Test Sentry error filtering for user vs system errors."""

import os
import unittest
from unittest.mock import patch

from dataprivacy.cli.main import before_send, initialize_sentry
from dataprivacy.exceptions import (
    CollaboratorUnavailableError,
    ConfigurationError,
    InvalidTranslationError,
    MissingTranslationError,
    SnapshotValidationError,
)


def make_hint(exc):
    return {"exc_info": (type(exc), exc, None)}


class TestSentryFiltering(unittest.TestCase):
    def test_filters_configuration_errors(self):
        event = {"exception": {"values": [{"type": "ConfigurationError"}]}}
        self.assertIsNone(before_send(event, make_hint(ConfigurationError("bad config"))))

    def test_filters_snapshot_validation_errors(self):
        event = {"exception": {"values": [{"type": "SnapshotValidationError"}]}}
        self.assertIsNone(before_send(event, make_hint(SnapshotValidationError("bad snapshot"))))

    def test_filters_missing_translations(self):
        event = {"exception": {"values": [{"type": "MissingTranslationError"}]}}
        self.assertIsNone(before_send(event, make_hint(MissingTranslationError("privacy:metadata", "mod_forum"))))

    def test_filters_invalid_translations(self):
        event = {"exception": {"values": [{"type": "InvalidTranslationError"}]}}
        self.assertIsNone(before_send(event, make_hint(InvalidTranslationError("posts", "mod_forum", "bad"))))

    def test_allows_collaborator_errors(self):
        """Collaborator failures are tool or platform problems and are reported."""
        event = {"exception": {"values": [{"type": "CollaboratorUnavailableError"}]}}
        result = before_send(event, make_hint(CollaboratorUnavailableError("catalog", "db down")))
        self.assertEqual(result, event)

    def test_allows_events_without_exception(self):
        event = {"message": "hello"}
        self.assertEqual(before_send(event, {}), event)


class TestInitializeSentry(unittest.TestCase):
    @patch("dataprivacy.cli.main.sentry_sdk.init")
    @patch.dict(os.environ, {"TELEMETRY": "false", "SENTRY_DSN": "https://key@sentry.example.com/1"})
    def test_disabled_by_telemetry_flag(self, mock_init):
        initialize_sentry()
        mock_init.assert_not_called()

    @patch("dataprivacy.cli.main.sentry_sdk.init")
    @patch.dict(os.environ, {"TELEMETRY": "true"})
    def test_disabled_without_dsn(self, mock_init):
        os.environ.pop("SENTRY_DSN", None)
        initialize_sentry()
        mock_init.assert_not_called()

    @patch("dataprivacy.cli.main.sentry_sdk.init")
    @patch.dict(os.environ, {"TELEMETRY": "true", "SENTRY_DSN": "https://key@sentry.example.com/1"})
    def test_enabled(self, mock_init):
        initialize_sentry()

        mock_init.assert_called_once()
        kwargs = mock_init.call_args[1]
        self.assertEqual(kwargs["dsn"], "https://key@sentry.example.com/1")
        self.assertIs(kwargs["before_send"], before_send)


if __name__ == "__main__":
    unittest.main()
