"""Pytest configuration and shared fixtures for all tests."""

import copy

import pytest

SAMPLE_SNAPSHOT = {
    "core_type_name": "Core",
    "plugin_types": {
        "mod": {
            "name": "Activity modules",
            "plugins": {
                "forum": {"name": "Forum", "standard": True, "version": 2024100700},
            },
        },
        "block": {
            "name": "Blocks",
            "plugins": {
                "customblock": {"name": "Custom block", "standard": False},
            },
        },
    },
    "core_subsystems": {
        "files": "/lib/files",
        "grades": None,
    },
    "compliance": {
        "mod_forum": {
            "compliant": True,
            "metadata": [
                {
                    "name": "forum_posts",
                    "kind": "database_table",
                    "fields": {
                        "userid": "privacy:metadata:forum_posts:userid",
                        "message": "privacy:metadata:forum_posts:message",
                    },
                    "summary": "privacy:metadata:forum_posts",
                },
            ],
        },
        "core_files": {
            "compliant": True,
            "null_provider_reason": "privacy:metadata",
        },
    },
    "strings": {
        "mod_forum": {
            "privacy:metadata:forum_posts": "Information about the user's forum posts.",
            "privacy:metadata:forum_posts:userid": "The ID of the author of the post.",
            "privacy:metadata:forum_posts:message": "The message of the post.",
        },
        "core_files": {
            "privacy:metadata": "The Files subsystem does not store any personal data.",
        },
    },
}


@pytest.fixture(autouse=True)
def disable_sentry_for_tests(monkeypatch):
    """Disable Sentry telemetry for all tests.

    Tests that specifically need to test Sentry functionality (like
    test_sentry_filtering.py) override this by setting TELEMETRY=true.
    """
    monkeypatch.setenv("TELEMETRY", "false")


@pytest.fixture
def snapshot_data():
    """A snapshot with two plugin types and one core subsystem with a path.

    mod_forum declares metadata, block_customblock is a non-compliant
    contributed plugin and core_files is a null provider.
    """
    return copy.deepcopy(SAMPLE_SNAPSHOT)


@pytest.fixture
def snapshot_file(tmp_path, snapshot_data):
    """The sample snapshot written as JSON."""
    import json

    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(snapshot_data))
    return path


@pytest.fixture
def yaml_snapshot_file(tmp_path, snapshot_data):
    """The sample snapshot written as YAML."""
    import yaml

    path = tmp_path / "catalog.yaml"
    path.write_text(yaml.safe_dump(snapshot_data))
    return path
