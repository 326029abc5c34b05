"""Tests for snapshot loading and validation."""

import json
import tempfile
import unittest
from pathlib import Path

from dataprivacy.exceptions import ConfigurationError, SnapshotValidationError
from dataprivacy.validation import (
    ValidationResult,
    load_document,
    validate_snapshot_data,
    validate_snapshot_file,
)

MINIMAL_SNAPSHOT = {"plugin_types": {"mod": {"name": "Activity modules", "plugins": {"forum": {"name": "Forum"}}}}}


class TestValidationResult(unittest.TestCase):
    """Tests for ValidationResult dataclass."""

    def test_success_result(self):
        result = ValidationResult.success()
        self.assertTrue(result.valid)
        self.assertIsNone(result.error_message)
        result.raise_for_failure()

    def test_failure_result(self):
        result = ValidationResult.failure("Test error", error_path="plugin_types.mod")
        self.assertFalse(result.valid)
        self.assertEqual(result.error_message, "Test error")
        self.assertEqual(result.error_path, "plugin_types.mod")

    def test_raise_for_failure(self):
        result = ValidationResult.failure("Test error", error_path="plugin_types.mod")
        with self.assertRaises(SnapshotValidationError) as ctx:
            result.raise_for_failure()
        self.assertEqual(ctx.exception.path, "plugin_types.mod")
        self.assertIn("Test error", str(ctx.exception))


class TestValidateSnapshotData(unittest.TestCase):
    """Tests for schema validation of snapshot documents."""

    def test_minimal_snapshot(self):
        self.assertTrue(validate_snapshot_data(MINIMAL_SNAPSHOT).valid)

    def test_plugin_types_required(self):
        result = validate_snapshot_data({"compliance": {}})
        self.assertFalse(result.valid)
        self.assertIn("plugin_types", result.error_message)

    def test_unknown_top_level_key(self):
        data = dict(MINIMAL_SNAPSHOT, extra=True)
        self.assertFalse(validate_snapshot_data(data).valid)

    def test_plugin_type_needs_name(self):
        result = validate_snapshot_data({"plugin_types": {"mod": {"plugins": {}}}})
        self.assertFalse(result.valid)
        self.assertEqual(result.error_path, "plugin_types.mod")

    def test_declaration_needs_summary(self):
        data = dict(
            MINIMAL_SNAPSHOT,
            compliance={
                "mod_forum": {"compliant": True, "metadata": [{"name": "forum_posts", "kind": "database_table"}]},
            },
        )
        result = validate_snapshot_data(data)
        self.assertFalse(result.valid)
        self.assertEqual(result.error_path, "compliance.mod_forum.metadata.0")

    def test_core_plugin_type_reserved(self):
        data = {"plugin_types": {"core": {"name": "Core plugins", "plugins": {"files": {"name": "Files"}}}}}
        result = validate_snapshot_data(data)
        self.assertFalse(result.valid)
        self.assertEqual(result.error_path, "plugin_types")

    def test_core_subsystem_path_may_be_null(self):
        data = dict(MINIMAL_SNAPSHOT, core_subsystems={"files": "/lib/files", "grades": None})
        self.assertTrue(validate_snapshot_data(data).valid)

    def test_strings_must_be_strings(self):
        data = dict(MINIMAL_SNAPSHOT, strings={"mod_forum": {"privacy:metadata": 1}})
        self.assertFalse(validate_snapshot_data(data).valid)


class TestLoadDocument(unittest.TestCase):
    """Tests for JSON/YAML document loading."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.dir = Path(self.temp_dir.name)

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_json(self):
        path = self.dir / "catalog.json"
        path.write_text(json.dumps(MINIMAL_SNAPSHOT))
        self.assertEqual(load_document(path), MINIMAL_SNAPSHOT)

    def test_yaml(self):
        path = self.dir / "catalog.yaml"
        path.write_text("plugin_types:\n  mod:\n    name: Activity modules\n")
        self.assertEqual(load_document(path), {"plugin_types": {"mod": {"name": "Activity modules"}}})

    def test_missing_file(self):
        with self.assertRaises(ConfigurationError):
            load_document(self.dir / "missing.json")

    def test_invalid_yaml(self):
        path = self.dir / "catalog.yml"
        path.write_text("plugin_types: [unclosed\n")
        with self.assertRaises(SnapshotValidationError):
            load_document(path)

    def test_non_object_root(self):
        path = self.dir / "catalog.json"
        path.write_text("[1, 2, 3]")
        with self.assertRaises(SnapshotValidationError):
            load_document(path)


class TestValidateSnapshotFile(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.dir = Path(self.temp_dir.name)

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_valid_file(self):
        path = self.dir / "catalog.json"
        path.write_text(json.dumps(MINIMAL_SNAPSHOT))
        self.assertTrue(validate_snapshot_file(path).valid)

    def test_missing_file_is_failure(self):
        result = validate_snapshot_file(self.dir / "missing.json")
        self.assertFalse(result.valid)
        self.assertIn("File not found", result.error_message)

    def test_unparsable_file_is_failure(self):
        path = self.dir / "catalog.json"
        path.write_text("{")
        self.assertFalse(validate_snapshot_file(path).valid)


if __name__ == "__main__":
    unittest.main()
