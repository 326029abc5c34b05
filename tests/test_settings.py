"""Tests for data request settings loaded from the environment."""

import os
import unittest
from unittest.mock import patch

from dataprivacy._data_requests import DataRequestSettings
from dataprivacy.exceptions import ConfigurationError


class TestDataRequestSettings(unittest.TestCase):
    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self):
        settings = DataRequestSettings.from_env()
        self.assertEqual(settings.dpo_roles, [])
        self.assertTrue(settings.contact_dpo)
        self.assertTrue(settings.dpo_fallback_to_admin)

    @patch.dict(
        os.environ,
        {
            "DATAPRIVACY_DPO_ROLES": "1, 9,,4",
            "DATAPRIVACY_CONTACT_DPO": "false",
            "DATAPRIVACY_DPO_FALLBACK_TO_ADMIN": "no",
        },
        clear=True,
    )
    def test_from_env(self):
        settings = DataRequestSettings.from_env()
        self.assertEqual(settings.dpo_roles, [1, 9, 4])
        self.assertFalse(settings.contact_dpo)
        self.assertFalse(settings.dpo_fallback_to_admin)

    @patch.dict(os.environ, {"DATAPRIVACY_CONTACT_DPO": "On"}, clear=True)
    def test_boolean_values_case_insensitive(self):
        self.assertTrue(DataRequestSettings.from_env().contact_dpo)

    @patch.dict(os.environ, {"DATAPRIVACY_DPO_ROLES": "1,manager"}, clear=True)
    def test_invalid_role_id(self):
        with self.assertRaises(ConfigurationError) as ctx:
            DataRequestSettings.from_env()
        self.assertIn("manager", str(ctx.exception))

    def test_parse_role_ids_empty(self):
        self.assertEqual(DataRequestSettings.parse_role_ids(None), [])
        self.assertEqual(DataRequestSettings.parse_role_ids(""), [])


if __name__ == "__main__":
    unittest.main()
