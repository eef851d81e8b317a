"""Tests for environment variable eligibility"""

import os
from unittest.mock import patch

import pytest

from json_env_overrides.environment import is_eligible, normalize_prefix, snapshot_environment


class TestNormalizePrefix:
    """Test root prefix normalization"""

    def test_appends_separator(self):
        assert normalize_prefix("MyApp") == "MyApp__"

    def test_keeps_existing_separator(self):
        assert normalize_prefix("MyApp__") == "MyApp__"

    def test_nested_root(self):
        assert normalize_prefix("MyApp__Section") == "MyApp__Section__"

    @pytest.mark.parametrize("prefix", ["", "   ", "\t"])
    def test_blank_prefix_is_rejected(self, prefix):
        with pytest.raises(ValueError, match="root_prefix"):
            normalize_prefix(prefix)


class TestIsEligible:
    """Test the name and value checks"""

    @pytest.mark.parametrize(
        "value",
        ['["a"]', '{"a": 1}', '   ["a"]', '\n\t{"a": 1}', "{invalid", "["],
    )
    def test_json_shaped_values_are_eligible(self, value):
        assert is_eligible("MyApp__Teams", value, "MyApp__")

    @pytest.mark.parametrize("value", ["hello", "1", "true", '"quoted"', "", "   ", None])
    def test_other_values_are_not_eligible(self, value):
        assert not is_eligible("MyApp__Teams", value, "MyApp__")

    def test_prefix_match_ignores_case(self):
        assert is_eligible("MYAPP__Teams", '["a"]', "MyApp__")
        assert is_eligible("myapp__teams", '["a"]', "MyApp__")

    @pytest.mark.parametrize("name", ["Other__Teams", "MyAppTeams", "MyApp_Teams", "XMyApp__Teams", ""])
    def test_names_without_prefix_are_not_eligible(self, name):
        assert not is_eligible(name, '["a"]', "MyApp__")

    def test_none_name_is_not_eligible(self):
        assert not is_eligible(None, '["a"]', "MyApp__")


class TestSnapshotEnvironment:
    """Test environment snapshots"""

    def test_defaults_to_process_environment(self):
        with patch.dict(os.environ, {"MyApp__Snapshot": "[1]"}):
            snapshot = snapshot_environment()
        assert snapshot["MyApp__Snapshot"] == "[1]"

    def test_snapshot_is_a_copy(self):
        environ = {"A": "1"}
        snapshot = snapshot_environment(environ)
        environ["B"] = "2"
        assert "B" not in snapshot
