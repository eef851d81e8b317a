"""Tests for building and adding JSON environment overrides"""

import json
import logging
import os
from unittest.mock import patch

import pytest

from json_env_overrides import (
    ConfigurationBuilder,
    ConfigurationLoadError,
    InvalidJsonVariableError,
    add_json_env_overrides,
    build_json_env_overrides,
)
from json_env_overrides.configuration import MemoryConfigurationSource

ROOT_PREFIX = "MyApp"


class TestBuildJsonEnvOverrides:
    """Test expansion of eligible environment variables"""

    def test_expands_json_array_into_indexed_keys(self, read_test_json):
        overrides = build_json_env_overrides(
            ROOT_PREFIX,
            environ={"MyApp__Teams": read_test_json("array-teams.json")},
        )
        assert overrides.to_dict() == {
            "MyApp:Teams:0": "a",
            "MyApp:Teams:1": "b",
            "MyApp:Teams:2": "c",
        }

    def test_expands_nested_object_and_array(self, read_test_json):
        overrides = build_json_env_overrides(
            ROOT_PREFIX,
            environ={"MyApp__Override": read_test_json("nested-object-list.json")},
        )
        assert overrides["MyApp:Override:Nested:List:0:Name"] == "x"
        assert overrides["MyApp:Override:Nested:List:0:Value"] == "1"
        assert overrides["MyApp:Override:Nested:List:1:Name"] == "y"
        assert overrides["MyApp:Override:Nested:List:1:Value"] == "2"

    def test_number_text_is_preserved(self):
        overrides = build_json_env_overrides(ROOT_PREFIX, environ={"MyApp__Price": '{"Amount": 1.50}'})
        assert overrides["MyApp:Price:Amount"] == "1.50"

    def test_non_json_values_are_ignored(self):
        overrides = build_json_env_overrides(
            ROOT_PREFIX,
            environ={"MyApp__Plain": "hello", "MyApp__Empty": "", "MyApp__Blank": "   "},
        )
        assert len(overrides) == 0

    def test_other_prefixes_are_ignored(self):
        overrides = build_json_env_overrides(
            ROOT_PREFIX,
            environ={"Other__Teams": '["a"]', "MyAppTeams": '["a"]'},
        )
        assert len(overrides) == 0

    def test_prefix_with_separator_is_accepted(self):
        overrides = build_json_env_overrides("MyApp__", environ={"MyApp__Teams": '["a"]'})
        assert overrides.to_dict() == {"MyApp:Teams:0": "a"}

    def test_variable_name_spelling_is_kept(self):
        overrides = build_json_env_overrides(ROOT_PREFIX, environ={"MYAPP__teams": '["a"]'})
        assert overrides.to_dict() == {"MYAPP:teams:0": "a"}
        assert overrides["MyApp:Teams:0"] == "a"

    def test_nested_root_prefix(self):
        overrides = build_json_env_overrides(
            "MyApp__Section",
            environ={"MyApp__Section__List": '["a"]', "MyApp__Other": '["b"]'},
        )
        assert overrides.to_dict() == {"MyApp:Section:List:0": "a"}

    def test_blank_prefix_is_rejected(self):
        with pytest.raises(ValueError):
            build_json_env_overrides("  ", environ={})

    def test_strict_mode_names_the_variable(self):
        with pytest.raises(InvalidJsonVariableError) as exc_info:
            build_json_env_overrides(ROOT_PREFIX, environ={"MyApp__Bad": "{invalid"})

        error = exc_info.value
        assert "MyApp__Bad" in str(error)
        assert error.variable == "MyApp__Bad"
        assert isinstance(error, ConfigurationLoadError)
        assert isinstance(error.__cause__, json.JSONDecodeError)
        assert error.original_error is error.__cause__
        assert error.error_code == "JEO_2001"

    def test_strict_mode_fails_even_when_other_variables_are_valid(self, read_test_json):
        with pytest.raises(ConfigurationLoadError, match="MyApp__Broken"):
            build_json_env_overrides(
                ROOT_PREFIX,
                environ={
                    "MyApp__Broken": read_test_json("invalid.json"),
                    "MyApp__Teams": read_test_json("array-teams.json"),
                },
            )

    def test_strict_mode_rejects_excessive_nesting(self):
        deep = "[" * 100000 + "]" * 100000
        with pytest.raises(InvalidJsonVariableError) as exc_info:
            build_json_env_overrides(ROOT_PREFIX, environ={"MyApp__Deep": deep})

        assert exc_info.value.variable == "MyApp__Deep"
        assert isinstance(exc_info.value.__cause__, RecursionError)

    def test_lenient_mode_skips_excessive_nesting(self):
        overrides = build_json_env_overrides(
            ROOT_PREFIX,
            continue_on_error=True,
            environ={"MyApp__Deep": "[" * 100000 + "]" * 100000, "MyApp__Good": '["x"]'},
        )
        assert overrides.to_dict() == {"MyApp:Good:0": "x"}

    def test_moderate_nesting_expands(self):
        overrides = build_json_env_overrides(
            ROOT_PREFIX,
            environ={"MyApp__Deep": "[" * 50 + '"leaf"' + "]" * 50},
        )
        assert overrides.to_dict() == {"MyApp:Deep" + ":0" * 50: "leaf"}

    def test_lenient_mode_skips_only_the_bad_variable(self):
        overrides = build_json_env_overrides(
            ROOT_PREFIX,
            continue_on_error=True,
            environ={"MyApp__Bad": "{invalid", "MyApp__Good": '["x"]'},
        )
        assert overrides.to_dict() == {"MyApp:Good:0": "x"}
        assert not any(str(path).startswith("MyApp:Bad") for path in overrides)

    def test_lenient_mode_logs_the_variable_but_not_the_value(self, caplog):
        with caplog.at_level(logging.WARNING, logger="json_env_overrides"):
            build_json_env_overrides(
                ROOT_PREFIX,
                continue_on_error=True,
                environ={"MyApp__Secret": '{"password": "hunter2"'},
            )
        assert "MyApp__Secret" in caplog.text
        assert "hunter2" not in caplog.text

    def test_overlapping_variables_resolve_deterministically(self):
        environ_orders = [
            {"MyApp__A": '{"B": ["outer"]}', "MyApp__A__B": '["inner"]'},
            {"MyApp__A__B": '["inner"]', "MyApp__A": '{"B": ["outer"]}'},
        ]
        results = [
            build_json_env_overrides(ROOT_PREFIX, environ=environ).to_dict()
            for environ in environ_orders
        ]
        assert results[0] == results[1]
        assert results[0]["MyApp:A:B:0"] == "inner"

    def test_idempotent(self, read_test_json):
        environ = {
            "MyApp__Teams": read_test_json("array-teams.json"),
            "MyApp__Override": read_test_json("nested-object-list.json"),
        }
        first = build_json_env_overrides(ROOT_PREFIX, environ=environ)
        second = build_json_env_overrides(ROOT_PREFIX, environ=environ)
        assert first == second
        assert first is not second

    def test_reads_process_environment_by_default(self):
        with patch.dict(os.environ, {"JeoLoaderTest__Teams": '["a", "b"]'}):
            overrides = build_json_env_overrides("JeoLoaderTest")
        assert overrides.to_dict() == {"JeoLoaderTest:Teams:0": "a", "JeoLoaderTest:Teams:1": "b"}


class TestAddJsonEnvOverrides:
    """Test adding the overlay to a configuration builder"""

    def test_returns_the_same_builder(self):
        builder = ConfigurationBuilder()
        assert add_json_env_overrides(builder, ROOT_PREFIX, environ={}) is builder

    def test_no_source_added_when_nothing_expands(self):
        builder = ConfigurationBuilder()
        add_json_env_overrides(builder, ROOT_PREFIX, environ={"MyApp__Plain": "hello"})
        assert builder.sources == []

    def test_overlay_is_added_last(self):
        builder = ConfigurationBuilder().add_in_memory_collection({"MyApp:Teams:0": "from-memory"})
        add_json_env_overrides(builder, ROOT_PREFIX, environ={"MyApp__Teams": '["from-env"]'})

        assert len(builder.sources) == 2
        assert isinstance(builder.sources[-1], MemoryConfigurationSource)
        assert builder.build()["MyApp:Teams:0"] == "from-env"

    def test_strict_failure_leaves_builder_unchanged(self):
        builder = ConfigurationBuilder()
        with pytest.raises(ConfigurationLoadError):
            add_json_env_overrides(builder, ROOT_PREFIX, environ={"MyApp__Bad": "[oops"})
        assert builder.sources == []

    def test_lenient_mode_adds_valid_entries(self):
        builder = ConfigurationBuilder()
        add_json_env_overrides(
            builder,
            ROOT_PREFIX,
            continue_on_error=True,
            environ={"MyApp__Bad": "{invalid", "MyApp__Good": '["x"]'},
        )
        configuration = builder.build()
        assert configuration["MyApp:Good:0"] == "x"
        assert configuration["MyApp:Bad:0"] is None
        assert not configuration.get_section("MyApp:Bad").exists()
