"""Tests for JSON parsing and expansion into override entries"""

import json

import pytest

from json_env_overrides.expander import JsonNumber, expand_json_value, parse_json_document
from json_env_overrides.overrides import OverrideMap
from json_env_overrides.paths import ConfigPath


def expand(text, path="P:Key"):
    return expand_json_value(path, parse_json_document(text)).to_dict()


class TestParseJsonDocument:
    """Test strict JSON parsing"""

    def test_numbers_keep_source_text(self):
        document = parse_json_document('[1.50, 1e3, -0, 10, 2.0E-5]')
        assert document == ["1.50", "1e3", "-0", "10", "2.0E-5"]
        assert all(isinstance(item, JsonNumber) for item in document)

    def test_strings_are_not_json_numbers(self):
        document = parse_json_document('["1.50"]')
        assert not isinstance(document[0], JsonNumber)

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_standard_constants_are_rejected(self, literal):
        with pytest.raises(json.JSONDecodeError):
            parse_json_document(f"[{literal}]")

    def test_malformed_json_raises(self):
        with pytest.raises(json.JSONDecodeError):
            parse_json_document("{invalid")


class TestExpandJsonValue:
    """Test the recursive expansion rules"""

    def test_array_of_scalars_is_indexed_in_order(self):
        assert expand('["a", "b", "c"]') == {
            "P:Key:0": "a",
            "P:Key:1": "b",
            "P:Key:2": "c",
        }

    def test_nested_objects_and_arrays(self):
        result = expand(
            '{"Nested": {"List": [{"Name": "x", "Value": 1}, {"Name": "y", "Value": 2}]}}',
            "MyApp:Override",
        )
        assert result == {
            "MyApp:Override:Nested:List:0:Name": "x",
            "MyApp:Override:Nested:List:0:Value": "1",
            "MyApp:Override:Nested:List:1:Name": "y",
            "MyApp:Override:Nested:List:1:Value": "2",
        }

    def test_deep_nesting_matches_structure(self):
        assert expand('{"a": {"b": {"c": {"d": [[["deep"]]]}}}}') == {
            "P:Key:a:b:c:d:0:0:0": "deep",
        }

    def test_number_text_is_preserved(self):
        assert expand('{"Price": 1.50, "Big": 1e3, "Small": 2.0E-5}') == {
            "P:Key:Price": "1.50",
            "P:Key:Big": "1e3",
            "P:Key:Small": "2.0E-5",
        }

    def test_booleans_use_canonical_text(self):
        assert expand('{"On": true, "Off": false}') == {
            "P:Key:On": "true",
            "P:Key:Off": "false",
        }

    def test_null_is_stored_as_present_without_value(self):
        overrides = expand_json_value("P:Key", parse_json_document('{"Owner": null}'))
        assert "P:Key:Owner" in overrides
        assert overrides["P:Key:Owner"] is None
        assert "P:Key:Missing" not in overrides

    def test_strings_are_stored_verbatim(self):
        assert expand('["  spaced  ", "", "{not json}"]') == {
            "P:Key:0": "  spaced  ",
            "P:Key:1": "",
            "P:Key:2": "{not json}",
        }

    def test_empty_containers_produce_nothing(self):
        assert expand("[]") == {}
        assert expand("{}") == {}
        assert expand('{"a": [], "b": {}}') == {}

    def test_writes_into_existing_map(self):
        overrides = OverrideMap({"Existing": "1"})
        result = expand_json_value(ConfigPath.parse("P"), ["x"], overrides)
        assert result is overrides
        assert overrides.to_dict() == {"Existing": "1", "P:0": "x"}

    def test_native_python_values_fall_back_to_str(self):
        result = expand_json_value("P", {"Int": 3, "Float": 0.5, "Bool": True, "Other": object()})
        assert result.to_dict() == {"P:Int": "3", "P:Float": "0.5", "P:Bool": "true", "P:Other": None}

    def test_duplicate_members_last_one_wins(self):
        assert expand('{"A": "first", "a": "second"}') == {"P:Key:A": "second"}

    def test_idempotent(self):
        document = parse_json_document('{"Teams": ["a", "b"], "Limit": 1.50}')
        assert expand_json_value("P", document) == expand_json_value("P", document)
