from __future__ import annotations

import copy
import json
from pathlib import Path

import pytest

from src.transforms.category import (
    CategoryValidationError,
    MissingParameterError,
    apply_timezone_enums,
    find_parameter_index,
    validate_category,
)
from src.transforms.timezones import transform_timezones

FIXTURES = Path(__file__).resolve().parents[1] / "fixtures" / "categories"


def _load(name: str) -> dict:
    return json.loads((FIXTURES / name).read_text(encoding="utf-8"))


def _enums():
    return transform_timezones(
        [
            {"offset": 0, "text": "(UTC) Coordinated Universal Time", "value": "UTC"},
            {"offset": -300, "text": "(UTC-05:00) Eastern Time", "value": "Eastern Standard Time"},
        ]
    )


def test_find_parameter_index() -> None:
    template = _load("timezone_abstract.json")
    assert find_parameter_index(template) == 1
    assert find_parameter_index(template, "TzName") == 2


def test_find_parameter_index_is_exact_match() -> None:
    template = _load("no_tz_parameter.json")
    with pytest.raises(MissingParameterError) as exc:
        find_parameter_index(template)
    assert exc.value.param_name == "Tz"
    assert "Tz" in str(exc.value)


def test_find_parameter_index_first_match_wins() -> None:
    template = {"parameters": [{"name": "Tz", "type": "a"}, {"name": "Tz", "type": "b"}]}
    assert find_parameter_index(template) == 0


def test_find_parameter_index_requires_parameters_list() -> None:
    with pytest.raises(ValueError):
        find_parameter_index({"name": "x", "parameters": {"Tz": {}}})


def test_apply_timezone_enums_replaces_only_enums_and_implies() -> None:
    template = _load("timezone_abstract.json")
    before = copy.deepcopy(template)

    out = apply_timezone_enums(template, _enums())

    # caller's template is left as loaded
    assert template == before

    tz = out["parameters"][1]
    assert tz["valueEnums"] == [
        {"value": "Timezone_000", "displayName": "(UTC) Coordinated Universal Time"},
        {"value": "Timezone_001", "displayName": "(UTC-05:00) Eastern Time"},
    ]
    assert tz["implies"] == {
        "Timezone_000": {"TzOffset": "+00:00", "TzName": "UTC"},
        "Timezone_001": {"TzOffset": "-05:00", "TzName": "Eastern Standard Time"},
    }

    # everything else is untouched, including key order of the Tz parameter
    assert list(tz) == list(before["parameters"][1])
    for k in ("name", "displayName", "type", "mandatory"):
        assert tz[k] == before["parameters"][1][k]
    assert out["parameters"][0] == before["parameters"][0]
    assert out["parameters"][2] == before["parameters"][2]
    assert {k: v for k, v in out.items() if k != "parameters"} == {
        k: v for k, v in before.items() if k != "parameters"
    }


def test_apply_timezone_enums_adds_missing_fields() -> None:
    template = {"name": "c", "description": "d", "parameters": [{"name": "Tz", "type": "string"}]}
    out = apply_timezone_enums(template, _enums())
    assert list(out["parameters"][0]) == ["name", "type", "valueEnums", "implies"]


def test_apply_timezone_enums_custom_parameter_name() -> None:
    template = {"parameters": [{"name": "LocalZone", "type": "string"}]}
    out = apply_timezone_enums(template, _enums(), param_name="LocalZone")
    assert len(out["parameters"][0]["valueEnums"]) == 2


def test_apply_timezone_enums_missing_parameter() -> None:
    with pytest.raises(MissingParameterError):
        apply_timezone_enums(_load("no_tz_parameter.json"), _enums())


def test_validate_category_accepts_generated_category() -> None:
    out = apply_timezone_enums(_load("timezone_abstract.json"), _enums())
    validate_category(out)


def test_validate_category_requires_description() -> None:
    template = _load("timezone_abstract.json")
    del template["description"]
    with pytest.raises(CategoryValidationError) as exc:
        validate_category(template)
    assert str(exc.value).startswith("Category: description")


def test_validate_category_parameter_without_name() -> None:
    template = _load("timezone_abstract.json")
    template["parameters"].append({"type": "string"})
    with pytest.raises(CategoryValidationError) as exc:
        validate_category(template)
    assert str(exc.value) == 'Found a Parameter Definition with no "name"!'


def test_validate_category_parameter_field_types_are_strict() -> None:
    template = _load("timezone_abstract.json")
    template["parameters"][0]["hidden"] = "yes"
    with pytest.raises(CategoryValidationError) as exc:
        validate_category(template)
    assert str(exc.value).startswith("Definition of parameter Enable: hidden")


def test_validate_category_allows_unknown_fields() -> None:
    template = _load("timezone_abstract.json")
    template["parameters"][0]["vendorHint"] = {"x": 1}
    template["vendorExtension"] = True
    validate_category(template)
