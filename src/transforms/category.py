from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, StrictBool, StrictInt, StrictStr, ValidationError

from src.transforms.timezones import TimezoneEnums

DEFAULT_PARAMETER_NAME = "Tz"


class CategoryTemplateError(Exception):
    pass


class MissingParameterError(CategoryTemplateError):
    def __init__(self, param_name: str) -> None:
        super().__init__(f"Missing parameter '{param_name}'")
        self.param_name = param_name


class CategoryValidationError(CategoryTemplateError):
    pass


class CategoryParameterIn(BaseModel):
    """Field types accepted by the configuration-category service for one parameter."""

    model_config = ConfigDict(extra="allow")

    name: StrictStr
    type: StrictStr
    description: StrictStr | None = None
    displayName: StrictStr | None = None
    unit: StrictStr | None = None
    validationErrorMessage: StrictStr | None = None
    stringPattern: StrictStr | None = None
    invisible: StrictBool | None = None
    mandatory: StrictBool | None = None
    hidden: StrictBool | None = None
    instanceAlias: StrictBool | None = None
    displayOnly: StrictBool | None = None
    maxStringLength: StrictInt | None = None
    minStringLength: StrictInt | None = None
    maxValue: StrictInt | None = None
    minValue: StrictInt | None = None
    excludedValueEnums: list[Any] | None = None
    valueEnums: list[Any] | None = None
    tr098PathOverride: list[Any] | None = None
    implies: dict[str, Any] | None = None
    defaultValue: Any = None
    requires: Any = None


class CategoryIn(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: StrictStr
    description: StrictStr
    parameters: list[dict[str, Any]]
    tr098PathPrefix: StrictStr | None = None
    subInstanceIndexDropDownListName: StrictStr | None = None
    serviceType: StrictStr | None = None
    serviceValues: dict[str, Any] | None = None
    multiInstance: StrictBool | None = None
    keyParameter: dict[str, Any] | None = None
    subInstanceIndexValues: list[Any] | None = None


def _first_error(e: ValidationError) -> str:
    err = e.errors()[0]
    loc = ".".join(str(x) for x in err.get("loc") or ())
    return f"{loc}: {err.get('msg')}" if loc else str(err.get("msg"))


def _parameters(template: dict[str, Any]) -> list[Any]:
    params = template.get("parameters")
    if not isinstance(params, list):
        raise ValueError("Category template 'parameters' must be a list")
    return params


def find_parameter_index(template: dict[str, Any], name: str = DEFAULT_PARAMETER_NAME) -> int:
    """
    Index of the first parameter whose `name` equals `name`.
    Raises MissingParameterError when there is none.
    """
    for i, p in enumerate(_parameters(template)):
        if isinstance(p, dict) and p.get("name") == name:
            return i
    raise MissingParameterError(name)


def apply_timezone_enums(
    template: dict[str, Any],
    enums: TimezoneEnums,
    *,
    param_name: str = DEFAULT_PARAMETER_NAME,
) -> dict[str, Any]:
    """
    Return a copy of `template` whose `param_name` parameter carries the generated
    valueEnums/implies. Everything else is passed through untouched.
    """
    idx = find_parameter_index(template, param_name)

    # Copy-on-write: the caller's template stays as loaded
    params = list(_parameters(template))
    param = dict(params[idx])
    param["valueEnums"] = list(enums.value_enums)
    param["implies"] = dict(enums.implies)
    params[idx] = param

    out = dict(template)
    out["parameters"] = params
    return out


def validate_category(category: dict[str, Any]) -> None:
    """
    Check a category document against the field types the category service expects.

    Raises CategoryValidationError with the first problem found.
    """
    try:
        CategoryIn.model_validate(category)
    except ValidationError as e:
        raise CategoryValidationError(f"Category: {_first_error(e)}") from e

    for p in category["parameters"]:
        if not isinstance(p.get("name"), str):
            raise CategoryValidationError('Found a Parameter Definition with no "name"!')
        try:
            CategoryParameterIn.model_validate(p)
        except ValidationError as e:
            raise CategoryValidationError(f"Definition of parameter {p['name']}: {_first_error(e)}") from e
