"""Data models for environment variables in ``environ`` string form.

These models define the shared types used across the package:
- EnvVar: A single ``NAME=VALUE`` entry, immutable and hashable
- ParseEnvVarError: Raised (or yielded) when a token is not a valid entry
- ParseErrorKind: Machine-readable reason attached to a ParseEnvVarError

EnvVar doubles as its own serialization adapter: it dumps to the
single-entry string form and validates from either that string or a
``{"name", "value"}`` mapping, so ``list[EnvVar]`` fields read and write an
OCI image config ``Env`` array directly.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_serializer,
    model_validator,
)


class ParseErrorKind(str, Enum):
    """Why a token could not be parsed into an EnvVar."""

    MISSING_DELIMITER = "missing_delimiter"
    EMPTY_NAME = "empty_name"
    INVALID_NAME = "invalid_name"


_REASONS: dict[ParseErrorKind, str] = {
    ParseErrorKind.MISSING_DELIMITER: "missing '=' delimiter",
    ParseErrorKind.EMPTY_NAME: "empty name",
    ParseErrorKind.INVALID_NAME: "name contains whitespace",
}


class ParseEnvVarError(ValueError):
    """A token that is not a well-formed ``NAME=VALUE`` entry.

    ``MISSING_DELIMITER`` is the defining failure of an ``environ`` block: a
    token with no ``=``. ``EMPTY_NAME`` additionally rejects tokens such as
    ``=val``, and ``INVALID_NAME`` is only reachable through single-entry
    parsing, since whitespace-split tokens never hold whitespace.
    """

    def __init__(self, kind: ParseErrorKind, text: str) -> None:
        self.kind = kind
        self.text = text
        super().__init__(f"Invalid environment variable: {_REASONS[kind]} ({text!r})")


def _has_whitespace(text: str) -> bool:
    return any(ch.isspace() for ch in text)


def split_env_str(text: str) -> tuple[str, str]:
    """Split one ``NAME=VALUE`` token on its first ``=``.

    Raises:
        ParseEnvVarError: If there is no ``=``, the name is empty, or the
            name contains whitespace.
    """
    name, delimiter, value = text.partition("=")
    if not delimiter:
        raise ParseEnvVarError(ParseErrorKind.MISSING_DELIMITER, text)
    if not name:
        raise ParseEnvVarError(ParseErrorKind.EMPTY_NAME, text)
    if _has_whitespace(name):
        raise ParseEnvVarError(ParseErrorKind.INVALID_NAME, text)
    return name, value


def _env_str_json_schema(schema: dict[str, Any]) -> None:
    # On the wire an EnvVar is a single NAME=VALUE string, not an object.
    schema.clear()
    schema.update(
        {
            "title": "EnvVar",
            "type": "string",
            "pattern": r"^[^=\s]+=",
            "description": "Environment variable in NAME=VALUE form",
        }
    )


class EnvVar(BaseModel):
    """A single environment variable.

    ``str(env_var)`` renders ``NAME=VALUE``; ``EnvVar.parse`` is the inverse.
    """

    model_config = ConfigDict(frozen=True, json_schema_extra=_env_str_json_schema)

    name: str = Field(
        ...,
        description="Variable name (non-empty, no '=' and no whitespace)",
    )
    value: str = Field(
        default="",
        description="Variable value (may contain '=')",
    )

    @field_validator("name")
    @classmethod
    def _check_name(cls, name: str) -> str:
        if not name:
            raise ValueError("name must not be empty")
        if "=" in name:
            raise ValueError(f"name must not contain '=': {name!r}")
        if _has_whitespace(name):
            raise ValueError(f"name must not contain whitespace: {name!r}")
        return name

    @model_validator(mode="before")
    @classmethod
    def _from_env_str(cls, data: Any) -> Any:
        if isinstance(data, str):
            name, value = split_env_str(data)
            return {"name": name, "value": value}
        return data

    @model_serializer
    def _to_env_str(self) -> str:
        return str(self)

    @classmethod
    def parse(cls, text: str) -> EnvVar:
        """Parse a single ``NAME=VALUE`` entry.

        Raises:
            ParseEnvVarError: If *text* is not a well-formed entry.
        """
        name, value = split_env_str(text)
        return cls(name=name, value=value)

    def __str__(self) -> str:
        return f"{self.name}={self.value}"
