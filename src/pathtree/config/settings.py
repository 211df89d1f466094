"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with PATHTREE_ prefix
3. .env file named by PATHTREE_ENV_FILE (if set and present)
4. Field defaults

Example:
  PATHTREE_DELIMITER=/ PATHTREE_OUTPUT_FORMAT=yaml pathtree get config.yaml db/host
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import pathtree.constants as constants


def _get_env_file() -> str | None:
    """Return the .env file named by PATHTREE_ENV_FILE, if it exists."""
    if env_file := _os.environ.get("PATHTREE_ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


class Settings(_pydantic_settings.BaseSettings):
    """
    pathtree configuration settings.

    All settings can be overridden via environment variables with the
    PATHTREE_ prefix, e.g. PATHTREE_INDENT=4.
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="PATHTREE_",
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    delimiter: str = _pydantic.Field(
        default=constants.DEFAULT_DELIMITER,
        min_length=1,
        description="Path delimiter used by the CLI",
    )

    output_format: _typing.Literal["json", "yaml"] = _pydantic.Field(
        default=constants.DEFAULT_OUTPUT_FORMAT,
        description="Format for documents written to stdout",
    )

    indent: int | None = _pydantic.Field(
        default=constants.DEFAULT_JSON_INDENT,
        ge=0,
        description="JSON indentation; None writes compact output",
    )

    sort_keys: bool = _pydantic.Field(
        default=False,
        description="Sort mapping keys when writing documents",
    )

    verbose: bool = _pydantic.Field(
        default=False,
        description="Enable DEBUG logging",
    )

    @_pydantic.field_validator("output_format", mode="before")
    @classmethod
    def _lowercase_format(cls, value: _typing.Any) -> _typing.Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings from environment variables only, without loading .env file.

        Useful for test isolation and for reproducing issues without
        .env interference.
        """
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]
