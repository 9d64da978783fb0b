"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, dtutil.toml only contains
overrides. An empty file (or no file) reproduces the library defaults.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, field_validator

from dtutil.domain.units import Unit


class FormatConfig(BaseModel):
    """[format] section."""

    model_config = {"frozen": True}

    # None keeps the library default, MM/dd/yyyy HH:mm.
    pattern: str | None = None


class ParseConfig(BaseModel):
    """[parse] section.

    ``pattern`` is used by ``dtutil parse`` and for reading the input
    values of ``dtutil format`` and ``dtutil diff``. None accepts the
    two ISO layouts.
    """

    model_config = {"frozen": True}

    pattern: str | None = None


class DiffConfig(BaseModel):
    """[diff] section."""

    model_config = {"frozen": True}

    unit: Unit = Unit.DAYS

    @field_validator("unit", mode="before")
    @classmethod
    def _unit_from_name(cls, value: Any) -> Any:
        if isinstance(value, str):
            return Unit.from_name(value)
        return value

