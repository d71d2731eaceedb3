"""Integration option declarations."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class OptionType(StrEnum):
    BOOLEAN = "boolean"
    STRING = "string"


class OptionSpec(BaseModel):
    """One row of the option table: key, type, default and help text."""

    model_config = ConfigDict(frozen=True)

    key: str
    type: OptionType = OptionType.BOOLEAN
    default: bool | str
    doc: str


class IntegrationOptions(BaseModel):
    """The three integration gates, resolved once per run.

    Gates below a closed gate are never read and stay ``False``.
    """

    model_config = ConfigDict(frozen=True)

    integration_enabled: bool = False
    folders_managed: bool = False
    package_sets_included: bool = False
