"""Pydantic configuration models with code-baked defaults.

Base contract: ``config.json`` only contains overrides of the all-access
defaults baked here. A missing file is the same as ``{}``.

Profile contract: ``profiles/{name}.json`` has the same shape with every
field optional. A present section replaces the base section wholesale.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_validator

# --- Sections ---


class FilterMode(StrEnum):
    """How a domain's ``items`` list is applied."""

    ALL = "all"
    ALLOWLIST = "allowlist"
    BLOCKLIST = "blocklist"


class DomainFilterConfig(BaseModel):
    """calendars / reminders / contacts section."""

    model_config = {"frozen": True}

    enabled: bool = True
    mode: FilterMode = FilterMode.ALL
    items: list[str] = Field(default_factory=list)

    @field_validator("mode", mode="before")
    @classmethod
    def _unknown_mode_is_all(cls, value: Any) -> Any:
        if isinstance(value, FilterMode):
            return value
        if isinstance(value, str) and value in FilterMode._value2member_map_:
            return value
        return FilterMode.ALL


class DomainConfig(BaseModel):
    """mail section. Mail accounts are managed by the mail client, so no items."""

    model_config = {"frozen": True}

    enabled: bool = True


# --- Files ---


class PimConfiguration(BaseModel):
    """Root configuration loaded from ``config.json``.

    Constructed with no arguments it grants access to everything.
    """

    model_config = {"frozen": True}

    calendars: DomainFilterConfig = Field(default_factory=DomainFilterConfig)
    reminders: DomainFilterConfig = Field(default_factory=DomainFilterConfig)
    contacts: DomainFilterConfig = Field(default_factory=DomainFilterConfig)
    mail: DomainConfig = Field(default_factory=DomainConfig)
    default_calendar: str | None = None
    default_reminder_list: str | None = None


class ProfileOverride(BaseModel):
    """Profile override from ``profiles/{name}.json``. None means inherit."""

    model_config = {"frozen": True}

    calendars: DomainFilterConfig | None = None
    reminders: DomainFilterConfig | None = None
    contacts: DomainFilterConfig | None = None
    mail: DomainConfig | None = None
    default_calendar: str | None = None
    default_reminder_list: str | None = None


def merge(base: PimConfiguration, override: ProfileOverride | None) -> PimConfiguration:
    """Overlay *override* on *base*.

    Each present field replaces the base field in its entirety; there is no
    merge inside a section, so ``{"mode": "allowlist"}`` alone yields an
    empty allowlist.
    """
    if override is None:
        return base
    replaced = {
        field: value
        for field in PimConfiguration.model_fields
        if (value := getattr(override, field)) is not None
    }
    if not replaced:
        return base
    return base.model_copy(update=replaced)
