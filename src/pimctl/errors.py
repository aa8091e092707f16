"""Exception taxonomy for the access-policy engine.

Two families with different propagation rules:

- :class:`ConfigError`: loader failures. Fatal for the invocation; the CLI
  boundary turns them into exit status 1. The library never exits itself.
- :class:`PolicyError`: allow/deny decisions. Ordinary errors that a domain
  command formats for its own caller, carrying a remediation ``hint``.

Every error exposes a stable ``code`` used as ``ServiceError.code``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

CONFIGURE_HINT = "Edit the apple-pim config.json or the active profile to update access."


class PimError(Exception):
    """Base class for all pimctl errors."""

    code = "PIM_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_detail(self) -> dict[str, Any]:
        """Structured context for ``ServiceError.detail``."""
        return {}


# --- Loader failures (fatal) ---


class ConfigError(PimError):
    """Raised when the requested configuration cannot be honoured."""

    code = "CONFIG_ERROR"


class InvalidProfileName(ConfigError):
    """Profile name is unsafe to use as a filename."""

    code = "INVALID_PROFILE_NAME"

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Invalid profile name {name!r}: {reason}")
        self.name = name
        self.reason = reason

    def to_detail(self) -> dict[str, Any]:
        return {"profile": self.name, "reason": self.reason}


class ProfileNotFound(ConfigError):
    """An explicitly requested profile has no file on disk."""

    code = "PROFILE_NOT_FOUND"

    def __init__(self, name: str, path: Path) -> None:
        super().__init__(
            f"Profile {name!r} not found at {path}. Refusing to fall back to base config."
        )
        self.name = name
        self.path = path

    def to_detail(self) -> dict[str, Any]:
        return {"profile": self.name, "path": str(self.path)}


class MalformedConfig(ConfigError):
    """A config or profile file exists but cannot be decoded."""

    code = "MALFORMED_CONFIG"

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Malformed config at {path}: {reason}")
        self.path = path
        self.reason = reason

    def to_detail(self) -> dict[str, Any]:
        return {"path": str(self.path), "reason": self.reason}


# --- Policy decisions (returned to the caller) ---


class PolicyError(PimError):
    """A policy decision that blocks the requested operation."""

    code = "POLICY_ERROR"

    def __init__(self, message: str, *, domain: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.domain = domain
        self.hint = hint

    def to_detail(self) -> dict[str, Any]:
        detail: dict[str, Any] = {"domain": self.domain}
        if self.hint:
            detail["hint"] = self.hint
        return detail


class DomainDisabled(PolicyError):
    """The whole domain is switched off."""

    code = "DOMAIN_DISABLED"

    def __init__(self, domain: str) -> None:
        super().__init__(
            f"The {domain} domain is disabled in your configuration.",
            domain=domain,
            hint=f"Set \"enabled\": true for {domain} in config.json or the active profile.",
        )


class AccessDenied(PolicyError):
    """The named item is filtered out by the active policy."""

    code = "ACCESS_DENIED"

    def __init__(self, domain: str, name: str) -> None:
        super().__init__(
            f"{_item_label(domain)} {name!r} is not in your allowed list.",
            domain=domain,
            hint=CONFIGURE_HINT,
        )
        self.name = name

    def to_detail(self) -> dict[str, Any]:
        return {**super().to_detail(), "name": self.name}


class ItemNotFound(PolicyError):
    """No item with the given name or identifier exists at all."""

    code = "NOT_FOUND"

    def __init__(self, domain: str, name: str | None = None) -> None:
        label = _item_label(domain)
        if name is None:
            message = f"No default {label.lower()} available."
        else:
            message = f"{label} not found: {name}"
        super().__init__(message, domain=domain)
        self.name = name

    def to_detail(self) -> dict[str, Any]:
        detail = super().to_detail()
        if self.name is not None:
            detail["name"] = self.name
        return detail


_ITEM_LABELS = {
    "calendars": "Calendar",
    "reminders": "Reminder list",
    "contacts": "Contact group",
}


def _item_label(domain: str) -> str:
    return _ITEM_LABELS.get(domain, "Item")
