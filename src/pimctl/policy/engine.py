"""AccessPolicy — the contract domain commands consume.

One instance wraps one resolved configuration for one invocation. Build it
once per invocation and pass it along; do not keep it across invocations.

Usage::

    policy = AccessPolicy.load(profile)
    policy.require_domain(Domain.CALENDARS)
    calendars = policy.filter(Domain.CALENDARS, all_calendars, name_of=..., id_of=...)
    target = policy.resolve_target(Domain.CALENDARS, args.calendar, all_calendars, ...)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar
from enum import StrEnum
from pathlib import Path

from pimctl.config.loader import load
from pimctl.config.models import DomainConfig, DomainFilterConfig, PimConfiguration
from pimctl.policy import filter as item_filter
from pimctl.policy import guard, targets

T = TypeVar("T")


class Domain(StrEnum):
    """Independently gated PIM categories. Values match config.json keys."""

    CALENDARS = "calendars"
    REMINDERS = "reminders"
    CONTACTS = "contacts"
    MAIL = "mail"


FILTERABLE_DOMAINS: tuple[Domain, ...] = (Domain.CALENDARS, Domain.REMINDERS, Domain.CONTACTS)


class AccessPolicy:
    """Access decisions over a resolved :class:`PimConfiguration`."""

    def __init__(self, config: PimConfiguration) -> None:
        self.config = config

    @classmethod
    def load(cls, profile: str | None = None, root: Path | None = None) -> AccessPolicy:
        """Resolve base + profile from disk.

        Raises the loader's ``ConfigError`` subclasses unchanged.
        """
        return cls(load(profile, root))

    # --- Domain gate ---

    def section(self, domain: Domain | str) -> DomainFilterConfig | DomainConfig:
        domain = Domain(domain)
        return getattr(self.config, domain.value)

    def is_domain_enabled(self, domain: Domain | str) -> bool:
        return self.section(domain).enabled

    def require_domain(self, domain: Domain | str) -> None:
        """Raise ``DomainDisabled`` when *domain* is switched off."""
        domain = Domain(domain)
        guard.require_domain_enabled(domain.value, self.section(domain))

    def default_for(self, domain: Domain | str) -> str | None:
        """Configured default container name for new items, if any."""
        domain = Domain(domain)
        if domain is Domain.CALENDARS:
            return self.config.default_calendar
        if domain is Domain.REMINDERS:
            return self.config.default_reminder_list
        return None

    # --- Item gate ---

    def filter_config(self, domain: Domain | str) -> DomainFilterConfig:
        domain = Domain(domain)
        if domain not in FILTERABLE_DOMAINS:
            msg = f"The {domain.value} domain has no item-level filtering"
            raise ValueError(msg)
        return getattr(self.config, domain.value)

    def is_allowed(self, domain: Domain | str, name: str, id: str | None = None) -> bool:
        return item_filter.is_allowed(name, id, config=self.filter_config(domain))

    def filter(
        self,
        domain: Domain | str,
        items: Sequence[T],
        name_of: Callable[[T], str],
        id_of: Callable[[T], str | None] | None = None,
    ) -> Sequence[T]:
        return item_filter.filter_items(items, self.filter_config(domain), name_of, id_of)

    def resolve_target(
        self,
        domain: Domain | str,
        explicit: str | None,
        available: Iterable[T],
        *,
        name_of: Callable[[T], str],
        id_of: Callable[[T], str | None] | None = None,
        platform_default: T | None = None,
    ) -> T:
        """Explicit > configured default > platform default. See :mod:`pimctl.policy.targets`."""
        domain = Domain(domain)
        self.require_domain(domain)
        return targets.resolve_target(
            explicit,
            self.default_for(domain),
            platform_default,
            available,
            self.filter_config(domain),
            domain=domain.value,
            name_of=name_of,
            id_of=id_of,
        )

    def validate_for_write(self, domain: Domain | str, name: str | None) -> None:
        """Domain gate, then item gate. Call before any mutation."""
        domain = Domain(domain)
        self.require_domain(domain)
        guard.validate_for_write(name, self.filter_config(domain), domain=domain.value)
