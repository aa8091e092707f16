"""Pre-mutation checks.

INVARIANT: call these strictly before any native create/update/move/delete.
A denied target must produce zero side effects.
"""

from __future__ import annotations

from pimctl.config.models import DomainConfig, DomainFilterConfig
from pimctl.errors import AccessDenied, DomainDisabled
from pimctl.policy.filter import is_allowed


def require_domain_enabled(domain: str, section: DomainFilterConfig | DomainConfig) -> None:
    """Raise :class:`DomainDisabled` when the domain is switched off."""
    if not section.enabled:
        raise DomainDisabled(domain)


def validate_for_write(name: str | None, config: DomainFilterConfig, *, domain: str) -> None:
    """Raise :class:`AccessDenied` if writing into *name* is not allowed.

    ``None`` means the caller will use a resolved default, which
    :func:`pimctl.policy.targets.resolve_target` validates separately.
    """
    if name is None:
        return
    if not is_allowed(name, config=config):
        raise AccessDenied(domain, name)
