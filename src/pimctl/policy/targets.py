"""Resolve the container a new item is created in.

Precedence: explicit argument > configured default > platform default.
An explicit name and a configured default both go through the same
lookup and allow check, so a default that has fallen outside the active
profile is rejected rather than silently honoured.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

from pimctl.config.logging import get_logger
from pimctl.config.models import DomainFilterConfig
from pimctl.errors import AccessDenied, ItemNotFound
from pimctl.policy.filter import is_allowed

T = TypeVar("T")

logger = get_logger(__name__)

def find_item(
    name_or_id: str,
    available: Iterable[T],
    name_of: Callable[[T], str],
    id_of: Callable[[T], str | None] | None = None,
) -> T | None:
    """First item whose id equals *name_or_id* or whose name matches it, ignoring case."""
    wanted = name_or_id.casefold()
    for item in available:
        if id_of is not None and id_of(item) == name_or_id:
            return item
        if name_of(item).casefold() == wanted:
            return item
    return None

def find_allowed_item(
    name_or_id: str,
    available: Iterable[T],
    config: DomainFilterConfig,
    *,
    domain: str,
    name_of: Callable[[T], str],
    id_of: Callable[[T], str | None] | None = None,
) -> T:
    """Look up *name_or_id* and require the active policy to allow it.

    Raises:
        ItemNotFound: nothing with that name or identifier exists.
        AccessDenied: it exists but is filtered out.
    """
    item = find_item(name_or_id, available, name_of, id_of)
    if item is None:
        raise ItemNotFound(domain, name_or_id)
    name = name_of(item)
    if not is_allowed(name, id_of(item) if id_of else None, config=config):
        logger.info("target denied by policy", domain=domain, name=name)
        raise AccessDenied(domain, name)
    return item

def resolve_target(
    explicit: str | None,
    configured_default: str | None,
    platform_default: T | None,
    available: Iterable[T],
    config: DomainFilterConfig,
    *,
    domain: str,
    name_of: Callable[[T], str],
    id_of: Callable[[T], str | None] | None = None,
) -> T:
    """Pick the target container for a create operation.

    Raises:
        ItemNotFound: the chosen name does not exist, or no source yields a target.
        AccessDenied: the chosen name exists but the policy filters it out.
    """
    candidates = list(available)
    for source, name in (("explicit", explicit), ("configured_default", configured_default)):
        if name:
            logger.debug("resolving target", domain=domain, source=source, name=name)
            return find_allowed_item(
                name, candidates, config, domain=domain, name_of=name_of, id_of=id_of
            )
    if platform_default is not None:
        logger.debug("resolving target", domain=domain, source="platform_default")
        return platform_default
    raise ItemNotFound(domain)
