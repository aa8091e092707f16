"""AccessService — policy decisions for script and agent callers.

Items are plain dicts as emitted by the platform CLIs: the display name
under ``"name"`` or ``"title"``, the stable identifier under ``"id"``.
"""

from __future__ import annotations

from typing import Any

from pimctl.config.logging import get_logger
from pimctl.errors import AccessDenied, PolicyError
from pimctl.policy.engine import FILTERABLE_DOMAINS, AccessPolicy, Domain
from pimctl.policy.targets import find_item
from pimctl.services.result import ServiceResult

logger = get_logger(__name__)

Item = dict[str, Any]

def item_name(item: Item) -> str:
    return str(item.get("name") or item.get("title") or "")

def item_id(item: Item) -> str | None:
    value = item.get("id")
    return str(value) if value is not None else None

class AccessService:
    """Wraps one :class:`AccessPolicy` for the duration of an invocation."""

    def __init__(self, policy: AccessPolicy) -> None:
        self._policy = policy

    def domains(self) -> ServiceResult:
        """Enabled flag and filter mode of every domain."""
        data: dict[str, Any] = {}
        for domain in Domain:
            entry: dict[str, Any] = {"enabled": self._policy.is_domain_enabled(domain)}
            if domain in FILTERABLE_DOMAINS:
                section = self._policy.filter_config(domain)
                entry["mode"] = section.mode.value
                entry["items"] = list(section.items)
            data[domain.value] = entry
        return ServiceResult(ok=True, op="access_domains", data=data)

    def check(self, domain: Domain, name: str, id: str | None = None) -> ServiceResult:
        """Allow/deny one named item. A denial is a failed result."""
        try:
            self._policy.require_domain(domain)
            if not self._policy.is_allowed(domain, name, id):
                raise AccessDenied(domain.value, name)
        except PolicyError as exc:
            logger.info("access denied", domain=domain.value, name=name, code=exc.code)
            return ServiceResult.failure("access_check", exc, domain=domain.value, name=name)
        return ServiceResult(
            ok=True,
            op="access_check",
            data={"domain": domain.value, "name": name, "id": id, "allowed": True},
        )

    def filter(self, domain: Domain, items: list[Item]) -> ServiceResult:
        """Keep only the items the policy allows."""
        try:
            self._policy.require_domain(domain)
        except PolicyError as exc:
            return ServiceResult.failure("access_filter", exc, domain=domain.value)
        allowed = list(self._policy.filter(domain, items, name_of=item_name, id_of=item_id))
        return ServiceResult(
            ok=True,
            op="access_filter",
            data={
                "domain": domain.value,
                "mode": self._policy.filter_config(domain).mode.value,
                "items": allowed,
                "count": len(allowed),
                "filtered_out": len(items) - len(allowed),
            },
        )

    def target(
        self,
        domain: Domain,
        items: list[Item],
        *,
        explicit: str | None = None,
        platform_default: str | None = None,
    ) -> ServiceResult:
        """Resolve where a new item in *domain* would be created."""
        configured = self._policy.default_for(domain)
        if explicit:
            source = "explicit"
        elif configured:
            source = "configured_default"
        else:
            source = "platform_default"

        fallback = None
        if platform_default:
            fallback = find_item(platform_default, items, item_name, item_id)
        try:
            target = self._policy.resolve_target(
                domain,
                explicit,
                items,
                name_of=item_name,
                id_of=item_id,
                platform_default=fallback,
            )
        except PolicyError as exc:
            return ServiceResult.failure("access_target", exc, domain=domain.value, source=source)
        return ServiceResult(
            ok=True,
            op="access_target",
            data={"domain": domain.value, "source": source, "item": target},
        )

    def write_check(self, domain: Domain, name: str | None) -> ServiceResult:
        """Pre-flight for a mutation against container *name*."""
        try:
            self._policy.validate_for_write(domain, name)
        except PolicyError as exc:
            return ServiceResult.failure("access_write_check", exc, domain=domain.value, name=name)
        return ServiceResult(
            ok=True,
            op="access_write_check",
            data={"domain": domain.value, "name": name, "allowed": True},
        )
