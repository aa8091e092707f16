"""ConfigService — inspect and set up config.json and profiles."""

from __future__ import annotations

from pathlib import Path

from pimctl.config import loader, writer
from pimctl.config.models import FilterMode, PimConfiguration, ProfileOverride
from pimctl.errors import InvalidProfileName, MalformedConfig, PimError, ProfileNotFound
from pimctl.services.result import ServiceResult


class ConfigService:
    """Operations on the files under one config root."""

    def __init__(self, root: Path) -> None:
        self._root = root

    def show(self, profile: str | None = None) -> ServiceResult:
        """Resolved configuration (base + profile) and the files it came from."""
        try:
            loaded = loader.load_with_sources(profile, self._root)
        except PimError as exc:
            return ServiceResult.failure("config_show", exc, profile=profile)
        return ServiceResult(
            ok=True,
            op="config_show",
            data={
                "config_path": str(loaded.config_path),
                "profiles_dir": str(loaded.profiles_dir),
                "active_profile": loaded.profile,
                "config": loaded.config.model_dump(mode="json"),
            },
        )

    def init(self, *, force: bool = False) -> ServiceResult:
        """Write an all-access ``config.json`` unless one already exists."""
        path = loader.base_config_path(self._root)
        data = {"config_path": str(path), "profiles_dir": str(loader.profiles_dir(self._root))}
        if path.exists() and not force:
            return ServiceResult(
                ok=True,
                op="config_init",
                data={**data, "created": False},
                warnings=[f"{path} already exists; use --force to overwrite"],
            )
        writer.write_config(PimConfiguration(), self._root)
        loader.profiles_dir(self._root).mkdir(parents=True, exist_ok=True)
        return ServiceResult(ok=True, op="config_init", data={**data, "created": True})

    def list_profiles(self) -> ServiceResult:
        names = loader.list_profiles(self._root)
        return ServiceResult(
            ok=True,
            op="profile_list",
            data={
                "profiles_dir": str(loader.profiles_dir(self._root)),
                "profiles": names,
                "count": len(names),
            },
        )

    def show_profile(self, name: str) -> ServiceResult:
        """The raw override stored for *name* (not merged with the base)."""
        try:
            loader.validate_profile_name(name)
            override = loader.load_profile(name, self._root)
            if override is None:
                raise ProfileNotFound(name, loader.profile_path(name, self._root))
        except PimError as exc:
            return ServiceResult.failure("profile_show", exc, profile=name)
        return ServiceResult(
            ok=True,
            op="profile_show",
            data={
                "profile": name,
                "path": str(loader.profile_path(name, self._root)),
                "override": override.model_dump(mode="json", exclude_none=True),
            },
        )

    def write_profile(self, name: str, raw: str, *, source: str = "<stdin>") -> ServiceResult:
        """Validate a JSON override and write it as profile *name*."""
        try:
            loader.validate_profile_name(name)
            try:
                override = ProfileOverride.model_validate_json(raw)
            except ValueError as exc:
                raise MalformedConfig(Path(source), str(exc).splitlines()[0]) from exc
            path = writer.write_profile(override, name, self._root)
        except (InvalidProfileName, MalformedConfig) as exc:
            return ServiceResult.failure("profile_write", exc, profile=name)

        warnings: list[str] = []
        for domain in ("calendars", "reminders", "contacts"):
            section = getattr(override, domain)
            if section is not None and section.mode is FilterMode.ALLOWLIST and not section.items:
                warnings.append(f"{domain}: empty allowlist blocks every item")
        return ServiceResult(
            ok=True,
            op="profile_write",
            data={"profile": name, "path": str(path)},
            warnings=warnings,
        )
