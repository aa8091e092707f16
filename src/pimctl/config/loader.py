"""Config file discovery, loading and profile resolution.

Layout (root overridable via ``APPLE_PIM_CONFIG_DIR``)::

    ~/.config/apple-pim/config.json            base configuration
    ~/.config/apple-pim/profiles/{name}.json   named profile overrides

Profile selection: explicit argument > ``APPLE_PIM_PROFILE`` > none.

Failure policy is asymmetric:

- Base config missing or malformed: all-access defaults (malformed logs a
  warning). No restrictions configured yet is a normal state.
- Requested profile invalid, missing or malformed: raise. Ignoring it would
  run with broader access than the caller asked for.

Nothing here is cached. Every call re-reads disk so edits apply
immediately. Writers must replace files atomically (see
:mod:`pimctl.config.writer`); readers do not lock.
"""

from __future__ import annotations

import os
from pathlib import Path, PurePath

from pydantic import BaseModel

from pimctl.config.logging import get_logger
from pimctl.config.models import PimConfiguration, ProfileOverride, merge
from pimctl.config.settings import PROFILE_ENV_VAR, resolve_config_dir
from pimctl.errors import InvalidProfileName, MalformedConfig, ProfileNotFound

logger = get_logger(__name__)

CONFIG_FILENAME = "config.json"
PROFILES_DIRNAME = "profiles"
PROFILE_SUFFIX = ".json"


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


def config_dir(root: Path | None = None) -> Path:
    """Return the config root: *root*, else the env override, else the default."""
    return resolve_config_dir(root)


def base_config_path(root: Path | None = None) -> Path:
    return config_dir(root) / CONFIG_FILENAME


def profiles_dir(root: Path | None = None) -> Path:
    return config_dir(root) / PROFILES_DIRNAME


def profile_path(name: str, root: Path | None = None) -> Path:
    """Path of the profile file for *name*.

    Only the final path component of *name* is used, as a second line of
    defense behind :func:`validate_profile_name`.
    """
    safe_name = PurePath(name.replace("\\", "/")).name
    return profiles_dir(root) / f"{safe_name}{PROFILE_SUFFIX}"


# ---------------------------------------------------------------------------
# Profile names
# ---------------------------------------------------------------------------


def validate_profile_name(name: str) -> None:
    """Reject names that are unsafe to use as a filename.

    Raises:
        InvalidProfileName: empty, contains ``/``, ``\\`` or ``..``, or
            starts with ``.``.
    """
    if not name:
        raise InvalidProfileName(name, "name cannot be empty")
    if "/" in name or "\\" in name or ".." in name:
        raise InvalidProfileName(name, "name cannot contain '/', '\\', or '..'")
    if name.startswith("."):
        raise InvalidProfileName(name, "name cannot start with '.'")


def resolve_profile_name(explicit: str | None = None) -> str | None:
    """Pick the profile to apply: *explicit*, else ``APPLE_PIM_PROFILE``, else None."""
    if explicit:
        return explicit
    return os.environ.get(PROFILE_ENV_VAR) or None


def list_profiles(root: Path | None = None) -> list[str]:
    """Names of the valid profile files on disk, sorted."""
    directory = profiles_dir(root)
    if not directory.is_dir():
        return []
    names: list[str] = []
    for path in directory.glob(f"*{PROFILE_SUFFIX}"):
        if not path.is_file():
            continue
        try:
            validate_profile_name(path.stem)
        except InvalidProfileName:
            continue
        names.append(path.stem)
    return sorted(names)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_base_config(root: Path | None = None) -> PimConfiguration:
    """Load ``config.json``, or all-access defaults if missing or malformed."""
    path = base_config_path(root)
    if not path.is_file():
        logger.debug("base config not found, using defaults", path=str(path))
        return PimConfiguration()
    try:
        return PimConfiguration.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning(
            "failed to parse base config, using defaults",
            path=str(path),
            error=_first_line(exc),
        )
        return PimConfiguration()


def load_profile(name: str, root: Path | None = None) -> ProfileOverride | None:
    """Load a named profile override, or None if its file does not exist.

    Raises:
        MalformedConfig: the file exists but cannot be read or decoded.
    """
    path = profile_path(name, root)
    if not path.is_file():
        return None
    try:
        return ProfileOverride.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise MalformedConfig(path, _first_line(exc)) from exc


class LoadedConfig(BaseModel):
    """A resolved configuration together with where it came from."""

    model_config = {"frozen": True}

    config: PimConfiguration
    config_path: Path
    profiles_dir: Path
    profile: str | None = None
    profile_path: Path | None = None


def load_with_sources(profile: str | None = None, root: Path | None = None) -> LoadedConfig:
    """Resolve base + profile and report the files consulted.

    Raises:
        InvalidProfileName: the selected profile name is unsafe.
        ProfileNotFound: a profile was selected but has no file.
        MalformedConfig: the selected profile file cannot be decoded.
    """
    base = load_base_config(root)
    sources = {
        "config_path": base_config_path(root),
        "profiles_dir": profiles_dir(root),
    }

    name = resolve_profile_name(profile)
    if name is None:
        return LoadedConfig(config=base, **sources)

    validate_profile_name(name)
    path = profile_path(name, root)
    override = load_profile(name, root)
    if override is None:
        raise ProfileNotFound(name, path)

    logger.debug("applying profile", profile=name, path=str(path))
    return LoadedConfig(
        config=merge(base, override),
        profile=name,
        profile_path=path,
        **sources,
    )


def load(profile: str | None = None, root: Path | None = None) -> PimConfiguration:
    """Load the resolved configuration (base + optional profile override)."""
    return load_with_sources(profile, root).config


def _first_line(exc: BaseException) -> str:
    text = str(exc).strip()
    return text.splitlines()[0] if text else type(exc).__name__
