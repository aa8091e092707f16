"""Unified settings — CLI flags and env vars in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``APPLE_PIM_*`` prefix (empty values are ignored)
  3. Code defaults

The settings object only says *where* policy lives and *which* profile was
asked for. The policy itself is read from disk by :mod:`pimctl.config.loader`
on every invocation.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic_settings import BaseSettings

CONFIG_DIR_ENV_VAR = "APPLE_PIM_CONFIG_DIR"
PROFILE_ENV_VAR = "APPLE_PIM_PROFILE"
DEFAULT_CONFIG_DIR = Path("~/.config/apple-pim")


def resolve_config_dir(explicit: Path | None = None) -> Path:
    """Config root: *explicit*, else ``APPLE_PIM_CONFIG_DIR``, else the default."""
    if explicit is not None:
        return explicit.expanduser()
    env_dir = os.environ.get(CONFIG_DIR_ENV_VAR)
    if env_dir:
        return Path(env_dir).expanduser()
    return DEFAULT_CONFIG_DIR.expanduser()


class PimSettings(BaseSettings):
    """Settings for one pimctl invocation.

    Attributes:
        config_dir: Explicit config root, or None for ``~/.config/apple-pim``.
        profile: Explicit or environment-selected profile name.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "APPLE_PIM_",
        "env_ignore_empty": True,
    }

    config_dir: Path | None = None
    profile: str | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    @property
    def config_root(self) -> Path:
        """Directory holding ``config.json`` and ``profiles/``."""
        return resolve_config_dir(self.config_dir)

    @classmethod
    def from_cli(
        cls,
        *,
        config_dir: str | None = None,
        profile: str | None = None,
        **cli_flags: Any,
    ) -> PimSettings:
        """Construct settings from a CLI invocation.

        Empty or missing *config_dir* / *profile* fall through to the
        ``APPLE_PIM_CONFIG_DIR`` / ``APPLE_PIM_PROFILE`` env vars.
        """
        overrides: dict[str, Any] = dict(cli_flags)
        if config_dir:
            overrides["config_dir"] = Path(config_dir)
        if profile:
            overrides["profile"] = profile
        return cls(**overrides)
