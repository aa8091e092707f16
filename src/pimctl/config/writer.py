"""Write base configuration and profile files.

Readers never lock, so every write goes to a temp file in the target
directory and is moved into place with ``os.replace``. A concurrent reader
sees either the old or the new file, never a partial one.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from pydantic import BaseModel

from pimctl.config.loader import base_config_path, profile_path, validate_profile_name
from pimctl.config.logging import get_logger
from pimctl.config.models import PimConfiguration, ProfileOverride

logger = get_logger(__name__)


def write_config(config: PimConfiguration, root: Path | None = None) -> Path:
    """Write the base configuration to ``config.json``. Returns the path."""
    path = base_config_path(root)
    _write_model(path, config, exclude_none=False)
    logger.info("wrote base config", path=str(path))
    return path


def write_profile(override: ProfileOverride, name: str, root: Path | None = None) -> Path:
    """Write a named profile to ``profiles/{name}.json``. Returns the path.

    Raises:
        InvalidProfileName: *name* is unsafe to use as a filename.
    """
    validate_profile_name(name)
    path = profile_path(name, root)
    _write_model(path, override, exclude_none=True)
    logger.info("wrote profile", profile=name, path=str(path))
    return path


def _write_model(path: Path, model: BaseModel, *, exclude_none: bool) -> None:
    payload = model.model_dump(mode="json", exclude_none=exclude_none)
    text = json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False) + "\n"
    path.parent.mkdir(parents=True, exist_ok=True)
    atomic_write_text(path, text)


def atomic_write_text(path: Path, text: str) -> None:
    """Replace *path* with *text* atomically.

    1. create a temp file in the same directory,
    2. write + flush + fsync,
    3. ``os.replace`` onto the target.
    """
    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(text)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_path, path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise
