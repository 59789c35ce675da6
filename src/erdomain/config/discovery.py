"""Config file discovery and loading.

``erdomain.toml`` is looked up in the start directory and then in each
parent, the way git finds ``.git/``. ``ERDOMAIN_CONFIG`` pins the file
explicitly; ``--config`` on the CLI takes precedence over both.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from erdomain.config.models import ErdConfig

CONFIG_FILENAME = "erdomain.toml"
CONFIG_ENV_VAR = "ERDOMAIN_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Locate the config file for *start* (default: cwd).

    A set ``ERDOMAIN_CONFIG`` wins over the walk-up search, even when it
    points at a missing file (then no config is used at all).
    """
    pinned = os.environ.get(CONFIG_ENV_VAR)
    if pinned:
        path = Path(pinned)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> ErdConfig:
    """Parse and validate a config file into :class:`ErdConfig`.

    Without *path* the file is discovered from *cwd*. Missing config
    yields the code defaults.

    Raises:
        tomllib.TOMLDecodeError: If the file is not valid TOML.
        pydantic.ValidationError: If a section has invalid values.
    """
    path = path or find_config(cwd)
    if path is None:
        return ErdConfig()
    with path.open("rb") as fh:
        return ErdConfig.model_validate(tomllib.load(fh))
