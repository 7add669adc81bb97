"""Config file discovery.

``streamspike.toml`` is looked up from the working directory upwards,
the way git finds ``.git/``. ``STREAMSPIKE_CONFIG`` short-circuits the
search; ``--config`` bypasses it entirely (see :mod:`.settings`).
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "streamspike.toml"
CONFIG_ENV_VAR = "STREAMSPIKE_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file governing *start* (default: cwd), or None.

    When STREAMSPIKE_CONFIG is set it wins outright: its file is returned
    if it exists, and no walk-up happens either way.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidate = Path(env_path)
        return candidate if candidate.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
