"""Package version — installed metadata first, pyproject.toml when running from a checkout."""
from __future__ import annotations

import re
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parent.parent / "pyproject.toml"


def _read_version() -> str:
    try:
        return version("iwdispatch")
    except PackageNotFoundError:
        pass
    try:
        m = re.search(r'^version\s*=\s*"([^"]+)"', _PYPROJECT.read_text(), re.MULTILINE)
    except OSError:
        return "0.0.0"
    return m.group(1) if m else "0.0.0"


__version__: str = _read_version()
