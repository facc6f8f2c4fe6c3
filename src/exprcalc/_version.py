"""Version lookup for exprcalc.

An installed distribution reports its own metadata. A source checkout that
was never installed falls back to the ``[project]`` table of the
neighbouring ``pyproject.toml``.
"""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

DISTRIBUTION = "exprcalc"
UNKNOWN_VERSION = "0.0.0"

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        return _source_tree_version(_PYPROJECT)


def _source_tree_version(pyproject: Path) -> str:
    try:
        with pyproject.open("rb") as f:
            project = tomllib.load(f).get("project", {})
    except (OSError, tomllib.TOMLDecodeError):
        return UNKNOWN_VERSION
    if project.get("name") != DISTRIBUTION:
        return UNKNOWN_VERSION
    return str(project.get("version", UNKNOWN_VERSION))
