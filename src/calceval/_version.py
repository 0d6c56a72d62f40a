"""Version lookup for calceval.

A source checkout reads ``[project] version`` from the repository's
pyproject.toml; an installed package reads its distribution metadata.
"""

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

DISTRIBUTION = "calceval"

# src/calceval/_version.py -> repository root
_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _source_version(pyproject: Path) -> str | None:
    """Return the version from ``pyproject`` if it describes this project."""
    try:
        project = tomllib.loads(pyproject.read_text(encoding="utf-8")).get("project", {})
    except (OSError, tomllib.TOMLDecodeError):
        return None
    if project.get("name") != DISTRIBUTION:
        return None
    version = project.get("version")
    return version if isinstance(version, str) else None


def get_version(pyproject: Path = _PYPROJECT) -> str:
    """Get the calceval version, or "0.0.0" when neither source knows it."""
    if version := _source_version(pyproject):
        return version
    try:
        return _metadata_version(DISTRIBUTION)
    except PackageNotFoundError:
        return "0.0.0"
