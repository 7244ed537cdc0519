"""Expose the fichepaie version reported by ``/health`` and ``/api/v1/config/meta``."""

from __future__ import annotations

from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final, Iterator

PACKAGE_NAME: Final = "fichepaie"
PYPROJECT_PATH: Final = Path(__file__).resolve().parents[3] / "pyproject.toml"


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the installed distribution version, or the one in ``pyproject.toml``."""

    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return _read_version_from_pyproject(PYPROJECT_PATH)


def _project_table_lines(text: str) -> Iterator[str]:
    in_project = False
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith("["):
            in_project = line == "[project]"
            continue
        if in_project and line and not line.startswith("#"):
            yield line


def _read_version_from_pyproject(path: Path) -> str:
    """Parse the ``[project]`` table of ``path`` for the version string.

    Source checkouts run the tests without installed metadata, so the
    pyproject file is the canonical fallback.
    """

    if not path.exists():  # pragma: no cover - repository invariant
        raise RuntimeError(f"Unable to locate project metadata at {path}")

    for line in _project_table_lines(path.read_text(encoding="utf-8")):
        key, _, value = line.partition("=")
        if key.strip() == "version":
            version = value.strip().strip('"')
            if version:
                return version
            break

    raise RuntimeError("Unable to determine project version from pyproject.toml")


__all__ = ["PACKAGE_NAME", "get_project_version"]
