"""
loader.py - read JSON schema catalogs from disk or package data.

Public API
----------
load_schema(path) : return a fresh copy of the catalog at *path*
"""

from __future__ import annotations

import copy
import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any, Mapping

__all__ = ["load_schema"]

log = logging.getLogger(__name__)

# --------------------------------------------------------------------------- #
# Helpers                                                                     #
# --------------------------------------------------------------------------- #

def _parse(text: str, source: str) -> Mapping[str, Any]:
    """Parse catalog JSON, raising crisp errors on failure."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {source}: {exc}") from exc


# --------------------------------------------------------------------------- #
# Public utilities                                                            #
# --------------------------------------------------------------------------- #

def load_schema(path: str | Path) -> dict:
    p = Path(path)

    # 1) direct file on disk ------------------------------------------------
    if p.is_file():
        log.debug("loading schema catalog from %s", p)
        return copy.deepcopy(_parse(p.read_text(encoding="utf-8"), str(p)))

    # 2) bundled resource (basename first, original string second) ---------
    pkg = resources.files("response_schema.schemas")
    for name in (p.name, str(path)):
        resource = pkg.joinpath(name)
        try:
            text = resource.read_text(encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError):
            continue
        log.debug("loading packaged schema catalog %s", name)
        return copy.deepcopy(_parse(text, name))

    # 3) give up -----------------------------------------------------------
    raise FileNotFoundError(
        f"Schema '{path}' not found on disk or in package data"
    )
