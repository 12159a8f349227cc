"""Global pytest configuration.

Host fixtures live under ``tests/fixtures``: ``nns/`` holds bare
NodeNetworkState documents, ``bundles/`` holds complete CLI bundles.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict

import pytest
import yaml

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def load_nns() -> Callable[[str], Dict[str, Any]]:
    """Return a loader for ``tests/fixtures/nns/<name>.yaml``."""

    def _load(name: str) -> Dict[str, Any]:
        text = (FIXTURES_DIR / "nns" / f"{name}.yaml").read_text(encoding="utf-8")
        return yaml.safe_load(text)

    return _load


@pytest.fixture
def bundle_path() -> Callable[[str], Path]:
    """Return a resolver for ``tests/fixtures/bundles/<name>.yaml``."""

    def _resolve(name: str) -> Path:
        return FIXTURES_DIR / "bundles" / f"{name}.yaml"

    return _resolve
