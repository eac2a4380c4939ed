from __future__ import annotations

from pathlib import Path

import pytest

from tests.unit.gtfs_samples import write_gtfs


@pytest.fixture
def gtfs_root(tmp_path: Path) -> Path:
    """A search root holding one GTFS folder plus an unrelated directory."""

    root = tmp_path / "workspace"
    (root / "public").mkdir(parents=True)
    write_gtfs(root / "transitdata_GTFS_2024")
    return root


@pytest.fixture
def anyio_backend() -> str:
    """The code under test uses asyncio directly, so run async tests on asyncio."""

    return "asyncio"
