from __future__ import annotations

import json
from pathlib import Path

from src.preprocess import main


def test_cli_writes_both_artifacts(gtfs_root: Path, tmp_path: Path) -> None:
    out = tmp_path / "out"

    code = main(["--gtfs-root", str(gtfs_root), "--match", "GTFS", "--out", str(out)])

    assert code == 0
    routes = json.loads((out / "routes.json").read_text(encoding="utf-8"))
    stops = json.loads((out / "stops.json").read_text(encoding="utf-8"))
    assert [r["id"] for r in routes] == ["R1"]
    assert [s["id"] for s in stops] == ["A", "B", "C"]


def test_cli_fails_without_gtfs_directory_and_writes_nothing(tmp_path: Path) -> None:
    root = tmp_path / "empty"
    root.mkdir()
    out = tmp_path / "out"

    code = main(["--gtfs-root", str(root), "--out", str(out)])

    assert code == 1
    assert not out.exists()


def test_cli_fails_on_missing_table_and_writes_nothing(
    gtfs_root: Path, tmp_path: Path
) -> None:
    (gtfs_root / "transitdata_GTFS_2024" / "stop_times.txt").unlink()
    out = tmp_path / "out"

    code = main(["--gtfs-root", str(gtfs_root), "--out", str(out)])

    assert code == 1
    assert not out.exists()
