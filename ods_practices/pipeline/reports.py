"""Run report aggregation."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path

from ods_practices.common.fs import write_json
from ods_practices.common.time_utils import utc_timestamp_iso


@dataclass
class RunStats:
    registry_files: int = 0
    registry_codes: int = 0
    directory_codes: int = 0
    joined: int = 0
    dropped_incomplete: int = 0
    dropped_inactive: int = 0
    dropped_not_gp: int = 0
    output: int = 0


def write_run_summary(
    path: Path,
    *,
    run_id: str,
    stats: RunStats,
    registry_paths: list[Path],
    directory_path: Path | None,
) -> Path:
    payload = {
        "run_id": run_id,
        "finished_at": utc_timestamp_iso(),
        "mode": "joined" if directory_path is not None else "registry",
        "inputs": {
            "registry": [str(p) for p in registry_paths],
            "directory": str(directory_path) if directory_path is not None else None,
        },
        "counts": asdict(stats),
    }
    write_json(path, payload)
    return path
