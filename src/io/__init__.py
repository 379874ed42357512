"""I/O utilities for camp snapshots and seed artifacts."""

from src.io.seed_sql import render_seed_sql, write_seed_sql
from src.io.snapshotting import build_and_write_snapshot, get_latest_snapshot_path, load_latest_snapshot_df

__all__ = [
    "build_and_write_snapshot",
    "get_latest_snapshot_path",
    "load_latest_snapshot_df",
    "render_seed_sql",
    "write_seed_sql",
]
