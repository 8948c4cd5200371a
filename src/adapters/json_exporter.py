"""Write fetched user data to disk as JSON."""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import UserDataSnapshot


def export_snapshot_json(*, snapshot: UserDataSnapshot, output_path: Path) -> Path:
    """Export `snapshot` as UTF-8 JSON (sorted keys, 2-space indent).

    The file is written next to the target and renamed into place, so an
    existing export is never left half-written.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(snapshot.model_dump(mode="json"), ensure_ascii=False, indent=2, sort_keys=True)

    tmp_path = output_path.with_name(f".{output_path.name}.tmp")
    tmp_path.write_text(text + "\n", encoding="utf-8")
    tmp_path.replace(output_path)
    return output_path
