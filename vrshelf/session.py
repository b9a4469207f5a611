"""Watch-session helpers: per-second playback heatmaps and their storage."""

from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Sequence
from urllib.parse import urlsplit

_INTEGER = re.compile(r"[+-]?\d+")


class SessionHeatmap:
    """Counts how often each second of a video was seen playing."""

    def __init__(self, duration: float) -> None:
        self.counts: list[int] = [0] * int(duration)

    def record(self, position: float) -> None:
        """Count one tick at ``position`` seconds; the first second and out-of-range positions are ignored."""
        index = int(position)
        if 0 < index < len(self.counts):
            self.counts[index] += 1


def file_id_from_path(path: str) -> int:
    """File id at the end of a player's media URL; raise ValueError if there is none."""
    last = urlsplit(path).path.split("/")[-1]
    if not _INTEGER.fullmatch(last):
        raise ValueError(f"no file id in {path!r}")
    return int(last)


def merge_heatmap(existing: Sequence[int], data: Sequence[int]) -> list[int]:
    """Add ``existing`` counts onto ``data`` position by position."""
    if len(existing) > len(data):
        raise ValueError(
            f"stored heatmap has {len(existing)} entries, new one only {len(data)}"
        )
    merged = list(data)
    for index, value in enumerate(existing):
        merged[index] += value
    return merged


def dump_heatmap(
    directory: str | os.PathLike[str], scene_id: int, data: Sequence[int]
) -> Path:
    """Write or accumulate the heatmap of ``scene_id`` as JSON; return the file path."""
    path = Path(directory) / f"{scene_id}.json"
    counts = list(data)
    if path.exists():
        stored = json.loads(path.read_text(encoding="utf-8"))
        if not isinstance(stored, list) or not all(
            isinstance(v, int) and not isinstance(v, bool) for v in stored
        ):
            raise ValueError(f"{path} does not hold a list of integers")
        counts = merge_heatmap(stored, counts)
    path.write_text(json.dumps(counts, separators=(",", ":")), encoding="utf-8")
    return path