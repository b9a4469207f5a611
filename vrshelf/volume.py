"""Finding media files on a local volume and guessing their VR projection."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Iterator

ALLOWED_VIDEO_EXTENSIONS = (".mp4", ".avi", ".wmv", ".mpeg4", ".mov", ".mkv")

_SEPARATORS = re.compile(r"[ _.-]+")
_EXPLICIT_PROJECTIONS = {"mkx200", "mkx220", "rf52", "fisheye190", "vrca220", "flat"}
_FISHEYE_ALIASES = {"fisheye", "f180", "180f"}
_MONO_FIRST = {"mono_360", "mono_180"}
_MONO_SECOND = {"360_mono", "180_mono"}


def _is_hidden(path: str | os.PathLike[str]) -> bool:
    return Path(path).name.startswith(".")


def is_video_file(path: str | os.PathLike[str]) -> bool:
    """True for a visible file with one of the known video extensions."""
    return not _is_hidden(path) and Path(path).suffix.lower() in ALLOWED_VIDEO_EXTENSIONS


def _projection_from_name(filename: str) -> str | None:
    parts = _SEPARATORS.split(Path(filename).name.lower())
    following = parts[1:] + [None]
    for part, nxt in zip(parts, following):
        if part in _EXPLICIT_PROJECTIONS:
            return part
        if part in _FISHEYE_ALIASES:
            return "fisheye"
        if nxt is not None:
            pair = f"{part}_{nxt}"
            if pair in _MONO_FIRST:
                return f"{nxt}_mono"
            if pair in _MONO_SECOND:
                return f"{part}_mono"
    return None


def detect_projection(filename: str, width: int, height: int) -> str | None:
    """Projection suggested by a video's frame size and file name.

    Wide frames default to ``180_sbs`` unless the name says otherwise; square
    frames are ``360_tb``. Returns None when nothing can be inferred.
    """
    projection: str | None = None
    if height * 2 == width or width > height:
        projection = _projection_from_name(filename) or "180_sbs"
    if height == width:
        projection = "360_tb"
    return projection


def _walk(directory: Path) -> Iterator[Path]:
    try:
        entries = sorted(os.scandir(directory), key=lambda entry: entry.name)
    except OSError:
        return
    for entry in entries:
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError:
            continue
        if is_dir:
            yield from _walk(Path(entry.path))
        else:
            yield Path(entry.path)


def collect_files(
    root: str | os.PathLike[str],
) -> tuple[list[Path], list[Path], list[Path]]:
    """Walk ``root`` in lexical order and return its videos, funscripts and hsp files."""
    videos: list[Path] = []
    scripts: list[Path] = []
    hsp_files: list[Path] = []
    for path in _walk(Path(root)):
        if _is_hidden(path):
            continue
        if is_video_file(path):
            videos.append(path)
        if path.suffix == ".funscript":
            scripts.append(path)
        if path.suffix == ".hsp":
            hsp_files.append(path)
    return videos, scripts, hsp_files