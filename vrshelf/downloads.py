"""Locating files in the download directory and the headers to send them with."""

from __future__ import annotations

import os
from pathlib import Path


def resolve_download(base_dir: str | os.PathLike[str], url_path: str) -> Path:
    """Return the file under ``base_dir`` named by ``url_path``.

    Raises FileNotFoundError when the file is missing or the path tries to
    climb out of the directory.
    """
    if ".." in Path(url_path).parts:
        raise FileNotFoundError(url_path)
    base = Path(os.path.normpath(base_dir))
    path = Path(os.path.normpath(base / url_path.lstrip("/")))
    if ".." in path.parts or (path != base and base not in path.parents):
        raise FileNotFoundError(url_path)
    if not path.exists():
        raise FileNotFoundError(str(path))
    return path


def download_headers(path: str | os.PathLike[str], size: int) -> dict[str, str]:
    """Headers that make a browser save ``path`` as an attachment."""
    target = Path(path)
    headers = {"Content-Disposition": f"attachment; filename={target.name}"}
    if target.name.endswith(".json"):
        headers["Content-Type"] = "application/json"
    headers["Content-Length"] = str(size)
    return headers