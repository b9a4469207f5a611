"""Packing funscripts into a zip archive for download."""

from __future__ import annotations

import os
import shutil
import zipfile
from pathlib import Path


def add_file_to_zip(
    zip_file: zipfile.ZipFile,
    source_path: str | os.PathLike[str],
    archive_name: str,
) -> None:
    """Store the file at ``source_path`` in ``zip_file`` under ``archive_name``, deflated."""
    source = Path(source_path)
    info = zipfile.ZipInfo.from_file(source, arcname=archive_name)
    info.compress_type = zipfile.ZIP_DEFLATED
    with source.open("rb") as reader, zip_file.open(info, "w") as writer:
        shutil.copyfileobj(reader, writer)


def export_disposition(updated_only: bool) -> str:
    """Content-Disposition header for a funscript export."""
    name = "funscripts-update.zip" if updated_only else "funscripts.zip"
    return f'attachment; filename="{name}"'