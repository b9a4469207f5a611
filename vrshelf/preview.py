"""Building short video previews from evenly spaced snippets with ffmpeg."""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path

_END_SNIPPET_OFFSET = 150


def crop_filter(width: int, height: int, projection: str) -> str:
    """ffmpeg crop arguments selecting one eye of a stereo video."""
    crop = "iw/2:ih:iw/2:ih"
    if height == width:
        crop = "iw/2:ih/2:iw/4:ih/2"
    if projection == "flat":
        crop = "iw:ih:iw:ih"
    return crop


def format_timecode(seconds: float) -> str:
    """``HH:MM:SS`` for a whole number of seconds; fractions are dropped."""
    total = int(seconds)
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def snippet_starts(duration: float, start_time: int, snippet_amount: int) -> list[int]:
    """Start second of each snippet, spread evenly after ``start_time``."""
    interval = (duration - start_time) / snippet_amount
    return [int(i * interval + start_time) for i in range(1, snippet_amount + 1)]


def _format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return str(value)


def build_snippet_command(
    start_seconds: float,
    input_file: str | os.PathLike[str],
    vf_args: str,
    snippet_length: float,
    output_file: str | os.PathLike[str],
    pixel_format: str | None = "yuv420p",
) -> list[str]:
    """ffmpeg arguments that cut one silent snippet."""
    args = ["-y", "-ss", format_timecode(start_seconds), "-i", str(input_file), "-vf", vf_args]
    if pixel_format:
        args += ["-pix_fmt", pixel_format]
    args += ["-t", _format_number(snippet_length), "-an", str(output_file)]
    return args


def concat_lines(count: int) -> str:
    """Contents of the ffmpeg concat list for snippets ``1.mp4`` to ``count.mp4``."""
    return "".join(f"file '{i}.mp4'\n" for i in range(1, count + 1))


def _run(ffmpeg: str | os.PathLike[str], args: list[str]) -> None:
    subprocess.run([str(ffmpeg), *args], check=True, capture_output=True)


def render_preview(
    ffmpeg: str | os.PathLike[str],
    input_file: str | os.PathLike[str],
    dest_file: str | os.PathLike[str],
    tmp_dir: str | os.PathLike[str],
    duration: float,
    width: int,
    height: int,
    projection: str,
    start_time: int,
    snippet_length: float,
    snippet_amount: int,
    resolution: int,
    extra_snippet: bool,
) -> None:
    """Cut snippets into ``tmp_dir`` and join them into ``dest_file``.

    Raises subprocess.CalledProcessError when ffmpeg fails. ``tmp_dir`` is
    removed afterwards either way.
    """
    tmp = Path(tmp_dir)
    tmp.mkdir(parents=True, exist_ok=True)
    try:
        vf_args = f"crop={crop_filter(width, height, projection)},scale={resolution}:{resolution}"

        for index, start in enumerate(snippet_starts(duration, start_time, snippet_amount), 1):
            _run(
                ffmpeg,
                build_snippet_command(start, input_file, vf_args, snippet_length, tmp / f"{index}.mp4"),
            )

        count = snippet_amount
        if extra_snippet and duration / snippet_amount > _END_SNIPPET_OFFSET:
            count += 1
            _run(
                ffmpeg,
                build_snippet_command(
                    int(duration - _END_SNIPPET_OFFSET),
                    input_file,
                    vf_args,
                    snippet_length,
                    tmp / f"{count}.mp4",
                    pixel_format=None,
                ),
            )

        concat_file = tmp / "concat.txt"
        concat_file.write_text(concat_lines(count), encoding="utf-8")

        _run(
            ffmpeg,
            [
                "-y",
                "-f", "concat",
                "-safe", "0",
                "-i", concat_file.as_posix(),
                "-c", "copy",
                Path(dest_file).as_posix(),
            ],
        )
    finally:
        shutil.rmtree(tmp, ignore_errors=True)