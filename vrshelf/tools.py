"""Locating and fetching the ffmpeg and ffprobe binaries."""

from __future__ import annotations

import json
import os
import platform
import zipfile
from pathlib import Path
from typing import Any

import requests

FFBINARIES_API = "https://ffbinaries.com/api/v1/version/4.2.1"

_ARCH_ALIASES = {
    "x86_64": "amd64",
    "amd64": "amd64",
    "x64": "amd64",
    "i386": "386",
    "i486": "386",
    "i586": "386",
    "i686": "386",
    "x86": "386",
    "386": "386",
    "aarch64": "arm64",
    "arm64": "arm64",
    "armv6l": "arm",
    "armv7l": "arm",
    "arm": "arm",
}

_LINUX_PLATFORMS = {
    "386": "linux-32",
    "amd64": "linux-64",
    "arm": "linux-armhf",
    "arm64": "linux-arm64",
}


def platform_id(system: str | None = None, machine: str | None = None) -> str:
    """The ffbinaries platform name for an operating system and CPU."""
    system = (system or platform.system()).lower()
    machine = machine or platform.machine()
    arch = _ARCH_ALIASES.get(machine.lower(), machine.lower())

    result = ""
    if system == "windows":
        result = "windows-32" if arch == "386" else "windows-64"
    elif system == "darwin":
        result = "osx-64"
    elif system == "linux":
        result = _LINUX_PLATFORMS.get(arch, "")
    if not result:
        raise ValueError(f"Unknown architecture: {system}/{machine}")
    return result


def binary_path(
    bin_dir: str | os.PathLike[str], tool: str, system: str | None = None
) -> Path:
    """Path of ``tool`` in ``bin_dir``, with ``.exe`` on Windows."""
    system = (system or platform.system()).lower()
    name = f"{tool}.exe" if system == "windows" else tool
    return Path(bin_dir) / name


def ffbinaries_url(release_json: str | dict[str, Any], platform: str, tool: str) -> str:
    """Download URL of ``tool`` for ``platform`` from an ffbinaries release listing."""
    data = json.loads(release_json) if isinstance(release_json, str) else release_json
    try:
        url = data["bin"][platform][tool]
    except (KeyError, TypeError) as exc:
        raise KeyError(f"no {tool} download for {platform}") from exc
    if not isinstance(url, str) or not url:
        raise KeyError(f"no {tool} download for {platform}")
    return url


def download_file(url: str, dest_path: str | os.PathLike[str]) -> None:
    """Stream ``url`` into ``dest_path``; raise OSError unless the server answers 200."""
    with requests.get(url, stream=True, timeout=60) as response:
        if response.status_code != 200:
            raise OSError(f"HTTP status code {response.status_code}")
        with Path(dest_path).open("wb") as out:
            for chunk in response.iter_content(chunk_size=65536):
                if chunk:
                    out.write(chunk)


def _install_tool(bin_dir: str | os.PathLike[str], tool: str) -> Path:
    """Fetch ``tool`` for this machine from ffbinaries and unpack it into ``bin_dir``."""
    target_platform = platform_id()
    response = requests.get(FFBINARIES_API, timeout=60)
    if response.status_code != 200:
        raise OSError(f"HTTP status code {response.status_code}")
    url = ffbinaries_url(response.text, target_platform, tool)

    bin_dir = Path(bin_dir)
    bin_dir.mkdir(parents=True, exist_ok=True)
    archive = bin_dir / f"{tool}.zip"
    download_file(url, archive)
    try:
        with zipfile.ZipFile(archive) as zf:
            zf.extractall(bin_dir)
    finally:
        archive.unlink(missing_ok=True)
    return binary_path(bin_dir, tool)


def _ensure_tools(bin_dir: str | os.PathLike[str]) -> dict[str, Path]:
    """Make sure ffprobe and ffmpeg exist in ``bin_dir``, downloading any that are missing."""
    paths = {}
    for tool in ("ffprobe", "ffmpeg"):
        path = binary_path(bin_dir, tool)
        if not path.exists():
            _install_tool(bin_dir, tool)
        paths[tool] = path
    return paths