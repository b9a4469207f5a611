import json
from unittest import mock

import pytest

from vrshelf.tools import binary_path, download_file, ffbinaries_url, platform_id


@pytest.mark.parametrize(
    ("system", "machine", "expected"),
    [
        ("Windows", "AMD64", "windows-64"),
        ("Windows", "x86", "windows-32"),
        ("Darwin", "arm64", "osx-64"),
        ("Linux", "x86_64", "linux-64"),
        ("Linux", "i686", "linux-32"),
        ("Linux", "armv7l", "linux-armhf"),
        ("Linux", "aarch64", "linux-arm64"),
    ],
)
def test_platform_id(system, machine, expected):
    assert platform_id(system, machine) == expected


@pytest.mark.parametrize(("system", "machine"), [("FreeBSD", "x86_64"), ("Linux", "riscv64")])
def test_platform_id_unknown(system, machine):
    with pytest.raises(ValueError):
        platform_id(system, machine)


def test_binary_path(tmp_path):
    assert binary_path(tmp_path, "ffmpeg", "Windows") == tmp_path / "ffmpeg.exe"
    assert binary_path(tmp_path, "ffmpeg", "Linux") == tmp_path / "ffmpeg"


def test_ffbinaries_url():
    listing = {"bin": {"linux-64": {"ffmpeg": "https://example.com/ffmpeg.zip"}}}
    assert ffbinaries_url(json.dumps(listing), "linux-64", "ffmpeg") == "https://example.com/ffmpeg.zip"
    assert ffbinaries_url(listing, "linux-64", "ffmpeg") == "https://example.com/ffmpeg.zip"


def test_ffbinaries_url_missing():
    listing = {"bin": {"linux-64": {"ffmpeg": "https://example.com/ffmpeg.zip"}}}
    with pytest.raises(KeyError):
        ffbinaries_url(listing, "linux-64", "ffprobe")
    with pytest.raises(KeyError):
        ffbinaries_url(listing, "osx-64", "ffmpeg")


class _FakeResponse:
    def __init__(self, status_code, chunks):
        self.status_code = status_code
        self._chunks = chunks

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def iter_content(self, chunk_size=1):
        return iter(self._chunks)


def test_download_file_writes_body(tmp_path):
    dest = tmp_path / "out.bin"
    with mock.patch("vrshelf.tools.requests.get", return_value=_FakeResponse(200, [b"ab", b"", b"cd"])):
        download_file("https://example.com/x", dest)
    assert dest.read_bytes() == b"abcd"


def test_download_file_bad_status(tmp_path):
    dest = tmp_path / "out.bin"
    with mock.patch("vrshelf.tools.requests.get", return_value=_FakeResponse(404, [b"x"])):
        with pytest.raises(OSError, match="404"):
            download_file("https://example.com/x", dest)
    assert not dest.exists()