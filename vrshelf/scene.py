"""Scraped scene records and the listing crawl shared by the studio scrapers."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterable, Iterator, Sequence
from urllib.parse import urldefrag, urljoin

from bs4 import BeautifulSoup, Tag

Fetch = Callable[[str], str]
ListingParser = Callable[[str, str], "tuple[list[str], list[str]]"]

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass
class ScrapedScene:
    """Metadata collected for one scene from a studio's web site."""

    scene_id: str = ""
    site_id: str = ""
    site: str = ""
    studio: str = ""
    homepage_url: str = ""
    title: str = ""
    synopsis: str = ""
    released: str = ""
    duration: int = 0
    scene_type: str = "VR"
    covers: list[str] = field(default_factory=list)
    gallery: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    cast: list[str] = field(default_factory=list)
    filenames: list[str] = field(default_factory=list)


def strip_query(url: str) -> str:
    """The URL without anything from the first ``?`` on."""
    return url.split("?", 1)[0]


def crawl_site(
    fetch: Fetch,
    start_url: str,
    parse_listing: ListingParser,
    known_scenes: Iterable[str],
) -> Iterator[str]:
    """Walk listing pages from ``start_url`` and yield scene URLs not yet known.

    Pagination links are followed depth first before the scenes of a page are
    yielded; every listing page is fetched once and every scene URL is
    yielded once.
    """
    known = set(known_scenes)
    visited: set[str] = set()
    seen: set[str] = set()

    def open_page(url: str) -> tuple[Iterator[str], Sequence[str]]:
        visited.add(url)
        pages, scenes = parse_listing(fetch(url), url)
        return iter(pages), scenes

    stack = [open_page(start_url)]
    while stack:
        pages, scenes = stack[-1]
        following = next((p for p in pages if p and p not in visited), None)
        if following is not None:
            stack.append(open_page(following))
            continue
        stack.pop()
        for scene_url in scenes:
            if scene_url and scene_url not in known and scene_url not in seen:
                seen.add(scene_url)
                yield scene_url


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


def _text(tag: Tag) -> str:
    return tag.get_text()


def _attr(tag: Tag, name: str) -> str:
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


def _child_text(root: Tag, selector: str) -> str:
    return "".join(_text(tag) for tag in root.select(selector)).strip()


def _child_attr(root: Tag, selector: str, name: str) -> str:
    tag = root.select_one(selector)
    return _attr(tag, name).strip() if tag is not None else ""


def _absolute_url(base: str, href: str) -> str:
    if href.startswith("#"):
        return ""
    return urldefrag(urljoin(base, href)).url


def _atoi(text: str) -> int | None:
    return int(text) if _INTEGER.fullmatch(text) else None


def _parse_date(text: str, formats: Sequence[str]) -> str | None:
    for fmt in formats:
        try:
            return datetime.strptime(text.strip(), fmt).strftime("%Y-%m-%d")
        except ValueError:
            continue
    return None