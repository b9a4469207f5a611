"""Scenes of the 2WebMedia sites: WankitNowVR and ZexyVR."""

from __future__ import annotations

import re
from typing import Iterable, Iterator
from urllib.parse import unquote, urlsplit

from slugify import slugify

from vrshelf.scene import (
    Fetch,
    ScrapedScene,
    _absolute_url,
    _atoi,
    _attr,
    _child_attr,
    _parse_date,
    _soup,
    _text,
    crawl_site,
    strip_query,
)

SITES = {
    "wankitnowvr": ("WankitNowVR", "https://wankitnowvr.com/videos/"),
    "zexyvr": ("ZexyVR", "https://zexyvr.com/videos/"),
}

_DATE_DURATION = re.compile(r"Released\son\s(.*)\n+\s+Duration\s+:\s+(\d+):\d+", re.ASCII)
_CAST_TAGS = re.compile(r"(?:zexyvr|wankitnowvr)\.com/(models|videos)/+")
_TAG_CATEGORY = re.compile(r"(.*)\s+\((.*)\)", re.ASCII)
_FILENAME = re.compile(r"videos/([a-z\d\-]+?)(?:(?:-|_)preview)?(_\d{4}.*\.mp4)", re.ASCII)
_DATE_FORMATS = ("%b %d, %Y", "%B %d, %Y")
_RESOLUTIONS = ("_1920", "_2160", "_2880", "_3840", "_5760")
_FILENAME_END = "_180x180_3dh_180_sbs.mp4"
_IMAGE_HEIGHT = "?h=900"


def _fix_tag(name: str, category: str) -> str:
    category = category.lower()
    lowered = name.lower()
    if category == "breasts":
        return "big tits" if lowered == "large" else name + " tits"
    if category == "eyes":
        return name if "eyes" in lowered else name + " eyes"
    if category == "lingerie":
        return "lingerie"
    if category == "nationality" and lowered == "english":
        return "british"
    return name


def normalize_tag(name: str, category: str) -> str:
    """Tag for a ``name (category)`` label, lower case, with the category folded in where needed."""
    return _fix_tag(name, category).strip().lower()


def _limited(url: str) -> str:
    return strip_query(url) + _IMAGE_HEIGHT


def parse_scene(html: str, url: str, site: str) -> ScrapedScene:
    """Scene on a 2WebMedia video page.

    Raises ValueError when the details line, a cast or tag link, or a tag
    label does not have the expected shape.
    """
    soup = _soup(html)
    scene = ScrapedScene(studio="2WebMedia", site=site, homepage_url=strip_query(url))
    scene.site_id = scene.homepage_url.split("/")[-1]
    scene.scene_id = f"{slugify(site)}-{scene.site_id}"

    scene.covers = [_limited(_attr(video, "cover-image")) for video in soup.select("deo-video")]
    if not scene.covers:
        scene.covers = [
            _limited(_attr(img, "src"))
            for img in soup.select("div.container.pt-5 > div > div > img")
        ]

    scene.gallery = [
        _limited(_child_attr(item, "div.view > a", "href"))
        for item in soup.select("div.gallery > div")[1:]
    ]

    for heading in soup.select("div.container.pt-5 h2"):
        scene.title = _text(heading).strip()
    for block in soup.select("div.container.pt-5 h2 + p"):
        scene.synopsis = _text(block).strip()

    for details in soup.select("div.container.pt-5 p.text-muted"):
        match = _DATE_DURATION.search(_text(details))
        if match is None:
            raise ValueError(f"no release date and duration on {url}")
        if match.group(1):
            released = _parse_date(match.group(1), _DATE_FORMATS)
            if released is not None:
                scene.released = released
        if match.group(2):
            minutes = _atoi(match.group(2))
            if minutes is not None:
                scene.duration = minutes

    for link in soup.select("div.container.pt-5 p.text-muted > a"):
        href = _attr(link, "href")
        kind = _CAST_TAGS.search(href)
        if kind is None:
            raise ValueError(f"unexpected link {href!r} on {url}")
        if kind.group(1) == "models":
            scene.cast.append(_text(link).strip())
            continue
        label = _TAG_CATEGORY.search(_text(link))
        if label is None:
            raise ValueError(f"tag {_text(link)!r} has no category")
        fixed = _fix_tag(label.group(1), label.group(2))
        if fixed:
            scene.tags.append(fixed.strip().lower())

    for source in soup.select("deo-video source"):
        match = _FILENAME.search(_attr(source, "src"))
        if match:
            scene.filenames.append(match.group(1) + match.group(2))

    if not scene.filenames:
        parts = unquote(urlsplit(url).path).split("/")
        if len(parts) > 1:
            if len(parts) < 3:
                raise ValueError(f"no scene name in {url}")
            base = parts[2].replace("+", "_")
            scene.filenames = [f"{base}{res}{_FILENAME_END}" for res in _RESOLUTIONS]

    return scene


def parse_listing(html: str, url: str) -> tuple[list[str], list[str]]:
    """Page links and scene links of a video listing."""
    soup = _soup(html)
    pages = [_absolute_url(url, _attr(a, "href")) for a in soup.select("ul.pagination a.page-link")]
    scenes = [_absolute_url(url, _attr(a, "href")) for a in soup.select("div.container div.card > a")]
    return pages, scenes


def scrape(
    fetch: Fetch, known_scenes: Iterable[str], site: str, start_url: str
) -> Iterator[ScrapedScene]:
    """Yield the site's scenes that are not among ``known_scenes``."""
    for scene_url in crawl_site(fetch, start_url, parse_listing, known_scenes):
        yield parse_scene(fetch(scene_url), scene_url, site)