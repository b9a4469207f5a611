"""Scenes of studios hosted on the VRPorn portal."""

from __future__ import annotations

import re
from typing import Iterable, Iterator

from bs4 import BeautifulSoup
from slugify import slugify

from vrshelf.scene import (
    Fetch,
    ScrapedScene,
    _absolute_url,
    _attr,
    _child_attr,
    _child_text,
    _parse_date,
    _soup,
    _text,
    crawl_site,
    strip_query,
)

STUDIOS = {
    "evileyevr": ("EvilEyeVR", "EvilEyeVR"),
    "randysroadstop": ("Randy's Road Stop", "NaughtyAmerica"),
    "realteensvr": ("Real Teens VR", "NaughtyAmerica"),
    "vrclubz": ("VRClubz", "VixenVR"),
}

_STUDIO_URL = "https://vrporn.com/studio/"
_POSTED = "div.content-box.posted-by-box.posted-by-box-sub span.footer-titles"
_SCENE_ID = re.compile(r"post-(\d+)", re.ASCII)
_DATE = re.compile(r"VideoPosted (?:on Premium )?on (.+)", re.IGNORECASE)
_DURATION = re.compile(r'var timeAfter="(?:(\d+):)?(\d+):(\d+)";', re.ASCII)
_SKIP_TAGS = frozenset({"3D", "60 FPS", "HD"})


def _duration(soup: BeautifulSoup) -> int:
    for script in soup.select("script"):
        match = _DURATION.search(_text(script))
        if match:
            minutes = int(match.group(1) or 0) * 60 + int(match.group(2))
            if minutes:
                return minutes
    return 0


def parse_scene(html: str, url: str, site: str, company: str) -> ScrapedScene | None:
    """Scene on a VRPorn video page; None for pages that are not videos.

    Raises ValueError when the page carries no post id.
    """
    soup = _soup(html)
    posted = _DATE.fullmatch(_child_text(soup, _POSTED))
    if posted is None:
        return None

    scene = ScrapedScene(studio=company, site=site, homepage_url=strip_query(url))

    id_match = _SCENE_ID.match(_child_attr(soup, "article.post", "class"))
    if id_match is None:
        raise ValueError(f"no post id on {url}")
    scene.site_id = id_match.group(1)
    scene.scene_id = f"{slugify(site)}-{scene.site_id}"

    for heading in soup.select("h1.content-title"):
        scene.title = _text(heading).strip()

    cover = _child_attr(soup, "#dl8videoplayer", "poster")
    if cover:
        scene.covers.append(cover)

    scene.gallery = [
        _absolute_url(url, _attr(link, "href")) for link in soup.select(".vrp-gallery-pro a")
    ]

    for block in soup.select(".entry-content.post-video-description"):
        scene.synopsis = _text(block).strip()

    for link in soup.select('.tag-box a[rel="tag"]'):
        tag = _text(link).strip()
        if tag not in _SKIP_TAGS:
            scene.tags.append(tag)

    scene.cast = [_text(name).strip() for name in soup.select(".name_pornstar")]
    scene.released = _parse_date(posted.group(1), ("%B %d, %Y",)) or "0001-01-01"
    scene.duration = _duration(soup)
    return scene


def parse_listing(html: str, url: str) -> tuple[list[str], list[str]]:
    """Next-page links and scene links of a studio listing page."""
    soup = _soup(html)
    pages = [_absolute_url(url, _attr(a, "href")) for a in soup.select("div.pagination a.next")]
    scenes = [
        _absolute_url(url, _attr(a, "href"))
        for a in soup.select("article.tax-studio div.tube-post a")
    ]
    return pages, scenes


def scrape(
    fetch: Fetch, known_scenes: Iterable[str], studio_id: str, site: str, company: str
) -> Iterator[ScrapedScene]:
    """Yield the scenes of a studio that are not among ``known_scenes``."""
    for scene_url in crawl_site(fetch, _STUDIO_URL + studio_id, parse_listing, known_scenes):
        scene = parse_scene(fetch(scene_url), scene_url, site, company)
        if scene is not None:
            yield scene