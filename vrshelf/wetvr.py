"""Scenes of the WetVR site."""

from __future__ import annotations

import re
from typing import Iterable, Iterator, NamedTuple

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

SITE = "WetVR"
START_URL = "https://wetvr.com/"

_DURATION = re.compile(r"DURATION:\W(\d+)", re.IGNORECASE | re.ASCII)
_DATE_FORMATS = ("%B %d, %Y",)


class SceneCard(NamedTuple):
    """A scene link on a listing page with the details only the listing carries."""

    url: str
    scene_id: str
    date: str


def parse_scene(html: str, url: str, scene_id: str, scene_date: str) -> ScrapedScene | None:
    """Scene on a WetVR video page; None when the page has no scene block.

    ``scene_id`` and ``scene_date`` come from the listing card. Raises
    ValueError when the page states no duration.
    """
    soup = _soup(html)
    root = soup.select_one("div#t2019")
    if root is None:
        return None

    scene = ScrapedScene(studio="WetVR", site=SITE, homepage_url=strip_query(url))
    scene.site_id = scene_id
    scene.scene_id = slugify(f"{SITE}-{scene_id}")
    scene.title = _child_text(root, "h1.t2019-stitle")
    scene.released = _parse_date(scene_date, _DATE_FORMATS) or ""

    match = _DURATION.search(_child_text(root, "div#t2019-stime"))
    if match is None:
        raise ValueError(f"no duration on {url}")
    scene.duration = int(match.group(1))

    cover = _child_attr(root, "div#t2019-video deo-video", "cover-image")
    if not cover:
        cover = _child_attr(root, "div#t2019-video img#no-player-image", "src")
    if cover:
        scene.covers.append(_absolute_url(url, cover))

    scene.gallery = [
        _absolute_url(url, _attr(img, "src")) for img in root.select("div.t2019-thumbs img")[1:]
    ]
    scene.synopsis = _child_text(root, "div#t2019-description")
    scene.cast = [_text(link).strip() for link in root.select("div#t2019-models a")]
    return scene


def parse_listing(html: str, url: str) -> tuple[list[str], list[SceneCard]]:
    """Page links and scene cards of a listing page; sign-up links are dropped."""
    soup = _soup(html)
    pages = [_absolute_url(url, _attr(a, "href")) for a in soup.select("ul.pagination a.page-link")]
    cards = []
    for card in soup.select("div.card"):
        scene_url = _absolute_url(url, _child_attr(card, "a", "href"))
        if "/join" in scene_url:
            continue
        cards.append(SceneCard(scene_url, _attr(card, "data-video-id"), _attr(card, "data-date")))
    return pages, cards


def scrape(fetch: Fetch, known_scenes: Iterable[str]) -> Iterator[ScrapedScene]:
    """Yield the site's scenes that are not among ``known_scenes``."""
    cards: dict[str, SceneCard] = {}

    def listing(html: str, url: str) -> tuple[list[str], list[str]]:
        pages, found = parse_listing(html, url)
        for card in found:
            cards.setdefault(card.url, card)
        return pages, [card.url for card in found]

    for scene_url in crawl_site(fetch, START_URL, listing, known_scenes):
        card = cards[scene_url]
        scene = parse_scene(fetch(scene_url), scene_url, card.scene_id, card.date)
        if scene is not None:
            yield scene