"""Scenes of the VRTeenrs site, all listed on a single page."""

from __future__ import annotations

import re
from typing import Iterable, Iterator

from slugify import slugify

from vrshelf.scene import (
    Fetch,
    ScrapedScene,
    _atoi,
    _child_attr,
    _child_text,
    _soup,
    _text,
    strip_query,
)

SITE = "VRTeenrs"
START_URL = "https://www.vrteenrs.com/vrporn.php"

_COVER_ID = re.compile(r"vrporn(\d+)", re.ASCII)


def parse_scenes(html: str, url: str) -> list[ScrapedScene]:
    """Every titled scene on the listing page.

    Raises ValueError when a cover image name carries no scene number.
    """
    soup = _soup(html)
    scenes = []
    for item in soup.select(".list_item"):
        scene = ScrapedScene(
            studio="International Media Company BV", site=SITE, homepage_url=strip_query(url)
        )
        scene.title = _child_text(item, ".title")

        cover = _child_attr(item, "video", "poster")
        if cover.startswith("/"):
            cover = cover[1:]
        if not cover:
            cover = _child_attr(item, ".thumb img", "src")
        if cover:
            scene.covers.append(cover)
            match = _COVER_ID.search(cover)
            if match is None:
                raise ValueError(f"no scene number in cover {cover!r}")
            scene.site_id = match.group(1)
            scene.scene_id = f"{slugify(scene.site)}-{scene.site_id}"

        scene.synopsis = _child_text(item, ".info .description")

        for sub in item.select(".info .subtext"):
            parts = _text(sub).split("Runtime: ")
            if len(parts) > 1:
                minutes = _atoi(parts[1].split(":")[0])
                if minutes is not None:
                    scene.duration = minutes

        if scene.title:
            scenes.append(scene)
    return scenes


def scrape(fetch: Fetch, known_scenes: Iterable[str]) -> Iterator[ScrapedScene]:
    """Yield every scene on the site's listing page.

    The page lists all scenes at once, so ``known_scenes`` does not narrow it.
    """
    yield from parse_scenes(fetch(START_URL), START_URL)