"""Scenes of the VRSexyGirlz site."""

from __future__ import annotations

from typing import Iterable, Iterator

from vrshelf.scene import (
    Fetch,
    ScrapedScene,
    _absolute_url,
    _attr,
    _atoi,
    _parse_date,
    _soup,
    _text,
    crawl_site,
    strip_query,
)

SITE = "VRSexyGirlz"
START_URL = "https://www.vrsexygirlz.com"

_DATE_FORMATS = ("%b %d, %Y", "%B %d, %Y")


def parse_scene(html: str, url: str) -> ScrapedScene | None:
    """Scene on a VRSexyGirlz episode page; None when the page has no short link id."""
    soup = _soup(html)
    scene = ScrapedScene(studio="VRSexyGirlz", site=SITE, homepage_url=strip_query(url))

    for heading in soup.select("div.content-block div.ep-info-l h2"):
        scene.title = _text(heading).strip()

    scene.gallery = [
        _absolute_url(url, _attr(img, "src")) for img in soup.select("div.bx-set-pager img")
    ]
    if scene.gallery:
        scene.covers.append(scene.gallery[0])

    for block in soup.select("div.episode-description div.ep-desc"):
        scene.synopsis = _text(block).strip()

    scene.cast = [_text(link) for link in soup.select("div.ep-info-model a")]

    for item in soup.select("ul.ep-info-r li.icons-date"):
        released = _parse_date(_text(item), _DATE_FORMATS)
        if released is not None:
            scene.released = released

    for item in soup.select("ul.ep-info-r li.icons-length"):
        minutes = _atoi(_text(item).split(":")[0])
        if minutes is not None:
            scene.duration = minutes

    for link in soup.select('link[rel="shortlink"]'):
        href = _attr(link, "href")
        scene.site_id = href[href.rfind("=") + 1 :]

    if not scene.site_id:
        return None
    scene.scene_id = f"vrsexygirlz-{scene.site_id}"
    return scene


def parse_listing(html: str, url: str) -> tuple[list[str], list[str]]:
    """Next-page links and episode links of a listing page."""
    soup = _soup(html)
    pages = [
        _absolute_url(url, _attr(a, "href")) for a in soup.select("div.wpx-pagination a.next")
    ]
    scenes = [
        _absolute_url(url, _attr(a, "href"))
        for a in soup.select("div.post-content div.episode div.episode-info div.ep-info-l > a")
    ]
    return pages, scenes


def scrape(fetch: Fetch, known_scenes: Iterable[str]) -> Iterator[ScrapedScene]:
    """Yield the site's scenes that are not among ``known_scenes``."""
    for scene_url in crawl_site(fetch, START_URL, parse_listing, known_scenes):
        scene = parse_scene(fetch(scene_url), scene_url)
        if scene is not None:
            yield scene