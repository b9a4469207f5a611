"""Scenes of the Wankz network sites: WankzVR, MilfVR and TranzVR."""

from __future__ import annotations

from typing import Iterable, Iterator
from urllib.parse import unquote, urlsplit

from slugify import slugify

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

SITES = {
    "wankzvr": ("WankzVR", "https://www.wankzvr.com/"),
    "milfvr": ("MilfVR", "https://www.milfvr.com/"),
    "tranzvr": ("TranzVR", "https://www.tranzvr.com/"),
}

_DATE_FORMATS = ("%d %B, %Y", "%d %b, %Y")
_FILENAME_SUFFIXES = (
    "180_180x180_3dh_LR.mp4",
    "gearvr-180_180x180_3dh_LR.mp4",
    "smartphone-180_180x180_3dh_LR.mp4",
)


def _covers(scraper_id: str, site_id: str) -> list[str]:
    prefix = f"{site_id[:1]}/{site_id[:4]}/{site_id}"
    covers = []
    for kind in ("cover", "hero"):
        if scraper_id == "milfvr" and kind == "cover":
            continue
        if scraper_id == "tranzvr" and kind == "hero":
            continue
        if scraper_id == "tranzvr":
            covers.append(f"https://images.tranzvr.com/{prefix}/550/{kind}.webp")
        else:
            covers.append(f"https://cdns-i.{scraper_id}.com/{prefix}/{kind}/large.jpg")
    return covers


def _gallery(scraper_id: str, site_id: str) -> list[str]:
    if scraper_id == "tranzvr":
        return []
    size = "1280" if scraper_id == "milfvr" else "1024"
    prefix = f"{site_id[:1]}/{site_id[:4]}/{site_id}"
    return [
        f"https://cdns-i.{scraper_id}.com/{prefix}/thumbs/{size}_{n}.jpg" for n in range(1, 7)
    ]


def parse_scene(html: str, url: str, scraper_id: str, site: str) -> ScrapedScene:
    """Scene on a Wankz network scene page.

    Raises ValueError when the URL does not end in a scene number of at least
    four characters.
    """
    soup = _soup(html)
    scene = ScrapedScene(studio="Wankz", site=site, homepage_url=strip_query(url))

    scene.site_id = scene.homepage_url.split("-")[-1]
    if len(scene.site_id) < 4:
        raise ValueError(f"no scene number at the end of {url}")
    scene.scene_id = f"{slugify(site)}-{scene.site_id}"

    for heading in soup.select("h1.detail__title"):
        scene.title = _text(heading)

    for span in soup.select("div.detail__date_time span.detail__date"):
        released = _parse_date(_text(span), _DATE_FORMATS)
        if released is not None:
            scene.released = released

    for span in soup.select("div.detail__date_time span.time"):
        minutes = _atoi(_text(span).strip().split(" ")[0])
        if minutes is not None:
            scene.duration = minutes

    path = unquote(urlsplit(url).path)
    base = path.replace("/", f"{scraper_id}-").split(scene.site_id)[0]
    scene.filenames = [base + suffix for suffix in _FILENAME_SUFFIXES]

    scene.covers = _covers(scraper_id, scene.site_id)
    scene.gallery = _gallery(scraper_id, scene.site_id)

    for block in soup.select("div.detail__txt"):
        scene.synopsis = _text(block).strip()

    scene.tags = [_text(tag) for tag in soup.select("div.tag-list__body a.tag")]
    if scraper_id == "milfvr":
        scene.tags.append("milf")

    scene.cast = [_text(model).strip() for model in soup.select("div.detail__models a")]
    return scene


def parse_listing(html: str, url: str) -> tuple[list[str], list[str]]:
    """Page links and scene links of a video listing; sign-up links are dropped."""
    soup = _soup(html)
    pages = [
        _absolute_url(url, _attr(a, "href")) for a in soup.select("ul.pagenav__list a.pagenav__link")
    ]
    scenes = [
        scene_url
        for scene_url in (
            _absolute_url(url, _attr(a, "href")) for a in soup.select("ul.cards-list a.card__video")
        )
        if "/join" not in scene_url
    ]
    return pages, scenes


def scrape(
    fetch: Fetch, known_scenes: Iterable[str], scraper_id: str, site: str, base_url: str
) -> Iterator[ScrapedScene]:
    """Yield the site's scenes, newest listing first, that are not among ``known_scenes``."""
    for scene_url in crawl_site(fetch, base_url + "videos?o=d", parse_listing, known_scenes):
        yield parse_scene(fetch(scene_url), scene_url, scraper_id, site)