import pytest

from vrshelf.scene import ScrapedScene, crawl_site, strip_query

LISTINGS = {
    "p1": (["p2"], ["a", "b"]),
    "p2": (["p1"], ["c", "a"]),
}


def _parse_listing(html, url):
    pages, scenes = LISTINGS[html]
    return list(pages), list(scenes)


def _recording_fetch(log):
    def fetch(url):
        log.append(url)
        return url

    return fetch


def test_strip_query_removes_query():
    assert strip_query("https://site.example.com/scene/1?utm=x&y=2") == "https://site.example.com/scene/1"


def test_strip_query_keeps_plain_url():
    url = "https://site.example.com/scene/1"
    assert strip_query(url) == url


def test_scraped_scene_defaults():
    first = ScrapedScene()
    second = ScrapedScene()
    first.covers.append("x")
    assert first.scene_type == "VR"
    assert second.covers == []
    assert second.duration == 0


def test_crawl_follows_pages_before_scenes_and_dedups():
    log = []
    result = list(crawl_site(_recording_fetch(log), "p1", _parse_listing, []))
    assert result == ["c", "a", "b"]


def test_crawl_fetches_each_listing_once():
    log = []
    list(crawl_site(_recording_fetch(log), "p1", _parse_listing, []))
    assert log == ["p1", "p2"]


def test_crawl_skips_known_scenes():
    log = []
    result = list(crawl_site(_recording_fetch(log), "p1", _parse_listing, ["a"]))
    assert result == ["c", "b"]


def test_crawl_skips_empty_urls():
    def parse(html, url):
        return [""], ["", "x"]

    assert list(crawl_site(lambda url: url, "start", parse, [])) == ["x"]


def test_crawl_propagates_fetch_errors():
    def fetch(url):
        raise OSError("offline")

    with pytest.raises(OSError):
        list(crawl_site(fetch, "p1", _parse_listing, []))