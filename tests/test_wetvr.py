import pytest

from vrshelf import wetvr

SCENE_HTML = """<html><body><div id="t2019">
<h1 class="t2019-stitle">  Pool Party </h1>
<div id="t2019-stime">DURATION: 42 min</div>
<div id="t2019-video"><deo-video cover-image="/media/cover.jpg"></deo-video></div>
<div class="t2019-thumbs"><img src="/t/0.jpg"><img src="/t/1.jpg"><img src="/t/2.jpg"></div>
<div id="t2019-description"> A sunny day. </div>
<div id="t2019-models"><a> Jane Doe </a><a>Ann Roe</a></div>
</div></body></html>"""

LISTING = """<html><body>
<ul class="pagination"><li><a class="page-link" href="/?page=2">2</a></li></ul>
<div class="card" data-video-id="101" data-date="June 05, 2021"><a href="/video/first">x</a></div>
<div class="card" data-video-id="102" data-date="May 01, 2021"><a href="/video/second">x</a></div>
<div class="card" data-video-id="0" data-date=""><a href="/join">join</a></div>
</body></html>"""

PAGE2 = """<html><body>
<ul class="pagination"><li><a class="page-link" href="/">1</a></li></ul>
<div class="card" data-video-id="103" data-date="April 02, 2021"><a href="/video/third">x</a></div>
</body></html>"""


def scene_page(title):
    return SCENE_HTML.replace("Pool Party", title)


def test_parse_scene_fields():
    url = "https://wetvr.com/video/pool-party?ref=1"
    scene = wetvr.parse_scene(SCENE_HTML, url, "12345", "June 05, 2021")
    assert scene.title == "Pool Party"
    assert scene.duration == 42
    assert scene.site_id == "12345"
    assert scene.scene_id == "wetvr-12345"
    assert scene.released == "2021-06-05"
    assert scene.homepage_url == url.split("?")[0]
    assert scene.studio == "WetVR"
    assert scene.site == wetvr.SITE
    assert scene.synopsis == "A sunny day."
    assert scene.cast == ["Jane Doe", "Ann Roe"]


def test_parse_scene_images_are_absolute_and_skip_first_thumb():
    scene = wetvr.parse_scene(SCENE_HTML, "https://wetvr.com/video/x", "1", "June 05, 2021")
    assert len(scene.covers) == 1
    assert scene.covers[0].startswith("https://wetvr.com")
    assert scene.covers[0].endswith("/media/cover.jpg")
    assert [g.rsplit("/", 1)[-1] for g in scene.gallery] == ["1.jpg", "2.jpg"]
    assert all(g.startswith("https://wetvr.com") for g in scene.gallery)


def test_parse_scene_cover_falls_back_to_image():
    html = SCENE_HTML.replace(
        '<deo-video cover-image="/media/cover.jpg"></deo-video>',
        '<img id="no-player-image" src="/media/still.jpg">',
    )
    scene = wetvr.parse_scene(html, "https://wetvr.com/video/x", "1", "")
    assert len(scene.covers) == 1
    assert scene.covers[0].endswith("/media/still.jpg")
    assert scene.released == ""


def test_parse_scene_without_block_is_none():
    assert wetvr.parse_scene("<html><body><p>hi</p></body></html>", "https://wetvr.com/x", "1", "") is None


def test_parse_scene_without_duration_raises():
    html = SCENE_HTML.replace("DURATION: 42 min", "no data")
    with pytest.raises(ValueError):
        wetvr.parse_scene(html, "https://wetvr.com/x", "1", "")


def test_parse_listing_cards_and_pages():
    pages, cards = wetvr.parse_listing(LISTING, wetvr.START_URL)
    assert pages == ["https://wetvr.com/?page=2"]
    assert [c.scene_id for c in cards] == ["101", "102"]
    assert [c.date for c in cards] == ["June 05, 2021", "May 01, 2021"]
    assert all("/join" not in c.url for c in cards)
    assert cards[0].url.endswith("/video/first")


def test_scrape_skips_known_and_carries_card_details():
    pages = {
        wetvr.START_URL: LISTING,
        wetvr.START_URL + "?page=2": PAGE2,
        wetvr.START_URL + "video/first": scene_page("First"),
        wetvr.START_URL + "video/third": scene_page("Third"),
    }
    known = [wetvr.START_URL + "video/second"]
    scenes = list(wetvr.scrape(pages.__getitem__, known))
    assert {s.site_id for s in scenes} == {"101", "103"}
    assert {s.title for s in scenes} == {"First", "Third"}
    by_id = {s.site_id: s for s in scenes}
    assert by_id["101"].homepage_url.endswith("/video/first")