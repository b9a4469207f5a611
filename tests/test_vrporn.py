import pytest

from vrshelf.vrporn import parse_listing, parse_scene, scrape

URL = "https://vrporn.com/some-scene/?ref=home"
POSTER = "https://cdn.example.com/cover.jpg"


def make_scene_html(
    posted="VideoPosted on March 05, 2021",
    scripts=('var a=1;', 'var timeAfter="25:10";', 'var timeAfter="40:00";'),
    article_class="post-12345 post type-post",
):
    script_html = "".join(f"<script>{s}</script>" for s in scripts)
    return f"""
<html><head>{script_html}</head><body>
<article class="{article_class}">
<h1 class="content-title">  A Title  </h1>
<dl8-video id="dl8videoplayer" poster="{POSTER}"></dl8-video>
<div class="vrp-gallery-pro"><a href="/wp-content/1.jpg">1</a></div>
<div class="entry-content post-video-description">  Some synopsis.  </div>
<div class="tag-box"><a rel="tag"> 3D </a><a rel="tag">Blonde</a><a rel="tag">HD</a><a rel="tag"> Outdoor </a></div>
<span class="name_pornstar"> Jane Doe </span>
<div class="content-box posted-by-box posted-by-box-sub"><span class="footer-titles">{posted}</span></div>
</article>
</body></html>
"""


def test_parse_scene_identity():
    scene = parse_scene(make_scene_html(), URL, "VRPorn", "Acme")
    assert scene.homepage_url == "https://vrporn.com/some-scene/"
    assert scene.site_id == "12345"
    assert scene.scene_id == "vrporn-12345"
    assert scene.site == "VRPorn"
    assert scene.studio == "Acme"


def test_parse_scene_content():
    scene = parse_scene(make_scene_html(), URL, "VRPorn", "Acme")
    assert scene.title == "A Title"
    assert scene.covers == [POSTER]
    assert scene.synopsis == "Some synopsis."
    assert scene.cast == ["Jane Doe"]
    assert scene.tags == ["Blonde", "Outdoor"]


def test_parse_scene_gallery_is_absolute():
    scene = parse_scene(make_scene_html(), URL, "VRPorn", "Acme")
    assert len(scene.gallery) == 1
    assert scene.gallery[0].startswith("https://vrporn.com/")
    assert scene.gallery[0].endswith("/wp-content/1.jpg")


def test_parse_scene_release_date():
    scene = parse_scene(make_scene_html(), URL, "VRPorn", "Acme")
    assert scene.released == "2021-03-05"


def test_premium_posting_gives_same_date():
    plain = parse_scene(make_scene_html(), URL, "VRPorn", "Acme")
    premium = parse_scene(
        make_scene_html(posted="VideoPosted on Premium on March 05, 2021"), URL, "VRPorn", "Acme"
    )
    assert premium.released == plain.released


def test_duration_uses_first_script_with_time():
    scene = parse_scene(make_scene_html(), URL, "VRPorn", "Acme")
    assert scene.duration == 25


def test_duration_counts_hours():
    html = make_scene_html(scripts=('var timeAfter="1:02:33";',))
    assert parse_scene(html, URL, "VRPorn", "Acme").duration == 62


def test_duration_missing_is_zero():
    html = make_scene_html(scripts=("var a=1;",))
    assert parse_scene(html, URL, "VRPorn", "Acme").duration == 0


def test_non_video_page_is_skipped():
    html = make_scene_html(posted="Game released somewhere")
    assert parse_scene(html, URL, "VRPorn", "Acme") is None


def test_missing_post_id_raises():
    html = make_scene_html(article_class="post other")
    with pytest.raises(ValueError):
        parse_scene(html, URL, "VRPorn", "Acme")


def test_parse_listing():
    html = """
<div class="pagination"><a class="next" href="/studio/x/page/2/">next</a></div>
<article class="tax-studio"><div class="tube-post"><a href="/scene-one/">one</a></div></article>
"""
    pages, scenes = parse_listing(html, "https://vrporn.com/studio/x")
    assert pages == ["https://vrporn.com/studio/x/page/2/"]
    assert scenes == ["https://vrporn.com/scene-one/"]


LISTING = """
<article class="tax-studio"><div class="tube-post"><a href="/some-scene/">one</a></div></article>
"""

PAGES = {
    "https://vrporn.com/studio/evileyevr": LISTING,
    "https://vrporn.com/some-scene/": make_scene_html(),
}


def test_scrape_yields_new_scenes():
    scenes = list(scrape(PAGES.__getitem__, [], "evileyevr", "EvilEyeVR", "EvilEyeVR"))
    assert [s.homepage_url for s in scenes] == ["https://vrporn.com/some-scene/"]
    assert scenes[0].studio == "EvilEyeVR"


def test_scrape_skips_known_scenes():
    known = ["https://vrporn.com/some-scene/"]
    assert list(scrape(PAGES.__getitem__, known, "evileyevr", "EvilEyeVR", "EvilEyeVR")) == []