# vrshelf

A library of building blocks for managing a local collection of VR videos
and the interactive scripts (`.funscript`) that go with them.

## Modules

- **`vrshelf.oshash`** – `hash_path(path)` and `hash_file(fileobj)` compute
  the OpenSubtitles-style hash: the file size plus the 64-bit sum of the
  first and last 64 KiB. Files smaller than 64 KiB raise `ValueError`.
- **`vrshelf.colors`** – `Color`, an sRGB colour with `from_hex`,
  `to_rgb255`, `clamped` and blending in RGB (`blend_rgb`), CIE L\*a\*b\*
  (`blend_lab`) and HCL (`blend_hcl`).
- **`vrshelf.heatmap`** – `load_funscript(path)` reads a script into a
  `Script` of `Action`s sorted by time (raising `ValueError` when the
  action list is missing or empty). `Script.update_intensity()`,
  `Script.gradient_table(n)` and `Script.duration()` measure it;
  `segment_color` and `interpolated_color` map intensities to colours;
  `render_heatmap(input, dest, width, height, segments)` writes a PNG
  strip with a black mark every ten minutes; `funscript_duration(path)`
  returns the length in seconds.
- **`vrshelf.preview`** – builds ffmpeg argument lists (`crop_filter`,
  `format_timecode`, `snippet_starts`, `build_snippet_command`,
  `concat_lines`) and `render_preview(...)`, which runs a given ffmpeg
  binary to cut evenly spaced snippets (plus an optional one near the end)
  and join them into one file. ffmpeg failures raise
  `subprocess.CalledProcessError`; the temporary directory is removed
  either way. The video's duration and frame size are passed in by the
  caller.
- **`vrshelf.tools`** – `platform_id()` names the ffbinaries build for an
  operating system and CPU, `binary_path()` gives the path of `ffmpeg` or
  `ffprobe` in a directory (with `.exe` on Windows), `ffbinaries_url()`
  picks a download URL out of a release listing and `download_file()`
  streams a URL to disk.
- **`vrshelf.volume`** – `is_video_file(path)`, `collect_files(root)`
  (videos, funscripts and `.hsp` files under a folder, in lexical order,
  hidden files skipped) and `detect_projection(filename, width, height)`,
  which guesses `180_sbs`, `360_tb`, `fisheye`, `mkx200`, `*_mono` and
  similar from frame size and name.
- **`vrshelf.schedule`** – `CronSchedule` and `format_cron_schedule()`,
  which produce either `@every Nh` or a crontab line, including hour
  windows that wrap past midnight; `calc_end_time()` gives the time a
  windowed task should stop.
- **`vrshelf.remote`** – the DeoVR remote packet format: `DeoPacket`,
  `PlayerState`, `encode_packet`, `decode_packet` and `read_packet`
  (which returns `None` for an empty ping packet).
- **`vrshelf.session`** – `SessionHeatmap` counts playback seconds,
  `file_id_from_path` extracts a file id from a player's media URL, and
  `merge_heatmap` / `dump_heatmap` accumulate counts in a JSON file per
  scene.
- **`vrshelf.thumbnail`** – `compose_heatmap_thumbnail(jpeg_bytes,
  heatmap_image)` returns a 700×420 JPEG with the heatmap strip along the
  bottom, alongside the path helpers `split_request_path`, `cache_key`
  and `proxy_path`.
- **`vrshelf.downloads`** – `resolve_download(base_dir, url_path)` finds a
  file inside a directory and raises `FileNotFoundError` for missing files
  or paths that climb out; `download_headers()` builds attachment
  headers.
- **`vrshelf.archive`** – `add_file_to_zip()` stores a file deflated under
  a chosen name; `export_disposition()` gives the header for a funscript
  archive.
- **Scene metadata** – `vrshelf.scene` defines `ScrapedScene`,
  `strip_query` and `crawl_site`. The studio modules `vrshelf.vrporn`,
  `vrshelf.vrsexygirlz`, `vrshelf.vrteenrs`, `vrshelf.wankz`,
  `vrshelf.wetvr` and `vrshelf.twowebmedia` parse pages into
  `ScrapedScene` records. Each `scrape` function takes a `fetch` callable
  (URL in, HTML text out) and a collection of known scene URLs, which are
  not fetched again; `vrteenrs.scrape` reads a single page listing every
  scene and returns them all.

## Examples

Hash a video file:

```python
from vrshelf.oshash import hash_path

print(f"{hash_path('movie.mp4'):x}")
```

Render a heatmap and read a script's length:

```python
from vrshelf.heatmap import funscript_duration, render_heatmap

render_heatmap("movie.funscript", "movie-heatmap.png", 1000, 10, 250)
print(funscript_duration("movie.funscript"), "seconds")
```

Guess how a video is projected:

```python
from vrshelf.volume import detect_projection, is_video_file

if is_video_file("Scene_MKX200_8K.mp4"):
    print(detect_projection("Scene_MKX200_8K.mp4", 8192, 4096))  # mkx200
```

Build a cron line for a window that wraps past midnight:

```python
from vrshelf.schedule import CronSchedule, format_cron_schedule

schedule = CronSchedule(enabled=True, use_range=True, hour_interval=2,
                        hour_start=22, hour_end=4, minute_start=30)
print(format_cron_schedule(schedule))
```

Scrape scene metadata with your own HTTP client:

```python
import requests

from vrshelf import wankz

def fetch(url):
    return requests.get(url, timeout=30).text

site, base_url = wankz.SITES["wankzvr"]
for scene in wankz.scrape(fetch, set(), "wankzvr", site, base_url):
    print(scene.scene_id, scene.title)
```

## What it does not do

vrshelf is a library only. It has no command-line program, no web server
or user interface, and no database: scanned files, scraped scenes and
watch history are returned to the caller, not stored. It does not run a
scheduler (it only formats cron expressions), does not connect to a
player over the network (it only encodes and decodes packets), does not
probe videos for their duration or frame size, and has no search index or
DLNA media server.

## Requirements

Python 3.10 or newer, with pillow, beautifulsoup4, requests and
python-slugify. Rendering previews needs an `ffmpeg` binary.