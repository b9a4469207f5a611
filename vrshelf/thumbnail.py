"""Scene thumbnails with the script heatmap drawn beneath the picture."""

from __future__ import annotations

import io

from PIL import Image, ImageOps

THUMBNAIL_WIDTH = 700
THUMBNAIL_HEIGHT = 420
HEATMAP_HEIGHT = 10
HEATMAP_MARGIN = 3

_PICTURE_HEIGHT = THUMBNAIL_HEIGHT - HEATMAP_HEIGHT - HEATMAP_MARGIN


def split_request_path(path: str) -> tuple[str, str]:
    """Split ``/<scene id>/<image url>`` into its two parts; raise ValueError otherwise."""
    parts = path.split("/", 2)
    if len(parts) != 3:
        raise ValueError(f"not a heatmap thumbnail path: {path!r}")
    return parts[1], parts[2]


def cache_key(file_id: int, image_url: str) -> str:
    """Key under which a composed thumbnail is cached."""
    return f"{file_id}:{image_url}"


def proxy_path(image_url: str, with_heatmap: bool) -> str:
    """Image-proxy path: the picture area of a heatmap thumbnail, or a plain 700px-wide image."""
    if with_heatmap:
        return f"/{THUMBNAIL_WIDTH}x{_PICTURE_HEIGHT},jpeg/{image_url}"
    return f"/{THUMBNAIL_WIDTH}x/{image_url}"


def compose_heatmap_thumbnail(jpeg_bytes: bytes, heatmap_image: Image.Image) -> bytes:
    """JPEG of the thumbnail with ``heatmap_image`` stretched along its bottom edge.

    Raises ValueError when ``jpeg_bytes`` is not a JPEG image.
    """
    try:
        with Image.open(io.BytesIO(jpeg_bytes)) as source:
            if source.format != "JPEG":
                raise ValueError("thumbnail is not a JPEG image")
            picture = source.convert("RGB")
    except OSError as exc:
        raise ValueError("thumbnail is not a JPEG image") from exc

    if picture.size != (THUMBNAIL_WIDTH, _PICTURE_HEIGHT):
        picture = ImageOps.fit(
            picture,
            (THUMBNAIL_WIDTH, _PICTURE_HEIGHT),
            method=Image.Resampling.BILINEAR,
            centering=(0.5, 0.5),
        )
    heatmap = heatmap_image.convert("RGBA").resize(
        (THUMBNAIL_WIDTH, HEATMAP_HEIGHT), Image.Resampling.BILINEAR
    )

    canvas = Image.new("RGB", (THUMBNAIL_WIDTH, THUMBNAIL_HEIGHT), (0, 0, 0))
    canvas.paste(picture, (0, 0))
    canvas.paste(heatmap, (0, THUMBNAIL_HEIGHT - HEATMAP_HEIGHT), heatmap)

    out = io.BytesIO()
    canvas.save(out, format="JPEG", quality=90)
    return out.getvalue()