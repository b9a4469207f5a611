"""Funscript loading and heatmap strip rendering."""

from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

from PIL import Image

from vrshelf.colors import Color

_TICK_MS = 600000
_STEP_SIZE = 60.0
_MAX_SLOPE = 20.0


@dataclass
class Action:
    """A move to ``pos`` percent at ``at`` milliseconds."""

    at: int
    pos: int
    slope: float = 0.0
    intensity: int = 0


@dataclass
class GradientStop:
    """A colour placed at a relative position in [0, 1]."""

    color: Color
    pos: float


@dataclass
class Script:
    """A funscript: timed stroke positions."""

    version: str = ""
    actions: list[Action] = field(default_factory=list)
    inverted: bool = False
    stroke_range: int = 0

    def update_intensity(self) -> None:
        """Fill in the slope and intensity of every action after the first."""
        for prev, cur in zip(self.actions, self.actions[1:]):
            span = 2 * float(cur.at - prev.at) / 1000
            raw = math.inf if span == 0 else 1 / span
            slope = min(max(raw, 0.0), _MAX_SLOPE)
            cur.slope = slope
            cur.intensity = int(slope * abs(float(cur.pos - prev.pos)))

    def gradient_table(self, num_segments: int) -> list[GradientStop]:
        """Split the script into segments coloured by their mean intensity."""
        counts = [0] * num_segments
        totals = [0] * num_segments
        maxts = self.actions[-1].at

        for action in self.actions:
            segment = math.trunc(action.at / (maxts + 1) * num_segments)
            if not 0 <= segment < num_segments:
                raise ValueError(f"action at {action.at} lies outside the script")
            counts[segment] += 1
            totals[segment] += int(action.intensity)

        stops = []
        for index, (count, total) in enumerate(zip(counts, totals)):
            pos = index / (num_segments - 1) if num_segments > 1 else math.nan
            intensity = total / count if count > 0 else 0.0
            stops.append(GradientStop(segment_color(intensity), pos))
        return stops

    def duration(self) -> float:
        """Length of the script in seconds, taken from its last action."""
        return self.actions[-1].at / 1000.0


def _int_field(item: dict[str, Any], name: str) -> int:
    value = item.get(name, 0)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return value


def _parse_script(data: Any) -> Script:
    if not isinstance(data, dict):
        raise ValueError("funscript must be a JSON object")
    version = data.get("version") or ""
    if not isinstance(version, str):
        raise ValueError("version must be a string")
    raw_actions = data.get("actions")
    actions = None
    if raw_actions is not None:
        if not isinstance(raw_actions, list):
            raise ValueError("actions must be a list")
        actions = []
        for item in raw_actions:
            if not isinstance(item, dict):
                raise ValueError("each action must be a JSON object")
            actions.append(Action(at=_int_field(item, "at"), pos=_int_field(item, "pos")))
    script = Script(
        version=version,
        actions=actions if actions is not None else [],
        inverted=bool(data.get("inverted", False)),
        stroke_range=_int_field(data, "range"),
    )
    return script if actions is not None else Script(version=version, actions=None)  # type: ignore[arg-type]


def load_funscript(path: str | os.PathLike[str]) -> Script:
    """Read a funscript file with its actions sorted by time."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    script = _parse_script(data)
    if script.actions is None:
        raise ValueError(f"actions list missing in {path}")
    if not script.actions:
        raise ValueError(f"actions list empty in {path}")
    script.actions.sort(key=lambda action: action.at)
    return script


def interpolated_color(gradient: Sequence[GradientStop], t: float) -> Color:
    """Colour of the gradient at relative position ``t``."""
    for first, second in zip(gradient, gradient[1:]):
        if first.pos <= t <= second.pos:
            local = (t - first.pos) / (second.pos - first.pos)
            return first.color.blend_hcl(second.color, local).clamped()
    return gradient[-1].color


_BLUE = Color.from_hex("#1e90ff")
_GREEN = Color.from_hex("#228b22")
_YELLOW = Color.from_hex("#ffd700")
_RED = Color.from_hex("#dc143c")
_PURPLE = Color.from_hex("#800080")
_BLACK = Color.from_hex("#0f001e")
_WHITE = Color.from_hex("#ffffff")


def segment_color(intensity: float) -> Color:
    """Map a mean intensity to a colour: white, then blue through purple to near black."""
    step = _STEP_SIZE
    if intensity <= 0.001:
        return _WHITE
    if intensity <= step:
        return _BLUE.blend_lab(_GREEN, intensity / step)
    if intensity <= 2 * step:
        return _GREEN.blend_lab(_YELLOW, (intensity - step) / step)
    if intensity <= 3 * step:
        return _YELLOW.blend_lab(_RED, (intensity - 2 * step) / step)
    if intensity <= 4 * step:
        return _RED.blend_rgb(_PURPLE, (intensity - 3 * step) / step)
    fraction = min((intensity - 4 * step) / (5 * step), 1.0)
    return _PURPLE.blend_lab(_BLACK, fraction)


def _pixel(color: Color) -> tuple[int, int, int]:
    c = color.clamped()
    return tuple(int(v * 65535.0 + 0.5) >> 8 for v in (c.r, c.g, c.b))  # type: ignore[return-value]


def render_heatmap(
    input_file: str | os.PathLike[str],
    dest_file: str | os.PathLike[str],
    width: int,
    height: int,
    num_segments: int,
) -> None:
    """Render a funscript as a PNG strip with a mark every ten minutes."""
    script = load_funscript(input_file)
    script.update_intensity()
    gradient = script.gradient_table(num_segments)

    image = Image.new("RGB", (width, height))
    for x in range(width):
        image.paste(_pixel(interpolated_color(gradient, x / width)), (x, 0, x + 1, height))

    maxts = script.actions[-1].at
    tick_color = _pixel(Color.from_hex("#000000"))
    ts = _TICK_MS
    while ts < maxts:
        x = int(ts / maxts * width)
        left, right = max(x - 1, 0), min(x + 1, width)
        if left < right:
            image.paste(tick_color, (left, height // 2, right, height))
        ts += _TICK_MS

    image.save(dest_file, format="PNG")


def funscript_duration(path: str | os.PathLike[str]) -> float:
    """Duration in seconds of the funscript at ``path``."""
    return load_funscript(path).duration()