"""sRGB colours with blending in RGB, CIE L*a*b* and HCL space."""

from __future__ import annotations

import math
from dataclasses import dataclass

_D65 = (0.95047, 1.00000, 1.08883)
_RAD2DEG = 57.29577951308232087721
_DEG2RAD = 0.01745329251994329576


def _linearize(v: float) -> float:
    if v <= 0.04045:
        return v / 12.92
    return ((v + 0.055) / 1.055) ** 2.4


def _delinearize(v: float) -> float:
    if v <= 0.0031308:
        return 12.92 * v
    return 1.055 * v ** (1.0 / 2.4) - 0.055


def _lab_f(t: float) -> float:
    if t > (6.0 / 29.0) ** 3:
        return t ** (1.0 / 3.0)
    return t / 3.0 * 29.0 / 6.0 * 29.0 / 6.0 + 4.0 / 29.0


def _lab_finv(t: float) -> float:
    if t > 6.0 / 29.0:
        return t * t * t
    return 3.0 * 6.0 / 29.0 * 6.0 / 29.0 * (t - 4.0 / 29.0)


def _interp_angle(a0: float, a1: float, t: float) -> float:
    delta = math.fmod(math.fmod(a1 - a0, 360.0) + 540.0, 360.0) - 180.0
    return math.fmod(a0 + t * delta + 360.0, 360.0)


@dataclass(frozen=True)
class Color:
    """An sRGB colour with components nominally in [0, 1]."""

    r: float
    g: float
    b: float

    @classmethod
    def from_hex(cls, value: str) -> "Color":
        """Parse ``#rrggbb`` or ``#rgb``."""
        if not value.startswith("#") or len(value) not in (4, 7):
            raise ValueError(f"color: {value} is not a hex-color")
        digits = value[1:]
        try:
            if len(digits) == 6:
                parts = [int(digits[i : i + 2], 16) / 255.0 for i in (0, 2, 4)]
            else:
                parts = [int(ch, 16) / 15.0 for ch in digits]
        except ValueError as exc:
            raise ValueError(f"color: {value} is not a hex-color") from exc
        return cls(*parts)

    def to_rgb255(self) -> tuple[int, int, int]:
        """Return 8-bit components, rounded half up."""
        return tuple(int(c * 255.0 + 0.5) for c in (self.r, self.g, self.b))  # type: ignore[return-value]

    def clamped(self) -> "Color":
        """Return the colour with every component limited to [0, 1]."""
        return Color(*(min(max(c, 0.0), 1.0) for c in (self.r, self.g, self.b)))

    def blend_rgb(self, other: "Color", t: float) -> "Color":
        """Linear interpolation in sRGB."""
        return Color(
            self.r + t * (other.r - self.r),
            self.g + t * (other.g - self.g),
            self.b + t * (other.b - self.b),
        )

    def _lab(self) -> tuple[float, float, float]:
        r, g, b = (_linearize(c) for c in (self.r, self.g, self.b))
        x = 0.41239079926595948 * r + 0.35758433938387796 * g + 0.18048078840183429 * b
        y = 0.21263900587151036 * r + 0.71516867876775593 * g + 0.072192315360733715 * b
        z = 0.019330818715591851 * r + 0.11919477979462599 * g + 0.95053215224966058 * b
        fy = _lab_f(y / _D65[1])
        return (
            1.16 * fy - 0.16,
            5.0 * (_lab_f(x / _D65[0]) - fy),
            2.0 * (fy - _lab_f(z / _D65[2])),
        )

    @classmethod
    def _from_lab(cls, l: float, a: float, b: float) -> "Color":
        l2 = (l + 0.16) / 1.16
        x = _D65[0] * _lab_finv(l2 + a / 5.0)
        y = _D65[1] * _lab_finv(l2)
        z = _D65[2] * _lab_finv(l2 - b / 2.0)
        r = 3.2409699419045214 * x - 1.5373831775700935 * y - 0.49861076029300328 * z
        g = -0.96924363628087983 * x + 1.8759675015077207 * y + 0.041555057407175613 * z
        bl = 0.055630079696993609 * x - 0.20397695888897657 * y + 1.0569715142428786 * z
        return cls(_delinearize(r), _delinearize(g), _delinearize(bl))

    def _hcl(self) -> tuple[float, float, float]:
        l, a, b = self._lab()
        if abs(b - a) > 1e-4 and abs(a) > 1e-4:
            h = math.fmod(_RAD2DEG * math.atan2(b, a) + 360.0, 360.0)
        else:
            h = 0.0
        return h, math.sqrt(a * a + b * b), l

    @classmethod
    def _from_hcl(cls, h: float, c: float, l: float) -> "Color":
        angle = _DEG2RAD * h
        return cls._from_lab(l, c * math.cos(angle), c * math.sin(angle))

    def blend_lab(self, other: "Color", t: float) -> "Color":
        """Linear interpolation in CIE L*a*b*."""
        l1, a1, b1 = self._lab()
        l2, a2, b2 = other._lab()
        return Color._from_lab(l1 + t * (l2 - l1), a1 + t * (a2 - a1), b1 + t * (b2 - b1))

    def blend_hcl(self, other: "Color", t: float) -> "Color":
        """Interpolation in HCL along the shorter hue arc, clamped to gamut."""
        h1, c1, l1 = self._hcl()
        h2, c2, l2 = other._hcl()
        if c1 <= 0.00015 and c2 >= 0.00015:
            h1 = h2
        elif c2 <= 0.00015 and c1 >= 0.00015:
            h2 = h1
        return Color._from_hcl(
            _interp_angle(h1, h2, t), c1 + t * (c2 - c1), l1 + t * (l2 - l1)
        ).clamped()