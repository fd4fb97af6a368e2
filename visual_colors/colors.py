"""Color utility functions for charts and visuals.

This module parses color strings, converts between RGB and HSV, blends and
darkens colors, derives highlight colors and builds linear color scales.
None of these functions raise on malformed colors: a color that cannot be
parsed is reported as `None` (or `""` for `hex_to_rgb_string`).
"""

import logging
import math
import re
from typing import List, Optional, Sequence

import polars as pl

from visual_colors import defaults
from visual_colors.types import HsvColor, LinearColorScale, RgbColor

logger = logging.getLogger(__name__)

_HEX_LONG = re.compile(
    r"#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})", re.IGNORECASE | re.ASCII
)
_HEX_SHORT = re.compile(r"#?([a-f\d])([a-f\d])([a-f\d])", re.IGNORECASE | re.ASCII)
_RGB = re.compile(r"rgb\((\d+),\s*(\d+),\s*(\d+)\)", re.ASCII)
_RGBA = re.compile(r"rgba\((\d+),\s*(\d+),\s*(\d+),\s*(\d*(?:\.\d+)?)\)", re.ASCII)


def _round_half_up(value: float) -> int:
    # Halves round toward positive infinity, so -42.5 becomes -42
    return math.floor(value + 0.5)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def hex_to_rgb_string(hex_color: str, transparency: Optional[float] = None) -> str:
    """
    Convert a hex color to an `rgb(...)` or `rgba(...)` string.

    Args:
        hex_color: A hex color like '#112233', '#123', '112233' or '123'
        transparency: Alpha written into an `rgba(...)` string; `None` gives `rgb(...)`

    Returns:
        The rgb/rgba string, or an empty string when the input is not a
        3 or 6 digit hex color
    """
    # Expand shorthand form (e.g. "03F") to full form (e.g. "0033FF")
    short = _HEX_SHORT.fullmatch(hex_color)
    if short:
        hex_color = "".join(c * 2 for c in short.groups())

    result = _HEX_LONG.fullmatch(hex_color)
    if result is None:
        logger.debug(f"Cannot convert {hex_color!r} to an rgb string")
        return ""

    r, g, b = (int(channel, 16) for channel in result.groups())

    if transparency is None or math.isnan(transparency):
        return f"rgb({r},{g},{b})"
    return f"rgba({r},{g},{b},{_format_number(transparency)})"


def rotate(color: str, rotate_factor: float) -> Optional[str]:
    """
    Rotate the hue of a color by `rotate_factor` turns of the color wheel.

    A factor of 0 returns `color` unchanged, without normalizing it.
    A NaN or infinite factor gives `None`.
    """
    if rotate_factor == 0:
        return color

    if not math.isfinite(rotate_factor):
        logger.debug(f"Cannot rotate {color!r} by {rotate_factor}")
        return None

    original_rgb = parse_color_string(color)
    if original_rgb is None:
        return None

    rotated_hsv = _rotate_hsv(_rgb_to_hsv(original_rgb), rotate_factor)
    return hex_string(_hsv_to_rgb(rotated_hsv))


def normalize_to_hex_string(color: str) -> Optional[str]:
    rgb = parse_color_string(color)
    if rgb is None:
        return None
    return hex_string(rgb)


def parse_color_string(color: str) -> Optional[RgbColor]:
    """
    Parse a color string into an `RgbColor`.

    Supported forms are `#RGB`, `#RRGGBB`, `rgb(r, g, b)` and
    `rgba(r, g, b, a)`. Only the rgba form carries alpha.

    Args:
        color: The color string to parse

    Returns:
        The parsed color, or `None` if the string is not one of the supported forms
    """
    if "#" in color:
        if len(color) == 7:
            # #RRGGBB
            result = _HEX_LONG.fullmatch(color)
            if result is not None:
                r, g, b = result.groups()
                return RgbColor(int(r, 16), int(g, 16), int(b, 16))
        elif len(color) == 4:
            # #RGB
            result = _HEX_SHORT.fullmatch(color)
            if result is not None:
                r, g, b = result.groups()
                return RgbColor(int(r * 2, 16), int(g * 2, 16), int(b * 2, 16))
    elif "rgb(" in color:
        result = _RGB.fullmatch(color)
        if result is not None:
            r, g, b = result.groups()
            return RgbColor(int(r), int(g), int(b))
    elif "rgba(" in color:
        result = _RGBA.fullmatch(color)
        if result is not None and result.group(4):
            r, g, b, a = result.groups()
            return RgbColor(int(r), int(g), int(b), float(a))

    logger.debug(f"Unable to parse color string {color!r}")
    return None


def _rgb_to_hsv(rgb_color: RgbColor) -> HsvColor:
    r = rgb_color.r / 255
    g = rgb_color.g / 255
    b = rgb_color.b / 255

    min_channel = min(r, g, b)
    max_channel = max(r, g, b)

    v = max_channel
    delta = max_channel - min_channel
    if max_channel == 0 or delta == 0:
        # Black or gray: hue is undefined, use 0 for both hue and saturation
        s = 0.0
        h = 0.0
    else:
        s = delta / max_channel
        if r == max_channel:
            # Between yellow and magenta
            h = (g - b) / delta
        elif g == max_channel:
            # Between cyan and yellow
            h = 2 + (b - r) / delta
        else:
            # Between magenta and cyan
            h = 4 + (r - g) / delta

    h /= 6
    if h < 0:
        h += 1

    return HsvColor(h, s, v)


def _hsv_to_rgb(hsv_color: HsvColor) -> RgbColor:
    h, s, v = hsv_color

    if s == 0:
        # Some flavor of gray
        r = g = b = v
    else:
        # The color wheel consists of 6 sectors
        sector_pos = (h % 1) * 6
        sector_number = math.floor(sector_pos)
        fractional_sector = sector_pos - sector_number

        p = v * (1.0 - s)
        q = v * (1.0 - (s * fractional_sector))
        t = v * (1.0 - (s * (1 - fractional_sector)))

        match sector_number % 6:
            case 0:
                r, g, b = v, t, p
            case 1:
                r, g, b = q, v, p
            case 2:
                r, g, b = p, v, t
            case 3:
                r, g, b = p, q, v
            case 4:
                r, g, b = t, p, v
            case _:
                r, g, b = v, p, q

    return RgbColor(
        math.floor(r * 255),
        math.floor(g * 255),
        math.floor(b * 255),
    )


def _rotate_hsv(hsv_color: HsvColor, rotate_factor: float) -> HsvColor:
    new_h = hsv_color.h + rotate_factor
    return hsv_color._replace(h=new_h - 1 if new_h > 1 else new_h)


def darken(color: RgbColor, diff: float) -> Optional[RgbColor]:
    """Subtract `floor(diff)` from every channel, stopping at 0. Alpha is dropped.

    A NaN or infinite `diff` gives `None`.
    """
    if not math.isfinite(diff):
        logger.debug(f"Cannot darken {color} by {diff}")
        return None

    floored = math.floor(diff)
    return RgbColor(
        max(0, color.r - floored),
        max(0, color.g - floored),
        max(0, color.b - floored),
    )


def rgb_string(color: RgbColor) -> str:
    if color.a is None:
        return f"rgb({color.r},{color.g},{color.b})"
    return f"rgba({color.r},{color.g},{color.b},{_format_number(color.a)})"


def hex_string(color: RgbColor) -> str:
    return "#" + "".join(_component_to_hex(channel) for channel in color[:3])


def hex_blend(fore_color: str, opacity: float, back_color: str) -> Optional[str]:
    """
    Overlay a color with opacity over a background color.

    Args:
        fore_color: Color to overlay
        opacity: Number between 0 (transparent) and 1 (opaque)
        back_color: Background color

    Returns:
        The blended color as `#RRGGBB`, or `None` if either color does not parse
    """
    fore = parse_color_string(fore_color)
    back = parse_color_string(back_color)
    if fore is None or back is None:
        return None
    return hex_string(rgb_blend(fore, opacity, back))


def rgb_blend(fore_color: RgbColor, opacity: float, back_color: RgbColor) -> RgbColor:
    """
    Overlay a color with opacity over a background color. Any alpha channel is ignored.

    Args:
        fore_color: Color to overlay
        opacity: Number between 0 (transparent) and 1 (opaque).
            Out of range values are corrected.
        back_color: Background color

    Returns:
        The blended color, without alpha
    """
    opacity = _clamp(opacity, 0, 1)

    return RgbColor(
        channel_blend(fore_color.r, opacity, back_color.r),
        channel_blend(fore_color.g, opacity, back_color.g),
        channel_blend(fore_color.b, opacity, back_color.b),
    )


def channel_blend(fore_channel: float, opacity: float, back_channel: float) -> int:
    """
    Blend a single channel of two colors.

    Args:
        fore_channel: Channel of the foreground color, forced into [0, 255]
        opacity: Opacity of the foreground color, forced into [0, 1]
        back_channel: Channel of the background color, forced into [0, 255]

    Returns:
        The resulting channel value
    """
    opacity = _clamp(opacity, 0, 1)
    fore_channel = _clamp(fore_channel, 0, 255)
    back_channel = _clamp(back_channel, 0, 255)

    return _round_half_up((opacity * fore_channel) + ((1 - opacity) * back_channel))


def calculate_highlight_color(
    rgb_color: RgbColor,
    luminance_threshold: float = defaults.LUMINANCE_THRESHOLD,
    delta: float = defaults.HIGHLIGHT_DELTA,
) -> str:
    """
    Calculate the highlight color of `rgb_color`.

    Colors whose HSV value is below `luminance_threshold` get brighter by
    `delta`, all others get darker by `delta`.

    Args:
        rgb_color: The original color
        luminance_threshold: Value in (0, 1] deciding between brightening and darkening
        delta: Amount added to or removed from the HSV value. `luminance_threshold + delta`
            cannot be greater than 1.

    Returns:
        The highlight color as `#RRGGBB`
    """
    hsv_color = _rgb_to_hsv(rgb_color)

    if luminance_threshold + delta > 1 or luminance_threshold <= 0 or delta <= 0:
        logger.warning(
            f"Invalid highlight threshold {luminance_threshold} and delta {delta}, "
            f"using {defaults.LUMINANCE_THRESHOLD} and {defaults.HIGHLIGHT_DELTA}"
        )
        luminance_threshold = defaults.LUMINANCE_THRESHOLD
        delta = defaults.HIGHLIGHT_DELTA

    if hsv_color.v < luminance_threshold:
        v = hsv_color.v + delta
    else:
        v = hsv_color.v - delta

    return hex_string(_hsv_to_rgb(hsv_color._replace(v=_clamp(v, 0, 1))))


def _component_to_hex(component: float) -> str:
    return f"{int(_clamp(component, 0, 255)):02X}"


def create_linear_color_scale(
    domain: Sequence[float], range_: Sequence[str], clamp: bool
) -> LinearColorScale:
    """
    Build a function mapping numbers onto colors by linear interpolation.

    Args:
        domain: Ascending breakpoints
        range_: One color per breakpoint
        clamp: Whether values at or beyond the ends of `domain` return the
            end colors verbatim

    Returns:
        A scale function. `None` is treated as 0, NaN gives `None`. Values
        outside the domain snap to the nearest end color even when `clamp`
        is false.
    """
    assert len(domain) == len(range_), "domain and range must have the same length"

    range_colors: List[Optional[RgbColor]] = [
        parse_color_string(color) for color in range_
    ]

    def scale(value: Optional[float]) -> Optional[str]:
        if value is None:
            value = 0
        if math.isnan(value):
            return None
        if not domain:
            return None

        if clamp:
            if value >= domain[-1]:
                return range_[-1]
            if value <= domain[0]:
                return range_[0]

        for i in range(1, len(domain)):
            domain_min = domain[i - 1]
            domain_max = domain[i]
            if domain_max == value:
                return range_[i]
            if domain_min <= value <= domain_max:
                range_min = range_colors[i - 1]
                range_max = range_colors[i]
                break
        else:
            logger.debug(f"Value {value} is outside of the scale domain {list(domain)}")
            return range_[0] if value < domain[0] else range_[-1]

        if range_min is None or range_max is None:
            return None

        def interpolate(low: int, high: int) -> int:
            return _round_half_up(
                ((value - domain_min) * (high - low)) / (domain_max - domain_min) + low
            )

        return hex_string(
            RgbColor(
                interpolate(range_min.r, range_max.r),
                interpolate(range_min.g, range_max.g),
                interpolate(range_min.b, range_max.b),
            )
        )

    return scale


def shade_color(color: str, percent: float) -> Optional[str]:
    """
    Lighten (positive `percent`) or darken (negative `percent`) a `#RRGGBB` color.

    Each channel moves `abs(percent)` of the way toward white or black.

    Args:
        color: A hex color string like '#00B8AA'
        percent: Fraction between -1 and 1, larger magnitudes act as 1

    Returns:
        A lowercase hex color string, or `None` if `color` is not hex
        or `percent` is NaN or infinite
    """
    if not math.isfinite(percent):
        logger.debug(f"Cannot shade {color!r} by {percent}")
        return None

    try:
        hex_num = int(color[1:], 16)
    except ValueError:
        logger.debug(f"Cannot shade non-hex color {color!r}")
        return None

    target = 0 if percent < 0 else 255
    p = min(1, -percent if percent < 0 else percent)

    r = hex_num >> 16
    g = hex_num >> 8 & 0x00FF
    b = hex_num & 0x0000FF

    shaded = (
        0x1000000
        + (_round_half_up((target - r) * p) + r) * 0x10000
        + (_round_half_up((target - g) * p) + g) * 0x100
        + (_round_half_up((target - b) * p) + b)
    )
    return "#" + format(shaded, "x")[1:]


def normalize_hex_colors_polars(colors: pl.Series) -> pl.Series:
    """
    Normalize all colors in a Polars Series to `#RRGGBB`.

    Args:
        colors: Polars Series containing color strings in any supported form

    Returns:
        Polars Series with hex colors, null where a color does not parse
    """
    return colors.map_elements(normalize_to_hex_string, return_dtype=pl.Utf8)


def shade_colors_polars(colors: pl.Series, percent: float) -> pl.Series:
    """
    Shade all hex colors in a Polars Series.

    Args:
        colors: Polars Series containing hex color strings
        percent: Fraction to lighten (positive) or darken (negative) by

    Returns:
        Polars Series with lowercase shaded hex colors
    """
    return colors.map_elements(
        lambda color: shade_color(color, percent), return_dtype=pl.Utf8
    )


def apply_linear_color_scale_polars(
    values: pl.Series, scale: LinearColorScale
) -> pl.Series:
    """Map a numeric Polars Series through a linear color scale. Nulls are scaled as 0."""
    return values.map_elements(scale, return_dtype=pl.Utf8, skip_nulls=False)
