import logging
import math
from typing import Any, Callable, Optional

from visual_colors import defaults
from visual_colors.dataview_objects import get_fill_color
from visual_colors.palette import ColorPalette, ExtendedColorPalette
from visual_colors.types import (
    DataViewObjects,
    PrimitiveValue,
    PropertyIdentifier,
    Selector,
    ThemeColorName,
)

logger = logging.getLogger(__name__)

FillColorReader = Callable[[Optional[DataViewObjects], PropertyIdentifier], Optional[str]]


def normalize_selector(
    selector: Optional[Selector], is_single_series: bool = False
) -> Optional[Selector]:
    """
    Strip everything but the `data` part from a selector.

    For single series and dynamic series charts, colors are set per category,
    so the measure (metadata repetition) must not be part of the key.

    Args:
        selector: The selector to normalize, may be missing
        is_single_series: Whether the chart shows a single series

    Returns:
        A selector holding only `data`, or `selector` unchanged
    """
    if selector is not None and (is_single_series or selector.get("data") is not None):
        return {"data": selector.get("data")}

    return selector


def palette_key(value: PrimitiveValue) -> str:
    # Render keys the way a chart prints them, so 1 and 1.0 share a slot
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        # Integral floats print without a fraction until they switch to exponents
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
    return str(value)


class ColorHelper:
    """Resolves the color of a series value or a measure.

    High contrast theme colors win over everything, followed by an explicit
    fill color in the property bag, then the default color, and finally a
    color allocated from the palette.
    """

    def __init__(
        self,
        color_palette: Optional[ColorPalette | ExtendedColorPalette],
        fill_prop: Optional[PropertyIdentifier] = None,
        default_data_point_color: Optional[str] = None,
        fill_color_reader: FillColorReader = get_fill_color,
    ) -> None:
        self.color_palette = color_palette
        self.fill_prop = fill_prop
        self.default_data_point_color = default_data_point_color
        self._read_fill_color = fill_color_reader

    normalize_selector = staticmethod(normalize_selector)

    def get_color_for_series_value(
        self,
        objects: Optional[DataViewObjects],
        value: PrimitiveValue,
        theme_color_name: Optional[ThemeColorName] = None,
    ) -> Optional[str]:
        """
        Gets the color for the given series value.

        If no explicit color or default color has been set then the color is
        allocated from the palette for this series.
        """
        if self.is_high_contrast:
            return self.get_theme_color(theme_color_name)

        return (
            self._explicit_fill_color(objects)
            or self.default_data_point_color
            or self._allocate_color(palette_key(value))
        )

    def get_color_for_measure(
        self,
        objects: Optional[DataViewObjects],
        measure_key: Any,
        theme_color_name: Optional[ThemeColorName] = None,
    ) -> Optional[str]:
        """Gets the color for the given measure."""
        if self.is_high_contrast:
            return self.get_theme_color(theme_color_name)

        # Allocate the palette slot even if it goes unused, so every measure
        # keeps the same slot whether or not others have explicit colors
        scale_color = self._allocate_color(measure_key)

        return (
            self._explicit_fill_color(objects)
            or self.default_data_point_color
            or scale_color
        )

    @property
    def is_high_contrast(self) -> bool:
        return bool(
            self.color_palette is not None
            and getattr(self.color_palette, "is_high_contrast", False)
        )

    def get_theme_color(
        self, theme_color_name: Optional[ThemeColorName] = None
    ) -> Optional[str]:
        theme_color_name = theme_color_name or defaults.THEME_COLOR_NAME
        if self.color_palette is None:
            return None

        theme_color = getattr(self.color_palette, theme_color_name, None)
        if theme_color is None:
            logger.debug(f"Palette has no theme color {theme_color_name!r}")
            return None

        return theme_color.value

    def get_high_contrast_color(
        self,
        theme_color_name: Optional[ThemeColorName] = None,
        default_color: Optional[str] = None,
    ) -> Optional[str]:
        if self.is_high_contrast:
            return self.get_theme_color(theme_color_name)
        return default_color

    def _allocate_color(self, key: Any) -> Optional[str]:
        if self.color_palette is None:
            return None
        return self.color_palette.get_color(key).value

    def _explicit_fill_color(self, objects: Optional[DataViewObjects]) -> Optional[str]:
        if self.fill_prop is None:
            return None
        return self._read_fill_color(objects, self.fill_prop)
