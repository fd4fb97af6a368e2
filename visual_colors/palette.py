"""Interfaces for the color palette a `ColorHelper` draws from.

A palette hands out a stable color for every key it is asked about and may
expose named theme colors plus a high contrast flag. How slots are assigned
is up to the palette implementation.
"""

from typing import Any, Protocol

from visual_colors.types import ColorInfo


class ColorPalette(Protocol):
    def get_color(self, key: Any) -> ColorInfo:
        """Return the color associated with `key`, allocating a slot on first use."""
        ...


class ExtendedColorPalette(ColorPalette, Protocol):
    """A palette that knows about themes and high contrast mode.

    Theme colors are plain attributes named after `ThemeColorName`, e.g.
    `palette.background`. A theme may leave any of them unset.
    """

    is_high_contrast: bool
