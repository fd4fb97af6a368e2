from typing import Any, Callable, Literal, NamedTuple, Optional, TypeAlias

PrimitiveValue: TypeAlias = str | int | float | bool | None
Selector: TypeAlias = dict[str, Any]
DataViewObjects: TypeAlias = dict[str, dict[str, Any]]
LinearColorScale: TypeAlias = Callable[[Optional[float]], Optional[str]]

ThemeColorName: TypeAlias = Literal[
    "background",
    "foreground",
    "foreground_light",
    "foreground_dark",
    "foreground_neutral_light",
    "foreground_neutral_dark",
    "foreground_neutral_secondary",
    "foreground_neutral_tertiary",
    "foreground_selected",
    "hyperlink",
    "visited_hyperlink",
    "selection",
    "separator",
    "negative",
    "positive",
]


class RgbColor(NamedTuple):
    """An RGB color with an optional alpha channel.

    Channels are not clamped here; consumers clamp to [0, 255] when they
    format or blend.
    """

    r: int
    g: int
    b: int
    a: Optional[float] = None


class HsvColor(NamedTuple):
    h: float
    s: float
    v: float


class ColorInfo(NamedTuple):
    """A color handed out by a palette, either a slot or a theme color."""

    value: str


class PropertyIdentifier(NamedTuple):
    """Where a property lives inside a `DataViewObjects` bag."""

    object_name: str
    property_name: str
