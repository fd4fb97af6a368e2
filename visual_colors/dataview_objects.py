"""Readers for the property bags attached to visual elements.

A property bag maps object names to their properties, e.g.
`{"dataPoint": {"fill": {"solid": {"color": "#FF0000"}}}}`.
"""

from typing import Any, Optional

from visual_colors.types import DataViewObjects, PropertyIdentifier


def get_value(
    objects: Optional[DataViewObjects],
    prop: PropertyIdentifier,
    default: Any = None,
) -> Any:
    if not objects:
        return default

    obj = objects.get(prop.object_name)
    if not obj:
        return default

    return obj.get(prop.property_name, default)


def get_fill_color(
    objects: Optional[DataViewObjects],
    prop: PropertyIdentifier,
    default: Optional[str] = None,
) -> Optional[str]:
    """
    Get the solid color of a fill property.

    Args:
        objects: The property bag, may be missing
        prop: Identifier of the fill property
        default: Returned when no fill color is set

    Returns:
        The fill color string, or `default`
    """
    fill = get_value(objects, prop)
    if not isinstance(fill, dict):
        return default

    solid = fill.get("solid")
    if not isinstance(solid, dict) or not solid.get("color"):
        return default

    return solid["color"]
