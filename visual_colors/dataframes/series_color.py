import logging
from typing import Dict, Optional, Sequence

import dataframely as dy
import polars as pl
from contexttimer import Timer

from visual_colors import defaults
from visual_colors.color_helper import ColorHelper, palette_key
from visual_colors.colors import calculate_highlight_color, parse_color_string
from visual_colors.types import DataViewObjects, PrimitiveValue

logger = logging.getLogger(__name__)


class SeriesColorSchema(dy.Schema):
    key = dy.String(nullable=False)
    color = dy.String(nullable=True)  # `null` in high contrast mode without a theme color
    highlight_color = dy.String(nullable=True)  # `null` if `color` is not a parseable color

    @classmethod
    def build(
        cls,
        color_helper: ColorHelper,
        values: Sequence[PrimitiveValue],
        objects_by_value: Optional[Dict[str, DataViewObjects]] = None,
        by_measure: bool = False,
        luminance_threshold: float = defaults.LUMINANCE_THRESHOLD,
        delta: float = defaults.HIGHLIGHT_DELTA,
    ) -> dy.DataFrame["SeriesColorSchema"]:
        """
        Resolve the colors of every value of a series.

        Values are resolved in order, so palette slots are allocated in the
        order the values are given.

        Args:
            color_helper: Resolves the color of each value
            values: Series values or measure keys
            objects_by_value: Property bags keyed by the value's key
            by_measure: Resolve with `get_color_for_measure` instead of
                `get_color_for_series_value`
            luminance_threshold: Passed on to `calculate_highlight_color`
            delta: Passed on to `calculate_highlight_color`
        """
        objects_by_value = objects_by_value or {}
        rows = []

        with Timer(
            output=logger.info, prefix=f"Resolving colors for {len(values)} values"
        ):
            for value in values:
                key = palette_key(value)
                objects = objects_by_value.get(key)

                if by_measure:
                    color = color_helper.get_color_for_measure(objects, value)
                else:
                    color = color_helper.get_color_for_series_value(objects, value)

                rows.append(
                    {
                        "key": key,
                        "color": color,
                        "highlight_color": _highlight_color(
                            color, luminance_threshold, delta
                        ),
                    }
                )

        df = pl.DataFrame(
            rows,
            schema={
                "key": pl.Utf8(),
                "color": pl.Utf8(),
                "highlight_color": pl.Utf8(),
            },
        )
        return cls.validate(df)


def _highlight_color(
    color: Optional[str], luminance_threshold: float, delta: float
) -> Optional[str]:
    if color is None:
        return None

    rgb = parse_color_string(color)
    if rgb is None:
        return None

    return calculate_highlight_color(rgb, luminance_threshold, delta)


def color_for_key(
    series_color_df: dy.DataFrame[SeriesColorSchema], key: str
) -> Optional[str]:
    colors = series_color_df.filter(pl.col("key") == key)["color"].to_list()
    return colors[0] if colors else None
