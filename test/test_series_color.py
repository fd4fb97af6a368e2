import unittest

import polars as pl

from visual_colors.color_helper import ColorHelper
from visual_colors.dataframes.series_color import SeriesColorSchema, color_for_key
from visual_colors.types import ColorInfo, PropertyIdentifier
from test.fixtures.color_palette import mock_color_palette

FILL_PROP = PropertyIdentifier("dataPoint", "fill")


class TestSeriesColorSchema(unittest.TestCase):
    def test_build_series_values(self):
        color_palette = mock_color_palette(["#FFFF00", "#000000"])
        color_helper = ColorHelper(color_palette, FILL_PROP)

        result = SeriesColorSchema.build(
            color_helper,
            ["Seattle", 2.0, "Boston"],
            objects_by_value={
                "Boston": {"dataPoint": {"fill": {"solid": {"color": "red"}}}}
            },
        )

        self.assertEqual(result.columns, ["key", "color", "highlight_color"])
        self.assertEqual(result["key"].to_list(), ["Seattle", "2", "Boston"])
        self.assertEqual(result["color"].to_list(), ["#FFFF00", "#000000", "red"])
        # "red" is not a parseable color string
        self.assertEqual(
            result["highlight_color"].to_list(), ["#CCCC00", "#333333", None]
        )
        # Boston was overridden, so no slot was allocated for it
        self.assertEqual(list(color_palette.allocated), ["Seattle", "2"])

    def test_build_measures_keeps_slots_stable(self):
        """Test that measures with explicit colors still take their palette slot."""
        color_palette = mock_color_palette()
        color_helper = ColorHelper(color_palette, FILL_PROP)

        result = SeriesColorSchema.build(
            color_helper,
            [0, 1, 2],
            objects_by_value={"1": {"dataPoint": {"fill": {"solid": {"color": "red"}}}}},
            by_measure=True,
        )

        self.assertEqual(result["color"].to_list(), ["#000000", "red", "#000002"])
        self.assertEqual(color_for_key(result, "2"), "#000002")
        self.assertIsNone(color_for_key(result, "3"))

    def test_build_high_contrast_without_theme_color(self):
        """Test that colors are null when the palette has no theme color"""
        color_palette = mock_color_palette()
        color_palette.is_high_contrast = True
        result = SeriesColorSchema.build(ColorHelper(color_palette), ["a"])

        self.assertEqual(result["color"].to_list(), [None])
        self.assertEqual(result["highlight_color"].to_list(), [None])

    def test_build_high_contrast(self):
        color_palette = mock_color_palette()
        color_palette.is_high_contrast = True
        color_palette.background = ColorInfo("#FFFFFF")
        result = SeriesColorSchema.build(ColorHelper(color_palette), ["a", "b"])

        self.assertEqual(result["color"].to_list(), ["#FFFFFF", "#FFFFFF"])
        self.assertEqual(result["highlight_color"].to_list(), ["#CCCCCC", "#CCCCCC"])

    def test_build_empty(self):
        """Test that an empty series still validates against the schema"""
        result = SeriesColorSchema.build(ColorHelper(mock_color_palette()), [])
        self.assertEqual(result.height, 0)
        self.assertEqual(result.schema["key"], pl.Utf8())


if __name__ == "__main__":
    unittest.main()
