from typing import Any, Dict, List, Optional

from visual_colors.types import ColorInfo

DEFAULT_COLORS = ["#000000", "#000001", "#000002", "#000003"]


class MockColorPalette:
    """A palette that hands out its colors in the order keys are first requested."""

    def __init__(self, colors: List[str]) -> None:
        self.colors = [ColorInfo(color) for color in colors]
        self.is_high_contrast = False
        self.allocated: Dict[Any, ColorInfo] = {}

    def get_color(self, key: Any) -> ColorInfo:
        if key not in self.allocated:
            self.allocated[key] = self.colors[len(self.allocated) % len(self.colors)]
        return self.allocated[key]


def mock_color_palette(colors: Optional[List[str]] = None) -> MockColorPalette:
    """
    Creates a mock color palette for testing.
    """
    return MockColorPalette(colors if colors is not None else DEFAULT_COLORS)
