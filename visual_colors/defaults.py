"""Centralized default configuration values for color resolution.

This module provides a single source of truth for all default parameter values.
These defaults are used by:
- The codec functions (highlight threshold and delta)
- `ColorHelper` (theme color looked up in high contrast mode)
- CLI argument parsing (as fallbacks when args aren't provided)
"""

# Highlight defaults, also substituted when invalid values are passed
LUMINANCE_THRESHOLD = 0.8
HIGHLIGHT_DELTA = 0.2

# Theme color used in high contrast mode
THEME_COLOR_NAME = "background"

# Logging defaults
LOG_LEVEL = "WARNING"
LOG_FILE: str | None = None
