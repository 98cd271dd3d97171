"""Utility modules for Globetrotter."""

from globetrotter.utils.formatting import (
    format_currency,
    group_digits_indian,
    round_half_up,
    safe_filename_stem,
)

__all__ = ["format_currency", "group_digits_indian", "round_half_up", "safe_filename_stem"]
