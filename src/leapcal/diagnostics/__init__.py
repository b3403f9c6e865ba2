"""Diagnostics package.

- round_trip: exhaustive-style epoch offset <-> Timestamp checks (stdlib only)
- plot_leaps: leap-second plots (requires the `diagnostics` extra: numpy, matplotlib)
"""

__all__ = ["round_trip", "plot_leaps"]
