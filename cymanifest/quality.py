"""Mapping of measured frame heights onto the player's quality ladder."""

import bisect

# Vertical resolutions accepted by the custom media player, ascending.
QUALITY_LADDER: tuple[int, ...] = (240, 360, 480, 540, 720, 1080, 1440, 2160)


def nearest_quality(height: int) -> int:
    """Round *height* up to the next ladder rung.

    Heights above the top rung clamp to it; anything at or below 240 is 240.
    """
    idx = bisect.bisect_left(QUALITY_LADDER, height)
    if idx >= len(QUALITY_LADDER):
        return QUALITY_LADDER[-1]
    return QUALITY_LADDER[idx]
