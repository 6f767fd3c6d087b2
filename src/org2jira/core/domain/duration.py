"""
Duration Codec - Render second counts as compact work durations.

JIRA stores estimates as raw seconds. For display they are rendered over a
fixed working-time hierarchy: 60 minutes per hour, 8 hours per day and
5 days per week. The week is the top unit and is never divided further.

    >>> encode_duration(3600 * 8 + 90)
    '1d 2m'

There is no calendar arithmetic here; a "day" is always eight hours.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DurationUnit:
    """One step of the unit hierarchy."""

    name: str
    suffix: str
    ratio: Optional[int]  # units of this size per next-larger unit; None for top


DEFAULT_UNITS: tuple[DurationUnit, ...] = (
    DurationUnit("minute", "m", 60),
    DurationUnit("hour", "h", 8),
    DurationUnit("day", "d", 5),
    DurationUnit("week", "w", None),
)


class DurationCodec:
    """
    Encodes second counts into strings such as ``"1w 2d 3h 4m"``.

    Args:
        units: Unit table ordered smallest first. Every unit but the last
            must carry a ratio.
    """

    def __init__(self, units: tuple[DurationUnit, ...] = DEFAULT_UNITS):
        if not units:
            raise ValueError("Unit table must not be empty")
        if any(u.ratio is None or u.ratio <= 0 for u in units[:-1]):
            raise ValueError("Only the top unit may have no ratio")
        self.units = units

    def split(self, seconds: int) -> list[tuple[DurationUnit, int]]:
        """
        Break a second count into per-unit counts, smallest unit first.

        Seconds are rounded up to whole minutes before splitting.
        """
        if seconds < 0:
            raise ValueError(f"Duration must be non-negative, got {seconds}")

        remaining = int(-(-seconds // 60))
        counts = []
        top = self.units[-1]
        for unit in self.units:
            if unit is top:
                counts.append((unit, remaining))
                remaining = 0
            else:
                counts.append((unit, remaining % unit.ratio))
                remaining //= unit.ratio
        return counts

    def encode(self, seconds: int) -> str:
        """Render seconds as a duration string; ``""`` means no duration."""
        parts = [
            f"{count}{unit.suffix}"
            for unit, count in reversed(self.split(seconds))
            if count
        ]
        return " ".join(parts)


_default_codec = DurationCodec()


def encode_duration(seconds: int) -> str:
    """Encode with the default 60/8/5 unit table."""
    return _default_codec.encode(seconds)
