from __future__ import annotations

from enum import Enum

from monetary.errors import InvalidArgumentError
from monetary.numeric_tools import pow10


class RoundingMode(Enum):
    """Enumeration of supported rounding modes."""

    DOWN = "down"
    UP = "up"
    CEILING = "ceiling"
    FLOOR = "floor"
    HALF_UP = "half_up"
    HALF_DOWN = "half_down"
    HALF_EVEN = "half_even"

    @classmethod
    def from_value(cls, mode: RoundingMode | str) -> RoundingMode:
        """Resolve a `RoundingMode` from a member or from its (alias) name.

        Accepted names are the member values plus the aliases "truncate" (DOWN),
        "ceil" (CEILING), "default" (HALF_UP) and "banker" (HALF_EVEN).

        Raises:
            InvalidArgumentError: If $mode is not a known rounding mode.
        """
        if isinstance(mode, cls):
            return mode

        if isinstance(mode, str):
            name = mode.lower()
            if name in _ALIASES:
                return _ALIASES[name]
            try:
                return cls(name)
            except ValueError:
                pass

        raise InvalidArgumentError(f"Cannot resolve rounding mode because $mode ({mode!r}) is not a valid rounding mode")

    @classmethod
    def from_half(cls, half: str) -> RoundingMode:
        """Resolve the tie-breaking shorthand "up", "down" or "even" to a HALF_* mode.

        Raises:
            InvalidArgumentError: If $half is not one of the shorthands.
        """
        if isinstance(half, str) and half.lower() in _HALF_MODES:
            return _HALF_MODES[half.lower()]

        raise InvalidArgumentError(f"Cannot resolve rounding mode because $half ({half!r}) is not 'up', 'down' or 'even'")


_ALIASES: dict[str, RoundingMode] = {
    "truncate": RoundingMode.DOWN,
    "ceil": RoundingMode.CEILING,
    "default": RoundingMode.HALF_UP,
    "banker": RoundingMode.HALF_EVEN,
}

_HALF_MODES: dict[str, RoundingMode] = {
    "up": RoundingMode.HALF_UP,
    "down": RoundingMode.HALF_DOWN,
    "even": RoundingMode.HALF_EVEN,
}


def round_magnitude(magnitude: int, drop: int, mode: RoundingMode) -> int:
    """Drop the $drop least significant digits of $magnitude, rounding by $mode.

    The dropped suffix is compared as a whole against exactly half a unit of the kept
    part (`5 * 10 ** (drop - 1)`), so ties are detected correctly no matter how many
    digits are dropped.

    Args:
        magnitude: Signed integer digits of the value.
        drop: Number of trailing digits to remove (>= 1).
        mode: Rounding mode deciding whether the kept part is incremented.

    Returns:
        The signed kept part, one unit larger in absolute value when rounding away from zero.
    """
    kept, dropped = divmod(abs(magnitude), pow10(drop))
    half = 5 * pow10(drop - 1)

    if mode is RoundingMode.CEILING:
        increment = magnitude > 0 and dropped != 0
    elif mode is RoundingMode.FLOOR:
        increment = magnitude < 0 and dropped != 0
    elif mode is RoundingMode.HALF_DOWN:
        increment = dropped > half
    elif mode is RoundingMode.HALF_EVEN:
        increment = dropped > half or (dropped == half and kept % 2 == 1)
    elif mode is RoundingMode.HALF_UP:
        increment = dropped >= half
    elif mode is RoundingMode.UP:
        increment = dropped != 0
    else:
        increment = False

    if increment:
        kept += 1

    return -kept if magnitude < 0 else kept
