"""
Selection mutators.

Each mutator takes a Selection snapshot and returns a new one; nothing is
edited in place. Whether a mutation is allowed at all (it is not while the
flow diagram is animating) is decided by the coordinator.
"""

import math

from salaryflow.data.schemas import DEFAULT_YEAR_BOUNDS, ExperienceLevel, Selection


def reset_selection(bounds: tuple[int, int] = DEFAULT_YEAR_BOUNDS) -> Selection:
    """All levels over the full year range."""
    return Selection(experience_levels=frozenset(ExperienceLevel), year_range=bounds)


def toggle_experience_level(selection: Selection, level: ExperienceLevel | str) -> Selection:
    """Flip membership of one experience level."""
    level = ExperienceLevel(level)
    levels = set(selection.experience_levels)
    if level in levels:
        levels.remove(level)
    else:
        levels.add(level)
    return selection.model_copy(update={"experience_levels": frozenset(levels)})


def _clamp(year: int, bounds: tuple[int, int]) -> int:
    return max(bounds[0], min(bounds[1], year))


def set_year_range(
    selection: Selection,
    year_min: int | None,
    year_max: int | None,
    *,
    bounds: tuple[int, int] = DEFAULT_YEAR_BOUNDS,
) -> Selection:
    """
    Replace the year range, clamped to the dataset bounds.

    A missing end (cleared brush) resets to the full bounds. Reversed ends
    are swapped.
    """
    if year_min is None or year_max is None:
        year_range = bounds
    else:
        low, high = sorted((int(year_min), int(year_max)))
        year_range = (_clamp(low, bounds), _clamp(high, bounds))
    return selection.model_copy(update={"year_range": year_range})


def year_range_from_brush(
    selection: Selection,
    x0: float | None,
    x1: float | None,
    *,
    bounds: tuple[int, int] = DEFAULT_YEAR_BOUNDS,
) -> Selection:
    """Turn a brushed x extent into a year range: floor the left, ceil the right."""
    if x0 is None or x1 is None:
        return set_year_range(selection, None, None, bounds=bounds)
    low, high = sorted((float(x0), float(x1)))
    return set_year_range(selection, math.floor(low), math.ceil(high), bounds=bounds)
