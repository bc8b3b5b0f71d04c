"""Organization-wide plan cycles."""
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from healfit.config import get_settings

settings = get_settings()


@dataclass(frozen=True)
class PlanCycle:
    """A fixed window of days that groups a member's plan."""
    index: int
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


def cycle_for(
    day: date,
    anchor: Optional[date] = None,
    length_days: Optional[int] = None,
) -> PlanCycle:
    """
    Find the plan cycle containing a date.

    Cycles are consecutive windows of ``length_days`` counted from
    ``anchor``; dates before the anchor fall in negative cycles.

    Args:
        day: Date to locate
        anchor: First day of cycle 0 (defaults to settings)
        length_days: Cycle length (defaults to settings)

    Returns:
        PlanCycle with inclusive start and end dates
    """
    anchor = anchor or settings.plan_cycle_anchor
    length = length_days or settings.plan_cycle_days
    if length < 1:
        raise ValueError("Cycle length must be at least one day")

    index = (day - anchor).days // length
    start = anchor + timedelta(days=index * length)
    return PlanCycle(index=index, start=start, end=start + timedelta(days=length - 1))
