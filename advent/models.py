"""Immutable calendar records; build them with advent.service.build_calendar."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Iterator, Tuple

from advent.errors import ValidationError


@dataclass(frozen=True)
class Day:
    """One calendar slot, gated by its date."""

    number: int
    date: datetime
    unlocked: bool
    content: str

    def is_unlocked(self, now: datetime) -> bool:
        return now >= self.date

    def at(self, now: datetime) -> "Day":
        """Return this day with the unlock flag recomputed for `now`."""
        unlocked = self.is_unlocked(now)
        if unlocked == self.unlocked:
            return self
        return replace(self, unlocked=unlocked)

    def redacted(self) -> "Day":
        if self.unlocked:
            return self
        return replace(self, content="")


@dataclass(frozen=True)
class Calendar:
    year: int
    days: Tuple[Day, ...]

    def __len__(self) -> int:
        return len(self.days)

    def __iter__(self) -> Iterator[Day]:
        return iter(self.days)

    @property
    def total_days(self) -> int:
        return len(self.days)

    @property
    def unlocked_count(self) -> int:
        return sum(1 for day in self.days if day.unlocked)

    def get(self, number: int) -> Day:
        """Look up a day by its 1-based number."""
        if not 1 <= number <= len(self.days):
            raise ValidationError(
                f"Invalid day number: {number} (must be between 1 and {len(self.days)})"
            )
        return self.days[number - 1]

    def at(self, now: datetime) -> "Calendar":
        return replace(self, days=tuple(day.at(now) for day in self.days))

    def public_view(self, now: datetime) -> "Calendar":
        """Read-time calendar with every locked day's content blanked out."""
        return replace(self, days=tuple(day.at(now).redacted() for day in self.days))
