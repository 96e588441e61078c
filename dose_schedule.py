"""Dose schedule evaluation.

The daily schedule is a fixed tuple of DoseSlot records. Evaluation produces
two independent views over it:

- a due flag per slot, comparing the slot's decimal hour against the
  integer local hour only (the 12:30 slot therefore flips at 13:00)
- the upcoming selection, comparing against hour + minute/60 and keeping
  at most ``max_upcoming`` slots in schedule order

The two views can disagree between 12:30 and 13:00.
"""

from typing import Sequence, Tuple

from pydantic import BaseModel, Field

from time_context import TimeContext

DEFAULT_MAX_UPCOMING = 2


class DoseSlot(BaseModel):
    """A fixed point in the day at which a dose is scheduled."""

    time: str = Field(..., pattern=r'^([01]\d|2[0-3]):[0-5]\d$', description="HH:MM, 24h clock")
    label: str = Field(..., min_length=1, description="Display label")

    class Config:
        frozen = True

    @property
    def decimal_hour(self) -> float:
        hours, minutes = self.time.split(":")
        return int(hours) + int(minutes) / 60


class EvaluatedDose(BaseModel):
    slot: DoseSlot
    due: bool

    class Config:
        frozen = True


class ScheduleEvaluation(BaseModel):
    """Per-slot due flags plus the upcoming selection."""

    doses: Tuple[EvaluatedDose, ...]
    upcoming: Tuple[DoseSlot, ...]

    class Config:
        frozen = True


DEFAULT_SCHEDULE: Tuple[DoseSlot, ...] = (
    DoseSlot(time="08:00", label="朝の薬"),
    DoseSlot(time="12:30", label="昼の薬"),
    DoseSlot(time="19:00", label="夜の薬"),
    DoseSlot(time="22:00", label="寝る前の薬"),
)


def current_decimal_hour(ctx: TimeContext) -> float:
    return ctx.local_hour + ctx.local_minute / 60


def is_due(slot: DoseSlot, ctx: TimeContext) -> bool:
    # Integer hour only; minutes never affect the due flag.
    return ctx.local_hour >= slot.decimal_hour


def select_upcoming(
    slots: Sequence[DoseSlot],
    ctx: TimeContext,
    limit: int = DEFAULT_MAX_UPCOMING,
) -> Tuple[DoseSlot, ...]:
    """Return up to ``limit`` slots strictly later than the current time, in schedule order."""
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    now = current_decimal_hour(ctx)
    remaining = [slot for slot in slots if slot.decimal_hour > now]
    return tuple(remaining[:limit])


def evaluate_schedule(
    ctx: TimeContext,
    slots: Sequence[DoseSlot] = DEFAULT_SCHEDULE,
    max_upcoming: int = DEFAULT_MAX_UPCOMING,
) -> ScheduleEvaluation:
    """Evaluate the schedule against a time context.

    Args:
        ctx: Resolved time context
        slots: Time-ordered dose slots
        max_upcoming: Cap on the upcoming selection

    Returns:
        ScheduleEvaluation with one EvaluatedDose per slot, in input order
    """
    doses = tuple(EvaluatedDose(slot=slot, due=is_due(slot, ctx)) for slot in slots)
    return ScheduleEvaluation(doses=doses, upcoming=select_upcoming(slots, ctx, max_upcoming))
