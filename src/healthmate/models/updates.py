"""Typed partial updates for daily logs.

Each section update records which of its fields were actually supplied
in ``provided``. Merging copies only those fields, so a field explicitly
set to ``0`` or ``None`` is applied while an absent one is left alone.
"""

from dataclasses import dataclass, field
from datetime import datetime

from .health_log import FitnessLevel, Mood, SleepQuality


@dataclass
class PartialUpdate:
    """Base for updates that carry a per-field presence set."""

    provided: frozenset[str] = field(default_factory=frozenset)

    def has(self, name: str) -> bool:
        """Return True if the field was supplied in the payload."""
        return name in self.provided

    def apply_to(self, target) -> None:
        """Copy every supplied field onto ``target``."""
        for name in sorted(self.provided):
            setattr(target, name, getattr(self, name))

    def is_empty(self) -> bool:
        return not self.provided


@dataclass
class StepsUpdate(PartialUpdate):
    count: int | None = None
    goal: int | None = None


@dataclass
class SleepUpdate(PartialUpdate):
    duration: float | None = None
    quality: SleepQuality | None = None
    bedtime: datetime | None = None
    wake_time: datetime | None = None


@dataclass
class DietUpdate(PartialUpdate):
    """Diet fields accepted through a merge.

    Meals are intentionally absent: they only grow through add-meal.
    """

    water_intake: int | None = None


@dataclass
class BodyCompositionUpdate(PartialUpdate):
    body_fat_percentage: float | None = None
    muscle_mass: float | None = None
    bone_density: float | None = None
    bmi: float | None = None
    fitness_level: FitnessLevel | None = None
    notes: str | None = None


@dataclass
class BloodPressureUpdate(PartialUpdate):
    systolic: int | None = None
    diastolic: int | None = None
    pulse: int | None = None
    notes: str | None = None


@dataclass
class DailyLogUpdate(PartialUpdate):
    """Partial update to one day's log.

    Section updates are ``None`` when the section is absent from the
    payload. Scalars (``mood``, ``energy``, ``weight``, ``notes``) follow
    the ``provided`` set like section fields do.
    """

    date: datetime | None = None
    steps: StepsUpdate | None = None
    sleep: SleepUpdate | None = None
    diet: DietUpdate | None = None
    body_composition: BodyCompositionUpdate | None = None
    blood_pressure: BloodPressureUpdate | None = None
    mood: Mood | None = None
    energy: int | None = None
    weight: float | None = None
    notes: str | None = None
