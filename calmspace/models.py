"""Pydantic models -- single source of truth for all data types."""

from __future__ import annotations

import enum
import uuid
from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, model_validator


class InvalidPatternError(Exception):
    """Raised when a breathing pattern has a non-positive duration or cycle count."""


class Phase(str, enum.Enum):
    """Phases of a breathing cycle, in the order they run."""

    INHALE = "inhale"
    HOLD = "hold"
    EXHALE = "exhale"

    @property
    def next(self) -> Phase:
        order = list(Phase)
        return order[(order.index(self) + 1) % len(order)]


class ExercisePattern(BaseModel):
    """A breathing exercise: how long each phase lasts and how many cycles to run."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    inhale_seconds: StrictInt
    hold_seconds: StrictInt
    exhale_seconds: StrictInt
    total_cycles: StrictInt

    @model_validator(mode="after")
    def _check_positive(self) -> ExercisePattern:
        # InvalidPatternError is not a ValueError, so pydantic lets it through
        for field in ("inhale_seconds", "hold_seconds", "exhale_seconds", "total_cycles"):
            value = getattr(self, field)
            if value < 1:
                raise InvalidPatternError(f"{self.name}: {field} must be at least 1, got {value}")
        return self

    def duration(self, phase: Phase) -> int:
        """Return the length of ``phase`` in seconds."""
        return {
            Phase.INHALE: self.inhale_seconds,
            Phase.HOLD: self.hold_seconds,
            Phase.EXHALE: self.exhale_seconds,
        }[phase]

    @property
    def cycle_seconds(self) -> int:
        return self.inhale_seconds + self.hold_seconds + self.exhale_seconds

    @property
    def total_seconds(self) -> int:
        return self.cycle_seconds * self.total_cycles


class CycleState(BaseModel):
    """Run state of one breathing session. Replaced, never mutated, on each tick."""

    model_config = ConfigDict(frozen=True)

    pattern: ExercisePattern
    current_phase: Phase = Phase.INHALE
    seconds_remaining: int = Field(ge=0)
    completed_cycles: int = Field(default=0, ge=0)
    running: bool = False

    @model_validator(mode="after")
    def _check_bounds(self) -> CycleState:
        limit = self.pattern.duration(self.current_phase)
        if self.seconds_remaining > limit:
            raise ValueError(
                f"seconds_remaining {self.seconds_remaining} exceeds the {limit}s "
                f"{self.current_phase.value} phase"
            )
        if self.completed_cycles > self.pattern.total_cycles:
            raise ValueError(
                f"completed_cycles {self.completed_cycles} exceeds total_cycles "
                f"{self.pattern.total_cycles}"
            )
        return self

    @property
    def is_complete(self) -> bool:
        return self.completed_cycles >= self.pattern.total_cycles

    @property
    def current_cycle(self) -> int:
        """1-based cycle number for display."""
        return min(self.completed_cycles + 1, self.pattern.total_cycles)


class PhaseEntered(BaseModel):
    """Emitted whenever a new phase begins."""

    phase: Phase
    duration: int


class SessionCompleted(BaseModel):
    """Emitted on the tick that finishes the final cycle."""

    completed_cycles: int


BreathingEvent = Union[PhaseEntered, SessionCompleted]


class ResponseCategory(str, enum.Enum):
    """What the companion decided a message was about."""

    CRISIS = "crisis"
    ACADEMIC_STRESS = "academic_stress"
    FAMILY_CONFLICT = "family_conflict"
    LONELINESS = "loneliness"
    ANXIETY = "anxiety"
    GENERAL = "general"


class ClassificationRule(BaseModel):
    """Keywords that select a response category, checked in table order."""

    model_config = ConfigDict(frozen=True)

    category: ResponseCategory
    keywords: tuple[str, ...] = Field(min_length=1)
    responses: tuple[str, ...] = Field(min_length=1)


class Classification(BaseModel):
    """The response chosen for a message, with the category that produced it."""

    category: ResponseCategory
    response: str


class ConversationTurn(BaseModel):
    """A single chat message, as stored in history."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    text: str
    is_from_user: bool
    created_at: datetime = Field(default_factory=datetime.now)


class AppConfig(BaseModel):
    """Application configuration (persisted to ~/.config/calmspace/config.json)."""

    data_path: Optional[str] = None  # None = use default (~/.local/share/calmspace/)
    history_limit: int = Field(default=50, ge=1, le=500)
    chat_seed: Optional[int] = None
    default_exercise: str = "4-7-8 Technique"
