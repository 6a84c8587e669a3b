"""Predefined routine templates users can copy into their account."""

from __future__ import annotations

from collections.abc import Iterable

from liftium.core.enums import MuscleGroup
from liftium.schemas.template import TemplateExercise, TemplateRoutine, TemplateSplitDay

MG = MuscleGroup


class TemplateCatalog:
    """Immutable, name-indexed set of routine templates.

    Built explicitly and handed to the instantiation engine, so tests can pass
    a smaller catalog.
    """

    def __init__(self, templates: Iterable[TemplateRoutine]) -> None:
        self._templates: tuple[TemplateRoutine, ...] = tuple(templates)

    @property
    def templates(self) -> tuple[TemplateRoutine, ...]:
        return self._templates

    def find(self, name: str) -> TemplateRoutine | None:
        """Exact (case-sensitive) name match."""
        return next((t for t in self._templates if t.name == name), None)

    def names(self) -> list[str]:
        return [t.name for t in self._templates]

    def __len__(self) -> int:
        return len(self._templates)


def _ex(name: str, sets: int, rest: int, note: str, muscles: str) -> TemplateExercise:
    return TemplateExercise(name=name, default_sets=sets, rest_time_sec=rest, note=note, muscle_groups=muscles)


PUSH_PULL_LEGS = TemplateRoutine(
    name="Push/Pull/Legs",
    description="Classic 3-day split focusing on push movements, pull movements, and legs",
    split_days=(
        TemplateSplitDay(
            name="Push",
            exercises=(
                _ex("Bench Press", 4, 180, "Keep shoulders retracted and feet planted", MG.CHEST.value),
                _ex("Overhead Press", 3, 120, "Press straight up, maintain tight core", MG.SHOULDERS.value),
                _ex("Incline Dumbbell Press", 3, 90, "Focus on upper chest", MG.CHEST.value),
                _ex("Tricep Dips", 3, 90, "Lean forward slightly for chest emphasis", MG.TRICEPS.value),
                _ex("Lateral Raises", 3, 60, "Control the movement, slight bend in elbows", MG.SHOULDERS.value),
            ),
        ),
        TemplateSplitDay(
            name="Pull",
            exercises=(
                _ex("Pull-ups", 4, 120, "Full range of motion, control the negative", MG.BACK.value),
                _ex("Barbell Rows", 4, 120, "Pull to lower chest, squeeze shoulder blades", MG.BACK.value),
                _ex("Face Pulls", 3, 60, "Pull to face level, external rotation", MG.join(MG.SHOULDERS, MG.BACK)),
                _ex("Bicep Curls", 3, 60, "Keep elbows stationary, full range of motion", MG.BICEPS.value),
                _ex("Hammer Curls", 3, 60, "Neutral grip, targets brachialis", MG.BICEPS.value),
            ),
        ),
        TemplateSplitDay(
            name="Legs",
            exercises=(
                _ex("Squats", 4, 180, "Go to parallel or below, drive through heels", MG.LEGS.value),
                _ex("Romanian Deadlifts", 4, 120, "Keep bar close to body, neutral spine", MG.join(MG.HAMSTRINGS, MG.GLUTES)),
                _ex("Leg Press", 3, 90, "Full range of motion, don't lock knees", MG.LEGS.value),
                _ex("Leg Curls", 3, 60, "Control the negative, squeeze at top", MG.HAMSTRINGS.value),
                _ex("Calf Raises", 4, 45, "Full stretch at bottom, squeeze at top", MG.CALVES.value),
            ),
        ),
    ),
)

UPPER_LOWER = TemplateRoutine(
    name="Upper/Lower",
    description="4-day split alternating between upper and lower body workouts",
    split_days=(
        TemplateSplitDay(
            name="Upper Body",
            exercises=(
                _ex("Bench Press", 4, 180, "Compound movement for chest", MG.CHEST.value),
                _ex("Barbell Rows", 4, 120, "Compound movement for back", MG.BACK.value),
                _ex("Overhead Press", 3, 120, "Shoulders and triceps", MG.SHOULDERS.value),
                _ex("Lat Pulldowns", 3, 90, "Back width", MG.BACK.value),
                _ex("Dumbbell Curls", 3, 60, "Biceps isolation", MG.BICEPS.value),
                _ex("Tricep Pushdowns", 3, 60, "Triceps isolation", MG.TRICEPS.value),
            ),
        ),
        TemplateSplitDay(
            name="Lower Body",
            exercises=(
                _ex("Squats", 4, 180, "King of leg exercises", MG.LEGS.value),
                _ex("Deadlifts", 3, 180, "Full body compound", MG.join(MG.HAMSTRINGS, MG.GLUTES, MG.BACK)),
                _ex("Lunges", 3, 90, "Unilateral leg work", MG.LEGS.value),
                _ex("Leg Curls", 3, 60, "Hamstring isolation", MG.HAMSTRINGS.value),
                _ex("Calf Raises", 4, 45, "Calf development", MG.CALVES.value),
            ),
        ),
    ),
)

FULL_BODY = TemplateRoutine(
    name="Full Body",
    description="3-day per week full body routine for beginners or time-efficient training",
    split_days=(
        TemplateSplitDay(
            name="Full Body",
            exercises=(
                _ex("Squats", 3, 180, "Lower body compound", MG.LEGS.value),
                _ex("Bench Press", 3, 120, "Upper body push", MG.CHEST.value),
                _ex("Barbell Rows", 3, 120, "Upper body pull", MG.BACK.value),
                _ex("Overhead Press", 3, 90, "Shoulders", MG.SHOULDERS.value),
                _ex("Romanian Deadlifts", 3, 120, "Posterior chain", MG.join(MG.HAMSTRINGS, MG.GLUTES)),
                _ex("Planks", 3, 60, "Core stability", MG.CORE.value),
            ),
        ),
    ),
)


def default_catalog() -> TemplateCatalog:
    return TemplateCatalog((PUSH_PULL_LEGS, UPPER_LOWER, FULL_BODY))
