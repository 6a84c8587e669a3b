"""Copy a template routine into the current user's account.

The split, its days and their exercises are planned in memory first (ids,
ordering), then written as one ``WriteSaga``: the split, then for each day the
day followed by its exercises. A failed write aborts the run and leaves what
was already written; retrying creates another split.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from liftium.core.constants import EXERCISES_COLLECTION, SPLIT_DAYS_COLLECTION, SPLITS_COLLECTION
from liftium.core.errors import NotFound
from liftium.core.routine_templates import TemplateCatalog
from liftium.repositories.base import new_id
from liftium.repositories.splits import SplitRepository
from liftium.schemas.split import Exercise, SplitDay, SplitDayWithExercises, SplitWithDays
from liftium.schemas.template import TemplateRoutine, TemplateSplitDay
from liftium.services.codec import EXERCISE_CODEC, SPLIT_CODEC, SPLIT_DAY_CODEC
from liftium.services.saga import WriteSaga

logger = logging.getLogger(__name__)


def _plan_day(
    split_id: str,
    day_of_week: int,
    routine_name: str,
    template_day: TemplateSplitDay | None,
) -> SplitDayWithExercises:
    if template_day is None or template_day.is_rest_day:
        # Unknown routine names and template rest days become rest days named after the assignment
        day = SplitDay(id=new_id(), split_id=split_id, day_of_week=day_of_week, name=routine_name, is_rest_day=True)
        return SplitDayWithExercises(split_day=day, exercises=[])

    day = SplitDay(id=new_id(), split_id=split_id, day_of_week=day_of_week, name=template_day.name, is_rest_day=False)
    exercises = [
        Exercise(
            id=new_id(),
            split_day_id=day.id,
            name=t.name,
            default_sets=t.default_sets,
            rest_time_sec=t.rest_time_sec,
            note=t.note,
            exercise_order=position,
            muscle_groups=t.muscle_groups,
        )
        for position, t in enumerate(template_day.exercises, start=1)
    ]
    return SplitDayWithExercises(split_day=day, exercises=exercises)


def _find_day(template: TemplateRoutine, routine_name: str) -> TemplateSplitDay | None:
    return next((d for d in template.split_days if d.name == routine_name), None)


class TemplateInstantiator:
    def __init__(self, catalog: TemplateCatalog, splits: SplitRepository) -> None:
        self.catalog = catalog
        self.splits = splits

    def plan(
        self,
        template_name: str,
        split_name: str,
        day_assignments: Mapping[int, str],
    ) -> tuple[SplitWithDays, WriteSaga]:
        """Entities to create and the ordered writes that create them."""
        template = self.catalog.find(template_name)
        if template is None:
            raise NotFound(f"Template not found: {template_name}")

        split = self.splits.new_split(split_name)
        saga = WriteSaga(f"instantiate {template_name!r} as split {split.id}")
        saga.put(SPLITS_COLLECTION, split.id, SPLIT_CODEC.encode(split))

        days: list[SplitDayWithExercises] = []
        for day_of_week, routine_name in day_assignments.items():
            planned = _plan_day(split.id, day_of_week, routine_name, _find_day(template, routine_name))
            saga.put(SPLIT_DAYS_COLLECTION, planned.split_day.id, SPLIT_DAY_CODEC.encode(planned.split_day))
            for exercise in planned.exercises:
                saga.put(EXERCISES_COLLECTION, exercise.id, EXERCISE_CODEC.encode(exercise))
            days.append(planned)

        return SplitWithDays(split=split, split_days=days), saga

    async def instantiate(
        self,
        template_name: str,
        split_name: str,
        day_assignments: Mapping[int, str],
    ) -> SplitWithDays:
        """
        Create a split from a template and return exactly what was written.

        Raises NotFound for an unknown template, Unauthenticated without a
        current user and StoreFailure when any write fails.
        """
        result, saga = self.plan(template_name, split_name, day_assignments)
        await saga.execute(self.splits.store)
        logger.info(
            "Split %s created from template %r with %d days",
            result.split.id, template_name, len(result.split_days),
        )
        return result
