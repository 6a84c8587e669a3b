"""Template routine schemas (immutable catalog entries) and instantiation request."""

from pydantic import BaseModel, ConfigDict, Field


class TemplateExercise(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    default_sets: int
    rest_time_sec: int
    note: str | None = None
    muscle_groups: str


class TemplateSplitDay(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    is_rest_day: bool = False
    exercises: tuple[TemplateExercise, ...] = ()


class TemplateRoutine(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    split_days: tuple[TemplateSplitDay, ...]


class TemplateInstantiateRequest(BaseModel):
    template_name: str = Field(..., min_length=1)
    split_name: str = Field(..., min_length=1, max_length=255)
    # dayOfWeek -> routine (template day) name; unknown names become rest days
    day_assignments: dict[int, str]
