"""Template routines - list the catalog and copy a template into a new split."""

from fastapi import APIRouter, Depends

from liftium.api.deps import get_catalog, get_instantiator
from liftium.core.constants import AVAILABLE_ROUTINE_NAMES
from liftium.core.routine_templates import TemplateCatalog
from liftium.core.security import require_user
from liftium.schemas.split import SplitWithDays
from liftium.schemas.template import TemplateInstantiateRequest, TemplateRoutine
from liftium.services.template_instantiation import TemplateInstantiator

router = APIRouter()


@router.get("", response_model=list[TemplateRoutine])
async def list_templates(catalog: TemplateCatalog = Depends(get_catalog)):
    """All predefined routine templates with their days and exercises."""
    return list(catalog.templates)


@router.get("/routine-names", response_model=list[str])
async def routine_names():
    """Routine names offered when assigning days to a split."""
    return list(AVAILABLE_ROUTINE_NAMES)


@router.post(
    "/instantiate",
    response_model=SplitWithDays,
    status_code=201,
    dependencies=[Depends(require_user)],
)
async def instantiate_template(
    payload: TemplateInstantiateRequest,
    instantiator: TemplateInstantiator = Depends(get_instantiator),
):
    """
    Copy a template into a new split. Each day assignment maps a day of week to
    a template day name; names not in the template (e.g. "Rest") become rest days.
    Not idempotent: every call creates a new split.
    """
    return await instantiator.instantiate(
        payload.template_name,
        payload.split_name,
        payload.day_assignments,
    )
