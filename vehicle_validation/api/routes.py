"""FastAPI route definitions for the vehicle validation API."""

import asyncio
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from vehicle_validation.api.deps import get_session
from vehicle_validation.config import get_settings
from vehicle_validation.models.dataset import DatasetRow, Metrics
from vehicle_validation.models.vehicle import (
    AcceptedFixes,
    FormEvaluation,
    NormalizedPayload,
    VehicleForm,
)
from vehicle_validation.services.catalog import EXAMPLE_SETS, VEHICLE_CATALOG
from vehicle_validation.services.dataset import DatasetError, DatasetReadError, DatasetSession
from vehicle_validation.services.normalizer import apply_fixes, build_payload

router = APIRouter()


# ---------------------------------------------------------------------------
# Request / Response Models
# ---------------------------------------------------------------------------


class ValidateRequest(VehicleForm):
    accepted: Optional[AcceptedFixes] = None

    @property
    def form(self) -> VehicleForm:
        return VehicleForm(**self.model_dump(exclude={"accepted"}))


class ValidateResponse(BaseModel):
    evaluation: FormEvaluation
    payload: NormalizedPayload


class AutofixRequest(ValidateRequest):
    # None means every field with an open issue
    fix_fields: Optional[list[Literal["plate", "make", "model", "year"]]] = None

    @property
    def form(self) -> VehicleForm:
        return VehicleForm(**self.model_dump(exclude={"accepted", "fix_fields"}))


class AutofixResponse(ValidateResponse):
    form: VehicleForm
    accepted: AcceptedFixes


class DatasetResponse(BaseModel):
    rows: int
    preview: list[DatasetRow] = []
    error: str = ""
    metrics: Optional[Metrics] = None
    makes_learned: int = 0
    models_learned: int = 0


class MetricsResponse(BaseModel):
    metrics: Optional[Metrics] = None


def _dataset_state(session: DatasetSession) -> DatasetResponse:
    return DatasetResponse(
        rows=len(session.rows),
        preview=session.preview(get_settings().dataset_preview_rows),
        error=session.error,
        metrics=session.metrics,
        makes_learned=len(session.tables.makes),
        models_learned=session.tables.model_count,
    )


# ---------------------------------------------------------------------------
# Reference data
# ---------------------------------------------------------------------------


@router.get("/catalog")
def get_catalog():
    """Canonical brands and their models."""
    return {"catalog": VEHICLE_CATALOG}


@router.get("/examples")
def get_examples():
    """Demo form inputs."""
    return {"examples": EXAMPLE_SETS}


# ---------------------------------------------------------------------------
# Form validation
# ---------------------------------------------------------------------------


@router.post("/validate", response_model=ValidateResponse)
def validate(req: ValidateRequest, session: DatasetSession = Depends(get_session)):
    """Validate a form and return the normalized payload."""
    form = req.form
    evaluation = session.evaluate_form(form)
    return ValidateResponse(
        evaluation=evaluation,
        payload=build_payload(form, evaluation, req.accepted),
    )


@router.post("/autofix", response_model=AutofixResponse)
def autofix(req: AutofixRequest, session: DatasetSession = Depends(get_session)):
    """Accept suggested corrections and re-validate the corrected form."""
    evaluation = session.evaluate_form(req.form)
    fixed, accepted = apply_fixes(req.form, evaluation, req.fix_fields, req.accepted)
    fixed_evaluation = session.evaluate_form(fixed)
    return AutofixResponse(
        form=fixed,
        accepted=accepted,
        evaluation=fixed_evaluation,
        payload=build_payload(fixed, fixed_evaluation, accepted),
    )


# ---------------------------------------------------------------------------
# Dataset
# ---------------------------------------------------------------------------


@router.post("/dataset", response_model=DatasetResponse)
async def upload_dataset(
    request: Request, session: DatasetSession = Depends(get_session)
):
    """Load a labelled CSV sent as the raw request body."""
    data = await request.body()
    try:
        # Parsing and the session lock stay off the event loop
        await asyncio.to_thread(session.load_bytes, data)
    except DatasetReadError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DatasetError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _dataset_state(session)


@router.get("/dataset", response_model=DatasetResponse)
def get_dataset(session: DatasetSession = Depends(get_session)):
    """Current dataset preview, last error and metrics."""
    return _dataset_state(session)


@router.post("/dataset/evaluate", response_model=MetricsResponse)
def evaluate_dataset(session: DatasetSession = Depends(get_session)):
    """Measure matching accuracy against the loaded dataset's labels."""
    return MetricsResponse(metrics=session.evaluate())


@router.delete("/dataset", response_model=DatasetResponse)
def clear_dataset(session: DatasetSession = Depends(get_session)):
    session.reset()
    return _dataset_state(session)
