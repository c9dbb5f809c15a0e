from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class SimilarityResult(BaseModel):
    match: str = ""
    score: float = 0.0


class PlateResult(BaseModel):
    ok: bool
    confidence: float
    normalized: str
    display: str
    message: str


class YearResult(BaseModel):
    ok: bool
    confidence: float
    year: Optional[int] = None
    message: str


class VehicleForm(BaseModel):
    """Raw, unvalidated form input. Every field is free text.

    JSON numbers (e.g. a numeric year) are accepted and kept as their text.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    plate: str = ""
    make: str = ""
    model: str = ""
    year: str = ""
    variant: str = ""


class Issue(BaseModel):
    """A suggested correction for one form field."""

    field: Literal["plate", "make", "model", "year"]
    label: str
    suggestion: str
    tone: Literal["warn", "bad"] = "warn"


class AcceptedFixes(BaseModel):
    make: bool = False
    model: bool = False
    plate: bool = False
    year: bool = False
    variant: bool = False


class FormEvaluation(BaseModel):
    """Everything derived from one form state."""

    model_config = ConfigDict(protected_namespaces=())

    brand: SimilarityResult
    model: SimilarityResult
    plate: PlateResult
    year: YearResult
    confidence: float
    brand_ok: bool
    model_ok: bool
    issues: list[Issue] = []
    form_valid: bool


class PlatePayload(BaseModel):
    raw: str
    normalized: str
    display: str


class PayloadFlags(BaseModel):
    model_config = ConfigDict(populate_by_name=True, protected_namespaces=())

    plate_pattern_ok: bool = Field(alias="platePatternOk")
    brand_auto_corrected: bool = Field(default=False, alias="brandAutoCorrected")
    model_auto_corrected: bool = Field(default=False, alias="modelAutoCorrected")
    year_auto_corrected: bool = Field(default=False, alias="yearAutoCorrected")


class NormalizedPayload(BaseModel):
    """Normalized record handed to a downstream registry backend."""

    plate: PlatePayload
    brand: str
    model: str
    year: Optional[int] = None
    variant: str = ""
    confidence: float
    flags: PayloadFlags
