from pydantic import BaseModel, ConfigDict

REQUIRED_COLUMNS: tuple[str, ...] = (
    "user_input_plate",
    "user_input_brand",
    "user_input_model",
    "user_input_year",
    "expected_brand",
    "expected_model",
    "expected_year",
)


class DatasetRow(BaseModel):
    """One labelled example. The year columns are kept as text."""

    user_input_plate: str = ""
    user_input_brand: str = ""
    user_input_model: str = ""
    user_input_year: str = ""
    expected_brand: str = ""
    expected_model: str = ""
    expected_year: str = ""


class Metrics(BaseModel):
    model_config = ConfigDict(protected_namespaces=())

    total: int
    make_accuracy: float
    model_accuracy: float
    year_accuracy: float
