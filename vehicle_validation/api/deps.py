"""FastAPI dependency injection."""

from vehicle_validation.config import get_settings
from vehicle_validation.services.dataset import DatasetSession

_session: DatasetSession | None = None


def get_session() -> DatasetSession:
    """Dependency for the process-wide dataset session."""
    global _session
    if _session is None:
        _session = DatasetSession(cache_size=get_settings().evaluation_cache_size)
    return _session
