from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


def iso_timestamp() -> str:
    """Horodatage UTC ISO-8601 à la milliseconde, suffixe Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ApiResponse(BaseModel):
    """Enveloppe standard des réponses de l'API"""
    data: Any
    success: bool = True
    timestamp: str = Field(default_factory=iso_timestamp)
