from pydantic import BaseModel
from typing import Literal


class MemoryUsage(BaseModel):
    used: int  # Mo
    total: int  # Mo
    usage: int  # pourcentage


class HealthResponse(BaseModel):
    status: Literal["healthy", "unhealthy"]
    timestamp: str
    uptime: int  # secondes
    memory: MemoryUsage
    version: str
    environment: str
