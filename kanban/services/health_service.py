"""
Service santé - statut du process, uptime, mémoire
"""

import os
import resource
import sys
import time

from kanban.core.config import settings
from kanban.schemas.common import iso_timestamp
from kanban.schemas.health import HealthResponse, MemoryUsage

_STARTED_AT = time.monotonic()
_MB = 1024 * 1024


def get_uptime() -> int:
    return int(time.monotonic() - _STARTED_AT)


def get_resident_memory() -> int:
    """Mémoire résidente du process, en octets"""
    try:
        with open("/proc/self/statm") as f:
            pages = int(f.read().split()[1])
        return pages * os.sysconf("SC_PAGE_SIZE")
    except (OSError, ValueError, IndexError):
        # ru_maxrss: octets sur macOS, Ko ailleurs
        peak = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
        return peak if sys.platform == "darwin" else peak * 1024


def get_total_memory() -> int:
    return os.sysconf("SC_PAGE_SIZE") * os.sysconf("SC_PHYS_PAGES")


def build_health_report() -> HealthResponse:
    used = get_resident_memory()
    total = get_total_memory()
    return HealthResponse(
        status="healthy",
        timestamp=iso_timestamp(),
        uptime=get_uptime(),
        memory=MemoryUsage(
            used=round(used / _MB),
            total=round(total / _MB),
            usage=round(used / total * 100),
        ),
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )


def build_unhealthy_report() -> HealthResponse:
    return HealthResponse(
        status="unhealthy",
        timestamp=iso_timestamp(),
        uptime=get_uptime(),
        memory=MemoryUsage(used=0, total=0, usage=0),
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
    )
