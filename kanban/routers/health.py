import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from kanban.services.health_service import build_health_report, build_unhealthy_report

logger = logging.getLogger(__name__)

router = APIRouter()

NO_CACHE_HEADERS = {"Cache-Control": "no-cache, no-store, must-revalidate"}


@router.get("")
def health():
    # Statut détaillé du process
    try:
        report = build_health_report()
        status_code = status.HTTP_200_OK
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        report = build_unhealthy_report()
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(report.model_dump(), status_code=status_code, headers=NO_CACHE_HEADERS)


@router.get("/z")
def healthz():
    # Check si l'API est up
    return {"status": "ok"}
