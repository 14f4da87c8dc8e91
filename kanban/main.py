from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from kanban.core.board import close_board, open_board
from kanban.core.config import settings
from kanban.core.logging_setup import setup_logging
from kanban.routers import health, tasks
from kanban.schemas.validation import ValidationError

setup_logging(settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Init du tableau (réhydratation + sauvegarde auto)
    store, persistence = open_board()
    app.state.store = store
    app.state.persistence = persistence
    try:
        yield
    finally:
        close_board(store, persistence)


app = FastAPI(
    title="Kanban Board API",
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# Routes
app.include_router(health.router, prefix="/health")
app.include_router(tasks.router)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=422,
        content={"success": False, "detail": exc.to_list()},
    )
