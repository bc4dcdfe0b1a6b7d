# ai_directory/main.py
import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .ai import Ranker, build_ranker
from .catalog.errors import CatalogError, ConflictError
from .catalog.router import router as catalog_router
from .catalog.seed import seed_demo_data
from .catalog.store import CatalogStore
from .config import Settings, get_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Pydantic error types reported as "Missing required fields".
MISSING_ERROR_TYPES = {"missing", "string_too_short"}


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def _validation_message(errors: List[Dict[str, Any]]) -> str:
    if any(e.get("type") in MISSING_ERROR_TYPES for e in errors):
        return "Missing required fields"
    if errors:
        return str(errors[0].get("msg") or "Invalid request")
    return "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
        content: Dict[str, Any] = {"message": exc.message}
        if exc.duplicate is not None:
            content["duplicate"] = jsonable_encoder(exc.duplicate)
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = jsonable_encoder(exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": _validation_message(errors), "errors": errors},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[CatalogStore] = None,
    ranker: Optional[Ranker] = None,
) -> FastAPI:
    """Build the API around one store and one ranking backend.

    The store is created here (or passed in by tests) and shared by every
    request through ``app.state``. Demo data is seeded during startup,
    before the first request is served, when ``SEED_DEMO_DATA`` is set.
    """
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.SEED_DEMO_DATA:
            logger.info("Initializing demo data with categories and tools...")
            seed_demo_data(app.state.store)
        yield

    app = FastAPI(
        title=settings.PROJECT_NAME,
        description=(
            "Directory of AI tools: categories, tool pages, prompts, guides and "
            "blog posts, with optional AI-ranked search."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store if store is not None else CatalogStore()
    app.state.ranker = ranker if ranker is not None else build_ranker(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/")
    def health_check():
        return {"status": "ok", "message": "AI tools directory is running"}

    app.include_router(catalog_router)
    return app


app = create_app()
