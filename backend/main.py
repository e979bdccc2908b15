import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import routes_admin, routes_flights, routes_health, routes_passengers
from app.core.config import Settings, settings as default_settings
from app.core.errors import (
    BadRequestError,
    ConflictError,
    NotFoundError,
    PersistenceError,
    SchedulerError,
)
from app.core.logging import configure_logging
from app.storage.catalog import FlightCatalog
from app.storage.repository import (
    InMemoryInventoryStore,
    InventoryStore,
    JsonFileInventoryStore,
)

logger = logging.getLogger(__name__)

STATUS_CODES = {
    BadRequestError: 400,
    NotFoundError: 404,
    ConflictError: 409,
    PersistenceError: 500,
}


def build_store(settings: Settings, catalog: FlightCatalog) -> InventoryStore:
    if settings.storage_backend == "memory":
        return InMemoryInventoryStore()
    return JsonFileInventoryStore(path=settings.state_file, catalog=catalog)


async def scheduler_error_handler(request: Request, exc: SchedulerError) -> JSONResponse:
    status_code = STATUS_CODES.get(type(exc), 500)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status_code, content={"error": exc.message, **exc.details}
    )


def not_found_response(request: Request) -> JSONResponse:
    return JSONResponse(
        status_code=404, content={"error": "Not Found", "path": request.url.path}
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return not_found_response(request)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Malformed path segments (e.g. /flights/abc) match no route.
    if any(err.get("loc", ("",))[0] == "path" for err in exc.errors()):
        return not_found_response(request)
    logger.warning("%s %s rejected: invalid request", request.method, request.url.path)
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request", "detail": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]


def create_app(
    settings: Settings | None = None,
    store: InventoryStore | None = None,
    catalog: FlightCatalog | None = None,
) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.log_level)
    app = FastAPI(title=settings.app_name, version=settings.api_version)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.add_exception_handler(SchedulerError, scheduler_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    catalog = catalog or FlightCatalog()
    store = store or build_store(settings, catalog)

    app.include_router(routes_health.router, tags=["health"])
    app.include_router(routes_flights.router, prefix="/flights", tags=["flights"])
    app.include_router(
        routes_passengers.router, prefix="/passengers", tags=["passengers"]
    )
    app.include_router(routes_admin.router, tags=["admin"])
    if settings.enable_debug_routes:
        app.include_router(routes_admin.debug_router, prefix="/debug", tags=["debug"])

    app.state.store = store
    app.state.catalog = catalog
    app.state.settings = settings
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
