from fastapi import APIRouter, Request

router = APIRouter()

ENDPOINTS = [
    "/health",
    "/version",
    "/flights",
    "/flights/sorted?by=flightNumber|departureDate",
    "/flights/search?flightNumber=...",
    "/flights/{id}",
    "/flights/{id}/info",
    "/flights/{id}/book (POST)",
    "/flights/{id}/cancel (POST)",
    "/passengers/status?name=...",
    "/reset (POST)",
]


@router.get("/")
def index(request: Request) -> dict:
    return {"message": request.app.state.settings.app_name, "endpoints": ENDPOINTS}


@router.get("/health")
def healthcheck() -> dict:
    return {"status": "ok"}


@router.get("/version")
def version(request: Request) -> dict:
    return {"version": request.app.state.settings.api_version}
