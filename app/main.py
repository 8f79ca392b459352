import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.api.v1.sessions import router as sessions_router
from app.api.v1.stations import router as stations_router
from app.application.exceptions import StationDirectoryError, StationNotFound
from app.core.config import settings


class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in (
            "session_id",
            "station_id",
            "booking_id",
            "action",
            "state",
            "amount",
            "method",
            "reason",
            "error",
        ):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title="ChargeEase Station Finder", version="1.0.0")

app.include_router(stations_router, prefix="/api/v1", tags=["stations"])
app.include_router(sessions_router, prefix="/api/v1", tags=["sessions"])


@app.exception_handler(StationDirectoryError)
async def station_directory_error(request: Request, exc: StationDirectoryError) -> JSONResponse:
    logging.getLogger(__name__).error("Station directory failure", extra={"error": str(exc)})
    return JSONResponse(status_code=502, content={"detail": str(exc)})


@app.exception_handler(StationNotFound)
async def station_not_found(request: Request, exc: StationNotFound) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
