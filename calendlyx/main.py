from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from calendlyx.api.routes.activities import router as activities_router
from calendlyx.api.routes.auth import router as auth_router
from calendlyx.api.routes.public import router as public_router
from calendlyx.api.routes.realtime import router as realtime_router
from calendlyx.api.routes.references import router as references_router
from calendlyx.api.routes.requests import router as requests_router
from calendlyx.api.routes.schedule import router as schedule_router
from calendlyx.core.config import settings
from calendlyx.core.errors import CalendlyxError
from calendlyx.core.logging import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)

app = FastAPI(title=settings.app_name)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(public_router, prefix="/api")
app.include_router(schedule_router, prefix="/api")
app.include_router(auth_router, prefix="/api")
app.include_router(activities_router, prefix="/api")
app.include_router(references_router, prefix="/api")
app.include_router(requests_router, prefix="/api")
app.include_router(realtime_router, prefix="/api")


@app.exception_handler(CalendlyxError)
async def handle_calendlyx_error(request: Request, exc: CalendlyxError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
