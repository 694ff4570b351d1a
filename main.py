import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from database import init_db
from api.auth import router as auth_router
from api.drafts import router as drafts_router
from api.files import router as files_router
from api.submissions import router as submissions_router
from services.errors import GoogleServiceError
from utils.logging import configure_logging

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    logger.info("Allowed origins: %s", ", ".join(settings.allowed_origins))
    yield


app = FastAPI(
    title=settings.app_name,
    description="Insurance enrollment intake: operator login, Drive uploads, Sheets-backed submissions and drafts",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)
app.include_router(files_router)
app.include_router(drafts_router)
app.include_router(submissions_router)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies are client errors: 400 rather than FastAPI's 422."""
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


@app.exception_handler(GoogleServiceError)
async def google_error_handler(request: Request, exc: GoogleServiceError):
    # Reached when a client cannot even be constructed (e.g. missing credentials).
    logger.error("Google service unavailable for %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Servicio de Google no disponible"})


@app.get("/health")
async def health():
    return {"status": "ok"}
