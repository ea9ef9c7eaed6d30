# app/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Your configuration and DB
from app.config import settings
from app.core.db import init_db, close_db
from app.core.logging_config import setup_logging
from app.services.exceptions import AppError

from app.api.v1.routers import auth, users, products

from app.core.bootstrap import ensure_default_admin
logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)

# CORS (with Cookie)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    # ValidationError/NotFoundError -> 400, ConflictError -> 409, TooManyAttemptsError -> 429
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

# Same wording the services use when a required field is missing
PAYLOAD_ERROR_MESSAGES = {
    ("PATCH", "/users"): "All fields except password are required",
}

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Wrong JSON types belong to the same 400 class as missing fields
    logger.debug("Rejected payload on %s %s: %s", request.method, request.url.path, exc.errors())
    message = PAYLOAD_ERROR_MESSAGES.get((request.method, request.url.path), "All fields are required")
    return JSONResponse(status_code=400, content={"message": message})

@app.on_event("startup")
async def on_startup():
    setup_logging(settings.log_level, settings.err_log_path)
    await init_db()
    # Ensure there's an account to log in with on first run
    await ensure_default_admin()
    logger.info("[startup] %s ready (env=%s)", settings.APP_NAME, settings.env)

@app.on_event("shutdown")
async def on_shutdown():
    await close_db()

# REST
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(products.router)

@app.get("/healthz")
def healthz():
    return {"ok": True}
