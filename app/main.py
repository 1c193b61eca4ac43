# app/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.catalog.routes import router as catalog_router
from app.core.config import get_settings
from app.core.database import Base, engine
from app.core.errors import ServiceError, Unauthorized
from app.core.logging import configure_logging
from app.core.security import get_principal
from app.ticket.routes import router as ticket_router
from app.user.routes import router as user_router

settings = get_settings()
configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

if settings.AUTO_CREATE_TABLES:
    Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.APP_NAME,
    description=settings.APP_DESC,
    version=settings.APP_VERSION,
)

PROTECTED_PREFIXES = ("/ticket-manager", "/user-admin")


def cors_headers(request: Request) -> dict:
    origins = settings.cors_origins
    headers = {"Access-Control-Allow-Headers": settings.CORS_ALLOW_HEADERS}
    if "*" in origins:
        headers["Access-Control-Allow-Origin"] = "*"
    else:
        origin = request.headers.get("origin", "").rstrip("/")
        if origin in origins:
            headers["Access-Control-Allow-Origin"] = origin
        headers["Vary"] = "Origin"
    return headers


@app.middleware("http")
async def request_shell(request: Request, call_next):
    """Answer preflights, turn uncaught failures into 400s, stamp CORS headers."""
    if request.method == "OPTIONS":
        return PlainTextResponse("ok", headers=cors_headers(request))

    try:
        response = await call_next(request)
    except Exception as exc:
        logger.exception("%s %s failed", request.method, request.url.path)
        response = JSONResponse({"error": str(exc) or exc.__class__.__name__}, status_code=400)

    response.headers.update(cors_headers(request))
    return response


@app.exception_handler(ServiceError)
async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse({"error": exc.message}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    # FastAPI reads the body before solving dependencies; credentials still come first.
    if request.url.path.startswith(PROTECTED_PREFIXES):
        try:
            get_principal(request, settings)
        except Unauthorized as unauthorized:
            return JSONResponse({"error": unauthorized.message}, status_code=unauthorized.status_code)

    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"] if p not in ("body", "query"))
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return JSONResponse({"error": "Invalid request: " + "; ".join(parts)}, status_code=400)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"error": exc.detail}, status_code=exc.status_code, headers=exc.headers)


# Routers
app.include_router(catalog_router)
app.include_router(user_router)
app.include_router(ticket_router)

@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}
