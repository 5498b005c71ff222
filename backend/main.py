import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from settings import get_settings
from src.geofilter import ParseFault, filter_customers
from src.middleware import BasicAuthMiddleware, RequestLoggingMiddleware
from src.monitoring import get_metrics

settings = get_settings()
REFERENCE_POINT = settings.reference_point()

logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)

NO_FILE_MESSAGE = "No file provided"
INVALID_FILE_MESSAGE = "Invalid file format. Please upload a proper file."
INVALID_JSON_MESSAGE = "Invalid JSON format in file"
PROCESSING_ERROR_MESSAGE = "An error occurred while processing the file"


class CustomerOut(BaseModel):
    id: int
    name: str


app = FastAPI(title=settings.app_name, debug=settings.debug)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
def unhandled_exception_handler(request: Request, exc: Exception):
    """Return consistent JSON error for unhandled exceptions (500). Skip validation/HTTP errors."""
    from fastapi.exceptions import RequestValidationError
    if isinstance(exc, (HTTPException, RequestValidationError)):
        raise exc
    logger.exception("telemetry unhandled_exception path=%s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occurred. Please try again later."},
    )


# Order: last added = outermost. CORS, then logging, then auth (innermost).
app.add_middleware(
    BasicAuthMiddleware,
    admin_user=settings.admin_user,
    admin_password=settings.admin_password,
)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/favicon.ico", include_in_schema=False)
@limiter.exempt
def favicon(request: Request):
    return Response(status_code=204)


@app.get("/health")
@limiter.exempt
def health(request: Request):
    logger.info("telemetry route=health")
    return {"status": "ok"}


@app.get("/metrics")
@limiter.exempt
def metrics(request: Request):
    """Request counters, geofilter run counters and uptime."""
    return get_metrics()


@app.post("/customers/fetch_customer_details", response_model=list[CustomerOut])
@limiter.limit(lambda: settings.upload_rate_limit)
async def fetch_customer_details(request: Request):
    """
    Filter an uploaded JSON Lines file (multipart field "file") down to customers
    within the configured radius of the office. Returns [{id, name}] sorted by id.
    """
    form = await request.form()
    upload = form.get("file")
    if upload is None or upload == "":
        raise HTTPException(status_code=400, detail=NO_FILE_MESSAGE)
    if not isinstance(upload, UploadFile):
        raise HTTPException(status_code=400, detail=INVALID_FILE_MESSAGE)

    request_id = getattr(request.state, "request_id", "-")
    logger.info("telemetry route=fetch_customer_details request_id=%s filename=%s", request_id, upload.filename)
    try:
        customers = await run_in_threadpool(filter_customers, upload.file, REFERENCE_POINT)
    except ParseFault as e:
        logger.info("telemetry fetch_customer_details_parse_fault request_id=%s line=%s", request_id, e.line_number)
        raise HTTPException(status_code=400, detail=INVALID_JSON_MESSAGE) from e
    except Exception as e:
        # UnexpectedFault and anything raised outside the pipeline; detail stays in the log
        logger.exception("Error processing customer file request_id=%s: %s", request_id, e)
        raise HTTPException(status_code=500, detail=PROCESSING_ERROR_MESSAGE) from e
    return [CustomerOut(id=c.id, name=c.name) for c in customers]


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
