import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from teamtasks.config.settings import settings
from teamtasks.database import engine, init_db
from teamtasks.routers import auth, dashboard, employees, tasks

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Team Tasks API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    try:
        response = await call_next(request)
    except Exception:
        # the 500 itself is rendered by unhandled_exception_handler
        logger.error("%s %s -> 500", request.method, request.url.path)
        raise
    logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
    return response


# Malformed bodies and bad enum values are plain 400s, not FastAPI's default 422
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


# Route registration
prefix = settings.API_PREFIX
app.include_router(auth.router, prefix=f"{prefix}/auth", tags=["Authentication"])
app.include_router(employees.router, prefix=f"{prefix}/employees", tags=["Employees"])
app.include_router(tasks.router, prefix=f"{prefix}/tasks", tags=["Tasks"])
app.include_router(dashboard.router, prefix=f"{prefix}/dashboard", tags=["Dashboard"])


@app.on_event("startup")
def startup_event():
    """Make sure the schema exists before serving requests"""
    logger.info("Starting Team Tasks API...")
    init_db(engine)


# Root route
@app.get("/")
def read_root():
    return {"message": "Team Tasks API"}


@app.get(f"{prefix}/health")
def health():
    return {"status": "ok"}
