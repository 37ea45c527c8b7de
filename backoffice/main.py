import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backoffice.api import accounts, customers
from backoffice.core.config import CORS_ORIGINS, LOG_FORMAT, LOG_LEVEL
from backoffice.core.exceptions import PersistenceInvariantError
from backoffice.core.logging_config import setup_logging
from backoffice.database import create_db_and_tables
from backoffice.models.enums import ServiceErrorCode

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(LOG_LEVEL, LOG_FORMAT)
    create_db_and_tables()
    logger.info("Database ready")
    yield


app = FastAPI(
    title="Banking API",
    description="This API allows managing accounts and customers.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PersistenceInvariantError)
async def persistence_invariant_handler(request: Request, exc: PersistenceInvariantError) -> JSONResponse:
    # Sin reintento: se informa como error genérico del servidor
    logger.error(
        "Unrecoverable persistence error on %s %s: %s", request.method, request.url.path, exc,
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc), "code": ServiceErrorCode.unknown_error.value},
    )


app.include_router(customers.router)
app.include_router(accounts.router)


@app.get("/")
def root():
    return {"service": "Banking API", "status": "ok"}
