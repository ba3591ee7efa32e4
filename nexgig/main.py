import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from nexgig.api.endpoints import auth
from nexgig.api.endpoints import jobs
from nexgig.api.endpoints import chats
from nexgig.api.endpoints import overview
from nexgig.core.config import Settings
from nexgig.core.errors import MarketplaceError
from nexgig.core.logging import setup_logging
from nexgig.database import Database

settings = Settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    database = Database(settings.database_url, echo=settings.sql_echo)
    if settings.create_tables:
        database.create_all()
    app.state.database = database
    logger.info("Nexgig API started")
    try:
        yield
    finally:
        database.dispose()


app = FastAPI(title="Nexgig API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(MarketplaceError)
async def marketplace_error_handler(request: Request, exc: MarketplaceError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(jobs.router, prefix="/jobs", tags=["jobs"])
app.include_router(chats.router, prefix="/chats", tags=["chats"])
app.include_router(overview.router, prefix="/overview", tags=["overview"])
