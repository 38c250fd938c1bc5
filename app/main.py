import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app.database import engine
from app.graphql_app import graphql_router
from app.logging_config import configure_logging
from app.middleware import RequestLogMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    configure_logging(settings.LOG_LEVEL)
    logger.info("Registry API starting (env=%s)", settings.APP_ENV)
    yield
    # Shutdown
    await engine.dispose()


app = FastAPI(
    title="Registry GraphQL API",
    description="Users, cities, social statuses and customers over GraphQL",
    version="1.0.0",
    lifespan=lifespan,
)

# Middleware
app.add_middleware(RequestLogMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# GraphQL
app.include_router(graphql_router, prefix=settings.GRAPHQL_PATH)


@app.get("/health")
async def health():
    return {"status": "healthy", "version": "1.0.0"}
