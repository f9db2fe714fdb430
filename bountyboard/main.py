"""
BountyBoard - FastAPI Main Application
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bountyboard.config import settings
from bountyboard.core.access import AllowedOrganizations
from bountyboard.core.cache import TTLCache
from bountyboard.db.database import init_db, close_db
from bountyboard.api.v1 import dashboard, issues, projects, users

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler"""
    # Startup
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    await init_db()
    logger.info(f"Organization allowlist: {app.state.allowed_organizations!r}")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await close_db()


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Bug bounty missions with severity-tiered reward pools",
    version=settings.APP_VERSION,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json"
)

# Startup configuration, injected rather than read from the environment per request
app.state.allowed_organizations = AllowedOrganizations.from_string(settings.ALLOWED_ORGANIZATIONS)
app.state.listing_cache = TTLCache(ttl=settings.REPO_CACHE_TTL_SECONDS)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(users.router, prefix="/api/v1/users", tags=["Users"])
app.include_router(projects.router, prefix="/api/v1/projects", tags=["Projects"])
app.include_router(issues.router, prefix="/api/v1/issues", tags=["Issues"])
app.include_router(dashboard.router, prefix="/api/v1/dashboard", tags=["Dashboard"])


@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "bountyboard.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
