# main.py

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ecocatalog.core.config import settings
from ecocatalog.core.error_handlers import setup_error_handlers, add_request_id_middleware
from ecocatalog.api.main import api_router
from ecocatalog.database.core import engine
from ecocatalog.logging import logger

# Import models to ensure they are registered with SQLAlchemy
from ecocatalog.database.models import Base


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    logger.info("Starting database initialization...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")

    yield

    engine.dispose()
    logger.info("Database connections closed")


app = FastAPI(
    title=settings.API_TITLE,
    description=settings.API_DESCRIPTION,
    version=settings.API_VERSION,
    lifespan=lifespan
)

# Set up error handlers
setup_error_handlers(app)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add request ID middleware for better error tracking
app.middleware("http")(add_request_id_middleware)

app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/health")
def health_check():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.HOST, port=settings.PORT, reload=False)
