"""FastAPI application entry point"""

import sys
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from review_embed.core.config import settings
from review_embed.core.place_fetcher import place_fetcher
from review_embed.api import embed

# Configure logging early with force=True to override any existing config
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    force=True,
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    """Log startup diagnostic information"""
    logger.info("=" * 60)
    logger.info("REVIEW EMBED SERVICE STARTING")
    logger.info("=" * 60)
    logger.info(f"Place details endpoint: {settings.place_details_endpoint}")
    logger.info(f"Closed token: {settings.closed_token!r}, schema default type: {settings.schema_default_type!r}")


@app.on_event("shutdown")
async def shutdown_event():
    """Close the shared HTTP client"""
    await place_fetcher.close()


@app.get("/")
async def root():
    """Health check endpoint"""
    return {"status": "healthy", "version": settings.api_version}


@app.get("/health")
async def health():
    """Health check for monitoring"""
    return {"status": "healthy"}


# Register API routes
app.include_router(embed.router, prefix="/api", tags=["embed"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.backend_host, port=settings.backend_port)
