"""
Technique Overlay Backend API

FastAPI application that turns detected pose landmarks into joint-angle
feedback: measured angles, pass/fail per technique rule, and a draw plan
for the skeleton overlay.

Run with:
    uvicorn main:app --reload --host 0.0.0.0 --port 8000

API docs available at:
    http://localhost:8000/docs (Swagger UI)
    http://localhost:8000/redoc (ReDoc)
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import router as api_router, API_VERSION
from api.websocket import websocket_endpoint
from core.config import get_config

# =============================================================================
# Logging Configuration
# =============================================================================

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan (startup/shutdown)
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Loads the technique catalog before the app starts accepting requests,
    so a malformed catalog fails at startup rather than mid-session.
    """
    # Startup
    config = get_config()
    logger.info(" Technique Overlay API starting up...")
    logger.info(f" API docs: http://localhost:{config.server.port}/docs")
    logger.info(f" WebSocket: ws://localhost:{config.server.port}/ws/overlay")

    from api.deps import get_catalog
    catalog = get_catalog()
    logger.info(f" Sports available: {', '.join(catalog.sports()) or 'none'}")

    yield  # App runs here

    # Shutdown
    logger.info(" Technique Overlay API shutting down...")


# =============================================================================
# FastAPI App
# =============================================================================

app = FastAPI(
    title="Technique Overlay API",
    description="""
    **Pose-Angle Feedback Overlay**

    Evaluates joint angles from detected pose landmarks against
    technique rules and builds a colored skeleton overlay.

    ## Endpoints

    - `GET /api/health` - Health check
    - `GET /api/techniques` - List sports
    - `GET /api/techniques/{sport}` - List techniques
    - `GET /api/techniques/{sport}/{technique}` - Technique rules
    - `POST /api/overlay/evaluate` - Measure rule angles on a frame
    - `POST /api/overlay/plan` - Draw plan for a frame
    - `WS /ws/overlay` - Real-time draw plan stream

    ## WebSocket Protocol

    Connect to `/ws/overlay`, select a technique, then send frames:
```json
    {
        "type": "select_technique",
        "data": {"sport": "Sprint", "technique": "Technique1"}
    }
```
    """,
    version=API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# =============================================================================
# CORS Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_config().server.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Routes
# =============================================================================

# Include REST API routes
app.include_router(api_router, prefix="/api")

# WebSocket endpoint
app.websocket("/ws/overlay")(websocket_endpoint)


# =============================================================================
# Root endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - API information.
    """
    return {
        "name": "Technique Overlay API",
        "version": API_VERSION,
        "description": "Pose-angle feedback overlay",
        "docs": "/docs",
        "health": "/api/health",
        "websocket": "/ws/overlay"
    }


# =============================================================================
# Run directly (for development)
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    config = get_config()
    uvicorn.run(
        "main:app",
        host=config.server.host,
        port=config.server.port,
        reload=True,
        log_level="info"
    )
