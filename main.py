"""
TrainingMirror Backend API

FastAPI application for real-time exercise-form feedback. The frontend runs
the pose detector and streams landmarks; this service turns them into joint
angles, posture warnings and a rep count.

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

from api.routes import router as api_router
from api.websocket import websocket_endpoint
from core.config import get_settings

settings = get_settings()

# =============================================================================
# Logging Configuration
# =============================================================================

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
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

    Runs startup code before app starts accepting requests,
    and cleanup code when app shuts down.
    """
    # Startup
    logger.info(f"{settings.APP_NAME} API starting up...")
    logger.info("API docs: http://localhost:8000/docs")
    logger.info("WebSocket: ws://localhost:8000/ws/session")
    logger.info(
        f"Thresholds: squat {settings.SQUAT_DOWN_ANGLE}/{settings.SQUAT_UP_ANGLE}, "
        f"push-up {settings.PUSHUP_DOWN_ANGLE}/{settings.PUSHUP_UP_ANGLE}, "
        f"torso tilt {settings.TORSO_TILT_THRESHOLD}"
    )

    yield  # App runs here

    # Shutdown
    logger.info(f"{settings.APP_NAME} API shutting down...")


# =============================================================================
# FastAPI App
# =============================================================================

app = FastAPI(
    title=f"{settings.APP_NAME} API",
    description="""
    **Real-time Exercise Form Feedback**

    Joint angles, posture checks and rep counting from a stream of body
    landmarks.

    ## Features

    - **Rep Counting** for squats and push-ups
    - **Posture Checks** (squat depth, torso lean, hip alignment)
    - **Per-frame Feedback** graded good / normal / warning / error

    ## Endpoints

    - `GET /api/health` - Health check
    - `GET /api/exercises` - Available exercises and thresholds
    - `POST /api/analysis/classify` - Classify a single landmark frame
    - `WS /ws/session` - Real-time workout session

    ## WebSocket Protocol

    Connect to `/ws/session`, start a session, then stream landmarks:
```json
    {"type": "start_session", "data": {"exercise": "squat"}}
    {"type": "frame", "data": {"landmarks": [...], "frame_number": 0}}
    {"type": "stop_session", "data": {}}
```
    """,
    version=settings.VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# =============================================================================
# CORS Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
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
app.websocket("/ws/session")(websocket_endpoint)


# =============================================================================
# Root endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - API information.
    """
    return {
        "name": f"{settings.APP_NAME} API",
        "version": settings.VERSION,
        "description": "Real-time exercise form feedback",
        "docs": "/docs",
        "health": "/api/health",
        "websocket": "/ws/session"
    }


# =============================================================================
# Run directly (for development)
# =============================================================================

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level=settings.LOG_LEVEL.lower()
    )
