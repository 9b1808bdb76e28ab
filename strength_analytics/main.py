"""
Strength Analytics Service
FastAPI application for strength progression and imbalance analysis

Run with: uvicorn strength_analytics.main:app --reload --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .database import init_db
from .logging_config import setup_logging
from .routers import (
    analysis_router,
    exercises_router,
    predictions_router,
    profiles_router,
    records_router,
    workouts_router,
)

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    init_db()
    logger.info("Strength analytics service started")
    yield


# Create FastAPI app
app = FastAPI(
    title="Strength Analytics",
    description="""
    ## Strength Progression & Imbalance Analysis

    ### Predictions
    - **1RM Calculator**: Estimated 1RM using various formulas
    - **Six-Week e1RM**: Rolling average estimated 1RM for a lift

    ### Analysis
    - **Strength Imbalances**: Push vs pull, hamstring vs quad, adductor vs abductor
    - **Lift Progression**: Per-session e1RM and volume with trend direction

    ### Records
    - **Personal Records**: Current PRs with strength levels
    - **Level Thresholds**: Weight needed for each strength level

    ### Workouts
    - **Workout Logging**: One log per day, merged on repeat submissions
    - **Daily Summaries**: Sets, reps, duration and calories per day

    ### Profiles & Exercise Library
    - **Profiles**: Gender, age and biometrics used for strength levels
    - **Exercise Library**: Canonical exercise names and their legacy aliases

    ---

    **Tech Stack**: Python, FastAPI, scikit-learn, pandas
    """,
    version=VERSION,
    docs_url="/docs",  # Swagger UI
    redoc_url="/redoc",  # ReDoc alternative
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """Check if the analytics service is running"""
    return {
        "status": "healthy",
        "service": "strength-analytics",
        "version": VERSION
    }


# Include routers
app.include_router(predictions_router)
app.include_router(analysis_router)
app.include_router(records_router)
app.include_router(workouts_router)
app.include_router(profiles_router)
app.include_router(exercises_router)


# Root endpoint with service info
@app.get("/", tags=["Info"])
async def root():
    """Service information and available endpoints"""
    return {
        "service": "Strength Analytics",
        "version": VERSION,
        "documentation": "/docs",
        "endpoints": {
            "predictions": {
                "1rm_calculator": "GET /predictions/1rm/calculate",
                "e1rm": "GET /predictions/e1rm/{user_id}"
            },
            "analysis": {
                "imbalances": "GET /analysis/{user_id}/imbalances",
                "lifts": "GET /analysis/{user_id}/lifts",
                "lift_progression": "GET /analysis/{user_id}/lifts/{exercise}"
            },
            "records": {
                "records": "GET /records/{user_id}",
                "add_records": "POST /records/{user_id}",
                "best": "GET /records/{user_id}/best",
                "thresholds": "GET /records/{user_id}/thresholds"
            },
            "workouts": {
                "log": "POST /workouts/{user_id}",
                "summaries": "GET /workouts/{user_id}/summaries"
            },
            "profiles": {
                "get": "GET /profiles/{user_id}",
                "update": "PUT /profiles/{user_id}"
            },
            "exercises": {
                "list": "GET /exercises",
                "create": "POST /exercises"
            }
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("strength_analytics.main:app", host="0.0.0.0", port=config.PORT, reload=True)
