"""
API Routers Package
"""

from .predictions import router as predictions_router
from .analysis import router as analysis_router
from .records import router as records_router
from .workouts import router as workouts_router
from .profiles import router as profiles_router
from .exercises import router as exercises_router

__all__ = [
    'predictions_router',
    'analysis_router',
    'records_router',
    'workouts_router',
    'profiles_router',
    'exercises_router',
]
