"""
Service Configuration
Reads settings from environment variables (and a local .env file)
"""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    return (
        f"postgresql://{os.getenv('DB_USER')}:{os.getenv('DB_PASSWORD')}"
        f"@{os.getenv('DB_HOST')}:{os.getenv('DB_PORT', '5432')}/{os.getenv('DB_NAME')}"
    )


DATABASE_URL = _database_url()

PORT = int(os.getenv("PORT", 8000))

# Comma separated list of allowed origins
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:8080").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")  # 'text' or 'json'

# Engine policy
AVERAGE_WINDOW_WEEKS = int(os.getenv("AVERAGE_WINDOW_WEEKS", 6))
TREND_THRESHOLD_PCT = float(os.getenv("TREND_THRESHOLD_PCT", 1.0))
