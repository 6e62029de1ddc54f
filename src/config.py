"""Service settings read from the environment."""

import os
from typing import List

DEFAULT_TIER = os.environ.get("COMBINER_DEFAULT_TIER", "free")

# Hard cap on preview size, independent of the plan
PREVIEW_LIMIT = int(os.environ.get("COMBINER_PREVIEW_LIMIT", "1000"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "*").split(",")
    if origin.strip()
]

# Rows per CSV file before exports are split into a zip of parts
CSV_CHUNK_SIZE = int(os.environ.get("COMBINER_CSV_CHUNK_SIZE", "10000"))
