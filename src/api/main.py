"""FastAPI application for the List Combiner API."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src import config
from src.api.routes import generator_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="List Combiner API",
    description="""
    Combination and permutation generator for item lists.

    ## Features

    - **Combinations**: Cartesian product of any number of lists, one item from each
    - **Permutations**: All orderings of a single list
    - **Formatting**: Separator presets, prefix and suffix for every result
    - **Plan Limits**: Per-tier caps on lists, items per list and total results, with truncation
    - **Export**: Download results as TXT, CSV or JSON, depending on the plan

    ## Workflow

    1. Use `/generator/calculate-count` for a live count while editing lists
    2. Use `/generator/preview` to see the first results
    3. Use `/generator/generate` or `/generator/export` for the full output
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(generator_router)


@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
