"""
Main FastAPI application and routing layer.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from opinions.config import CORS_ALLOW_ORIGINS, LOG_FORMAT, LOG_LEVEL, settings
from opinions.core.scorecard import build_scorecard, sources_used
from opinions.errors import SynthesisError
from opinions.schemas import (
    RecommendationBody,
    RecommendRequest,
    RecommendResponse,
    ScorecardItem,
    ScorecardRequest,
    ScorecardResponse,
    SynthesisRequest,
    SynthesisResponse,
)
from opinions.services import recommender, synthesizer
from opinions.sources.collector import normalize_sources
from opinions.utils import now_utc

# Configure logging
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger("uvicorn")


# Initialize FastAPI app
app = FastAPI(
    title="Multi-Source Opinion Synthesis API",
    version="0.1.0",
    description="API for scoring and synthesizing product opinions from several sources"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "as_of": now_utc().isoformat(),
        "service": "opinion-synthesis-api"
    }


@app.post("/scorecard", response_model=ScorecardResponse)
async def get_scorecard(request: ScorecardRequest):
    """
    Score each source without calling the language model.

    Args:
        request: Raw per-source results

    Returns:
        ScorecardResponse with the five ordered entries
    """
    sources = normalize_sources(request.sources)
    return ScorecardResponse(
        scorecard=[ScorecardItem.from_entry(entry) for entry in build_scorecard(sources)],
        sources_used=sources_used(sources),
    )


@app.post("/synthesize", response_model=SynthesisResponse)
async def synthesize_opinions(request: SynthesisRequest):
    """
    Synthesize a recommendation from multi-source opinion data.

    Args:
        request: Product, optional expectations and raw per-source results

    Returns:
        SynthesisResponse with scorecard, parsed sections and finish reason
    """
    try:
        sources = normalize_sources(request.sources)
        result = await synthesizer.synthesize(request.product, sources, request.expectations)
        return SynthesisResponse.from_result(request.product, now_utc().isoformat(), result)

    except SynthesisError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error synthesizing opinions for {request.product}: {e}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.post("/recommend", response_model=RecommendResponse)
async def recommend_product(request: RecommendRequest):
    """
    Quick buy/skip recommendation for a product, without source data.
    """
    try:
        recommendation = await recommender.recommend(request.product)
    except SynthesisError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    return RecommendResponse(
        response=RecommendationBody(
            response_message=recommendation.response_message,
            reason=recommendation.reason,
        )
    )


if __name__ == "__main__":
    # For development
    import uvicorn
    uvicorn.run("opinions.main:app", host="0.0.0.0", port=settings.PORT, reload=True)
