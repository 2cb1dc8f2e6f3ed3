# opinions/schemas.py
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from opinions.models import ScorecardEntry, SourceId, SynthesisResult


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)


class ScorecardRequest(CamelModel):
    sources: Dict[str, Optional[Dict[str, Any]]] = Field(default_factory=dict)   # raw fetcher JSON per source


class SynthesisRequest(ScorecardRequest):
    product: str = Field(min_length=1, max_length=200)
    expectations: str = Field(default="", max_length=2000)


class RecommendRequest(CamelModel):
    product: str = Field(min_length=1, max_length=200)
    email: Optional[str] = None                                          # accepted for compatibility, not stored


class ScorecardItem(CamelModel):
    source: SourceId
    name: str
    score: Optional[float] = Field(default=None, ge=-5, le=5)
    sample_size: int = Field(ge=0)
    unit: str
    available: bool

    @classmethod
    def from_entry(cls, entry: ScorecardEntry) -> "ScorecardItem":
        return cls(
            source=entry.source,
            name=entry.name,
            score=entry.score,
            sample_size=entry.sample_size,
            unit=entry.unit,
            available=entry.available,
        )


class ScorecardResponse(CamelModel):
    scorecard: List[ScorecardItem]
    sources_used: List[str]


class SynthesisResponse(ScorecardResponse):
    product: str
    as_of: str
    key_takeaways: Dict[str, List[str]]
    consensus: List[str]
    divergence: List[str]
    synthesis: str
    finish_reason: Optional[str] = None

    @classmethod
    def from_result(cls, product: str, as_of: str, result: SynthesisResult) -> "SynthesisResponse":
        return cls(
            product=product,
            as_of=as_of,
            scorecard=[ScorecardItem.from_entry(entry) for entry in result.scorecard],
            sources_used=list(result.sources_used),
            key_takeaways={key: list(points) for key, points in result.key_takeaways.items()},
            consensus=list(result.consensus),
            divergence=list(result.divergence),
            synthesis=result.synthesis,
            finish_reason=result.finish_reason,
        )


class RecommendationBody(CamelModel):
    response_message: str
    reason: Optional[str] = None


class RecommendResponse(CamelModel):
    response: RecommendationBody
