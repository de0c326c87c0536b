"""
Animation schemas - Pydantic models for step compilation and previews

Animations travel in their document form (camelCase trigger/effect values);
conversion to domain objects goes through utils.serialization.Serializer so
errors carry the entry's index.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class AnimationListRequest(BaseModel):
    """A slide's authored animation list"""
    animations: List[Dict[str, Any]] = Field(
        description="Animation entries: target, trigger, effect, optional delay/duration/order/key"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "animations": [
                    {"target": "title", "trigger": "onEnter", "effect": "fadeIn"},
                    {"target": "bullet-1", "trigger": "onClick", "effect": "slideInLeft"},
                    {"target": "bullet-2", "trigger": "afterPrevious", "effect": "fadeIn", "delay": 200}
                ]
            }
        }


class AnimationStepResponse(BaseModel):
    """One compiled step; animations referenced by their index in the request list"""
    trigger: str = Field(description="onClick or onKey")
    key: Optional[str] = Field(None, description="Key for onKey steps")
    animations: List[int] = Field(description="Indices of the step's animations, anchor first")
    delay_overrides: Dict[str, int] = Field(
        alias="delayOverrides",
        description="Start offset (ms, from step start) per chained animation index"
    )

    class Config:
        populate_by_name = True


class AnimationStepListResponse(BaseModel):
    steps: List[AnimationStepResponse]
    on_enter: List[int] = Field(alias="onEnter", description="Indices of onEnter animations (not steps)")
    count: int = Field(description="Number of steps")

    class Config:
        populate_by_name = True


class PreviewResponse(BaseModel):
    """Editor preview schedule"""
    mode: str = Field(description="'one' (sequential selection) or 'all' (whole slide)")
    animations: List[Dict[str, Any]]
    delays: Dict[str, int] = Field(description="Absolute start (ms) per animation index")
    flash_times: List[int] = Field(alias="flashTimes", description="Simulated click boundaries (ms)")
    clear_after_ms: int = Field(alias="clearAfterMs", description="When the preview auto-clears (ms)")

    class Config:
        populate_by_name = True
