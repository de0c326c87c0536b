"""
Playback schemas - Pydantic models for presentation control
"""

from pydantic import BaseModel, Field
from typing import List, Optional


class PointerRequest(BaseModel):
    """Laser pointer position over the slide, slide-relative"""
    x: float = Field(0.0, description="Horizontal position, 0 (left) to 1 (right)")
    y: float = Field(0.0, description="Vertical position, 0 (top) to 1 (bottom)")
    visible: bool = Field(True, description="False when the pointer left the slide")


class StartRequest(BaseModel):
    slide_index: Optional[int] = Field(None, ge=0, description="Slide to start on (default: current)")


class NoteSegmentResponse(BaseModel):
    text: str
    highlighted: bool


class PresentationStateResponse(BaseModel):
    """Driver state as shown on the presenter console"""
    mode: str = Field(description="IDLE or PRESENTING")
    view_mode: str = Field(description="PRESENTER or AUDIENCE")
    slide_index: int
    slide_count: int
    active_step: int
    step_count: int
    next_preview: str = Field(description="'Next Step (k/n)', 'Next Slide' or 'End of presentation'")
    elapsed: str = Field(description="MM:SS since the presentation started")
    passenger_open: bool
    pointer_active: bool
    notes: List[NoteSegmentResponse] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "mode": "PRESENTING",
                "view_mode": "PRESENTER",
                "slide_index": 1,
                "slide_count": 12,
                "active_step": 1,
                "step_count": 3,
                "next_preview": "Next Step (2/3)",
                "elapsed": "04:12",
                "passenger_open": True,
                "pointer_active": False,
                "notes": [{"text": "Intro", "highlighted": False}]
            }
        }


class KeyResponse(BaseModel):
    key: str
    action: str = Field(description="Action taken, 'none' if the key was ignored")
