"""
Animation Endpoints - Step compilation for the editor

Lets the editor see how an animation list will play before presenting it.
Malformed lists come back as 422 INVALID_ANIMATION with the offending
entry's index in `details`.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_service_container
from api.schemas.animation import AnimationListRequest, AnimationStepListResponse, AnimationStepResponse
from engine.step_compiler import compile_steps, on_enter_animations
from models.enums import LogCategory
from services.service_container import ServiceContainer
from utils.logger import get_logger
from utils.serialization import Serializer

log = get_logger().for_category(LogCategory.API)

router = APIRouter(prefix="/animations", tags=["Animations"])


@router.post(
    "/steps",
    response_model=AnimationStepListResponse,
    summary="Compile animation steps",
    description="Group an animation list into advance steps with resolved chain offsets"
)
async def compile_animation_steps(
    request: AnimationListRequest,
    services: ServiceContainer = Depends(get_service_container)
) -> AnimationStepListResponse:
    animations = Serializer.dicts_to_animations(request.animations)
    steps = compile_steps(animations, services.config_manager.playback.default_duration_ms)
    position = {id(a): i for i, a in enumerate(animations)}

    log.debug("Compiled steps", animations=len(animations), steps=len(steps))
    return AnimationStepListResponse(
        steps=[AnimationStepResponse(**Serializer.step_to_dict(s, animations)) for s in steps],
        onEnter=[position[id(a)] for a in on_enter_animations(animations)],
        count=len(steps),
    )


@router.get(
    "/slides/{slide_index}/steps",
    response_model=AnimationStepListResponse,
    summary="Get a slide's compiled steps"
)
async def get_slide_steps(
    slide_index: int,
    services: ServiceContainer = Depends(get_service_container)
) -> AnimationStepListResponse:
    """**Errors:** 404 when `slide_index` is outside the deck"""
    deck = services.deck_service
    animations = list(deck.get_slide(slide_index).animations)
    steps = deck.steps_for(slide_index)
    position = {id(a): i for i, a in enumerate(animations)}

    return AnimationStepListResponse(
        steps=[AnimationStepResponse(**Serializer.step_to_dict(s, animations)) for s in steps],
        onEnter=[position[id(a)] for a in on_enter_animations(animations)],
        count=len(steps),
    )
