"""
Preview Endpoints - Editor animation previews

Starting a preview replaces any running one. The service clears itself once
the longest animation has finished.
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, status

from api.dependencies import get_service_container
from api.schemas.animation import AnimationListRequest, PreviewResponse
from models.domain.playback import PreviewSchedule
from models.enums import LogCategory
from services.service_container import ServiceContainer
from utils.logger import get_logger
from utils.serialization import Serializer

log = get_logger().for_category(LogCategory.API)

router = APIRouter(prefix="/preview", tags=["Preview"])


def _preview_response(mode: str, schedule: PreviewSchedule, services: ServiceContainer) -> PreviewResponse:
    data: Dict[str, Any] = Serializer.schedule_to_dict(schedule)
    data["clearAfterMs"] = schedule.clear_after_ms(services.config_manager.playback.preview_clear_margin_ms)
    return PreviewResponse(mode=mode, **data)


@router.post("/all", response_model=PreviewResponse, summary="Preview a whole slide")
async def preview_all(
    request: AnimationListRequest,
    services: ServiceContainer = Depends(get_service_container)
) -> PreviewResponse:
    """
    onEnter animations play first; each step then starts once the previous
    one has finished, with a flash at every simulated click.
    """
    animations = Serializer.dicts_to_animations(request.animations)
    schedule = await services.preview_service.start_all(animations)
    return _preview_response("all", schedule, services)


@router.post("/one", response_model=PreviewResponse, summary="Preview a selection sequentially")
async def preview_one(
    request: AnimationListRequest,
    services: ServiceContainer = Depends(get_service_container)
) -> PreviewResponse:
    """Triggers are ignored; the animations play back to back in list order"""
    animations = Serializer.dicts_to_animations(request.animations)
    schedule = await services.preview_service.start_one(animations)
    return _preview_response("one", schedule, services)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT, summary="Stop the running preview")
async def clear_preview(
    services: ServiceContainer = Depends(get_service_container)
) -> None:
    services.preview_service.clear()
