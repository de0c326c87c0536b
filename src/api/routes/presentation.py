"""
Presentation Endpoints - Remote control of the driver window

Every write endpoint goes through the same PresentationController operations
the keyboard uses, so a remote clicker and the local keyboard stay in sync
with the audience window.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status

from api.dependencies import get_service_container
from api.schemas.playback import (
    KeyResponse,
    NoteSegmentResponse,
    PointerRequest,
    PresentationStateResponse,
    StartRequest,
)
from models.errors import PresentationNotActiveError
from models.enums import LogCategory
from services.service_container import ServiceContainer
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.API)

router = APIRouter(
    prefix="/presentation",
    tags=["Presentation"],
)


def _state_response(services: ServiceContainer) -> PresentationStateResponse:
    p = services.presentation
    deck = services.deck_service
    presenting = p.is_presenting
    notes = []
    if deck.slide_count:
        notes = [
            NoteSegmentResponse(text=s.text, highlighted=s.is_highlighted(p.active_step))
            for s in p.note_segments
        ]
    return PresentationStateResponse(
        mode=p.mode.name,
        view_mode=p.view_mode.name,
        slide_index=deck.current_slide_index,
        slide_count=deck.slide_count,
        active_step=p.active_step,
        step_count=len(p.steps) if deck.slide_count else 0,
        next_preview=p.next_preview_label if presenting else "",
        elapsed=p.elapsed,
        passenger_open=services.window_host.passenger_open if services.window_host else False,
        pointer_active=p.pointer_active,
        notes=notes,
    )


def _require_presenting(services: ServiceContainer, operation: str) -> None:
    if not services.presentation.is_presenting:
        raise PresentationNotActiveError(operation)


# ============================================================================
# GET ENDPOINTS
# ============================================================================

@router.get(
    "",
    response_model=PresentationStateResponse,
    summary="Get presentation state",
    description="Playback mode, position, next-step preview, notes and elapsed time"
)
async def get_presentation(
    services: ServiceContainer = Depends(get_service_container)
) -> PresentationStateResponse:
    return _state_response(services)


# ============================================================================
# POST ENDPOINTS - State machine operations
# ============================================================================

@router.post(
    "/start",
    response_model=PresentationStateResponse,
    summary="Start presenting"
)
async def start_presentation(
    request: Optional[StartRequest] = None,
    services: ServiceContainer = Depends(get_service_container)
) -> PresentationStateResponse:
    """
    Enter PRESENTING at step 0 of the current slide (or `slide_index`).

    Opens the audience window and requests full-screen per presenter config.

    **Errors:**
    - 404: `slide_index` outside the deck
    """
    if request and request.slide_index is not None and not services.presentation.is_presenting:
        services.deck_service.set_current_slide(request.slide_index)
    await services.presentation.start()
    return _state_response(services)


@router.post("/advance", response_model=PresentationStateResponse, summary="Next step or slide")
async def advance(
    services: ServiceContainer = Depends(get_service_container)
) -> PresentationStateResponse:
    _require_presenting(services, "advance")
    await services.presentation.advance()
    return _state_response(services)


@router.post("/back", response_model=PresentationStateResponse, summary="Previous step or slide")
async def go_back(
    services: ServiceContainer = Depends(get_service_container)
) -> PresentationStateResponse:
    _require_presenting(services, "go back")
    await services.presentation.go_back()
    return _state_response(services)


@router.post("/exit", status_code=status.HTTP_204_NO_CONTENT, summary="Exit presentation")
async def exit_presentation(
    services: ServiceContainer = Depends(get_service_container)
) -> None:
    """Broadcasts Exit to the audience window; no-op when idle"""
    await services.presentation.exit()


@router.post("/keys/{key}", response_model=KeyResponse, summary="Simulate a key press")
async def press_key(
    key: str,
    services: ServiceContainer = Depends(get_service_container)
) -> KeyResponse:
    """
    Dispatch a key through the driver's key bindings.

    Named keys use upper case (RIGHT, LEFT, SPACE, ESCAPE); anything else is
    offered to the current onKey step, case-sensitive.
    """
    _require_presenting(services, "press key")
    action = await services.keyboard.handle_key(key)
    log.debug("Remote key", key=key, action=action)
    return KeyResponse(key=key, action=action)


# ============================================================================
# Presenter features
# ============================================================================

@router.post("/view/toggle", response_model=PresentationStateResponse, summary="Toggle presenter/audience view")
async def toggle_view(
    services: ServiceContainer = Depends(get_service_container)
) -> PresentationStateResponse:
    _require_presenting(services, "toggle view")
    services.presentation.toggle_view()
    return _state_response(services)


@router.post("/window", response_model=PresentationStateResponse, summary="Open or focus the audience window")
async def open_window(
    services: ServiceContainer = Depends(get_service_container)
) -> PresentationStateResponse:
    _require_presenting(services, "open window")
    await services.presentation.open_window()
    return _state_response(services)


@router.post("/pointer/toggle", response_model=PresentationStateResponse, summary="Toggle laser pointer")
async def toggle_pointer(
    services: ServiceContainer = Depends(get_service_container)
) -> PresentationStateResponse:
    _require_presenting(services, "toggle pointer")
    services.presentation.toggle_pointer()
    return _state_response(services)


@router.put("/pointer", status_code=status.HTTP_204_NO_CONTENT, summary="Move laser pointer")
async def move_pointer(
    request: PointerRequest,
    services: ServiceContainer = Depends(get_service_container)
) -> None:
    """Mirrors the pointer on the audience window while the pointer is on"""
    _require_presenting(services, "move pointer")
    if request.visible:
        services.presentation.move_pointer(request.x, request.y)
    else:
        services.presentation.hide_pointer()
