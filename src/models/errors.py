"""
Domain errors

Raised by the engine and services, converted to the standard error envelope
by api.middleware.error_handler.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain-specific errors"""
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 400
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        super().__init__(message)


class AnimationConfigError(DomainError):
    """
    Authored animation list is malformed.

    Attributable to the deck: `index` is the position of the offending entry
    in the slide's animation list (None when it cannot be located), `slide`
    the slide's position when the list came from a loaded deck.
    """
    def __init__(
        self,
        message: str,
        index: Optional[int] = None,
        target: Optional[str] = None,
        slide: Optional[int] = None
    ):
        details: Dict[str, Any] = {}
        if index is not None:
            details["index"] = index
        if target is not None:
            details["target"] = target
        if slide is not None:
            details["slide"] = slide
        super().__init__(
            code="INVALID_ANIMATION",
            message=message,
            details=details,
            status_code=422
        )
        self.index = index
        self.target = target
        self.slide = slide


class SlideIndexError(DomainError):
    """Slide index outside the deck"""
    def __init__(self, index: int, slide_count: int):
        super().__init__(
            code="SLIDE_NOT_FOUND",
            message=f"Slide index {index} out of bounds (deck has {slide_count} slides)",
            details={"index": index, "slide_count": slide_count},
            status_code=404
        )


class DeckLoadError(DomainError):
    """Deck file missing or not a valid deck"""
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(
            code="INVALID_DECK",
            message=message,
            details={"path": path} if path else {},
            status_code=422
        )


class PresentationNotActiveError(DomainError):
    """Operation requires a running presentation"""
    def __init__(self, operation: str):
        super().__init__(
            code="PRESENTATION_NOT_ACTIVE",
            message=f"Cannot {operation}: no presentation is running",
            details={"operation": operation},
            status_code=409
        )
