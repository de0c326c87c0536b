"""
Serialization utilities - Central enum and model serialization for JSON

Provides bidirectional conversion between:
- Enums ↔ Strings (AnimationTrigger, AnimationEffect, PlaybackMode, etc.)
- Domain models ↔ Dicts (Animation, Slide, Deck, AnimationStep, PreviewSchedule)

Deck documents use camelCase keys ("aspectRatio", "afterPrevious") as written
by the editor; this is the single place that knows about that.
"""

from typing import TypeVar, Type, Any, Dict, List, Optional, Sequence
from enum import Enum

from models.domain.animation import Animation, AnimationStep
from models.domain.slide import Slide, SlideTransition, Deck, DeckMeta
from models.domain.playback import PreviewSchedule
from models.enums import AnimationTrigger, AnimationEffect, TransitionType
from models.errors import AnimationConfigError, DeckLoadError
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.GENERAL)

T = TypeVar('T', bound=Enum)


def _whole(value: Any, field: str) -> int:
    """Millisecond and order fields are integers; 1.0 is accepted, 1.7 is not"""
    if isinstance(value, bool):
        raise ValueError(f"{field} must be an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"{field} must be an integer, got {value!r}")
    return int(value)


class Serializer:
    """Central enum and model serialization for JSON documents and API"""

    # ========================================================================
    # ENUM SERIALIZATION
    # ========================================================================

    @staticmethod
    def enum_to_str(value: Optional[Enum]) -> Optional[str]:
        """Convert any enum to string name"""
        return value.name if value else None

    @staticmethod
    def value_to_enum(value: Any, enum_type: Type[T]) -> T:
        """Convert a document value ("onClick", "fadeIn") to enum, raise ValueError if invalid"""
        try:
            return enum_type(value)
        except ValueError:
            raise ValueError(f"Invalid {enum_type.__name__}: {value}")

    # ========================================================================
    # ANIMATION SERIALIZATION
    # ========================================================================

    @staticmethod
    def dict_to_animation(data: Dict[str, Any], index: Optional[int] = None) -> Animation:
        """
        Deserialize one authored animation entry

        Args:
            data: Dict with target, trigger, effect and optional delay/duration/order/key
            index: Position in the slide's list, attached to any error raised

        Raises:
            AnimationConfigError: unknown trigger/effect, missing fields or bad values
        """
        try:
            animation = Animation(
                target=str(data["target"]),
                trigger=Serializer.value_to_enum(data["trigger"], AnimationTrigger),
                effect=Serializer.value_to_enum(data["effect"], AnimationEffect),
                delay=_whole(data.get("delay") or 0, "delay"),
                duration=_whole(data["duration"], "duration") if data.get("duration") is not None else None,
                order=_whole(data["order"], "order") if data.get("order") is not None else None,
                key=data.get("key"),
            )
        except AnimationConfigError as e:
            if index is None:
                raise
            raise AnimationConfigError(e.message, index=index, target=e.target) from e
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise AnimationConfigError(
                f"Malformed animation entry: {e}",
                index=index,
                target=data.get("target") if isinstance(data, dict) else None
            ) from e
        return animation

    @staticmethod
    def dicts_to_animations(items: Sequence[Dict[str, Any]]) -> List[Animation]:
        return [Serializer.dict_to_animation(item, index=i) for i, item in enumerate(items)]

    @staticmethod
    def animation_to_dict(anim: Animation) -> Dict[str, Any]:
        """Serialize animation back to its document form, omitting unset fields"""
        result: Dict[str, Any] = {
            "target": anim.target,
            "trigger": anim.trigger.value,
            "effect": anim.effect.value,
        }
        if anim.delay:
            result["delay"] = anim.delay
        if anim.duration is not None:
            result["duration"] = anim.duration
        if anim.order is not None:
            result["order"] = anim.order
        if anim.key is not None:
            result["key"] = anim.key
        return result

    @staticmethod
    def step_to_dict(step: AnimationStep, animations: Sequence[Animation]) -> Dict[str, Any]:
        """
        Serialize a compiled step

        Animations are referenced by their index in the source list, since
        they are identity-keyed and may share all field values.
        """
        position = {id(a): i for i, a in enumerate(animations)}
        return {
            "trigger": step.trigger.value,
            "key": step.key,
            "animations": [position[id(a)] for a in step.animations],
            "delayOverrides": {
                str(position[id(a)]): offset for a, offset in step.delay_overrides.items()
            },
        }

    @staticmethod
    def schedule_to_dict(schedule: PreviewSchedule) -> Dict[str, Any]:
        """Serialize a preview schedule; delays are keyed by animation index"""
        position = {id(a): i for i, a in enumerate(schedule.animations)}
        return {
            "animations": [Serializer.animation_to_dict(a) for a in schedule.animations],
            "delays": {str(position[id(a)]): ms for a, ms in schedule.delays.items()},
            "flashTimes": list(schedule.flash_times),
            "clearAfterMs": schedule.clear_after_ms(),
        }

    # ========================================================================
    # SLIDE / DECK SERIALIZATION
    # ========================================================================

    @staticmethod
    def dict_to_slide(data: Dict[str, Any]) -> Slide:
        if not isinstance(data, dict):
            raise TypeError(f"slide must be an object, got {type(data).__name__}")
        transition_raw = data.get("transition") or {}
        if not isinstance(transition_raw, dict):
            raise TypeError(f"transition must be an object, got {type(transition_raw).__name__}")
        transition = SlideTransition(
            type=Serializer.value_to_enum(transition_raw.get("type", "fade"), TransitionType),
            duration=int(transition_raw.get("duration", 300)),
        )
        return Slide(
            id=str(data["id"]),
            elements=tuple(data.get("elements") or ()),
            animations=tuple(Serializer.dicts_to_animations(data.get("animations") or [])),
            notes=data.get("notes") or "",
            transition=transition,
        )

    @staticmethod
    def dict_to_deck(data: Dict[str, Any], path: Optional[str] = None) -> Deck:
        """
        Deserialize a deck document

        Raises:
            DeckLoadError: structurally invalid document
            AnimationConfigError: a slide's animation list is malformed
        """
        if not isinstance(data, dict) or not isinstance(data.get("slides"), list):
            raise DeckLoadError("Deck document has no 'slides' list", path=path)

        meta_raw = data.get("meta") or {}
        if not isinstance(meta_raw, dict):
            raise DeckLoadError("Deck 'meta' must be an object", path=path)
        meta = DeckMeta(
            title=str(meta_raw.get("title", "Untitled")),
            author=meta_raw.get("author"),
            aspect_ratio=str(meta_raw.get("aspectRatio", "16:9")),
        )

        slides = []
        for i, slide_raw in enumerate(data["slides"]):
            try:
                slides.append(Serializer.dict_to_slide(slide_raw))
            except AnimationConfigError as e:
                log.error("Invalid animation in slide", slide=i, error=e.message, **e.details)
                raise AnimationConfigError(e.message, index=e.index, target=e.target, slide=i) from e
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                raise DeckLoadError(f"Invalid slide {i}: {e}", path=path) from e

        return Deck(meta=meta, slides=tuple(slides))

    @staticmethod
    def slide_to_dict(slide: Slide) -> Dict[str, Any]:
        return {
            "id": slide.id,
            "elements": list(slide.elements),
            "animations": [Serializer.animation_to_dict(a) for a in slide.animations],
            "notes": slide.notes,
            "transition": {"type": slide.transition.type.value, "duration": slide.transition.duration},
        }
