"""
Enums for the presentation playback engine
"""

from enum import Enum, auto


class AnimationTrigger(Enum):
    """
    What starts an animation.

    ON_ENTER: plays automatically when the slide is shown (not a step)
    ON_CLICK: starts a new step on the generic advance input
    ON_KEY: starts a new step; additionally advanced by one specific key
    AFTER_PREVIOUS: chained, starts once the previous animation finishes
    WITH_PREVIOUS: chained, starts together with the previous animation
    """
    ON_ENTER = "onEnter"
    ON_CLICK = "onClick"
    ON_KEY = "onKey"
    AFTER_PREVIOUS = "afterPrevious"
    WITH_PREVIOUS = "withPrevious"

    @property
    def is_anchor(self) -> bool:
        return self in (AnimationTrigger.ON_CLICK, AnimationTrigger.ON_KEY)

    @property
    def is_chain(self) -> bool:
        return self in (AnimationTrigger.AFTER_PREVIOUS, AnimationTrigger.WITH_PREVIOUS)


class AnimationEffect(Enum):
    """Effect names understood by the renderer"""
    FADE_IN = "fadeIn"
    FADE_OUT = "fadeOut"
    SLIDE_IN_LEFT = "slideInLeft"
    SLIDE_IN_RIGHT = "slideInRight"
    SLIDE_IN_UP = "slideInUp"
    SLIDE_IN_DOWN = "slideInDown"
    SCALE_IN = "scaleIn"
    SCALE_OUT = "scaleOut"
    TYPEWRITER = "typewriter"


class TransitionType(Enum):
    """Slide-to-slide transition on the audience display"""
    FADE = "fade"
    SLIDE = "slide"
    NONE = "none"


class PlaybackMode(Enum):
    """Top-level playback state machine states"""
    IDLE = auto()        # Editor mode
    PRESENTING = auto()  # Driving a presentation


class ViewMode(Enum):
    """What the driver window shows while presenting"""
    PRESENTER = auto()  # Console: slide, next preview, notes, timer
    AUDIENCE = auto()   # Slide only


class WindowRole(Enum):
    """Which side of the paired-window protocol an endpoint plays"""
    DRIVER = auto()     # Presenter console, owns navigation input
    PASSENGER = auto()  # Audience display, mirrors the driver


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for filtering"""
    CONFIG = auto()
    SYSTEM = auto()
    PLAYBACK = auto()
    CHANNEL = auto()
    PREVIEW = auto()
    INPUT = auto()
    EVENT = auto()
    API = auto()
    SOCKETIO = auto()
    TASK = auto()
    SHUTDOWN = auto()
    GENERAL = auto()
