"""
Models package - Data models for the presentation playback engine
"""

from .enums import (
    AnimationTrigger,
    AnimationEffect,
    TransitionType,
    PlaybackMode,
    ViewMode,
    WindowRole,
    LogLevel,
    LogCategory,
)

__all__ = [
    'AnimationTrigger',
    'AnimationEffect',
    'TransitionType',
    'PlaybackMode',
    'ViewMode',
    'WindowRole',
    'LogLevel',
    'LogCategory',
]
