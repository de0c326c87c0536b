"""Playback engine - pure step compilation, preview scheduling and render state"""

from engine.step_compiler import compile_steps, on_enter_animations
from engine.preview_scheduler import preview_one, preview_all
from engine.render_state import SlideRenderState, build_render_state
from engine.notes import parse_notes, render_notes

__all__ = [
    "compile_steps",
    "on_enter_animations",
    "preview_one",
    "preview_all",
    "SlideRenderState",
    "build_render_state",
    "parse_notes",
    "render_notes",
]
