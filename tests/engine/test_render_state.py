from engine.render_state import build_render_state
from engine.step_compiler import compile_steps
from models.enums import AnimationTrigger as T
from helpers import anim, slide


def _slide_and_steps():
    intro = anim("intro", T.ON_ENTER)
    first = anim("first", duration=200)
    chained = anim("chained", T.AFTER_PREVIOUS, delay=50)
    second = anim("second")
    s = slide("s", intro, first, chained, second)
    return s, compile_steps(s.animations), (intro, first, chained, second)


def test_step_zero_shows_only_on_enter():
    s, steps, (intro, first, chained, second) = _slide_and_steps()

    state = build_render_state(s, steps, 0)

    assert state.is_active(intro)
    assert not state.is_active(first)
    assert state.hidden_targets() == ["first", "chained", "second"]


def test_revealed_steps_are_active():
    s, steps, (intro, first, chained, second) = _slide_and_steps()

    state = build_render_state(s, steps, 1)

    assert state.is_active(first) and state.is_active(chained)
    assert not state.is_active(second)
    assert state.hidden_targets() == ["second"]

    done = build_render_state(s, steps, len(steps))
    assert done.hidden_targets() == []


def test_start_delay_prefers_override():
    s, steps, (intro, first, chained, second) = _slide_and_steps()

    state = build_render_state(s, steps, 2)

    assert state.start_delay(chained) == 250
    assert state.start_delay(first) == 0


def test_on_advance_is_passed_through():
    s, steps, _ = _slide_and_steps()
    calls = []

    state = build_render_state(s, steps, 0, on_advance=lambda: calls.append(1))
    state.on_advance()

    assert calls == [1]
