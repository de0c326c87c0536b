import pytest

from engine.step_compiler import compile_steps, on_enter_animations
from models.enums import AnimationTrigger as T
from models.errors import AnimationConfigError
from helpers import anim


def test_one_step_per_anchor_in_scan_order():
    a, b, c = anim("a"), anim("b", T.ON_KEY, key="x"), anim("c")

    steps = compile_steps([a, b, c])

    assert [s.anchor for s in steps] == [a, b, c]
    assert [s.trigger for s in steps] == [T.ON_CLICK, T.ON_KEY, T.ON_CLICK]
    for step in steps:
        assert len(step.animations) == 1
        assert dict(step.delay_overrides) == {}


def test_on_key_step_carries_its_key():
    steps = compile_steps([anim("a", T.ON_KEY, key="v")])
    assert steps[0].key == "v"
    assert steps[0].matches_key("v")
    assert not steps[0].matches_key("V")


def test_on_enter_is_not_a_step():
    intro = anim("intro", T.ON_ENTER)
    click = anim("a")

    steps = compile_steps([intro, click])

    assert len(steps) == 1
    assert steps[0].anchor is click
    assert on_enter_animations([intro, click]) == [intro]


def test_empty_list_compiles_to_no_steps():
    assert compile_steps([]) == []


def test_with_previous_starts_with_anchor():
    anchor = anim("a", delay=200, duration=400)
    together = anim("b", T.WITH_PREVIOUS, delay=50)

    step = compile_steps([anchor, together])[0]

    assert step.animations == (anchor, together)
    assert step.start_offset(anchor) == 200
    assert step.start_offset(together) == 250


def test_after_previous_waits_for_anchor_duration():
    anchor = anim("a", delay=100, duration=300)
    after = anim("b", T.AFTER_PREVIOUS, delay=50)

    step = compile_steps([anchor, after])[0]

    assert step.delay_overrides[after] == 100 + 300 + 50


def test_after_previous_uses_default_duration_when_unset():
    anchor = anim("a")
    after = anim("b", T.AFTER_PREVIOUS)

    step = compile_steps([anchor, after], default_duration_ms=800)[0]

    assert step.delay_overrides[after] == 800


def test_chain_resolves_against_the_previous_entry():
    anchor = anim("a", duration=300)
    second = anim("b", T.AFTER_PREVIOUS, delay=100, duration=200)
    third = anim("c", T.AFTER_PREVIOUS)
    fourth = anim("d", T.WITH_PREVIOUS, delay=10)

    step = compile_steps([anchor, second, third, fourth])[0]

    assert step.start_offset(second) == 400
    assert step.start_offset(third) == 600
    assert step.start_offset(fourth) == 610


def test_chain_entries_attach_to_the_latest_step():
    first, second = anim("a"), anim("b")
    chained = anim("c", T.WITH_PREVIOUS)

    steps = compile_steps([first, second, chained])

    assert steps[0].animations == (first,)
    assert steps[1].animations == (second, chained)


def test_on_enter_between_anchor_and_chain_is_skipped():
    anchor = anim("a", duration=300)
    intro = anim("intro", T.ON_ENTER)
    after = anim("b", T.AFTER_PREVIOUS)

    steps = compile_steps([anchor, intro, after])

    assert steps[0].animations == (anchor, after)
    assert steps[0].delay_overrides[after] == 300


def test_explicit_order_sorts_steps():
    a = anim("a", order=2)
    b = anim("b", order=1)
    c = anim("c")

    steps = compile_steps([a, b, c])

    assert [s.anchor for s in steps] == [b, a, c]


def test_order_ties_keep_scan_order():
    a = anim("a", order=1)
    b = anim("b", order=1)

    assert [s.anchor for s in compile_steps([a, b])] == [a, b]


def test_order_is_ignored_on_on_key_anchors():
    k = anim("k", T.ON_KEY, key="v", order=5)
    c = anim("c", order=0)

    steps = compile_steps([k, c])

    # k falls back to scan position 0, ties with c's order 0, scan index breaks it
    assert [s.anchor for s in steps] == [k, c]


@pytest.mark.parametrize("trigger", [T.AFTER_PREVIOUS, T.WITH_PREVIOUS])
def test_chain_before_any_anchor_is_rejected(trigger):
    intro = anim("intro", T.ON_ENTER)
    orphan = anim("orphan", trigger)

    with pytest.raises(AnimationConfigError) as exc_info:
        compile_steps([intro, orphan, anim("a")])

    assert exc_info.value.index == 1
    assert exc_info.value.target == "orphan"
    assert exc_info.value.details == {"index": 1, "target": "orphan"}


def test_identical_entries_stay_distinct():
    a1 = anim("same")
    a2 = anim("same")

    steps = compile_steps([a1, a2])

    assert len(steps) == 2
    assert steps[0].anchor is a1 and steps[1].anchor is a2
