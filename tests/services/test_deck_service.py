import json

import pytest

from models.errors import AnimationConfigError, DeckLoadError, SlideIndexError
from services.deck_service import DeckService


def _write(tmp_path, data) -> str:
    path = tmp_path / "deck.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


DECK_DOC = {
    "meta": {"title": "Demo", "author": "Someone", "aspectRatio": "4:3"},
    "slides": [
        {
            "id": "s1",
            "elements": [{"id": "title", "type": "text"}],
            "animations": [
                {"target": "title", "trigger": "onEnter", "effect": "fadeIn", "duration": 600},
                {"target": "a", "trigger": "onClick", "effect": "slideInLeft"},
            ],
            "notes": "Hello [step:1]there[/step]",
        },
        {"id": "s2", "transition": {"type": "slide", "duration": 400}},
    ],
}


@pytest.mark.asyncio
async def test_load_reads_deck(tmp_path):
    service = await DeckService.load(_write(tmp_path, DECK_DOC))

    assert service.deck.meta.title == "Demo"
    assert service.deck.meta.aspect_ratio == "4:3"
    assert service.slide_count == 2
    assert service.current_slide.id == "s1"
    assert len(service.steps_for(0)) == 1
    assert service.steps_for(1) == []
    assert service.get_slide(1).transition.duration == 400


@pytest.mark.asyncio
async def test_load_missing_file(tmp_path):
    with pytest.raises(DeckLoadError) as exc_info:
        await DeckService.load(tmp_path / "nope.json")
    assert exc_info.value.status_code == 422


@pytest.mark.asyncio
async def test_load_invalid_json(tmp_path):
    path = tmp_path / "deck.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(DeckLoadError):
        await DeckService.load(path)


@pytest.mark.asyncio
async def test_load_document_without_slides(tmp_path):
    with pytest.raises(DeckLoadError):
        await DeckService.load(_write(tmp_path, {"meta": {"title": "x"}}))


@pytest.mark.asyncio
async def test_load_surfaces_invalid_animation_chain(tmp_path):
    doc = {
        "slides": [
            {"id": "ok"},
            {
                "id": "bad",
                "animations": [
                    {"target": "x", "trigger": "afterPrevious", "effect": "fadeIn"},
                ],
            },
        ]
    }
    with pytest.raises(AnimationConfigError) as exc_info:
        await DeckService.load(_write(tmp_path, doc))
    assert exc_info.value.index == 0
    assert exc_info.value.details["slide"] == 1


def test_navigation_bounds(deck_service):
    assert not deck_service.prev_slide()
    assert deck_service.next_slide()
    assert deck_service.next_slide()
    assert deck_service.current_slide_index == 2
    assert not deck_service.next_slide()

    with pytest.raises(SlideIndexError):
        deck_service.set_current_slide(3)
    with pytest.raises(SlideIndexError):
        deck_service.get_slide(-1)


def test_steps_are_cached(deck_service):
    assert deck_service.steps_for(0) is deck_service.steps_for(0)


def test_fork_has_independent_position(deck_service):
    deck_service.set_current_slide(1)
    fork = deck_service.fork()

    assert fork.current_slide_index == 1
    fork.next_slide()
    assert deck_service.current_slide_index == 1
    assert fork.deck is deck_service.deck
