"""
Deck Service

Holds the loaded deck and the window's current slide. Controllers only see
it through the DeckNavigator protocol, so tests can pass any object with the
same shape.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

import aiofiles

from engine.step_compiler import compile_steps
from models.domain.animation import AnimationStep, DEFAULT_DURATION_MS
from models.domain.slide import Deck, Slide
from models.errors import AnimationConfigError, DeckLoadError, SlideIndexError
from utils.logger import get_logger, LogCategory
from utils.serialization import Serializer

log = get_logger().for_category(LogCategory.PLAYBACK)


class DeckNavigator(Protocol):
    """Slide access and navigation used by the playback controllers"""

    @property
    def current_slide_index(self) -> int: ...

    @property
    def slide_count(self) -> int: ...

    def get_slide(self, index: int) -> Slide: ...

    def set_current_slide(self, index: int) -> None: ...

    def next_slide(self) -> bool: ...

    def prev_slide(self) -> bool: ...

    def steps_for(self, index: int) -> List[AnimationStep]: ...


class DeckService:
    """
    In-memory deck plus current slide index

    Compiled steps are cached per slide; the deck is immutable so the cache
    never goes stale for the lifetime of this service.

    Example:
        deck_service = await DeckService.load("decks/demo.json")
        deck_service.next_slide()
        steps = deck_service.steps_for(deck_service.current_slide_index)
    """

    def __init__(self, deck: Deck, default_duration_ms: int = DEFAULT_DURATION_MS, start_index: int = 0):
        self.deck = deck
        self.default_duration_ms = default_duration_ms
        self._current = 0
        self._steps_cache: Dict[int, List[AnimationStep]] = {}
        if deck.slide_count:
            self.set_current_slide(start_index)

    # ===== Loading =====

    @classmethod
    async def load(cls, path: Union[str, Path], default_duration_ms: int = DEFAULT_DURATION_MS) -> "DeckService":
        """
        Load a deck JSON document asynchronously

        Raises:
            DeckLoadError: file missing or not valid JSON / deck structure
            AnimationConfigError: a slide's animations do not compile
        """
        path = Path(path)
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError as e:
            raise DeckLoadError(f"Deck file not found: {path}", path=str(path)) from e

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise DeckLoadError(f"Deck file is not valid JSON: {e}", path=str(path)) from e

        deck = Serializer.dict_to_deck(data, path=str(path))
        service = cls(deck, default_duration_ms=default_duration_ms)

        # Surface configuration errors at load time instead of mid-presentation
        for i in range(deck.slide_count):
            try:
                service.steps_for(i)
            except AnimationConfigError as e:
                raise AnimationConfigError(e.message, index=e.index, target=e.target, slide=i) from e

        log.info("Deck loaded", title=deck.meta.title, slides=deck.slide_count, path=str(path))
        return service

    def fork(self) -> "DeckService":
        """Same deck, independent current slide (for another window)"""
        return DeckService(self.deck, self.default_duration_ms, start_index=self._current)

    # ===== Navigation =====

    @property
    def current_slide_index(self) -> int:
        return self._current

    @property
    def slide_count(self) -> int:
        return self.deck.slide_count

    @property
    def current_slide(self) -> Optional[Slide]:
        return self.deck.slides[self._current] if self.deck.slide_count else None

    def get_slide(self, index: int) -> Slide:
        if not 0 <= index < self.deck.slide_count:
            raise SlideIndexError(index, self.deck.slide_count)
        return self.deck.slides[index]

    def set_current_slide(self, index: int) -> None:
        if not 0 <= index < self.deck.slide_count:
            raise SlideIndexError(index, self.deck.slide_count)
        self._current = index

    def next_slide(self) -> bool:
        """Move forward one slide; False at the last slide"""
        if self._current >= self.deck.slide_count - 1:
            return False
        self._current += 1
        return True

    def prev_slide(self) -> bool:
        """Move back one slide; False at the first slide"""
        if self._current <= 0:
            return False
        self._current -= 1
        return True

    # ===== Steps =====

    def steps_for(self, index: int) -> List[AnimationStep]:
        if index not in self._steps_cache:
            slide = self.get_slide(index)
            self._steps_cache[index] = compile_steps(slide.animations, self.default_duration_ms)
        return self._steps_cache[index]
