from abc import ABC, abstractmethod


class IKeyboardAdapter(ABC):
    """
    Keyboard source for one window.

    Implementations publish KeyboardKeyPressEvent on the EventBus they were
    given and run until cancelled.
    """

    @abstractmethod
    async def run(self) -> None:
        """Read keys until cancelled; raise RuntimeError if the source is unusable"""
