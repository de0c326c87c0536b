from .presentation_controller import PresentationController
from .audience_controller import AudienceController
from .keyboard_controller import KeyboardController
from .window_host import WindowHost, InProcessWindowHost

__all__ = [
    'PresentationController',
    'AudienceController',
    'KeyboardController',
    'WindowHost',
    'InProcessWindowHost',
]
