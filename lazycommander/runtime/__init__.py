"""Runtime state machine: controller, event queue, and geometry handling.

The loop and bootstrap live in ``runtime.loop`` and ``runtime.app``; they
import the renderer, which itself depends on this package's controller.
"""

from .controller import DualPaneController, Focus, Mode
from .events import EventQueue, ResizeEvent
from .resize import Layout, ResizeCoordinator

__all__ = [
    "DualPaneController",
    "Focus",
    "Mode",
    "EventQueue",
    "ResizeEvent",
    "Layout",
    "ResizeCoordinator",
]
