"""
Core engine module.

Exports:
- Component: Validated, copyable data base
- EventBus, Event: Event system
- IdGenerator: Explicit id counters
- EngineConfig: Battle constants
"""

from hexengine.core.component import Component
from hexengine.core.events import EventBus, Event, EventHandler
from hexengine.core.ids import IdGenerator
from hexengine.core.config import EngineConfig

__all__ = [
    # Components
    "Component",
    # Events
    "EventBus",
    "Event",
    "EventHandler",
    # Ids
    "IdGenerator",
    # Config
    "EngineConfig",
]
