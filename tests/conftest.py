import os
import sys
import pytest

# Ensure hexengine/tactics can be imported
sys.path.append(os.getcwd())

from hexengine.core.events import EventBus
from hexengine.core.ids import IdGenerator
from hexengine.grid.hex import HexCoord
from tactics.components import Character, Faction
from tactics.skills.catalog import create_skill, get_definition


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    return EventBus()


@pytest.fixture
def ids():
    """Fresh IdGenerator for each test."""
    return IdGenerator()


@pytest.fixture
def make_skill(ids):
    """Factory: skill instance from a catalog id, with optional overrides."""
    def make(definition_id, **overrides):
        instance = create_skill(get_definition(definition_id), ids)
        for name, value in overrides.items():
            setattr(instance, name, value)
        return instance
    return make


@pytest.fixture
def make_character(ids):
    """
    Factory: character at (q, r) with the given skills.

    Slot positions follow creation order.
    """
    created = []

    def make(faction=Faction.FRIENDLY, q=0, r=0, hp=100, max_hp=100, skills=None, **extra):
        created.append(None)
        character_id = extra.pop("id", None) or ids.next(faction.value)
        return Character(
            id=character_id,
            name=extra.pop("name", f"{faction.label} {len(created)}"),
            faction=faction,
            slot_position=extra.pop("slot_position", len(created)),
            hp=hp,
            max_hp=max_hp,
            position=HexCoord(q, r),
            skills=skills or [],
            **extra,
        )
    return make
