"""Room contents.

A closed set of entity kinds. Serialization dispatches over exactly these
classes; anything else is rejected instead of silently degraded to a bare
entity record.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

from .errors import SerializationError


def _new_id() -> str:
    return str(uuid.uuid4())


class TreasureType(Enum):
    MONEY = "Money"
    GOLD = "Gold"
    JEWELS = "Jewels"


@dataclass
class Treasure:
    type: TreasureType
    value: int


@dataclass
class Enemy:
    name: str = "Monster"
    description: str = ""
    short_description: str = ""
    health: int = 10
    attack: int = 2
    strength: int = 0
    money_reward: int = 0
    id: str = field(default_factory=_new_id)

    entity_type = "Enemy"


@dataclass
class TreasureChest:
    name: str = "Treasure Chest"
    description: str = ""
    is_locked: bool = False
    is_opened: bool = False
    treasure: Optional[Treasure] = None
    id: str = field(default_factory=_new_id)

    entity_type = "TreasureChest"


@dataclass
class MagicalLockPick:
    name: str = "Magical Lock Pick"
    description: str = ""
    id: str = field(default_factory=_new_id)

    entity_type = "MagicalLockPick"


@dataclass
class GenericEntity:
    """Any other placeable thing (keys, NPCs, traps) carried as plain data."""

    kind: str = "Entity"
    name: str = ""
    description: str = ""
    id: str = field(default_factory=_new_id)

    entity_type = "Entity"


Entity = Union[Enemy, TreasureChest, MagicalLockPick, GenericEntity]


def entity_to_dict(entity: Entity) -> Dict[str, Any]:
    base = {"id": entity.id, "type": entity.entity_type, "name": entity.name, "description": entity.description}
    if isinstance(entity, Enemy):
        base.update(
            short_description=entity.short_description,
            health=entity.health,
            attack=entity.attack,
            strength=entity.strength,
            money_reward=entity.money_reward,
        )
    elif isinstance(entity, TreasureChest):
        base.update(
            is_locked=entity.is_locked,
            is_opened=entity.is_opened,
            treasure_type=entity.treasure.type.value if entity.treasure else None,
            treasure_value=entity.treasure.value if entity.treasure else None,
        )
    elif isinstance(entity, MagicalLockPick):
        pass
    elif isinstance(entity, GenericEntity):
        base["kind"] = entity.kind
    else:
        raise TypeError(f"unsupported room content: {type(entity).__name__}")
    return base


def entity_from_dict(data: Dict[str, Any]) -> Entity:
    if not isinstance(data, dict):
        raise SerializationError(f"entity record must be an object (was {type(data).__name__})")
    kind = data.get("type")
    common = {"name": data.get("name", ""), "description": data.get("description", "")}
    if data.get("id"):
        common["id"] = str(data["id"])
    try:
        if kind == Enemy.entity_type:
            return Enemy(
                short_description=data.get("short_description", ""),
                health=int(data.get("health", 10)),
                attack=int(data.get("attack", 2)),
                strength=int(data.get("strength", 0)),
                money_reward=int(data.get("money_reward", 0)),
                **common,
            )
        if kind == TreasureChest.entity_type:
            treasure = None
            if data.get("treasure_type") is not None:
                treasure = Treasure(TreasureType(data["treasure_type"]), int(data.get("treasure_value") or 0))
            return TreasureChest(
                is_locked=bool(data.get("is_locked", False)),
                is_opened=bool(data.get("is_opened", False)),
                treasure=treasure,
                **common,
            )
        if kind == MagicalLockPick.entity_type:
            return MagicalLockPick(**common)
        if kind == GenericEntity.entity_type:
            return GenericEntity(kind=data.get("kind", "Entity"), **common)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"invalid {kind} record: {e}") from e
    raise SerializationError(f"unknown entity type {kind!r}")


__all__ = [
    "Entity",
    "Enemy",
    "TreasureChest",
    "Treasure",
    "TreasureType",
    "MagicalLockPick",
    "GenericEntity",
    "entity_to_dict",
    "entity_from_dict",
]
