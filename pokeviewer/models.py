"""Data model for the catalog viewer.

Entities and species records are parsed from raw PokéAPI payloads and are
immutable afterwards. Evolution nodes stay as the raw mappings the API
returns; only the resolved ``EvolutionStage`` rows get their own type.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from .errors import TransportError

# Raw evolution-chain node: {"species": {"name", "url"}, "evolves_to": [...]}
EvolutionNode = Mapping[str, Any]


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


@dataclass(frozen=True)
class EntityImages:
    artwork: Optional[str] = None
    sprite: Optional[str] = None


@dataclass(frozen=True)
class Entity:
    id: int
    name: str
    stats: Tuple[Tuple[str, int], ...]
    types: Tuple[str, ...]
    images: EntityImages
    species_ref: str

    @property
    def image(self) -> Optional[str]:
        """Official artwork when available, else the default front sprite."""
        return self.images.artwork or self.images.sprite

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "Entity":
        """Build an Entity from a raw ``pokemon`` payload.

        Raises ``TransportError`` when a required field is missing.
        """
        entity_id = payload.get("id")
        name = payload.get("name")
        species_ref = _as_dict(payload.get("species")).get("url")
        if not isinstance(entity_id, int) or entity_id < 1:
            raise TransportError(f"Pokemon payload has no valid id: {entity_id!r}")
        if not isinstance(name, str) or not name:
            raise TransportError(f"Pokemon {entity_id} payload has no name")
        if not isinstance(species_ref, str) or not species_ref:
            raise TransportError(f"Pokemon {entity_id} payload has no species url")

        raw_types = payload.get("types")
        if not isinstance(raw_types, list):
            raw_types = []
        type_slots = [t for t in raw_types if isinstance(t, dict)]
        type_slots.sort(
            key=lambda t: t["slot"] if isinstance(t.get("slot"), int) else 0
        )
        types = tuple(
            _as_dict(t.get("type")).get("name")
            for t in type_slots
            if isinstance(_as_dict(t.get("type")).get("name"), str)
        )
        if not types:
            raise TransportError(f"Pokemon {entity_id} payload has no types")

        raw_stats = payload.get("stats")
        if not isinstance(raw_stats, list):
            raw_stats = []
        stats = tuple(
            (s["stat"]["name"], s["base_stat"])
            for s in raw_stats
            if isinstance(s, dict)
            and isinstance(_as_dict(s.get("stat")).get("name"), str)
            and isinstance(s.get("base_stat"), int)
        )

        sprites = _as_dict(payload.get("sprites"))
        artwork = _as_dict(_as_dict(sprites.get("other")).get("official-artwork")).get(
            "front_default"
        )
        sprite = sprites.get("front_default")
        return cls(
            id=entity_id,
            name=name,
            stats=stats,
            types=types,
            images=EntityImages(
                artwork=artwork if isinstance(artwork, str) else None,
                sprite=sprite if isinstance(sprite, str) else None,
            ),
            species_ref=species_ref,
        )


@dataclass(frozen=True)
class SpeciesRecord:
    name: str
    evolution_chain_ref: Optional[str]

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "SpeciesRecord":
        evo_url = _as_dict(payload.get("evolution_chain")).get("url")
        return cls(
            name=str(payload.get("name") or ""),
            evolution_chain_ref=evo_url if isinstance(evo_url, str) and evo_url else None,
        )


@dataclass(frozen=True)
class EvolutionStage:
    name: str
    image_ref: str


class SelectionStatus(enum.Enum):
    NONE = "none"
    PENDING = "pending"
    READY = "ready"
    EMPTY = "empty"


@dataclass(frozen=True)
class SelectionState:
    """What the detail panel shows.

    ``evolution`` is always a tuple; it is non-empty only when ``READY``.
    """

    status: SelectionStatus = SelectionStatus.NONE
    entity: Optional[Entity] = None
    evolution: Tuple[EvolutionStage, ...] = field(default_factory=tuple)

    @classmethod
    def none(cls) -> "SelectionState":
        return cls()

    @classmethod
    def pending(cls, entity: Entity) -> "SelectionState":
        return cls(status=SelectionStatus.PENDING, entity=entity)

    @classmethod
    def resolved(
        cls, entity: Entity, evolution: Tuple[EvolutionStage, ...]
    ) -> "SelectionState":
        status = SelectionStatus.READY if evolution else SelectionStatus.EMPTY
        return cls(status=status, entity=entity, evolution=tuple(evolution))
