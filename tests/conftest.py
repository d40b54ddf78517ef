# tests/conftest.py
from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional

import pytest

from pokeviewer.errors import NotFoundError, TransportError
from pokeviewer.models import Entity, SpeciesRecord

API = "https://pokeapi.co/api/v2"


def species_url(species_id: int) -> str:
    return f"{API}/pokemon-species/{species_id}/"


def chain_url(chain_id: int) -> str:
    return f"{API}/evolution-chain/{chain_id}/"


def pokemon_payload(pokemon_id: int, name: str, species_id: Optional[int] = None) -> Dict[str, Any]:
    species_id = species_id or pokemon_id
    return {
        "id": pokemon_id,
        "name": name,
        "species": {"name": name, "url": species_url(species_id)},
        "types": [
            {"slot": 2, "type": {"name": "poison"}},
            {"slot": 1, "type": {"name": "grass"}},
        ],
        "stats": [
            {"base_stat": 45, "stat": {"name": "hp"}},
            {"base_stat": 49, "stat": {"name": "attack"}},
            {"base_stat": 65, "stat": {"name": "special-attack"}},
        ],
        "sprites": {
            "front_default": f"https://sprites.test/{pokemon_id}.png",
            "other": {
                "official-artwork": {
                    "front_default": f"https://artwork.test/{pokemon_id}.png"
                }
            },
        },
    }


def node(name: str, species_id: int, *children: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "species": {"name": name, "url": species_url(species_id)},
        "evolves_to": list(children),
        "evolution_details": [],
    }


def bulbasaur_chain() -> Dict[str, Any]:
    return node("bulbasaur", 1, node("ivysaur", 2, node("venusaur", 3)))


class FakeGateway:
    """In-memory stand-in for PokeApiGateway.

    ``gates`` maps a species ref to an ``asyncio.Event`` the species fetch
    waits on, so tests can control completion order.
    """

    def __init__(
        self,
        *,
        entities: Optional[List[Entity]] = None,
        species: Optional[Dict[str, SpeciesRecord]] = None,
        chains: Optional[Dict[str, Dict[str, Any]]] = None,
        fail_batch: bool = False,
    ) -> None:
        self.entities = entities or []
        self.species = species or {}
        self.chains = chains or {}
        self.fail_batch = fail_batch
        self.gates: Dict[str, asyncio.Event] = {}
        self.calls: List[str] = []

    async def fetch_batch(self, count: int) -> List[Entity]:
        self.calls.append(f"batch:{count}")
        if self.fail_batch:
            raise TransportError("connection refused")
        return self.entities[:count]

    async def fetch_species(self, ref: str) -> SpeciesRecord:
        self.calls.append(ref)
        gate = self.gates.get(ref)
        if gate is not None:
            await gate.wait()
        if ref not in self.species:
            raise NotFoundError(f"Not found: {ref}", url=ref)
        return self.species[ref]

    async def fetch_evolution_chain(self, ref: str) -> Dict[str, Any]:
        self.calls.append(ref)
        if ref not in self.chains:
            raise TransportError(f"HTTP 500 for {ref}", url=ref)
        return self.chains[ref]


@pytest.fixture
def bulbasaur() -> Entity:
    return Entity.from_payload(pokemon_payload(1, "bulbasaur"))


@pytest.fixture
def charmander() -> Entity:
    return Entity.from_payload(pokemon_payload(4, "charmander"))


@pytest.fixture
def fake_gateway(bulbasaur: Entity, charmander: Entity) -> FakeGateway:
    return FakeGateway(
        entities=[bulbasaur, charmander],
        species={
            species_url(1): SpeciesRecord("bulbasaur", chain_url(1)),
            species_url(4): SpeciesRecord("charmander", chain_url(2)),
        },
        chains={
            chain_url(1): bulbasaur_chain(),
            chain_url(2): node(
                "charmander", 4, node("charmeleon", 5, node("charizard", 6))
            ),
        },
    )
