"""Selection controller.

Owns the detail-panel state. Selecting an entity starts the species ->
evolution-chain fetch sequence; every sequence is tagged with the selection
epoch it was started for and only commits if that epoch is still current,
so a slow response never overwrites a newer selection.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional, Protocol, Set, Tuple

from .config import DEFAULT_MAX_CHAIN_DEPTH, DEFAULT_SPRITE_BASE_URL
from .errors import TransportError
from .evolution import resolve_chain_lenient
from .models import (
    Entity,
    EvolutionNode,
    EvolutionStage,
    SelectionState,
    SpeciesRecord,
)

logger = logging.getLogger(__name__)

# Raised when a fetched record has an unexpected shape.
PAYLOAD_SHAPE_ERRORS = (AttributeError, KeyError, TypeError, ValueError)


class EvolutionSource(Protocol):
    async def fetch_species(self, ref: str) -> SpeciesRecord: ...

    async def fetch_evolution_chain(self, ref: str) -> EvolutionNode: ...


class SelectionController:
    def __init__(
        self,
        gateway: EvolutionSource,
        *,
        max_depth: int = DEFAULT_MAX_CHAIN_DEPTH,
        image_base_url: str = DEFAULT_SPRITE_BASE_URL,
        on_change: Optional[Callable[[SelectionState], None]] = None,
    ) -> None:
        self._gateway = gateway
        self._max_depth = max_depth
        self._image_base_url = image_base_url
        self._on_change = on_change
        self._epoch = 0
        self._task: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()
        self._state = SelectionState.none()

    @property
    def state(self) -> SelectionState:
        return self._state

    def _set_state(self, state: SelectionState) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change(state)

    def select(self, entity: Entity) -> asyncio.Task:
        """Select ``entity`` and start loading its evolution chain.

        Must be called from a running event loop. The previous evolution list
        is cleared immediately.
        """
        self._epoch += 1
        self._set_state(SelectionState.pending(entity))
        task = asyncio.get_running_loop().create_task(self._load(entity, self._epoch))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._task = task
        return task

    def deselect(self) -> None:
        """Clear the selection; any in-flight result will be discarded."""
        self._epoch += 1
        self._task = None
        self._set_state(SelectionState.none())

    async def wait(self) -> SelectionState:
        """Wait for the in-flight fetch sequence, if any, and return the state."""
        if self._task is not None:
            await asyncio.shield(self._task)
        return self._state

    async def _fetch_stages(self, entity: Entity) -> Tuple[EvolutionStage, ...]:
        species = await self._gateway.fetch_species(entity.species_ref)
        if species.evolution_chain_ref is None:
            logger.warning("Species for %s has no evolution chain reference", entity.name)
            return ()
        chain = await self._gateway.fetch_evolution_chain(species.evolution_chain_ref)
        return tuple(
            resolve_chain_lenient(
                chain, max_depth=self._max_depth, image_base_url=self._image_base_url
            )
        )

    async def _load(self, entity: Entity, epoch: int) -> None:
        try:
            stages = await self._fetch_stages(entity)
        except (TransportError, *PAYLOAD_SHAPE_ERRORS) as exc:
            logger.warning("Failed to load evolution chain for %s: %s", entity.name, exc)
            stages = ()

        if epoch != self._epoch:
            logger.debug("Discarding evolution result for stale selection %s", entity.name)
            return
        self._set_state(SelectionState.resolved(entity, stages))
