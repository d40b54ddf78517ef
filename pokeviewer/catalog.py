"""Initial catalog load with loading/error flags for the grid view."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol, Tuple

from .errors import TransportError
from .models import Entity

logger = logging.getLogger(__name__)

CATALOG_ERROR_MESSAGE = "Failed to load Pokémon."


class CatalogSource(Protocol):
    async def fetch_batch(self, count: int) -> list: ...


@dataclass
class CatalogState:
    loading: bool = True
    error: Optional[str] = None
    entities: Tuple[Entity, ...] = field(default_factory=tuple)

    def find(self, entity_id: int) -> Optional[Entity]:
        for entity in self.entities:
            if entity.id == entity_id:
                return entity
        return None


async def load_catalog(gateway: CatalogSource, count: int) -> CatalogState:
    """Fetch the first ``count`` entities; a failure leaves the catalog empty."""
    state = CatalogState(loading=True)
    try:
        entities = await gateway.fetch_batch(count)
    except TransportError as exc:
        logger.error("Catalog load failed: %s", exc)
        state.error = CATALOG_ERROR_MESSAGE
    else:
        state.entities = tuple(entities)
        logger.info("Loaded %d pokemon", len(entities))
    finally:
        state.loading = False
    return state
