"""Evolution chain resolution.

Turns a raw PokéAPI evolution-chain node into the linear list of stages the
detail panel shows. Only the first branch is followed at each node, so
species with alternate evolutions (Eevee, Tyrogue, ...) show one lineage.
"""

from __future__ import annotations

import logging
import re
from typing import Any, List, Optional

from .config import DEFAULT_MAX_CHAIN_DEPTH, DEFAULT_SPRITE_BASE_URL
from .errors import MalformedChainError
from .models import EvolutionNode, EvolutionStage

logger = logging.getLogger(__name__)

TRAILING_ID_RE = re.compile(r"/(\d+)/?$")


def species_id_from_ref(ref: str) -> Optional[int]:
    """Extract the trailing numeric segment of a species URL.

    Returns ``None`` when the URL does not end with a numeric segment.
    """
    m = TRAILING_ID_RE.search(ref.strip())
    return int(m.group(1)) if m else None


def image_ref_for(species_id: int, base_url: str = DEFAULT_SPRITE_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/{species_id}.png"


def _stage_for(node: Any, base_url: str) -> Optional[EvolutionStage]:
    if not isinstance(node, dict):
        return None
    species = node.get("species")
    if not isinstance(species, dict):
        return None
    name = species.get("name")
    ref = species.get("url")
    if not isinstance(name, str) or not name or not isinstance(ref, str):
        return None
    species_id = species_id_from_ref(ref)
    if species_id is None:
        return None
    return EvolutionStage(name=name, image_ref=image_ref_for(species_id, base_url))


def resolve_chain(
    node: Optional[EvolutionNode],
    *,
    max_depth: int = DEFAULT_MAX_CHAIN_DEPTH,
    image_base_url: str = DEFAULT_SPRITE_BASE_URL,
) -> List[EvolutionStage]:
    """Flatten an evolution chain along its first branch.

    ``None`` yields an empty list. At most ``max_depth`` stages are produced;
    a chain that is longer, revisits a node, or contains a node without a
    usable species name and numeric URL raises ``MalformedChainError`` with
    the stages resolved so far.
    """
    stages: List[EvolutionStage] = []
    seen: set[int] = set()
    current = node

    while current is not None:
        if id(current) in seen:
            raise MalformedChainError(
                f"Evolution chain revisits a node after {len(stages)} stages",
                stages,
            )
        if len(stages) >= max_depth:
            raise MalformedChainError(
                f"Evolution chain exceeds the maximum depth of {max_depth}",
                stages,
            )
        seen.add(id(current))

        stage = _stage_for(current, image_base_url)
        if stage is None:
            raise MalformedChainError(
                f"Evolution chain node {len(stages)} has no usable species",
                stages,
            )
        stages.append(stage)

        evolves_to = current.get("evolves_to")
        if not isinstance(evolves_to, list) or not evolves_to:
            break
        current = evolves_to[0]

    return stages


def resolve_chain_lenient(
    node: Optional[EvolutionNode],
    *,
    max_depth: int = DEFAULT_MAX_CHAIN_DEPTH,
    image_base_url: str = DEFAULT_SPRITE_BASE_URL,
) -> List[EvolutionStage]:
    """Like ``resolve_chain`` but truncates malformed chains to their valid prefix."""
    try:
        return resolve_chain(node, max_depth=max_depth, image_base_url=image_base_url)
    except MalformedChainError as exc:
        logger.warning("%s; keeping %d stage(s)", exc, len(exc.stages))
        return list(exc.stages)
