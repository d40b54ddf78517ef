"""Remote data gateway for PokéAPI.

Blocking ``requests`` calls run in worker threads so the event loop that owns
the UI state never blocks. Every fetch is bounded by a timeout and failures
are reported as ``TransportError`` (``NotFoundError`` for 404s).
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

import pokebase.common as pokebase_common
import requests

from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS
from .errors import NotFoundError, TransportError
from .models import Entity, EvolutionNode, SpeciesRecord

logger = logging.getLogger(__name__)


def _configure_pokebase_base_url(base_url: str) -> None:
    """Configure pokebase to use the configured PokéAPI base URL."""
    pokebase_common.BASE_URL = base_url.rstrip("/")


def _extract_status_code(exc: Exception) -> Optional[int]:
    resp = getattr(exc, "response", None)
    return getattr(resp, "status_code", None)


def fetch_json(url: str, timeout: float) -> Dict[str, Any]:
    """GET ``url`` and return the decoded JSON object.

    Raises ``NotFoundError`` on 404 and ``TransportError`` on any other
    HTTP, connection or decoding failure.
    """
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
        payload = resp.json()
    except requests.exceptions.HTTPError as exc:
        status_code = _extract_status_code(exc)
        if status_code == 404:
            raise NotFoundError(f"Not found: {url}", url=url) from exc
        raise TransportError(f"HTTP {status_code} for {url}", url=url) from exc
    except requests.exceptions.RequestException as exc:
        raise TransportError(f"Request failed for {url}: {exc}", url=url) from exc
    except ValueError as exc:
        raise TransportError(f"Invalid JSON from {url}", url=url) from exc

    if not isinstance(payload, dict):
        raise TransportError(f"Unexpected payload from {url}", url=url)
    return payload


class PokeApiGateway:
    """Async access to the three PokéAPI endpoint families the viewer needs."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        _configure_pokebase_base_url(self.base_url)

    def entity_url(self, index: int) -> str:
        return pokebase_common.api_url_build("pokemon", index)

    async def _get(self, url: str) -> Dict[str, Any]:
        logger.debug("GET %s", url)
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(fetch_json, url, self.timeout_seconds),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise TransportError(
                f"Timed out after {self.timeout_seconds}s: {url}", url=url
            ) from exc

    async def fetch_entity(self, index: int) -> Entity:
        url = self.entity_url(index)
        return Entity.from_payload(await self._get(url))

    async def fetch_batch(self, count: int) -> List[Entity]:
        """Fetch entities 1..count concurrently, all or nothing.

        The first failing member fails the whole batch; results of the other
        members are discarded.
        """
        if count < 1:
            raise ValueError(f"count must be positive, got {count}")
        tasks = [asyncio.ensure_future(self.fetch_entity(i)) for i in range(1, count + 1)]
        try:
            entities = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            raise
        return list(entities)

    async def fetch_species(self, ref: str) -> SpeciesRecord:
        return SpeciesRecord.from_payload(await self._get(ref))

    async def fetch_evolution_chain(self, ref: str) -> EvolutionNode:
        payload = await self._get(ref)
        chain = payload.get("chain")
        if not isinstance(chain, dict):
            raise TransportError(f"Evolution chain payload has no chain: {ref}", url=ref)
        return chain
