"""
Read-only ability feed backed by the public PokeAPI.

Fetches a bounded list of abilities plus the effect descriptions of one
fixed ability. The feed never touches the product catalog; a failed
request leaves its section empty.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List

import httpx
from pydantic import BaseModel

from app.config import get_settings

logger = logging.getLogger(__name__)


class AbilityRef(BaseModel):
    """Named entry from the ability list endpoint."""
    name: str
    url: str


class AbilityFeedError(Exception):
    """Raised when the ability API returns an unusable response."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AbilityFeed:
    """
    Client and snapshot holder for the ability feed.

    Usage:
        feed = AbilityFeed(httpx.AsyncClient())
        await feed.refresh()
        feed.abilities  # [AbilityRef(name="stench", ...), ...]
        feed.effects    # ["Has a 10% chance of making target ..."]
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: str | None = None,
        page_size: int | None = None,
        ability_name: str | None = None,
    ):
        settings = get_settings()
        self.client = client
        self.base_url = (base_url or settings.ABILITY_API_BASE_URL).rstrip("/")
        self.page_size = page_size or settings.ABILITY_PAGE_SIZE
        self.ability_name = ability_name or settings.ABILITY_NAME
        self.abilities: List[AbilityRef] = []
        self.effects: List[str] = []

    async def fetch_abilities(self) -> List[AbilityRef]:
        """Fetch up to `page_size` named abilities."""
        data = await self._get_json("/ability", params={"limit": self.page_size})
        results = data.get("results") or []
        return [AbilityRef.model_validate(item) for item in results][: self.page_size]

    async def fetch_effects(self) -> List[str]:
        """Fetch the effect descriptions of the configured ability."""
        data = await self._get_json(f"/ability/{self.ability_name}")
        entries = data.get("effect_entries") or []
        return [entry["effect"] for entry in entries if entry.get("effect")]

    async def refresh(self) -> None:
        """
        Run both requests concurrently and store whichever succeed.

        Failures are logged; the matching section stays empty.
        """
        abilities, effects = await asyncio.gather(
            self.fetch_abilities(),
            self.fetch_effects(),
            return_exceptions=True,
        )

        if isinstance(abilities, Exception):
            logger.warning(f"Ability list unavailable: {abilities}")
        else:
            self.abilities = abilities
            logger.info(f"Loaded {len(abilities)} abilities")

        if isinstance(effects, Exception):
            logger.warning(f"Effects for ability '{self.ability_name}' unavailable: {effects}")
        else:
            self.effects = effects
            logger.info(f"Loaded {len(effects)} effect entries for '{self.ability_name}'")

    async def _get_json(self, path: str, params: dict | None = None) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise AbilityFeedError(
                f"GET {url} failed with status {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise AbilityFeedError(f"GET {url} failed: {e}") from e
        except ValueError as e:
            raise AbilityFeedError(f"GET {url} returned invalid JSON") from e

        if not isinstance(data, dict):
            raise AbilityFeedError(f"GET {url} returned unexpected payload")
        return data
