"""Concurrent resolution of branding assets into display values."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, Mapping, Optional, Protocol

from .exceptions import BrandingError, SessionClosedError
from .models import (
    Absent,
    AssetType,
    BatchState,
    BrandingAsset,
    Failure,
    FallbackDefaults,
    FetchOutcome,
    ResolutionOutcome,
    SpecificAssetState,
    Success,
)
from .resolver import fallback_outcome, resolve_outcome

logger = logging.getLogger(__name__)


class AssetReader(Protocol):
    async def get_by_type(self, asset_type: AssetType) -> BrandingAsset | None:
        ...


class ResolutionCoordinator:
    """Owns the batch state of one consuming session.

    Every ``resolve`` call is a round tagged with an increasing id. Rounds are
    never cancelled. Each asset type remembers the latest round that asked for
    it, and a settling round only writes the types it is still latest for, so
    an older round settling late cannot overwrite a newer result and a partial
    round cannot pin another type to an older value. ``loading`` stays true
    while any type's latest round is still in flight.
    """

    def __init__(
        self,
        reader: AssetReader,
        defaults: FallbackDefaults,
        asset_types: Optional[Iterable[AssetType]] = None,
    ) -> None:
        self._reader = reader
        self._defaults = defaults
        self._asset_types = tuple(dict.fromkeys(asset_types)) if asset_types is not None else tuple(AssetType)
        if not self._asset_types:
            raise ValueError("at least one asset type must be configured")
        self._state: BatchState | None = None
        self._latest_round = 0
        self._type_rounds: dict[AssetType, int] = {}
        self._pending: set[int] = set()
        self._closed = False

    @property
    def asset_types(self) -> tuple[AssetType, ...]:
        return self._asset_types

    @property
    def state(self) -> BatchState:
        if self._state is None:
            return BatchState(loading=False, per_type_outcome=self._fallbacks(self._asset_types))
        return self._state

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def error(self) -> Optional[str]:
        return self.state.aggregate_error

    @property
    def closed(self) -> bool:
        return self._closed

    def display_value(self, asset_type: AssetType) -> str:
        outcome = self.state.per_type_outcome.get(asset_type)
        if outcome is None:
            return self._defaults.value_for(asset_type)
        return outcome.display_value

    @property
    def logo_url(self) -> str:
        return self.display_value(AssetType.LOGO)

    @property
    def footer_text(self) -> str:
        return self.display_value(AssetType.FOOTER)

    async def resolve(self, asset_types: Optional[Iterable[AssetType]] = None) -> BatchState:
        if self._closed:
            raise SessionClosedError("resolution session is closed")

        types = tuple(dict.fromkeys(asset_types)) if asset_types is not None else self._asset_types
        self._latest_round += 1
        round_id = self._latest_round
        self._pending.add(round_id)
        for asset_type in types:
            self._type_rounds[asset_type] = round_id
        current = self.state
        self._state = BatchState(
            loading=True,
            per_type_outcome=dict(current.per_type_outcome),
            round_id=round_id,
        )

        try:
            outcomes = await self._resolve_round(types)
        except asyncio.CancelledError:
            self._commit(round_id, {})
            raise
        except Exception as exc:  # pylint: disable=broad-except
            logger.exception("Error loading branding assets")
            return self._commit(
                round_id,
                self._fallbacks(types),
                aggregate_error=str(exc) or "Failed to load branding assets",
            )
        return self._commit(round_id, outcomes)

    async def refresh(self) -> BatchState:
        return await self.resolve(self._asset_types)

    async def resolve_specific(self, asset_type: AssetType) -> SpecificAssetState:
        """Fetch one asset without fallback, for screens that manage it."""
        try:
            asset = await self._reader.get_by_type(asset_type)
        except BrandingError as exc:
            logger.error("Error loading %s asset: %s", asset_type.value, exc)
            return SpecificAssetState(
                asset_type=asset_type,
                asset=None,
                error=str(exc) or f"Failed to load {asset_type.value} asset",
            )
        return SpecificAssetState(asset_type=asset_type, asset=asset)

    def close(self) -> None:
        self._closed = True
        self._state = None

    async def _resolve_round(self, types: tuple[AssetType, ...]) -> dict[AssetType, ResolutionOutcome]:
        results = await asyncio.gather(
            *(self._reader.get_by_type(asset_type) for asset_type in types),
            return_exceptions=True,
        )
        outcomes: dict[AssetType, ResolutionOutcome] = {}
        for asset_type, result in zip(types, results):
            fetched = _to_fetch_outcome(result)
            if isinstance(fetched, Failure):
                logger.warning(
                    "Failed to load %s asset, using fallback: %s",
                    asset_type.value,
                    fetched.message,
                )
            outcomes[asset_type] = resolve_outcome(asset_type, fetched, self._defaults)
        return outcomes

    def _commit(
        self,
        round_id: int,
        outcomes: Mapping[AssetType, ResolutionOutcome],
        aggregate_error: Optional[str] = None,
    ) -> BatchState:
        """Merge a settled round into the current state, type by type.

        A type's outcome is only written while this round is still the latest
        one issued for that type. The returned state is the round's own view;
        it is the shared state whenever nothing in it was stale.
        """
        self._pending.discard(round_id)
        current = self.state
        own_view = self._settled(current.per_type_outcome, outcomes, round_id, aggregate_error)
        if self._closed:
            logger.debug("Discarding branding round %s: session closed", round_id)
            return own_view

        fresh = {
            asset_type: outcome
            for asset_type, outcome in outcomes.items()
            if self._type_rounds.get(asset_type) == round_id
        }
        if len(fresh) < len(outcomes):
            logger.debug(
                "Discarding stale branding outcomes from round %s: %s",
                round_id,
                ", ".join(t.value for t in outcomes if t not in fresh),
            )
        if outcomes and not fresh:
            return own_view

        state = self._settled(
            current.per_type_outcome,
            fresh,
            max(round_id, current.round_id),
            aggregate_error,
            loading=self._in_flight(),
        )
        self._state = state
        if state.loading or len(fresh) < len(outcomes):
            return own_view
        return state

    def _in_flight(self) -> bool:
        return any(round_id in self._pending for round_id in self._type_rounds.values())

    def _settled(
        self,
        base: Mapping[AssetType, ResolutionOutcome],
        outcomes: Mapping[AssetType, ResolutionOutcome],
        round_id: int,
        aggregate_error: Optional[str] = None,
        loading: bool = False,
    ) -> BatchState:
        merged = self._fallbacks(self._asset_types)
        merged.update(base)
        merged.update(outcomes)
        return BatchState(
            loading=loading,
            per_type_outcome=merged,
            aggregate_error=aggregate_error,
            round_id=round_id,
        )

    def _fallbacks(self, types: Iterable[AssetType]) -> dict[AssetType, ResolutionOutcome]:
        return {asset_type: fallback_outcome(asset_type, self._defaults) for asset_type in types}


def _to_fetch_outcome(result: Any) -> FetchOutcome:
    if isinstance(result, BaseException):
        return Failure(result)
    if result is None:
        return Absent()
    if isinstance(result, BrandingAsset):
        return Success(result)
    raise TypeError(f"unexpected asset lookup result: {result!r}")
