"""Decides which value is good enough to display for a branding asset."""

from __future__ import annotations

from typing import Any

from .models import (
    FIELD_SELECTORS,
    Absent,
    AssetType,
    FallbackDefaults,
    Failure,
    FetchOutcome,
    ResolutionOutcome,
    Source,
    Success,
)


def is_displayable(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def resolve(outcome: FetchOutcome, default: str, field: str) -> str:
    """Return the fetched ``field`` verbatim when usable, otherwise ``default``."""
    if isinstance(outcome, Success):
        value = getattr(outcome.asset, field, None)
        return value if is_displayable(value) else default
    if isinstance(outcome, (Absent, Failure)):
        return default
    raise TypeError(f"unsupported fetch outcome: {outcome!r}")


def resolve_outcome(
    asset_type: AssetType,
    outcome: FetchOutcome,
    defaults: FallbackDefaults,
) -> ResolutionOutcome:
    field = FIELD_SELECTORS[asset_type]
    display_value = resolve(outcome, defaults.value_for(asset_type), field)
    remote = isinstance(outcome, Success) and is_displayable(getattr(outcome.asset, field, None))
    return ResolutionOutcome(
        display_value=display_value,
        source=Source.REMOTE if remote else Source.FALLBACK,
        error=outcome.message if isinstance(outcome, Failure) else None,
    )


def fallback_outcome(asset_type: AssetType, defaults: FallbackDefaults, error: str | None = None) -> ResolutionOutcome:
    return ResolutionOutcome(
        display_value=defaults.value_for(asset_type),
        source=Source.FALLBACK,
        error=error,
    )
