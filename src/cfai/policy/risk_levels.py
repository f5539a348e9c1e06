"""Risk classification helpers."""

from __future__ import annotations

from cfai.models.policy import RiskTier

RISK_ICONS: dict[RiskTier, str] = {
    RiskTier.LOW: "🟢",
    RiskTier.MEDIUM: "🟡",
    RiskTier.HIGH: "🔴",
    RiskTier.UNKNOWN: "⚪",
}


def risk_from_string(value: str | None) -> RiskTier:
    """Map a wire risk token to a tier; anything unrecognized is UNKNOWN."""
    if value is None:
        return RiskTier.UNKNOWN
    try:
        tier = RiskTier(value.strip().lower())
    except ValueError:
        return RiskTier.UNKNOWN
    return tier


def confirmation_tier(tier: RiskTier) -> RiskTier:
    # unknown risk is confirmed like medium, never waved through like low
    if tier == RiskTier.UNKNOWN:
        return RiskTier.MEDIUM
    return tier


def requires_individual_confirmation(tier: RiskTier) -> bool:
    return confirmation_tier(tier) == RiskTier.HIGH


def risk_icon(tier: RiskTier) -> str:
    return RISK_ICONS[tier]
