"""
Deterministic Lead Scoring Engine

Pure function from validated LeadFeatures to a ScoreBreakdown:
    stage freeze -> weighted signals + rubric blend -> segment tweaks
    -> confidence dampening -> hard/soft caps -> rationale

No I/O, no shared mutable state. Safe to call concurrently.
"""
import datetime as dt
from typing import List, Optional

from src.models.lead_features import LeadFeatures, NeighborhoodMatch, PipelineStage
from src.models.restaurant import ServiceStyle
from src.models.score_breakdown import ScoreBreakdown, ScoreComponents
from src.models.weights import DEFAULT_WEIGHTS_V1, LeadScoreWeights, DeliveryNotFeasibleRule
from src.utils.observability import logger

NEIGHBORHOOD_SCORES = {
    NeighborhoodMatch.HIGH: 1.0,
    NeighborhoodMatch.MEDIUM: 0.6,
    NeighborhoodMatch.LOW: 0.2,
    # Unknown sits above LOW: no evidence of a mismatch
    NeighborhoodMatch.UNKNOWN: 0.4,
}

STAGE_BONUS_SCORES = {
    PipelineStage.NEW: 0.0,
    PipelineStage.RESEARCHED: 0.1,
    PipelineStage.CONTACTED: 0.2,
    PipelineStage.RESPONDED: 0.45,
    PipelineStage.MEETING_SET: 0.7,
}

# (max days since last contact, score), checked in order
RECENCY_STEPS = ((7, 1.0), (30, 0.6), (120, 0.3))

STRONG_SIGNAL_THRESHOLD = 0.8
HIGH_RISK_THRESHOLD = 0.7
LOW_CONFIDENCE_THRESHOLD = 0.4


def clamp01(x: float) -> float:
    return max(0.0, min(1.0, float(x)))


def clamp100(x: float) -> float:
    return max(0.0, min(100.0, float(x)))


def bool_to_01(b: bool) -> float:
    return 1.0 if b else 0.0


# --- SUB-SCORE MAPPERS ---

def distance_to_score(distance_km: Optional[float], radius_km: float) -> float:
    """Linear falloff to zero at the radius. Unknown distance contributes 0."""
    if distance_km is None or radius_km <= 0:
        return 0.0
    return clamp01(1 - distance_km / radius_km)


def neighborhood_match_to_score(match: NeighborhoodMatch) -> float:
    return NEIGHBORHOOD_SCORES.get(match, NEIGHBORHOOD_SCORES[NeighborhoodMatch.UNKNOWN])


def stage_bonus_to_score(stage: PipelineStage) -> float:
    return STAGE_BONUS_SCORES.get(stage, 0.0)


def recency_to_score(last_contacted_at: Optional[dt.datetime], now: dt.datetime) -> float:
    """Step function on days since last contact; never contacted scores 0."""
    if last_contacted_at is None:
        return 0.0
    if last_contacted_at.tzinfo is None:
        last_contacted_at = last_contacted_at.replace(tzinfo=dt.UTC)
    days = (now - last_contacted_at).total_seconds() / 86400
    for max_days, score in RECENCY_STEPS:
        if days <= max_days:
            return score
    return 0.0


def rubric_to_score(value: int) -> float:
    return clamp01(value / 5)


# --- ENGINE ---

def _frozen(score: float, stage: PipelineStage, component: float) -> ScoreBreakdown:
    return ScoreBreakdown(
        raw=score,
        after_confidence=score,
        final=score,
        confidence_multiplier=1.0,
        reasons=[f'Stage is "{stage.value}" -> freezing score at {score:g}.'],
        components=ScoreComponents(
            signals_score_0_1=component,
            rubric_score_0_1=component,
            blended_score_0_1=component,
        ),
    )


def _signals_score(features: LeadFeatures, w: LeadScoreWeights, radius_km: float, now: dt.datetime) -> float:
    s = features.signals
    contact = features.restaurant.contact
    ws = w.signals

    weighted_sum = (
        ws.geo.delivery_feasible * bool_to_01(s.geo.delivery_feasible)
        + ws.geo.distance * distance_to_score(s.geo.distance_km, radius_km)
        + ws.geo.neighborhood_match * neighborhood_match_to_score(s.geo.neighborhood_match)

        + ws.menu.menu_fit * clamp01(s.menu.menu_fit)
        + ws.menu.seasonality_alignment * clamp01(s.menu.seasonality_alignment)
        + ws.menu.uses_target_products * bool_to_01(s.menu.uses_target_products)

        + ws.brand.sustainability_affinity * clamp01(s.brand.sustainability_affinity)
        + ws.brand.local_sourcing_language * bool_to_01(s.brand.local_sourcing_language)

        + ws.operations.volume_potential * clamp01(s.operations.volume_potential)
        + ws.operations.operational_risk * (1 - clamp01(s.operations.operational_risk))

        + ws.outreach.has_contact_page * bool_to_01(contact.has_contact_page)
        + ws.outreach.has_email_or_phone * bool_to_01(contact.has_email_or_phone)
        + ws.outreach.chef_or_owner_named * bool_to_01(contact.chef_or_owner_named)

        + ws.pipeline.stage_bonus * stage_bonus_to_score(s.pipeline.stage)
        + ws.pipeline.inbound_interest * bool_to_01(s.pipeline.inbound_interest)
        + ws.pipeline.recency * recency_to_score(s.pipeline.last_contacted_at, now)
    )

    total = w.signals_total()
    return clamp01(weighted_sum / total) if total > 0 else 0.0


def _rubric_score(features: LeadFeatures, w: LeadScoreWeights) -> float:
    r = features.rubric
    wr = w.rubric

    weighted_sum = (
        wr.menu_fit_score * rubric_to_score(r.menu_fit_score)
        + wr.local_affinity_score * rubric_to_score(r.local_affinity_score)
        + wr.volume_score * rubric_to_score(r.volume_score)
        + wr.outreach_ease_score * rubric_to_score(r.outreach_ease_score)
        + wr.brand_alignment_score * rubric_to_score(r.brand_alignment_score)
        + wr.risk_score * (1 - rubric_to_score(r.risk_score))
    )

    total = wr.total()
    return clamp01(weighted_sum / total) if total > 0 else 0.0


def _apply_infeasible(final: float, rule: DeliveryNotFeasibleRule, label: str, reasons: List[str]) -> float:
    if rule.mode == "hard_zero":
        reasons.append(f"{label} -> hard_zero.")
        return 0.0
    reasons.append(f"{label} -> capped at {rule.cap_score:g}.")
    return min(final, rule.cap_score)


def score_restaurant_lead(
    features: LeadFeatures,
    radius_km: float,
    weights: Optional[LeadScoreWeights] = None,
    now: Optional[dt.datetime] = None,
) -> ScoreBreakdown:
    """
    Score a validated restaurant lead.

    Args:
        features: Pre-validated lead features
        radius_km: Delivery radius; zero or negative disables distance credit
        weights: Weight configuration (defaults to DEFAULT_WEIGHTS_V1)
        now: Reference instant for recency; captured once per call if omitted

    Returns:
        ScoreBreakdown with raw, after_confidence, final (0-100), the
        confidence multiplier, ordered reasons and 0-1 components
    """
    w = weights or DEFAULT_WEIGHTS_V1
    rules = w.rules

    # Won/lost are outcomes, not predictions
    stage = features.signals.pipeline.stage
    if stage == PipelineStage.WON:
        return _frozen(rules.stage_freeze.won_score, stage, 1.0)
    if stage == PipelineStage.LOST:
        return _frozen(rules.stage_freeze.lost_score, stage, 0.0)

    now = now or dt.datetime.now(dt.UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=dt.UTC)
    reasons: List[str] = []
    restaurant = features.restaurant
    geo = features.signals.geo

    signals_01 = _signals_score(features, w, radius_km, now)
    rubric_01 = _rubric_score(features, w)

    blend_total = w.blend.signals + w.blend.rubric
    blend_signals = w.blend.signals / blend_total if blend_total > 0 else 0.5
    blend_rubric = w.blend.rubric / blend_total if blend_total > 0 else 0.5
    blended_01 = clamp01(signals_01 * blend_signals + rubric_01 * blend_rubric)

    raw = clamp100(blended_01 * 100)

    # Segment adjustments
    if restaurant.locations.is_chain_guess and restaurant.locations.location_count_guess >= 2:
        raw = clamp100(raw + rules.chain_bonus)
        reasons.append(f"Multi-location/chain guess -> +{rules.chain_bonus:g} chain_bonus.")
    if restaurant.service_style == ServiceStyle.FINE_DINING:
        raw = clamp100(raw + rules.fine_dining_bonus)
        reasons.append(f"Service style fine_dining -> +{rules.fine_dining_bonus:g} fine_dining_bonus.")
    if restaurant.service_style == ServiceStyle.FAST_CASUAL:
        raw = clamp100(raw - rules.fast_casual_penalty)
        reasons.append(f"Service style fast_casual -> -{rules.fast_casual_penalty:g} fast_casual_penalty.")

    # Confidence dampening: discounted, never zeroed
    confidence = clamp01(features.confidence.overall)
    min_multiplier = clamp01(w.confidence.min_multiplier)
    multiplier = min_multiplier + (1 - min_multiplier) * confidence
    after_confidence = clamp100(raw * multiplier)
    if confidence < LOW_CONFIDENCE_THRESHOLD:
        reasons.append(f"Low confidence ({confidence:.2f}) -> multiplier {multiplier:.2f}.")

    # Caps only ever lower the score, so the tightest one wins
    final = after_confidence
    if not geo.delivery_feasible:
        final = _apply_infeasible(final, rules.delivery_not_feasible, "Delivery not feasible", reasons)

    if geo.distance_km is None:
        final = min(final, rules.distance_unknown.cap_score)
        reasons.append(f"Distance unknown -> capped at {rules.distance_unknown.cap_score:g}.")
    elif radius_km > 0 and geo.distance_km > radius_km:
        label = f"Distance {geo.distance_km:.1f}km exceeds radius {radius_km:g}km"
        final = _apply_infeasible(final, rules.delivery_not_feasible, label, reasons)

    final = clamp100(final)

    # Informational only
    menu_fit = clamp01(features.signals.menu.menu_fit)
    sustainability = clamp01(features.signals.brand.sustainability_affinity)
    risk = clamp01(features.signals.operations.operational_risk)
    if menu_fit >= STRONG_SIGNAL_THRESHOLD:
        reasons.append(f"Strong menu_fit signal ({menu_fit:.2f}).")
    if sustainability >= STRONG_SIGNAL_THRESHOLD:
        reasons.append(f"Strong sustainability_affinity ({sustainability:.2f}).")
    if risk >= HIGH_RISK_THRESHOLD:
        reasons.append(f"High operational risk ({risk:.2f}).")
    if features.missing_info:
        reasons.append(f"Missing info: {'; '.join(features.missing_info)}")

    logger.debug(
        f"Scored {restaurant.name}: raw={raw:.2f} after_confidence={after_confidence:.2f} final={final:.2f}"
    )

    return ScoreBreakdown(
        raw=raw,
        after_confidence=after_confidence,
        final=final,
        confidence_multiplier=multiplier,
        reasons=reasons,
        components=ScoreComponents(
            signals_score_0_1=signals_01,
            rubric_score_0_1=rubric_01,
            blended_score_0_1=blended_01,
        ),
    )
