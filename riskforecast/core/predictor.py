"""
Predictor — Closed-form short/medium/long-term extrapolation.

predicted  = min(score × multiplier, 100)
trend      = increasing if score > activation threshold else stable
confidence = clamp(50 + 20·[indicators > 3] + 10·[indicators > 5] + bonus, 0, 95)

A deterministic heuristic, not a statistical model.
"""

from __future__ import annotations

from dataclasses import dataclass

from riskforecast.models.risk_models import CategoryRisk, Prediction, Timeframe, Trend

BASE_CONFIDENCE = 50
MAX_CONFIDENCE = 95


@dataclass(frozen=True)
class TimeframeModel:
    multiplier: float
    activation: float
    confidence_bonus: int


TIMEFRAME_MODELS: dict[Timeframe, TimeframeModel] = {
    Timeframe.SHORT: TimeframeModel(multiplier=1.1, activation=70, confidence_bonus=20),
    Timeframe.MEDIUM: TimeframeModel(multiplier=1.2, activation=60, confidence_bonus=10),
    Timeframe.LONG: TimeframeModel(multiplier=1.3, activation=50, confidence_bonus=0),
}


def prediction_confidence(indicator_count: int, timeframe: Timeframe) -> float:
    confidence = BASE_CONFIDENCE
    if indicator_count > 3:
        confidence += 20
    if indicator_count > 5:
        confidence += 10
    confidence += TIMEFRAME_MODELS[timeframe].confidence_bonus
    return float(max(0, min(confidence, MAX_CONFIDENCE)))


def predict_risk(risk: CategoryRisk, timeframe: Timeframe) -> Prediction:
    model = TIMEFRAME_MODELS[timeframe]
    base = risk.score
    return Prediction(
        score=round(min(base * model.multiplier, 100.0), 2),
        trend=Trend.INCREASING if base > model.activation else Trend.STABLE,
        confidence=prediction_confidence(len(risk.indicators), timeframe),
    )


def predict_all(risks: dict[str, CategoryRisk]) -> dict[str, dict[str, Prediction]]:
    """Predictions keyed by timeframe, then category (category order preserved)."""
    return {
        timeframe.value: {
            category: predict_risk(risk, timeframe) for category, risk in risks.items()
        }
        for timeframe in Timeframe
    }
