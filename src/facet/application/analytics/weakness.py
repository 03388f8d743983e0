"""
Weakness analysis over a learner's current per-dimension mastery.

Identifies weak and fragile dimensions, the "dodging" pattern (strong on
definitions, weak on everything that applies them) and an overall health
band, and turns the result into a one-line suggestion.
"""

from collections.abc import Mapping

from facet.domain.analytics import Weakness, WeaknessReport
from facet.domain.constants import (
    HEALTH_EXCELLENT,
    HEALTH_FAIR,
    HEALTH_GOOD,
    MIN_SAMPLE_SIZE,
    NEUTRAL_SCORE,
    STRONG_DEFINITION_THRESHOLD,
    WEAK_OTHERS_THRESHOLD,
)
from facet.domain.parameters import DEFAULT_PARAMETERS, MasteryParameters
from facet.domain.values import Dimension, MasteryScore, WeaknessSeverity

Scores = Mapping[Dimension, MasteryScore]


def _score(scores: Scores, dimension: Dimension) -> MasteryScore:
    return scores.get(dimension, MasteryScore.initial())


def _combined(score: MasteryScore, params: MasteryParameters) -> float:
    return params.combine(score.accuracy_ewma, score.speed_ewma)


def _reason(dimension: Dimension, score: MasteryScore, severity: WeaknessSeverity) -> str:
    name = dimension.display_name.lower()

    if score.accuracy_ewma < NEUTRAL_SCORE and score.speed_ewma < NEUTRAL_SCORE:
        return f"{name} needs significant practice - both accuracy and speed are low"
    if score.accuracy_ewma < NEUTRAL_SCORE:
        return f"{name} accuracy is low - focus on understanding the concept"
    if score.speed_ewma < NEUTRAL_SCORE:
        return f"{name} speed is slow - practice for faster recall"

    description = {
        WeaknessSeverity.CRITICAL: "urgently needs attention",
        WeaknessSeverity.MODERATE: "needs more practice",
    }.get(severity, "could use some reinforcement")
    return f"{name} {description}"


def detect_weak_dimensions(
    scores: Scores,
    min_sample_size: int = MIN_SAMPLE_SIZE,
    params: MasteryParameters = DEFAULT_PARAMETERS,
) -> list[Weakness]:
    """
    Dimensions whose combined score is below the weakness threshold.

    Dimensions with fewer than `min_sample_size` reviews are skipped as too
    noisy. Sorted most severe first, then by combined score ascending.
    """
    weaknesses: list[Weakness] = []

    for dimension in Dimension.all():
        score = _score(scores, dimension)
        if score.recent_count < min_sample_size:
            continue

        combined = _combined(score, params)
        severity = params.severity_for(combined)
        if severity is WeaknessSeverity.NONE:
            continue

        weaknesses.append(
            Weakness(
                dimension=dimension,
                severity=severity,
                combined_score=combined,
                reason=_reason(dimension, score, severity),
            )
        )

    return sorted(weaknesses, key=lambda w: (w.severity.rank, w.combined_score))


def detect_fragile_confidence(scores: Scores) -> list[Dimension]:
    """Dimensions answered accurately but slowly."""
    return [d for d in Dimension.all() if _score(scores, d).is_fragile]


def detect_dodging_pattern(scores: Scores, params: MasteryParameters = DEFAULT_PARAMETERS) -> bool:
    """Strong definition recall while the other five dimensions average below 0.6."""
    if _combined(_score(scores, Dimension.DEFINITION), params) < STRONG_DEFINITION_THRESHOLD:
        return False

    others = [d for d in Dimension.all() if d is not Dimension.DEFINITION]
    average = sum(_combined(_score(scores, d), params) for d in others) / len(others)
    return average < WEAK_OTHERS_THRESHOLD


def overall_health(scores: Scores, params: MasteryParameters = DEFAULT_PARAMETERS) -> str:
    dimensions = Dimension.all()
    average = sum(_combined(_score(scores, d), params) for d in dimensions) / len(dimensions)

    if average >= HEALTH_EXCELLENT:
        return "excellent"
    if average >= HEALTH_GOOD:
        return "good"
    if average >= HEALTH_FAIR:
        return "fair"
    return "poor"


def analyze_weaknesses(
    scores: Scores,
    min_sample_size: int = MIN_SAMPLE_SIZE,
    params: MasteryParameters = DEFAULT_PARAMETERS,
) -> WeaknessReport:
    weaknesses = detect_weak_dimensions(scores, min_sample_size, params)
    return WeaknessReport(
        weaknesses=weaknesses,
        primary_weakness=weaknesses[0] if weaknesses else None,
        fragile_dimensions=detect_fragile_confidence(scores),
        is_dodging_pattern=detect_dodging_pattern(scores, params),
        overall_health=overall_health(scores, params),
    )


def suggestion(report: WeaknessReport) -> str:
    """One-line study advice for a weakness report."""
    primary = report.primary_weakness

    if report.is_dodging_pattern:
        focus = primary.dimension.display_name.lower() if primary else "applying concepts"
        return (
            f"Focus on {focus} - you're strong on definitions but need more practice "
            "with application and discrimination"
        )

    if report.fragile_dimensions:
        name = report.fragile_dimensions[0].display_name.lower()
        return f"Work on speed for {name} - you know the material but need to build automaticity"

    if primary is not None:
        name = primary.dimension.display_name.lower()
        if primary.severity is WeaknessSeverity.CRITICAL:
            return f"Prioritize {name} practice - this area needs significant improvement"
        if primary.severity is WeaknessSeverity.MODERATE:
            return f"Continue practicing {name} - you're making progress but need more work"
        return f"Polish your {name} skills - nearly there, just needs some reinforcement"

    return {
        "excellent": (
            "Excellent mastery across all dimensions! "
            "Consider increasing difficulty or reviewing less frequently"
        ),
        "good": "Good progress overall. Maintain your practice routine for continued improvement",
        "fair": "Keep practicing consistently. Focus on building stronger foundations",
    }.get(
        report.overall_health,
        "Continue regular practice to build your understanding across all dimensions",
    )
