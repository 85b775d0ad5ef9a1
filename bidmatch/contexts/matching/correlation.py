"""
JD-to-JD correlation for the Matching context.

Measures how well a past job description (spec_b) satisfies the priorities
of the current one (spec_a):

    layer_score(L) = sum(min(weight_a(s), weight_b(s)) for s in skills_a(L) & skills_b(L))
    overall        = sum(layer_weight_a(L) * layer_score(L) for L in layers)

layer_score is a weighted histogram intersection, bounded to [0, 1] because
each side's skill weights sum to 1. A layer with no skills on either side
contributes 0. That includes a layer spec_a weights but lists no skills for,
so a spec correlated with itself only reaches 1 when every layer with a
positive weight has skills; otherwise it tops out at the summed weight of
its populated layers. Only spec_a's layer weights are used, so the measure is
directional: calculate(a, b) and calculate(b, a) usually differ, and callers
pass the current JD first.

Because resumes are written against a JD, a past resume's match rate for a
new job is the correlation between the new JD and the resume's original JD.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from bidmatch.contexts.matching.jd_spec import CanonicalJDSpec, SkillWeight
from bidmatch.contexts.matching.logger import log_correlation
from bidmatch.contexts.skills.layers import TECH_LAYERS


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class LayerCorrelation:
    """Correlation detail for one layer."""

    score: float
    layer_weight: float
    matching_skills: List[str] = field(default_factory=list)
    missing_skills: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class CorrelationResult:
    """
    Result of JDCorrelationCalculator.calculate().

    Attributes:
        overall_score: Directional correlation in [0, 1]
        per_layer_scores: Layer -> weighted intersection in [0, 1]
        layer_breakdown: Layer -> LayerCorrelation with matching/missing skills
        current_dictionary_version: spec_a's dictionary version
        past_dictionary_version: spec_b's dictionary version
    """

    overall_score: float
    per_layer_scores: Dict[str, float]
    layer_breakdown: Dict[str, LayerCorrelation]
    current_dictionary_version: str
    past_dictionary_version: str

    @property
    def percentage(self) -> float:
        """overall_score as a percentage, clamped to [0, 100]."""
        return _clamp(self.overall_score * 100, 0.0, 100.0)


class JDCorrelationCalculator:
    """Stateless, deterministic JD-to-JD correlation."""

    def calculate(self, spec_a: CanonicalJDSpec, spec_b: CanonicalJDSpec) -> CorrelationResult:
        """
        Correlate two JD specs.

        Args:
            spec_a: Current JD; its layer weights decide how much each layer counts
            spec_b: Past JD being compared against

        Returns:
            CorrelationResult with overall score and per-layer breakdown
        """
        per_layer_scores: Dict[str, float] = {}
        layer_breakdown: Dict[str, LayerCorrelation] = {}
        overall = 0.0

        for layer in TECH_LAYERS:
            layer_weight = spec_a.get_layer_weight(layer)
            layer_result = self._correlate_layer(
                spec_a.get_skills_for_layer(layer),
                spec_b.get_skills_for_layer(layer),
                layer_weight,
            )
            per_layer_scores[layer] = layer_result.score
            layer_breakdown[layer] = layer_result
            overall += layer_weight * layer_result.score

        overall = _clamp(overall, 0.0, 1.0)
        log_correlation(spec_a.id, spec_b.id, overall)

        return CorrelationResult(
            overall_score=overall,
            per_layer_scores=per_layer_scores,
            layer_breakdown=layer_breakdown,
            current_dictionary_version=spec_a.dictionary_version,
            past_dictionary_version=spec_b.dictionary_version,
        )

    def _correlate_layer(
        self,
        skills_a: List[SkillWeight],
        skills_b: List[SkillWeight],
        layer_weight: float,
    ) -> LayerCorrelation:
        if not skills_a or not skills_b:
            return LayerCorrelation(
                score=0.0,
                layer_weight=layer_weight,
                missing_skills=[sw.skill for sw in skills_a],
            )

        weights_b = {sw.skill: sw.weight for sw in skills_b}
        score = 0.0
        matching, missing = [], []

        for sw in skills_a:
            weight_b = weights_b.get(sw.skill)
            if weight_b is None:
                missing.append(sw.skill)
                continue
            score += min(sw.weight, weight_b)
            matching.append(sw.skill)

        return LayerCorrelation(
            score=_clamp(score, 0.0, 1.0),
            layer_weight=layer_weight,
            matching_skills=matching,
            missing_skills=missing,
        )
