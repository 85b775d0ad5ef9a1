"""
Tech stack match scoring for the Matching context.

Scores how well a candidate stack (usually a resume's) covers a target stack
(usually a job's), on a 0-100 scale:

    100     candidate covers every target technology (exact match or superset)
    50-99   partial match: floor(overlap / |target| * 100), clamped to [50, 99]
    0       no shared technology, or an empty target

Any nonzero partial match reads as at least half a match but never as a full
one. The floor is taken before the clamp, so 2 of 3 scores 66, not 67.
"""

from typing import Any, List, NamedTuple, Protocol, Sequence

from bidmatch.contexts.matching.logger import log_stack_score
from bidmatch.contexts.matching.tech_stack import TechStackValue

FULL_MATCH_SCORE = 100
MIN_PARTIAL_SCORE = 50
MAX_PARTIAL_SCORE = 99
NO_MATCH_SCORE = 0


class StackCandidate(Protocol):
    """Anything with a tech stack and a creation timestamp (e.g., ResumeMetadata)."""

    @property
    def tech_stack(self) -> TechStackValue: ...

    @property
    def created_at(self): ...


class ScoredCandidate(NamedTuple):
    item: Any
    score: int


class StackMatchCalculator:
    """Stateless scorer and ranker for tech stack matches."""

    def calculate_score(self, target: TechStackValue, candidate: TechStackValue) -> int:
        """
        Score how well the candidate stack covers the target stack.

        Args:
            target: Technologies the job asks for
            candidate: Technologies the resume offers

        Returns:
            Integer in {0, 100} or [50, 99]
        """
        target_size = len(target)
        if target_size == 0:
            return NO_MATCH_SCORE

        overlap = target.overlap_with(candidate)

        if overlap == target_size:
            score = FULL_MATCH_SCORE
        elif overlap > 0:
            # Integer floor of overlap / target_size * 100 avoids float rounding (57/100 -> 57)
            percentage = overlap * 100 // target_size
            score = max(MIN_PARTIAL_SCORE, min(MAX_PARTIAL_SCORE, percentage))
        else:
            score = NO_MATCH_SCORE

        log_stack_score(target_size, overlap, score)
        return score

    def sort_by_score(
        self, candidates: Sequence[StackCandidate], target: TechStackValue
    ) -> List[ScoredCandidate]:
        """
        Score candidates against a target and rank them.

        Ordering:
        1. Score, highest first
        2. created_at, most recent first
        3. Original input order

        Args:
            candidates: Items exposing `tech_stack` and `created_at`
            target: Stack to match against

        Returns:
            List of ScoredCandidate(item, score)
        """
        scored = [
            ScoredCandidate(candidate, self.calculate_score(target, candidate.tech_stack))
            for candidate in candidates
        ]
        # Python's sort is stable (also with reverse=True), so sorting by the
        # secondary key first keeps input order as the final tie-break.
        by_date = sorted(scored, key=lambda entry: entry.item.created_at, reverse=True)
        return sorted(by_date, key=lambda entry: entry.score, reverse=True)
