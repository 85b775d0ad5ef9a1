"""
Tech stack value object for the Matching context.

A TechStackValue wraps the technology list of a job or resume and answers
containment and overlap questions on canonical skill names, so "React.js"
on a resume matches "react" in a job.
"""

from typing import Iterable, Iterator, List, Optional

from bidmatch.contexts.skills.dictionary import SkillDictionary
from bidmatch.contexts.skills.mapper import CanonicalSkillMapper, DEFAULT_MAPPER


class TechStackValue:
    """
    Immutable, canonicalized technology set.

    At construction each entry is trimmed, blank entries are dropped, the
    rest are normalized to canonical names and deduplicated (first
    occurrence wins). The raw list passed in is kept verbatim.

    Attributes:
        technologies: Copy of the raw input list
        canonical_technologies: Deduplicated canonical names, input order
    """

    __slots__ = ("_technologies", "_canonical", "_canonical_set", "_dictionary", "_mapper")

    def __init__(
        self,
        technologies: Iterable[str],
        dictionary: Optional[SkillDictionary] = None,
        mapper: Optional[CanonicalSkillMapper] = None,
    ):
        raw = list(technologies)
        mapper = mapper or DEFAULT_MAPPER

        # Non-string entries fall through so the mapper raises ValidationError
        canonical = mapper.normalize_many(
            (tech for tech in raw if not isinstance(tech, str) or tech.strip()), dictionary
        )

        self._technologies = tuple(raw)
        self._canonical = tuple(canonical)
        self._canonical_set = frozenset(canonical)
        self._dictionary = dictionary
        self._mapper = mapper

    @property
    def technologies(self) -> List[str]:
        return list(self._technologies)

    @property
    def canonical_technologies(self) -> List[str]:
        return list(self._canonical)

    def is_empty(self) -> bool:
        return not self._canonical

    def __len__(self) -> int:
        return len(self._canonical)

    def __iter__(self) -> Iterator[str]:
        return iter(self._canonical)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TechStackValue):
            return NotImplemented
        return self._canonical_set == other._canonical_set

    def __hash__(self) -> int:
        return hash(self._canonical_set)

    def __repr__(self) -> str:
        return f"TechStackValue({list(self._canonical)!r})"

    def contains(self, technology: str) -> bool:
        """
        Check whether a technology is in this stack, using canonical matching.

        A blank query never matches.
        """
        if not technology or not technology.strip():
            return False
        return self._mapper.normalize(technology, self._dictionary) in self._canonical_set

    def overlap_with(self, other: "TechStackValue") -> int:
        """
        Count the canonical technologies both stacks share.

        Symmetric: a.overlap_with(b) == b.overlap_with(a).
        """
        return len(self._canonical_set & other._canonical_set)

    def get_matching_technologies(self, other: "TechStackValue") -> List[str]:
        """Canonical technologies present in both stacks, in this stack's order."""
        return [tech for tech in self._canonical if tech in other._canonical_set]

    def get_missing_technologies(self, other: "TechStackValue") -> List[str]:
        """Canonical technologies in this stack that the other stack lacks."""
        return [tech for tech in self._canonical if tech not in other._canonical_set]
