"""
Unknown-skill review queue for the Skills context.

Skills that the dictionary cannot resolve while a JD spec is being built are
queued here for a human to approve (as a new canonical skill or as a variation
of an existing one) or reject. Approved decisions are folded back into the
dictionary with apply_decision(), which produces a new dictionary version.

Usage:
    queue = SkillReviewQueue.create()
    for name in find_unknown_skills(raw_skills, dictionary):
        queue.add_unknown_skill(name, detected_in="jd_123")

    decision = queue.approve_as_variation("reactjs 18", "react", dictionary=dictionary)
    dictionary = apply_decision(dictionary, decision)
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, Iterable, List, Literal, Optional

from bidmatch.contexts.skills.dictionary import SkillDictionary
from bidmatch.contexts.skills.exceptions import ReviewQueueError, ValidationError
from bidmatch.contexts.skills.layers import parse_tech_layer
from bidmatch.contexts.skills.logger import _log_info, log_rejected_mutation
from bidmatch.contexts.skills.mapper import CanonicalSkillMapper, DEFAULT_MAPPER, clean_skill_name
from bidmatch.utils.timestamp import from_iso, now, to_iso

ReviewStatus = Literal["pending", "approved", "rejected"]


@dataclass
class UnknownSkillItem:
    """An unknown skill awaiting review."""

    skill_name: str
    frequency: int
    first_detected_at: datetime
    detected_in: List[str] = field(default_factory=list)
    status: ReviewStatus = "pending"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "skillName": self.skill_name,
            "frequency": self.frequency,
            "firstDetectedAt": to_iso(self.first_detected_at),
            "detectedIn": list(self.detected_in),
            "status": self.status,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UnknownSkillItem":
        return cls(
            skill_name=data["skillName"],
            frequency=int(data["frequency"]),
            first_detected_at=from_iso(data["firstDetectedAt"]),
            detected_in=list(data.get("detectedIn", [])),
            status=data.get("status", "pending"),
        )


@dataclass(frozen=True)
class ApprovalDecision:
    """Result of approving an unknown skill as canonical or as a variation."""

    skill_name: str
    decision: Literal["canonical", "variation"]
    canonical_name: str
    approved_at: datetime
    category: Optional[str] = None


@dataclass(frozen=True)
class RejectionDecision:
    skill_name: str
    reason: str
    rejected_at: datetime


class SkillReviewQueue:
    """
    Aggregate root for unknown skills awaiting review.

    Items are keyed by normalized skill name, so "GraphQL " and "graphql"
    are the same queue entry. Accessors hand out copies.
    """

    def __init__(self, items: Optional[Dict[str, UnknownSkillItem]] = None):
        self._items: Dict[str, UnknownSkillItem] = items or {}

    @classmethod
    def create(cls) -> "SkillReviewQueue":
        return cls()

    @classmethod
    def from_items(cls, items: Iterable[UnknownSkillItem]) -> "SkillReviewQueue":
        """Rebuild a queue from stored items, normalizing their names."""
        normalized = {}
        for item in items:
            name = clean_skill_name(item.skill_name)
            normalized[name] = replace(item, skill_name=name, detected_in=list(item.detected_in))
        return cls(normalized)

    # =========================================================================
    # QUEUE MANAGEMENT
    # =========================================================================

    def add_unknown_skill(self, skill_name: str, detected_in: str) -> UnknownSkillItem:
        """
        Queue an unknown skill, or bump its frequency if already queued.

        Args:
            skill_name: Skill as seen in the JD
            detected_in: Identifier of the JD spec where it was seen

        Returns:
            Copy of the queue item after the update

        Raises:
            ValidationError: If the skill name is empty
        """
        name = clean_skill_name(skill_name)
        if not name:
            raise ValidationError("Skill name cannot be empty", field="skill_name", value=skill_name)

        item = self._items.get(name)
        if item is None:
            item = UnknownSkillItem(
                skill_name=name, frequency=1, first_detected_at=now(), detected_in=[detected_in]
            )
            self._items[name] = item
        else:
            item.frequency += 1
            if detected_in not in item.detected_in:
                item.detected_in.append(detected_in)

        return self._copy(item)

    def approve_as_canonical(self, skill_name: str, category: str) -> ApprovalDecision:
        """
        Approve a queued skill as a new canonical skill.

        Raises:
            ReviewQueueError: If the skill is not queued or already decided
            ValidationError: If category is not a tech layer
        """
        layer = parse_tech_layer(category)
        item = self._pending_item(skill_name, "approve_as_canonical")
        item.status = "approved"
        _log_info(f"Approved '{item.skill_name}' as canonical ({layer})")

        return ApprovalDecision(
            skill_name=item.skill_name,
            decision="canonical",
            canonical_name=item.skill_name,
            category=layer,
            approved_at=now(),
        )

    def approve_as_variation(
        self,
        skill_name: str,
        canonical_name: str,
        dictionary: Optional[SkillDictionary] = None,
    ) -> ApprovalDecision:
        """
        Approve a queued skill as a variation of an existing canonical skill.

        Args:
            skill_name: Queued skill
            canonical_name: Target canonical skill
            dictionary: If given, the target must already exist in it

        Raises:
            ReviewQueueError: If the canonical name is empty or unknown, or the
                skill is not queued or already decided
        """
        canonical = clean_skill_name(canonical_name)
        if not canonical:
            raise ReviewQueueError("Canonical name cannot be empty", field="canonical_name")
        if dictionary is not None and dictionary.get_canonical_skill(canonical) is None:
            raise ReviewQueueError(
                f"Canonical skill '{canonical}' not found in dictionary",
                field="canonical_name",
                value=canonical_name,
            )

        item = self._pending_item(skill_name, "approve_as_variation")
        item.status = "approved"
        _log_info(f"Approved '{item.skill_name}' as variation of '{canonical}'")

        return ApprovalDecision(
            skill_name=item.skill_name,
            decision="variation",
            canonical_name=canonical,
            approved_at=now(),
        )

    def reject(self, skill_name: str, reason: str) -> RejectionDecision:
        """
        Reject a queued skill.

        Raises:
            ReviewQueueError: If the reason is blank, or the skill is not queued
                or already decided
        """
        if not reason or not reason.strip():
            raise ReviewQueueError("Rejection reason cannot be empty", field="reason")

        item = self._pending_item(skill_name, "reject")
        item.status = "rejected"
        _log_info(f"Rejected '{item.skill_name}': {reason.strip()}")

        return RejectionDecision(skill_name=item.skill_name, reason=reason.strip(), rejected_at=now())

    def _pending_item(self, skill_name: str, operation: str) -> UnknownSkillItem:
        name = clean_skill_name(skill_name)
        item = self._items.get(name)
        try:
            if item is None:
                raise ReviewQueueError(f"Unknown skill '{name}' not found in queue", field="skill_name")
            if item.status != "pending":
                raise ReviewQueueError(
                    f"Skill '{name}' has already been {item.status}", field="skill_name"
                )
        except ReviewQueueError as e:
            log_rejected_mutation(operation, e)
            raise
        return item

    # =========================================================================
    # QUERIES
    # =========================================================================

    def has_skill(self, skill_name: str) -> bool:
        return clean_skill_name(skill_name) in self._items

    def get_item(self, skill_name: str) -> Optional[UnknownSkillItem]:
        item = self._items.get(clean_skill_name(skill_name))
        return self._copy(item) if item is not None else None

    def get_queue_items(self) -> List[UnknownSkillItem]:
        """All items in the order they were first queued."""
        return [self._copy(item) for item in self._items.values()]

    def get_pending_items(self) -> List[UnknownSkillItem]:
        """Pending items, most frequently seen first (ties keep queue order)."""
        pending = [self._copy(item) for item in self._items.values() if item.status == "pending"]
        return sorted(pending, key=lambda item: item.frequency, reverse=True)

    def to_dict(self) -> Dict[str, Any]:
        return {"items": [item.to_dict() for item in self._items.values()]}

    @staticmethod
    def _copy(item: UnknownSkillItem) -> UnknownSkillItem:
        return replace(item, detected_in=list(item.detected_in))


def find_unknown_skills(
    raw_skills: Iterable[str],
    dictionary: SkillDictionary,
    mapper: Optional[CanonicalSkillMapper] = None,
) -> List[str]:
    """
    List skills the dictionary cannot resolve.

    Each raw skill is normalized first (alias table included), so a known
    alias of a dictionary skill is not reported.

    Returns:
        Normalized unknown names, deduplicated, in input order
    """
    mapper = mapper or DEFAULT_MAPPER
    unknown = []
    for raw in raw_skills:
        name = mapper.normalize(raw, dictionary)
        if name and not dictionary.has_skill(name) and name not in unknown:
            unknown.append(name)
    return unknown


def apply_decision(
    dictionary: SkillDictionary,
    decision: ApprovalDecision,
    current_year: Optional[int] = None,
) -> SkillDictionary:
    """
    Fold an approval into a new dictionary version.

    The input dictionary is never modified; the returned dictionary carries
    the next version number and the new canonical skill or variation.

    Raises:
        ValidationError: If the dictionary rejects the new entry
    """
    updated = dictionary.with_incremented_version(current_year)

    if decision.decision == "canonical":
        updated.add_canonical_skill(decision.canonical_name, decision.category)
    else:
        updated.add_skill_variation(decision.skill_name, decision.canonical_name)

    return updated
