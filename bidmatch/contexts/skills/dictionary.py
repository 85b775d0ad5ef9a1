"""
Versioned canonical skill dictionary for the Skills context.

SkillDictionary is the curated vocabulary behind skill normalization: a set
of canonical skills (each tagged with a tech layer) plus a map of variations
("k8s", "golang") to canonical names. Versions follow YYYY.N and are bumped
whenever the vocabulary changes.

Mutations validate first and then publish a freshly built snapshot in one
reference swap, so a failed call never leaves partial changes behind and a
concurrent reader always sees a complete snapshot. Callers must still make
sure only one writer touches a given dictionary at a time.

JSON shape (to_dict / from_dict):
    {
        "version": "2025.3",
        "skills": [{"name": "react", "category": "frontend", "createdAt": "..."}],
        "variations": [{"variation": "reactjs", "canonical": "react"}],
        "createdAt": "..."
    }
"""

import json
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, NamedTuple, Optional

from bidmatch.contexts.skills.exceptions import ValidationError
from bidmatch.contexts.skills.layers import parse_tech_layer
from bidmatch.contexts.skills.logger import log_rejected_mutation, log_version_bump
from bidmatch.contexts.skills.mapper import clean_skill_name
from bidmatch.utils.timestamp import from_iso, now, to_iso

VERSION_PATTERN = re.compile(r"\d{4}\.\d+")
MAX_SKILL_NAME_LENGTH = 100


@dataclass(frozen=True)
class CanonicalSkill:
    """A canonical skill entry. `name` is already trimmed and lowercased."""

    name: str
    category: str
    created_at: datetime

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "category": self.category, "createdAt": to_iso(self.created_at)}


class _Snapshot(NamedTuple):
    skills: Dict[str, CanonicalSkill]
    variations: Dict[str, str]


def validate_version_format(version: str) -> str:
    """
    Check a dictionary version string against YYYY.N.

    Raises:
        ValidationError: If the version is not in YYYY.N format
    """
    if not isinstance(version, str) or not VERSION_PATTERN.fullmatch(version):
        raise ValidationError(
            f"Invalid dictionary version format: '{version}'. Expected format: YYYY.N (e.g., 2024.1)",
            field="version",
            value=version,
        )
    return version


def _validate_skill_name(name: str, field: str = "name") -> str:
    normalized = clean_skill_name(name)
    if not normalized:
        raise ValidationError("Skill name cannot be empty", field=field, value=name)
    if len(normalized) > MAX_SKILL_NAME_LENGTH:
        raise ValidationError(
            f"Skill name cannot exceed {MAX_SKILL_NAME_LENGTH} characters", field=field, value=name
        )
    return normalized


class SkillDictionary:
    """
    Aggregate root for canonical skills and their variations.

    Create with SkillDictionary.create(version) or SkillDictionary.from_dict(data).
    Lookups are case and whitespace insensitive.
    """

    def __init__(
        self,
        version: str,
        skills: Dict[str, CanonicalSkill],
        variations: Dict[str, str],
        created_at: datetime,
    ):
        self._version = validate_version_format(version)
        self._state = _Snapshot(dict(skills), dict(variations))
        self._created_at = created_at

    # =========================================================================
    # FACTORY METHODS
    # =========================================================================

    @classmethod
    def create(cls, version: str) -> "SkillDictionary":
        """
        Create a new empty dictionary.

        Raises:
            ValidationError: If version is not in YYYY.N format
        """
        return cls(validate_version_format(version), {}, {}, now())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SkillDictionary":
        """
        Rebuild a dictionary from its to_dict() representation.

        Entries are replayed through the same validation as the mutators, so
        a hand-edited export with duplicates or dangling variations is rejected.

        Raises:
            ValidationError: If the data is malformed or breaks an invariant
        """
        try:
            dictionary = cls(data["version"], {}, {}, from_iso(data["createdAt"]))
            for entry in data.get("skills", []):
                dictionary._add_skill(entry["name"], entry["category"], from_iso(entry["createdAt"]))
            for entry in data.get("variations", []):
                dictionary.add_skill_variation(entry["variation"], entry["canonical"])
        except ValidationError:
            raise
        except (KeyError, TypeError, AttributeError) as e:
            raise ValidationError(f"Malformed dictionary data: {e!r}", field="dictionary") from e
        except ValueError as e:
            raise ValidationError(f"Invalid timestamp in dictionary data: {e}", field="createdAt") from e
        return dictionary

    @classmethod
    def from_json(cls, text: str) -> "SkillDictionary":
        """Parse a JSON export produced by to_json()."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Dictionary export is not valid JSON: {e}") from e
        return cls.from_dict(data)

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def version(self) -> str:
        return self._version

    @property
    def created_at(self) -> datetime:
        return self._created_at

    def __len__(self) -> int:
        return len(self._state.skills)

    def __repr__(self) -> str:
        return (
            f"SkillDictionary(version={self._version!r}, skills={len(self._state.skills)}, "
            f"variations={len(self._state.variations)})"
        )

    # =========================================================================
    # SKILL MANAGEMENT
    # =========================================================================

    def add_canonical_skill(self, name: str, category: str) -> CanonicalSkill:
        """
        Add a new canonical skill.

        Args:
            name: Skill name (normalized to trimmed lowercase)
            category: One of the six tech layers

        Returns:
            The stored CanonicalSkill

        Raises:
            ValidationError: If the name is empty, longer than 100 characters,
                already a canonical skill or variation, or the category is not
                a tech layer
        """
        return self._add_skill(name, category, now())

    def _add_skill(self, name: str, category: str, created_at: datetime) -> CanonicalSkill:
        try:
            normalized = _validate_skill_name(name)
            layer = parse_tech_layer(category)
            if normalized in self._state.skills:
                raise ValidationError(
                    f"Canonical skill '{normalized}' already exists", field="name", value=name
                )
            if normalized in self._state.variations:
                raise ValidationError(
                    f"Canonical skill '{normalized}' conflicts with existing variation of "
                    f"'{self._state.variations[normalized]}'",
                    field="name",
                    value=name,
                )
        except ValidationError as e:
            log_rejected_mutation("add_canonical_skill", e)
            raise

        skill = CanonicalSkill(name=normalized, category=layer, created_at=created_at)
        state = self._state
        self._state = _Snapshot({**state.skills, normalized: skill}, state.variations)
        return skill

    def remove_canonical_skill(self, name: str) -> None:
        """
        Remove a canonical skill and every variation pointing to it.

        Raises:
            ValidationError: If the skill does not exist
        """
        normalized = clean_skill_name(name)
        state = self._state
        if normalized not in state.skills:
            error = ValidationError(
                f"Canonical skill '{normalized}' does not exist", field="name", value=name
            )
            log_rejected_mutation("remove_canonical_skill", error)
            raise error

        skills = {key: skill for key, skill in state.skills.items() if key != normalized}
        variations = {
            variation: canonical
            for variation, canonical in state.variations.items()
            if canonical != normalized
        }
        self._state = _Snapshot(skills, variations)

    def add_skill_variation(self, variation: str, canonical_name: str) -> None:
        """
        Map a variation to an existing canonical skill.

        Re-adding an existing variation repoints it to the new canonical skill.

        Raises:
            ValidationError: If either name is empty, the canonical skill is
                unknown, or the variation is itself a canonical skill name
        """
        normalized_variation = clean_skill_name(variation)
        normalized_canonical = clean_skill_name(canonical_name)
        state = self._state

        try:
            if not normalized_variation:
                raise ValidationError("Variation name cannot be empty", field="variation", value=variation)
            if not normalized_canonical:
                raise ValidationError(
                    "Canonical name cannot be empty", field="canonical", value=canonical_name
                )
            if len(normalized_variation) > MAX_SKILL_NAME_LENGTH:
                raise ValidationError(
                    f"Variation name cannot exceed {MAX_SKILL_NAME_LENGTH} characters",
                    field="variation",
                    value=variation,
                )
            if normalized_canonical not in state.skills:
                raise ValidationError(
                    f"Canonical skill '{normalized_canonical}' does not exist",
                    field="canonical",
                    value=canonical_name,
                )
            if normalized_variation in state.skills:
                raise ValidationError(
                    f"Variation '{normalized_variation}' conflicts with existing canonical skill",
                    field="variation",
                    value=variation,
                )
        except ValidationError as e:
            log_rejected_mutation("add_skill_variation", e)
            raise

        self._state = _Snapshot(
            state.skills, {**state.variations, normalized_variation: normalized_canonical}
        )

    # =========================================================================
    # LOOKUP
    # =========================================================================

    def get_canonical_skill(self, name: str) -> Optional[CanonicalSkill]:
        return self._state.skills.get(clean_skill_name(name))

    def map_to_canonical(self, skill_name: str) -> Optional[str]:
        """
        Resolve a canonical name or variation to its canonical name.

        Returns:
            Canonical name, or None if the dictionary does not know the skill
        """
        normalized = clean_skill_name(skill_name)
        state = self._state
        if normalized in state.skills:
            return normalized
        return state.variations.get(normalized)

    def has_skill(self, skill_name: str) -> bool:
        """True if the name is a canonical skill or a known variation."""
        normalized = clean_skill_name(skill_name)
        state = self._state
        return normalized in state.skills or normalized in state.variations

    def get_all_skills(self) -> List[CanonicalSkill]:
        """All canonical skills in insertion order."""
        return list(self._state.skills.values())

    def get_skills_by_category(self, category: str) -> List[CanonicalSkill]:
        """Canonical skills of one tech layer, in insertion order."""
        layer = parse_tech_layer(category)
        return [skill for skill in self._state.skills.values() if skill.category == layer]

    def get_variations_for(self, canonical_name: str) -> List[str]:
        """Variations mapped to a canonical skill (empty if the skill is unknown)."""
        normalized = clean_skill_name(canonical_name)
        return [
            variation
            for variation, canonical in self._state.variations.items()
            if canonical == normalized
        ]

    def get_variations(self) -> Dict[str, str]:
        """Copy of the full variation -> canonical map."""
        return dict(self._state.variations)

    # =========================================================================
    # VERSIONING
    # =========================================================================

    def increment_version(self, current_year: Optional[int] = None) -> str:
        """
        Compute the next version string without changing this dictionary.

        A later calendar year restarts the counter at .1; otherwise the
        counter is bumped (a dictionary dated in the future keeps its year).

        Args:
            current_year: Year to compare against, defaults to the current UTC year

        Returns:
            Next version (e.g., "2024.5" -> "2024.6", or "2025.1" in 2025)
        """
        year, counter = (int(part) for part in self._version.split("."))
        current_year = current_year if current_year is not None else now().year

        if current_year > year:
            return f"{current_year}.1"
        return f"{year}.{counter + 1}"

    def with_incremented_version(self, current_year: Optional[int] = None) -> "SkillDictionary":
        """
        Return a copy with the next version and identical skills and variations.

        The original dictionary is left untouched.
        """
        new_version = self.increment_version(current_year)
        state = self._state
        log_version_bump(self._version, new_version)
        return SkillDictionary(new_version, state.skills, state.variations, now())

    # =========================================================================
    # SERIALIZATION
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        state = self._state
        return {
            "version": self._version,
            "skills": [skill.to_dict() for skill in state.skills.values()],
            "variations": [
                {"variation": variation, "canonical": canonical}
                for variation, canonical in state.variations.items()
            ],
            "createdAt": to_iso(self._created_at),
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
