"""
Canonical skill mapping for the Skills context.

Maps free-text technology names to a single canonical identifier so that
".NET Core", "dotnet" and "asp.net" are all scored as the same skill.

Two lookup sources, consulted in order:
1. A SkillDictionary (curated, versioned; canonical names and variations)
2. A static alias table (configs/skill_aliases.yaml, canonical -> spellings)

Anything neither source knows is returned trimmed and lowercased.

Examples:
    >>> normalize_skill("  React.js ")
    'react'
    >>> normalize_skill("Spring Boot")
    'springboot'
    >>> normalize_skill("Some Inhouse Tool")
    'some inhouse tool'
"""

import os
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, List, Mapping, Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf

from bidmatch.contexts.skills.exceptions import ValidationError

if TYPE_CHECKING:
    from bidmatch.contexts.skills.dictionary import SkillDictionary

load_dotenv()
DEFAULT_ALIASES_PATH = Path(__file__).parents[2] / "configs" / "skill_aliases.yaml"
SKILL_ALIASES_PATH = Path(os.getenv("SKILL_ALIASES_PATH", str(DEFAULT_ALIASES_PATH)))


def clean_skill_name(raw: str) -> str:
    """
    Trim and lowercase a raw skill string.

    Raises:
        ValidationError: If raw is not a string
    """
    if not isinstance(raw, str):
        raise ValidationError("Skill name must be a string", field="skill", value=raw)
    return raw.strip().lower()


def load_alias_table(path: Path) -> Dict[str, str]:
    """
    Load an alias table YAML and invert it to variation -> canonical.

    The YAML lists `aliases: {canonical: [spelling, ...]}`. Each canonical
    name also maps to itself. When two canonical entries claim the same
    spelling, the first one in the file wins.

    Args:
        path: Path to alias YAML

    Returns:
        Dict mapping cleaned spelling to canonical identifier
    """
    config = OmegaConf.to_container(OmegaConf.load(path), resolve=True)
    return build_alias_table(config.get("aliases") or {})


def build_alias_table(aliases: Mapping[str, Iterable[str]]) -> Dict[str, str]:
    """Invert a canonical -> spellings mapping into a flat lookup."""
    table: Dict[str, str] = {}
    for canonical, spellings in aliases.items():
        canonical_name = clean_skill_name(canonical)
        for spelling in [canonical_name, *spellings]:
            table.setdefault(clean_skill_name(spelling), canonical_name)
    return table


SKILL_ALIASES: Mapping[str, str] = load_alias_table(SKILL_ALIASES_PATH)


class CanonicalSkillMapper:
    """
    Normalizes raw skill strings through an explicit alias table.

    The alias table is passed in rather than read from module state, so tests
    and callers can swap in their own vocabulary. The dictionary argument of
    each method is optional and read-only.

    Attributes:
        aliases: Flat spelling -> canonical lookup
    """

    def __init__(self, aliases: Optional[Mapping[str, str]] = None):
        self.aliases = SKILL_ALIASES if aliases is None else aliases

    def normalize(self, raw: str, dictionary: Optional["SkillDictionary"] = None) -> str:
        """
        Normalize one skill to its canonical form.

        Args:
            raw: Skill string as written (e.g., "Spring Boot", ".NET Core")
            dictionary: Optional dictionary whose canonical names and variations
                take precedence over the alias table

        Returns:
            Canonical identifier, or the cleaned input if nothing matches
        """
        cleaned = clean_skill_name(raw)

        if dictionary is not None:
            canonical = dictionary.map_to_canonical(cleaned)
            if canonical is not None:
                return canonical

        return self.aliases.get(cleaned, cleaned)

    def normalize_many(
        self, raws: Iterable[str], dictionary: Optional["SkillDictionary"] = None
    ) -> List[str]:
        """Normalize a list of skills, dropping duplicates (first occurrence wins)."""
        return list(dict.fromkeys(self.normalize(raw, dictionary) for raw in raws))

    def has_mapping(self, raw: str) -> bool:
        """True if the alias table knows this spelling."""
        return clean_skill_name(raw) in self.aliases

    def get_variations(self, canonical: str) -> List[str]:
        """All spellings that map to a canonical identifier (empty if unknown)."""
        target = clean_skill_name(canonical)
        return [spelling for spelling, name in self.aliases.items() if name == target]


DEFAULT_MAPPER = CanonicalSkillMapper()


def normalize_skill(
    raw: str,
    dictionary: Optional["SkillDictionary"] = None,
    aliases: Optional[Mapping[str, str]] = None,
) -> str:
    """
    Normalize a raw skill string to its canonical identifier.

    Convenience wrapper around CanonicalSkillMapper.normalize(). Pass
    `aliases` to use a different alias table than the bundled one.
    """
    mapper = DEFAULT_MAPPER if aliases is None else CanonicalSkillMapper(aliases)
    return mapper.normalize(raw, dictionary)
