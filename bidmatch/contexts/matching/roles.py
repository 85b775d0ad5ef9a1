"""
Role titles and their default layer weights for the Matching context.

A role string is "<Seniority> <Basic Title>", where the basic title of a
Full Stack Engineer carries a specialization modifier:

    "Senior Backend Engineer"                   -> "Backend Engineer"
    "Junior Frontend Heavy Full Stack Engineer" -> "Frontend Heavy Full Stack Engineer"

Seniority never changes the weights. The weight table lives in
configs/role_layer_weights.yaml and every entry is validated on load, so a
typo in the config fails at import instead of at JD spec creation.

Usage:
    weights = get_default_layer_weights("Senior Data Engineer")
    spec = CanonicalJDSpec.create("Senior Data Engineer", weights, skills, "2025.1")
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from dotenv import load_dotenv
from omegaconf import OmegaConf

from bidmatch.contexts.skills.exceptions import ValidationError
from bidmatch.contexts.skills.layers import validate_layer_weights

load_dotenv()
DEFAULT_ROLE_WEIGHTS_PATH = Path(__file__).parents[2] / "configs" / "role_layer_weights.yaml"
ROLE_LAYER_WEIGHTS_PATH = Path(os.getenv("ROLE_LAYER_WEIGHTS_PATH", str(DEFAULT_ROLE_WEIGHTS_PATH)))

FULL_STACK_TITLE = "Full Stack Engineer"


@dataclass(frozen=True)
class RoleConfig:
    seniority_levels: Tuple[str, ...]
    full_stack_modifiers: Tuple[str, ...]
    layer_weights: Dict[str, Dict[str, float]]


@dataclass(frozen=True)
class ParsedRole:
    seniority: str
    basic_title: str
    modifier: Optional[str] = None


def load_role_config(path: Path) -> RoleConfig:
    """
    Load seniority levels, Full Stack modifiers and per-role layer weights.

    Raises:
        ValidationError: If any role's weights break the layer weight rules
    """
    config = OmegaConf.to_container(OmegaConf.load(path), resolve=True)

    weights = {}
    for title, layer_weights in (config.get("roles") or {}).items():
        try:
            weights[title] = validate_layer_weights(layer_weights)
        except ValidationError as e:
            raise ValidationError(
                f"Invalid layer weights for role '{title}' in {path}: {e.message}",
                field="roles",
                value=title,
            ) from e

    return RoleConfig(
        seniority_levels=tuple(config.get("seniority_levels") or ()),
        full_stack_modifiers=tuple(config.get("full_stack_modifiers") or ()),
        layer_weights=weights,
    )


ROLE_CONFIG = load_role_config(ROLE_LAYER_WEIGHTS_PATH)
SENIORITY_LEVELS = ROLE_CONFIG.seniority_levels
FULL_STACK_MODIFIERS = ROLE_CONFIG.full_stack_modifiers
ROLE_LAYER_WEIGHTS = ROLE_CONFIG.layer_weights


def get_basic_titles() -> List[str]:
    """Basic titles without modifiers, in config order (Full Stack listed once)."""
    titles = []
    for title in ROLE_LAYER_WEIGHTS:
        basic = FULL_STACK_TITLE if title.endswith(FULL_STACK_TITLE) else title
        if basic not in titles:
            titles.append(basic)
    return titles


def requires_full_stack_modifier(basic_title: str) -> bool:
    return basic_title == FULL_STACK_TITLE


def extract_basic_title(role: str) -> str:
    """
    Strip a leading seniority level from a role string.

    Examples:
        "Senior Backend Engineer" -> "Backend Engineer"
        "Mid Backend Heavy Full Stack Engineer" -> "Backend Heavy Full Stack Engineer"
        "Backend Engineer" -> "Backend Engineer"
    """
    for seniority in SENIORITY_LEVELS:
        if role.startswith(seniority + " "):
            return role[len(seniority) + 1 :]
    return role


def get_default_layer_weights(role: str) -> Dict[str, float]:
    """
    Default six-layer weights for a role, ignoring its seniority.

    Args:
        role: Full role string (e.g., "Lead DevOps Engineer")

    Returns:
        Copy of the layer weights for the role's basic title

    Raises:
        ValidationError: If the basic title has no configured weights
    """
    if not isinstance(role, str):
        raise ValidationError("Role must be a string", field="role", value=role)

    basic_title = extract_basic_title(role)
    weights = ROLE_LAYER_WEIGHTS.get(basic_title)
    if weights is None:
        raise ValidationError(f"Unknown role: {basic_title}", field="role", value=role)
    return dict(weights)


def is_valid_role(role: str) -> bool:
    return isinstance(role, str) and extract_basic_title(role) in ROLE_LAYER_WEIGHTS


def parse_role(role: str) -> ParsedRole:
    """
    Split a role string into seniority, basic title and Full Stack modifier.

    Unlike extract_basic_title(), a seniority prefix is required here, and a
    Full Stack Engineer must carry a modifier.

    Examples:
        "Senior Backend Engineer"
            -> ParsedRole("Senior", "Backend Engineer")
        "Junior Frontend Heavy Full Stack Engineer"
            -> ParsedRole("Junior", "Full Stack Engineer", "Frontend Heavy")

    Raises:
        ValidationError: On a missing seniority, a bare Full Stack Engineer,
            or an unknown basic title
    """
    if not isinstance(role, str):
        raise ValidationError("Role must be a string", field="role", value=role)

    seniority = next((s for s in SENIORITY_LEVELS if role.startswith(s + " ")), None)
    if seniority is None:
        raise ValidationError(
            f'Invalid role format: missing seniority level in "{role}"', field="role", value=role
        )
    remainder = role[len(seniority) + 1 :]

    for modifier in FULL_STACK_MODIFIERS:
        if remainder == f"{modifier} {FULL_STACK_TITLE}":
            return ParsedRole(seniority, FULL_STACK_TITLE, modifier)

    if remainder == FULL_STACK_TITLE:
        raise ValidationError(
            f"{FULL_STACK_TITLE} role requires a modifier ({', '.join(FULL_STACK_MODIFIERS)})",
            field="role",
            value=role,
        )

    if remainder in get_basic_titles():
        return ParsedRole(seniority, remainder)

    raise ValidationError(
        f'Invalid role format: unknown basic title "{remainder}"', field="role", value=role
    )


def compose_role(seniority: str, basic_title: str, modifier: Optional[str] = None) -> str:
    """Inverse of parse_role()."""
    if modifier:
        return f"{seniority} {modifier} {basic_title}"
    return f"{seniority} {basic_title}"
