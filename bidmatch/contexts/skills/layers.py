"""
Technical layers used to bucket and weight skills.

Every skill category, JD spec layer and correlation breakdown uses the same
six layer tags, always iterated in TECH_LAYERS order.
"""

import math
from typing import Dict, Literal, Mapping

from bidmatch.contexts.skills.exceptions import ValidationError

TechLayer = Literal["frontend", "backend", "database", "cloud", "devops", "others"]

TECH_LAYERS: tuple = ("frontend", "backend", "database", "cloud", "devops", "others")

# Allowed deviation from 1.0 for layer weights and per-layer skill weights
WEIGHT_TOLERANCE = 1e-6


def parse_tech_layer(value: str) -> str:
    """
    Normalize and validate a layer tag.

    Args:
        value: Layer tag, any case, surrounding whitespace ignored

    Returns:
        Lowercase layer tag

    Raises:
        ValidationError: If the value is not one of the six layers
    """
    layer = value.strip().lower() if isinstance(value, str) else value
    if layer not in TECH_LAYERS:
        raise ValidationError(
            f"Invalid tech layer: '{value}'. Expected one of: {', '.join(TECH_LAYERS)}",
            field="category",
            value=value,
        )
    return layer


def sums_to_one(values) -> bool:
    """True if the values sum to 1.0 within WEIGHT_TOLERANCE."""
    return abs(math.fsum(values) - 1.0) <= WEIGHT_TOLERANCE


def validate_layer_weights(weights: Mapping[str, float]) -> Dict[str, float]:
    """
    Validate a layer-weight mapping and return a plain copy in TECH_LAYERS order.

    Requirements:
    - exactly the six layer keys
    - every weight a finite, non-negative number
    - weights sum to 1.0 (within WEIGHT_TOLERANCE)

    Raises:
        ValidationError: On any violated requirement
    """
    if not isinstance(weights, Mapping):
        raise ValidationError("Layer weights must be a mapping", field="layer_weights", value=weights)

    unknown = [key for key in weights if key not in TECH_LAYERS]
    if unknown:
        raise ValidationError(
            f"Unknown layer(s) in layer weights: {', '.join(map(str, unknown))}",
            field="layer_weights",
        )

    validated = {}
    for layer in TECH_LAYERS:
        if layer not in weights:
            raise ValidationError(f"Missing layer in layer weights: {layer}", field="layer_weights")

        weight = weights[layer]
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            raise ValidationError(
                f"Invalid weight type for layer '{layer}': expected number",
                field="layer_weights",
                value=weight,
            )
        if not math.isfinite(weight) or weight < 0:
            raise ValidationError(
                f"Weight for layer '{layer}' must be a non-negative number",
                field="layer_weights",
                value=weight,
            )
        validated[layer] = float(weight)

    if not sums_to_one(validated.values()):
        total = math.fsum(validated.values())
        raise ValidationError(
            f"Layer weights must sum to 1.0 (±{WEIGHT_TOLERANCE}). Current sum: {total:.6f}",
            field="layer_weights",
        )

    return validated
