"""Shared fixtures for bidmatch tests."""

from datetime import datetime, timezone

import pytest

from bidmatch.contexts.matching import CanonicalJDSpec, ResumeMetadata, TechStackValue
from bidmatch.contexts.skills import TECH_LAYERS, SkillDictionary


def layer_weights(**weights) -> dict:
    """Full six-layer weight mapping, unspecified layers set to 0."""
    return {layer: weights.get(layer, 0.0) for layer in TECH_LAYERS}


@pytest.fixture
def make_spec():
    """
    Factory for CanonicalJDSpec.

    Usage:
        spec = make_spec(weights={"frontend": 1.0}, frontend=[("React", 1.0)])
    """

    def _make(weights=None, spec_id=None, version="2025.1", role="Engineer", **layer_skills):
        skills = {
            layer: [{"skill": name, "weight": weight} for name, weight in entries]
            for layer, entries in layer_skills.items()
        }
        return CanonicalJDSpec.create(
            role=role,
            layer_weights=layer_weights(**(weights or {"frontend": 1.0})),
            skills=skills,
            dictionary_version=version,
            spec_id=spec_id,
        )

    return _make


@pytest.fixture
def make_resume():
    """Factory for ResumeMetadata with a given stack and creation day."""

    def _make(resume_id, technologies, day=1, jd_spec_id=None):
        return ResumeMetadata(
            id=resume_id,
            company=f"Company {resume_id}",
            role="Engineer",
            tech_stack=TechStackValue(technologies),
            file_path=f"resumes/{resume_id}.pdf",
            created_at=datetime(2025, 1, day, tzinfo=timezone.utc),
            jd_spec_id=jd_spec_id,
        )

    return _make


@pytest.fixture
def dictionary():
    """Small dictionary with a few frontend and cloud skills."""
    d = SkillDictionary.create("2025.1")
    d.add_canonical_skill("react", "frontend")
    d.add_canonical_skill("typescript", "frontend")
    d.add_canonical_skill("aws", "cloud")
    d.add_skill_variation("reactjs", "react")
    d.add_skill_variation("react.js", "react")
    d.add_skill_variation("amazon web services", "aws")
    return d


@pytest.fixture
def make_weights():
    """Factory for six-layer weight mappings (unspecified layers get 0)."""
    return layer_weights
