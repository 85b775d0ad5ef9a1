#!/usr/bin/env python3
"""
Command-line interface for the skill matching engine.

Commands:
    normalize        - Show canonical forms of skill names
    score            - Score a candidate tech stack against a target stack
    correlate        - Correlate two JD spec JSON files (current JD first)
    dictionary-info  - Validate a dictionary export and summarize it

Usage:
    python scripts/match_skills.py normalize "React.js" "Spring Boot" k8s
    python scripts/match_skills.py score --target "React,TypeScript,AWS" --candidate "react,aws"
    python scripts/match_skills.py correlate current_jd.json past_jd.json
    python scripts/match_skills.py dictionary-info dictionary.json
"""

import json
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv

from bidmatch.contexts.matching import (
    CanonicalJDSpec,
    JDCorrelationCalculator,
    StackMatchCalculator,
    TechStackValue,
)
from bidmatch.contexts.matching.logger import setup_matching_logger
from bidmatch.contexts.skills import TECH_LAYERS, SkillDictionary, ValidationError, normalize_skill
from bidmatch.contexts.skills.logger import setup_skills_logger
from bidmatch.utils.logger import session_log_dir
from bidmatch.utils.report_formatter import Column, TableFormatter, format_ratio
from bidmatch.utils.timestamp import format_timestamp

load_dotenv()

app = typer.Typer(
    add_completion=False,
    help="Normalize skills, score tech stacks and correlate JD specs",
    invoke_without_command=True,
)

LOG_DIR_OPTION = typer.Option(None, "--log-dir", help="Write a session log under this directory")


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _split(value: str) -> List[str]:
    # Blank parts are dropped by TechStackValue
    return value.split(",")


def _load_dictionary(path: Optional[Path]) -> Optional[SkillDictionary]:
    if path is None:
        return None
    try:
        return SkillDictionary.from_json(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        typer.echo(f"ERROR: {path} is not UTF-8 text: {e}", err=True)
        raise typer.Exit(1)
    except ValidationError as e:
        typer.echo(f"ERROR: Invalid dictionary {path}: {e}", err=True)
        raise typer.Exit(1)


def _load_spec(path: Path) -> CanonicalJDSpec:
    try:
        return CanonicalJDSpec.from_dict(json.loads(path.read_text(encoding="utf-8")))
    except UnicodeDecodeError as e:
        typer.echo(f"ERROR: {path} is not UTF-8 text: {e}", err=True)
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        typer.echo(f"ERROR: {path} is not valid JSON: {e}", err=True)
        raise typer.Exit(1)
    except ValidationError as e:
        typer.echo(f"ERROR: Invalid JD spec {path}: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def normalize(
    skills: List[str] = typer.Argument(..., help="Skill names to normalize"),
    dictionary_path: Optional[Path] = typer.Option(
        None, "--dictionary", "-d", exists=True, help="Dictionary JSON export"
    ),
    log_dir: Optional[Path] = LOG_DIR_OPTION,
):
    """Print the canonical form of each skill."""
    if log_dir:
        setup_skills_logger(session_log_dir("normalize", log_dir), command="normalize")

    dictionary = _load_dictionary(dictionary_path)
    width = max(len(skill) for skill in skills)
    for skill in skills:
        typer.echo(f"{skill:<{width}} -> {normalize_skill(skill, dictionary)}")


@app.command()
def score(
    target: str = typer.Option(..., "--target", "-t", help="Comma-separated target technologies"),
    candidate: str = typer.Option(
        ..., "--candidate", "-c", help="Comma-separated candidate technologies"
    ),
    dictionary_path: Optional[Path] = typer.Option(
        None, "--dictionary", "-d", exists=True, help="Dictionary JSON export"
    ),
    log_dir: Optional[Path] = LOG_DIR_OPTION,
):
    """Score how well the candidate stack covers the target stack."""
    if log_dir:
        setup_matching_logger(session_log_dir("score", log_dir), command="score")

    dictionary = _load_dictionary(dictionary_path)
    target_stack = TechStackValue(_split(target), dictionary=dictionary)
    candidate_stack = TechStackValue(_split(candidate), dictionary=dictionary)

    result = StackMatchCalculator().calculate_score(target_stack, candidate_stack)
    matching = target_stack.get_matching_technologies(candidate_stack)
    missing = target_stack.get_missing_technologies(candidate_stack)

    typer.echo(f"Score: {result}")
    typer.echo(f"Matching ({len(matching)}): {', '.join(matching) or 'none'}")
    typer.echo(f"Missing ({len(missing)}): {', '.join(missing) or 'none'}")


@app.command()
def correlate(
    current_spec_path: Path = typer.Argument(..., exists=True, help="Current JD spec JSON"),
    past_spec_path: Path = typer.Argument(..., exists=True, help="Past JD spec JSON"),
    log_dir: Optional[Path] = LOG_DIR_OPTION,
):
    """Correlate a past JD spec against the current one's priorities."""
    if log_dir:
        setup_matching_logger(session_log_dir("correlate", log_dir), command="correlate")

    current = _load_spec(current_spec_path)
    past = _load_spec(past_spec_path)
    result = JDCorrelationCalculator().calculate(current, past)

    table = TableFormatter(
        [
            Column("Layer", 10),
            Column("Weight", 8, ">"),
            Column("Score", 8, ">"),
            Column("Matching", 26),
            Column("Missing", 24),
        ]
    )
    table.add_section_header(f"{current.role} ({current.id}) vs {past.role} ({past.id})")
    table.add_table_header().add_separator()
    for layer in TECH_LAYERS:
        detail = result.layer_breakdown[layer]
        table.add_row(
            [
                layer,
                f"{detail.layer_weight:.2f}",
                format_ratio(detail.score),
                ", ".join(detail.matching_skills) or "-",
                ", ".join(detail.missing_skills) or "-",
            ]
        )
    table.add_separator()
    table.add_summary(f"Overall correlation: {format_ratio(result.overall_score)}")
    if result.current_dictionary_version != result.past_dictionary_version:
        table.add_summary(
            f"Note: dictionary versions differ ({result.current_dictionary_version} vs "
            f"{result.past_dictionary_version})"
        )

    typer.echo(table.render())


@app.command("dictionary-info")
def dictionary_info(
    dictionary_path: Path = typer.Argument(..., exists=True, help="Dictionary JSON export"),
):
    """Validate a dictionary export and print per-layer counts."""
    dictionary = _load_dictionary(dictionary_path)

    typer.echo(f"Version: {dictionary.version}")
    typer.echo(f"Created: {format_timestamp(dictionary.created_at)}")
    typer.echo(f"Canonical skills: {len(dictionary)}")
    typer.echo(f"Variations: {len(dictionary.get_variations())}")
    for layer in TECH_LAYERS:
        typer.echo(f"  {layer}: {len(dictionary.get_skills_by_category(layer))}")

    typer.secho("\n✓ Dictionary is valid", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
