"""
Catalog constants.

The known subject list, difficulty presentation labels and the
error-pattern taxonomy every AI-generated claim maps to.
"""

from __future__ import annotations

from dataclasses import dataclass

# Subjects the content team writes claims for
ALL_SUBJECTS: list[str] = sorted([
    "Biology",
    "Chemistry",
    "Climate Science",
    "Computer Science",
    "Current Events",
    "Economics",
    "Geography",
    "History",
    "Mathematics",
    "Medicine",
    "Physics",
    "Psychology",
    "Social Media",
    "Space Science",
    "Technology",
])


@dataclass(frozen=True)
class DifficultyInfo:
    """Display metadata for a difficulty mode."""

    name: str
    description: str
    color: str


DIFFICULTY_CONFIG: dict[str, DifficultyInfo] = {
    "easy": DifficultyInfo(
        name="Beginner",
        description="Common myths and straightforward facts",
        color="green",
    ),
    "medium": DifficultyInfo(
        name="Standard",
        description="Mixed claims requiring careful analysis",
        color="yellow",
    ),
    "hard": DifficultyInfo(
        name="Expert",
        description="Subtle errors and complex claims",
        color="red",
    ),
    "mixed": DifficultyInfo(
        name="Progressive",
        description="Starts easy, gets harder each round",
        color="magenta",
    ),
}


@dataclass(frozen=True)
class ErrorPattern:
    """A recurring way AI-generated claims go wrong."""

    id: str
    name: str
    description: str
    teaching_point: str


AI_ERROR_PATTERNS: list[ErrorPattern] = [
    ErrorPattern(
        id="confident-specificity",
        name="Confident Specificity",
        description="Precise numbers, dates, or measurements that sound authoritative but are fabricated or imprecise",
        teaching_point="Be suspicious of overly precise numbers without citations",
    ),
    ErrorPattern(
        id="plausible-adjacency",
        name="Plausible Adjacency",
        description="Almost-right terminology swaps that sound correct to non-experts",
        teaching_point="Similar-sounding terms may have very different meanings",
    ),
    ErrorPattern(
        id="myth-perpetuation",
        name="Myth Perpetuation",
        description="Repeating common misconceptions as if they were facts",
        teaching_point="Popular beliefs are not always true - verify claims",
    ),
    ErrorPattern(
        id="timeline-compression",
        name="Timeline Compression",
        description="Events mashed together implausibly or with invented connections",
        teaching_point="Historical events rarely happen instantly",
    ),
    ErrorPattern(
        id="geographic-fabrication",
        name="Geographic/Factual Invention",
        description="Made-up but plausible-sounding details about places, people, or events",
        teaching_point="Verify geographic and institutional claims",
    ),
    ErrorPattern(
        id="false-causation",
        name="False Causation",
        description="Claiming one thing causes another without evidence",
        teaching_point="Correlation does not equal causation",
    ),
    ErrorPattern(
        id="appeal-to-authority",
        name="Appeal to Authority",
        description="Citing experts or institutions that don't exist or didn't say that",
        teaching_point="Always verify the source actually exists and said what's claimed",
    ),
    ErrorPattern(
        id="statistical-manipulation",
        name="Statistical Manipulation",
        description="Misusing percentages, averages, or sample sizes",
        teaching_point="Look for sample size, methodology, and who funded the study",
    ),
]

ERROR_PATTERN_IDS = frozenset(pattern.id for pattern in AI_ERROR_PATTERNS)
