"""Shared data structures.

The résumé and job shapes mirror what the prompts ask the agent to return.
They are typing aids only; agent JSON is not validated against them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Literal, TypedDict


class ContactInfo(TypedDict, total=False):
    name: str
    email: str
    phone: str
    location: str
    linkedin: str
    website: str


class Experience(TypedDict):
    title: str
    company: str
    location: str
    startDate: str
    endDate: str
    description: str
    highlights: list[str]


class Education(TypedDict, total=False):
    degree: str
    institution: str
    location: str
    startDate: str
    endDate: str
    gpa: str


class StructuredResume(TypedDict):
    contactInfo: ContactInfo
    summary: str
    experience: list[Experience]
    education: list[Education]
    skills: list[str]
    certifications: list[str]
    languages: list[str]
    rawText: str


class JobRequirements(TypedDict):
    title: str
    company: str
    requiredSkills: list[str]
    preferredSkills: list[str]
    keywords: list[str]
    experienceLevel: str
    responsibilities: list[str]
    qualifications: list[str]


class KeywordAnalysis(TypedDict, total=False):
    keyword: str
    found: bool
    section: str


class SectionScore(TypedDict):
    section: str
    score: int
    suggestions: list[str]


class OptimizationResult(TypedDict):
    overallScore: int
    sectionScores: list[SectionScore]
    keywordAnalysis: list[KeywordAnalysis]
    optimizedResume: StructuredResume
    changesSummary: list[str]


ChunkKind = Literal["content", "done", "error"]


@dataclass(frozen=True)
class StreamChunk:
    """One progress notification for a streaming command."""

    kind: ChunkKind
    payload: str | None = None


ChunkSink = Callable[[StreamChunk], None]


@dataclass(frozen=True)
class SetupResult:
    """Outcome of an agent install or login step."""

    success: bool
    message: str
