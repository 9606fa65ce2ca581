"""
Result records and metadata models for build validation.

Validation is informational, never raising: every problem found is collected
as a ValidationIssue and the build is valid when no errors were recorded.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


# =============================================================================
# Issue kinds
# =============================================================================

class ValidationErrorType(str, Enum):
    """Kinds of validation errors."""
    INVALID_SKILL_ID = "INVALID_SKILL_ID"
    INVALID_SPECIALIZATION_ID = "INVALID_SPECIALIZATION_ID"
    SPECIALIZATION_NOT_FOR_PROFESSION = "SPECIALIZATION_NOT_FOR_PROFESSION"
    INVALID_PET_ID = "INVALID_PET_ID"
    INVALID_LEGEND_ID = "INVALID_LEGEND_ID"
    SKILL_NOT_FOR_PROFESSION = "SKILL_NOT_FOR_PROFESSION"


class ValidationWarningType(str, Enum):
    """Kinds of validation warnings. Reserved; no check emits these yet."""
    DEPRECATED_SKILL = "DEPRECATED_SKILL"
    SKILL_TYPE_MISMATCH = "SKILL_TYPE_MISMATCH"
    MISSING_ELITE_SPECIALIZATION = "MISSING_ELITE_SPECIALIZATION"


# =============================================================================
# Metadata returned by a MetadataProvider
# =============================================================================

class SkillInfo(BaseModel):
    """Skill metadata as exposed by the game API."""
    id: int = Field(description="Skill ID")
    name: str = Field(description="Skill name")
    professions: list[str] = Field(default_factory=list, description="Professions that can use this skill")
    type: str = Field(default="", description="Skill type (Heal, Utility, Elite, ...)")
    slot: str = Field(default="", description="Skill slot")


class SpecializationInfo(BaseModel):
    """Specialization metadata as exposed by the game API."""
    id: int = Field(description="Specialization ID")
    name: str = Field(description="Specialization name")
    profession: str = Field(description="Profession that owns this specialization")
    elite: bool = Field(default=False, description="Whether this is an elite specialization")


class PetInfo(BaseModel):
    """Ranger pet metadata as exposed by the game API."""
    id: int = Field(description="Pet ID")
    name: str = Field(description="Pet name")


# =============================================================================
# Results
# =============================================================================

@dataclass
class ValidationIssue:
    """A single problem found while validating a build."""
    type: ValidationErrorType | ValidationWarningType
    message: str
    context: dict[str, Any] = field(default_factory=dict)


@dataclass
class ValidationResult:
    """Outcome of validating one build."""
    valid: bool
    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationIssue] = field(default_factory=list)

    def __str__(self) -> str:
        lines = [f"Status: {'VALID' if self.valid else 'INVALID'}"]
        lines.append(f"Issues: {len(self.errors)} errors, {len(self.warnings)} warnings")

        if self.errors:
            lines.append("\nErrors:")
            for issue in self.errors:
                lines.append(f"  - [{issue.type.value}] {issue.message}")

        if self.warnings:
            lines.append("\nWarnings:")
            for issue in self.warnings:
                lines.append(f"  - [{issue.type.value}] {issue.message}")

        return "\n".join(lines)
