"""
gw2-build-codes - Decode and encode Guild Wars 2 build template chat links.

This package provides:
- decode()/encode() for the official binary build template format
- Data models for builds, specializations, skills and profession extras
- An opt-in BuildValidator that checks IDs against injected game metadata
"""

from .constants import (
    LEGEND_NAMES,
    OFFICIAL_CODE_LENGTH,
    OFFICIAL_TYPE_INDICATOR,
    PROFESSION_NAMES,
)
from .decoder import decode
from .encoder import encode
from .errors import BuildCodeError, BuildCodeErrorCode
from .mapping import MetadataProvider, PaletteMapper, PetMetadataProvider
from .models import (
    BuildCode,
    DecodeOptions,
    EncodeOptions,
    EngineerData,
    Legend,
    Profession,
    ProfessionSpecificData,
    RangerData,
    RevenantData,
    Skills,
    Specialization,
    TraitChoice,
)
from .validation_types import (
    PetInfo,
    SkillInfo,
    SpecializationInfo,
    ValidationErrorType,
    ValidationIssue,
    ValidationResult,
    ValidationWarningType,
)
from .validator import BuildValidator

try:
    from importlib.metadata import version as _get_version
    __version__ = _get_version("gw2-build-codes")
except Exception:
    __version__ = "1.0.0"  # Fallback if metadata unavailable

__all__ = [
    # Codec
    "decode",
    "encode",
    "DecodeOptions",
    "EncodeOptions",
    # Models
    "BuildCode",
    "Specialization",
    "Skills",
    "ProfessionSpecificData",
    "RangerData",
    "RevenantData",
    "EngineerData",
    "Profession",
    "TraitChoice",
    "Legend",
    # Collaborators
    "PaletteMapper",
    "MetadataProvider",
    "PetMetadataProvider",
    # Validation
    "BuildValidator",
    "ValidationResult",
    "ValidationIssue",
    "ValidationErrorType",
    "ValidationWarningType",
    "SkillInfo",
    "SpecializationInfo",
    "PetInfo",
    # Errors
    "BuildCodeError",
    "BuildCodeErrorCode",
    # Constants
    "OFFICIAL_CODE_LENGTH",
    "OFFICIAL_TYPE_INDICATOR",
    "PROFESSION_NAMES",
    "LEGEND_NAMES",
]
