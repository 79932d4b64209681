"""Bone name auto-mapping"""

from .names import (
    strip_prefix,
    normalize_bone_name,
    tokenize,
    word_boundary_match,
    PreprocessedBone,
)
from .patterns import BONE_PATTERNS, AliasPattern, PatternRegistry, default_registry
from .structural import STRUCTURAL_NAMES, is_structural_bone, filter_structural_bones
from .matcher import (
    MatchPass,
    MatchStrategy,
    MappingResult,
    AutoMappingResult,
    BoneAutoMapper,
    DEFAULT_STRATEGIES,
    auto_map_bones,
)
from .results import (
    ConfidenceLabel,
    get_confidence_label,
    to_mapping_record,
    format_mapping_report,
)

__all__ = [
    "strip_prefix", "normalize_bone_name", "tokenize", "word_boundary_match",
    "PreprocessedBone",
    "BONE_PATTERNS", "AliasPattern", "PatternRegistry", "default_registry",
    "STRUCTURAL_NAMES", "is_structural_bone", "filter_structural_bones",
    "MatchPass", "MatchStrategy", "MappingResult", "AutoMappingResult",
    "BoneAutoMapper", "DEFAULT_STRATEGIES", "auto_map_bones",
    "ConfidenceLabel", "get_confidence_label", "to_mapping_record",
    "format_mapping_report",
]
