"""rigmap - map humanoid rig bone names onto canonical joints"""

from .core.joints import CanonicalJoint, JOINT_PRESETS, get_preset_joints
from .mapping import (
    auto_map_bones,
    BoneAutoMapper,
    AutoMappingResult,
    MappingResult,
    MatchPass,
    to_mapping_record,
    get_confidence_label,
    ConfidenceLabel,
    is_structural_bone,
    filter_structural_bones,
)

__version__ = "0.1.0"

__all__ = [
    "CanonicalJoint", "JOINT_PRESETS", "get_preset_joints",
    "auto_map_bones", "BoneAutoMapper",
    "AutoMappingResult", "MappingResult", "MatchPass",
    "to_mapping_record", "get_confidence_label", "ConfidenceLabel",
    "is_structural_bone", "filter_structural_bones",
]
