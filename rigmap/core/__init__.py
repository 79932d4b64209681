"""Core systems - config, logging, joint taxonomy"""

from .config import Config
from .logging import setup_logging, get_logger
from .joints import (
    CanonicalJoint,
    JOINT_LABELS,
    JOINT_PRESETS,
    get_preset_joints,
    coerce_joint,
    parse_joint_list,
    joint_label,
)

__all__ = [
    "Config", "setup_logging", "get_logger",
    "CanonicalJoint", "JOINT_LABELS", "JOINT_PRESETS",
    "get_preset_joints", "coerce_joint", "parse_joint_list", "joint_label",
]
