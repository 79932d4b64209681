"""Helpers for presenting auto-mapping results."""

from enum import Enum
from typing import Dict, List

from rigmap.core.joints import (
    CanonicalJoint, JOINT_PRESETS, joint_label, preset_for_joint,
)
from rigmap.mapping.matcher import AutoMappingResult


class ConfidenceLabel(str, Enum):
    """Trust bucket for a confidence value. Compares equal to its text."""
    EXACT = "Exact"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def text(self) -> str:
        return self.value

    @property
    def color_tag(self) -> str:
        return LABEL_COLORS[self]

    def __str__(self) -> str:
        return self.value


LABEL_COLORS = {
    ConfidenceLabel.EXACT: "green",
    ConfidenceLabel.HIGH: "blue",
    ConfidenceLabel.MEDIUM: "yellow",
    ConfidenceLabel.LOW: "orange",
}

# Terminal colors for the report, orange falls back to bright yellow
ANSI_COLORS = {
    "green": "\033[32m",
    "blue": "\033[34m",
    "yellow": "\033[33m",
    "orange": "\033[93m",
}
ANSI_RESET = "\033[0m"

JOINT_ORDER = {joint: position for position, joint in enumerate(CanonicalJoint)}


def get_confidence_label(confidence: float) -> ConfidenceLabel:
    """Bucket a confidence value. Lower bounds are inclusive."""
    if confidence >= 1.0:
        return ConfidenceLabel.EXACT
    if confidence >= 0.9:
        return ConfidenceLabel.HIGH
    if confidence >= 0.8:
        return ConfidenceLabel.MEDIUM
    return ConfidenceLabel.LOW


def to_mapping_record(result: AutoMappingResult) -> Dict[CanonicalJoint, str]:
    """Flatten mappings into a joint -> bone name lookup."""
    return {mapping.joint_key: mapping.bone_name for mapping in result.mappings}


def _paint(text: str, label: ConfidenceLabel, color: bool) -> str:
    if not color:
        return text
    return f"{ANSI_COLORS[label.color_tag]}{text}{ANSI_RESET}"


def format_mapping_report(result: AutoMappingResult, color: bool = False) -> str:
    """Render a result as a plain-text table grouped by body part."""
    by_joint = {mapping.joint_key: mapping for mapping in result.mappings}
    joints = [mapping.joint_key for mapping in result.mappings] + list(result.unmapped_joints)

    groups: Dict[str, List] = {}
    group_order = list(JOINT_PRESETS) + ["other"]
    for joint in joints:
        groups.setdefault(preset_for_joint(joint), []).append(joint)

    lines = []
    for group in group_order:
        members = groups.get(group)
        if not members:
            continue
        members.sort(key=lambda joint: JOINT_ORDER.get(joint, len(JOINT_ORDER)))
        lines.append(f"[{group}]")
        for joint in members:
            mapping = by_joint.get(joint)
            name = joint_label(joint)
            if mapping is None:
                lines.append(f"  {name:<22} -")
                continue
            label = get_confidence_label(mapping.confidence)
            badge = _paint(f"{label.text:<6}", label, color)
            lines.append(
                f"  {name:<22} {mapping.bone_name:<32} {badge} "
                f"{mapping.confidence:.1f} ({mapping.match_pass})"
            )

    if result.unmapped_bones:
        lines.append("")
        lines.append(f"Unmapped bones ({len(result.unmapped_bones)}): " + ", ".join(result.unmapped_bones))

    overall_label = get_confidence_label(result.overall_confidence)
    lines.append("")
    lines.append(
        f"Mapped {len(result.mappings)}/{len(joints)} joints, overall confidence "
        f"{result.overall_confidence:.2f} ({_paint(overall_label.text, overall_label, color)})"
    )
    return "\n".join(lines)
