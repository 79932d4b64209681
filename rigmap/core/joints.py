"""Canonical humanoid joint taxonomy.

Every supported rig is mapped onto this fixed set of joints. The
declaration order of CanonicalJoint is also the order in which the
auto-mapper processes joints, so an earlier joint wins a contested bone.
"""

from enum import Enum
from typing import Dict, Iterable, List, Tuple, Union


class CanonicalJoint(str, Enum):
    """Canonical joint keys.

    Members are str subclasses, so ``CanonicalJoint.LEFT_ELBOW == "leftElbow"``
    and they can be used interchangeably with plain keys in dicts.
    """
    # Torso and Head
    TORSO = "torso"
    NECK_YAW = "neckYaw"
    NECK_PITCH = "neckPitch"

    # Left Arm
    LEFT_SHOULDER_PITCH = "leftShoulderPitch"
    LEFT_SHOULDER_YAW = "leftShoulderYaw"
    LEFT_ELBOW = "leftElbow"
    LEFT_WRIST = "leftWrist"
    LEFT_GRIP = "leftGrip"

    # Right Arm
    RIGHT_SHOULDER_PITCH = "rightShoulderPitch"
    RIGHT_SHOULDER_YAW = "rightShoulderYaw"
    RIGHT_ELBOW = "rightElbow"
    RIGHT_WRIST = "rightWrist"
    RIGHT_GRIP = "rightGrip"

    # Left Leg
    LEFT_HIP_PITCH = "leftHipPitch"
    LEFT_HIP_YAW = "leftHipYaw"
    LEFT_KNEE = "leftKnee"
    LEFT_ANKLE = "leftAnkle"

    # Right Leg
    RIGHT_HIP_PITCH = "rightHipPitch"
    RIGHT_HIP_YAW = "rightHipYaw"
    RIGHT_KNEE = "rightKnee"
    RIGHT_ANKLE = "rightAnkle"

    def __str__(self) -> str:
        return self.value


# Display labels for reports
JOINT_LABELS: Dict[CanonicalJoint, str] = {
    CanonicalJoint.TORSO: "Torso",
    CanonicalJoint.NECK_YAW: "Neck Yaw",
    CanonicalJoint.NECK_PITCH: "Neck Pitch",
    CanonicalJoint.LEFT_SHOULDER_PITCH: "Left Shoulder Pitch",
    CanonicalJoint.LEFT_SHOULDER_YAW: "Left Shoulder Yaw",
    CanonicalJoint.LEFT_ELBOW: "Left Elbow",
    CanonicalJoint.LEFT_WRIST: "Left Wrist",
    CanonicalJoint.LEFT_GRIP: "Left Grip",
    CanonicalJoint.RIGHT_SHOULDER_PITCH: "Right Shoulder Pitch",
    CanonicalJoint.RIGHT_SHOULDER_YAW: "Right Shoulder Yaw",
    CanonicalJoint.RIGHT_ELBOW: "Right Elbow",
    CanonicalJoint.RIGHT_WRIST: "Right Wrist",
    CanonicalJoint.RIGHT_GRIP: "Right Grip",
    CanonicalJoint.LEFT_HIP_PITCH: "Left Hip Pitch",
    CanonicalJoint.LEFT_HIP_YAW: "Left Hip Yaw",
    CanonicalJoint.LEFT_KNEE: "Left Knee",
    CanonicalJoint.LEFT_ANKLE: "Left Ankle",
    CanonicalJoint.RIGHT_HIP_PITCH: "Right Hip Pitch",
    CanonicalJoint.RIGHT_HIP_YAW: "Right Hip Yaw",
    CanonicalJoint.RIGHT_KNEE: "Right Knee",
    CanonicalJoint.RIGHT_ANKLE: "Right Ankle",
}


# Body part presets, used to auto-map a single separated part of a model
JOINT_PRESETS: Dict[str, Tuple[CanonicalJoint, ...]] = {
    "head": (
        CanonicalJoint.NECK_YAW,
        CanonicalJoint.NECK_PITCH,
    ),
    "torso": (
        CanonicalJoint.TORSO,
    ),
    "leftArm": (
        CanonicalJoint.LEFT_SHOULDER_PITCH,
        CanonicalJoint.LEFT_SHOULDER_YAW,
        CanonicalJoint.LEFT_ELBOW,
        CanonicalJoint.LEFT_WRIST,
        CanonicalJoint.LEFT_GRIP,
    ),
    "rightArm": (
        CanonicalJoint.RIGHT_SHOULDER_PITCH,
        CanonicalJoint.RIGHT_SHOULDER_YAW,
        CanonicalJoint.RIGHT_ELBOW,
        CanonicalJoint.RIGHT_WRIST,
        CanonicalJoint.RIGHT_GRIP,
    ),
    "leftLeg": (
        CanonicalJoint.LEFT_HIP_PITCH,
        CanonicalJoint.LEFT_HIP_YAW,
        CanonicalJoint.LEFT_KNEE,
        CanonicalJoint.LEFT_ANKLE,
    ),
    "rightLeg": (
        CanonicalJoint.RIGHT_HIP_PITCH,
        CanonicalJoint.RIGHT_HIP_YAW,
        CanonicalJoint.RIGHT_KNEE,
        CanonicalJoint.RIGHT_ANKLE,
    ),
}


def get_preset_joints(preset_id: str) -> Tuple[CanonicalJoint, ...]:
    """Return the joints of a body part preset.

    Raises:
        ValueError: preset_id is not a known preset
    """
    try:
        return JOINT_PRESETS[preset_id]
    except KeyError:
        known = ", ".join(JOINT_PRESETS)
        raise ValueError(f"Unknown joint preset '{preset_id}' (known: {known})") from None


def coerce_joint(key: Union[str, CanonicalJoint]) -> Union[CanonicalJoint, str]:
    """Return the CanonicalJoint for key, or key itself if it is not one."""
    if isinstance(key, CanonicalJoint):
        return key
    try:
        return CanonicalJoint(key)
    except ValueError:
        return key


def parse_joint_list(text: str) -> List[Union[CanonicalJoint, str]]:
    """Parse a comma separated joint list, e.g. ``"leftElbow, leftWrist"``."""
    return [coerce_joint(part.strip()) for part in text.split(",") if part.strip()]


def joint_label(key: Union[str, CanonicalJoint]) -> str:
    joint = coerce_joint(key)
    return JOINT_LABELS.get(joint, str(key))


def preset_for_joint(key: Union[str, CanonicalJoint]) -> str:
    """Name of the preset containing key, or "other"."""
    for preset_id, joints in JOINT_PRESETS.items():
        if key in joints:
            return preset_id
    return "other"


def joint_values(joints: Iterable[Union[str, CanonicalJoint]]) -> List[str]:
    """Plain string keys for serialization."""
    return [joint.value if isinstance(joint, CanonicalJoint) else str(joint) for joint in joints]
