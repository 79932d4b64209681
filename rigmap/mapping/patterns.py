"""Bone name alias registry.

Known bone names per canonical joint, across rig conventions:
Mixamo, VRM 1.0, UE5 Mannequin, Blender Rigify, Unity Mecanim,
Ready Player Me and BVH motion capture exports.

Alias order matters: within one matching pass a joint tries its aliases
first to last. Mixamo's "mixamorig:" namespace is not listed literally,
namespaced bones are picked up by the prefix-stripped pass. The joined
"mixamorigLeftArm" form is listed because some GLTF loaders drop the
colon from node names.
"""

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Sequence, Tuple, Union

from rigmap.core.joints import CanonicalJoint
from rigmap.core.logging import get_logger
from rigmap.mapping.names import normalize_bone_name, strip_prefix, tokenize


logger = get_logger("mapping.patterns")


BONE_PATTERNS: Dict[CanonicalJoint, Sequence[str]] = {
    CanonicalJoint.TORSO: [
        "torso", "Spine", "spine", "Spine1", "spine1", "Spine2", "spine2",
        "mixamorigSpine", "Torso", "Chest", "chest",
        "Hips", "hips",
        # VRM
        "upperChest", "UpperChest",
        # UE5
        "spine_01", "spine_02", "spine_03",
        # Rigify
        "DEF-spine.003", "DEF-spine.004",
    ],
    CanonicalJoint.NECK_YAW: [
        "neckYaw", "Neck", "neck",
        "mixamorigNeck",
        # UE5
        "neck_01",
        # Rigify
        "DEF-spine.006",
    ],
    CanonicalJoint.NECK_PITCH: [
        "neckPitch", "Head", "head",
        "mixamorigHead",
        # UE5
        "head",
        # Rigify
        "DEF-spine.007",
    ],

    # Left Arm
    CanonicalJoint.LEFT_SHOULDER_PITCH: [
        "leftShoulderPitch",
        "LeftArm", "mixamorigLeftArm",
        "Left_Arm", "L_Arm", "Arm.L", "shoulder.L",
        "LeftUpperArm", "leftUpperArm",
        # UE5
        "upperarm_l",
        # Rigify
        "DEF-upper_arm.L",
        # BVH
        "LeftArm", "lShldr",
    ],
    CanonicalJoint.LEFT_SHOULDER_YAW: [
        "leftShoulderYaw",
        "LeftShoulder", "mixamorigLeftShoulder",
        "Left_Shoulder", "L_Shoulder",
        "leftShoulder",
        # UE5
        "clavicle_l",
        # Rigify
        "DEF-shoulder.L",
    ],
    CanonicalJoint.LEFT_ELBOW: [
        "leftElbow",
        "LeftForeArm", "LeftElbow",
        "mixamorigLeftForeArm",
        "Left_ForeArm", "L_ForeArm", "forearm.L",
        "LeftLowerArm", "leftLowerArm",
        "Left_Elbow", "L_Elbow",
        # UE5
        "lowerarm_l",
        # Rigify
        "DEF-forearm.L",
        # BVH
        "LeftForeArm", "lForeArm",
    ],
    CanonicalJoint.LEFT_WRIST: [
        "leftWrist",
        "LeftHand", "LeftWrist",
        "mixamorigLeftHand",
        "Left_Hand", "L_Hand", "hand.L",
        "leftHand",
        # UE5
        "hand_l",
        # Rigify
        "DEF-hand.L",
    ],
    CanonicalJoint.LEFT_GRIP: [
        "leftGrip",
        "LeftHandIndex1", "LeftHandThumb1",
        "mixamorigLeftHandIndex1",
        "Left_Finger", "L_Finger", "LeftGrip",
        "LeftHandIndex", "LeftFinger",
        # VRM
        "leftIndexProximal",
        # UE5
        "index_01_l",
        # Rigify
        "DEF-f_index.01.L",
    ],

    # Right Arm
    CanonicalJoint.RIGHT_SHOULDER_PITCH: [
        "rightShoulderPitch",
        "RightArm", "mixamorigRightArm",
        "Right_Arm", "R_Arm", "Arm.R", "shoulder.R",
        "RightUpperArm", "rightUpperArm",
        # UE5
        "upperarm_r",
        # Rigify
        "DEF-upper_arm.R",
        # BVH
        "RightArm", "rShldr",
    ],
    CanonicalJoint.RIGHT_SHOULDER_YAW: [
        "rightShoulderYaw",
        "RightShoulder", "mixamorigRightShoulder",
        "Right_Shoulder", "R_Shoulder",
        "rightShoulder",
        # UE5
        "clavicle_r",
        # Rigify
        "DEF-shoulder.R",
    ],
    CanonicalJoint.RIGHT_ELBOW: [
        "rightElbow",
        "RightForeArm", "RightElbow",
        "mixamorigRightForeArm",
        "Right_ForeArm", "R_ForeArm", "forearm.R",
        "RightLowerArm", "rightLowerArm",
        "Right_Elbow", "R_Elbow",
        # UE5
        "lowerarm_r",
        # Rigify
        "DEF-forearm.R",
        # BVH
        "RightForeArm", "rForeArm",
    ],
    CanonicalJoint.RIGHT_WRIST: [
        "rightWrist",
        "RightHand", "RightWrist",
        "mixamorigRightHand",
        "Right_Hand", "R_Hand", "hand.R",
        "rightHand",
        # UE5
        "hand_r",
        # Rigify
        "DEF-hand.R",
    ],
    CanonicalJoint.RIGHT_GRIP: [
        "rightGrip",
        "RightHandIndex1", "RightHandThumb1",
        "mixamorigRightHandIndex1",
        "Right_Finger", "R_Finger", "RightGrip",
        "RightHandIndex", "RightFinger",
        # VRM
        "rightIndexProximal",
        # UE5
        "index_01_r",
        # Rigify
        "DEF-f_index.01.R",
    ],

    # Left Leg
    CanonicalJoint.LEFT_HIP_PITCH: [
        "leftHipPitch",
        "LeftUpLeg", "mixamorigLeftUpLeg",
        "Left_UpLeg", "L_UpLeg", "thigh.L",
        "LeftUpperLeg", "leftUpperLeg",
        "LeftHip",
        # UE5
        "thigh_l",
        # Rigify
        "DEF-thigh.L",
        # BVH
        "LeftUpLeg", "lThigh",
    ],
    CanonicalJoint.LEFT_HIP_YAW: [
        "leftHipYaw",
        "LeftHip", "LeftUpLeg", "mixamorigLeftUpLeg",
        "Left_Hip", "L_Hip",
        "leftHip",
    ],
    CanonicalJoint.LEFT_KNEE: [
        "leftKnee",
        "LeftLeg", "LeftKnee",
        "mixamorigLeftLeg",
        "Left_Leg", "L_Leg", "shin.L",
        "LeftLowerLeg", "leftLowerLeg",
        # UE5
        "calf_l",
        # Rigify
        "DEF-shin.L",
        # BVH
        "LeftLeg", "lShin",
    ],
    CanonicalJoint.LEFT_ANKLE: [
        "leftAnkle",
        "LeftFoot", "LeftAnkle",
        "mixamorigLeftFoot",
        "Left_Foot", "L_Foot", "foot.L",
        "LeftToeBase", "leftFoot",
        # UE5
        "foot_l",
        # Rigify
        "DEF-foot.L",
    ],

    # Right Leg
    CanonicalJoint.RIGHT_HIP_PITCH: [
        "rightHipPitch",
        "RightUpLeg", "mixamorigRightUpLeg",
        "Right_UpLeg", "R_UpLeg", "thigh.R",
        "RightUpperLeg", "rightUpperLeg",
        "RightHip",
        # UE5
        "thigh_r",
        # Rigify
        "DEF-thigh.R",
        # BVH
        "RightUpLeg", "rThigh",
    ],
    CanonicalJoint.RIGHT_HIP_YAW: [
        "rightHipYaw",
        "RightHip", "RightUpLeg", "mixamorigRightUpLeg",
        "Right_Hip", "R_Hip",
        "rightHip",
    ],
    CanonicalJoint.RIGHT_KNEE: [
        "rightKnee",
        "RightLeg", "RightKnee",
        "mixamorigRightLeg",
        "Right_Leg", "R_Leg", "shin.R",
        "RightLowerLeg", "rightLowerLeg",
        # UE5
        "calf_r",
        # Rigify
        "DEF-shin.R",
        # BVH
        "RightLeg", "rShin",
    ],
    CanonicalJoint.RIGHT_ANKLE: [
        "rightAnkle",
        "RightFoot", "RightAnkle",
        "mixamorigRightFoot",
        "Right_Foot", "R_Foot", "foot.R",
        "RightToeBase", "rightFoot",
        # UE5
        "foot_r",
        # Rigify
        "DEF-foot.R",
    ],
}


@dataclass(frozen=True)
class AliasPattern:
    """One known bone name for a joint, with precomputed comparison forms."""
    joint: CanonicalJoint
    pattern: str
    stripped: str
    normalized: str
    tokens: Tuple[str, ...]

    @classmethod
    def create(cls, joint: CanonicalJoint, pattern: str) -> "AliasPattern":
        return cls(
            joint=joint,
            pattern=pattern,
            stripped=strip_prefix(pattern),
            normalized=normalize_bone_name(pattern),
            tokens=tuple(tokenize(pattern)),
        )


class PatternRegistry:
    """Immutable, ordered alias table keyed by canonical joint.

    Joint order follows the table's declaration order. Duplicate aliases
    within one joint are dropped, keeping the first occurrence.
    """

    def __init__(self, table: Mapping[Union[CanonicalJoint, str], Sequence[str]]):
        aliases: Dict[CanonicalJoint, Tuple[AliasPattern, ...]] = {}
        for key, patterns in table.items():
            try:
                joint = CanonicalJoint(key)
            except ValueError:
                raise ValueError(f"Unknown canonical joint in pattern table: {key!r}") from None

            seen = set()
            entries = []
            for pattern in patterns:
                if pattern in seen:
                    continue
                seen.add(pattern)
                entries.append(AliasPattern.create(joint, pattern))
            aliases[joint] = tuple(entries)

        self._aliases = MappingProxyType(aliases)
        self._joints = tuple(aliases)

    @property
    def joints(self) -> Tuple[CanonicalJoint, ...]:
        """Joints in processing order."""
        return self._joints

    def aliases(self, joint: Union[CanonicalJoint, str]) -> Tuple[AliasPattern, ...]:
        """Aliases for joint in priority order, empty for unknown joints."""
        return self._aliases.get(joint, ())

    def patterns(self, joint: Union[CanonicalJoint, str]) -> Tuple[str, ...]:
        return tuple(alias.pattern for alias in self.aliases(joint))

    def __contains__(self, joint: object) -> bool:
        return joint in self._aliases

    def __iter__(self) -> Iterator[CanonicalJoint]:
        return iter(self._joints)

    def __len__(self) -> int:
        return len(self._joints)

    def __repr__(self) -> str:
        total = sum(len(entries) for entries in self._aliases.values())
        return f"PatternRegistry(joints={len(self._joints)}, aliases={total})"


@lru_cache(maxsize=None)
def default_registry() -> PatternRegistry:
    """Registry built from BONE_PATTERNS on first use."""
    registry = PatternRegistry(BONE_PATTERNS)
    logger.debug(f"Built default pattern registry: {registry!r}")
    return registry
