"""Tests for the four-pass bone auto-mapper."""

import pytest

from rigmap.core.joints import CanonicalJoint, get_preset_joints
from rigmap.mapping.matcher import (
    DEFAULT_STRATEGIES,
    BoneAutoMapper,
    MatchPass,
    auto_map_bones,
)
from rigmap.mapping.patterns import PatternRegistry
from rigmap.mapping.results import to_mapping_record


PASS_CONFIDENCE = {
    MatchPass.EXACT: 1.0,
    MatchPass.PREFIX_STRIPPED: 0.9,
    MatchPass.NORMALIZED: 0.8,
    MatchPass.WORD_BOUNDARY: 0.6,
}


def assert_consistent(result, expected_joint_count):
    bones = [mapping.bone_name for mapping in result.mappings]
    joints = [mapping.joint_key for mapping in result.mappings]
    assert len(bones) == len(set(bones))
    assert len(joints) == len(set(joints))
    assert len(result.mappings) + len(result.unmapped_joints) == expected_joint_count
    for mapping in result.mappings:
        assert mapping.confidence == PASS_CONFIDENCE[mapping.match_pass]


# ---------------------------------------------------------------------------
# scenarios
# ---------------------------------------------------------------------------

def test_mixamo_namespaced_bones_resolve_by_prefix_stripping():
    bones = ["mixamorig:Hips", "mixamorig:Spine", "mixamorig:LeftArm", "mixamorig:RightArm"]
    result = auto_map_bones(bones)
    by_joint = {mapping.joint_key: mapping for mapping in result.mappings}

    assert by_joint[CanonicalJoint.TORSO].bone_name in ("mixamorig:Hips", "mixamorig:Spine")

    left = by_joint[CanonicalJoint.LEFT_SHOULDER_PITCH]
    assert left.bone_name == "mixamorig:LeftArm"
    assert left.confidence == 0.9
    assert left.match_pass is MatchPass.PREFIX_STRIPPED

    right = by_joint[CanonicalJoint.RIGHT_SHOULDER_PITCH]
    assert right.bone_name == "mixamorig:RightArm"
    assert right.confidence == 0.9

    for joint in (
        CanonicalJoint.NECK_YAW, CanonicalJoint.NECK_PITCH,
        CanonicalJoint.LEFT_HIP_PITCH, CanonicalJoint.RIGHT_KNEE,
        CanonicalJoint.LEFT_ANKLE, CanonicalJoint.LEFT_WRIST,
        CanonicalJoint.RIGHT_GRIP,
    ):
        assert joint in result.unmapped_joints

    assert len(result.mappings) == 3
    assert result.unmapped_bones == ["mixamorig:Hips"]
    assert result.overall_confidence == pytest.approx(0.9 * 3 / 21)
    assert_consistent(result, 21)


def test_claimed_bone_is_not_offered_to_later_joint():
    result = auto_map_bones(
        ["Hips", "LeftUpLeg", "RightUpLeg"],
        allowed_joints=["leftHipPitch", "leftHipYaw"],
    )
    assert len(result.mappings) == 1
    mapping = result.mappings[0]
    assert mapping.joint_key is CanonicalJoint.LEFT_HIP_PITCH
    assert mapping.bone_name == "LeftUpLeg"
    assert mapping.match_pass is MatchPass.EXACT
    assert result.unmapped_joints == [CanonicalJoint.LEFT_HIP_YAW]
    assert result.unmapped_bones == ["Hips", "RightUpLeg"]
    assert result.overall_confidence == pytest.approx(0.5)


def test_caller_order_does_not_change_joint_priority():
    result = auto_map_bones(["LeftUpLeg"], allowed_joints=["leftHipYaw", "leftHipPitch"])
    assert to_mapping_record(result) == {CanonicalJoint.LEFT_HIP_PITCH: "LeftUpLeg"}
    assert result.unmapped_joints == [CanonicalJoint.LEFT_HIP_YAW]


def test_empty_bone_list():
    result = auto_map_bones([])
    assert result.mappings == []
    assert result.unmapped_joints == list(CanonicalJoint)
    assert result.unmapped_bones == []
    assert result.overall_confidence == 0


def test_empty_bone_list_with_allowed_joints():
    joints = get_preset_joints("leftArm")
    result = auto_map_bones([], allowed_joints=joints)
    assert result.unmapped_joints == list(joints)
    assert result.overall_confidence == 0


def test_empty_allowed_joints_attempts_nothing():
    result = auto_map_bones(["Hips"], allowed_joints=[])
    assert result.mappings == []
    assert result.unmapped_joints == []
    assert result.unmapped_bones == ["Hips"]
    assert result.overall_confidence == 0


def test_word_boundary_match():
    result = auto_map_bones(["UpperArm_L_01"])
    assert len(result.mappings) == 1
    mapping = result.mappings[0]
    assert mapping.joint_key is CanonicalJoint.LEFT_SHOULDER_PITCH
    assert mapping.confidence == 0.6
    assert mapping.match_pass is MatchPass.WORD_BOUNDARY


def test_word_boundary_does_not_match_inside_a_word():
    result = auto_map_bones(["LeftArmature"], allowed_joints=["leftShoulderPitch"])
    assert result.mappings == []
    assert result.unmapped_bones == ["LeftArmature"]


# ---------------------------------------------------------------------------
# individual passes
# ---------------------------------------------------------------------------

def test_exact_match_is_case_sensitive():
    result = auto_map_bones(["LEFTFOREARM"], allowed_joints=["leftElbow"])
    mapping = result.mappings[0]
    assert mapping.bone_name == "LEFTFOREARM"
    assert mapping.match_pass is MatchPass.NORMALIZED


def test_rigify_deform_and_org_bones():
    bones = ["DEF-spine.003", "DEF-upper_arm.L", "ORG-forearm.L", "MCH-hand.L"]
    record = {m.joint_key: (m.bone_name, m.match_pass) for m in auto_map_bones(bones).mappings}
    assert record[CanonicalJoint.TORSO] == ("DEF-spine.003", MatchPass.EXACT)
    assert record[CanonicalJoint.LEFT_SHOULDER_PITCH] == ("DEF-upper_arm.L", MatchPass.EXACT)
    assert record[CanonicalJoint.LEFT_ELBOW] == ("ORG-forearm.L", MatchPass.PREFIX_STRIPPED)
    assert record[CanonicalJoint.LEFT_WRIST] == ("MCH-hand.L", MatchPass.PREFIX_STRIPPED)


def test_normalized_tie_goes_to_first_bone_in_caller_order():
    result = auto_map_bones(["left_fore_arm", "Left-Fore-Arm"], allowed_joints=["leftElbow"])
    assert result.mappings[0].bone_name == "left_fore_arm"
    assert result.mappings[0].match_pass is MatchPass.NORMALIZED
    assert result.unmapped_bones == ["Left-Fore-Arm"]


def test_prefix_pass_skips_bone_identical_to_alias():
    prefix_only = [s for s in DEFAULT_STRATEGIES if s.match_pass is MatchPass.PREFIX_STRIPPED]
    mapper = BoneAutoMapper(strategies=prefix_only)

    assert mapper.map(["Hips"], allowed_joints=["torso"]).mappings == []

    result = mapper.map(["mixamorig:Hips"], allowed_joints=["torso"])
    assert to_mapping_record(result) == {CanonicalJoint.TORSO: "mixamorig:Hips"}


def test_earlier_pass_wins_over_earlier_joint():
    # leftHipPitch matches "Left_Hip" in the normalized pass, but the exact
    # pass for leftHipYaw runs first
    result = auto_map_bones(["Left_Hip"], allowed_joints=["leftHipPitch", "leftHipYaw"])
    assert to_mapping_record(result) == {CanonicalJoint.LEFT_HIP_YAW: "Left_Hip"}
    assert result.unmapped_joints == [CanonicalJoint.LEFT_HIP_PITCH]

    alone = auto_map_bones(["Left_Hip"], allowed_joints=["leftHipPitch"])
    assert alone.mappings[0].match_pass is MatchPass.NORMALIZED


# ---------------------------------------------------------------------------
# full rigs
# ---------------------------------------------------------------------------

def test_full_mixamo_rig(mixamo_bones):
    result = auto_map_bones(mixamo_bones)
    record = to_mapping_record(result)

    assert record[CanonicalJoint.TORSO] == "mixamorig:Spine"
    assert record[CanonicalJoint.NECK_YAW] == "mixamorig:Neck"
    assert record[CanonicalJoint.NECK_PITCH] == "mixamorig:Head"
    assert record[CanonicalJoint.LEFT_ELBOW] == "mixamorig:LeftForeArm"
    assert record[CanonicalJoint.RIGHT_GRIP] == "mixamorig:RightHandIndex1"
    assert record[CanonicalJoint.LEFT_HIP_PITCH] == "mixamorig:LeftUpLeg"
    assert record[CanonicalJoint.RIGHT_ANKLE] == "mixamorig:RightFoot"

    assert result.unmapped_joints == [CanonicalJoint.LEFT_HIP_YAW, CanonicalJoint.RIGHT_HIP_YAW]
    assert all(m.match_pass is MatchPass.PREFIX_STRIPPED for m in result.mappings)
    assert result.overall_confidence == pytest.approx(0.9 * 19 / 21)
    assert "Armature" in result.unmapped_bones
    assert_consistent(result, 21)


def test_full_ue5_rig(ue5_bones):
    result = auto_map_bones(ue5_bones)
    record = to_mapping_record(result)

    assert record[CanonicalJoint.TORSO] == "spine_01"
    assert record[CanonicalJoint.LEFT_SHOULDER_YAW] == "clavicle_l"
    assert record[CanonicalJoint.RIGHT_KNEE] == "calf_r"
    assert all(m.match_pass is MatchPass.EXACT for m in result.mappings)
    assert len(result.mappings) == 19
    assert result.unmapped_bones == ["root", "pelvis", "spine_02", "spine_03", "ball_l", "ball_r"]
    assert_consistent(result, 21)


def test_mixed_rig_properties(mixamo_bones, ue5_bones):
    result = auto_map_bones(mixamo_bones + ue5_bones + ["UpperArm_L_01", "Left-Fore-Arm"])
    assert_consistent(result, 21)


def test_determinism(mixamo_bones, ue5_bones):
    bones = ue5_bones + mixamo_bones
    joints = ["torso", "leftElbow", "rightHipYaw", "leftGrip"]
    assert auto_map_bones(bones, joints).to_dict() == auto_map_bones(bones, joints).to_dict()


# ---------------------------------------------------------------------------
# allowed joints and registries
# ---------------------------------------------------------------------------

def test_unknown_allowed_joint_is_reported_unmapped():
    result = auto_map_bones(["LeftForeArm"], allowed_joints=["tail", "leftElbow"])
    assert to_mapping_record(result) == {CanonicalJoint.LEFT_ELBOW: "LeftForeArm"}
    assert result.unmapped_joints == ["tail"]
    assert result.overall_confidence == pytest.approx(0.5)
    assert_consistent(result, 2)


def test_duplicate_allowed_joints_are_collapsed():
    result = auto_map_bones(["LeftForeArm", "LeftElbow"], allowed_joints=["leftElbow", "leftElbow"])
    assert len(result.mappings) == 1
    assert result.unmapped_joints == []
    assert result.overall_confidence == pytest.approx(1.0)


def test_duplicate_bone_names_are_claimed_together():
    result = auto_map_bones(["Hips", "Hips"], allowed_joints=["torso"])
    assert to_mapping_record(result) == {CanonicalJoint.TORSO: "Hips"}
    assert result.unmapped_bones == []


def test_mapped_joint_keys_compare_equal_to_strings():
    record = to_mapping_record(auto_map_bones(["LeftHand"]))
    assert record["leftWrist"] == "LeftHand"


def test_injected_registry():
    registry = PatternRegistry({"torso": ["Pelvis"], "neckPitch": ["Skull"]})
    result = auto_map_bones(["pelvis", "Skull_end"], registry=registry)
    assert to_mapping_record(result) == {
        CanonicalJoint.TORSO: "pelvis",
        CanonicalJoint.NECK_PITCH: "Skull_end",
    }
    assert [m.match_pass for m in result.mappings] == [MatchPass.NORMALIZED, MatchPass.WORD_BOUNDARY]


def test_joint_missing_from_injected_registry_stays_unmapped():
    registry = PatternRegistry({"torso": ["Pelvis"]})
    result = auto_map_bones(["Pelvis", "LeftHand"], allowed_joints=["leftWrist", "torso"], registry=registry)
    assert to_mapping_record(result) == {CanonicalJoint.TORSO: "Pelvis"}
    assert result.unmapped_joints == [CanonicalJoint.LEFT_WRIST]


def test_single_exact_strategy(mixamo_bones):
    mapper = BoneAutoMapper(strategies=DEFAULT_STRATEGIES[:1])
    result = mapper.map(mixamo_bones)
    assert result.mappings == []
    assert result.overall_confidence == 0


def test_mapper_accepts_generators():
    result = BoneAutoMapper().map(name for name in ["Neck", "Head"])
    assert to_mapping_record(result) == {
        CanonicalJoint.NECK_YAW: "Neck",
        CanonicalJoint.NECK_PITCH: "Head",
    }


def test_to_dict():
    data = auto_map_bones(["mixamorig:LeftArm"], allowed_joints=["leftShoulderPitch", "tail"]).to_dict()
    assert data == {
        "mappings": [{
            "joint": "leftShoulderPitch",
            "bone": "mixamorig:LeftArm",
            "confidence": 0.9,
            "pass": "prefix-stripped",
        }],
        "unmappedJoints": ["tail"],
        "unmappedBones": [],
        "overallConfidence": pytest.approx(0.45),
    }
