"""Tests for bone name normalization and tokenization."""

import pytest

from rigmap.mapping.names import (
    PreprocessedBone,
    normalize_bone_name,
    preprocess_bones,
    strip_prefix,
    tokenize,
    word_boundary_match,
)


@pytest.mark.parametrize("name, expected", [
    ("mixamorig:LeftArm", "LeftArm"),
    ("mixamorig_LeftArm", "LeftArm"),
    ("mixamorigLeftArm", "LeftArm"),
    ("DEF-spine.003", "spine.003"),
    ("ORG-hand.L", "hand.L"),
    ("MCH-forearm_ik.L", "forearm_ik.L"),
    ("LeftArm", "LeftArm"),
])
def test_strip_prefix(name, expected):
    assert strip_prefix(name) == expected


def test_strip_prefix_is_anchored_and_case_sensitive():
    assert strip_prefix("Left_mixamorig:Arm") == "Left_mixamorig:Arm"
    assert strip_prefix("def-spine") == "def-spine"
    # only one prefix is removed
    assert strip_prefix("DEF-ORG-hand.L") == "ORG-hand.L"


@pytest.mark.parametrize("name, expected", [
    ("DEF-upper_arm.L", "upperarml"),
    ("mixamorig:Left Fore-Arm", "leftforearm"),
    ("spine_01", "spine01"),
    ("Hips", "hips"),
])
def test_normalize_bone_name(name, expected):
    assert normalize_bone_name(name) == expected


@pytest.mark.parametrize("name, expected", [
    ("LeftUpperArm", ["left", "upper", "arm"]),
    ("UpperArm_L_01", ["upper", "arm", "l", "01"]),
    ("mixamorig:LeftHandIndex1", ["left", "hand", "index1"]),
    ("DEF-f_index.01.L", ["f", "index", "01", "l"]),
    ("IKTarget", ["ik", "target"]),
    ("HTMLParser", ["html", "parser"]),
    ("__left..arm__", ["left", "arm"]),
    ("spine", ["spine"]),
    ("", []),
])
def test_tokenize(name, expected):
    assert tokenize(name) == expected


def test_single_word_token_equals_normalized_form():
    assert tokenize("pelvis") == [normalize_bone_name("pelvis")]


def test_word_boundary_match_contiguous_run():
    bone = ["upper", "arm", "l", "01"]
    assert word_boundary_match(["upper", "arm"], bone)
    assert word_boundary_match(["arm", "l"], bone)
    assert word_boundary_match(bone, bone)


def test_word_boundary_match_rejects_partial_tokens_and_reordering():
    assert not word_boundary_match(["arm"], ["armature"])
    assert not word_boundary_match(["arm", "upper"], ["upper", "arm"])
    assert not word_boundary_match(["upper", "l"], ["upper", "arm", "l"])


def test_word_boundary_match_empty_and_oversized():
    assert not word_boundary_match([], ["arm"])
    assert not word_boundary_match(["arm"], [])
    assert not word_boundary_match(["a", "b", "c"], ["a", "b"])


def test_preprocessed_bone():
    bone = PreprocessedBone.from_name("mixamorig:LeftForeArm")
    assert bone.original == "mixamorig:LeftForeArm"
    assert bone.stripped == "LeftForeArm"
    assert bone.normalized == "leftforearm"
    assert bone.tokens == ("left", "fore", "arm")


def test_preprocess_bones_keeps_order_and_duplicates():
    bones = preprocess_bones(["b", "a", "b"])
    assert [bone.original for bone in bones] == ["b", "a", "b"]
