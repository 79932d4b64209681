import logging

import pytest

from rigmap.core.config import Config


@pytest.fixture(autouse=True)
def fresh_config():
    """Each test starts without a loaded Config instance."""
    Config._instance = None
    yield
    Config._instance = None


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("rigmap")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.fixture
def mixamo_bones():
    """Bone list of a standard Mixamo character as exported to GLB."""
    return [
        "Armature",
        "mixamorig:Hips",
        "mixamorig:Spine",
        "mixamorig:Spine1",
        "mixamorig:Spine2",
        "mixamorig:Neck",
        "mixamorig:Head",
        "mixamorig:LeftShoulder",
        "mixamorig:LeftArm",
        "mixamorig:LeftForeArm",
        "mixamorig:LeftHand",
        "mixamorig:LeftHandIndex1",
        "mixamorig:RightShoulder",
        "mixamorig:RightArm",
        "mixamorig:RightForeArm",
        "mixamorig:RightHand",
        "mixamorig:RightHandIndex1",
        "mixamorig:LeftUpLeg",
        "mixamorig:LeftLeg",
        "mixamorig:LeftFoot",
        "mixamorig:LeftToeBase",
        "mixamorig:RightUpLeg",
        "mixamorig:RightLeg",
        "mixamorig:RightFoot",
        "mixamorig:RightToeBase",
    ]


@pytest.fixture
def ue5_bones():
    """UE5 Mannequin skeleton (subset)."""
    return [
        "root", "pelvis",
        "spine_01", "spine_02", "spine_03",
        "neck_01", "head",
        "clavicle_l", "upperarm_l", "lowerarm_l", "hand_l", "index_01_l",
        "clavicle_r", "upperarm_r", "lowerarm_r", "hand_r", "index_01_r",
        "thigh_l", "calf_l", "foot_l", "ball_l",
        "thigh_r", "calf_r", "foot_r", "ball_r",
    ]
