"""Bone name normalization and tokenization.

All functions here are pure string transforms used to compare bone names
across rig conventions:

    strip_prefix("mixamorig:LeftForeArm")   -> "LeftForeArm"
    normalize_bone_name("DEF-upper_arm.L")  -> "upperarml"
    tokenize("mixamorig:LeftUpperArm")      -> ["left", "upper", "arm"]
    tokenize("UpperArm_L_01")               -> ["upper", "arm", "l", "01"]
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple


# Rig namespace prefixes, anchored at the start of the name
PREFIX_PATTERN = re.compile(r"^(mixamorig[_:]?|DEF-|ORG-|MCH-)")

SEPARATOR_PATTERN = re.compile(r"[_.\-: ]")
SEPARATOR_RUN_PATTERN = re.compile(r"[_.\-: ]+")

# "LeftArm" -> "Left Arm"
CAMEL_BOUNDARY_PATTERN = re.compile(r"([a-z])([A-Z])")
# "IKTarget" -> "IK Target"
ACRONYM_BOUNDARY_PATTERN = re.compile(r"([A-Z]+)([A-Z][a-z])")


def strip_prefix(name: str) -> str:
    """Remove a known rig namespace prefix (mixamorig, DEF-, ORG-, MCH-)."""
    return PREFIX_PATTERN.sub("", name, count=1)


def normalize_bone_name(name: str) -> str:
    """Case and separator insensitive comparison key."""
    return SEPARATOR_PATTERN.sub("", strip_prefix(name).lower())


def tokenize(name: str) -> List[str]:
    """Split a bone name into lowercase words.

    The name is split on separators first, then each segment is split at
    camelCase and acronym boundaries.
    """
    tokens = []
    for part in SEPARATOR_RUN_PATTERN.split(strip_prefix(name)):
        if not part:
            continue
        # Segments contain no spaces after the separator split
        spaced = CAMEL_BOUNDARY_PATTERN.sub(r"\1 \2", part)
        spaced = ACRONYM_BOUNDARY_PATTERN.sub(r"\1 \2", spaced)
        tokens.extend(word.lower() for word in spaced.split(" ") if word)
    return tokens


def word_boundary_match(pattern_tokens: Sequence[str], bone_tokens: Sequence[str]) -> bool:
    """True if pattern_tokens appear as a contiguous run inside bone_tokens."""
    if not pattern_tokens or not bone_tokens:
        return False
    if len(pattern_tokens) > len(bone_tokens):
        return False

    width = len(pattern_tokens)
    target = list(pattern_tokens)
    for start in range(len(bone_tokens) - width + 1):
        if list(bone_tokens[start:start + width]) == target:
            return True
    return False


@dataclass(frozen=True)
class PreprocessedBone:
    """A bone name with its derived comparison forms."""
    original: str
    stripped: str
    normalized: str
    tokens: Tuple[str, ...]

    @classmethod
    def from_name(cls, name: str) -> "PreprocessedBone":
        return cls(
            original=name,
            stripped=strip_prefix(name),
            normalized=normalize_bone_name(name),
            tokens=tuple(tokenize(name)),
        )


def preprocess_bones(bone_names: Iterable[str]) -> Tuple[PreprocessedBone, ...]:
    """Preprocess bone names, keeping the caller's order."""
    return tuple(PreprocessedBone.from_name(name) for name in bone_names)
