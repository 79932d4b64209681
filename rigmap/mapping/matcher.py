"""
Bone Auto-Mapping - Resolve raw rig bone names to canonical joints.

The matcher runs four passes in a fixed order, each one looser than the
previous and each with a lower confidence:

1. exact            1.0   alias == bone name
2. prefix-stripped  0.9   equal after removing mixamorig/DEF-/ORG-/MCH-
3. normalized       0.8   equal ignoring case and separators
4. word-boundary    0.6   alias words appear as a contiguous run of bone words

Each pass sweeps every still-unmapped joint before the next pass starts.
A bone claimed by one joint is never offered to another, so the result is
injective. Joints are processed in registry order, also when the caller
restricts them with allowed_joints, so the earlier declared joint wins a
contested bone.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Callable, Dict, Iterable, Iterator, List, Mapping, NamedTuple,
    Optional, Sequence, Set, Tuple, Union,
)

from rigmap.core.joints import CanonicalJoint, coerce_joint, joint_values
from rigmap.core.logging import get_logger
from rigmap.mapping.names import PreprocessedBone, preprocess_bones, word_boundary_match
from rigmap.mapping.patterns import AliasPattern, PatternRegistry, default_registry


logger = get_logger("mapping")

JointKey = Union[CanonicalJoint, str]


# =============================================================================
# RESULT TYPES
# =============================================================================

class MatchPass(str, Enum):
    """Which pass produced a mapping."""
    EXACT = "exact"
    PREFIX_STRIPPED = "prefix-stripped"
    NORMALIZED = "normalized"
    WORD_BOUNDARY = "word-boundary"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class MappingResult:
    """A single joint -> bone assignment."""
    joint_key: CanonicalJoint
    bone_name: str
    confidence: float
    match_pass: MatchPass

    def to_dict(self) -> dict:
        return {
            "joint": self.joint_key.value,
            "bone": self.bone_name,
            "confidence": self.confidence,
            "pass": self.match_pass.value,
        }


@dataclass
class AutoMappingResult:
    """Outcome of one auto-mapping call. Partial results are normal."""
    mappings: List[MappingResult] = field(default_factory=list)
    unmapped_joints: List[JointKey] = field(default_factory=list)
    unmapped_bones: List[str] = field(default_factory=list)
    overall_confidence: float = 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "mappings": [mapping.to_dict() for mapping in self.mappings],
            "unmappedJoints": joint_values(self.unmapped_joints),
            "unmappedBones": list(self.unmapped_bones),
            "overallConfidence": self.overall_confidence,
        }


# =============================================================================
# BONE INDEX
# =============================================================================

@dataclass(frozen=True)
class BoneIndex:
    """Preprocessed bones plus lookup tables, built once per call."""
    bones: Tuple[PreprocessedBone, ...]
    by_name: Mapping[str, PreprocessedBone]
    by_normalized: Mapping[str, Tuple[PreprocessedBone, ...]]

    @classmethod
    def build(cls, bone_names: Sequence[str]) -> "BoneIndex":
        bones = preprocess_bones(bone_names)
        by_name: Dict[str, PreprocessedBone] = {}
        by_normalized: Dict[str, List[PreprocessedBone]] = {}

        for bone in bones:
            by_name.setdefault(bone.original, bone)
            by_normalized.setdefault(bone.normalized, []).append(bone)

        return cls(
            bones=bones,
            by_name=by_name,
            by_normalized={key: tuple(group) for key, group in by_normalized.items()},
        )


# =============================================================================
# MATCH STRATEGIES
# =============================================================================

# Yields candidate bones for one alias, in preference order
CandidateFinder = Callable[[AliasPattern, BoneIndex], Iterable[PreprocessedBone]]


class MatchStrategy(NamedTuple):
    match_pass: MatchPass
    confidence: float
    candidates: CandidateFinder


def exact_candidates(alias: AliasPattern, index: BoneIndex) -> Iterator[PreprocessedBone]:
    bone = index.by_name.get(alias.pattern)
    if bone is not None:
        yield bone


def prefix_stripped_candidates(alias: AliasPattern, index: BoneIndex) -> Iterator[PreprocessedBone]:
    # A bone literally equal to the alias belongs to the exact pass
    for bone in index.bones:
        if bone.stripped == alias.stripped and bone.original != alias.pattern:
            yield bone


def normalized_candidates(alias: AliasPattern, index: BoneIndex) -> Iterator[PreprocessedBone]:
    yield from index.by_normalized.get(alias.normalized, ())


def word_boundary_candidates(alias: AliasPattern, index: BoneIndex) -> Iterator[PreprocessedBone]:
    if not alias.tokens:
        return
    for bone in index.bones:
        if word_boundary_match(alias.tokens, bone.tokens):
            yield bone


DEFAULT_STRATEGIES: Tuple[MatchStrategy, ...] = (
    MatchStrategy(MatchPass.EXACT, 1.0, exact_candidates),
    MatchStrategy(MatchPass.PREFIX_STRIPPED, 0.9, prefix_stripped_candidates),
    MatchStrategy(MatchPass.NORMALIZED, 0.8, normalized_candidates),
    MatchStrategy(MatchPass.WORD_BOUNDARY, 0.6, word_boundary_candidates),
)


# =============================================================================
# MAPPER
# =============================================================================

class BoneAutoMapper:
    """Maps raw bone names onto canonical joints.

    The mapper holds no per-call state and can be shared between callers.
    """

    def __init__(
        self,
        registry: Optional[PatternRegistry] = None,
        strategies: Optional[Sequence[MatchStrategy]] = None,
    ):
        """
        Args:
            registry: Alias table, defaults to the built-in registry
            strategies: Passes to run in order, defaults to the four standard passes
        """
        self.registry = registry if registry is not None else default_registry()
        self.strategies = tuple(strategies) if strategies is not None else DEFAULT_STRATEGIES

    def map(
        self,
        bone_names: Iterable[str],
        allowed_joints: Optional[Iterable[JointKey]] = None,
    ) -> AutoMappingResult:
        """Resolve bone names to joints.

        Args:
            bone_names: Raw bone names in scene order
            allowed_joints: Restrict mapping to these joints. Unknown entries
                are reported unmapped rather than rejected.

        Returns:
            AutoMappingResult with mappings, leftovers and overall confidence
        """
        bone_names = list(bone_names)
        joints = self._resolve_joints(allowed_joints)
        index = BoneIndex.build(bone_names)

        used_bones: Set[str] = set()
        mapped_joints: Set[JointKey] = set()
        mappings: List[MappingResult] = []

        for strategy in self.strategies:
            pending = [joint for joint in joints if joint not in mapped_joints]
            if not pending:
                break
            resolved = self._run_pass(strategy, pending, index, used_bones)
            mappings.extend(resolved)
            mapped_joints.update(result.joint_key for result in resolved)

        unmapped_joints = [joint for joint in joints if joint not in mapped_joints]
        unmapped_bones = [name for name in bone_names if name not in used_bones]

        if mappings and joints:
            overall = sum(result.confidence for result in mappings) / len(joints)
        else:
            overall = 0.0

        logger.debug(
            f"Mapped {len(mappings)}/{len(joints)} joints from {len(bone_names)} bones "
            f"(confidence {overall:.2f})"
        )

        return AutoMappingResult(
            mappings=mappings,
            unmapped_joints=unmapped_joints,
            unmapped_bones=unmapped_bones,
            overall_confidence=overall,
        )

    def _resolve_joints(self, allowed_joints: Optional[Iterable[JointKey]]) -> List[JointKey]:
        """Joints to attempt, in registry order and without duplicates.

        Entries the registry does not know go last, in the caller's order.
        """
        if allowed_joints is None:
            return list(self.registry.joints)
        requested = list(dict.fromkeys(coerce_joint(joint) for joint in allowed_joints))
        known = [joint for joint in self.registry.joints if joint in requested]
        unknown = [joint for joint in requested if joint not in self.registry]
        return known + unknown

    def _run_pass(
        self,
        strategy: MatchStrategy,
        joints: Sequence[JointKey],
        index: BoneIndex,
        used_bones: Set[str],
    ) -> List[MappingResult]:
        """Sweep all pending joints with one strategy. Claims update used_bones."""
        resolved = []
        for joint in joints:
            bone = self._find_bone(strategy, self.registry.aliases(joint), index, used_bones)
            if bone is None:
                continue

            used_bones.add(bone.original)
            resolved.append(MappingResult(
                joint_key=joint,
                bone_name=bone.original,
                confidence=strategy.confidence,
                match_pass=strategy.match_pass,
            ))
            logger.debug(f"{joint} -> {bone.original} ({strategy.match_pass}, {strategy.confidence})")
        return resolved

    @staticmethod
    def _find_bone(
        strategy: MatchStrategy,
        aliases: Sequence[AliasPattern],
        index: BoneIndex,
        used_bones: Set[str],
    ) -> Optional[PreprocessedBone]:
        for alias in aliases:
            for bone in strategy.candidates(alias, index):
                if bone.original not in used_bones:
                    return bone
        return None


def auto_map_bones(
    bone_names: Iterable[str],
    allowed_joints: Optional[Iterable[JointKey]] = None,
    registry: Optional[PatternRegistry] = None,
) -> AutoMappingResult:
    """Map bone names with the standard four passes.

    Example:
        result = auto_map_bones(["mixamorig:Hips", "mixamorig:LeftArm"])
        to_mapping_record(result)  # {torso: "mixamorig:Hips", leftShoulderPitch: ...}
    """
    return BoneAutoMapper(registry=registry).map(bone_names, allowed_joints)
