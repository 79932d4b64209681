"""Detection of scaffold nodes that are not anatomical bones."""

from typing import Iterable, List


# Scene-graph wrappers emitted by common exporters and loaders
STRUCTURAL_NAMES = frozenset({
    "scene", "auxscene", "root", "armature", "rootnode",
    "sketchfab_model", "skeleton", "rig", "metarig",
    "object", "gltf_sceneroottransform",
})


def is_structural_bone(name: str) -> bool:
    """True if name is a known scene/armature container node."""
    if not isinstance(name, str):
        return False
    return name.lower() in STRUCTURAL_NAMES


def filter_structural_bones(bone_names: Iterable[str]) -> List[str]:
    """Drop structural nodes, keeping the original order."""
    return [name for name in bone_names if not is_structural_bone(name)]
