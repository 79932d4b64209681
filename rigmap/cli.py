"""
rigmap command line - auto-map a rig's bone names onto canonical joints.

Bone names come from arguments or a file exported by a model loader:
a JSON list, a JSON object with a "bones" list, or one name per line.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

import yaml

from rigmap.core import Config, setup_logging, get_logger
from rigmap.core.joints import JOINT_PRESETS, get_preset_joints, parse_joint_list
from rigmap.mapping import (
    auto_map_bones,
    filter_structural_bones,
    format_mapping_report,
    to_mapping_record,
)


OUTPUT_FORMATS = ("table", "json", "record")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="rigmap",
        description="Map humanoid rig bone names onto canonical joints"
    )
    parser.add_argument(
        "bones",
        nargs="*",
        help="Bone names (in addition to --file)"
    )
    parser.add_argument(
        "--file", "-f",
        type=str,
        help="Bone list file: JSON list, JSON {\"bones\": [...]} or one name per line ('-' for stdin)"
    )
    parser.add_argument(
        "--preset", "-p",
        choices=sorted(JOINT_PRESETS),
        help="Only map the joints of one body part"
    )
    parser.add_argument(
        "--joints", "-j",
        type=str,
        help="Comma separated joints to map (overrides --preset)"
    )
    parser.add_argument(
        "--keep-structural",
        action="store_true",
        help="Do not drop scene/armature container nodes"
    )
    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        help="Output format (overrides config)"
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored table output"
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        help="Path to configuration file"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    return parser.parse_args(argv)


def parse_bone_list(text: str) -> List[str]:
    """Parse the contents of a bone list file.

    Raises:
        ValueError: JSON content is not a list of names
    """
    stripped = text.strip()
    if stripped.startswith("[") or stripped.startswith("{"):
        data = json.loads(stripped)
        if isinstance(data, dict):
            data = data.get("bones")
        if not isinstance(data, list) or not all(isinstance(name, str) for name in data):
            raise ValueError("Bone list JSON must be a list of strings or {\"bones\": [...]}")
        return data

    names = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        names.append(line)
    return names


def read_bone_names(args: argparse.Namespace, stdin: TextIO) -> List[str]:
    names = list(args.bones)
    if args.file == "-":
        names.extend(parse_bone_list(stdin.read()))
    elif args.file:
        names.extend(parse_bone_list(Path(args.file).read_text(encoding="utf-8")))
    return names


def load_config(config_path: Optional[str]) -> Config:
    """Load the named config file, or the default lookup when None.

    Raises:
        FileNotFoundError: config_path does not exist
        yaml.YAMLError: the file is not valid YAML
        ValueError: the file is not a mapping of sections
    """
    if config_path is None:
        return Config()
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    return Config(str(path))


def main(
    argv: Optional[Sequence[str]] = None,
    stdout: TextIO = None,
    stdin: TextIO = None,
    stderr: TextIO = None,
) -> int:
    """Main application entry point."""
    args = parse_args(argv)
    stdout = stdout or sys.stdout
    stdin = stdin or sys.stdin
    stderr = stderr or sys.stderr

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"Error: Invalid config: {e}", file=stderr)
        return 1

    log_level = "DEBUG" if args.debug else config.get("app.log_level", "INFO")
    try:
        setup_logging(
            level=log_level,
            log_file=config.get("logging.log_file"),
            log_dir=config.get("logging.log_dir", "logs"),
            stream=stderr,
        )
    except ValueError as e:
        print(f"Error: Invalid config: {e}", file=stderr)
        return 1
    logger = get_logger("cli")
    logger.debug(f"rigmap v{config.app.get('version', '0.1.0')} ({config.path or 'built-in defaults'})")

    if args.preset:
        config.set("mapping.preset", args.preset)
        logger.debug(f"Preset override: {args.preset}")

    if args.format:
        config.set("output.format", args.format)
        logger.debug(f"Format override: {args.format}")

    try:
        bone_names = read_bone_names(args, stdin)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read bone list: {e}")
        return 1

    if config.mapping.get("filter_structural", True) and not args.keep_structural:
        kept = filter_structural_bones(bone_names)
        if len(kept) != len(bone_names):
            logger.info(f"Ignoring {len(bone_names) - len(kept)} structural node(s)")
        bone_names = kept

    allowed_joints = None
    preset = config.mapping.get("preset")
    try:
        if args.joints:
            allowed_joints = parse_joint_list(args.joints)
        elif preset:
            allowed_joints = list(get_preset_joints(preset))
    except ValueError as e:
        logger.error(str(e))
        return 1

    if not bone_names:
        logger.warning("No bone names given, every joint will be unmapped")

    result = auto_map_bones(bone_names, allowed_joints)
    logger.info(
        f"Mapped {len(result.mappings)} joint(s), "
        f"{len(result.unmapped_joints)} unmapped, "
        f"overall confidence {result.overall_confidence:.2f}"
    )

    output_format = config.output.get("format", "table")
    if output_format == "json":
        print(json.dumps(result.to_dict(), indent=2), file=stdout)
    elif output_format == "record":
        record = {joint.value: bone for joint, bone in to_mapping_record(result).items()}
        print(json.dumps(record, indent=2), file=stdout)
    elif output_format == "table":
        color = config.output.get("color", True) and not args.no_color and stdout.isatty()
        print(format_mapping_report(result, color=color), file=stdout)
    else:
        logger.error(f"Unknown output format: {output_format}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
