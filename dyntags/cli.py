#!/usr/bin/env python3
"""Command-line interface for dyntags.

This module provides the CLI for trying out and checking a rule set:
- Argument parsing and validation
- Settings file loading
- Folder -> tag and tag -> folder mapping
- Rule validation and match inspection
- Reversibility reports

Example:
    >>> from dyntags.cli import parse_arguments
    >>> args = parse_arguments(['-c', 'dyntags.yaml', 'folder-to-tag', 'Projects/Alpha'])
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from dyntags.core.config import ConfigError, ConfigManager, ConfigSource, CONFIG_SCHEMA
from dyntags.core.constants import DYNTAGS_VERSION, ConfigKey, MatchType, RuleDirection
from dyntags.core.logging import Logger, set_global_logger
from dyntags.mapper import FolderTagMapper
from dyntags.rules.matcher import (
    find_best_match,
    find_conflicts,
    find_matching_rules,
    match_context,
    validate_rule,
)
from dyntags.rules.models import RuleMatch
from dyntags.rules.ruleset import RuleSet, load_rule_set, rule_set_from_dict
from dyntags.transforms.pipeline import is_transform_reversible

# Version information
VERSION = DYNTAGS_VERSION
DESCRIPTION = "dyntags - Rule-based folder path and tag mapping"

# Settings file picked up from the working directory when -c is not given
DEFAULT_SETTINGS_FILE = "dyntags.yaml"

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NO_MAPPING = 2
EXIT_INTERRUPTED = 130


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    def __init__(self, message: str, exit_code: int = EXIT_ERROR):
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)


def parse_arguments(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace

    Raises:
        SystemExit: On invalid arguments or --help/--version
    """
    parser = argparse.ArgumentParser(
        prog="dyntags",
        description=DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Which tag does a folder map to?
  dyntags -c dyntags.yaml folder-to-tag "Projects/📁 01 - My App"

  # Which folder do a note's tags map to?
  dyntags -c dyntags.yaml tag-to-folder "#projects/my-app" "#inbox"

  # Check every rule
  dyntags -c dyntags.yaml validate

  # Show all matching rules and same-priority conflicts
  dyntags -c dyntags.yaml match --type folder "Projects/Test" --all
        """,
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {VERSION}",
    )

    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        type=str,
        help=f"Settings file (YAML or JSON, default: ./{DEFAULT_SETTINGS_FILE} if present)",
    )

    # Logging options
    log_group = parser.add_argument_group("logging options")

    log_group.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    log_group.add_argument(
        "--log-file",
        metavar="FILE",
        type=str,
        help="Also write log output to FILE",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    folder_parser = subparsers.add_parser("folder-to-tag", help="Map a folder path to a tag")
    folder_parser.add_argument("path", help="Folder path relative to the vault root")

    tag_parser = subparsers.add_parser("tag-to-folder", help="Map tags to a folder path")
    tag_parser.add_argument("tags", nargs="+", help="Tags, tried in order")

    subparsers.add_parser("validate", help="Validate every rule in the settings file")

    match_parser = subparsers.add_parser("match", help="Show which rules match an input")
    match_parser.add_argument(
        "--type",
        dest="match_type",
        choices=[m.value for m in MatchType],
        default=MatchType.FOLDER.value,
        help="Match against folder or tag patterns (default: folder)",
    )
    match_parser.add_argument(
        "--all",
        action="store_true",
        help="List every matching rule and same-priority conflicts",
    )
    match_parser.add_argument("input", help="Folder path or tag")

    subparsers.add_parser("reversible", help="Report which rule transforms can be undone")

    parsed = parser.parse_args(args)

    _validate_arguments(parsed)

    return parsed


def _validate_arguments(args: argparse.Namespace) -> None:
    """
    Validate parsed arguments.

    Raises:
        CLIError: If validation fails
    """
    if args.config:
        config_path = Path(args.config)

        if not config_path.exists():
            raise CLIError(f"Settings file does not exist: {args.config}")

        if not config_path.is_file():
            raise CLIError(f"Settings path is not a file: {args.config}")


def resolve_settings_file(args: argparse.Namespace) -> Optional[str]:
    """Return the settings file to use, or None to run without rules."""
    if args.config:
        return args.config
    if Path(DEFAULT_SETTINGS_FILE).is_file():
        return DEFAULT_SETTINGS_FILE
    return None


def load_settings(settings_file: Optional[str], args: argparse.Namespace) -> ConfigManager:
    """
    Build the layered configuration for this run.

    Raises:
        CLIError: If the settings file cannot be loaded or has bad types
    """
    try:
        config = ConfigManager(settings_file)
        if args.debug:
            config.set("logging.level", "DEBUG", ConfigSource.CLI_ARGS)
        if args.log_file:
            config.set("logging.file", args.log_file, ConfigSource.CLI_ARGS)
        config.validate_schema(CONFIG_SCHEMA)
    except ConfigError as e:
        raise CLIError(e.message)

    return config


def load_rules(settings_file: Optional[str]) -> RuleSet:
    """
    Load the rule set from the settings file.

    Raises:
        CLIError: If the file holds malformed rules
    """
    if settings_file is None:
        return rule_set_from_dict({})

    try:
        return load_rule_set(settings_file)
    except ConfigError as e:
        raise CLIError(e.message)


def setup_logging(config: ConfigManager, rule_set: RuleSet) -> Logger:
    """
    Setup logging based on configuration.

    The host option debugMode also switches on debug output.

    Returns:
        Configured logger instance
    """
    log_level = config.get(f"{ConfigKey.LOGGING}.{ConfigKey.LOG_LEVEL}", "WARNING")
    if rule_set.options.get("debugMode"):
        log_level = "DEBUG"

    try:
        logger = Logger("dyntags", level=log_level)
    except KeyError:
        raise CLIError(f"Invalid log level: {log_level}")

    log_file = config.get(f"{ConfigKey.LOGGING}.{ConfigKey.LOG_FILE}")
    if log_file:
        logger.add_handler(logger.create_file_handler(log_file))

    set_global_logger(logger)
    return logger


def _print_conflicts(conflicts: List[List[RuleMatch]]) -> None:
    for group in conflicts:
        ids = ", ".join(m.rule.id for m in group)
        print(
            f"Warning: rules share priority {group[0].rule.priority}: {ids}",
            file=sys.stderr,
        )


def _format_match(match: RuleMatch) -> str:
    return (
        f"{match.rule.id}\tpriority={match.rule.priority}\t"
        f"confidence={match.confidence:.3f}\tpattern={match.matched_pattern}"
    )


def build_mapper(rule_set: RuleSet, config: ConfigManager) -> FolderTagMapper:
    """Create a mapper honouring the matching and transforms settings."""
    include_disabled = config.get(f"{ConfigKey.MATCHING}.{ConfigKey.INCLUDE_DISABLED}", False)
    preserve_on_error = config.get(f"{ConfigKey.TRANSFORMS}.{ConfigKey.PRESERVE_ON_ERROR}", False)
    return FolderTagMapper(rule_set.rules, include_disabled, preserve_on_error)


def cmd_folder_to_tag(args: argparse.Namespace, rule_set: RuleSet, config: ConfigManager) -> int:
    """Print the tag for a folder path."""
    mapper = build_mapper(rule_set, config)
    result = mapper.map_folder(args.path)

    _print_conflicts(result.conflicts)
    if not result.success:
        print(result.message, file=sys.stderr)
        return EXIT_NO_MAPPING

    print(result.value)
    return EXIT_OK


def cmd_tag_to_folder(args: argparse.Namespace, rule_set: RuleSet, config: ConfigManager) -> int:
    """Print the folder path for a list of tags."""
    mapper = build_mapper(rule_set, config)
    result = mapper.map_tags(args.tags)

    _print_conflicts(result.conflicts)
    if not result.success:
        print(result.message, file=sys.stderr)
        return EXIT_NO_MAPPING

    print(result.value)
    return EXIT_OK


def cmd_validate(args: argparse.Namespace, rule_set: RuleSet, config: ConfigManager) -> int:
    """Validate every rule; exit 1 if any is invalid."""
    invalid = 0
    for rule in rule_set.rules:
        result = validate_rule(rule)
        if result.valid:
            print(f"OK\t{rule.id}")
            continue

        invalid += 1
        for error in result.errors:
            print(f"INVALID\t{rule.id}\t{error}")

    print(f"{len(rule_set)} rule(s), {invalid} invalid")
    return EXIT_ERROR if invalid else EXIT_OK


def cmd_match(args: argparse.Namespace, rule_set: RuleSet, config: ConfigManager) -> int:
    """Show the best match, or every match and the conflicts."""
    match_type = MatchType(args.match_type)
    text = args.input
    if match_type == MatchType.TAG:
        text = text.lstrip("#")

    include_disabled = config.get(f"{ConfigKey.MATCHING}.{ConfigKey.INCLUDE_DISABLED}", False)
    context = match_context(text, match_type, include_disabled=include_disabled)

    if args.all:
        matches = find_matching_rules(text, rule_set.rules, context)
        for match in matches:
            print(_format_match(match))
        _print_conflicts(find_conflicts(text, rule_set.rules, context))
        return EXIT_OK if matches else EXIT_NO_MAPPING

    best = find_best_match(text, rule_set.rules, context)
    if best is None:
        print(f"No rule matches '{text}'", file=sys.stderr)
        return EXIT_NO_MAPPING

    print(_format_match(best))
    return EXIT_OK


def cmd_reversible(args: argparse.Namespace, rule_set: RuleSet, config: ConfigManager) -> int:
    """Report reversibility of each rule's transforms."""
    for rule in rule_set.rules:
        for label, transforms in (
            (RuleDirection.FOLDER_TO_TAG.value, rule.tag_transforms),
            (RuleDirection.TAG_TO_FOLDER.value, rule.folder_transforms),
        ):
            report = is_transform_reversible(transforms)
            status = "reversible" if report.reversible else "not reversible"
            print(f"{rule.id}\t{label}\t{status}")
            for warning in report.warnings:
                print(f"  - {warning}")

    return EXIT_OK


COMMANDS = {
    "folder-to-tag": cmd_folder_to_tag,
    "tag-to-folder": cmd_tag_to_folder,
    "validate": cmd_validate,
    "match": cmd_match,
    "reversible": cmd_reversible,
}


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Argument list (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    try:
        args = parse_arguments(argv)

        settings_file = resolve_settings_file(args)
        config = load_settings(settings_file, args)
        rule_set = load_rules(settings_file)

        logger = setup_logging(config, rule_set)
        logger.debug("Loaded rules", count=len(rule_set), settings=settings_file)

        return COMMANDS[args.command](args, rule_set, config)

    except CLIError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return e.exit_code

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
