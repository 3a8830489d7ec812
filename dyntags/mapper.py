#!/usr/bin/env python3
"""Folder path <-> tag mapping across a whole rule set.

The mapper joins matching and transformation: it picks the best rule for
an input, trims the rule's entry point from the input, runs the
directional transform pipeline and prefixes the entry point of the other
side.

Example:
    >>> rule = Rule(
    ...     id="projects", name="Projects", priority=1,
    ...     folder_pattern="Projects/**", folder_entry_point="Projects",
    ...     tag_pattern="projects/**", tag_entry_point="projects",
    ...     tag_transforms=TransformConfig(case_transform="kebab-case"),
    ... )
    >>> FolderTagMapper([rule]).map_folder("Projects/My App").value
    '#projects/my-app'
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from dyntags.core.constants import PATH_SEPARATOR, TAG_PREFIX, MatchType, RuleDirection
from dyntags.core.logging import get_logger
from dyntags.rules.matcher import find_best_match, find_conflicts, match_context
from dyntags.rules.models import Rule, RuleMatch, TransformConfig
from dyntags.rules.patterns import InvalidPatternError, compile_pattern
from dyntags.transforms.emoji import normalize_unicode
from dyntags.transforms.pipeline import folder_to_tag, tag_to_folder


@dataclass
class MappingResult:
    """Outcome of mapping a folder path or a list of tags."""

    success: bool
    value: Optional[str] = None
    rule: Optional[Rule] = None
    message: str = ""
    conflicts: List[List[RuleMatch]] = field(default_factory=list)


def strip_entry_point(path: str, entry_point: Optional[str]) -> str:
    """Remove a literal entry point (and the following slash) from a path.

    The entry point must cover whole path segments: "Projects" is removed
    from "Projects/App" but not from "ProjectsArchive".
    """
    if not entry_point:
        return path
    if path == entry_point:
        return ""
    if path.startswith(entry_point + PATH_SEPARATOR):
        return path[len(entry_point) + 1:]
    return path


def join_entry_point(entry_point: Optional[str], value: str) -> str:
    """Prefix a value with an entry point, adding a slash only when needed."""
    if not entry_point:
        return value
    return f"{entry_point}{PATH_SEPARATOR}{value}" if value else entry_point


def _strip_hash(tag: str) -> str:
    return tag[len(TAG_PREFIX):] if tag.startswith(TAG_PREFIX) else tag


def folder_path_to_tag(
    folder_path: str, rule: Rule, preserve_on_error: bool = False
) -> Optional[str]:
    """Compute the tag one rule produces for a folder path.

    Args:
        folder_path: Folder path relative to the vault root
        rule: Rule whose folder pattern matched the path
        preserve_on_error: Keep the segment untouched if a transform fails

    Returns:
        Tag with a leading "#", or None when the rule yields nothing
    """
    if not rule.folder_pattern:
        return None

    try:
        match = compile_pattern(rule.folder_pattern).search(folder_path)
    except InvalidPatternError:
        return None
    if match is None:
        return None

    segment = strip_entry_point(match.group(0), rule.folder_entry_point)
    transforms = rule.tag_transforms or TransformConfig()
    transformed = folder_to_tag(segment, transforms, preserve_on_error)

    tag = join_entry_point(rule.tag_entry_point, transformed)
    if not tag:
        return None

    return tag if tag.startswith(TAG_PREFIX) else f"{TAG_PREFIX}{tag}"


def tag_to_folder_path(tag: str, rule: Rule, preserve_on_error: bool = False) -> Optional[str]:
    """Compute the folder path one rule produces for a tag.

    Args:
        tag: Tag with or without its leading "#"
        rule: Rule whose tag pattern matched the tag
        preserve_on_error: Keep the tag content untouched if a transform fails

    Returns:
        Folder path, or None when the rule yields nothing
    """
    content = strip_entry_point(_strip_hash(tag), _strip_hash(rule.tag_entry_point or ""))
    transforms = rule.folder_transforms or TransformConfig()
    transformed = tag_to_folder(content, transforms, preserve_on_error)

    return join_entry_point(rule.folder_entry_point, transformed) or None


class FolderTagMapper:
    """Map folder paths to tags and tags to folder paths for a rule set."""

    def __init__(
        self,
        rules: Iterable[Rule],
        include_disabled: bool = False,
        preserve_on_error: bool = False,
    ):
        """Initialize mapper.

        Args:
            rules: Rules in configured order
            include_disabled: Let disabled rules take part in matching
            preserve_on_error: Map the untouched input when a transform fails,
                instead of the partially transformed text
        """
        self._rules = tuple(rules)
        self._include_disabled = include_disabled
        self._preserve_on_error = preserve_on_error
        self._logger = get_logger()

    @property
    def rules(self) -> List[Rule]:
        return list(self._rules)

    def map_folder(self, folder_path: str) -> MappingResult:
        """Find the tag for a folder path.

        Every message logged while matching carries the normalized path.

        Args:
            folder_path: Folder path relative to the vault root

        Returns:
            MappingResult with the tag as value
        """
        path = normalize_unicode(folder_path).strip(PATH_SEPARATOR)
        with self._logger.add_context(input=path):
            return self._map_folder(path)

    def _map_folder(self, path: str) -> MappingResult:
        context = match_context(
            path, MatchType.FOLDER, RuleDirection.FOLDER_TO_TAG, self._include_disabled
        )

        best = find_best_match(path, self._rules, context)
        if best is None:
            self._logger.debug("No rule matches folder")
            return MappingResult(success=False, message=f"No rule matches folder '{path}'")

        conflicts = find_conflicts(path, self._rules, context)
        tag = folder_path_to_tag(path, best.rule, self._preserve_on_error)
        if tag is None:
            return MappingResult(
                success=False,
                rule=best.rule,
                message=f"Rule '{best.rule.name}' produced no tag for '{path}'",
                conflicts=conflicts,
            )

        self._logger.debug("Mapped folder to tag", tag=tag, rule=best.rule.id)
        return MappingResult(
            success=True,
            value=tag,
            rule=best.rule,
            message=f"Rule '{best.rule.name}' maps '{path}' to '{tag}'",
            conflicts=conflicts,
        )

    def map_tags(self, tags: Iterable[str]) -> MappingResult:
        """Find the folder for a note's tags.

        Tags are tried in order; the first one that yields a folder wins.

        Args:
            tags: Tags with or without their leading "#"

        Returns:
            MappingResult with the folder path as value
        """
        tried = []
        for raw_tag in tags:
            tag = _strip_hash(normalize_unicode(raw_tag).strip())
            if not tag:
                continue
            tried.append(tag)

            with self._logger.add_context(input=tag):
                result = self._map_tag(tag)
            if result is not None:
                return result

        if not tried:
            return MappingResult(success=False, message="No tags to map")
        return MappingResult(
            success=False,
            message=f"No rule maps tag(s): {', '.join('#' + t for t in tried)}",
        )

    def _map_tag(self, tag: str) -> Optional[MappingResult]:
        context = match_context(
            tag, MatchType.TAG, RuleDirection.TAG_TO_FOLDER, self._include_disabled
        )
        best = find_best_match(tag, self._rules, context)
        if best is None:
            self._logger.debug("No rule matches tag")
            return None

        folder = tag_to_folder_path(tag, best.rule, self._preserve_on_error)
        if folder is None:
            return None

        self._logger.debug("Mapped tag to folder", folder=folder, rule=best.rule.id)
        return MappingResult(
            success=True,
            value=folder,
            rule=best.rule,
            message=f"Rule '{best.rule.name}' maps '#{tag}' to '{folder}'",
            conflicts=find_conflicts(tag, self._rules, context),
        )
