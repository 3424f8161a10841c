"""Grouping of multi-part titles into stacks.

Candidates are filtered, sorted ordinally by id and scanned left to right.
For every unconsumed anchor the configured expressions are tried in order;
the first one that yields a group of two or more members wins. Scanning one
anchor is an explicit state machine:

    TRY_ANCHOR          match the current expression against the anchor
    EXTEND_GROUP        compare the anchor against the next candidate
    RETRY_WITH_OFFSET   the volume token was a false positive; rematch later in the name
    ABANDON_EXPRESSION  stop extending, move on to the next expression
    ACCEPT_GROUP        emit the provisional stack

``classify_pair`` is the transition function that decides how an anchor and
a candidate relate once both matched the same expression.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Optional

from .classifier import CandidateClassifier, ExtensionClassifier, is_stack_candidate
from .config import NamingOptions
from .logging_utils import render_fields_block
from .models import FieldMatch, FileMetadata, FileStack, StackResult
from .regex_provider import FieldMatcher, RegexFieldMatcher, get_match_input

LOGGER = logging.getLogger(__name__)


class ScanState(enum.Enum):
    TRY_ANCHOR = "try-anchor"
    EXTEND_GROUP = "extend-group"
    RETRY_WITH_OFFSET = "retry-with-offset"
    ABANDON_EXPRESSION = "abandon-expression"
    ACCEPT_GROUP = "accept-group"


class PairOutcome(enum.Enum):
    STACK_MEMBER = "stack-member"
    TITLE_MISMATCH = "title-mismatch"
    SEQUEL = "sequel"
    FALSE_POSITIVE = "false-positive"
    EXTENSION_MISMATCH = "extension-mismatch"


OUTCOME_TRANSITIONS: dict[PairOutcome, ScanState] = {
    PairOutcome.STACK_MEMBER: ScanState.EXTEND_GROUP,
    PairOutcome.TITLE_MISMATCH: ScanState.ABANDON_EXPRESSION,
    PairOutcome.SEQUEL: ScanState.ABANDON_EXPRESSION,
    PairOutcome.FALSE_POSITIVE: ScanState.RETRY_WITH_OFFSET,
    PairOutcome.EXTENSION_MISMATCH: ScanState.ABANDON_EXPRESSION,
}


def _same(left: str, right: str) -> bool:
    return left.casefold() == right.casefold()


def classify_pair(first: FieldMatch, second: FieldMatch) -> PairOutcome:
    """Decide how two matches of the same expression relate to each other."""
    if not _same(first.title, second.title):
        return PairOutcome.TITLE_MISMATCH
    if not _same(first.volume, second.volume):
        if _same(first.ignore, second.ignore) and _same(first.extension, second.extension):
            return PairOutcome.STACK_MEMBER
        return PairOutcome.SEQUEL
    if not _same(first.ignore, second.ignore):
        return PairOutcome.FALSE_POSITIVE
    return PairOutcome.EXTENSION_MISMATCH


class StackAggregator:
    """Collects accepted stacks in discovery order."""

    def __init__(self) -> None:
        self._stacks: list[FileStack] = []
        self._unstacked: list[str] = []
        self._skipped: list[str] = []

    def add(self, stack: FileStack) -> None:
        self._stacks.append(stack)

    def mark_unstacked(self, path: str) -> None:
        self._unstacked.append(path)

    def mark_skipped(self, path: str) -> None:
        self._skipped.append(path)

    def result(self) -> StackResult:
        return StackResult(
            stacks=list(self._stacks),
            unstacked=list(self._unstacked),
            skipped=list(self._skipped),
        )


@dataclass
class _AnchorScan:
    """Mutable scan state for a single anchor."""

    anchor: int
    expression_index: int = 0
    offset: int = 0
    position: int = 0
    first: Optional[FieldMatch] = None
    stack: FileStack = field(default_factory=FileStack)
    members: list[int] = field(default_factory=list)


class StackResolver:
    def __init__(
        self,
        options: Optional[NamingOptions] = None,
        *,
        matcher: Optional[FieldMatcher] = None,
        classifier: Optional[CandidateClassifier] = None,
    ) -> None:
        self.options = options or NamingOptions()
        self.matcher = matcher or RegexFieldMatcher()
        self.classifier = classifier or ExtensionClassifier(self.options)

    def resolve_directories(
        self,
        paths: Iterable[str],
        *,
        expressions: Optional[Sequence[str]] = None,
    ) -> StackResult:
        return self.resolve((FileMetadata(id=path, is_folder=True) for path in paths), expressions=expressions)

    def resolve_files(
        self,
        paths: Iterable[str],
        *,
        expressions: Optional[Sequence[str]] = None,
    ) -> StackResult:
        return self.resolve((FileMetadata(id=path, is_folder=False) for path in paths), expressions=expressions)

    def resolve(
        self,
        files: Iterable[FileMetadata],
        *,
        expressions: Optional[Sequence[str]] = None,
    ) -> StackResult:
        """Group ``files`` into stacks.

        Args:
            files: Candidate entries in any order.
            expressions: Stacking expressions in priority order. Defaults to
                ``options.video_file_stacking_expressions``.

        Returns:
            StackResult with stacks in discovery order, the candidates left
            unstacked and the entries rejected by the classifier.
        """
        if expressions is None:
            expressions = self.options.video_file_stacking_expressions
        expressions = list(expressions)

        aggregator = StackAggregator()
        entries: list[FileMetadata] = []
        for entry in files:
            if is_stack_candidate(entry, self.classifier):
                entries.append(entry)
            else:
                aggregator.mark_skipped(entry.id)
        entries.sort(key=lambda entry: entry.id)

        texts = [get_match_input(entry, self.options.folder_match_extension) for entry in entries]
        consumed: set[int] = set()

        index = 0
        while index < len(entries):
            if index in consumed:
                index += 1
                continue
            scan = self._scan_anchor(entries, texts, index, expressions, consumed)
            if scan is None:
                index += 1
                continue
            aggregator.add(scan.stack)
            consumed.update(scan.members)
            LOGGER.debug(
                render_fields_block(
                    "Stack Accepted",
                    {
                        "Name": scan.stack.name,
                        "Expression": scan.stack.expression,
                        "Folder": scan.stack.is_folder_stack,
                        "Members": scan.stack.files,
                    },
                    pad_top=True,
                )
            )
            index += len(scan.members)

        for position, entry in enumerate(entries):
            if position not in consumed:
                aggregator.mark_unstacked(entry.id)

        result = aggregator.result()
        LOGGER.info(
            "Resolved %d stack(s) from %d candidate(s); %d unstacked, %d skipped",
            len(result.stacks),
            len(entries),
            len(result.unstacked),
            len(result.skipped),
        )
        return result

    def _scan_anchor(
        self,
        entries: Sequence[FileMetadata],
        texts: Sequence[str],
        anchor: int,
        expressions: Sequence[str],
        consumed: set[int],
    ) -> Optional[_AnchorScan]:
        """Run the per-anchor state machine; returns the scan when a stack was accepted."""
        scan = _AnchorScan(anchor=anchor)
        anchor_entry = entries[anchor]
        state = ScanState.TRY_ANCHOR

        while True:
            if state is ScanState.TRY_ANCHOR:
                if scan.expression_index >= len(expressions):
                    return None
                expression = expressions[scan.expression_index]
                scan.stack = FileStack(expression=expression)
                scan.members = []
                scan.first = self.matcher.match(expression, texts[anchor], scan.offset)
                if scan.first is None:
                    state = ScanState.ABANDON_EXPRESSION
                    continue
                scan.position = anchor + 1
                state = ScanState.EXTEND_GROUP

            elif state is ScanState.EXTEND_GROUP:
                if scan.position >= len(entries):
                    # Ran off the end without a mismatch; later expressions are not tried.
                    return scan if len(scan.members) > 1 else None
                candidate = entries[scan.position]
                if candidate.is_folder != anchor_entry.is_folder or scan.position in consumed:
                    scan.position += 1
                    continue
                second = self.matcher.match(scan.stack.expression, texts[scan.position], scan.offset)
                if second is None:
                    state = ScanState.ABANDON_EXPRESSION
                    continue
                outcome = classify_pair(scan.first, second)
                if outcome is PairOutcome.STACK_MEMBER:
                    if not scan.members:
                        scan.stack.name = scan.first.title + scan.first.ignore
                        scan.stack.is_folder_stack = anchor_entry.is_folder
                        scan.stack.files.append(anchor_entry.id)
                        scan.members.append(anchor)
                    scan.stack.files.append(candidate.id)
                    scan.members.append(scan.position)
                    scan.position += 1
                    continue
                LOGGER.debug(
                    "%s vs %s: %s (expression %d, offset %d)",
                    anchor_entry.id,
                    candidate.id,
                    outcome.value,
                    scan.expression_index,
                    scan.offset,
                )
                state = OUTCOME_TRANSITIONS[outcome]

            elif state is ScanState.RETRY_WITH_OFFSET:
                if len(scan.members) > 1:
                    state = ScanState.ACCEPT_GROUP
                    continue
                retry_offset = scan.first.ignore_index
                if retry_offset <= scan.offset:
                    # No progress possible within this name.
                    state = ScanState.ABANDON_EXPRESSION
                    continue
                LOGGER.debug(
                    render_fields_block(
                        "False Positive Volume",
                        {
                            "Anchor": anchor_entry.id,
                            "Volume": scan.first.volume,
                            "Retry Offset": retry_offset,
                        },
                        pad_top=True,
                    )
                )
                scan.offset = retry_offset
                state = ScanState.TRY_ANCHOR

            elif state is ScanState.ABANDON_EXPRESSION:
                if len(scan.members) > 1:
                    state = ScanState.ACCEPT_GROUP
                    continue
                scan.offset = 0
                scan.expression_index += 1
                state = ScanState.TRY_ANCHOR

            elif state is ScanState.ACCEPT_GROUP:
                return scan
