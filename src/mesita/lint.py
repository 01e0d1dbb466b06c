"""Lint runner collecting the diagnostics block rules leave in the stream.

Parsing with ``lint_run`` enabled makes rules report lint-only problems too
(duplicate term definitions, terms used inside definitions). Each hidden
``LINT`` token becomes a ``LintIssue``, formatted like

    docs/page.md: 12: YFM004/table-not-closed Table not closed

and logged through the ``mesita.lint`` logger at the level configured for its
rule (warning by default).

Example:
    >>> issues = lint("#|\\n|| a ||\\n", path="page.md")
    >>> issues[0].message
    'page.md: 1: YFM004/table-not-closed Table not closed'
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

from mesita.diagnostics import LINT_RULES, LintRule, lint_codes
from mesita.utils.logger import get_logger

if TYPE_CHECKING:
    from mesita.config import ParseConfig
    from mesita.tokens import Token

logger = get_logger(__name__)


class LogLevel(Enum):
    """How a lint rule's findings are reported."""

    ERROR = "error"
    WARN = "warn"
    DISABLED = "disabled"


DEFAULT_LOG_LEVEL = LogLevel.WARN


@dataclass(frozen=True, slots=True)
class LintIssue:
    """One diagnostic found in a document.

    Attributes:
        code: Rule code (``YFM004``)
        name: Rule name (``table-not-closed``)
        description: Human readable summary
        lines: 0-indexed ``[start, end]`` line range the rule reported
        level: Level the issue is logged at
        message: Formatted, 1-indexed message

    """

    code: str
    name: str
    description: str
    lines: tuple[int, int] | None
    level: LogLevel
    message: str


def _resolve_level(
    rule: LintRule, log_levels: Mapping[str, LogLevel | str] | None
) -> LogLevel:
    """Level configured for a rule, looked up by code then by name."""
    if not log_levels:
        return DEFAULT_LOG_LEVEL
    for key in (rule.code, rule.name):
        if key in log_levels:
            return LogLevel(log_levels[key])
    return DEFAULT_LOG_LEVEL


def format_issue(
    path: str,
    rule: LintRule,
    line: int | None,
    source_map: Mapping[str, str] | None = None,
) -> str:
    """Format a diagnostic as ``"{path}: {line}: {code}/{name} {description}"``.

    ``line`` is 1-indexed; ``source_map`` maps it back to the line of a
    pre-processed source.
    """
    shown = "?" if line is None else str(line)
    if source_map and shown in source_map:
        shown = str(source_map[shown])
    return f"{path}: {shown}: {rule.code}/{rule.name} {rule.description}"


def collect_issues(
    tokens: Iterable[Token],
    *,
    path: str = "input",
    log_levels: Mapping[str, LogLevel | str] | None = None,
    source_map: Mapping[str, str] | None = None,
) -> list[LintIssue]:
    """Turn the lint markers of a token stream into issues, in stream order."""
    issues: list[LintIssue] = []
    for token in tokens:
        for code in lint_codes(token):
            rule = LINT_RULES.get(code)
            if rule is None:
                logger.debug("ignoring unknown lint code %s", code)
                continue
            lines = (token.map[0], token.map[1]) if token.map else None
            line = lines[0] + 1 if lines else None
            issues.append(
                LintIssue(
                    code=rule.code,
                    name=rule.name,
                    description=rule.description,
                    lines=lines,
                    level=_resolve_level(rule, log_levels),
                    message=format_issue(path, rule, line, source_map),
                )
            )
    return issues


def report(issues: Iterable[LintIssue]) -> None:
    """Log each issue at its level; disabled issues are dropped."""
    for issue in issues:
        match issue.level:
            case LogLevel.ERROR:
                logger.error(issue.message)
            case LogLevel.WARN:
                logger.warning(issue.message)
            case LogLevel.DISABLED:
                pass


def lint(
    source: str,
    *,
    path: str = "input",
    log_levels: Mapping[str, LogLevel | str] | None = None,
    plugins: list[str] | None = None,
    source_map: Mapping[str, str] | None = None,
    config: ParseConfig | None = None,
    seen: set[str] | None = None,
) -> list[LintIssue]:
    """Lint a Markdown document.

    Args:
        source: Markdown source text
        path: Name used in messages
        log_levels: Rule code or name -> level; unlisted rules warn
        plugins: Plugins to parse with (all built-in plugins if None)
        source_map: 1-indexed line -> original line, for messages
        config: Base parse configuration; ``lint_run`` is forced on
        seen: Paths linted so far. A path already in ``seen`` is skipped
            (nothing is logged, no issues are returned); otherwise it is added

    Returns:
        Issues that are not disabled, in document order
    """
    from mesita import Markdown
    from mesita.config import ParseConfig

    if seen is not None:
        if path in seen:
            logger.debug("%s already linted, skipping", path)
            return []
        seen.add(path)

    base = config if config is not None else ParseConfig()
    md = Markdown(
        plugins=plugins if plugins is not None else ["all"],
        config=replace(base, lint_run=True),
    )
    tokens = md.parse(source)

    issues = collect_issues(tokens, path=path, log_levels=log_levels, source_map=source_map)
    report(issues)
    return [issue for issue in issues if issue.level is not LogLevel.DISABLED]
