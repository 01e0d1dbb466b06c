"""Tests for the lint runner."""

import logging

import pytest

from mesita import Markdown, lint
from mesita.lint import LintIssue, LogLevel, collect_issues, format_issue
from mesita.diagnostics import TABLE_NOT_CLOSED
from mesita.tokens import Token, TokenType


class TestLint:
    def test_unclosed_table(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="mesita"):
            issues = lint("#|\n|| a ||", path="doc.md")

        assert issues == [
            LintIssue(
                code="YFM004",
                name="table-not-closed",
                description="Table not closed",
                lines=(0, 2),
                level=LogLevel.WARN,
                message="doc.md: 1: YFM004/table-not-closed Table not closed",
            )
        ]
        assert [(r.name, r.levelno, r.getMessage()) for r in caplog.records] == [
            ("mesita.lint", logging.WARNING, issues[0].message)
        ]

    def test_clean_document(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="mesita"):
            assert lint("#|\n|| a ||\n|#\n\n[*a]: x") == []
        assert caplog.records == []

    def test_error_level(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="mesita"):
            issues = lint("#|", log_levels={"YFM004": "error"})

        assert issues[0].level is LogLevel.ERROR
        assert caplog.records[0].levelno == logging.ERROR

    def test_disabled_by_rule_name(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="mesita"):
            issues = lint("#|", log_levels={"table-not-closed": LogLevel.DISABLED})

        assert issues == []
        assert caplog.records == []

    def test_source_map(self) -> None:
        issues = lint("#|", path="doc.md", source_map={"1": "10"})
        assert issues[0].message == "doc.md: 10: YFM004/table-not-closed Table not closed"

    def test_duplicate_terms(self) -> None:
        issues = lint("[*a]: x\n\n[*a]: y")

        assert [issue.code for issue in issues] == ["YFM006"]
        assert issues[0].message == (
            "input: 3: YFM006/term-definition-duplicated Term definition duplicated"
        )

    def test_term_inside_definition(self) -> None:
        issues = lint("[*a]: see [b](*b)")
        assert [issue.name for issue in issues] == ["term-inside-definition-not-allowed"]

    def test_issues_in_document_order(self) -> None:
        issues = lint("[*a]: x\n\n[*a]: y\n\n#|\n|| open ||")
        assert [issue.code for issue in issues] == ["YFM006", "YFM004"]

    def test_plugins_limit_checks(self) -> None:
        assert lint("[*a]: x\n\n[*a]: y", plugins=["table"]) == []


class TestLintOncePerPath:
    def test_repeated_path_is_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        seen: set[str] = set()
        with caplog.at_level(logging.WARNING, logger="mesita"):
            first = lint("#|", path="doc.md", seen=seen)
            second = lint("#|", path="doc.md", seen=seen)

        assert [issue.code for issue in first] == ["YFM004"]
        assert second == []
        assert len(caplog.records) == 1
        assert seen == {"doc.md"}

    def test_other_paths_are_linted(self) -> None:
        seen: set[str] = {"a.md"}

        assert [issue.code for issue in lint("#|", path="b.md", seen=seen)] == ["YFM004"]
        assert seen == {"a.md", "b.md"}

    def test_without_seen_every_call_lints(self) -> None:
        assert lint("#|", path="doc.md") == lint("#|", path="doc.md")
        assert len(lint("#|", path="doc.md")) == 1

    def test_markdown_lint_forwards_seen(self) -> None:
        md = Markdown(plugins=["table"])
        seen: set[str] = set()

        assert len(md.lint("#|", seen=seen)) == 1
        assert md.lint("#|", seen=seen) == []


class TestMarkdownLint:
    def test_uses_instance_plugins(self) -> None:
        md = Markdown(plugins=["terms"])

        assert md.lint("#|\n|| a ||") == []
        assert [issue.code for issue in md.lint("[*a]: x\n\n[*a]: y")] == ["YFM006"]

    def test_lint_does_not_change_parse(self) -> None:
        md = Markdown(plugins=["terms"])
        md.lint("[*a]: x\n\n[*a]: y")

        assert md.config.lint_run is False
        tokens = md.parse("[*a]: x\n\n[*a]: y")
        assert not [token for token in tokens if token.type is TokenType.LINT]


class TestHelpers:
    def test_format_issue_without_line(self) -> None:
        assert format_issue("f.md", TABLE_NOT_CLOSED, None) == (
            "f.md: ?: YFM004/table-not-closed Table not closed"
        )

    def test_unknown_codes_are_ignored(self) -> None:
        token = Token(TokenType.LINT, "", 0, hidden=True, map=[0, 1])
        token.attr_set("YFM999", "true")

        assert collect_issues([token]) == []

    def test_ordinary_tokens_are_ignored(self) -> None:
        token = Token(TokenType.TD_OPEN, "td", 1)
        token.attr_set("YFM004", "true")

        assert collect_issues([token]) == []
