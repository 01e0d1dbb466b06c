"""Tests for the public API: parse(), render() and the Markdown class."""

from typing import Any

import mesita
from mesita import Markdown, ParseConfig, get_parse_config, parse, render
from mesita.tokens import TokenType

TABLE = "#|\n|| a | b ||\n|#"


class TestParse:
    def test_enables_all_plugins_by_default(self) -> None:
        env: dict[str, Any] = {}
        tokens = parse(TABLE + "\n\n[*a]: Aye", env=env)

        assert tokens[0].type is TokenType.TABLE_OPEN
        assert env["terms"] == {":a": "Aye"}

    def test_no_plugins(self) -> None:
        tokens = parse(TABLE, plugins=[])
        assert tokens[0].type is TokenType.PARAGRAPH_OPEN

    def test_config_flag_enables_plugin(self) -> None:
        tokens = parse(TABLE, plugins=[], config=ParseConfig(tables_enabled=True))
        assert tokens[0].type is TokenType.TABLE_OPEN

    def test_restores_context_config(self) -> None:
        parse(TABLE, config=ParseConfig(lint_run=True))
        assert get_parse_config() == ParseConfig()


class TestRender:
    def test_quick_start(self) -> None:
        assert render(parse(TABLE)) == (
            "<table>\n<tbody>\n<tr>\n"
            "<td>\n<p>a</p>\n</td>\n"
            "<td>\n<p>b</p>\n</td>\n"
            "</tr>\n</tbody>\n</table>\n"
        )


class TestMarkdown:
    def test_call_renders(self) -> None:
        md = Markdown(plugins=["table"])
        assert md(TABLE) == render(md.parse(TABLE))

    def test_plugins_property(self) -> None:
        assert Markdown().plugins == []
        assert Markdown(plugins=["all"]).plugins == ["table", "terms"]
        assert Markdown(plugins=["terms", "table", "terms"]).plugins == ["terms", "table"]

    def test_plugins_switch_on_config_flags(self) -> None:
        config = Markdown(plugins=["table"]).config
        assert config.tables_enabled is True
        assert config.terms_enabled is False

    def test_config_flag_adds_plugin(self) -> None:
        assert Markdown(terms_enabled=True).plugins == ["terms"]

    def test_camel_case_options(self) -> None:
        md = Markdown(plugins=["table"], table_ignoreSplittersInInlineCode=True)

        assert md.config.table_ignore_splitters_in_inline_code is True
        tokens = md.parse("#|\n|| `a|b` ||\n|#")
        assert len([t for t in tokens if t.type is TokenType.TD_OPEN]) == 1

    def test_options_override_config(self) -> None:
        md = Markdown(config=ParseConfig(lint_run=True), lint_run=False)
        assert md.config.lint_run is False

    def test_explicit_option_beats_plugin_default(self) -> None:
        md = Markdown(plugins=["table"], tables_enabled=False)

        assert md.config.tables_enabled is False
        assert md.plugins == ["table"]

    def test_instances_do_not_share_rules(self) -> None:
        Markdown(plugins=["table"])
        tokens = Markdown().parse(TABLE)
        assert tokens[0].type is TokenType.PARAGRAPH_OPEN

    def test_env_is_filled(self) -> None:
        env: dict[str, Any] = {}
        Markdown(plugins=["terms"]).parse("[*x]: Ex", env=env)
        assert env == {"terms": {":x": "Ex"}}


def test_version() -> None:
    assert mesita.__version__ == "0.1.0"
