"""Tests for the extended table rule and tree builder.

Covers the emitted token stream: structure, source maps, attributes, cell
class extraction, padding of ragged rows, spans and nesting.
"""

from mesita import Markdown, render
from mesita.diagnostics import lint_codes
from mesita.tokens import Token, TokenType


def parse_tables(source: str, **options: bool) -> list[Token]:
    return Markdown(plugins=["table"], **options).parse(source)


def of_type(tokens: list[Token], token_type: TokenType) -> list[Token]:
    return [token for token in tokens if token.type is token_type]


def inline_contents(tokens: list[Token]) -> list[str]:
    return [token.content for token in of_type(tokens, TokenType.INLINE)]


class TestTableStructure:
    """Basic table/tbody/tr/td streams."""

    def test_two_cells(self) -> None:
        tokens = parse_tables("#|\n||  a | b ||\n|#")

        assert [token.type for token in tokens] == [
            TokenType.TABLE_OPEN,
            TokenType.TBODY_OPEN,
            TokenType.TR_OPEN,
            TokenType.TD_OPEN,
            TokenType.PARAGRAPH_OPEN,
            TokenType.INLINE,
            TokenType.PARAGRAPH_CLOSE,
            TokenType.TD_CLOSE,
            TokenType.TD_OPEN,
            TokenType.PARAGRAPH_OPEN,
            TokenType.INLINE,
            TokenType.PARAGRAPH_CLOSE,
            TokenType.TD_CLOSE,
            TokenType.TR_CLOSE,
            TokenType.TBODY_CLOSE,
            TokenType.TABLE_CLOSE,
        ]
        assert inline_contents(tokens) == ["a", "b"]
        assert all(not td.attrs for td in of_type(tokens, TokenType.TD_OPEN))

    def test_levels(self) -> None:
        tokens = parse_tables("#|\n|| a ||\n|#")

        assert [token.level for token in tokens] == [0, 1, 2, 3, 4, 5, 4, 3, 2, 1, 0]

    def test_source_maps(self) -> None:
        tokens = parse_tables("#|\n|| a\n| b ||\n|| c ||\n|#")

        table_open = tokens[0]
        assert table_open.map == [0, 6]
        assert of_type(tokens, TokenType.TBODY_OPEN)[0].map == [1, 5]
        assert [tr.map for tr in of_type(tokens, TokenType.TR_OPEN)] == [[1, 2], [3, 3]]
        assert [td.map for td in of_type(tokens, TokenType.TD_OPEN)] == [
            [1, 2],
            [2, 2],
            [3, 3],
        ]
        assert [td.map for td in of_type(tokens, TokenType.TD_CLOSE)] == [
            [2, 3],
            [2, 3],
            [3, 4],
        ]
        assert tokens[-1].map == [6, 7]

    def test_table_after_paragraph_text(self) -> None:
        tokens = parse_tables("intro\n\n#|\n|| a ||\n|#\n\nafter")

        assert tokens[0].type is TokenType.PARAGRAPH_OPEN
        table_open = of_type(tokens, TokenType.TABLE_OPEN)[0]
        assert table_open.map == [2, 6]
        assert inline_contents(tokens) == ["intro", "a", "after"]

    def test_line_after_closing_fence_is_consumed(self) -> None:
        tokens = parse_tables("#|\n|| a ||\n|#\nswallowed\n\nkept")

        assert inline_contents(tokens) == ["a", "kept"]

    def test_table_does_not_interrupt_paragraph(self) -> None:
        tokens = parse_tables("text\n#|\n|| a ||\n|#")

        assert not of_type(tokens, TokenType.TABLE_OPEN)
        assert inline_contents(tokens) == ["text\n#|\n|| a ||\n|#"]

    def test_without_plugin_tables_are_paragraphs(self) -> None:
        tokens = Markdown().parse("#|\n|| a ||\n|#")

        assert not of_type(tokens, TokenType.TABLE_OPEN)

    def test_cell_with_block_content(self) -> None:
        tokens = parse_tables("#|\n||\n# Title\n\n```py\nx | y\n```\n||\n|#")

        assert of_type(tokens, TokenType.HEADING_OPEN)[0].tag == "h1"
        fence = of_type(tokens, TokenType.FENCE)[0]
        assert fence.info == "py"
        assert fence.content == "x | y\n"
        assert len(of_type(tokens, TokenType.TD_OPEN)) == 1

    def test_fence_starting_on_marker_line(self) -> None:
        tokens = parse_tables("#|\n|| ```\na | b\n``` ||\n|#")

        fence = of_type(tokens, TokenType.FENCE)[0]
        assert fence.content == "a | b\n"

    def test_table_inside_blockquote(self) -> None:
        tokens = parse_tables("> #|\n> || a | b ||\n> |#")

        assert tokens[0].type is TokenType.BLOCKQUOTE_OPEN
        assert of_type(tokens, TokenType.TABLE_OPEN)
        assert inline_contents(tokens) == ["a", "b"]
        assert tokens[-1].type is TokenType.BLOCKQUOTE_CLOSE


class TestUnterminatedTable:
    def test_diagnostic_and_fallback(self) -> None:
        tokens = parse_tables("#|\n|| a ||")

        lint = tokens[0]
        assert lint.hidden
        assert lint_codes(lint) == ["YFM004"]
        assert lint.map == [0, 2]
        assert not of_type(tokens, TokenType.TABLE_OPEN)
        assert not of_type(tokens, TokenType.TD_OPEN)
        assert inline_contents(tokens) == ["#|\n|| a ||"]


class TestTableAttributes:
    """Attribute block after the closing fence."""

    def test_class_id_and_flags(self) -> None:
        tokens = parse_tables("#|\n|| a ||\n|# {.wide #main border}")

        assert tokens[0].attrs == {"class": "wide", "id": "main", "border": "true"}

    def test_repeated_classes_are_joined(self) -> None:
        tokens = parse_tables("#|\n|| a ||\n|# {.a .b data-x=\"1 2\"}")

        assert tokens[0].attrs == {"class": "a b", "data-x": "1 2"}

    def test_malformed_block_is_ignored(self) -> None:
        tokens = parse_tables("#|\n|| a ||\n|# {.wide")

        assert tokens[0].attrs == {}

    def test_block_on_next_line_is_ignored(self) -> None:
        tokens = parse_tables("#|\n|| a ||\n|#\n{.wide}")

        assert tokens[0].attrs == {}


class TestCellClass:
    """Trailing ``{.class}`` in cell content."""

    def test_class_moves_to_cell(self) -> None:
        tokens = parse_tables("#|\n|| Total {.bold} ||\n|#")

        assert of_type(tokens, TokenType.TD_OPEN)[0].attrs == {"class": "bold"}
        assert inline_contents(tokens) == ["Total"]

    def test_multiple_classes(self) -> None:
        tokens = parse_tables("#|\n|| x {.a .b} ||\n|#")

        assert of_type(tokens, TokenType.TD_OPEN)[0].attrs == {"class": "a b"}
        assert inline_contents(tokens) == ["x"]

    def test_other_attributes_stay_in_text(self) -> None:
        tokens = parse_tables("#|\n|| x {.a data-k=v} ||\n|#")

        assert of_type(tokens, TokenType.TD_OPEN)[0].attrs == {"class": "a"}
        (content,) = inline_contents(tokens)
        assert ".a" not in content
        assert "data-k=v" in content

    def test_block_without_class_is_untouched(self) -> None:
        tokens = parse_tables("#|\n|| x {#id} ||\n|#")

        assert of_type(tokens, TokenType.TD_OPEN)[0].attrs == {}
        assert inline_contents(tokens) == ["x {#id}"]

    def test_block_not_at_end(self) -> None:
        tokens = parse_tables("#|\n|| {.a} x ||\n|#")

        assert of_type(tokens, TokenType.TD_OPEN)[0].attrs == {}


class TestRaggedRows:
    def test_rows_padded_to_widest(self) -> None:
        tokens = parse_tables("#|\n|| a | b | c ||\n|| d ||\n|#")

        tds = of_type(tokens, TokenType.TD_OPEN)
        assert len(tds) == 6
        synthetic = [td for td in tds if td.meta.get("synthetic")]
        assert len(synthetic) == 2
        assert all(not td.attrs for td in synthetic)
        assert all(td.map is None for td in synthetic)
        assert inline_contents(tokens) == ["a", "b", "c", "d"]


class TestSpans:
    """``>`` and ``^`` cells."""

    def test_colspan(self) -> None:
        tokens = parse_tables("#|\n||  a | > ||\n|#")

        tds = of_type(tokens, TokenType.TD_OPEN)
        assert len(tds) == 1
        assert tds[0].attrs == {"colspan": "2"}
        assert len(of_type(tokens, TokenType.TD_CLOSE)) == 1
        assert not of_type(tokens, TokenType.BLOCKQUOTE_OPEN)

    def test_colspan_and_rowspan_grid(self) -> None:
        source = "#|\n|| A | > | > ||\n|| B | C | D ||\n|| ^ | E | F ||\n|#"
        tokens = parse_tables(source)

        tds = of_type(tokens, TokenType.TD_OPEN)
        assert len(tds) == 6
        assert tds[0].attrs == {"colspan": "3"}
        assert tds[1].attrs == {"rowspan": "2"}
        assert inline_contents(tokens) == ["A", "B", "C", "D", "E", "F"]

    def test_rowspan_run(self) -> None:
        tokens = parse_tables("#|\n|| a | b ||\n|| ^ | c ||\n|| ^ | d ||\n|#")

        tds = of_type(tokens, TokenType.TD_OPEN)
        assert tds[0].attrs == {"rowspan": "3"}
        assert len(tds) == 4

    def test_rowspan_into_padding_sets_nothing(self) -> None:
        tokens = parse_tables("#|\n|| a ||\n|| b | ^ ||\n|#")

        tds = of_type(tokens, TokenType.TD_OPEN)
        assert len(tds) == 3
        assert all("rowspan" not in td.attrs for td in tds)

    def test_sentinels_in_first_row_and_column_are_text(self) -> None:
        tokens = parse_tables("#|\n|| ^ | b ||\n|| c | d ||\n|#")

        assert len(of_type(tokens, TokenType.TD_OPEN)) == 4
        assert inline_contents(tokens)[0] == "^"

    def test_crossing_sentinels_assign_nothing(self) -> None:
        tokens = parse_tables("#|\n|| a | b ||\n|| ^ | > ||\n|#")

        tds = of_type(tokens, TokenType.TD_OPEN)
        assert len(tds) == 2
        assert tds[0].attrs == {"rowspan": "2"}
        assert tds[1].attrs == {}


class TestBlockContentInCells:
    """Cells holding block content are never mistaken for sentinels."""

    def test_quote_is_not_a_colspan(self) -> None:
        tokens = parse_tables("#|\n|| a | > quoted ||\n|#")

        tds = of_type(tokens, TokenType.TD_OPEN)
        assert len(tds) == 2
        assert all("colspan" not in td.attrs for td in tds)
        assert inline_contents(tokens) == ["a", "quoted"]
        assert render(tokens) == (
            "<table>\n<tbody>\n<tr>\n"
            "<td>\n<p>a</p>\n</td>\n"
            "<td>\n<blockquote>\n<p>quoted</p>\n</blockquote>\n</td>\n"
            "</tr>\n</tbody>\n</table>\n"
        )

    def test_class_inside_quote_moves_to_cell(self) -> None:
        tokens = parse_tables("#|\n|| a | > quoted {.c} ||\n|#")

        tds = of_type(tokens, TokenType.TD_OPEN)
        assert [td.attrs for td in tds] == [{}, {"class": "c"}]
        assert inline_contents(tokens) == ["a", "quoted"]

    def test_nested_table_text_is_not_cell_content(self) -> None:
        source = "#|\n|| x | y ||\n|| p |\n#|\n|| ^ ||\n|#\n||\n|#"
        tokens = parse_tables(source)

        outer_tds = [td for td in of_type(tokens, TokenType.TD_OPEN) if td.level == 3]
        assert len(outer_tds) == 4
        assert all(not td.attrs for td in outer_tds)


class TestNestedTables:
    def test_nested_table_in_cell(self) -> None:
        tokens = parse_tables("#|\n||\n#|\n|| inner ||\n|#\n||\n|#")

        tables = of_type(tokens, TokenType.TABLE_OPEN)
        assert len(tables) == 2
        outer, inner = tables
        assert outer.map == [0, 8]
        assert inner.map == [2, 6]
        assert inner.level == outer.level + 4
        assert inline_contents(tokens) == ["inner"]
        assert len(of_type(tokens, TokenType.TR_OPEN)) == 2

    def test_nested_sentinels_do_not_affect_outer_table(self) -> None:
        tokens = parse_tables("#|\n|| x | y ||\n||\n#|\n|| a | > ||\n|#\n| z ||\n|#")

        tds = of_type(tokens, TokenType.TD_OPEN)
        outer_tds = [td for td in tds if td.level == 3]
        inner_tds = [td for td in tds if td.level > 3]
        assert len(outer_tds) == 4
        assert all(not td.attrs for td in outer_tds)
        assert [td.attrs for td in inner_tds] == [{"colspan": "2"}]

    def test_sibling_table_outside_cells(self) -> None:
        tokens = parse_tables("#|\n|| outer ||\n#|\n|| inner ||\n|#\n|#")

        assert len(of_type(tokens, TokenType.TR_OPEN)) == 1
        assert inline_contents(tokens) == ["outer"]
        assert tokens[0].map == [0, 7]


class TestIgnoreSplitterOptions:
    def test_inline_code_option(self) -> None:
        source = "#|\n|| `|` | b ||\n|#"

        assert len(of_type(parse_tables(source), TokenType.TD_OPEN)) == 3
        tokens = parse_tables(source, table_ignoreSplittersInInlineCode=True)
        assert inline_contents(tokens) == ["`|`", "b"]

    def test_inline_math_option(self) -> None:
        tokens = parse_tables(
            "#|\n|| $a|b$ | c ||\n|#", table_ignore_splitters_in_inline_math=True
        )
        assert inline_contents(tokens) == ["$a|b$", "c"]
