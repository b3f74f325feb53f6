"""Tests for pipe-table recognition and the IDLE/COLLECTING state machine."""

import pytest

from artifact_render.core.model import (
    BlankBlock,
    HeaderBlock,
    ParagraphBlock,
    PlainSpan,
    TableBlock,
)
from artifact_render.core.segmentation import (
    TableAccumulator,
    TableState,
    is_separator_line,
    is_table_row_candidate,
    normalize_row,
    segment,
    split_cells,
)


# ─── Line predicates ─────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "line",
    ["| --- | --- |", "|---|:---:|", "---|---", "  | :-- |  ", "---", "|:|:|", "|  |", "::"],
)
def test_separator_lines(line):
    assert is_separator_line(line)
    assert not is_table_row_candidate(line)


@pytest.mark.parametrize("line", ["", "   ", "| a | b |", "a-b", "| - x |"])
def test_not_separator_lines(line):
    assert not is_separator_line(line)


def test_header_line_with_pipe_is_not_candidate():
    assert not is_table_row_candidate("## a | b")


def test_split_cells_drops_only_edge_empties():
    assert split_cells("| a | | b |") == ["a", "", "b"]
    assert split_cells("a | b") == ["a", "b"]
    assert split_cells("  |x|  ") == ["x"]


def test_normalize_row_pads_and_truncates():
    assert normalize_row(["x", "y"], 3) == ("x", "y", "")
    assert normalize_row(["x", "y", "z", "w"], 3) == ("x", "y", "z")
    assert normalize_row(["x", "y", "z"], 3) == ("x", "y", "z")


# ─── State machine ───────────────────────────────────────────────────────────


class TestTableAccumulator:
    def test_transitions(self):
        acc = TableAccumulator()
        assert acc.state is TableState.IDLE
        acc.open("| A | B | C |", 0)
        assert acc.collecting
        acc.add_row("| x | y |")
        acc.add_row("| x | y | z | w |")
        block = acc.close()
        assert acc.state is TableState.IDLE
        assert block == TableBlock(
            headers=("A", "B", "C"),
            rows=(("x", "y", ""), ("x", "y", "z")),
        )

    def test_close_resets_for_next_run(self):
        acc = TableAccumulator()
        acc.open("| A |", 0)
        acc.add_row("| 1 |")
        acc.close()
        acc.open("| B |", 5)
        assert acc.close() == TableBlock(headers=("B",), rows=())


# ─── End-to-end through segment() ────────────────────────────────────────────


def test_name_score_table():
    text = "| Name | Score |\n| --- | --- |\n| Alice | 9 |\n| Bob | 7 |"
    assert segment(text) == (
        TableBlock(headers=("Name", "Score"), rows=(("Alice", "9"), ("Bob", "7"))),
    )


def test_degenerate_table_keeps_header():
    assert segment("| H1 | H2 |\n| --- | --- |") == (
        TableBlock(headers=("H1", "H2"), rows=()),
    )


def test_header_then_non_candidate_emits_empty_table_then_line():
    assert segment("| H |\n|---|\nafter") == (
        TableBlock(headers=("H",), rows=()),
        ParagraphBlock((PlainSpan("after"),)),
    )


def test_closing_line_is_reprocessed():
    text = "| A |\n| - |\n| 1 |\n## Next"
    assert segment(text) == (
        TableBlock(headers=("A",), rows=(("1",),)),
        HeaderBlock(2, "Next"),
    )


def test_blank_line_closes_table():
    text = "| A |\n| - |\n| 1 |\n\n| 2 |"
    blocks = segment(text)
    assert blocks[0] == TableBlock(headers=("A",), rows=(("1",),))
    assert blocks[1] == BlankBlock()
    assert blocks[2] == ParagraphBlock((PlainSpan("| 2 |"),))


def test_pipe_line_without_separator_is_paragraph():
    assert segment("a | b\nnext") == (
        ParagraphBlock((PlainSpan("a | b"),)),
        ParagraphBlock((PlainSpan("next"),)),
    )


def test_separator_while_idle_is_paragraph():
    assert segment("---") == (ParagraphBlock((PlainSpan("---"),)),)


def test_second_separator_closes_table():
    text = "| A |\n| - |\n| 1 |\n| - |"
    assert segment(text) == (
        TableBlock(headers=("A",), rows=(("1",),)),
        ParagraphBlock((PlainSpan("| - |"),)),
    )


def test_adjacent_tables():
    text = "| A |\n|---|\n| 1 |\n\n| B | C |\n|---|---|\n| 2 | 3 |"
    tables = [b for b in segment(text) if isinstance(b, TableBlock)]
    assert tables == [
        TableBlock(headers=("A",), rows=(("1",),)),
        TableBlock(headers=("B", "C"), rows=(("2", "3"),)),
    ]


def test_row_widths_always_match_headers():
    text = "| a | b | c |\n|---|---|---|\n| 1 |\n| 1 | 2 | 3 | 4 | 5 |\n| | z | |\n| x | y |"
    (table,) = segment(text)
    assert all(len(row) == len(table.headers) for row in table.rows)


def test_colon_only_separator_opens_table():
    assert segment("| a | b |\n|:|:|\n| 1 | 2 |") == (
        TableBlock(headers=("a", "b"), rows=(("1", "2"),)),
    )


def test_bare_pipe_separator_opens_table():
    assert segment("| a |\n|\n| 1 |") == (TableBlock(headers=("a",), rows=(("1",),)),)


def test_pipe_only_row_closes_table():
    text = "| A |\n|---|\n| 1 |\n|  |"
    assert segment(text) == (
        TableBlock(headers=("A",), rows=(("1",),)),
        ParagraphBlock((PlainSpan("|  |"),)),
    )
