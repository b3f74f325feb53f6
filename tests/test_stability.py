"""Anti-flicker guarantees across reparses of a growing message.

Every character prefix of each sample is parsed once; each earlier parse is
then compared against every later one.
"""

import pytest

from artifact_render.core.document import assemble, parse_document
from artifact_render.core.model import (
    HeaderBlock,
    ParagraphBlock,
    PlainSpan,
    TableBlock,
)
from artifact_render.core.segmentation import segment
from artifact_render.core.stability import first_divergence, settled_block_count
from tests.samples import PROSE_MESSAGE, REPORT_MESSAGE


EDGE_MESSAGE = (
    "a | b\n"
    "|-\n"
    "| 1 | 2 |\n"
    "foo|bar\n"
    "- **bold** and *it\n"
    "12. step `x`\n"
    "| H |\n"
    "| --- |\n"
    "\n"
    "## end\n"
)

SAMPLES = [REPORT_MESSAGE, PROSE_MESSAGE, EDGE_MESSAGE]


def _prefix_parses(text: str):
    return [(segment(text[:i]), settled_block_count(text[:i])) for i in range(len(text) + 1)]


@pytest.mark.parametrize("text", SAMPLES, ids=["report", "prose", "edge"])
def test_settled_blocks_never_change(text):
    parses = _prefix_parses(text)
    for i, (blocks_i, settled_i) in enumerate(parses):
        assert settled_i <= len(blocks_i)
        for blocks_j, _ in parses[i + 1 :]:
            assert blocks_j[:settled_i] == blocks_i[:settled_i], (i, text[:i])


@pytest.mark.parametrize("text", SAMPLES, ids=["report", "prose", "edge"])
def test_all_but_last_two_blocks_preserved(text):
    parses = _prefix_parses(text)
    for i, (blocks_i, _) in enumerate(parses):
        keep = max(0, len(blocks_i) - 2)
        for blocks_j, _ in parses[i + 1 :]:
            assert blocks_j[:keep] == blocks_i[:keep], (i, text[:i])


@pytest.mark.parametrize("text", SAMPLES, ids=["report", "prose", "edge"])
def test_settled_count_is_monotonic(text):
    counts = [settled for _, settled in _prefix_parses(text)]
    assert counts == sorted(counts)


def test_settled_count_examples():
    assert settled_block_count("") == 0
    assert settled_block_count("a") == 0
    assert settled_block_count("a\n") == 1
    assert settled_block_count("a\nb") == 1
    # pipe line waits on its lookahead line
    assert settled_block_count("a | b\nc") == 0
    assert settled_block_count("a | b\nc\n") == 2


def test_table_settles_only_after_closing_line():
    text = "| A |\n|---|\n| 1 |\n"
    assert settled_block_count(text) == 0
    assert settled_block_count(text + "done") == 0
    assert settled_block_count(text + "done\n") == 2


def test_open_table_grows_rows():
    before = segment("| A |\n|---|\n| 1 |")
    after = segment("| A |\n|---|\n| 1 |\n| 2 |")
    assert before == (TableBlock(("A",), (("1",),)),)
    assert after == (TableBlock(("A",), (("1",), ("2",))),)


def test_pipe_line_becomes_table_header_when_separator_arrives():
    before = segment("intro\n| A |\nx")
    after = segment("intro\n| A |\n|")
    assert before[0] == after[0] == ParagraphBlock((PlainSpan("intro"),))
    assert before[1:] == (
        ParagraphBlock((PlainSpan("| A |"),)),
        ParagraphBlock((PlainSpan("x"),)),
    )
    assert after[1:] == (TableBlock(("A",), ()),)


def test_table_header_reverts_when_separator_turns_into_text():
    opened = segment("| A |\n|")
    reverted = segment("| A |\n| x")
    assert opened == (TableBlock(("A",), ()),)
    assert reverted == (
        ParagraphBlock((PlainSpan("| A |"),)),
        ParagraphBlock((PlainSpan("| x"),)),
    )
    assert settled_block_count("| A |\n|") == 0


def test_first_divergence():
    a = assemble((HeaderBlock(1, "T"), ParagraphBlock((PlainSpan("x"),))))
    b = assemble((HeaderBlock(1, "T"), ParagraphBlock((PlainSpan("xy"),))))
    assert first_divergence(a, b) == 1
    assert first_divergence(a, a) == 2
    assert first_divergence(parse_document(""), a) == 0
    assert first_divergence(a, assemble(a.blocks[:1])) == 1
