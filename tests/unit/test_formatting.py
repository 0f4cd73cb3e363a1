"""Unit tests for answer formatting."""

from docchat.webhook.formatting import (
    FINANCIAL_HEADER,
    LEADERSHIP_HEADER,
    PROJECT_HEADER,
    format_answer,
    strip_markup,
)


class TestStripMarkup:
    """Tests for markup removal."""

    def test_inline_code(self) -> None:
        assert strip_markup("Run `make build` now") == "Run make build now"

    def test_fenced_code_keeps_content(self) -> None:
        assert strip_markup("```print(1)```") == "print(1)"

    def test_italics_removed(self) -> None:
        assert strip_markup("This is *important* text") == "This is important text"

    def test_bold_kept(self) -> None:
        assert strip_markup("This is **important** text") == "This is **important** text"


class TestFormatAnswer:
    """Tests for the structuring heuristics."""

    def test_short_answer_unchanged(self) -> None:
        assert format_answer("  The penalty is 5%.  ") == "The penalty is 5%."

    def test_two_lines_unchanged(self) -> None:
        assert format_answer("First line\nSecond line") == "First line\nSecond line"

    def test_existing_bullets_unchanged(self) -> None:
        text = "Summary:\n- one\n- two\n- three"
        assert format_answer(text) == text

    def test_existing_numbering_unchanged(self) -> None:
        text = "Steps:\n1. open\n2. sign\n3. send"
        assert format_answer(text) == text

    def test_key_value_lines_get_bullets(self) -> None:
        text = "Overview\n**Term**: 12 months\n**Notice**: 30 days"
        result = format_answer(text)

        assert result.splitlines() == [
            "Overview",
            "• **Term**: 12 months",
            "• **Notice**: 30 days",
        ]

    def test_long_prose_becomes_bullets(self) -> None:
        text = (
            "The agreement covers all regional offices.\n"
            "Payment is due within thirty days.\n"
            "Either party may terminate with notice."
        )
        result = format_answer(text)

        assert result.splitlines() == [
            "• The agreement covers all regional offices",
            "• Payment is due within thirty days",
            "• Either party may terminate with notice",
        ]

    def test_financial_layout(self) -> None:
        """Short fragments with amounts get the financial header."""
        text = "Revenue was $1,200.\nCosts $800.\nUp 15%."
        lines = format_answer(text).splitlines()

        assert lines == [
            FINANCIAL_HEADER,
            "• Revenue was **$1,200**",
            "• Costs **$800**",
            "• Up **15%**",
        ]

    def test_leadership_layout(self) -> None:
        text = "Board vote.\nThe CEO.\nDirector Rao."
        lines = format_answer(text).splitlines()

        assert lines == [
            LEADERSHIP_HEADER,
            "• Board vote",
            "• The **CEO**",
            "• **Director** Rao",
        ]

    def test_project_layout(self) -> None:
        text = "Phase one.\nPlanning 2 weeks.\nQA 3 days."
        lines = format_answer(text).splitlines()

        assert lines == [
            PROJECT_HEADER,
            "• **Phase** one",
            "• **Planning** **2 week**s",
            "• QA **3 day**s",
        ]

    def test_topic_layout_needs_several_fragments(self) -> None:
        """A single long fragment falls through to the trimmed text."""
        text = "Revenue $1,200\nCosts $800\nUp 15%"
        assert format_answer(text) == text

    def test_unmatched_text_is_trimmed(self) -> None:
        text = "Alpha beta\nGamma delta\nEpsilon\n"
        assert format_answer(text) == "Alpha beta\nGamma delta\nEpsilon"
