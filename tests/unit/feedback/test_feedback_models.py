"""
Tests for lenient feedback parsing.
"""
import pytest

from collegepath.feedback.models import (
    DEFAULT_CLARITY,
    DEFAULT_STORYTELLING,
    DEFAULT_TONE,
    Feedback,
    parse_feedback,
)


class TestParseFeedback:

    def test_partial_object_gets_defaults(self):
        feedback = parse_feedback({"tone": "warm"})
        assert feedback.tone == "warm"
        assert feedback.clarity == DEFAULT_CLARITY
        assert feedback.storytelling == DEFAULT_STORYTELLING
        assert feedback.suggestions == []
        assert feedback.overall_score == 5

    def test_empty_object(self):
        feedback = parse_feedback({})
        assert feedback.tone == DEFAULT_TONE
        assert feedback.overall_score == 5

    def test_full_object(self):
        feedback = parse_feedback({
            "tone": "Confident",
            "clarity": "Mostly clear",
            "storytelling": "Strong arc",
            "suggestions": ["Cut the first paragraph", "Name the teacher"],
            "overallScore": 8,
        })
        assert feedback.suggestions == ["Cut the first paragraph", "Name the teacher"]
        assert feedback.overall_score == 8

    def test_null_and_blank_text_fields(self):
        feedback = parse_feedback({"tone": None, "clarity": "  "})
        assert feedback.tone == DEFAULT_TONE
        assert feedback.clarity == DEFAULT_CLARITY

    @pytest.mark.parametrize("raw,expected", [
        (7.6, 8),
        ("9", 9),
        (0, 5),
        (15, 10),
        (-3, 1),
        ("great", 5),
        (True, 5),
        (None, 5),
    ])
    def test_score_normalized(self, raw, expected):
        assert parse_feedback({"overallScore": raw}).overall_score == expected

    def test_non_list_suggestions(self):
        assert parse_feedback({"suggestions": "Be concise"}).suggestions == []

    def test_suggestions_drop_blanks(self):
        assert parse_feedback({"suggestions": ["a", "", None, " b "]}).suggestions == ["a", "b"]


class TestFeedback:

    def test_to_dict_uses_camel_case_score(self):
        data = Feedback(tone="t", clarity="c", storytelling="s", suggestions=["x"], overall_score=6).to_dict()
        assert data == {
            "tone": "t",
            "clarity": "c",
            "storytelling": "s",
            "suggestions": ["x"],
            "overallScore": 6,
        }

    def test_score_out_of_range(self):
        with pytest.raises(ValueError):
            Feedback(tone="t", clarity="c", storytelling="s", overall_score=11)
