"""
Feedback data model and the lenient parser that builds it from model output.
"""
from dataclasses import asdict, dataclass, field
from typing import Any, List, Mapping

DEFAULT_TONE = "Unable to analyze tone"
DEFAULT_CLARITY = "Unable to analyze clarity"
DEFAULT_STORYTELLING = "Unable to analyze storytelling"
DEFAULT_SCORE = 5
MIN_SCORE = 1
MAX_SCORE = 10


@dataclass
class Feedback:
    """
    Structured critique of an essay.

    Attributes:
        tone: Whether the voice suits a college admissions reader
        clarity: How clearly the ideas come across
        storytelling: Narrative structure and engagement
        suggestions: Specific, actionable improvements
        overall_score: Integer rating 1-10
    """
    tone: str
    clarity: str
    storytelling: str
    suggestions: List[str] = field(default_factory=list)
    overall_score: int = DEFAULT_SCORE

    def __post_init__(self):
        if not MIN_SCORE <= self.overall_score <= MAX_SCORE:
            raise ValueError(f"overall_score must be {MIN_SCORE}-{MAX_SCORE}, got {self.overall_score}")

    def to_dict(self) -> dict:
        """Wire/storage form with camelCase keys."""
        data = asdict(self)
        data["overallScore"] = data.pop("overall_score")
        return data


def _text(value: Any, default: str) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def _suggestions(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


def _score(value: Any) -> int:
    # bool is an int subclass; true/false is not a rating
    if value is None or isinstance(value, bool):
        return DEFAULT_SCORE
    try:
        score = round(float(value))
    except (TypeError, ValueError):
        return DEFAULT_SCORE
    if score == 0:
        return DEFAULT_SCORE
    return max(MIN_SCORE, min(MAX_SCORE, score))


def parse_feedback(data: Mapping[str, Any]) -> Feedback:
    """
    Map an untyped JSON object onto Feedback.

    No key is required. Missing, null or blank text fields fall back to the
    "Unable to analyze ..." placeholders, a missing or non-list ``suggestions``
    becomes ``[]`` and a missing or non-numeric ``overallScore`` becomes 5.
    Numeric scores are rounded and clamped to 1-10.
    """
    return Feedback(
        tone=_text(data.get("tone"), DEFAULT_TONE),
        clarity=_text(data.get("clarity"), DEFAULT_CLARITY),
        storytelling=_text(data.get("storytelling"), DEFAULT_STORYTELLING),
        suggestions=_suggestions(data.get("suggestions")),
        overall_score=_score(data.get("overallScore")),
    )
