"""
AI essay feedback: the language-model wrapper and its result type.
"""
from collegepath.feedback.generator import FeedbackGenerator, GeneratorConfig, get_feedback_generator
from collegepath.feedback.models import Feedback, parse_feedback

__all__ = [
    "Feedback",
    "FeedbackGenerator",
    "GeneratorConfig",
    "get_feedback_generator",
    "parse_feedback",
]
