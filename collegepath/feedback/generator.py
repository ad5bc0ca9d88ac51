"""
Essay feedback generator.

Wraps one chat-completions call to an OpenAI-compatible endpoint in JSON
output mode. Every request is a fresh call: no retry, no caching.
"""
import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from collegepath.config import Settings, get_settings
from collegepath.errors import FeedbackGenerationError
from collegepath.feedback.models import Feedback, parse_feedback
from collegepath.utils.json_utils import parse_json_response

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert college admissions essay reviewer. Provide constructive, "
    "actionable feedback to help students improve their essays. Focus on tone, "
    "clarity, and storytelling."
)

USER_PROMPT_TEMPLATE = """
Essay Prompt: {prompt}

Essay Content:
{content}

Please provide feedback in the following format:
1. Tone: Analyze the tone and whether it's appropriate for college admissions
2. Clarity: Evaluate how clearly the student communicates their ideas
3. Storytelling: Assess the narrative structure and engagement
4. Suggestions: Provide 3-5 specific, actionable suggestions for improvement
5. Overall Score: Rate the essay from 1-10

Format your response as a single JSON object with exactly these keys: tone, clarity, storytelling, suggestions (array of strings), overallScore (integer 1-10).
"""

DEFAULT_ESSAY_PROMPT = "Personal Statement"


@dataclass
class GeneratorConfig:
    """Configuration for the feedback model call."""

    model: str = "gpt-4o"
    base_url: str = "https://api.openai.com/v1"
    api_key: Optional[str] = None
    max_tokens: int = 2048
    timeout_seconds: float = 60.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeneratorConfig":
        return cls(
            model=settings.feedback_model,
            base_url=settings.openai_base_url,
            api_key=settings.openai_api_key,
            max_tokens=settings.feedback_max_tokens,
            timeout_seconds=settings.feedback_timeout_seconds,
        )


def build_messages(content: str, prompt: Optional[str] = None) -> list[dict]:
    """System and user messages for one feedback request."""
    user_prompt = USER_PROMPT_TEMPLATE.format(
        prompt=prompt or DEFAULT_ESSAY_PROMPT,
        content=content,
    )
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user_prompt},
    ]


class FeedbackGenerator:
    """
    LLM-backed essay reviewer.

    The caller guarantees ``content`` is non-empty; the generator does not
    re-validate it.
    """

    def __init__(
        self,
        config: Optional[GeneratorConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            config: Model/endpoint configuration
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.config = config or GeneratorConfig()
        self._transport = transport

    async def generate(self, content: str, prompt: Optional[str] = None) -> Feedback:
        """
        Request feedback for an essay.

        Raises:
            FeedbackGenerationError: On transport failure, non-2xx status,
                unparseable body or timeout
        """
        try:
            raw = await asyncio.wait_for(
                self._complete(build_messages(content, prompt)),
                timeout=self.config.timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.error(f"[FEEDBACK] Model call exceeded {self.config.timeout_seconds}s")
            raise FeedbackGenerationError(
                f"Feedback generation timed out after {self.config.timeout_seconds}s"
            )

        try:
            data = parse_json_response(raw)
        except ValueError as e:
            logger.error(f"[FEEDBACK] Unparseable model output: {e}")
            raise FeedbackGenerationError("Model returned a non-JSON response") from e

        feedback = parse_feedback(data)
        logger.info(
            f"[FEEDBACK] Generated feedback: score={feedback.overall_score}, "
            f"suggestions={len(feedback.suggestions)}"
        )
        return feedback

    async def _complete(self, messages: list[dict]) -> str:
        """POST to /chat/completions and return the first choice's content."""
        url = f"{self.config.base_url.rstrip('/')}/chat/completions"
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        payload = {
            "model": self.config.model,
            "messages": messages,
            "response_format": {"type": "json_object"},
            "max_completion_tokens": self.config.max_tokens,
        }

        logger.info(f"[FEEDBACK] Requesting feedback from model={self.config.model}")
        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(url, json=payload, headers=headers)
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"[FEEDBACK] Model endpoint returned HTTP {e.response.status_code}")
            raise FeedbackGenerationError(f"Model endpoint returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error(f"[FEEDBACK] Model request failed: {type(e).__name__}: {e}")
            raise FeedbackGenerationError(f"Model request failed: {type(e).__name__}") from e
        except json.JSONDecodeError as e:
            logger.error("[FEEDBACK] Model endpoint returned a non-JSON body")
            raise FeedbackGenerationError("Model endpoint returned a non-JSON body") from e

        try:
            return body["choices"][0]["message"]["content"] or "{}"
        except (KeyError, IndexError, TypeError) as e:
            logger.error(f"[FEEDBACK] Unexpected completion shape: {str(body)[:200]}")
            raise FeedbackGenerationError("Model endpoint returned an unexpected response") from e


def get_feedback_generator() -> FeedbackGenerator:
    """FastAPI dependency: a generator configured from settings."""
    return FeedbackGenerator(GeneratorConfig.from_settings(get_settings()))
