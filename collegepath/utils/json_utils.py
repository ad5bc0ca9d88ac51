import json
import re
from typing import Any, Dict


def parse_json_response(text: str) -> Dict[str, Any]:
    """
    Parse a JSON object out of an LLM response.

    Strips markdown code fences, then falls back to the outermost ``{...}``
    span. Raises ValueError when no JSON object can be recovered.
    """
    text = (text or "").strip()

    # Remove markdown code blocks if present
    if text.startswith("```"):
        lines = text.split("\n")
        start = 1 if lines[0].startswith("```") else 0
        end = len(lines)
        for i in range(len(lines) - 1, 0, -1):
            if lines[i].strip() == "```":
                end = i
                break
        text = "\n".join(lines[start:end]).strip()

    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        # Try to find JSON object in text
        match = re.search(r"\{.*\}", text, flags=re.DOTALL)
        if not match:
            raise ValueError(f"No valid JSON found in response: {text[:200]}...")
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError as e:
            raise ValueError(f"No valid JSON found in response: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data
