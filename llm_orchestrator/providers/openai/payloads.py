from __future__ import annotations

from typing import Any, Dict

from ...models.generation import GenerationConfig


def build_chat_completion_body(prompt: str, model: str, config: GenerationConfig) -> Dict[str, Any]:
    """Chat-completions body with a single user turn.

    ``additional_params`` are merged last so callers can override any field.
    """
    body: Dict[str, Any] = {
        "model": model,
        "messages": [{"role": "user", "content": prompt}],
        "temperature": config.temperature,
        "max_tokens": config.max_tokens,
    }
    body.update(config.additional_params)
    return body


def build_embedding_body(text: str, model: str) -> Dict[str, Any]:
    return {"model": model, "input": text}
