from __future__ import annotations

from typing import Any, Dict

from ...models.generation import GenerationConfig


def build_generate_body(prompt: str, model: str, config: GenerationConfig) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "model": model,
        "prompt": prompt,
        "temperature": config.temperature,
        "max_tokens": config.max_tokens,
    }
    body.update(config.additional_params)
    return body


def build_embed_body(text: str, model: str) -> Dict[str, Any]:
    return {"model": model, "texts": [text], "truncate": "END"}
