from __future__ import annotations

from typing import Any, Dict

from ...models.generation import GenerationConfig


def build_generate_content_body(prompt: str, config: GenerationConfig) -> Dict[str, Any]:
    """generateContent body; passthrough params go into ``generationConfig``."""
    generation_config: Dict[str, Any] = {
        "temperature": config.temperature,
        "maxOutputTokens": config.max_tokens,
    }
    generation_config.update(config.additional_params)
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "generationConfig": generation_config,
    }


def build_embed_content_body(text: str) -> Dict[str, Any]:
    return {"content": {"parts": [{"text": text}]}}
