from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ...core.normalization.usage import normalize_usage


@dataclass
class MessagesResponse:
    text: str
    stop_reason: Optional[str]
    model: Optional[str]
    usage: Dict[str, Optional[int]]


@dataclass
class EmbeddingResponse:
    embedding: List[float]
    usage: Dict[str, Optional[int]]


def extract_text_from_content(content: Any) -> str:
    """Concatenate the text of all ``type == "text"`` content blocks."""
    text_content = ""
    for block in content:
        if block.get("type", "text") == "text":
            text_content += block.get("text") or ""
    return text_content


def decode_messages_response(data: Any) -> MessagesResponse:
    return MessagesResponse(
        text=extract_text_from_content(data["content"]),
        stop_reason=data.get("stop_reason"),
        model=data.get("model"),
        usage=normalize_usage(data["usage"], "anthropic"),
    )


def decode_embedding_response(data: Any) -> EmbeddingResponse:
    return EmbeddingResponse(
        embedding=[float(v) for v in data["embedding"]],
        usage=normalize_usage(data.get("usage"), "anthropic"),
    )
