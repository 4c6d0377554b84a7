from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ...core.normalization.usage import normalize_usage


@dataclass
class ChatCompletion:
    """Decoded chat-completions response (OpenAI wire shape)."""
    text: str
    finish_reason: Optional[str]
    model: Optional[str]
    usage: Dict[str, Optional[int]]


@dataclass
class EmbeddingList:
    """Decoded embeddings response (OpenAI wire shape)."""
    embedding: List[float]
    usage: Dict[str, Optional[int]]


def decode_chat_completion(data: Any, provider: str = "openai") -> ChatCompletion:
    """Decode ``choices[0].message.content`` plus finish reason and usage.

    Raises KeyError/IndexError/TypeError when the body does not match.
    """
    choice = data["choices"][0]
    content = choice["message"].get("content") or ""
    return ChatCompletion(
        text=content,
        finish_reason=choice.get("finish_reason"),
        model=data.get("model"),
        usage=normalize_usage(data.get("usage"), provider),
    )


def decode_embedding_list(data: Any, provider: str = "openai") -> EmbeddingList:
    """Decode ``data[0].embedding`` and the usage block."""
    vector = data["data"][0]["embedding"]
    return EmbeddingList(
        embedding=[float(v) for v in vector],
        usage=normalize_usage(data.get("usage"), provider),
    )
