from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ...core.normalization.usage import normalize_usage


@dataclass
class Candidate:
    text: str
    finish_reason: Optional[str]
    model: Optional[str]
    usage: Dict[str, Optional[int]]


@dataclass
class ContentEmbedding:
    embedding: List[float]
    usage: Dict[str, Optional[int]]


def decode_generate_content(data: Any) -> Candidate:
    """Decode the first candidate and ``usageMetadata``."""
    candidate = data["candidates"][0]
    parts = candidate["content"]["parts"]
    return Candidate(
        text="".join(part.get("text", "") for part in parts),
        finish_reason=candidate.get("finishReason"),
        model=data.get("modelVersion"),
        usage=normalize_usage(data.get("usageMetadata"), "google"),
    )


def decode_embed_content(data: Any) -> ContentEmbedding:
    """Decode ``embedding.values`` and whatever token counts the API version reports."""
    embedding = data["embedding"]
    usage = normalize_usage(data.get("usageMetadata") or data.get("usage"), "google")
    if usage["prompt_tokens"] is None:
        statistics = embedding.get("statistics") or {}
        usage["prompt_tokens"] = statistics.get("tokenCount")
    return ContentEmbedding(
        embedding=[float(v) for v in embedding["values"]],
        usage=usage,
    )
