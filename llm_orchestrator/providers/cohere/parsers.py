from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ...core.normalization.usage import normalize_usage


@dataclass
class Generation:
    text: str
    finish_reason: Optional[str]
    api_version: Optional[str]
    usage: Dict[str, Optional[int]]


@dataclass
class Embedding:
    embedding: List[float]
    usage: Dict[str, Optional[int]]


def _billed_units(data: Any) -> Dict[str, Any]:
    meta = data.get("meta") or {}
    return meta.get("billed_units") or {}


def _api_version(data: Any) -> Optional[str]:
    api_version = (data.get("meta") or {}).get("api_version")
    if isinstance(api_version, dict):
        return api_version.get("version")
    return api_version


def decode_generation(data: Any) -> Generation:
    """Decode ``generations[0]`` and ``meta.billed_units``."""
    generation = data["generations"][0]
    return Generation(
        text=generation["text"],
        finish_reason=generation.get("finish_reason"),
        api_version=_api_version(data),
        usage=normalize_usage(_billed_units(data), "cohere"),
    )


def decode_embedding(data: Any) -> Embedding:
    return Embedding(
        embedding=[float(v) for v in data["embeddings"][0]],
        usage=normalize_usage(_billed_units(data), "cohere"),
    )
