"""
Usage normalization module.

Vendors report token usage under different field names, and some report
only a total. These helpers map each vendor's usage block onto one shape
and derive the single ``tokens_used`` figure carried by results.
"""

from typing import Any, Dict, Optional, Sequence


# Vendor usage field names per slot: (prompt, completion, total).
# A slot lists alternatives in lookup order.
USAGE_FIELDS: Dict[str, Sequence[Sequence[str]]] = {
    "openai": (("prompt_tokens",), ("completion_tokens",), ("total_tokens",)),
    "mistral": (("prompt_tokens",), ("completion_tokens",), ("total_tokens",)),
    "anthropic": (("input_tokens",), ("output_tokens",), ()),
    "cohere": (("input_tokens",), ("output_tokens", "completion_tokens"), ("billed_tokens",)),
    "google": (
        ("promptTokenCount",),
        ("candidatesTokenCount", "completionTokenCount"),
        ("totalTokenCount",),
    ),
}

# Used for providers without an entry above
GENERIC_FIELDS = (
    ("prompt_tokens", "input_tokens", "promptTokenCount"),
    ("completion_tokens", "output_tokens", "candidatesTokenCount"),
    ("total_tokens", "totalTokenCount"),
)


def _as_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _first(usage_data: Dict[str, Any], names: Sequence[str]) -> Optional[int]:
    for name in names:
        value = _as_int(usage_data.get(name))
        if value is not None:
            return value
    return None


def normalize_usage(usage_data: Optional[Dict[str, Any]], provider: str) -> Dict[str, Optional[int]]:
    """
    Normalize a vendor usage block into the standard shape.

    Fields the vendor did not report are None rather than 0, so callers can
    tell "not reported" from "zero".

    Args:
        usage_data: The vendor's usage object (e.g. OpenAI ``usage``,
            Cohere ``meta.billed_units``, Google ``usageMetadata``)
        provider: Provider id for field-name mapping

    Returns:
        Dict with prompt_tokens, completion_tokens, total_tokens
    """
    if not usage_data:
        return {"prompt_tokens": None, "completion_tokens": None, "total_tokens": None}

    prompt_fields, completion_fields, total_fields = USAGE_FIELDS.get(provider, GENERIC_FIELDS)
    return {
        "prompt_tokens": _first(usage_data, prompt_fields),
        "completion_tokens": _first(usage_data, completion_fields),
        "total_tokens": _first(usage_data, total_fields),
    }


def count_tokens_used(usage: Dict[str, Optional[int]]) -> int:
    """
    Derive ``tokens_used`` for a generation from normalized usage.

    Prompt and completion are summed only when both are reported. Otherwise
    the vendor total wins, and a lone part count is the last resort.
    """
    prompt_tokens = usage.get("prompt_tokens")
    completion_tokens = usage.get("completion_tokens")
    if prompt_tokens is not None and completion_tokens is not None:
        return prompt_tokens + completion_tokens

    total_tokens = usage.get("total_tokens")
    if total_tokens is not None:
        return total_tokens

    if prompt_tokens is not None:
        return prompt_tokens
    return completion_tokens or 0


def count_embedding_tokens(usage: Dict[str, Optional[int]]) -> int:
    """
    Derive ``tokens_used`` for an embedding: the input tokens billed.

    Falls back to the vendor total when no input count is reported.
    """
    prompt_tokens = usage.get("prompt_tokens")
    if prompt_tokens is not None:
        return prompt_tokens
    return usage.get("total_tokens") or 0


def placeholder_time(count: Optional[int]) -> Optional[float]:
    """
    ``processing_time_ms`` for vendors that report no latency.

    Cohere, Google and Mistral fill the field with a token count; a missing
    count stays None.
    """
    return float(count) if count is not None else None
