from __future__ import annotations

from typing import Any

from ..openai.parsers import ChatCompletion, EmbeddingList, decode_chat_completion, decode_embedding_list


def decode_chat_response(data: Any) -> ChatCompletion:
    return decode_chat_completion(data, "mistral")


def decode_embedding_response(data: Any) -> EmbeddingList:
    return decode_embedding_list(data, "mistral")
