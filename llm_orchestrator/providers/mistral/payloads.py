"""Mistral's chat and embeddings endpoints accept the OpenAI body shapes."""

from ..openai.payloads import build_chat_completion_body, build_embedding_body

__all__ = ["build_chat_completion_body", "build_embedding_body"]
