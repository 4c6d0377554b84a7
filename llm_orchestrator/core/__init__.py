"""Provider-agnostic helpers: usage normalization and provider ranking."""
