"""Naming helpers.

Centralizes deterministic display formatting for slugs and dex numbers.
"""

from __future__ import annotations


def slug_titlecase(slug: str) -> str:
    """Convert a PokéAPI slug (kebab-case) to a title-cased display name.

    - Replace '-' with spaces
    - Title Case each token
    - Single-letter tokens are uppercase
    """
    tokens = slug.replace("-", " ").split()
    out_tokens: list[str] = []
    for token in tokens:
        if len(token) == 1:
            out_tokens.append(token.upper())
        else:
            out_tokens.append(token[:1].upper() + token[1:])
    return " ".join(out_tokens)


def dex_number(entity_id: int) -> str:
    """Format an id as a zero-padded dex number, e.g. ``#001``."""
    return f"#{entity_id:03d}"
