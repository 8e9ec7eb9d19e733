"""Shared helpers for tests."""

import textwrap

from schema_writer import GenerationConfig, generate


def gen(schema: str, **options) -> str:
    """Generate Scala code from an indented schema snippet."""
    return generate(textwrap.dedent(schema), GenerationConfig(**options))


def scala(expected: str) -> str:
    """Dedent an expected Scala snippet, dropping the leading newline."""
    return textwrap.dedent(expected).lstrip("\n")
