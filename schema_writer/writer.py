"""Entry points: synthesize Scala code from a parsed or raw schema."""

import logging

from graphql import DocumentNode

from .config import GenerationConfig
from .formatter import Formatter
from .parser import index_document, parse_schema
from .scala_generator import render_schema
from .synthesizer import SchemaSynthesizer

logger = logging.getLogger(__name__)


def synthesize(document: DocumentNode, config: GenerationConfig | None = None) -> str:
    """Generate the Types and Operations modules for a document.

    Args:
        document: Parsed and validated schema document
        config: Generation settings (defaults apply when omitted)

    Returns:
        Unformatted Scala source text
    """
    config = config or GenerationConfig()
    index = index_document(document)
    logger.debug("Indexed %d type definitions", len(index.definitions))
    schema = SchemaSynthesizer(index, config).synthesize()
    return render_schema(schema, config)


def generate(
    source: str,
    config: GenerationConfig | None = None,
    formatter: Formatter | None = None,
) -> str:
    """Parse SDL text, generate Scala code and optionally format it.

    Args:
        source: GraphQL schema definition language text
        config: Generation settings
        formatter: Formatter applied to the generated text

    Returns:
        Scala source text

    Raises:
        SchemaParseError: If the schema text is invalid
        FormattingError: If the formatter rejects the generated text
    """
    document = parse_schema(source)
    text = synthesize(document, config)
    if formatter is None:
        return text
    return formatter.format(text)
