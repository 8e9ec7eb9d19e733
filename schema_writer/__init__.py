"""Generate Scala types and resolver signatures from a GraphQL schema."""

from .config import GenerationConfig
from .errors import FormattingError, SchemaFetchError, SchemaParseError, SchemaWriterError
from .writer import generate, synthesize

__version__ = "0.1.0"

__all__ = [
    "FormattingError",
    "GenerationConfig",
    "SchemaFetchError",
    "SchemaParseError",
    "SchemaWriterError",
    "generate",
    "synthesize",
]
