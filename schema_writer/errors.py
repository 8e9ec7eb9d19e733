"""Exceptions raised while loading, generating or formatting a schema."""


class SchemaWriterError(Exception):
    """Base class for all schema writer failures."""


class SchemaParseError(SchemaWriterError):
    """The schema text is not valid GraphQL SDL."""


class SchemaFetchError(SchemaWriterError):
    """A remote schema could not be retrieved or introspected."""


class FormattingError(SchemaWriterError):
    """The formatter rejected the generated text or could not be run."""
