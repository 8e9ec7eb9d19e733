"""Parse GraphQL SDL and index its type definitions."""

from dataclasses import dataclass, field

from graphql import (
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumValueDefinitionNode,
    FieldDefinitionNode,
    GraphQLError,
    InputObjectTypeDefinitionNode,
    InputValueDefinitionNode,
    InterfaceTypeDefinitionNode,
    Lexer,
    ListTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    OperationType,
    SchemaDefinitionNode,
    Source,
    StringValueNode,
    TokenKind,
    TypeDefinitionNode,
    TypeNode,
    UnionTypeDefinitionNode,
    parse,
)

from .errors import SchemaParseError

DEFAULT_ROOT_NAMES = {
    OperationType.QUERY: "Query",
    OperationType.MUTATION: "Mutation",
    OperationType.SUBSCRIPTION: "Subscription",
}

DEPRECATED_DIRECTIVE = "deprecated"
DEFAULT_DEPRECATION_REASON = "No longer supported"

# Definitions that can carry a description and directives
DescribedNode = TypeDefinitionNode | FieldDefinitionNode | InputValueDefinitionNode | EnumValueDefinitionNode


@dataclass
class SchemaIndex:
    """Type definitions of a document grouped by kind, in declaration order."""

    definitions: list[TypeDefinitionNode] = field(default_factory=list)
    objects: list[ObjectTypeDefinitionNode] = field(default_factory=list)
    inputs: list[InputObjectTypeDefinitionNode] = field(default_factory=list)
    interfaces: dict[str, InterfaceTypeDefinitionNode] = field(default_factory=dict)
    unions: list[UnionTypeDefinitionNode] = field(default_factory=list)
    enums: list[EnumTypeDefinitionNode] = field(default_factory=list)
    root_names: dict[OperationType, str] = field(default_factory=dict)


def parse_schema(source: str) -> DocumentNode:
    """Parse SDL text into a document.

    Args:
        source: GraphQL schema definition language text

    Returns:
        Parsed document, empty when the text holds only whitespace or comments

    Raises:
        SchemaParseError: If the text is not valid SDL
    """
    try:
        if Lexer(Source(source)).advance().kind == TokenKind.EOF:
            return DocumentNode(definitions=[])
        return parse(source, no_location=True)
    except GraphQLError as e:
        raise SchemaParseError(e.message) from e


def index_document(document: DocumentNode) -> SchemaIndex:
    """Group the type definitions of a document by kind.

    Args:
        document: Parsed schema document

    Returns:
        SchemaIndex with definitions in declaration order and the
        names of the root operation types
    """
    index = SchemaIndex()
    schema_definition = None

    for definition in document.definitions:
        if isinstance(definition, SchemaDefinitionNode):
            schema_definition = definition
        if not isinstance(definition, TypeDefinitionNode):
            continue
        index.definitions.append(definition)
        if isinstance(definition, ObjectTypeDefinitionNode):
            index.objects.append(definition)
        elif isinstance(definition, InputObjectTypeDefinitionNode):
            index.inputs.append(definition)
        elif isinstance(definition, InterfaceTypeDefinitionNode):
            index.interfaces[definition.name.value] = definition
        elif isinstance(definition, UnionTypeDefinitionNode):
            index.unions.append(definition)
        elif isinstance(definition, EnumTypeDefinitionNode):
            index.enums.append(definition)

    if schema_definition is not None:
        for operation_type in schema_definition.operation_types:
            index.root_names[operation_type.operation] = operation_type.type.name.value
    else:
        declared = {obj.name.value for obj in index.objects}
        for operation, name in DEFAULT_ROOT_NAMES.items():
            if name in declared:
                index.root_names[operation] = name

    return index


def base_type_name(type_node: TypeNode) -> str:
    """Name at the bottom of a list/non-null wrapper chain."""
    while isinstance(type_node, (NonNullTypeNode, ListTypeNode)):
        type_node = type_node.type
    return type_node.name.value


def description_of(node: DescribedNode) -> str | None:
    """Description text of a definition, if it has one."""
    if node.description is None:
        return None
    return node.description.value


def has_directive(node: DescribedNode, name: str) -> bool:
    """Check whether a definition is tagged with `@name`."""
    return any(directive.name.value == name for directive in node.directives or ())


def deprecation_reason(node: DescribedNode) -> str | None:
    """Reason given by `@deprecated`, or None when not deprecated."""
    for directive in node.directives or ():
        if directive.name.value != DEPRECATED_DIRECTIVE:
            continue
        for argument in directive.arguments or ():
            if argument.name.value == "reason" and isinstance(argument.value, StringValueNode):
                return argument.value.value
        return DEFAULT_DEPRECATION_REASON
    return None
