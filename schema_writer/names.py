"""Identifier escaping and argument record naming."""

from typing import Iterable

from graphql import FieldDefinitionNode, InterfaceTypeDefinitionNode, ObjectTypeDefinitionNode, print_ast

SCALA_KEYWORDS = frozenset(
    {
        "_",
        "abstract",
        "case",
        "catch",
        "class",
        "def",
        "do",
        "else",
        "enum",
        "export",
        "extends",
        "false",
        "final",
        "finally",
        "for",
        "forSome",
        "given",
        "if",
        "implicit",
        "import",
        "lazy",
        "match",
        "new",
        "null",
        "object",
        "override",
        "package",
        "private",
        "protected",
        "return",
        "sealed",
        "super",
        "then",
        "this",
        "throw",
        "trait",
        "true",
        "try",
        "type",
        "val",
        "var",
        "while",
        "with",
        "yield",
    }
)

# Members every case class inherits; backticks do not stop a field from shadowing them.
RESERVED_MEMBERS = frozenset(
    {
        "clone",
        "equals",
        "finalize",
        "getClass",
        "hashCode",
        "notify",
        "notifyAll",
        "toString",
        "wait",
    }
)

RESERVED_MEMBER_MARKER = "$"


def sanitize(identifier: str) -> str:
    """Make a GraphQL name usable as a Scala identifier.

    Args:
        identifier: Raw name from the schema

    Returns:
        The name, backquoted if it is a keyword or ends in `_`, or
        suffixed with `$` if it collides with an inherited member
    """
    # `name_:` would lex as one identifier
    if identifier in SCALA_KEYWORDS or identifier.endswith("_"):
        return f"`{identifier}`"
    if identifier in RESERVED_MEMBERS:
        return f"{identifier}{RESERVED_MEMBER_MARKER}"
    return identifier


def capitalize(name: str) -> str:
    """Upper-case the first character only."""
    return name[:1].upper() + name[1:]


def args_record_name(owner: str, field_name: str) -> str:
    """Name of the record bundling the arguments of `owner.field_name`."""
    return f"{capitalize(owner)}{capitalize(field_name)}Args"


def argument_signature(field: FieldDefinitionNode) -> tuple[tuple[str, str], ...]:
    """Argument names and printed types, used to compare inherited fields."""
    return tuple((arg.name.value, print_ast(arg.type)) for arg in field.arguments or ())


class NameResolver:
    """Assigns argument record names, sharing records inherited from interfaces.

    Names are handed out in the order fields are first resolved. When two
    different fields would produce the same name, or a name is already taken
    by a declared type, later ones get a numeric suffix (`QueryUserByIdArgs2`).

    Args:
        interfaces: Interface definitions by name
        reserved: Names already declared in the Types module
    """

    def __init__(self, interfaces: dict[str, InterfaceTypeDefinitionNode], reserved: Iterable[str] = ()):
        self._interfaces = interfaces
        self._taken = set(reserved)
        self._assigned: dict[tuple[str, str], str] = {}

    def args_owner(
        self,
        owner: ObjectTypeDefinitionNode | InterfaceTypeDefinitionNode,
        field: FieldDefinitionNode,
    ) -> str:
        """Return the type whose name prefixes the args record of `field`.

        A field declared with the same arguments on one of the owner's
        interfaces reuses that interface's record.

        Args:
            owner: Object or interface declaring the field
            field: Field taking arguments

        Returns:
            Name of the owner, or of the interface the field is inherited from
        """
        signature = argument_signature(field)
        for implemented in owner.interfaces or ():
            interface = self._interfaces.get(implemented.name.value)
            if interface is None:
                continue
            for inherited in interface.fields or ():
                if inherited.name.value == field.name.value and argument_signature(inherited) == signature:
                    return self.args_owner(interface, inherited)
        return owner.name.value

    def resolve(
        self,
        owner: ObjectTypeDefinitionNode | InterfaceTypeDefinitionNode,
        field: FieldDefinitionNode,
    ) -> str | None:
        """Args record name for `field`.

        Args:
            owner: Object or interface declaring the field
            field: Field definition

        Returns:
            Unique record name, or None when the field takes no arguments
        """
        if not field.arguments:
            return None
        key = (self.args_owner(owner, field), field.name.value)
        if key not in self._assigned:
            base = args_record_name(*key)
            name = base
            suffix = 2
            while name in self._taken:
                name = f"{base}{suffix}"
                suffix += 1
            self._taken.add(name)
            self._assigned[key] = name
        return self._assigned[key]
