"""Translate GraphQL type references into Scala type expressions."""

from dataclasses import dataclass, field
from typing import Mapping

from graphql import ListTypeNode, NamedTypeNode, NonNullTypeNode, TypeNode

from .names import sanitize

OPTION_TYPE = "scala.Option"
LIST_TYPE = "List"


@dataclass(frozen=True)
class TypeTranslator:
    """Maps type references to Scala, applying scalar substitutions.

    Attributes:
        scalar_mappings: GraphQL scalar name to Scala type substitutions
        effect_param: Type parameter applied to parameterized types, if any
        parameterized: Names of declarations carrying the effect parameter
    """

    scalar_mappings: Mapping[str, str] = field(default_factory=dict, hash=False)
    effect_param: str | None = None
    parameterized: frozenset[str] = frozenset()

    def translate(self, type_node: TypeNode) -> str:
        """Translate a reference, wrapping nullable positions in `scala.Option`.

        Args:
            type_node: Type reference from the document

        Returns:
            Scala type expression
        """
        if isinstance(type_node, NonNullTypeNode):
            return self._translate_non_null(type_node.type)
        return f"{OPTION_TYPE}[{self._translate_non_null(type_node)}]"

    def _translate_non_null(self, type_node: TypeNode) -> str:
        """Translate a reference known to be non-null."""
        if isinstance(type_node, ListTypeNode):
            return f"{LIST_TYPE}[{self.translate(type_node.type)}]"
        if isinstance(type_node, NamedTypeNode):
            return self.reference(type_node.name.value)
        raise TypeError(f"Unexpected type node: {type_node!r}")

    def reference(self, name: str) -> str:
        """Scala expression for a named type, without any optional wrapper."""
        if name in self.scalar_mappings:
            return self.scalar_mappings[name]
        if self.effect_param and name in self.parameterized:
            return f"{sanitize(name)}[{self.effect_param}]"
        return sanitize(name)


def translate(type_node: TypeNode, scalar_mappings: Mapping[str, str] | None = None) -> str:
    """Translate a type reference using only a scalar mapping table."""
    return TypeTranslator(scalar_mappings=scalar_mappings or {}).translate(type_node)
