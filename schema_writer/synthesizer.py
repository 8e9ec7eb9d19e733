"""Turn indexed schema definitions into Scala declarations."""

import logging
from typing import Callable

from graphql import (
    EnumTypeDefinitionNode,
    FieldDefinitionNode,
    InputObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    ObjectTypeDefinitionNode,
    OperationType,
    UnionTypeDefinitionNode,
)

from .config import GenerationConfig
from .decls import (
    Annotation,
    FieldDecl,
    OperationKind,
    OperationRootDecl,
    RecordDecl,
    SumKind,
    SumTypeDecl,
    SynthesizedSchema,
    TypesModule,
    VariantDecl,
)
from .names import NameResolver, sanitize
from .parser import (
    DescribedNode,
    SchemaIndex,
    base_type_name,
    deprecation_reason,
    description_of,
    has_directive,
)
from .type_refs import TypeTranslator

logger = logging.getLogger(__name__)

LAZY_DIRECTIVE = "lazy"

SCHEMA_DERIVATION = "caliban.schema.Schema.SemiAuto"
ARG_DERIVATION = "caliban.schema.ArgBuilder"

STREAM_TYPE = "ZStream"

ROOT_ORDER = (
    (OperationType.QUERY, OperationKind.QUERY),
    (OperationType.MUTATION, OperationKind.MUTATION),
    (OperationType.SUBSCRIPTION, OperationKind.SUBSCRIPTION),
)

FieldOwner = ObjectTypeDefinitionNode | InterfaceTypeDefinitionNode


def field_annotations(node: DescribedNode) -> tuple[Annotation, ...]:
    """Description and deprecation annotations of a field or enum value.

    Args:
        node: Field, input value or enum value definition

    Returns:
        `@GQLDescription` and `@GQLDeprecated` annotations, when present
    """
    annotations = []
    description = description_of(node)
    if description is not None:
        annotations.append(Annotation("GQLDescription", description))
    reason = deprecation_reason(node)
    if reason is not None:
        annotations.append(Annotation("GQLDeprecated", reason))
    return tuple(annotations)


def type_annotations(node: DescribedNode) -> tuple[Annotation, ...]:
    """Type-level `@GQLDescription`, if the definition has a description."""
    description = description_of(node)
    if description is None:
        return ()
    return (Annotation("GQLDescription", description),)


def union_parents(index: SchemaIndex) -> dict[str, list[str]]:
    """Unions each type belongs to, in union declaration order.

    Args:
        index: Indexed schema definitions

    Returns:
        Member type name to the names of the unions listing it
    """
    parents: dict[str, list[str]] = {}
    for union in index.unions:
        for member in union.types or ():
            names = parents.setdefault(member.name.value, [])
            if union.name.value not in names:
                names.append(union.name.value)
    return parents


def effectful_types(index: SchemaIndex, root_names: set[str]) -> frozenset[str]:
    """Non-root objects and interfaces that need the abstract effect parameter.

    A type needs it when it has a lazy field, refers to a type that needs
    it, or implements an interface that needs it.

    Args:
        index: Indexed schema definitions
        root_names: Names of the root operation types

    Returns:
        Names of the types to parameterize
    """
    candidates = [obj for obj in index.objects if obj.name.value not in root_names]
    candidates += list(index.interfaces.values())
    found: set[str] = set()
    changed = True
    while changed:
        changed = False
        for definition in candidates:
            name = definition.name.value
            if name in found:
                continue
            fields = definition.fields or ()
            if (
                any(has_directive(f, LAZY_DIRECTIVE) for f in fields)
                or any(base_type_name(f.type) in found for f in fields)
                or any(i.name.value in found for i in definition.interfaces or ())
            ):
                found.add(name)
                changed = True
    return frozenset(found)


class SchemaSynthesizer:
    """Builds every declaration of the Types and Operations modules.

    Argument records are collected up front, in declaration order, so the
    names handed out by the resolver do not depend on which declaration is
    built first.

    Args:
        index: Definitions of the document grouped by kind
        config: Generation settings
    """

    def __init__(self, index: SchemaIndex, config: GenerationConfig):
        self.index = index
        self.config = config
        self.resolver = NameResolver(
            index.interfaces,
            reserved=(definition.name.value for definition in index.definitions),
        )
        self.root_names = set(index.root_names.values())
        self.union_parents = union_parents(index)

        effect_param = None
        parameterized: frozenset[str] = frozenset()
        if config.is_effect_type_abstract:
            effect_param = config.effect_type
            parameterized = effectful_types(index, self.root_names)
        self.parameterized = parameterized
        self.translator = TypeTranslator(
            scalar_mappings=dict(config.scalar_mappings),
            effect_param=effect_param,
            parameterized=parameterized,
        )
        self._args_records = self._collect_args_records()

    # -- derivations -------------------------------------------------------

    def _output_derives(self) -> tuple[str, ...]:
        """Derivations of shapes that only appear in results."""
        return (SCHEMA_DERIVATION,) if self.config.add_derives else ()

    def _input_derives(self) -> tuple[str, ...]:
        """Derivations of shapes that can be decoded from arguments."""
        return (SCHEMA_DERIVATION, ARG_DERIVATION) if self.config.add_derives else ()

    def _type_params(self, name: str) -> tuple[str, ...]:
        """`F[_]` for types carrying the abstract effect, nothing otherwise."""
        if name in self.parameterized:
            return (f"{self.config.effect_type}[_]",)
        return ()

    # -- fields ------------------------------------------------------------

    def _effect(self, type_expr: str) -> str:
        """Wrap a type expression in the effect constructor."""
        return f"{self.config.effect_type}[{type_expr}]"

    def _field(
        self,
        owner: FieldOwner,
        field: FieldDefinitionNode,
        wrap: Callable[[str], str] | None = None,
    ) -> FieldDecl:
        """Field declaration, as a function of its args record when it has arguments.

        Args:
            owner: Object or interface declaring the field
            field: Field definition
            wrap: Result wrapper for root operation fields; replaces the
                lazy-directive wrapping

        Returns:
            FieldDecl with a sanitized name
        """
        type_expr = self.translator.translate(field.type)
        if wrap is not None:
            type_expr = wrap(type_expr)
        elif has_directive(field, LAZY_DIRECTIVE):
            type_expr = self._effect(type_expr)
        args_name = self.resolver.resolve(owner, field)
        if args_name is not None:
            type_expr = f"{args_name} => {type_expr}"
        return FieldDecl(sanitize(field.name.value), type_expr, field_annotations(field))

    # -- args records --------------------------------------------------------

    def args_record(self, name: str, field: FieldDefinitionNode) -> RecordDecl:
        """Record bundling the arguments of `field`, in declaration order."""
        fields = tuple(
            FieldDecl(sanitize(arg.name.value), self.translator.translate(arg.type))
            for arg in field.arguments
        )
        return RecordDecl(name, fields, derives=self._input_derives())

    def _collect_args_records(self) -> list[RecordDecl]:
        records: dict[str, RecordDecl] = {}
        owners = [
            definition
            for definition in self.index.definitions
            if isinstance(definition, (ObjectTypeDefinitionNode, InterfaceTypeDefinitionNode))
        ]
        for owner in owners:
            for field in owner.fields or ():
                name = self.resolver.resolve(owner, field)
                if name is not None and name not in records:
                    records[name] = self.args_record(name, field)
        return list(records.values())

    def args_records(self) -> list[RecordDecl]:
        """One record per field with arguments, in declaration order.

        Fields inherited unchanged from an interface share the interface's
        record, which is emitted at its first use.

        Returns:
            Args records with unique names
        """
        return list(self._args_records)

    # -- shapes ------------------------------------------------------------

    def object_record(self, definition: ObjectTypeDefinitionNode) -> RecordDecl:
        """Case class for an object type, extending its interfaces then its unions.

        Args:
            definition: Non-root object type

        Returns:
            RecordDecl for the Types module
        """
        name = definition.name.value
        parents = [self.translator.reference(i.name.value) for i in definition.interfaces or ()]
        parents += [sanitize(union) for union in self.union_parents.get(name, [])]
        return RecordDecl(
            sanitize(name),
            tuple(self._field(definition, f) for f in definition.fields or ()),
            parents=tuple(parents),
            annotations=type_annotations(definition),
            derives=self._output_derives(),
            type_params=self._type_params(name),
        )

    def input_record(self, definition: InputObjectTypeDefinitionNode) -> RecordDecl:
        """Case class for an input type, keeping its schema name.

        Args:
            definition: Input object type

        Returns:
            RecordDecl, annotated with `@GQLInputName` when input names are preserved
        """
        name = definition.name.value
        annotations = type_annotations(definition)
        if self.config.preserve_input_names:
            annotations = (Annotation("GQLInputName", name),) + annotations
        fields = tuple(
            FieldDecl(sanitize(f.name.value), self.translator.translate(f.type), field_annotations(f))
            for f in definition.fields or ()
        )
        return RecordDecl(sanitize(name), fields, annotations=annotations, derives=self._input_derives())

    def union_type(self, definition: UnionTypeDefinitionNode) -> SumTypeDecl:
        """Marker trait for a union; members declare it as a parent."""
        return SumTypeDecl(
            sanitize(definition.name.value),
            SumKind.UNION,
            annotations=type_annotations(definition),
            derives=self._output_derives(),
        )

    def interface_type(self, definition: InterfaceTypeDefinitionNode) -> SumTypeDecl:
        """Trait with one abstract accessor per interface field.

        Args:
            definition: Interface type

        Returns:
            SumTypeDecl tagged with `@GQLInterface`
        """
        name = definition.name.value
        return SumTypeDecl(
            sanitize(name),
            SumKind.INTERFACE,
            accessors=tuple(self._field(definition, f) for f in definition.fields or ()),
            parents=tuple(self.translator.reference(i.name.value) for i in definition.interfaces or ()),
            annotations=(Annotation("GQLInterface"),) + type_annotations(definition),
            derives=self._output_derives(),
            type_params=self._type_params(name),
        )

    def enum_type(self, definition: EnumTypeDefinitionNode) -> SumTypeDecl:
        """Sealed trait with one case object per value, in declaration order."""
        variants = tuple(
            VariantDecl(sanitize(value.name.value), field_annotations(value), self._input_derives())
            for value in definition.values or ()
        )
        return SumTypeDecl(
            sanitize(definition.name.value),
            SumKind.ENUM,
            variants=variants,
            annotations=type_annotations(definition),
            derives=self._input_derives(),
        )

    # -- operation roots ---------------------------------------------------

    def operation_root(self, kind: OperationKind, definition: ObjectTypeDefinitionNode) -> OperationRootDecl:
        """Root record whose fields return effects, or streams for subscriptions.

        Args:
            kind: Query, Mutation or Subscription
            definition: Object type designated as that root

        Returns:
            OperationRootDecl for the Operations module
        """
        type_params: tuple[str, ...] = ()
        if kind is OperationKind.SUBSCRIPTION:
            wrap = self._stream
            if self.config.is_effect_type_abstract and self._references_parameterized(definition):
                type_params = (f"{self.config.effect_type}[_]",)
        else:
            wrap = self._effect
            if self.config.is_effect_type_abstract:
                type_params = (f"{self.config.effect_type}[_]",)

        record = RecordDecl(
            sanitize(definition.name.value),
            tuple(self._field(definition, f, wrap=wrap) for f in definition.fields or ()),
            annotations=type_annotations(definition),
            derives=self._output_derives(),
            type_params=type_params,
        )
        return OperationRootDecl(kind, record)

    @staticmethod
    def _stream(type_expr: str) -> str:
        """Wrap a type expression in a stream that cannot fail."""
        return f"{STREAM_TYPE}[Any, Nothing, {type_expr}]"

    def _references_parameterized(self, definition: ObjectTypeDefinitionNode) -> bool:
        """Check whether any field result names a parameterized type."""
        return any(base_type_name(f.type) in self.parameterized for f in definition.fields or ())

    def operation_roots(self) -> list[OperationRootDecl]:
        """Declared roots in Query, Mutation, Subscription order."""
        objects = {obj.name.value: obj for obj in self.index.objects}
        roots = []
        for operation, kind in ROOT_ORDER:
            name = self.index.root_names.get(operation)
            if name is not None and name in objects:
                roots.append(self.operation_root(kind, objects[name]))
        return roots

    # -- whole schema --------------------------------------------------------

    def synthesize(self) -> SynthesizedSchema:
        """Build both modules.

        Returns:
            SynthesizedSchema with the Types module and the operation roots
        """
        types = TypesModule(
            args_records=tuple(self.args_records()),
            objects=tuple(
                self.object_record(obj) for obj in self.index.objects if obj.name.value not in self.root_names
            ),
            inputs=tuple(self.input_record(i) for i in self.index.inputs),
            unions=tuple(self.union_type(u) for u in self.index.unions),
            interfaces=tuple(self.interface_type(i) for i in self.index.interfaces.values()),
            enums=tuple(self.enum_type(e) for e in self.index.enums),
        )
        operations = tuple(self.operation_roots())
        logger.debug(
            "Synthesized %d records, %d sum types, %d operation roots",
            len(types.records),
            len(types.sum_types),
            len(operations),
        )
        return SynthesizedSchema(types, operations)
