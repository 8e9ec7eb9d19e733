"""Declarations synthesized from a schema, ready to be rendered."""

from dataclasses import dataclass, field
from enum import Enum


class SumKind(Enum):
    ENUM = "enum"
    UNION = "union"
    INTERFACE = "interface"


class OperationKind(Enum):
    QUERY = "Query"
    MUTATION = "Mutation"
    SUBSCRIPTION = "Subscription"


@dataclass(frozen=True)
class Annotation:
    """A Caliban annotation such as `@GQLDescription("...")`."""

    name: str
    argument: str | None = None


@dataclass(frozen=True)
class FieldDecl:
    """A record field or interface accessor."""

    name: str
    type_expr: str
    annotations: tuple[Annotation, ...] = ()


@dataclass(frozen=True)
class RecordDecl:
    """A `final case class` declaration."""

    name: str
    fields: tuple[FieldDecl, ...] = ()
    parents: tuple[str, ...] = ()
    annotations: tuple[Annotation, ...] = ()
    derives: tuple[str, ...] = ()
    type_params: tuple[str, ...] = ()


@dataclass(frozen=True)
class VariantDecl:
    """A zero-argument enum case."""

    name: str
    annotations: tuple[Annotation, ...] = ()
    derives: tuple[str, ...] = ()


@dataclass(frozen=True)
class SumTypeDecl:
    """A `sealed trait` standing for an enum, union or interface.

    Union and interface membership is declared on the member records,
    so only enums carry variants and only interfaces carry accessors.
    """

    name: str
    kind: SumKind
    variants: tuple[VariantDecl, ...] = ()
    accessors: tuple[FieldDecl, ...] = ()
    parents: tuple[str, ...] = ()
    annotations: tuple[Annotation, ...] = ()
    derives: tuple[str, ...] = ()
    type_params: tuple[str, ...] = ()


@dataclass(frozen=True)
class OperationRootDecl:
    kind: OperationKind
    record: RecordDecl


@dataclass(frozen=True)
class TypesModule:
    args_records: tuple[RecordDecl, ...] = ()
    objects: tuple[RecordDecl, ...] = ()
    inputs: tuple[RecordDecl, ...] = ()
    unions: tuple[SumTypeDecl, ...] = ()
    interfaces: tuple[SumTypeDecl, ...] = ()
    enums: tuple[SumTypeDecl, ...] = ()

    @property
    def records(self) -> tuple[RecordDecl, ...]:
        """Args, object and input records in rendering order."""
        return self.args_records + self.objects + self.inputs

    @property
    def sum_types(self) -> tuple[SumTypeDecl, ...]:
        """Unions, interfaces and enums in rendering order."""
        return self.unions + self.interfaces + self.enums

    def is_empty(self) -> bool:
        """Check whether the module declares nothing."""
        return not (self.records or self.sum_types)


@dataclass(frozen=True)
class SynthesizedSchema:
    """Everything rendered into the Types and Operations modules."""

    types: TypesModule = field(default_factory=TypesModule)
    operations: tuple[OperationRootDecl, ...] = ()
