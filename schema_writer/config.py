"""Generation settings supplied by the caller."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

DEFAULT_EFFECT_TYPE = "zio.UIO"


@dataclass(frozen=True)
class GenerationConfig:
    """Options controlling how a schema is turned into Scala code.

    Attributes:
        package_name: Package declared at the top of the output, if any
        effect_type: Effect constructor wrapping resolver results
        is_effect_type_abstract: Render the effect as an `F[_]` type parameter
        extra_imports: Additional imports, rendered in the given order
        scalar_mappings: GraphQL scalar name to Scala type substitutions
        preserve_input_names: Annotate input types with their schema name
        add_derives: Add Scala 3 `derives` clauses to every declaration
    """

    package_name: str | None = None
    effect_type: str = DEFAULT_EFFECT_TYPE
    is_effect_type_abstract: bool = False
    extra_imports: tuple[str, ...] = ()
    scalar_mappings: Mapping[str, str] = field(default_factory=dict, hash=False)
    preserve_input_names: bool = False
    add_derives: bool = False

    def __post_init__(self) -> None:
        # Immutable copies of the caller's values
        object.__setattr__(self, "extra_imports", tuple(self.extra_imports))
        object.__setattr__(self, "scalar_mappings", MappingProxyType(dict(self.scalar_mappings)))
