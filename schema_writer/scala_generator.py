"""Render synthesized declarations as Scala source."""

import os
import re
from typing import Iterator

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
)

INDENT = "  "
PRODUCT_PARENTS = "scala.Product with scala.Serializable"

TYPES_IMPORT = "import Types._"
STREAM_IMPORT = "import zio.stream.ZStream"
ANNOTATIONS_IMPORT = "import caliban.schema.Annotations._"

IDENTIFIER_PATTERN = r"[A-Za-z_$][A-Za-z0-9_$]*"


def string_literal(value: str) -> str:
    """Quote a string as a Scala literal.

    Args:
        value: Raw string content

    Returns:
        Triple-quoted literal for multi-line text, escaped literal otherwise
    """
    if "\n" in value and '"""' not in value:
        return f'"""{value}"""'
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\r", "\\r")
    return f'"{escaped}"'


def render_annotation(annotation: Annotation) -> str:
    """Render an annotation, quoting its argument when it has one."""
    if annotation.argument is None:
        return f"@{annotation.name}"
    return f"@{annotation.name}({string_literal(annotation.argument)})"


def indent(lines: list[str]) -> list[str]:
    """Indent each non-blank line one level."""
    return [f"{INDENT}{line}" if line else line for line in lines]


def type_params_clause(type_params: tuple[str, ...]) -> str:
    """Bracketed type parameter list, or empty when there are none."""
    return f"[{', '.join(type_params)}]" if type_params else ""


def derives_clause(derives: tuple[str, ...]) -> str:
    """Trailing `derives` clause, or empty when nothing is derived."""
    return f" derives {', '.join(derives)}" if derives else ""


def render_field(field: FieldDecl, separator: str = "") -> list[str]:
    """Render an annotated field on its own lines."""
    lines = [render_annotation(a) for a in field.annotations]
    lines.append(f"{field.name}: {field.type_expr}{separator}")
    return lines


def render_record(record: RecordDecl, multiline: bool = False) -> list[str]:
    """Render a `final case class`.

    Args:
        record: Record declaration
        multiline: Put each field on its own line even without annotations

    Returns:
        Source lines of the declaration
    """
    lines = [render_annotation(a) for a in record.annotations]
    head = f"final case class {record.name}{type_params_clause(record.type_params)}("
    tail = ")"
    if record.parents:
        tail += f" extends {' with '.join(record.parents)}"
    tail += derives_clause(record.derives)

    if multiline or any(f.annotations for f in record.fields):
        lines.append(head)
        for position, field in enumerate(record.fields):
            separator = "," if position < len(record.fields) - 1 else ""
            lines.extend(indent(render_field(field, separator)))
        lines.append(tail)
    else:
        fields = ", ".join(f"{f.name}: {f.type_expr}" for f in record.fields)
        lines.append(f"{head}{fields}{tail}")
    return lines


def render_sum_type(sum_type: SumTypeDecl) -> list[str]:
    """Render a `sealed trait`, with a companion object for enums.

    Args:
        sum_type: Enum, union or interface declaration

    Returns:
        Source lines of the declaration
    """
    lines = [render_annotation(a) for a in sum_type.annotations]
    header = f"sealed trait {sum_type.name}{type_params_clause(sum_type.type_params)} extends {PRODUCT_PARENTS}"
    for parent in sum_type.parents:
        header += f" with {parent}"
    header += derives_clause(sum_type.derives)

    if sum_type.accessors:
        lines.append(f"{header} {{")
        for accessor in sum_type.accessors:
            accessor_lines = render_field(accessor)
            accessor_lines[-1] = f"def {accessor_lines[-1]}"
            lines.extend(indent(accessor_lines))
        lines.append("}")
    else:
        lines.append(header)

    if sum_type.kind is SumKind.ENUM:
        lines.append("")
        lines.append(f"object {sum_type.name} {{")
        for variant in sum_type.variants:
            variant_lines = [render_annotation(a) for a in variant.annotations]
            variant_lines.append(
                f"case object {variant.name} extends {sum_type.name}{derives_clause(variant.derives)}"
            )
            lines.extend(indent(variant_lines))
        lines.append("}")
    return lines


def render_types_module(types: TypesModule) -> str:
    """Render `object Types` with records first and sealed traits after."""
    body = []
    for record in types.records:
        body.extend(render_record(record))

    if types.sum_types:
        body.append("")
    for sum_type in types.unions + types.interfaces:
        body.extend(render_sum_type(sum_type))
    for position, enum in enumerate(types.enums):
        if position > 0 or types.unions or types.interfaces:
            body.append("")
        body.extend(render_sum_type(enum))

    lines = ["object Types {"]
    lines.extend(indent(body))
    lines.append("")
    lines.append("}")
    return "\n".join(lines)


def render_operations_module(operations: tuple[OperationRootDecl, ...]) -> str:
    """Render `object Operations` with one record per root type."""
    lines = ["object Operations {"]
    for root in operations:
        lines.append("")
        lines.extend(indent(render_record(root.record, multiline=True)))
    lines.append("")
    lines.append("}")
    return "\n".join(lines)


def declared_names(types: TypesModule) -> set[str]:
    """Names declared in the Types module, without backquotes."""
    return {decl.name.strip("`") for decl in types.records + types.sum_types}


def referenced_names(type_expr: str) -> set[str]:
    """Extract identifiers referenced in a Scala type expression.

    Args:
        type_expr: Type expression (e.g., "QueryUserArgs => zio.UIO[User]")

    Returns:
        Set of identifiers appearing in it
    """
    return set(re.findall(IDENTIFIER_PATTERN, type_expr))


def operations_reference_types(schema: SynthesizedSchema) -> bool:
    """Check whether any operation field names a Types declaration.

    Args:
        schema: Synthesized declarations

    Returns:
        True when the Operations module needs `import Types._`
    """
    names = declared_names(schema.types)
    return any(
        referenced_names(field.type_expr) & names
        for root in schema.operations
        for field in root.record.fields
    )


def has_subscription_fields(operations: tuple[OperationRootDecl, ...]) -> bool:
    """Check whether a Subscription root with fields is rendered."""
    return any(root.kind is OperationKind.SUBSCRIPTION and root.record.fields for root in operations)


def all_annotations(schema: SynthesizedSchema) -> Iterator[Annotation]:
    """Yield every annotation rendered anywhere in the output.

    Args:
        schema: Synthesized declarations

    Yields:
        Annotations on records, fields, sum types, accessors and enum values
    """
    records = schema.types.records + tuple(root.record for root in schema.operations)
    for record in records:
        yield from record.annotations
        for field in record.fields:
            yield from field.annotations
    for sum_type in schema.types.sum_types:
        yield from sum_type.annotations
        for accessor in sum_type.accessors:
            yield from accessor.annotations
        for variant in sum_type.variants:
            yield from variant.annotations


def import_line(name: str) -> str:
    """Prefix a module path with `import` unless it already has it."""
    return name if name.startswith("import ") else f"import {name}"


def render_schema(schema: SynthesizedSchema, config: GenerationConfig) -> str:
    """Assemble the full output: package, imports, Types and Operations.

    Args:
        schema: Synthesized declarations
        config: Generation settings

    Returns:
        Scala source text, or a single line separator when there is
        nothing to declare
    """
    has_types = not schema.types.is_empty()
    has_operations = bool(schema.operations)
    if not has_types and not has_operations:
        return os.linesep

    sections = []
    if config.package_name:
        sections.append(f"package {config.package_name}")
    if has_types and has_operations and operations_reference_types(schema):
        sections.append(TYPES_IMPORT)
    if has_subscription_fields(schema.operations):
        sections.append(STREAM_IMPORT)
    if any(True for _ in all_annotations(schema)):
        sections.append(ANNOTATIONS_IMPORT)
    if config.extra_imports:
        sections.append("\n".join(import_line(name) for name in config.extra_imports))
    if has_types:
        sections.append(render_types_module(schema.types))
    if has_operations:
        sections.append(render_operations_module(schema.operations))

    return "\n\n".join(sections) + "\n"
