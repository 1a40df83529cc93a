"""Resolution of GraphQL type references.

Pure functions over graphql-core ``TypeNode`` trees (named, non-null and
list wrappers, arbitrarily nested). The symbol table and scalar registry
are passed in explicitly; names that a generated declaration must import
are added to the caller's ``ImportCollector``.
"""

from typing import Callable

from graphql import ListTypeNode, NonNullTypeNode, TypeNode

from .errors import UnresolvedReferenceError
from .imports import ImportCollector
from .ir import Nullability, TargetType
from .scalars import ScalarRegistry
from .symbols import SymbolKind, SymbolTable


def resolve_value_type(
    type_node: TypeNode,
    symbols: SymbolTable,
    scalars: ScalarRegistry,
    imports: ImportCollector,
) -> TargetType:
    """Map a type reference to its TypeScript value type.

    Non-null is erased here; it only affects the nullability metadata.
    A scalar declared in the schema without a registered mapping is an
    opaque reference, imported from the framework module.
    """
    if isinstance(type_node, NonNullTypeNode):
        return resolve_value_type(type_node.type, symbols, scalars, imports)
    if isinstance(type_node, ListTypeNode):
        return resolve_value_type(type_node.type, symbols, scalars, imports).as_sequence()

    name = type_node.name.value
    handler = scalars.get(name)
    if handler is not None:
        return TargetType(handler.ts_type)
    if name in symbols or symbols.is_declared_scalar(name):
        imports.add(name)
        return TargetType(name, is_reference=True)
    raise UnresolvedReferenceError(name)


def resolve_graph_type_name(type_node: TypeNode, leaf: Callable[[str], str] | None = None) -> str:
    """Render the schema-level type with lists as brackets, e.g. ``[[Int]]``.

    Non-null wrappers are not visible. ``leaf`` may rename the innermost type.
    """
    if isinstance(type_node, NonNullTypeNode):
        return resolve_graph_type_name(type_node.type, leaf)
    if isinstance(type_node, ListTypeNode):
        return f"[{resolve_graph_type_name(type_node.type, leaf)}]"
    name = type_node.name.value
    return leaf(name) if leaf else name


def render_type_thunk(
    type_node: TypeNode,
    symbols: SymbolTable,
    scalars: ScalarRegistry,
    imports: ImportCollector,
) -> str:
    """Render the ``() => X`` thunk NestJS uses to read the GraphQL type."""

    def runtime_symbol(name: str) -> str:
        handler = scalars.get(name)
        if handler is None:
            if name not in symbols and not symbols.is_declared_scalar(name):
                raise UnresolvedReferenceError(name)
            imports.add(name)
            return name
        if not handler.global_symbol:
            imports.add(handler.runtime_symbol, handler.module)
        return handler.runtime_symbol

    return f"() => {resolve_graph_type_name(type_node, runtime_symbol)}"


def needs_explicit_type_annotation(
    type_node: TypeNode,
    symbols: SymbolTable,
    scalars: ScalarRegistry,
) -> bool:
    """Check whether the field decorator needs an explicit type thunk.

    Lists always do. So do scalars that share a TypeScript type with
    another scalar (Int, Float, ID) and enums.
    """
    if isinstance(type_node, ListTypeNode):
        return True
    if isinstance(type_node, NonNullTypeNode):
        return needs_explicit_type_annotation(type_node.type, symbols, scalars)

    name = type_node.name.value
    handler = scalars.get(name)
    if handler is not None:
        return handler.explicit
    return symbols.kind_of(name) is SymbolKind.ENUM


def _combine_nullability(list_nullable: bool, items_nullable: bool) -> Nullability:
    if list_nullable and items_nullable:
        return Nullability.ITEMS_AND_LIST
    if list_nullable:
        return Nullability.NULLABLE
    if items_nullable:
        return Nullability.ITEMS
    return Nullability.NON_NULLABLE


def classify_nullability(type_node: TypeNode) -> Nullability:
    """Classify null-admissibility of the outer type and, for lists, its items."""
    if isinstance(type_node, NonNullTypeNode):
        inner = type_node.type
        if isinstance(inner, ListTypeNode):
            return _combine_nullability(False, not isinstance(inner.type, NonNullTypeNode))
        return Nullability.NON_NULLABLE
    if isinstance(type_node, ListTypeNode):
        return _combine_nullability(True, not isinstance(type_node.type, NonNullTypeNode))
    return Nullability.NULLABLE
