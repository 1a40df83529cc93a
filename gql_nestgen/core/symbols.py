"""Symbol table for cross-file type lookups.

Records, for every user-defined type, its kind and the schema file that
declared it, plus the schema file of every root operation field. Built once
from all source units before any declaration is compiled, read-only after.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator

from graphql import (
    DocumentNode,
    EnumTypeDefinitionNode,
    InputObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    ScalarTypeDefinitionNode,
)


class SymbolKind(str, Enum):
    OBJECT = "ObjectType"
    INPUT = "InputType"
    ENUM = "Enum"
    INTERFACE = "Interface"
    OPERATION_FIELD = "OperationField"


class OperationKind(str, Enum):
    """Root operation kinds. The value is the NestJS decorator name."""
    QUERY = "Query"
    MUTATION = "Mutation"


@dataclass(frozen=True)
class SourceUnit:
    """One parsed schema file."""
    path: str
    document: DocumentNode


@dataclass(frozen=True)
class SymbolEntry:
    name: str
    kind: SymbolKind
    origin_unit: str


@dataclass
class SymbolTable:
    """Lookup of declared types and root operation fields by name."""
    types: dict[str, SymbolEntry] = field(default_factory=dict)
    queries: dict[str, SymbolEntry] = field(default_factory=dict)
    mutations: dict[str, SymbolEntry] = field(default_factory=dict)
    # Scalars declared in the schema, whether or not a mapping is registered
    scalars: set[str] = field(default_factory=set)

    def get(self, name: str) -> SymbolEntry | None:
        return self.types.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self.types

    def is_declared_scalar(self, name: str) -> bool:
        return name in self.scalars

    def kind_of(self, name: str) -> SymbolKind | None:
        entry = self.types.get(name)
        return entry.kind if entry else None

    def operations(self, kind: OperationKind) -> dict[str, SymbolEntry]:
        return self.queries if kind is OperationKind.QUERY else self.mutations

    def operation_entries(self) -> Iterator[tuple[OperationKind, SymbolEntry]]:
        """Yield every root operation field, queries first."""
        for kind in OperationKind:
            for entry in self.operations(kind).values():
                yield kind, entry

    def restricted_to(self, names: Iterable[str]) -> "SymbolTable":
        """Return a copy without the types and scalars missing from ``names``.

        Root operation fields are kept.
        """
        names = set(names)
        return SymbolTable(
            types={name: entry for name, entry in self.types.items() if name in names},
            queries=dict(self.queries),
            mutations=dict(self.mutations),
            scalars=self.scalars & names,
        )


_TYPE_KINDS = (
    (ObjectTypeDefinitionNode, SymbolKind.OBJECT),
    (InputObjectTypeDefinitionNode, SymbolKind.INPUT),
    (EnumTypeDefinitionNode, SymbolKind.ENUM),
    (InterfaceTypeDefinitionNode, SymbolKind.INTERFACE),
)


def build_symbol_table(
    units: Iterable[SourceUnit],
    query_type: str = "Query",
    mutation_type: str = "Mutation",
) -> SymbolTable:
    """Build the symbol table in one pass over every definition of every unit.

    Root operation types are not recorded as symbols. Their fields are,
    individually, from both definitions and ``extend type`` extensions.
    Declared scalars are recorded by name only.
    On name collisions the last unit wins.
    """
    table = SymbolTable()
    roots = {query_type: OperationKind.QUERY, mutation_type: OperationKind.MUTATION}

    for unit in units:
        for node in unit.document.definitions:
            if isinstance(node, (ObjectTypeDefinitionNode, ObjectTypeExtensionNode)) and node.name.value in roots:
                target = table.operations(roots[node.name.value])
                for field_node in node.fields or ():
                    name = field_node.name.value
                    target[name] = SymbolEntry(name, SymbolKind.OPERATION_FIELD, unit.path)
                continue

            if isinstance(node, ScalarTypeDefinitionNode):
                table.scalars.add(node.name.value)
                continue

            for node_type, kind in _TYPE_KINDS:
                if isinstance(node, node_type):
                    name = node.name.value
                    table.types[name] = SymbolEntry(name, kind, unit.path)
                    break

    return table
