"""Intermediate Representation (IR) for generated declarations.

This module defines dataclasses that describe the TypeScript declarations
produced from a GraphQL schema in a printer-agnostic way. The compiler
builds them, the writer prints them. Every structure is frozen: a
declaration is never mutated after it has been returned.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import ClassVar


class Nullability(Enum):
    """Null-admissibility of a type reference at the list and item level.

    The values are the ones NestJS accepts for the ``nullable`` option.
    """
    NON_NULLABLE = False
    NULLABLE = True
    ITEMS = "items"  # list non-null, items nullable
    ITEMS_AND_LIST = "itemsAndList"

    @property
    def literal(self) -> str:
        """Return the TypeScript literal for the ``nullable`` option."""
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        return f'"{self.value}"'


@dataclass(frozen=True)
class TargetType:
    """Target-language value type of a field, argument or return value."""
    name: str
    is_reference: bool = False  # True for user-defined types
    list_depth: int = 0

    @property
    def is_sequence(self) -> bool:
        return self.list_depth > 0

    def as_sequence(self) -> "TargetType":
        """Return a sequence of this type."""
        return replace(self, list_depth=self.list_depth + 1)

    def render(self) -> str:
        """Render the type as TypeScript, e.g. ``string[]``."""
        return self.name + "[]" * self.list_depth


@dataclass(frozen=True)
class Decorator:
    """A decorator with its already-rendered argument expressions."""
    name: str
    arguments: tuple[str, ...] = ()

    def render(self) -> str:
        return f"{self.name}({', '.join(self.arguments)})"


@dataclass(frozen=True)
class PropertyDeclaration:
    name: str
    type: str
    decorators: tuple[Decorator, ...] = ()
    # Printer hint only: emit a blank line before this property
    leading_blank_line: bool = False


@dataclass(frozen=True)
class ParameterDeclaration:
    name: str
    type: str
    decorators: tuple[Decorator, ...] = ()


@dataclass(frozen=True)
class ConstructorDeclaration:
    parameters: tuple[ParameterDeclaration, ...] = ()


@dataclass(frozen=True)
class MethodDeclaration:
    name: str
    return_type: str
    decorators: tuple[Decorator, ...] = ()
    parameters: tuple[ParameterDeclaration, ...] = ()
    is_async: bool = False
    statements: tuple[str, ...] = ()


@dataclass(frozen=True)
class ClassDeclaration:
    """A class declaration (object type, input type or resolver)."""
    kind: ClassVar[str] = "class"

    name: str
    decorators: tuple[Decorator, ...] = ()
    properties: tuple[PropertyDeclaration, ...] = ()
    constructors: tuple[ConstructorDeclaration, ...] = ()
    methods: tuple[MethodDeclaration, ...] = ()
    is_exported: bool = True


@dataclass(frozen=True)
class InterfaceDeclaration:
    """A GraphQL interface, printed as an abstract class."""
    kind: ClassVar[str] = "interface"

    name: str
    decorators: tuple[Decorator, ...] = ()
    properties: tuple[PropertyDeclaration, ...] = ()
    is_exported: bool = True


@dataclass(frozen=True)
class EnumDeclaration:
    kind: ClassVar[str] = "enum"

    name: str
    members: tuple[str, ...] = ()
    is_exported: bool = True


Declaration = ClassDeclaration | InterfaceDeclaration | EnumDeclaration


@dataclass(frozen=True)
class ImportDeclaration:
    """Names imported from one module.

    Local modules are output paths without extension; the writer turns
    them into paths relative to the importing file.
    """
    module: str
    names: tuple[str, ...]
    is_local: bool = False


@dataclass(frozen=True)
class GenerateResult:
    """A compiled declaration together with its grouped imports."""
    declaration: Declaration
    imports: tuple[ImportDeclaration, ...] = field(default_factory=tuple)

    @property
    def kind(self) -> str:
        return self.declaration.kind
