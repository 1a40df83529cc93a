"""Core modules for GraphQL to NestJS code generation."""

from .compiler import DeclarationCompiler, MethodEntry
from .config import GeneratorConfig
from .errors import (
    AmbiguousOperationOwnerError,
    GenerationError,
    GenerationFailedError,
    SchemaLoadError,
    UnresolvedReferenceError,
    UnsupportedDefinitionKindError,
)
from .generator import GenerationReport, Generator
from .hooks import (
    AddHeaderHook,
    FilterTypesHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
)
from .imports import ImportCollector, group_imports
from .ir import (
    ClassDeclaration,
    ConstructorDeclaration,
    Decorator,
    EnumDeclaration,
    GenerateResult,
    ImportDeclaration,
    InterfaceDeclaration,
    MethodDeclaration,
    Nullability,
    ParameterDeclaration,
    PropertyDeclaration,
    TargetType,
)
from .parser import SchemaLoader, merge_documents
from .paths import FileKind, PathResolver, kebab_case
from .scalars import ScalarHandler, ScalarRegistry
from .symbols import (
    OperationKind,
    SourceUnit,
    SymbolEntry,
    SymbolKind,
    SymbolTable,
    build_symbol_table,
)
from .type_resolver import (
    classify_nullability,
    needs_explicit_type_annotation,
    resolve_graph_type_name,
    resolve_value_type,
)
from .writer import DeclarationWriter

__all__ = [
    # Config
    "GeneratorConfig",
    # Errors
    "AmbiguousOperationOwnerError",
    "GenerationError",
    "GenerationFailedError",
    "SchemaLoadError",
    "UnresolvedReferenceError",
    "UnsupportedDefinitionKindError",
    # Hooks
    "PreGenerateHook",
    "PostGenerateHook",
    "AddHeaderHook",
    "FilterTypesHook",
    "HookRunner",
    # IR
    "ClassDeclaration",
    "ConstructorDeclaration",
    "Decorator",
    "EnumDeclaration",
    "GenerateResult",
    "ImportDeclaration",
    "InterfaceDeclaration",
    "MethodDeclaration",
    "Nullability",
    "ParameterDeclaration",
    "PropertyDeclaration",
    "TargetType",
    # Scalars
    "ScalarHandler",
    "ScalarRegistry",
    # Symbols
    "OperationKind",
    "SourceUnit",
    "SymbolEntry",
    "SymbolKind",
    "SymbolTable",
    "build_symbol_table",
    # Type resolution
    "classify_nullability",
    "needs_explicit_type_annotation",
    "resolve_graph_type_name",
    "resolve_value_type",
    # Paths and imports
    "FileKind",
    "PathResolver",
    "kebab_case",
    "ImportCollector",
    "group_imports",
    # Compiler
    "DeclarationCompiler",
    "MethodEntry",
    # Loading, generation and output
    "SchemaLoader",
    "merge_documents",
    "Generator",
    "GenerationReport",
    "DeclarationWriter",
]
