"""Compiles GraphQL definitions into TypeScript declaration structures.

One ``DeclarationCompiler`` is shared by the whole run. It holds only
read-only state (symbol table, scalar registry, path resolver); the set of
names a declaration imports is created per call and threaded through the
helpers, so concurrent calls never see each other's imports.
"""

import json
from dataclasses import dataclass

from graphql import (
    EnumTypeDefinitionNode,
    FieldDefinitionNode,
    InputObjectTypeDefinitionNode,
    InputValueDefinitionNode,
    InterfaceTypeDefinitionNode,
    ObjectTypeDefinitionNode,
    StringValueNode,
)

from .errors import UnresolvedReferenceError
from .imports import ImportCollector, group_imports
from .ir import (
    ClassDeclaration,
    ConstructorDeclaration,
    Decorator,
    EnumDeclaration,
    GenerateResult,
    InterfaceDeclaration,
    MethodDeclaration,
    Nullability,
    ParameterDeclaration,
    PropertyDeclaration,
)
from .paths import PathResolver
from .scalars import ScalarRegistry
from .symbols import OperationKind, SymbolKind, SymbolTable
from .type_resolver import (
    classify_nullability,
    needs_explicit_type_annotation,
    render_type_thunk,
    resolve_value_type,
)

NOT_IMPLEMENTED_STATEMENT = 'throw new Error("Method is not implemented");'

# TypeScript reserved words that cannot be used as parameter names
TS_RESERVED_WORDS = {
    "break", "case", "catch", "class", "const", "continue", "debugger",
    "default", "delete", "do", "else", "enum", "export", "extends", "false",
    "finally", "for", "function", "if", "import", "in", "instanceof", "new",
    "null", "return", "super", "switch", "this", "throw", "true", "try",
    "typeof", "var", "void", "while", "with", "implements", "interface",
    "let", "package", "private", "protected", "public", "static", "yield",
}


def safe_param_name(name: str) -> str:
    """Make a parameter name safe for TypeScript by suffixing reserved words."""
    if name in TS_RESERVED_WORDS:
        return f"{name}_"
    return name


def print_description(description: StringValueNode | None) -> str | None:
    if description is None or not description.value:
        return None
    return json.dumps(description.value, ensure_ascii=False)


@dataclass(frozen=True)
class MethodEntry:
    """A root operation field to be compiled into a resolver method."""
    operation: OperationKind
    field: FieldDefinitionNode


class DeclarationCompiler:
    """Builds declaration structures from schema definition nodes."""

    def __init__(
        self,
        symbols: SymbolTable,
        scalars: ScalarRegistry | None = None,
        paths: PathResolver | None = None,
    ):
        self.symbols = symbols
        self.scalars = scalars or ScalarRegistry()
        self.paths = paths or PathResolver(".", ".")

    def compile_type(self, node) -> GenerateResult | None:
        """Compile an object, input, interface or enum definition.

        Returns None for definition kinds without a declaration.
        """
        imports = ImportCollector()

        if isinstance(node, EnumTypeDefinitionNode):
            declaration = self._enum_declaration(node)
        elif isinstance(node, (ObjectTypeDefinitionNode, InputObjectTypeDefinitionNode)):
            declaration = self._class_declaration(node, imports)
        elif isinstance(node, InterfaceTypeDefinitionNode):
            declaration = self._interface_declaration(node, imports)
        else:
            return None

        entry = self.symbols.get(node.name.value)
        own_module = self.paths.module_for_symbol(entry) if entry else None
        return GenerateResult(
            declaration=declaration,
            imports=group_imports(imports, self.symbols, self.paths, own_module),
        )

    def compile_operation_group(self, group_name: str, entries: list[MethodEntry]) -> GenerateResult:
        """Compile the root operation fields of one schema file into a resolver class."""
        imports = ImportCollector()
        imports.add("Resolver")

        resolver_args: tuple[str, ...] = ()
        if self.symbols.kind_of(group_name) in (SymbolKind.OBJECT, SymbolKind.INTERFACE):
            imports.add(group_name)
            resolver_args = (f"() => {group_name}",)

        declaration = ClassDeclaration(
            name=f"{group_name}Resolver",
            decorators=(Decorator("Resolver", resolver_args),),
            constructors=(ConstructorDeclaration(),),
            methods=tuple(self._method(entry, imports) for entry in entries),
        )
        return GenerateResult(
            declaration=declaration,
            imports=group_imports(imports, self.symbols, self.paths),
        )

    # -------------------------------------------------------------------------
    # Types
    # -------------------------------------------------------------------------

    def _enum_declaration(self, node: EnumTypeDefinitionNode) -> EnumDeclaration:
        return EnumDeclaration(
            name=node.name.value,
            members=tuple(value.name.value for value in node.values or ()),
        )

    def _class_declaration(self, node, imports: ImportCollector) -> ClassDeclaration:
        decorator = "ObjectType" if isinstance(node, ObjectTypeDefinitionNode) else "InputType"
        return ClassDeclaration(
            name=node.name.value,
            decorators=(self._type_decorator(decorator, node, imports),),
            properties=self._properties(node, imports),
        )

    def _interface_declaration(self, node: InterfaceTypeDefinitionNode, imports: ImportCollector):
        return InterfaceDeclaration(
            name=node.name.value,
            decorators=(self._type_decorator("InterfaceType", node, imports),),
            properties=self._properties(node, imports),
        )

    def _type_decorator(self, name: str, node, imports: ImportCollector) -> Decorator:
        imports.add(name)
        description = print_description(node.description)
        args = (f"{{ description: {description} }}",) if description else ()
        return Decorator(name, args)

    def _properties(self, node, imports: ImportCollector) -> tuple[PropertyDeclaration, ...]:
        return tuple(
            self._property(node.name.value, field_node, imports, leading_blank_line=idx > 0)
            for idx, field_node in enumerate(node.fields or ())
        )

    def _property(
        self,
        owner: str,
        field_node: FieldDefinitionNode | InputValueDefinitionNode,
        imports: ImportCollector,
        leading_blank_line: bool = False,
    ) -> PropertyDeclaration:
        imports.add("Field")
        context = f"{owner}.{field_node.name.value}"
        value_type = self._value_type(field_node, imports, context)

        args = []
        if needs_explicit_type_annotation(field_node.type, self.symbols, self.scalars):
            args.append(self._thunk(field_node, imports, context))
        options = self._options(field_node)
        if options:
            args.append(options)

        return PropertyDeclaration(
            name=field_node.name.value,
            type=value_type,
            decorators=(Decorator("Field", tuple(args)),),
            leading_blank_line=leading_blank_line,
        )

    # -------------------------------------------------------------------------
    # Resolvers
    # -------------------------------------------------------------------------

    def _method(self, entry: MethodEntry, imports: ImportCollector) -> MethodDeclaration:
        field_node = entry.field
        decorator = entry.operation.value
        imports.add(decorator)
        context = f"{decorator}.{field_node.name.value}"

        value_type = self._value_type(field_node, imports, context)
        args = [self._thunk(field_node, imports, context)]
        options = self._options(field_node)
        if options:
            args.append(options)

        return MethodDeclaration(
            name=field_node.name.value,
            return_type=f"Promise<{value_type}>",
            decorators=(Decorator(decorator, tuple(args)),),
            parameters=tuple(
                self._parameter(arg, imports, context) for arg in field_node.arguments or ()
            ),
            is_async=True,
            statements=(NOT_IMPLEMENTED_STATEMENT,),
        )

    def _parameter(
        self, arg: InputValueDefinitionNode, imports: ImportCollector, context: str
    ) -> ParameterDeclaration:
        imports.add("Args")
        name = arg.name.value
        arg_context = f"{context}({name})"
        value_type = self._value_type(arg, imports, arg_context)

        options = []
        if needs_explicit_type_annotation(arg.type, self.symbols, self.scalars):
            options.append(f"type: {self._thunk(arg, imports, arg_context)}")
        nullability = classify_nullability(arg.type)
        if nullability is not Nullability.NON_NULLABLE:
            options.append(f"nullable: {nullability.literal}")

        args = [json.dumps(name)]
        if options:
            args.append(f"{{ {', '.join(options)} }}")

        return ParameterDeclaration(
            name=safe_param_name(name),
            type=value_type,
            decorators=(Decorator("Args", tuple(args)),),
        )

    # -------------------------------------------------------------------------
    # Shared helpers
    # -------------------------------------------------------------------------

    def _value_type(self, node, imports: ImportCollector, context: str) -> str:
        try:
            return resolve_value_type(node.type, self.symbols, self.scalars, imports).render()
        except UnresolvedReferenceError as e:
            raise UnresolvedReferenceError(e.name, context) from e

    def _thunk(self, node, imports: ImportCollector, context: str) -> str:
        try:
            return render_type_thunk(node.type, self.symbols, self.scalars, imports)
        except UnresolvedReferenceError as e:
            raise UnresolvedReferenceError(e.name, context) from e

    def _options(self, node: FieldDefinitionNode | InputValueDefinitionNode) -> str | None:
        """Render the ``{ nullable, description }`` options, or None when empty."""
        options = []
        nullability = classify_nullability(node.type)
        if nullability is not Nullability.NON_NULLABLE:
            options.append(f"nullable: {nullability.literal}")
        description = print_description(node.description)
        if description:
            options.append(f"description: {description}")
        if not options:
            return None
        return f"{{ {', '.join(options)} }}"
