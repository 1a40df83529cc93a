"""Scalar mappings for TypeScript code generation.

Describes how a GraphQL scalar maps to a TypeScript value type and which
runtime symbol represents it inside NestJS type thunks.

Example usage:
    from gql_nestgen.core.scalars import ScalarHandler, ScalarRegistry

    registry = ScalarRegistry()
    registry.register(
        "Upload",
        ScalarHandler(
            ts_type="FileUpload",
            runtime_symbol="GraphQLUpload",
            module="graphql-upload",
            explicit=True,
        ),
    )
"""

from dataclasses import dataclass

FRAMEWORK = None  # marker: symbol comes from the framework module


@dataclass(frozen=True)
class ScalarHandler:
    """Mapping of one GraphQL scalar.

    Attributes:
        ts_type: The TypeScript value type (e.g. "string", "Date")
        runtime_symbol: The value used in ``() => X`` type thunks
        module: Module to import ``runtime_symbol`` from. None with
            ``global_symbol`` set means a JavaScript global (String, Date),
            None otherwise means the framework module.
        explicit: Whether fields of this scalar need an explicit type thunk
        global_symbol: Whether ``runtime_symbol`` is a JavaScript global
    """
    ts_type: str
    runtime_symbol: str
    module: str | None = FRAMEWORK
    explicit: bool = False
    global_symbol: bool = False


class ScalarRegistry:
    """Registry for scalar handlers.

    Manages the mapping between GraphQL scalar names and their handlers.

    Example:
        registry = ScalarRegistry()
        handler = registry.get("Int")
        if handler:
            ts_type = handler.ts_type  # "number"
    """

    def __init__(self, overrides: dict[str, ScalarHandler] | None = None):
        self._handlers: dict[str, ScalarHandler] = {}
        self._register_defaults()
        for name, handler in (overrides or {}).items():
            self.register(name, handler)

    def _register_defaults(self):
        """Register built-in default handlers."""
        self.register("String", ScalarHandler("string", "String", global_symbol=True))
        self.register("Boolean", ScalarHandler("boolean", "Boolean", global_symbol=True))
        self.register("DateTime", ScalarHandler("Date", "Date", global_symbol=True))
        # Int, Float and ID collapse onto number/string, so they need a thunk
        self.register("Int", ScalarHandler("number", "Int", explicit=True))
        self.register("Float", ScalarHandler("number", "Float", explicit=True))
        self.register("ID", ScalarHandler("string", "ID", explicit=True))
        json_handler = ScalarHandler("any", "GraphQLJSON", module="graphql-type-json", explicit=True)
        self.register("JSON", json_handler)
        self.register("JSONObject", json_handler)

    def register(self, scalar_name: str, handler: ScalarHandler):
        """Register a handler for a scalar type."""
        self._handlers[scalar_name] = handler

    def get(self, scalar_name: str) -> ScalarHandler | None:
        """Get the handler for a scalar type, or None if not registered."""
        return self._handlers.get(scalar_name)

    def has(self, scalar_name: str) -> bool:
        """Check if a handler is registered for a scalar type."""
        return scalar_name in self._handlers


def parse_scalar_option(value: str) -> tuple[str, ScalarHandler]:
    """Parse a ``NAME=tsType:symbol[:module]`` command-line value.

    Custom scalars always get an explicit type thunk. Without a module the
    symbol is imported from the framework module.
    """
    name, sep, mapping = value.partition("=")
    parts = mapping.split(":", 2)
    if not sep or not name or len(parts) < 2 or not all(parts):
        raise ValueError(f"Invalid scalar mapping '{value}', expected NAME=tsType:symbol[:module]")
    ts_type, symbol = parts[0], parts[1]
    module = parts[2] if len(parts) == 3 else FRAMEWORK
    return name, ScalarHandler(ts_type, symbol, module=module, explicit=True)
