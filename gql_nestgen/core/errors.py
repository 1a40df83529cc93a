"""Errors raised while loading schemas and generating declarations."""


class GenerationError(Exception):
    """Base class for all generation errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class SchemaLoadError(GenerationError):
    """A schema source could not be read or parsed."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Error parsing {path}: {message}")


class UnresolvedReferenceError(GenerationError):
    """A field, argument or return type names a type that was never declared."""

    def __init__(self, name: str, context: str | None = None):
        self.name = name
        self.context = context
        where = f" (referenced by {context})" if context else ""
        super().__init__(
            f"Unknown type '{name}'{where}: it is neither a declared type nor a registered scalar"
        )


class UnsupportedDefinitionKindError(GenerationError):
    """A definition kind has no generation path."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"Definition '{name}' of kind '{kind}' is not supported")


class AmbiguousOperationOwnerError(GenerationError):
    """A root operation field is known to the symbol table but missing from the merged root type."""

    def __init__(self, field_name: str, operation: str):
        self.field_name = field_name
        self.operation = operation
        super().__init__(
            f"{operation} field '{field_name}' is recorded for a schema file "
            f"but has no definition on the merged {operation} type"
        )


class GenerationFailedError(GenerationError):
    """Raised once at the end of a run that collected one or more errors."""

    def __init__(self, message: str, errors: list[GenerationError]):
        self.errors = errors
        super().__init__(message)
