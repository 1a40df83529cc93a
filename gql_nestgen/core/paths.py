"""Output locations and module identifiers for generated declarations.

Everything that turns a (name, kind, schema file) triple into a path goes
through ``PathResolver`` so the compiler's import modules and the writer's
file locations can never disagree.
"""

import os
import re
from enum import Enum

from .symbols import SymbolEntry, SymbolKind


class FileKind(Enum):
    ENUM = "enum"
    DTO = "dto"
    RESOLVER = "resolver"


def kebab_case(name: str) -> str:
    """Convert PascalCase, camelCase or snake_case to kebab-case."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1-\2", name)
    s2 = re.sub("([a-z0-9])([A-Z])", r"\1-\2", s1)
    return re.sub(r"[\s_\-]+", "-", s2).strip("-").lower()


def pascal_case(name: str) -> str:
    """Convert kebab-case, snake_case or camelCase to PascalCase."""
    words = re.split(r"[\s_\-.]+", kebab_case(name))
    return "".join(word.capitalize() for word in words if word)


def file_kind_for(kind: SymbolKind) -> FileKind:
    return FileKind.ENUM if kind is SymbolKind.ENUM else FileKind.DTO


def relative_import(from_file: str, module: str, is_local: bool = True) -> str:
    """Turn a module identifier into an import specifier for ``from_file``."""
    if not is_local:
        return module
    path = os.path.relpath(module, os.path.dirname(from_file)).replace(os.sep, "/")
    if not path.startswith("."):
        return f"./{path}"
    return path


class PathResolver:
    """Derives output modules and files from schema file locations.

    A schema file at ``<input_root>/<dir>/x.graphql`` places its generated
    declarations under ``<output_root>/<dir>/``.
    """

    def __init__(
        self,
        input_root: str,
        output_root: str,
        framework_module: str = "@nestjs/graphql",
        schema_suffix: str = "Schema.graphql",
    ):
        self.input_root = input_root
        self.output_root = output_root
        self.framework_module = framework_module
        self.schema_suffix = schema_suffix

    def unit_output_dir(self, unit: str) -> str:
        relative_dir = os.path.dirname(os.path.relpath(unit, self.input_root))
        return os.path.normpath(os.path.join(self.output_root, relative_dir))

    def module_for(self, name: str, kind: FileKind, unit: str) -> str:
        """Return the module identifier (output path without extension)."""
        stem = kebab_case(name)
        if kind is FileKind.ENUM:
            relative = os.path.join("enums", f"{stem}.enum")
        elif kind is FileKind.DTO:
            relative = os.path.join("dto", f"{stem}.dto")
        else:
            relative = f"{stem}.resolver"
        return os.path.join(self.unit_output_dir(unit), relative)

    def module_for_symbol(self, entry: SymbolEntry) -> str:
        return self.module_for(entry.name, file_kind_for(entry.kind), entry.origin_unit)

    def output_file(self, name: str, kind: FileKind, unit: str) -> str:
        return self.module_for(name, kind, unit) + ".ts"

    def resolver_name(self, unit: str) -> str:
        """Name the resolver of a schema file, e.g. ``userSchema.graphql`` -> ``User``."""
        base = os.path.basename(unit)
        if self.schema_suffix and base.endswith(self.schema_suffix) and base != self.schema_suffix:
            base = base[: -len(self.schema_suffix)]
        else:
            base = os.path.splitext(base)[0]
        return pascal_case(base)
