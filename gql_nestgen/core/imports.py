"""Import collection and grouping for generated declarations."""

from typing import Iterator

from .ir import ImportDeclaration
from .paths import PathResolver
from .symbols import SymbolTable


class ImportCollector:
    """Insertion-ordered set of names a declaration refers to.

    Each name may carry the module it comes from. Names without a module
    are resolved through the symbol table, or fall back to the framework
    module. A collector lives for exactly one compile call.
    """

    def __init__(self):
        self._names: dict[str, str | None] = {}

    def add(self, name: str, module: str | None = None):
        if name not in self._names:
            self._names[name] = module

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def items(self):
        return self._names.items()


def group_imports(
    collector: ImportCollector,
    symbols: SymbolTable,
    paths: PathResolver,
    own_module: str | None = None,
) -> tuple[ImportDeclaration, ...]:
    """Group collected names by module, in first-seen order.

    Names that resolve to ``own_module`` are dropped.
    """
    grouped: dict[str, list[str]] = {}
    local_modules: set[str] = set()

    for name, module in collector.items():
        entry = symbols.get(name)
        if entry is not None:
            module = paths.module_for_symbol(entry)
            local_modules.add(module)
        elif module is None:
            module = paths.framework_module

        if module == own_module:
            continue
        grouped.setdefault(module, []).append(name)

    return tuple(
        ImportDeclaration(module=module, names=tuple(names), is_local=module in local_modules)
        for module, names in grouped.items()
    )
