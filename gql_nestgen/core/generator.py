"""Code generator for GraphQL schemas.

Compiles every type definition and every group of root operation fields
into TypeScript declarations and writes one file per declaration:

    <output>/<dir>/dto/<type>.dto.ts        object, input and interface types
    <output>/<dir>/enums/<type>.enum.ts     enums
    <output>/<dir>/<name>.resolver.ts       resolvers, one per schema file

where ``<dir>`` is the schema file's directory relative to the input root.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Callable

from graphql import (
    DirectiveDefinitionNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    FieldDefinitionNode,
    InputObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    ObjectTypeDefinitionNode,
    ScalarTypeDefinitionNode,
    SchemaDefinitionNode,
    SchemaExtensionNode,
    UnionTypeDefinitionNode,
)

from .compiler import DeclarationCompiler, MethodEntry
from .config import GeneratorConfig
from .errors import (
    AmbiguousOperationOwnerError,
    GenerationError,
    GenerationFailedError,
    UnsupportedDefinitionKindError,
)
from .hooks import AddHeaderHook, HookRunner
from .ir import GenerateResult
from .parser import merge_documents
from .paths import FileKind, PathResolver, file_kind_for
from .scalars import ScalarRegistry
from .symbols import OperationKind, SourceUnit, SymbolTable, build_symbol_table
from .writer import DeclarationWriter

logger = logging.getLogger(__name__)

_TYPE_DEFINITIONS = (
    ObjectTypeDefinitionNode,
    InputObjectTypeDefinitionNode,
    EnumTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
)
# Handled elsewhere (scalars via the registry) or carry no declaration
_IGNORED_DEFINITIONS = (
    ScalarTypeDefinitionNode,
    DirectiveDefinitionNode,
    SchemaDefinitionNode,
    SchemaExtensionNode,
)


@dataclass
class GenerationJob:
    """One output file and the compile call that produces it."""
    path: str
    description: str
    compile: Callable[[], GenerateResult | None]


@dataclass
class GenerationReport:
    written: list[str] = field(default_factory=list)
    warnings: list[GenerationError] = field(default_factory=list)


class Generator:
    """Generates TypeScript declarations from parsed schema units.

    Example:
        units = SchemaLoader("./schema").load_all()
        config = GeneratorConfig(input_root="./schema", output_root="./src")
        report = Generator(config).generate(units)
    """

    def __init__(
        self,
        config: GeneratorConfig,
        hooks: HookRunner | None = None,
        writer: DeclarationWriter | None = None,
    ):
        self.config = config
        self.hooks = hooks.copy() if hooks is not None else HookRunner()
        if config.header:
            self.hooks.add_post_hook(AddHeaderHook(config.header))
        self.writer = writer or DeclarationWriter()
        self.paths = PathResolver(
            input_root=config.input_root,
            output_root=config.output_root,
            framework_module=config.framework_module,
            schema_suffix=config.schema_suffix,
        )
        self.scalars = ScalarRegistry(config.scalars)

    def generate(self, units: list[SourceUnit]) -> GenerationReport:
        """Generate all files.

        Every job runs even if others fail. Raises GenerationFailedError
        listing all failures once every job has finished.
        """
        document = self.hooks.run_pre_hooks(merge_documents(units))
        # Types removed by pre-hooks must not be referenced by the remaining ones
        symbols = build_symbol_table(
            units, self.config.query_type, self.config.mutation_type
        ).restricted_to(_definition_names(document))
        compiler = DeclarationCompiler(symbols, self.scalars, self.paths)

        report = GenerationReport()
        errors: list[GenerationError] = []

        jobs = self._plan_types(document, symbols, compiler, report)
        jobs.extend(self._plan_resolvers(document, symbols, compiler, errors))
        logger.debug("Planned %d files", len(jobs))

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
            futures = {pool.submit(self._run_job, job): job for job in jobs}
            for future in as_completed(futures):
                job = futures[future]
                try:
                    if future.result():
                        report.written.append(job.path)
                except GenerationError as e:
                    logger.debug("Failed to generate %s: %s", job.description, e.message)
                    errors.append(e)
                except Exception as e:
                    logger.debug("Failed to generate %s", job.description, exc_info=True)
                    error = GenerationError(f"Failed to generate {job.description}: {e}")
                    error.__cause__ = e
                    errors.append(error)

        report.written.sort()
        if errors:
            raise GenerationFailedError(f"Generation failed with {len(errors)} error(s)", errors)
        return report

    def _run_job(self, job: GenerationJob) -> bool:
        result = job.compile()
        if result is None:
            return False
        self.writer.write(result, job.path, self.hooks)
        logger.debug("Wrote %s", job.path)
        return True

    def _plan_types(
        self,
        document: DocumentNode,
        symbols: SymbolTable,
        compiler: DeclarationCompiler,
        report: GenerationReport,
    ) -> list[GenerationJob]:
        """Plan one file per object, input, enum and interface definition."""
        jobs = []
        for node in document.definitions:
            if isinstance(node, _TYPE_DEFINITIONS):
                name = node.name.value
                if name in self.config.root_types:
                    continue
                entry = symbols.get(name)
                if entry is None:
                    continue
                jobs.append(
                    GenerationJob(
                        path=self.paths.output_file(name, file_kind_for(entry.kind), entry.origin_unit),
                        description=name,
                        compile=lambda node=node: compiler.compile_type(node),
                    )
                )
            elif isinstance(node, ScalarTypeDefinitionNode):
                if not self.scalars.has(node.name.value):
                    logger.warning(
                        "Scalar %s has no registered mapping, importing it from %s",
                        node.name.value,
                        self.paths.framework_module,
                    )
            elif isinstance(node, UnionTypeDefinitionNode):
                warning = UnsupportedDefinitionKindError("union", node.name.value)
                logger.warning("Skipping %s", warning.message)
                report.warnings.append(warning)
            elif not isinstance(node, _IGNORED_DEFINITIONS):
                name = node.name.value if getattr(node, "name", None) else "<anonymous>"
                warning = UnsupportedDefinitionKindError(node.kind, name)
                logger.warning("Skipping %s", warning.message)
                report.warnings.append(warning)
        return jobs

    def _plan_resolvers(
        self,
        document: DocumentNode,
        symbols: SymbolTable,
        compiler: DeclarationCompiler,
        errors: list[GenerationError],
    ) -> list[GenerationJob]:
        """Plan one resolver per schema file that declares root operation fields."""
        root_fields = {
            OperationKind.QUERY: self._root_fields(document, self.config.query_type),
            OperationKind.MUTATION: self._root_fields(document, self.config.mutation_type),
        }

        groups: dict[str, list[MethodEntry]] = {}
        for kind, entry in symbols.operation_entries():
            field_node = root_fields[kind].get(entry.name)
            if field_node is None:
                errors.append(AmbiguousOperationOwnerError(entry.name, kind.value))
                continue
            groups.setdefault(entry.origin_unit, []).append(MethodEntry(kind, field_node))

        jobs = []
        for unit, entries in groups.items():
            name = self.paths.resolver_name(unit)
            jobs.append(
                GenerationJob(
                    path=self.paths.output_file(name, FileKind.RESOLVER, unit),
                    description=f"{name}Resolver",
                    compile=lambda name=name, entries=entries: compiler.compile_operation_group(name, entries),
                )
            )
        return jobs

    @staticmethod
    def _root_fields(document: DocumentNode, type_name: str) -> dict[str, FieldDefinitionNode]:
        for node in document.definitions:
            if isinstance(node, ObjectTypeDefinitionNode) and node.name.value == type_name:
                return {f.name.value: f for f in node.fields or ()}
        return {}


def _definition_names(document: DocumentNode) -> set[str]:
    return {d.name.value for d in document.definitions if getattr(d, "name", None) is not None}
