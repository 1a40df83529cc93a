"""Generation hooks for customizing code generation.

Provides protocols for pre- and post-generation hooks that can modify
the merged schema document before generation or transform the generated
TypeScript after.

Example usage:
    from gql_nestgen.core.hooks import PreGenerateHook, PostGenerateHook

    # Pre-generation hook to drop a definition
    class DropLegacy(PreGenerateHook):
        def pre_generate(self, document):
            return DocumentNode(definitions=tuple(
                d for d in document.definitions
                if getattr(d, "name", None) is None or d.name.value != "Legacy"
            ))

    # Post-generation hook to add headers
    class AddLicenseHeader(PostGenerateHook):
        def post_generate(self, filename, content):
            return "// Copyright 2024 My Company\\n\\n" + content
"""

from typing import Protocol, runtime_checkable

from graphql import DocumentNode


@runtime_checkable
class PreGenerateHook(Protocol):
    """Protocol for pre-generation hooks.

    Pre-generation hooks receive the merged schema document before
    declarations are compiled and return the document to compile.
    """

    def pre_generate(self, document: DocumentNode) -> DocumentNode:
        """Called once before code generation.

        Args:
            document: The merged schema document

        Returns:
            The (possibly modified) document to use for generation
        """
        ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Protocol for post-generation hooks.

    Post-generation hooks receive the generated code for each file
    and can transform it before it's written to disk.
    """

    def post_generate(self, filename: str, content: str) -> str:
        """Called after code generation for each file.

        Args:
            filename: The path of the generated file
            content: The generated code content

        Returns:
            The (possibly transformed) code to write
        """
        ...


class AddHeaderHook:
    """Built-in hook to add a header to generated files.

    Example:
        hook = AddHeaderHook("// Auto-generated - do not edit")
    """

    def __init__(self, header: str):
        self.header = header

    def post_generate(self, _filename: str, content: str) -> str:
        """Add a header to the beginning of the file."""
        if not self.header.endswith("\n"):
            header = self.header + "\n\n"
        else:
            header = self.header + "\n"
        return header + content


class FilterTypesHook:
    """Built-in hook to filter type definitions by name prefix/suffix.

    Root operation types are never filtered.

    Example:
        # Remove all types starting with underscore
        hook = FilterTypesHook(exclude_prefix="_")
    """

    def __init__(
        self,
        exclude_prefix: str | None = None,
        exclude_suffix: str | None = None,
        include_prefix: str | None = None,
        include_suffix: str | None = None,
        root_types: tuple[str, ...] = ("Query", "Mutation"),
    ):
        self.exclude_prefix = exclude_prefix
        self.exclude_suffix = exclude_suffix
        self.include_prefix = include_prefix
        self.include_suffix = include_suffix
        self.root_types = root_types

    def _should_include(self, name: str) -> bool:
        """Check if a type should be included."""
        if name in self.root_types:
            return True
        if self.exclude_prefix and name.startswith(self.exclude_prefix):
            return False
        if self.exclude_suffix and name.endswith(self.exclude_suffix):
            return False
        if self.include_prefix and not name.startswith(self.include_prefix):
            return False
        if self.include_suffix and not name.endswith(self.include_suffix):
            return False
        return True

    def pre_generate(self, document: DocumentNode) -> DocumentNode:
        """Filter named definitions from the document."""
        return DocumentNode(
            definitions=tuple(
                d for d in document.definitions
                if getattr(d, "name", None) is None or self._should_include(d.name.value)
            )
        )


class HookRunner:
    """Runs a collection of hooks in order."""

    def __init__(self):
        self.pre_hooks: list[PreGenerateHook] = []
        self.post_hooks: list[PostGenerateHook] = []

    def copy(self) -> "HookRunner":
        """Return a runner with the same hooks that can be extended independently."""
        runner = HookRunner()
        runner.pre_hooks = list(self.pre_hooks)
        runner.post_hooks = list(self.post_hooks)
        return runner

    def add_pre_hook(self, hook: PreGenerateHook):
        """Add a pre-generation hook."""
        self.pre_hooks.append(hook)

    def add_post_hook(self, hook: PostGenerateHook):
        """Add a post-generation hook."""
        self.post_hooks.append(hook)

    def run_pre_hooks(self, document: DocumentNode) -> DocumentNode:
        """Run all pre-generation hooks in order."""
        for hook in self.pre_hooks:
            document = hook.pre_generate(document)
        return document

    def run_post_hooks(self, filename: str, content: str) -> str:
        """Run all post-generation hooks in order."""
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content
