"""GraphQL schema loading using graphql-core.

Collects schema files, parses each into a ``SourceUnit`` and merges all of
them into one document.
"""

import logging
import os
from dataclasses import dataclass, field

from graphql import (
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    GraphQLSyntaxError,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    NameNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    StringValueNode,
    parse,
)

from .errors import SchemaLoadError
from .symbols import SourceUnit

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".graphql", ".graphqls", ".gql")

# extension node -> (definition node, name of the member list)
_MERGEABLE = {
    ObjectTypeDefinitionNode: (ObjectTypeDefinitionNode, "fields"),
    ObjectTypeExtensionNode: (ObjectTypeDefinitionNode, "fields"),
    InputObjectTypeDefinitionNode: (InputObjectTypeDefinitionNode, "fields"),
    InputObjectTypeExtensionNode: (InputObjectTypeDefinitionNode, "fields"),
    InterfaceTypeDefinitionNode: (InterfaceTypeDefinitionNode, "fields"),
    InterfaceTypeExtensionNode: (InterfaceTypeDefinitionNode, "fields"),
    EnumTypeDefinitionNode: (EnumTypeDefinitionNode, "values"),
    EnumTypeExtensionNode: (EnumTypeDefinitionNode, "values"),
}
_WITH_INTERFACES = (ObjectTypeDefinitionNode, InterfaceTypeDefinitionNode)


class SchemaLoader:
    """Loads GraphQL schema files into source units."""

    def __init__(self, schema_path: str, extensions: tuple[str, ...] = DEFAULT_EXTENSIONS):
        """Initialize a loader with a path to a schema file or directory."""
        self.schema_path = schema_path
        self.extensions = tuple(extensions)

    def load_all(self) -> list[SourceUnit]:
        """Parse every schema file, in path order."""
        units = []
        for file_path in self._collect_schema_files():
            with open(file_path, encoding="utf-8") as f:
                content = f.read()
            try:
                document = parse(content)
            except GraphQLSyntaxError as e:
                logger.error("Error parsing %s: %s", file_path, e.message)
                raise SchemaLoadError(file_path, e.message) from e
            logger.debug("Parsed %s (%d definitions)", file_path, len(document.definitions))
            units.append(SourceUnit(path=file_path, document=document))
        return units

    def _collect_schema_files(self) -> list[str]:
        """Collect all schema files from the path."""
        files = []
        if os.path.isfile(self.schema_path):
            if self.schema_path.endswith(self.extensions):
                files.append(self.schema_path)
        else:
            for root, _, filenames in os.walk(self.schema_path):
                for filename in filenames:
                    if filename.endswith(self.extensions):
                        files.append(os.path.join(root, filename))
        return sorted(files)


@dataclass
class _PendingDefinition:
    """Parts of one named definition collected across every document."""
    definition_type: type
    members_attr: str
    name: NameNode
    description: StringValueNode | None = None
    directives: list = field(default_factory=list)
    interfaces: dict = field(default_factory=dict)
    members: dict = field(default_factory=dict)

    def add(self, node):
        """Collect the parts of a definition or extension node, first wins."""
        if self.description is None:
            self.description = getattr(node, "description", None)
        self.directives.extend(node.directives or ())
        for interface in getattr(node, "interfaces", None) or ():
            self.interfaces.setdefault(interface.name.value, interface)
        for member in getattr(node, self.members_attr) or ():
            self.members.setdefault(member.name.value, member)

    def build(self):
        kwargs = {
            "name": self.name,
            "description": self.description,
            "directives": tuple(self.directives),
            self.members_attr: tuple(self.members.values()),
        }
        if self.definition_type in _WITH_INTERFACES:
            kwargs["interfaces"] = tuple(self.interfaces.values())
        return self.definition_type(**kwargs)


def merge_documents(units: list[SourceUnit]) -> DocumentNode:
    """Merge all units into a single document.

    Type definitions and ``extend`` extensions sharing a name become one
    definition at the position of the first occurrence. Members are
    deduplicated by name, first wins. Other definitions are kept as-is.
    Nodes are never modified: every merged definition is a new node.
    """
    pending: dict[str, _PendingDefinition] = {}
    definitions: list = []

    for unit in units:
        for node in unit.document.definitions:
            target = _MERGEABLE.get(type(node))
            if target is None:
                definitions.append(node)
                continue

            name = node.name.value
            if name not in pending:
                pending[name] = _PendingDefinition(*target, name=node.name)
                definitions.append(name)
            pending[name].add(node)

    return DocumentNode(
        definitions=tuple(pending[d].build() if isinstance(d, str) else d for d in definitions)
    )
