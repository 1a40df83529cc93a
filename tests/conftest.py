"""Shared fixtures: a two-file schema used across the test suite."""

import pytest
from graphql import parse

from gql_nestgen.core.compiler import DeclarationCompiler
from gql_nestgen.core.paths import PathResolver
from gql_nestgen.core.scalars import ScalarRegistry
from gql_nestgen.core.symbols import SourceUnit, build_symbol_table

USERS_UNIT = "schema/users/userSchema.graphql"
POSTS_UNIT = "schema/posts/postSchema.graphql"

USERS_SDL = '''
"""A registered user"""
type User {
  id: ID!
  "Display name"
  name: String
  role: Role
  posts: [Post!]!
  friends: [User]
  createdAt: DateTime!
}

enum Role {
  ADMIN
  MEMBER
  GUEST
}

input CreateUserInput {
  name: String!
  role: Role = MEMBER
  tags: [String!]
}

interface Node {
  id: ID!
}

type Query {
  user(id: ID!): User
  users(role: Role, first: Int): [User!]!
}

type Mutation {
  createUser(input: CreateUserInput!): User!
}
'''

POSTS_SDL = '''
type Post {
  id: ID!
  title: String!
  author: User
}

extend type Query {
  posts: [Post]
}
'''


@pytest.fixture
def make_unit():
    """Factory building a SourceUnit from SDL text."""
    def _make(path: str, sdl: str) -> SourceUnit:
        return SourceUnit(path=path, document=parse(sdl))
    return _make


@pytest.fixture
def units(make_unit):
    return [make_unit(USERS_UNIT, USERS_SDL), make_unit(POSTS_UNIT, POSTS_SDL)]


@pytest.fixture
def symbols(units):
    return build_symbol_table(units)


@pytest.fixture
def scalars():
    return ScalarRegistry()


@pytest.fixture
def paths():
    return PathResolver(input_root="schema", output_root="out")


@pytest.fixture
def definitions(units):
    """All definition nodes of the fixture schema by name (root types excluded)."""
    result = {}
    for unit in units:
        for node in unit.document.definitions:
            if node.name.value not in ("Query", "Mutation"):
                result[node.name.value] = node
    return result


@pytest.fixture
def query_fields(units):
    return {f.name.value: f for f in units[0].document.definitions[4].fields}


@pytest.fixture
def mutation_fields(units):
    return {f.name.value: f for f in units[0].document.definitions[5].fields}


@pytest.fixture
def compiler(symbols, scalars, paths):
    return DeclarationCompiler(symbols, scalars, paths)
