"""End-to-end tests for the generator."""

import os

import pytest
from graphql import DocumentNode

from gql_nestgen.core.config import GeneratorConfig
from gql_nestgen.core.errors import (
    AmbiguousOperationOwnerError,
    GenerationFailedError,
    UnresolvedReferenceError,
    UnsupportedDefinitionKindError,
)
from gql_nestgen.core.generator import Generator
from gql_nestgen.core.hooks import FilterTypesHook, HookRunner
from gql_nestgen.core.scalars import ScalarHandler
from gql_nestgen.core.writer import DeclarationWriter

EXPECTED_FILES = [
    "posts/dto/post.dto.ts",
    "posts/post.resolver.ts",
    "users/dto/create-user-input.dto.ts",
    "users/dto/node.dto.ts",
    "users/dto/user.dto.ts",
    "users/enums/role.enum.ts",
    "users/user.resolver.ts",
]

EXPECTED_POST_RESOLVER = '''\
import { Resolver, Query } from "@nestjs/graphql";
import { Post } from "./dto/post.dto";

@Resolver(() => Post)
export class PostResolver {
  constructor() {}

  @Query(() => [Post], { nullable: "itemsAndList" })
  async posts(): Promise<Post[]> {
    throw new Error("Method is not implemented");
  }
}
'''


@pytest.fixture
def output_root(tmp_path):
    return tmp_path / "out"


@pytest.fixture
def config(output_root):
    return GeneratorConfig(input_root="schema", output_root=str(output_root))


def relative_files(root):
    result = []
    for dirpath, _, filenames in os.walk(root):
        for filename in filenames:
            result.append(os.path.relpath(os.path.join(dirpath, filename), root).replace(os.sep, "/"))
    return sorted(result)


class DropDefinition:
    """Pre-hook removing one named definition from the merged document."""

    def __init__(self, name):
        self.name = name

    def pre_generate(self, document):
        return DocumentNode(
            definitions=tuple(d for d in document.definitions if d.name.value != self.name)
        )


# =============================================================================
# Tests: Output layout
# =============================================================================


class TestGenerate:
    """Tests for a successful run over the two-file schema."""

    def test_writes_one_file_per_declaration(self, config, units, output_root):
        report = Generator(config).generate(units)
        assert relative_files(output_root) == EXPECTED_FILES
        assert report.written == sorted(str(output_root / f) for f in EXPECTED_FILES)
        assert report.warnings == []

    def test_cross_unit_imports(self, config, units, output_root):
        Generator(config).generate(units)
        post = (output_root / "posts/dto/post.dto.ts").read_text()
        assert 'import { User } from "../../users/dto/user.dto";' in post

    def test_resolver_per_schema_file(self, config, units, output_root):
        Generator(config).generate(units)
        assert (output_root / "posts/post.resolver.ts").read_text() == EXPECTED_POST_RESOLVER

        user_resolver = (output_root / "users/user.resolver.ts").read_text()
        assert "@Resolver(() => User)" in user_resolver
        assert "async user(" in user_resolver
        assert "async users(" in user_resolver
        assert "@Mutation(() => User)" in user_resolver
        assert "async createUser(@Args(\"input\") input: CreateUserInput): Promise<User> {" in user_resolver
        assert 'import { CreateUserInput } from "./dto/create-user-input.dto";' in user_resolver
        assert "posts" not in user_resolver

    def test_root_types_get_no_declaration(self, config, units, output_root):
        Generator(config).generate(units)
        assert not (output_root / "users/dto/query.dto.ts").exists()
        assert not (output_root / "users/dto/mutation.dto.ts").exists()

    def test_header(self, output_root, units):
        config = GeneratorConfig(input_root="schema", output_root=str(output_root), header="// Generated")
        report = Generator(config).generate(units)
        for path in report.written:
            with open(path) as f:
                assert f.read().startswith("// Generated\n\n")

    def test_single_worker_matches_parallel(self, tmp_path, units):
        serial = tmp_path / "serial"
        parallel = tmp_path / "parallel"
        Generator(GeneratorConfig(input_root="schema", output_root=str(serial), max_workers=1)).generate(units)
        Generator(GeneratorConfig(input_root="schema", output_root=str(parallel))).generate(units)

        assert relative_files(serial) == relative_files(parallel)
        for name in relative_files(serial):
            assert (serial / name).read_text() == (parallel / name).read_text()

    def test_schema_without_operations(self, config, make_unit, output_root):
        report = Generator(config).generate([make_unit("schema/types.graphql", "enum Color { RED }")])
        assert relative_files(output_root) == ["enums/color.enum.ts"]
        assert len(report.written) == 1

    def test_custom_root_type_names(self, output_root, make_unit):
        config = GeneratorConfig(input_root="schema", output_root=str(output_root), query_type="RootQuery")
        unit = make_unit("schema/pingSchema.graphql", "type RootQuery { ping: String }")
        Generator(config).generate([unit])
        resolver = (output_root / "ping.resolver.ts").read_text()
        assert "@Resolver()\nexport class PingResolver {" in resolver
        assert "async ping(): Promise<string> {" in resolver

    def test_filter_hook(self, config, units, output_root):
        hooks = HookRunner()
        hooks.add_pre_hook(FilterTypesHook(exclude_prefix="Node"))
        Generator(config, hooks=hooks).generate(units)
        assert "users/dto/node.dto.ts" not in relative_files(output_root)

    def test_filtering_a_referenced_type_is_an_error(self, config, units, output_root):
        hooks = HookRunner()
        hooks.add_pre_hook(FilterTypesHook(exclude_prefix="Create"))

        with pytest.raises(GenerationFailedError) as exc_info:
            Generator(config, hooks=hooks).generate(units)

        assert [e.name for e in exc_info.value.errors] == ["CreateUserInput"]
        assert "users/dto/create-user-input.dto.ts" not in relative_files(output_root)

    def test_reused_hook_runner_is_not_modified(self, tmp_path, units):
        hooks = HookRunner()
        for name in ("first", "second"):
            config = GeneratorConfig(
                input_root="schema", output_root=str(tmp_path / name), header="// Generated"
            )
            Generator(config, hooks=hooks).generate(units)

        assert hooks.post_hooks == []
        content = (tmp_path / "second/users/enums/role.enum.ts").read_text()
        assert content.count("// Generated") == 1


class TestScalars:
    """Custom scalars from the configuration."""

    def test_registered_custom_scalar(self, output_root, make_unit):
        config = GeneratorConfig(
            input_root="schema",
            output_root=str(output_root),
            scalars={"Upload": ScalarHandler("any", "GraphQLUpload", module="graphql-upload", explicit=True)},
        )
        unit = make_unit("schema/file.graphql", "scalar Upload type File { data: Upload! }")
        Generator(config).generate([unit])

        content = (output_root / "dto/file.dto.ts").read_text()
        assert 'import { GraphQLUpload } from "graphql-upload";' in content
        assert "  @Field(() => GraphQLUpload)\n  data: any;\n" in content

    def test_declared_scalar_without_mapping_is_imported_from_framework(self, config, make_unit, output_root):
        unit = make_unit(
            "schema/file.graphql",
            "scalar Upload type File { id: ID! blob: Upload } type Query { file: File }",
        )
        report = Generator(config).generate([unit])

        assert "dto/file.dto.ts" in relative_files(output_root)
        content = (output_root / "dto/file.dto.ts").read_text()
        assert 'import { ObjectType, Field, ID, Upload } from "@nestjs/graphql";' in content
        assert "  @Field({ nullable: true })\n  blob: Upload;\n" in content
        assert report.warnings == []

    def test_undeclared_scalar_fails(self, config, make_unit):
        unit = make_unit("schema/file.graphql", "type File { data: Upload! }")
        with pytest.raises(GenerationFailedError) as exc_info:
            Generator(config).generate([unit])
        assert [e.name for e in exc_info.value.errors] == ["Upload"]


# =============================================================================
# Tests: Errors and warnings
# =============================================================================


class TestErrors:
    """Failure collection."""

    def test_all_errors_are_reported(self, config, make_unit, output_root):
        unit = make_unit(
            "schema/broken.graphql",
            "type A { b: Missing } type C { d: Gone } enum E { X }",
        )
        with pytest.raises(GenerationFailedError) as exc_info:
            Generator(config).generate([unit])

        errors = exc_info.value.errors
        assert all(isinstance(e, UnresolvedReferenceError) for e in errors)
        assert sorted(e.name for e in errors) == ["Gone", "Missing"]
        assert "2 error(s)" in exc_info.value.message
        # Jobs that succeed still write their files
        assert (output_root / "enums/e.enum.ts").exists()

    def test_error_names_the_field(self, config, make_unit):
        unit = make_unit("schema/a.graphql", "type Query { find(filter: Filter): String }")
        with pytest.raises(GenerationFailedError) as exc_info:
            Generator(config).generate([unit])
        error = exc_info.value.errors[0]
        assert error.context == "Query.find(filter)"
        assert "Filter" in error.message

    def test_missing_root_field(self, config, units, output_root):
        hooks = HookRunner()
        hooks.add_pre_hook(DropDefinition("Query"))

        with pytest.raises(GenerationFailedError) as exc_info:
            Generator(config, hooks=hooks).generate(units)

        errors = exc_info.value.errors
        assert all(isinstance(e, AmbiguousOperationOwnerError) for e in errors)
        assert sorted(e.field_name for e in errors) == ["posts", "user", "users"]
        # The mutation resolver is still generated
        resolver = (output_root / "users/user.resolver.ts").read_text()
        assert "createUser" in resolver
        assert "async user(" not in resolver

    def test_union_is_a_warning(self, config, make_unit, output_root):
        unit = make_unit("schema/search.graphql", "type A { id: ID } type B { id: ID } union Result = A | B")
        report = Generator(config).generate([unit])

        assert len(report.warnings) == 1
        warning = report.warnings[0]
        assert isinstance(warning, UnsupportedDefinitionKindError)
        assert (warning.kind, warning.name) == ("union", "Result")
        assert relative_files(output_root) == ["dto/a.dto.ts", "dto/b.dto.ts"]

    def test_scalar_and_directive_definitions_are_silent(self, config, make_unit):
        unit = make_unit(
            "schema/a.graphql",
            "scalar DateTime directive @auth on FIELD_DEFINITION type A { at: DateTime }",
        )
        assert Generator(config).generate([unit]).warnings == []

    def test_write_failures_are_collected(self, config, units, output_root):
        class ReadOnlyPostWriter(DeclarationWriter):
            def write(self, result, file_path, hooks=None):
                if file_path.endswith("post.dto.ts"):
                    raise PermissionError(f"Permission denied: '{file_path}'")
                return super().write(result, file_path, hooks)

        with pytest.raises(GenerationFailedError) as exc_info:
            Generator(config, writer=ReadOnlyPostWriter()).generate(units)

        errors = exc_info.value.errors
        assert len(errors) == 1
        assert errors[0].message.startswith("Failed to generate Post: Permission denied")
        assert isinstance(errors[0].__cause__, PermissionError)
        assert relative_files(output_root) == [f for f in EXPECTED_FILES if f != "posts/dto/post.dto.ts"]
