"""Tests for generator configuration."""

import json

import pytest
from pydantic import ValidationError

from gql_nestgen.core.config import GeneratorConfig
from gql_nestgen.core.parser import DEFAULT_EXTENSIONS
from gql_nestgen.core.scalars import ScalarHandler


class TestGeneratorConfig:
    """Tests for GeneratorConfig."""

    def test_defaults(self):
        config = GeneratorConfig()
        assert config.output_root == "generated"
        assert config.extensions == DEFAULT_EXTENSIONS
        assert config.framework_module == "@nestjs/graphql"
        assert config.schema_suffix == "Schema.graphql"
        assert config.root_types == ("Query", "Mutation")
        assert config.header is None
        assert config.max_workers is None
        assert config.scalars == {}

    def test_from_file(self, tmp_path):
        path = tmp_path / "gql-nestgen.json"
        path.write_text(json.dumps({
            "output_root": "src/generated",
            "query_type": "RootQuery",
            "header": "// Generated",
            "scalars": {
                "Upload": {
                    "ts_type": "any",
                    "runtime_symbol": "GraphQLUpload",
                    "module": "graphql-upload",
                    "explicit": True,
                },
            },
        }))

        config = GeneratorConfig.from_file(path)

        assert config.output_root == "src/generated"
        assert config.root_types == ("RootQuery", "Mutation")
        assert config.header == "// Generated"
        assert config.scalars["Upload"] == ScalarHandler(
            "any", "GraphQLUpload", module="graphql-upload", explicit=True
        )

    def test_unknown_keys_rejected(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"output": "src"}))
        with pytest.raises(ValidationError):
            GeneratorConfig.from_file(path)

    def test_workers_must_be_positive(self):
        with pytest.raises(ValidationError):
            GeneratorConfig(max_workers=0)

    def test_frozen(self):
        config = GeneratorConfig()
        with pytest.raises(ValidationError):
            config.output_root = "elsewhere"

    def test_model_copy_overrides(self):
        config = GeneratorConfig(output_root="a", header="// A")
        updated = config.model_copy(update={"output_root": "b"})
        assert updated.output_root == "b"
        assert updated.header == "// A"
        assert config.output_root == "a"
