"""Generator configuration."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .parser import DEFAULT_EXTENSIONS
from .scalars import ScalarHandler


class GeneratorConfig(BaseModel):
    """Settings for one generation run.

    Can be loaded from a JSON file and overridden from the command line:
        config = GeneratorConfig.from_file("gql-nestgen.json")
        config = config.model_copy(update={"output_root": "./src"})
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    input_root: str = "."
    output_root: str = "generated"
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS
    query_type: str = "Query"
    mutation_type: str = "Mutation"
    framework_module: str = "@nestjs/graphql"
    # Stripped from schema file names to name resolvers: userSchema.graphql -> User
    schema_suffix: str = "Schema.graphql"
    header: str | None = None
    max_workers: int | None = Field(default=None, ge=1)
    scalars: dict[str, ScalarHandler] = Field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str | Path) -> "GeneratorConfig":
        """Load a configuration from a JSON file."""
        return cls.model_validate_json(Path(path).read_text(encoding="utf-8"))

    @property
    def root_types(self) -> tuple[str, str]:
        return (self.query_type, self.mutation_type)
