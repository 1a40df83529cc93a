"""TypeScript printer for declaration structures.

Renders Jinja2 templates to produce TypeScript source from the IR.

Supports custom templates via the template_dir parameter:
    writer = DeclarationWriter(template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import os
from pathlib import Path

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .hooks import HookRunner
from .ir import Decorator, GenerateResult, ParameterDeclaration
from .paths import relative_import


def render_decorator(decorator: Decorator) -> str:
    return f"@{decorator.render()}"


def render_parameter(parameter: ParameterDeclaration) -> str:
    decorators = "".join(f"{render_decorator(d)} " for d in parameter.decorators)
    return f"{decorators}{parameter.name}: {parameter.type}"


class DeclarationWriter:
    """Prints declarations to TypeScript and writes them to disk.

    Available templates to override:
        - class.ts.j2: Object types, input types and resolvers
        - interface.ts.j2: Interface types (abstract classes)
        - enum.ts.j2: Enums
        - imports.ts.j2: Import block included by the others
    """

    TEMPLATES = {
        "class": "class.ts.j2",
        "interface": "interface.ts.j2",
        "enum": "enum.ts.j2",
    }

    def __init__(self, template_dir: str | None = None):
        # Build template loader - custom templates take precedence
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_nestgen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["decorator"] = render_decorator
        self.env.filters["parameter"] = render_parameter

    def render(self, result: GenerateResult, file_path: str) -> str:
        """Render a declaration as the content of ``file_path``."""
        imports = [
            {
                "names": imp.names,
                "specifier": relative_import(file_path, imp.module, imp.is_local),
            }
            for imp in result.imports
        ]
        template = self.env.get_template(self.TEMPLATES[result.kind])
        return template.render(declaration=result.declaration, imports=imports)

    def write(self, result: GenerateResult, file_path: str, hooks: HookRunner | None = None) -> str:
        """Render and write a declaration, returning the written content."""
        content = self.render(result, file_path)
        if hooks is not None:
            content = hooks.run_post_hooks(file_path, content)

        directory = os.path.dirname(file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(file_path, "w", encoding="utf-8") as f:
            f.write(content)
        return content
