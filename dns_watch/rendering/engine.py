"""Template rendering engine."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Protocol

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    Template,
    TemplateNotFound,
    TemplateSyntaxError,
)
from jinja2.exceptions import TemplateError as JinjaTemplateError

from ..core.errors import TemplateError

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def render(self, variables: Mapping[str, Any]) -> str:
        """Render the template against ``variables`` or raise TemplateError."""
        ...


def load_template(template_path: Path) -> Template:
    """Load a Jinja2 template from a file path.

    Args:
        template_path: Path to the template file

    Returns:
        Compiled Jinja2 template
    """
    # Use template's parent directory as loader search path
    loader = FileSystemLoader(str(template_path.parent))
    env = Environment(
        loader=loader,
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )

    try:
        if not template_path.is_file():
            raise TemplateError(f"template not found: {template_path}")
        return env.get_template(template_path.name)
    except TemplateSyntaxError as exc:
        raise TemplateError(f"{template_path}:{exc.lineno}: {exc.message}") from exc
    except TemplateNotFound as exc:
        raise TemplateError(f"template not found: {exc.name}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise TemplateError(f"{template_path}: {exc}") from exc


def build_context(
    constants: Mapping[str, str], variables: Mapping[str, list[str]]
) -> dict[str, Any]:
    """Merge constants and resolved host variables into one template context."""
    context: dict[str, Any] = dict(constants)
    context.update(variables)
    return context


class JinjaRenderer:
    """Renders one template file; the compiled template is cached."""

    def __init__(self, template_path: Path, constants: Mapping[str, str] | None = None) -> None:
        self.template_path = template_path
        self.constants = dict(constants or {})
        self._template: Template | None = None

    def _compiled(self) -> Template:
        if self._template is None:
            logger.debug(f"Compiling template: {self.template_path}")
            self._template = load_template(self.template_path)
        return self._template

    def render(self, variables: Mapping[str, list[str]]) -> str:
        template = self._compiled()
        try:
            return template.render(**build_context(self.constants, variables))
        except JinjaTemplateError as exc:
            raise TemplateError(f"{self.template_path}: {exc}") from exc
        except (TypeError, ValueError, ArithmeticError) as exc:
            raise TemplateError(f"{self.template_path}: {type(exc).__name__}: {exc}") from exc
