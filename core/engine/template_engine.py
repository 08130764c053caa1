"""Template Engine — renders namespaced Jinja2 templates into HTML.

Template names take the form ``namespace::name`` (``page::books``,
``layout::default``). Each namespace maps to one directory; ``.html`` is
appended when the name has no extension. Namespaces are checked when the
engine is built, so a missing directory fails at startup instead of on the
first request.
"""

from pathlib import Path
from typing import Any, Mapping, Optional

from fastapi import Request
from jinja2 import Environment, FileSystemLoader, PrefixLoader, select_autoescape
from loguru import logger

from core.config import ConfigurationError

NAMESPACE_DELIMITER = "::"
DEFAULT_SUFFIX = ".html"


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

def fmt_optional(value: Any, placeholder: str = "-") -> str:
    """Render None as a placeholder."""
    if value is None:
        return placeholder
    return str(value)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class TemplateEngine:
    """Renders view templates by namespaced name.

    Usage::

        engine = TemplateEngine({"page": "templates/page"})
        html = engine.render("page::books", {"titles": [...]})
    """

    def __init__(self, paths: Mapping[str, str | Path]):
        loaders = {}
        for namespace, directory in paths.items():
            directory = Path(directory)
            if not directory.is_dir():
                raise ConfigurationError(
                    f"Template namespace '{namespace}' points to missing directory {directory}"
                )
            loaders[namespace] = FileSystemLoader(str(directory))

        self.env = Environment(
            loader=PrefixLoader(loaders, delimiter=NAMESPACE_DELIMITER),
            autoescape=select_autoescape(["html", "xml"]),
        )
        self.env.filters["optional"] = fmt_optional
        logger.info("Template namespaces registered: {}", ", ".join(sorted(loaders)))

    @staticmethod
    def resolve(name: str) -> str:
        """Map ``page::books`` to the loader name ``page::books.html``."""
        if NAMESPACE_DELIMITER not in name:
            raise ValueError(f"Template name '{name}' has no namespace")
        if not Path(name.split(NAMESPACE_DELIMITER, 1)[1]).suffix:
            name += DEFAULT_SUFFIX
        return name

    def render(self, name: str, variables: Optional[Mapping[str, Any]] = None) -> str:
        """Render a template into text."""
        template = self.env.get_template(self.resolve(name))
        return template.render(**(variables or {}))

    def list_namespaces(self) -> list[str]:
        return list(self.env.loader.mapping.keys())


# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------

def get_template_engine(request: Request) -> TemplateEngine:
    """Return the engine built at wiring time."""
    return request.app.state.template_engine
