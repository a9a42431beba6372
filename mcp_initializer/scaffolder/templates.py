"""Jinja2 template rendering for project scaffolding.

Provides the TemplateRenderer class which loads templates from the
``mcp_initializer/scaffolder/templates/`` directory and substitutes
``{{key}}`` placeholders with string values.

Placeholders are matched literally: the text between the braces, trimmed, is
the key, so ``{{user-name}}`` and ``{{config.port}}`` are plain keys rather
than Jinja expressions.  A placeholder may carry a Jinja filter chain
(``{{ projectName | tojson }}``); that part is evaluated by Jinja.  Text
outside placeholders is emitted untouched, values are inserted without HTML
escaping, and placeholders that appear inside a value are not re-expanded.

Placeholders whose key is not supplied are handled according to the
``undefined`` policy:

* ``"verbatim"`` (default) -- the original token, spacing included, is left
  in the output.
* ``"strict"`` -- rendering fails with ``UnresolvedPlaceholder``.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Literal

from jinja2 import Environment, FileSystemLoader, StrictUndefined
from jinja2 import TemplateError as JinjaTemplateError
from jinja2 import TemplateNotFound as JinjaTemplateNotFound

from mcp_initializer.errors import TemplateError, TemplateNotFound, UnresolvedPlaceholder
from mcp_initializer.utils import print_warning, write_file


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

# Block and comment syntax is only ever produced by the renderer itself.
_BLOCK_START, _BLOCK_END = "<%mcp-init%", "%mcp-init%>"
_COMMENT_START, _COMMENT_END = "<#mcp-init#", "#mcp-init#>"

_PLACEHOLDER = re.compile(r"\{\{(?P<inner>[^{}]*)\}\}")

_VALUES = "placeholder_values"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders scaffold templates from the bundled asset directory.

    Template names are paths relative to the template directory, e.g.
    ``"project-files/README.md.j2"`` or ``"rules/python.md"``.
    """

    def __init__(
        self,
        template_dir: str | Path | None = None,
        undefined: Literal["verbatim", "strict"] = "verbatim",
    ) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.strict = undefined == "strict"
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            block_start_string=_BLOCK_START,
            block_end_string=_BLOCK_END,
            comment_start_string=_COMMENT_START,
            comment_end_string=_COMMENT_END,
        )

    # -- Rendering ---------------------------------------------------------

    def render(self, template_name: str, variables: dict[str, Any] | None = None) -> str:
        """Render a single template with the provided variables.

        Raises:
            TemplateNotFound: if the asset cannot be read.
            UnresolvedPlaceholder: in strict mode, for any unknown placeholder.
            TemplateError: if a filter chain fails to evaluate.
        """
        source = self._source(template_name)
        if source is None:
            print_warning(f"Failed to load template {template_name}")
            raise TemplateNotFound(template_name)
        return self._render_source(template_name, source, variables or {})

    def render_string(self, template_string: str, variables: dict[str, Any] | None = None) -> str:
        """Render an inline template string with the provided variables."""
        return self._render_source("<string>", template_string, variables or {})

    async def render_to_file(
        self,
        template_name: str,
        output_path: str | Path,
        variables: dict[str, Any] | None = None,
    ) -> Path:
        """Render a template and write the result to *output_path*.

        Parent directories are created automatically.
        """
        content = self.render(template_name, variables)
        return await write_file(output_path, content)

    # -- Raw access --------------------------------------------------------

    def load_raw(self, template_name: str) -> str | None:
        """Return the unrendered text of an asset, or ``None`` if it is absent."""
        return self._source(template_name)

    # -- Internal ----------------------------------------------------------

    def _source(self, template_name: str) -> str | None:
        try:
            source, _filename, _uptodate = self.env.loader.get_source(self.env, template_name)
        except (JinjaTemplateNotFound, OSError):
            return None
        return source

    def _render_source(self, name: str, source: str, variables: dict[str, Any]) -> str:
        jinja_source = self._to_jinja(name, source, variables)
        try:
            return self.env.from_string(jinja_source).render({_VALUES: variables})
        except JinjaTemplateError as exc:
            raise TemplateError(f"Template {name} could not be rendered: {exc}") from exc

    def _to_jinja(self, name: str, source: str, variables: dict[str, Any]) -> str:
        """Translate *source* into Jinja syntax for the given *variables*.

        Literal text is wrapped in ``raw`` blocks; each supplied placeholder
        becomes a lookup into the values mapping, followed by its filters.
        """
        parts: list[str] = []
        position = 0
        for match in _PLACEHOLDER.finditer(source):
            parts.append(_literal(source[position:match.start()]))
            parts.append(self._placeholder(name, match, variables))
            position = match.end()
        parts.append(_literal(source[position:]))
        return "".join(parts)

    def _placeholder(self, name: str, match: re.Match[str], variables: dict[str, Any]) -> str:
        key, _bar, filters = match.group("inner").partition("|")
        key = key.strip()
        if not key:
            return _literal(match.group(0))
        if key not in variables:
            if self.strict:
                raise UnresolvedPlaceholder(name, key)
            return _literal(match.group(0))

        expression = f"{_VALUES}[{key!r}]"
        if filters.strip():
            expression += f" | {filters.strip()}"
        return "{{ " + expression + " }}"


def _literal(text: str) -> str:
    if not text:
        return ""
    return f"{_BLOCK_START} raw {_BLOCK_END}{text}{_BLOCK_START} endraw {_BLOCK_END}"
