"""
HTML template service.

Renders static templates by replacing ``{{ key }}`` placeholders with values.
"""
from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


class TemplateError(Exception):
    """Base class for template rendering failures."""


class TemplateNotFoundError(TemplateError):
    pass


class InvalidTemplateInputError(TemplateError):
    pass


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, dict, list, tuple)):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


class Html:
    """Template renderer with ``{{key}}`` placeholder replacement."""

    def __init__(
        self,
        base_path: Optional[Union[str, Path]] = None,
        debug: bool = False,
    ) -> None:
        self.base_path = Path(base_path) if base_path else TEMPLATES_DIR
        self.debug = debug

    def render(self, template_path: Optional[str], replacements: Any = None) -> str:
        """
        Render a template file with replacements.

        Args:
            template_path: Path relative to ``base_path`` (or absolute)
            replacements: Placeholder name -> value

        Returns:
            Rendered template text

        Raises:
            InvalidTemplateInputError: If the path or replacements are invalid
            TemplateNotFoundError: If the template cannot be read
        """
        if not template_path:
            raise InvalidTemplateInputError("Template path is required")

        template = self.read_file(template_path)
        return self.replace(template, {} if replacements is None else replacements)

    def read_file(self, file_path: str) -> str:
        full_path = self.base_path / file_path
        try:
            return full_path.read_text(encoding="utf-8")
        except OSError as e:
            raise TemplateNotFoundError(
                f"Failed to read template file: {file_path} - {e}"
            ) from e

    def replace(self, template: str, replacements: Any) -> str:
        """Replace every ``{{ name }}`` placeholder that has a replacement."""
        if not template:
            raise InvalidTemplateInputError("Template content is required")
        if not isinstance(replacements, Mapping):
            raise InvalidTemplateInputError("Replacements must be an object")

        html = template
        for key, value in replacements.items():
            if value is None:
                self._log("Warning: Replacing %s with empty string (value was None)", key)
                value = ""
            text = _stringify(value)
            pattern = re.compile(r"{{\s*" + re.escape(str(key)) + r"\s*}}")
            # Callable replacement keeps backslashes in values literal
            html = pattern.sub(lambda _match: text, html)
        return html

    def _log(self, message: str, *args: Any) -> None:
        if self.debug:
            logger.warning("[Html] " + message, *args)
