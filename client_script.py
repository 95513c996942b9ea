"""Registry of the ``<script>`` elements a page should emit.

Components register external script files and inline snippets against a
position on the page; the page renders each position once when it is
assembled. Inline scripts are keyed by id so that a component can replace
a snippet it registered earlier in the same run.
"""

from __future__ import annotations

import html
import logging
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)


class Position(str, Enum):
    """Where on the page a script is emitted."""

    HEAD = "head"
    BEGIN = "begin"
    END = "end"


def _render_attributes(html_options: Mapping[str, str]) -> str:
    return "".join(
        f' {name}="{html.escape(str(value), quote=True)}"'
        for name, value in html_options.items()
    )


class ClientScript:
    """Collects script files and inline scripts per page position."""

    def __init__(self) -> None:
        self._files: Dict[Position, Dict[str, Dict[str, str]]] = {}
        self._scripts: Dict[Position, Dict[str, tuple[str, Dict[str, str]]]] = {}

    def register_script_file(
        self,
        url: str,
        position: Position = Position.HEAD,
        html_options: Optional[Mapping[str, str]] = None,
    ) -> "ClientScript":
        """Register an external script; a URL is only emitted once."""
        if self.is_script_file_registered(url):
            return self
        self._files.setdefault(position, {})[url] = dict(html_options or {})
        logger.debug("Registered script file %s at %s", url, position.value)
        return self

    def register_script(
        self,
        script_id: str,
        code: str,
        position: Position = Position.END,
        html_options: Optional[Mapping[str, str]] = None,
    ) -> "ClientScript":
        """Register an inline script, replacing any script with the same id."""
        for scripts in self._scripts.values():
            scripts.pop(script_id, None)
        self._scripts.setdefault(position, {})[script_id] = (
            code,
            dict(html_options or {}),
        )
        logger.debug("Registered script %s at %s", script_id, position.value)
        return self

    def is_script_file_registered(self, url: str) -> bool:
        return any(url in files for files in self._files.values())

    def is_script_registered(self, script_id: str) -> bool:
        return any(script_id in scripts for scripts in self._scripts.values())

    def get_script(self, script_id: str) -> Optional[str]:
        """Return the code of a registered inline script."""
        for scripts in self._scripts.values():
            if script_id in scripts:
                return scripts[script_id][0]
        return None

    @property
    def script_files(self) -> List[str]:
        return [url for files in self._files.values() for url in files]

    def render(self, position: Position) -> str:
        """Return the markup for ``position``: files first, then inline code."""
        tags = [
            f'<script src="{html.escape(url, quote=True)}"'
            f"{_render_attributes(options)}></script>"
            for url, options in self._files.get(position, {}).items()
        ]
        tags.extend(
            f"<script{_render_attributes(options)}>\n{code}\n</script>"
            for code, options in self._scripts.get(position, {}).values()
        )
        return "\n".join(tags)

    def script_tags(self, position: Position) -> List[Dict[str, Any]]:
        """Describe the scripts for ``position`` in render order.

        Each entry has a ``key`` (URL or script id), ``src`` or ``code``,
        and the ``attrs`` to set on the element.
        """
        tags: List[Dict[str, Any]] = [
            {"key": url, "src": url, "attrs": dict(options)}
            for url, options in self._files.get(position, {}).items()
        ]
        tags.extend(
            {"key": script_id, "code": code, "attrs": dict(options)}
            for script_id, (code, options) in self._scripts.get(position, {}).items()
        )
        return tags

    def reset(self) -> None:
        self._files.clear()
        self._scripts.clear()
