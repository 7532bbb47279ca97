"""Render changelog data into an MDX release block."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..models import ChangelogData


class ReleaseRenderer:
    """Serialises grouped entries into the ``### Version`` block layout.

    A Jinja2 template may replace the built-in layout; it receives
    ``version``, ``release_date`` and ``categories``.
    """

    def __init__(
        self,
        *,
        capitalize_components: bool = False,
        template_path: Path | None = None,
    ) -> None:
        self.capitalize_components = capitalize_components
        self.template_path = Path(template_path) if template_path else None
        self._env = self._create_env(self.template_path)

    def render(self, version: str, release_date: str, data: ChangelogData) -> str:
        categories = self.build_context(data)
        if self._env is not None and self.template_path is not None:
            template = self._env.get_template(self.template_path.name)
            rendered = template.render(
                version=version,
                release_date=release_date,
                categories=categories,
            )
            return rendered.strip("\n") + "\n"

        lines: List[str] = [
            f"### Version {version}",
            "",
            f"#### Released on: {release_date}",
            "",
        ]
        for category in categories:
            lines.append(f"**{category['name']}**")
            lines.append("")
            for component in category["components"]:
                lines.append(f"- **{component['name']}:**")
                lines.extend(f"\t- {text}" for text in component["lines"])
                lines.append("")
        return "\n".join(lines).rstrip("\n") + "\n"

    def build_context(self, data: ChangelogData) -> List[Dict[str, object]]:
        """Flatten ``data`` into plain dicts in rendering order."""
        categories: List[Dict[str, object]] = []
        for category, components in data.categories():
            rendered_components = []
            for component, entries in components.items():
                lines: List[str] = []
                for entry in entries:
                    lines.extend(entry.lines())
                rendered_components.append(
                    {"name": self._component_name(component), "lines": lines}
                )
            categories.append({"name": category, "components": rendered_components})
        return categories

    def _component_name(self, component: str) -> str:
        if self.capitalize_components and component:
            return component[0].upper() + component[1:]
        return component

    @staticmethod
    def _create_env(template_path: Path | None) -> Environment | None:
        if template_path is None:
            return None
        loader = FileSystemLoader(str(template_path.parent))
        return Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )


__all__ = ["ReleaseRenderer"]
