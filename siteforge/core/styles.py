"""CSS generation for component trees."""

from __future__ import annotations

import re
from typing import Any, Iterable

from .models import Component, iter_components

BASE_CSS = """* {
  margin: 0;
  padding: 0;
  box-sizing: border-box;
}
body {
  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
  line-height: 1.6;
  color: #333;
}
.container {
  max-width: 1200px;
  margin: 0 auto;
  padding: 0 20px;
}
.responsive-grid {
  display: grid;
  gap: 20px;
  grid-template-columns: repeat(auto-fit, minmax(300px, 1fr));
}
@media (max-width: 768px) {
  .container {
    padding: 0 15px;
  }
  .responsive-grid {
    grid-template-columns: 1fr;
  }
}
"""

# Shared look for the component classes, shipped in the deployment stylesheet.
COMPONENT_CSS = """.button-component {
  display: inline-block;
  padding: 12px 24px;
  background: #007bff;
  color: white;
  text-decoration: none;
  border-radius: 6px;
  border: none;
  cursor: pointer;
  transition: background-color 0.3s ease;
}
.button-component:hover {
  background: #0056b3;
}
.form-component input,
.form-component textarea,
.form-component select {
  display: block;
  width: 100%;
  padding: 10px;
  margin-bottom: 12px;
  border: 1px solid #ccc;
  border-radius: 4px;
}
.form-component .error,
.error {
  border-color: #dc3545;
}
.navigation-component ul {
  list-style: none;
  display: flex;
  gap: 16px;
}
.breadcrumb-component ol {
  list-style: none;
  display: flex;
  gap: 8px;
}
.gallery-component img {
  width: 100%;
  height: auto;
}
@media (max-width: 768px) {
  .navigation-component ul {
    flex-direction: column;
  }
  .navigation-component ul.active {
    display: flex;
  }
}
"""

MOBILE_BREAKPOINT = "768px"
MOBILE_FONT_SIZE = "14px"
RESPONSIVE_TEXT_TYPES = frozenset({"text", "heading"})

_CAMEL_RE = re.compile(r"([a-z0-9]|(?=[A-Z]))([A-Z])")


def camel_to_kebab(name: str) -> str:
    """``backgroundColor`` -> ``background-color``, ``WebkitTransition`` -> ``-webkit-transition``."""
    return _CAMEL_RE.sub(r"\1-\2", name).lower()


def format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def component_css(component: Component) -> str:
    """Rule block for a single component (children not included)."""
    lines = [f"#{component.id} {{"]
    lines.append(f"  position: {'absolute' if component.position is not None else 'relative'};")
    if component.position is not None:
        lines.append(f"  left: {format_value(component.position.x)}px;")
        lines.append(f"  top: {format_value(component.position.y)}px;")
    if component.size is not None:
        lines.append(f"  width: {format_value(component.size.width)}px;")
        lines.append(f"  height: {format_value(component.size.height)}px;")
    for prop, value in component.styles.items():
        lines.append(f"  {camel_to_kebab(str(prop))}: {format_value(value)};")
    lines.append("}")

    if component.type in RESPONSIVE_TEXT_TYPES:
        font_size = component.styles.get("fontSize")
        mobile = f"calc({format_value(font_size)} * 0.8)" if font_size else MOBILE_FONT_SIZE
        lines.extend(
            [
                f"@media (max-width: {MOBILE_BREAKPOINT}) {{",
                f"  #{component.id} {{",
                f"    font-size: {mobile};",
                "  }",
                "}",
            ]
        )
    return "\n".join(lines) + "\n"


def generate_css(components: Iterable[Component]) -> str:
    parts = [BASE_CSS]
    parts.extend(component_css(c) for c in iter_components(components))
    return "".join(parts)
