"""Page compilation: turns a page's component tree into a full document."""

from __future__ import annotations

import logging
import re
from functools import lru_cache
from typing import Optional

from jinja2 import DictLoader, Environment, select_autoescape
from markupsafe import Markup

from .behavior import generate_js
from .config import CompileOptions, resolve
from .markup import heading_level, out, render_components, safe_url
from .models import CONTAINER_TYPES, Component, Page, Project
from .styles import generate_css

logger = logging.getLogger(__name__)

VARIANTS = ("html", "php", "react")

HTML_TEMPLATE = """\
<!DOCTYPE html>
<html lang="{{ lang }}">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ title }}</title>
    <meta name="description" content="{{ description }}">
    <meta name="keywords" content="{{ keywords }}">
{% include "head_extra.j2" %}
    <style>
{{ css }}{{ page_styles }}
    </style>
</head>
<body>
{{ body }}
<script>
{{ js }}{{ page_scripts }}
</script>
</body>
</html>
"""

PHP_TEMPLATE = """\
<?php
// SiteForge generated PHP page
require_once 'config/database.php';

$pageTitle = '{{ php_title }}';
$pageDescription = '{{ php_description }}';
?>
<!DOCTYPE html>
<html lang="{{ lang }}">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
{% if escape %}
    <title><?php echo htmlspecialchars($pageTitle); ?></title>
    <meta name="description" content="<?php echo htmlspecialchars($pageDescription); ?>">
{% else %}
    <title><?php echo $pageTitle; ?></title>
    <meta name="description" content="<?php echo $pageDescription; ?>">
{% endif %}
    <meta name="keywords" content="{{ keywords }}">
{% include "head_extra.j2" %}
    <style>
{{ css }}{{ page_styles }}
    </style>
</head>
<body>
{{ body }}
<script>
{{ js }}{{ page_scripts }}
</script>
</body>
</html>
"""

HEAD_EXTRA_TEMPLATE = """\
{% if og_image %}
    <meta property="og:image" content="{{ og_image }}">
{% endif %}
{% if canonical %}
    <link rel="canonical" href="{{ canonical }}">
{% endif %}
"""

REACT_TEMPLATE = """\
import React from 'react';

const {{ component_name }}: React.FC = () => {
  return (
    <div className="{{ slug }}-page">
      <h1>{{ title }}</h1>
      {/* Generated components */}
      {{ body }}
    </div>
  );
};

export default {{ component_name }};
"""


class PageNotFoundError(LookupError):
    """Raised when a project has no page to preview."""


@lru_cache(maxsize=1)
def _jinja_env() -> Environment:
    return Environment(
        loader=DictLoader(
            {
                "page.html.j2": HTML_TEMPLATE,
                "page.php.j2": PHP_TEMPLATE,
                "head_extra.j2": HEAD_EXTRA_TEMPLATE,
                "page.tsx.j2": REACT_TEMPLATE,
            }
        ),
        autoescape=select_autoescape(["html.j2", "php.j2"], default=False),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def variant_for_project(project: Optional[Project]) -> str:
    if project is None:
        return "html"
    if project.type == "php":
        return "php"
    if project.type == "react":
        return "react"
    return "html"


def page_slug(name: str) -> str:
    return re.sub(r"\s+", "-", name.strip()).lower()


def react_component_name(page: Page) -> str:
    base = re.sub(r"[^0-9A-Za-z_]", "", page.name) or "Untitled"
    if base[0].isdigit():
        base = f"Page{base}"
    return f"{base}Page"


def _php_literal(value: str, options: CompileOptions) -> str:
    if not options.escape_content:
        return value
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _document_context(page: Page, options: CompileOptions) -> dict:
    meta = page.meta
    return {
        "lang": Markup(out(options.lang, options)),
        "title": Markup(out(page.title, options)),
        "description": Markup(out(meta.description, options)),
        "keywords": Markup(", ".join(out(k, options) for k in meta.keywords)),
        "og_image": Markup(safe_url(meta.og_image, options, "")) if meta.og_image else None,
        "canonical": Markup(safe_url(meta.canonical, options, "")) if meta.canonical else None,
        "css": Markup(generate_css(page.components)),
        "page_styles": Markup(page.styles),
        "body": Markup(render_components(page.components, options)),
        "js": Markup(generate_js(page.components, options)),
        "page_scripts": Markup(page.scripts),
        "escape": options.escape_content,
    }


def compile_html(page: Page, options: Optional[CompileOptions] = None) -> str:
    context = _document_context(page, resolve(options))
    return _jinja_env().get_template("page.html.j2").render(**context)


def compile_php(page: Page, options: Optional[CompileOptions] = None) -> str:
    options = resolve(options)
    context = _document_context(page, options)
    context["php_title"] = Markup(_php_literal(page.title, options))
    context["php_description"] = Markup(_php_literal(page.meta.description, options))
    return _jinja_env().get_template("page.php.j2").render(**context)


# -- React stub --------------------------------------------------------------


def _jsx(component: Component, options: CompileOptions) -> str:
    props = component.props
    if component.type == "text":
        return f"<p>{out(props.get('content') or '', options)}</p>"
    if component.type == "heading":
        level = heading_level(props.get("level"), options)
        return f"<h{level}>{out(props.get('content') or '', options)}</h{level}>"
    if component.type == "image":
        return f'<img src="{safe_url(props.get("src") or "", options, "")}" alt="{out(props.get("alt") or "", options)}" />'
    if component.type == "button":
        handler = props.get("onClick")
        on_click = "() => {}" if not handler or options.escape_content else f"() => {{ {handler} }}"
        return f"<button onClick={{{on_click}}}>{out(props.get('text') or 'Button', options)}</button>"
    if component.type in CONTAINER_TYPES and component.type != "form":
        tag = "div" if component.type == "container" else component.type
        children = "\n".join(_jsx(child, options) for child in component.children)
        return f"<{tag}>{children}</{tag}>"
    return f"<div>{{/* {component.type} component */}}</div>"


def compile_react(page: Page, options: Optional[CompileOptions] = None) -> str:
    options = resolve(options)
    body = "\n      ".join(_jsx(c, options) for c in page.components)
    return _jinja_env().get_template("page.tsx.j2").render(
        component_name=react_component_name(page),
        slug=page_slug(page.name),
        title=out(page.title, options),
        body=body,
    )


_COMPILERS = {
    "html": compile_html,
    "php": compile_php,
    "react": compile_react,
}


def compile_page(
    page: Page,
    project: Optional[Project] = None,
    variant: Optional[str] = None,
    options: Optional[CompileOptions] = None,
) -> str:
    """Compile one page into a document string.

    ``variant`` defaults to the one selected by ``project.type`` (html when no
    project is given). Output depends only on the arguments.
    """
    variant = variant or variant_for_project(project)
    compiler = _COMPILERS.get(variant)
    if compiler is None:
        raise ValueError(f"Unknown variant: {variant!r} (expected one of {', '.join(VARIANTS)})")
    logger.debug("Compiling page %s as %s (%d root components)", page.id, variant, len(page.components))
    return compiler(page, options)


def render_preview(project: Project, page_id: Optional[str] = None, options: Optional[CompileOptions] = None) -> str:
    """Compile a page for the live preview; React projects preview as HTML."""
    if page_id is not None:
        page = next((p for p in project.pages if p.id == page_id), None)
    else:
        page = project.pages[0] if project.pages else None
    if page is None:
        raise PageNotFoundError(f"No page found for preview in project {project.id!r}")
    variant = variant_for_project(project)
    if variant == "react":
        variant = "html"
    return compile_page(page, project, variant, options)
