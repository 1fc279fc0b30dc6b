"""HTML fragment rendering for component trees."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterable, Optional
from urllib.parse import urlsplit

from markupsafe import escape

from .config import CompileOptions, resolve
from .models import Component

logger = logging.getLogger(__name__)

Renderer = Callable[[Component, CompileOptions], str]

FIELD_TYPES = ("input", "textarea", "select")
MAP_EMBED_URL = "https://maps.google.com/maps?q={lat},{lng}&z={zoom}&output=embed"
DEFAULT_MAP = {"lat": 48.8566, "lng": 2.3522, "zoom": 12}
SAFE_URL_SCHEMES = ("", "http", "https", "mailto", "tel")


def out(value: Any, options: CompileOptions) -> str:
    """Interpolate a value into HTML, escaping only when the options ask for it."""
    if value is None:
        value = ""
    if options.escape_content:
        return str(escape(value))
    return str(value)


def heading_level(value: Any, options: CompileOptions) -> str:
    """Heading level as written, or clamped to 1..6 when escaping."""
    if not options.escape_content:
        return out(value or 1, options)
    level = _as_int(value, 1)
    return str(level) if 1 <= level <= 6 else "1"


def safe_url(value: Any, options: CompileOptions, fallback: str = "#") -> str:
    """URL attribute value; when escaping, unknown schemes become ``fallback``."""
    if options.escape_content:
        text = "" if value is None else str(value)
        # Browsers ignore control characters and whitespace inside a scheme.
        try:
            scheme = urlsplit("".join(ch for ch in text if ch > " ")).scheme.lower()
        except ValueError:
            scheme = "invalid"
        if scheme not in SAFE_URL_SCHEMES:
            logger.warning("Dropping URL with unsafe scheme %r", scheme)
            return fallback
    return out(value, options)


def _prop(component: Component, key: str, default: Any = "") -> Any:
    value = component.props.get(key)
    return value if value else default


def _list_prop(component: Component, key: str) -> list:
    value = component.props.get(key)
    return list(value) if isinstance(value, (list, tuple)) else []


def _entry(item: Any, key: str, default: Any = "") -> Any:
    if isinstance(item, dict):
        value = item.get(key)
        return value if value else default
    return item if item and key in ("label", "value", "src") else default


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _anchor(component: Component, options: CompileOptions, css_class: Optional[str] = None) -> str:
    css_class = css_class or f"{component.type}-component"
    return f'id="{out(component.id, options)}" class="{out(css_class, options)}"'


def _required(component: Component) -> str:
    return " required" if component.props.get("required") else ""


# -- leaf renderers ----------------------------------------------------------


def _render_text(c: Component, o: CompileOptions) -> str:
    return f'<p {_anchor(c, o)}>{out(_prop(c, "content"), o)}</p>'


def _render_heading(c: Component, o: CompileOptions) -> str:
    level = heading_level(c.props.get("level"), o)
    return f'<h{level} {_anchor(c, o)}>{out(_prop(c, "content"), o)}</h{level}>'


def _render_image(c: Component, o: CompileOptions) -> str:
    return (
        f'<img id="{out(c.id, o)}" src="{safe_url(_prop(c, "src"), o, "")}" '
        f'alt="{out(_prop(c, "alt"), o)}" class="image-component">'
    )


def _render_button(c: Component, o: CompileOptions) -> str:
    label = out(_prop(c, "text", "Button"), o)
    if o.escape_content:
        if _prop(c, "onClick"):
            logger.warning("Dropping inline onClick handler of component %s", c.id)
        return f"<button {_anchor(c, o)}>{label}</button>"
    return f'<button {_anchor(c, o)} onclick="{out(_prop(c, "onClick"), o)}">{label}</button>'


def _field_html(c: Component, o: CompileOptions, anchored: bool) -> str:
    anchor = f"{_anchor(c, o)} " if anchored else ""
    name = out(_prop(c, "name"), o)
    placeholder = out(_prop(c, "placeholder"), o)
    if c.type == "input":
        kind = out(_prop(c, "type", "text"), o)
        return f'<input {anchor}type="{kind}" name="{name}" placeholder="{placeholder}"{_required(c)}>'
    if c.type == "textarea":
        return f'<textarea {anchor}name="{name}" placeholder="{placeholder}"{_required(c)}></textarea>'
    options_html = "".join(
        f'<option value="{out(_entry(opt, "value"), o)}">{out(_entry(opt, "label"), o)}</option>'
        for opt in _list_prop(c, "options")
    )
    return f'<select {anchor}name="{name}"{_required(c)}>{options_html}</select>'


def _render_field(c: Component, o: CompileOptions) -> str:
    return _field_html(c, o, anchored=True)


def _render_navigation(c: Component, o: CompileOptions) -> str:
    links = "".join(
        f'<li><a href="{safe_url(_entry(item, "href", "#"), o)}">{out(_entry(item, "label"), o)}</a></li>'
        for item in _list_prop(c, "items")
    )
    return f"<nav {_anchor(c, o)}><ul>{links}</ul></nav>"


def _render_breadcrumb(c: Component, o: CompileOptions) -> str:
    links = "".join(
        f'<li><a href="{safe_url(_entry(item, "href", "#"), o)}">{out(_entry(item, "label"), o)}</a></li>'
        for item in _list_prop(c, "items")
    )
    return f'<nav {_anchor(c, o)} aria-label="breadcrumb"><ol>{links}</ol></nav>'


def _render_video(c: Component, o: CompileOptions) -> str:
    controls = " controls" if c.props.get("controls", True) else ""
    return f'<video {_anchor(c, o)} src="{safe_url(_prop(c, "src"), o, "")}"{controls}></video>'


def _render_gallery(c: Component, o: CompileOptions) -> str:
    images = "".join(
        f'<img src="{safe_url(_entry(img, "src"), o, "")}" alt="{out(_entry(img, "alt"), o)}">'
        for img in _list_prop(c, "images")
    )
    return f'<div {_anchor(c, o, "gallery-component responsive-grid")}>{images}</div>'


def _render_map(c: Component, o: CompileOptions) -> str:
    url = MAP_EMBED_URL.format(
        lat=_prop(c, "lat", DEFAULT_MAP["lat"]),
        lng=_prop(c, "lng", DEFAULT_MAP["lng"]),
        zoom=_prop(c, "zoom", DEFAULT_MAP["zoom"]),
    )
    return f'<iframe {_anchor(c, o)} src="{out(url, o)}" loading="lazy"></iframe>'


def _render_testimonial(c: Component, o: CompileOptions) -> str:
    stars = "★" * max(_as_int(c.props.get("rating", 5), 5), 0)
    return (
        f"<blockquote {_anchor(c, o)}><p>{out(_prop(c, 'text'), o)}</p>"
        f"<cite>{out(_prop(c, 'author'), o)}</cite>"
        f'<span class="rating">{stars}</span></blockquote>'
    )


def _render_pricing(c: Component, o: CompileOptions) -> str:
    features = "".join(f"<li>{out(f, o)}</li>" for f in _list_prop(c, "features"))
    return (
        f"<div {_anchor(c, o)}><h3>{out(_prop(c, 'title'), o)}</h3>"
        f'<p class="price">{out(_prop(c, "price"), o)}</p><ul>{features}</ul></div>'
    )


def _render_team(c: Component, o: CompileOptions) -> str:
    name = out(_prop(c, "name"), o)
    return (
        f'<div {_anchor(c, o)}><img src="{safe_url(_prop(c, "image"), o, "")}" alt="{name}">'
        f"<h4>{name}</h4><p>{out(_prop(c, 'role'), o)}</p></div>"
    )


def _render_stats(c: Component, o: CompileOptions) -> str:
    stats = "".join(
        f'<div class="stat"><strong>{out(_entry(s, "value"), o)}</strong>'
        f"<span>{out(_entry(s, 'label'), o)}</span></div>"
        for s in _list_prop(c, "stats")
    )
    return f"<div {_anchor(c, o)}>{stats}</div>"


def _render_calendar(c: Component, o: CompileOptions) -> str:
    return f'<div {_anchor(c, o)} data-month="{out(_prop(c, "month"), o)}"></div>'


# -- containers --------------------------------------------------------------


def _wrapper(tag: str) -> Renderer:
    def render(c: Component, o: CompileOptions) -> str:
        return f"<{tag} {_anchor(c, o)}>{render_components(c.children, o)}</{tag}>"

    return render


def _render_form(c: Component, o: CompileOptions) -> str:
    fields = "".join(_field_html(child, o, anchored=False) for child in c.children if child.type in FIELD_TYPES)
    return (
        f'<form {_anchor(c, o)} action="{safe_url(_prop(c, "action", "#"), o)}" '
        f'method="{out(_prop(c, "method", "POST"), o)}">'
        f'{fields}<button type="submit">{out(_prop(c, "submitText", "Submit"), o)}</button></form>'
    )


def _render_generic(c: Component, o: CompileOptions) -> str:
    return f"<div {_anchor(c, o)}>{out(_prop(c, 'content'), o)}</div>"


RENDERERS: Dict[str, Renderer] = {
    "text": _render_text,
    "heading": _render_heading,
    "image": _render_image,
    "button": _render_button,
    "container": _wrapper("div"),
    "section": _wrapper("section"),
    "header": _wrapper("header"),
    "footer": _wrapper("footer"),
    "form": _render_form,
    "input": _render_field,
    "textarea": _render_field,
    "select": _render_field,
    "navigation": _render_navigation,
    "breadcrumb": _render_breadcrumb,
    "video": _render_video,
    "gallery": _render_gallery,
    "map": _render_map,
    "testimonial": _render_testimonial,
    "pricing": _render_pricing,
    "team": _render_team,
    "stats": _render_stats,
    "calendar": _render_calendar,
}


def render_component(component: Component, options: Optional[CompileOptions] = None) -> str:
    renderer = RENDERERS.get(component.type, _render_generic)
    return renderer(component, resolve(options))


def render_components(components: Iterable[Component], options: Optional[CompileOptions] = None) -> str:
    options = resolve(options)
    return "\n".join(render_component(c, options) for c in components)
