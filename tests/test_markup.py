from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from siteforge.core.config import CompileOptions
from siteforge.core.markup import RENDERERS, render_component, render_components
from siteforge.core.models import COMPONENT_TYPES, Component


def test_text_with_empty_props_renders_placeholder() -> None:
    assert render_component(Component(id="X", type="text")) == '<p id="X" class="text-component"></p>'


def test_heading_defaults_to_level_one() -> None:
    assert render_component(Component(id="h", type="heading", props={"content": "Hi"})) == (
        '<h1 id="h" class="heading-component">Hi</h1>'
    )
    assert render_component(Component(id="h", type="heading", props={"content": "Hi", "level": 3})) == (
        '<h3 id="h" class="heading-component">Hi</h3>'
    )


def test_image_and_button_defaults() -> None:
    assert render_component(Component(id="i", type="image")) == (
        '<img id="i" src="" alt="" class="image-component">'
    )
    assert render_component(Component(id="b", type="button")) == (
        '<button id="b" class="button-component" onclick="">Button</button>'
    )
    assert render_component(
        Component(id="b", type="button", props={"text": "Go", "onClick": "go()"})
    ) == '<button id="b" class="button-component" onclick="go()">Go</button>'


def test_container_body_is_children_joined_by_newline() -> None:
    container = Component(
        id="c",
        type="container",
        children=[
            Component(id="a", type="text", props={"content": "A"}),
            Component(id="b", type="text", props={"content": "B"}),
        ],
    )
    assert render_component(container) == (
        '<div id="c" class="container-component">'
        '<p id="a" class="text-component">A</p>\n<p id="b" class="text-component">B</p>'
        "</div>"
    )


def test_wrapping_types_use_their_own_element() -> None:
    for kind in ("section", "header", "footer"):
        assert render_component(Component(id="w", type=kind)) == f'<{kind} id="w" class="{kind}-component"></{kind}>'


def test_leaf_types_ignore_children() -> None:
    text = Component(id="t", type="text", props={"content": "x"}, children=[Component(id="c", type="text")])
    assert render_component(text) == '<p id="t" class="text-component">x</p>'


def test_siblings_keep_tree_order() -> None:
    html = render_components(
        [
            Component(id="A", type="text"),
            Component(id="B", type="text"),
            Component(id="C", type="text"),
        ]
    )
    assert html.index('id="A"') < html.index('id="B"') < html.index('id="C"')
    assert html.count("\n") == 2


def test_form_renders_field_children_and_submit_button() -> None:
    form = Component(
        id="f",
        type="form",
        children=[
            Component(id="e", type="input", props={"name": "email", "required": True}),
            Component(id="m", type="textarea", props={"name": "msg", "placeholder": "Hello"}),
            Component(id="skip", type="text", props={"content": "ignored"}),
            Component(
                id="s",
                type="select",
                props={"name": "plan", "options": [{"value": "1", "label": "One"}]},
            ),
        ],
    )
    assert render_component(form) == (
        '<form id="f" class="form-component" action="#" method="POST">'
        '<input type="text" name="email" placeholder="" required>'
        '<textarea name="msg" placeholder="Hello"></textarea>'
        '<select name="plan"><option value="1">One</option></select>'
        '<button type="submit">Submit</button></form>'
    )


def test_form_props_override_defaults() -> None:
    form = Component(id="f", type="form", props={"action": "/send", "method": "GET", "submitText": "Envoyer"})
    assert render_component(form) == (
        '<form id="f" class="form-component" action="/send" method="GET">'
        '<button type="submit">Envoyer</button></form>'
    )


def test_standalone_fields_carry_an_anchor() -> None:
    assert render_component(Component(id="q", type="input", props={"type": "email"})) == (
        '<input id="q" class="input-component" type="email" name="" placeholder="">'
    )


def test_navigation_items_and_href_default() -> None:
    nav = Component(
        id="n",
        type="navigation",
        props={"items": [{"label": "Home", "href": "/"}, {"label": "Contact"}]},
    )
    assert render_component(nav) == (
        '<nav id="n" class="navigation-component"><ul>'
        '<li><a href="/">Home</a></li><li><a href="#">Contact</a></li>'
        "</ul></nav>"
    )
    assert render_component(Component(id="n", type="navigation")) == (
        '<nav id="n" class="navigation-component"><ul></ul></nav>'
    )


def test_unknown_type_falls_back_to_div() -> None:
    assert render_component(Component(id="w", type="widget", props={"content": "hey"})) == (
        '<div id="w" class="widget-component">hey</div>'
    )


def test_every_known_type_has_its_own_renderer() -> None:
    assert set(RENDERERS) == set(COMPONENT_TYPES)
    for kind in COMPONENT_TYPES:
        component = Component(id="x", type=kind, props={"content": "MARK"})
        generic = f'<div id="x" class="{kind}-component">MARK</div>'
        assert render_component(component) != generic, kind


def test_malformed_props_do_not_raise() -> None:
    for kind in ("navigation", "breadcrumb", "gallery", "pricing", "stats", "select"):
        component = Component(id="x", type=kind, props={"items": 5, "images": None, "features": "abc", "stats": 1, "options": 2})
        assert render_component(component).startswith("<")
    assert "★" * 5 in render_component(Component(id="t", type="testimonial", props={"rating": "many"}))


def test_content_is_verbatim_by_default() -> None:
    html = render_component(Component(id="t", type="text", props={"content": "<b>bold</b>"}))
    assert html == '<p id="t" class="text-component"><b>bold</b></p>'


def test_escape_option_escapes_text_and_drops_inline_handlers() -> None:
    options = CompileOptions(escape_content=True)
    text = render_component(Component(id="t", type="text", props={"content": "<script>x</script>"}), options)
    assert text == '<p id="t" class="text-component">&lt;script&gt;x&lt;/script&gt;</p>'

    image = render_component(Component(id="i", type="image", props={"src": 'a" onerror="x'}), options)
    assert 'onerror="x"' not in image

    button = render_component(Component(id="b", type="button", props={"onClick": "alert(1)"}), options)
    assert button == '<button id="b" class="button-component">Button</button>'


def test_escape_option_clamps_heading_level() -> None:
    options = CompileOptions(escape_content=True)
    injected = Component(id="h", type="heading", props={"content": "x", "level": "1 onmouseover=alert(1)"})
    assert render_component(injected, options) == '<h1 id="h" class="heading-component">x</h1>'
    deep = Component(id="h", type="heading", props={"content": "x", "level": 9})
    assert render_component(deep, options) == '<h1 id="h" class="heading-component">x</h1>'
    third = Component(id="h", type="heading", props={"content": "x", "level": "3"})
    assert render_component(third, options) == '<h3 id="h" class="heading-component">x</h3>'


def test_escape_option_drops_script_urls() -> None:
    options = CompileOptions(escape_content=True)
    nav = Component(
        id="n",
        type="navigation",
        props={
            "items": [
                {"label": "x", "href": "javascript:alert(1)"},
                {"label": "y", "href": " Java\tScript:alert(1)"},
                {"label": "z", "href": "/about"},
                {"label": "w", "href": "mailto:me@example.com"},
            ]
        },
    )
    html = render_component(nav, options)
    assert "javascript" not in html.lower()
    assert '<a href="#">x</a>' in html
    assert '<a href="#">y</a>' in html
    assert '<a href="/about">z</a>' in html
    assert '<a href="mailto:me@example.com">w</a>' in html

    image = render_component(Component(id="i", type="image", props={"src": "javascript:x()"}), options)
    assert 'src=""' in image
    form = render_component(Component(id="f", type="form", props={"action": "javascript:x()"}), options)
    assert 'action="#"' in form


def test_urls_and_levels_are_verbatim_by_default() -> None:
    nav = Component(id="n", type="navigation", props={"items": [{"label": "x", "href": "javascript:go()"}]})
    assert '<a href="javascript:go()">x</a>' in render_component(nav)
    heading = Component(id="h", type="heading", props={"content": "x", "level": 4})
    assert render_component(heading) == '<h4 id="h" class="heading-component">x</h4>'
