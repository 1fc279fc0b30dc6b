from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from siteforge.core.models import (
    Component,
    Page,
    Position,
    Project,
    Size,
    find_component,
    iter_components,
)


def _tree() -> list[Component]:
    return [
        Component(
            id="a",
            type="container",
            children=[
                Component(id="a1", type="text"),
                Component(id="a2", type="section", children=[Component(id="a2x", type="text")]),
            ],
        ),
        Component(id="b", type="button"),
    ]


def test_iter_components_is_preorder_depth_first() -> None:
    ids = [c.id for c in iter_components(_tree())]
    assert ids == ["a", "a1", "a2", "a2x", "b"]


def test_find_component_returns_nested_match_or_none() -> None:
    tree = _tree()
    assert find_component(tree, "a2x") is tree[0].children[1].children[0]
    assert find_component(tree, "missing") is None


def test_component_from_dict_tolerates_missing_fields() -> None:
    component = Component.from_dict({"id": "x", "type": "text"})
    assert component.props == {}
    assert component.children == []
    assert component.styles == {}
    assert component.position is None
    assert component.size is None


def test_component_from_dict_reads_geometry_and_children() -> None:
    component = Component.from_dict(
        {
            "id": "c",
            "type": "container",
            "name": "Box",
            "props": {"content": "hi"},
            "children": [{"id": "t", "type": "text"}, "not-a-component"],
            "styles": {"color": "red"},
            "position": {"x": 5, "y": 6},
            "size": {"width": 100, "height": 40},
        }
    )
    assert component.position == Position(5, 6)
    assert component.size == Size(100, 40)
    assert [child.id for child in component.children] == ["t"]
    assert component.to_dict()["children"][0]["id"] == "t"


def test_page_from_dict_uses_wire_keys() -> None:
    page = Page.from_dict(
        {
            "id": "p1",
            "name": "Home",
            "path": "/",
            "title": "Home",
            "meta": {
                "title": "Home",
                "description": "d",
                "keywords": ["a", "b"],
                "ogImage": "https://example.com/og.png",
            },
            "createdAt": "2024-01-01T00:00:00Z",
        }
    )
    assert page.meta.og_image == "https://example.com/og.png"
    assert page.meta.canonical is None
    assert page.created_at == "2024-01-01T00:00:00Z"
    data = page.to_dict()
    assert data["meta"]["ogImage"] == "https://example.com/og.png"
    assert "canonical" not in data["meta"]


def test_project_round_trip_and_type_fallback() -> None:
    project = Project.from_dict(
        {
            "id": "proj",
            "name": "Shop",
            "type": "cobol",
            "pages": [{"id": "p", "name": "Home", "path": "/", "title": "Home"}],
            "settings": {"deployment": {"host": "https://host", "port": "21"}},
        }
    )
    assert project.type == "html"
    assert project.settings.deployment.port == 21
    assert project.settings.ssl is True
    again = Project.from_dict(project.to_dict())
    assert again == project
