from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from siteforge.core.models import Component, DeploymentSettings
from siteforge.core.validation import (
    validate_deployment_settings,
    validate_page_path,
    validate_project_name,
    validate_tree,
)


def test_valid_tree_passes() -> None:
    tree = [Component(id="a", type="container", children=[Component(id="b", type="text")])]
    result = validate_tree(tree)
    assert result.is_valid
    assert result.warnings == []


def test_duplicate_ids_are_reported() -> None:
    tree = [Component(id="a", type="text"), Component(id="x", type="container", children=[Component(id="a", type="text")])]
    result = validate_tree(tree)
    assert not result.is_valid
    assert "Duplicate component id 'a'" in result.errors


def test_cycles_are_detected_without_recursing_forever() -> None:
    root = Component(id="root", type="container")
    child = Component(id="child", type="section")
    root.children.append(child)
    child.children.append(root)
    result = validate_tree([root])
    assert any("Cycle" in error for error in result.errors)


def test_shared_nodes_are_reported() -> None:
    shared = Component(id="s", type="text")
    tree = [
        Component(id="a", type="container", children=[shared]),
        Component(id="b", type="container", children=[shared]),
    ]
    result = validate_tree(tree)
    assert any("more than once" in error for error in result.errors)


def test_unknown_types_are_only_warnings() -> None:
    result = validate_tree([Component(id="w", type="widget")])
    assert result.is_valid
    assert result.warnings


def test_project_name_rules() -> None:
    assert validate_project_name("My Site_2").is_valid
    assert not validate_project_name("  ").is_valid
    assert not validate_project_name("ab").is_valid
    assert not validate_project_name("x" * 51).is_valid
    assert not validate_project_name("Bad/Name").is_valid


def test_page_path_rules() -> None:
    assert validate_page_path("/").is_valid
    assert validate_page_path("/blog/first-post").is_valid
    assert not validate_page_path("about").is_valid
    assert not validate_page_path("/a b").is_valid
    assert not validate_page_path("").is_valid


def test_deployment_settings_rules() -> None:
    good = DeploymentSettings(host="https://ftp.example.com", username="u", password="p", path="/public_html")
    assert validate_deployment_settings(good).is_valid

    bad = DeploymentSettings(host="not a url", username="", password="", path="public_html")
    errors = validate_deployment_settings(bad).errors
    assert len(errors) == 4
