"""Validation helpers for callers that accept trees and projects from outside.

The compiler itself never validates; it assumes unique ids and an acyclic
tree. Editors and import endpoints run these checks before handing data on.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable
from urllib.parse import urlparse

from .models import COMPONENT_TYPES, Component, DeploymentSettings

PROJECT_NAME_RE = re.compile(r"^[a-zA-Z0-9\s\-_]+$")
PAGE_PATH_RE = re.compile(r"^/[a-zA-Z0-9\-_/]*$")
PROJECT_NAME_MIN = 3
PROJECT_NAME_MAX = 50


@dataclass(slots=True)
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate_tree(components: Iterable[Component]) -> ValidationResult:
    """Check id uniqueness, node sharing and cycles without recursing."""
    result = ValidationResult()
    seen_ids: set[str] = set()
    seen_nodes: set[int] = set()
    stack = [(c, ()) for c in reversed(list(components))]

    while stack:
        node, ancestors = stack.pop()
        if id(node) in ancestors:
            result.errors.append(f"Cycle detected at component {node.id!r}")
            continue
        if id(node) in seen_nodes:
            result.errors.append(f"Component {node.id!r} is attached to the tree more than once")
            continue
        seen_nodes.add(id(node))

        if not node.id:
            result.errors.append("Component without an id")
        elif node.id in seen_ids:
            result.errors.append(f"Duplicate component id {node.id!r}")
        else:
            seen_ids.add(node.id)

        if node.type not in COMPONENT_TYPES:
            result.warnings.append(f"Unknown component type {node.type!r} on {node.id!r}; rendered as <div>")

        path = ancestors + (id(node),)
        stack.extend((child, path) for child in reversed(node.children))
    return result


def validate_project_name(name: str) -> ValidationResult:
    result = ValidationResult()
    if not name.strip():
        result.errors.append("Project name is required")
    elif len(name) < PROJECT_NAME_MIN:
        result.errors.append(f"Project name must be at least {PROJECT_NAME_MIN} characters")
    elif len(name) > PROJECT_NAME_MAX:
        result.errors.append(f"Project name cannot exceed {PROJECT_NAME_MAX} characters")
    elif not PROJECT_NAME_RE.match(name):
        result.errors.append("Project name may only contain letters, digits, spaces, hyphens and underscores")
    return result


def validate_page_path(path: str) -> ValidationResult:
    result = ValidationResult()
    if not path.strip():
        result.errors.append("Page path is required")
    elif not path.startswith("/"):
        result.errors.append("Page path must start with /")
    elif not PAGE_PATH_RE.match(path):
        result.errors.append("Page path contains invalid characters")
    return result


def _is_url(value: str) -> bool:
    parsed = urlparse(value)
    return bool(parsed.scheme and parsed.netloc)


def validate_deployment_settings(settings: DeploymentSettings) -> ValidationResult:
    result = ValidationResult()
    if not settings.host.strip():
        result.errors.append("Server URL is required")
    elif not _is_url(settings.host):
        result.errors.append("Server URL is not valid")
    if not settings.username.strip():
        result.errors.append("Username is required")
    if not settings.password.strip():
        result.errors.append("Password is required")
    if not settings.path.strip():
        result.errors.append("Destination path is required")
    elif not settings.path.startswith("/"):
        result.errors.append("Destination path must start with /")
    return result
