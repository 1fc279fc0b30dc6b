"""Data models for the component tree of a site project."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional


COMPONENT_TYPES: frozenset[str] = frozenset(
    {
        "text",
        "heading",
        "image",
        "button",
        "container",
        "section",
        "header",
        "footer",
        "form",
        "input",
        "textarea",
        "select",
        "navigation",
        "breadcrumb",
        "video",
        "gallery",
        "map",
        "testimonial",
        "pricing",
        "team",
        "stats",
        "calendar",
    }
)

# Types whose children are rendered; everything else is a leaf.
CONTAINER_TYPES: frozenset[str] = frozenset({"container", "section", "header", "footer", "form"})

PROJECT_TYPES = ("html", "react", "php", "nodejs")


def _safe_list(val: Any) -> list:
    return val if isinstance(val, list) else []


def _safe_dict(val: Any) -> dict:
    return dict(val) if isinstance(val, dict) else {}


def _safe_str(val: Any, default: str = "") -> str:
    return default if val is None else str(val)


@dataclass
class Position:
    x: float = 0
    y: float = 0

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Position"]:
        if not isinstance(data, dict):
            return None
        return cls(x=data.get("x", 0), y=data.get("y", 0))


@dataclass
class Size:
    width: float = 0
    height: float = 0

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Size"]:
        if not isinstance(data, dict):
            return None
        return cls(width=data.get("width", 0), height=data.get("height", 0))


@dataclass
class Component:
    """One node of a page's render tree.

    ``props`` and ``styles`` are open mappings; renderers fall back to
    per-type defaults for missing keys. ``children`` is owned by this node
    only and must not contain cycles.
    """

    id: str
    type: str
    name: str = ""
    props: Dict[str, Any] = field(default_factory=dict)
    children: List["Component"] = field(default_factory=list)
    styles: Dict[str, Any] = field(default_factory=dict)
    position: Optional[Position] = None
    size: Optional[Size] = None

    @property
    def is_known_type(self) -> bool:
        return self.type in COMPONENT_TYPES

    def to_dict(self) -> dict:
        data: Dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "props": dict(self.props),
            "children": [child.to_dict() for child in self.children],
            "styles": dict(self.styles),
        }
        if self.position is not None:
            data["position"] = self.position.to_dict()
        if self.size is not None:
            data["size"] = self.size.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "Component":
        children = [cls.from_dict(c) for c in _safe_list(data.get("children")) if isinstance(c, dict)]
        return cls(
            id=_safe_str(data.get("id")),
            type=_safe_str(data.get("type"), "unknown"),
            name=_safe_str(data.get("name")),
            props=_safe_dict(data.get("props")),
            children=children,
            styles=_safe_dict(data.get("styles")),
            position=Position.from_dict(data.get("position")),
            size=Size.from_dict(data.get("size")),
        )


@dataclass
class PageMeta:
    title: str = ""
    description: str = ""
    keywords: List[str] = field(default_factory=list)
    og_image: Optional[str] = None
    canonical: Optional[str] = None

    def to_dict(self) -> dict:
        data: Dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "keywords": list(self.keywords),
        }
        if self.og_image:
            data["ogImage"] = self.og_image
        if self.canonical:
            data["canonical"] = self.canonical
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "PageMeta":
        data = _safe_dict(data)
        return cls(
            title=_safe_str(data.get("title")),
            description=_safe_str(data.get("description")),
            keywords=[str(k) for k in _safe_list(data.get("keywords"))],
            og_image=data.get("ogImage") or None,
            canonical=data.get("canonical") or None,
        )


@dataclass
class Page:
    id: str
    name: str
    path: str
    title: str
    content: str = ""
    components: List[Component] = field(default_factory=list)
    styles: str = ""
    scripts: str = ""
    meta: PageMeta = field(default_factory=PageMeta)
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "title": self.title,
            "content": self.content,
            "components": [c.to_dict() for c in self.components],
            "styles": self.styles,
            "scripts": self.scripts,
            "meta": self.meta.to_dict(),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Page":
        name = _safe_str(data.get("name"), "Page")
        return cls(
            id=_safe_str(data.get("id")),
            name=name,
            path=_safe_str(data.get("path"), "/" + name.lower()),
            title=_safe_str(data.get("title"), name),
            content=_safe_str(data.get("content")),
            components=[
                Component.from_dict(c) for c in _safe_list(data.get("components")) if isinstance(c, dict)
            ],
            styles=_safe_str(data.get("styles")),
            scripts=_safe_str(data.get("scripts")),
            meta=PageMeta.from_dict(data.get("meta")),
            created_at=_safe_str(data.get("createdAt")),
            updated_at=_safe_str(data.get("updatedAt")),
        )


@dataclass
class SEOSettings:
    title: str = ""
    description: str = ""
    keywords: List[str] = field(default_factory=list)
    og_image: Optional[str] = None

    def to_dict(self) -> dict:
        data: Dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "keywords": list(self.keywords),
        }
        if self.og_image:
            data["ogImage"] = self.og_image
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "SEOSettings":
        data = _safe_dict(data)
        return cls(
            title=_safe_str(data.get("title")),
            description=_safe_str(data.get("description")),
            keywords=[str(k) for k in _safe_list(data.get("keywords"))],
            og_image=data.get("ogImage") or None,
        )


@dataclass
class DeploymentSettings:
    provider: str = "cpanel"  # cpanel, ftp, sftp
    host: str = ""
    username: str = ""
    password: str = ""
    path: str = "/public_html"
    port: Optional[int] = None
    ssl: Optional[bool] = None

    def to_dict(self) -> dict:
        data: Dict[str, Any] = {
            "provider": self.provider,
            "host": self.host,
            "username": self.username,
            "password": self.password,
            "path": self.path,
        }
        if self.port is not None:
            data["port"] = self.port
        if self.ssl is not None:
            data["ssl"] = self.ssl
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "DeploymentSettings":
        data = _safe_dict(data)
        port = data.get("port")
        try:
            port = int(port) if port is not None else None
        except (TypeError, ValueError):
            port = None
        ssl = data.get("ssl")
        return cls(
            provider=_safe_str(data.get("provider"), "cpanel"),
            host=_safe_str(data.get("host")),
            username=_safe_str(data.get("username")),
            password=_safe_str(data.get("password")),
            path=_safe_str(data.get("path"), "/public_html"),
            port=port,
            ssl=bool(ssl) if ssl is not None else None,
        )


@dataclass
class ProjectSettings:
    domain: Optional[str] = None
    ssl: bool = True
    compression: bool = True
    cache: bool = True
    analytics: bool = False
    seo: SEOSettings = field(default_factory=SEOSettings)
    deployment: DeploymentSettings = field(default_factory=DeploymentSettings)

    def to_dict(self) -> dict:
        data: Dict[str, Any] = {
            "ssl": self.ssl,
            "compression": self.compression,
            "cache": self.cache,
            "analytics": self.analytics,
            "seo": self.seo.to_dict(),
            "deployment": self.deployment.to_dict(),
        }
        if self.domain:
            data["domain"] = self.domain
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "ProjectSettings":
        data = _safe_dict(data)
        return cls(
            domain=data.get("domain") or None,
            ssl=bool(data.get("ssl", True)),
            compression=bool(data.get("compression", True)),
            cache=bool(data.get("cache", True)),
            analytics=bool(data.get("analytics", False)),
            seo=SEOSettings.from_dict(data.get("seo")),
            deployment=DeploymentSettings.from_dict(data.get("deployment")),
        )


@dataclass
class Project:
    id: str
    name: str
    description: str = ""
    type: str = "html"  # html, react, php, nodejs
    status: str = "draft"  # draft, active, completed
    pages: List[Page] = field(default_factory=list)
    settings: ProjectSettings = field(default_factory=ProjectSettings)
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "type": self.type,
            "status": self.status,
            "pages": [p.to_dict() for p in self.pages],
            "settings": self.settings.to_dict(),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Project":
        project_type = _safe_str(data.get("type"), "html")
        if project_type not in PROJECT_TYPES:
            project_type = "html"
        return cls(
            id=_safe_str(data.get("id")),
            name=_safe_str(data.get("name"), "My Site"),
            description=_safe_str(data.get("description")),
            type=project_type,
            status=_safe_str(data.get("status"), "draft"),
            pages=[Page.from_dict(p) for p in _safe_list(data.get("pages")) if isinstance(p, dict)],
            settings=ProjectSettings.from_dict(data.get("settings")),
            created_at=_safe_str(data.get("createdAt")),
            updated_at=_safe_str(data.get("updatedAt")),
        )


def iter_components(components: Iterable[Component]) -> Iterator[Component]:
    """Yield every component of the forest in pre-order, depth first.

    Assumes an acyclic tree; a cycle recurses without bound.
    """
    for component in components:
        yield component
        yield from iter_components(component.children)


def find_component(components: Iterable[Component], component_id: str) -> Optional[Component]:
    for component in iter_components(components):
        if component.id == component_id:
            return component
    return None
