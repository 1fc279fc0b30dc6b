"""Project export: aggregates compiled pages and scaffold files into a file set."""

from __future__ import annotations

import json
import logging
from typing import Dict, Optional

from .behavior import BASE_JS, SITE_JS
from .config import CompileOptions, resolve
from .generator import compile_page, page_slug, react_component_name, variant_for_project
from .models import Page, Project
from .styles import BASE_CSS, COMPONENT_CSS

logger = logging.getLogger(__name__)

FileSet = Dict[str, str]

VITE_CONFIG = """import { defineConfig } from 'vite'
import react from '@vitejs/plugin-react'

export default defineConfig({
  plugins: [react()],
})
"""

TSCONFIG = {
    "compilerOptions": {
        "target": "ES2020",
        "useDefineForClassFields": True,
        "lib": ["ES2020", "DOM", "DOM.Iterable"],
        "module": "ESNext",
        "skipLibCheck": True,
        "moduleResolution": "bundler",
        "allowImportingTsExtensions": True,
        "resolveJsonModule": True,
        "isolatedModules": True,
        "noEmit": True,
        "jsx": "react-jsx",
        "strict": True,
        "noUnusedLocals": True,
        "noUnusedParameters": True,
        "noFallthroughCasesInSwitch": True,
    },
    "include": ["src"],
    "references": [{"path": "./tsconfig.node.json"}],
}

README_TEMPLATE = """# {name}

{description}

## Generated by SiteForge

This project was generated by SiteForge and is ready for development.

## Getting Started

```bash
npm install
npm run dev
```

## Build

```bash
npm run build
```
"""

DATABASE_CONFIG_PHP = """<?php
// SiteForge database configuration
class Database {
    private $host;
    private $db_name;
    private $username;
    private $password;
    private $conn;

    public function __construct() {
        $this->host = $_ENV['DB_HOST'] ?? 'localhost';
        $this->db_name = $_ENV['DB_NAME'] ?? 'siteforge_db';
        $this->username = $_ENV['DB_USER'] ?? 'root';
        $this->password = $_ENV['DB_PASS'] ?? '';
    }

    public function getConnection() {
        $this->conn = null;

        try {
            $this->conn = new PDO(
                "pgsql:host=" . $this->host . ";dbname=" . $this->db_name,
                $this->username,
                $this->password
            );
            $this->conn->setAttribute(PDO::ATTR_ERRMODE, PDO::ERRMODE_EXCEPTION);
        } catch(PDOException $exception) {
            echo "Connection error: " . $exception->getMessage();
        }

        return $this->conn;
    }
}

$database = new Database();
$db = $database->getConnection();
?>
"""

HTACCESS_TEMPLATE = """# SiteForge generated .htaccess
RewriteEngine On

# HTTPS redirect
RewriteCond %{{HTTPS}} off
RewriteRule ^(.*)$ https://%{{HTTP_HOST}}%{{REQUEST_URI}} [L,R=301]

# Remove www
RewriteCond %{{HTTP_HOST}} ^www\\.(.*)$ [NC]
RewriteRule ^(.*)$ https://%1/$1 [R=301,L]

# Security headers
<IfModule mod_headers.c>
    Header always set X-Content-Type-Options nosniff
    Header always set X-Frame-Options DENY
    Header always set X-XSS-Protection "1; mode=block"
    Header always set Strict-Transport-Security "max-age=31536000; includeSubDomains"
    Header always set Referrer-Policy "strict-origin-when-cross-origin"
</IfModule>

# Browser caching
<IfModule mod_expires.c>
    ExpiresActive On
    ExpiresByType text/css "access plus 1 month"
    ExpiresByType application/javascript "access plus 1 month"
    ExpiresByType image/png "access plus 1 year"
    ExpiresByType image/jpg "access plus 1 year"
    ExpiresByType image/jpeg "access plus 1 year"
    ExpiresByType image/gif "access plus 1 year"
    ExpiresByType image/svg+xml "access plus 1 year"
</IfModule>
{php_settings}
# Error pages
ErrorDocument 404 /404.html
ErrorDocument 500 /500.html

# Deny access to sensitive files
<Files ~ "^\\.(htaccess|htpasswd|ini|log|sh|inc|bak)$">
    Order allow,deny
    Deny from all
</Files>
"""

HTACCESS_PHP_SETTINGS = """
# PHP settings
php_value upload_max_filesize 64M
php_value post_max_size 64M
php_value max_execution_time 300
php_value max_input_vars 3000
"""


def page_file_path(page: Page, extension: str) -> str:
    path = page.path.strip().lstrip("/") or "index"
    return f"{path}.{extension}"


def package_json(project: Project) -> str:
    manifest = {
        "name": page_slug(project.name),
        "version": "1.0.0",
        "description": project.description,
        "main": "index.js",
        "scripts": {
            "dev": "vite",
            "build": "vite build",
            "preview": "vite preview",
        },
        "dependencies": {
            "react": "^18.2.0",
            "react-dom": "^18.2.0",
        },
        "devDependencies": {
            "@types/react": "^18.2.0",
            "@types/react-dom": "^18.2.0",
            "@vitejs/plugin-react": "^4.0.0",
            "typescript": "^5.0.0",
            "vite": "^4.4.0",
        },
    }
    return json.dumps(manifest, indent=2, ensure_ascii=False)


def readme(project: Project) -> str:
    return README_TEMPLATE.format(name=project.name, description=project.description)


def htaccess(project: Project) -> str:
    php_settings = HTACCESS_PHP_SETTINGS if project.type == "php" else ""
    return HTACCESS_TEMPLATE.format(php_settings=php_settings)


def _page_files(project: Project, variant: str, options: CompileOptions) -> FileSet:
    files: FileSet = {}
    for page in project.pages:
        if variant == "react":
            path = f"src/pages/{react_component_name(page)}.tsx"
        else:
            path = page_file_path(page, variant)
        if path in files:
            logger.warning("Page %s overwrites an earlier page at %s", page.id, path)
        files[path] = compile_page(page, project, variant, options)
    return files


def export_project(project: Project, options: Optional[CompileOptions] = None) -> FileSet:
    """Editable project export: compiled pages plus the dev scaffold."""
    options = resolve(options)
    files: FileSet = {
        "package.json": package_json(project),
        "vite.config.ts": VITE_CONFIG,
        "tsconfig.json": json.dumps(TSCONFIG, indent=2),
    }
    files.update(_page_files(project, variant_for_project(project), options))
    if project.type == "php":
        files["config/database.php"] = DATABASE_CONFIG_PHP
    files["README.md"] = readme(project)
    logger.info("Exported project %s: %d files", project.id, len(files))
    return files


def build_site(project: Project, options: Optional[CompileOptions] = None) -> FileSet:
    """Deployment bundle: servable pages, shared assets and server config."""
    options = resolve(options)
    variant = "php" if project.type == "php" else "html"
    files = _page_files(project, variant, options)
    files["assets/css/main.css"] = BASE_CSS + COMPONENT_CSS
    files["assets/js/main.js"] = BASE_JS + SITE_JS
    files[".htaccess"] = htaccess(project)
    if project.type == "php":
        files["config/database.php"] = DATABASE_CONFIG_PHP
    logger.info("Built deployment bundle for project %s: %d files", project.id, len(files))
    return files
