"""JavaScript generation: the page-wide harness plus per-component wiring."""

from __future__ import annotations

import json
import logging
from typing import Callable, Dict, Iterable, Optional

from .config import CompileOptions, resolve
from .models import Component, iter_components

logger = logging.getLogger(__name__)

_SCRIPT_UNSAFE = {"<": "\\u003c", ">": "\\u003e", "&": "\\u0026"}

# Every stage hangs off window.SiteForge and is only defined when missing,
# so scripts loaded earlier (or page scripts before DOMContentLoaded) win.
BASE_JS = """// SiteForge generated JavaScript
var SiteForge = window.SiteForge = window.SiteForge || {};

SiteForge.initializeComponents = SiteForge.initializeComponents || function () {};

SiteForge.onResize = SiteForge.onResize || function () {};

SiteForge.setupResponsive = SiteForge.setupResponsive || function () {
    window.addEventListener('resize', function () {
        SiteForge.onResize();
    });
};

SiteForge.validateForm = SiteForge.validateForm || function (form) {
    var requiredFields = form.querySelectorAll('[required]');
    var isValid = true;
    requiredFields.forEach(function (field) {
        if (!field.value.trim()) {
            field.classList.add('error');
            isValid = false;
        } else {
            field.classList.remove('error');
        }
    });
    return isValid;
};

SiteForge.setupFormValidation = SiteForge.setupFormValidation || function () {
    document.querySelectorAll('form').forEach(function (form) {
        form.addEventListener('submit', function (e) {
            if (!SiteForge.validateForm(this)) {
                e.preventDefault();
            }
        });
    });
};

document.addEventListener('DOMContentLoaded', function () {
    SiteForge.initializeComponents();
    SiteForge.setupResponsive();
    SiteForge.setupFormValidation();
});
"""

# Extra site-wide behaviour for the deployment bundle's main.js.
SITE_JS = """
SiteForge.validateEmail = SiteForge.validateEmail || function (value) {
    return /^[^\\s@]+@[^\\s@]+\\.[^\\s@]+$/.test(value);
};

document.addEventListener('DOMContentLoaded', function () {
    document.querySelectorAll('input[type="email"]').forEach(function (field) {
        field.addEventListener('blur', function () {
            if (field.value && !SiteForge.validateEmail(field.value)) {
                field.classList.add('error');
            } else {
                field.classList.remove('error');
            }
        });
    });

    var navToggle = document.querySelector('.nav-toggle');
    var navMenu = document.querySelector('.navigation-component ul');
    if (navToggle && navMenu) {
        navToggle.addEventListener('click', function () {
            navMenu.classList.toggle('active');
        });
    }

    document.querySelectorAll('a[href^="#"]').forEach(function (anchor) {
        anchor.addEventListener('click', function (e) {
            var href = this.getAttribute('href');
            if (href.length < 2) {
                return;
            }
            var target = document.querySelector(href);
            if (target) {
                e.preventDefault();
                target.scrollIntoView({behavior: 'smooth', block: 'start'});
            }
        });
    });
});
"""


def _js_string(value: str) -> str:
    """JSON string literal that cannot close an inline <script> element."""
    literal = json.dumps(value)
    for char, replacement in _SCRIPT_UNSAFE.items():
        literal = literal.replace(char, replacement)
    return literal


def _element(component: Component, options: CompileOptions) -> str:
    if options.escape_content:
        return f"document.getElementById({_js_string(component.id)})"
    return f"document.getElementById('{component.id}')"


def _button_js(component: Component, options: CompileOptions) -> str:
    handler = component.props.get("onClick")
    if not handler:
        return ""
    if options.escape_content:
        logger.warning("Skipping click handler of component %s", component.id)
        return ""
    return (
        f"\n{_element(component, options)}.addEventListener('click', function () {{\n"
        f"    {handler}\n"
        "});\n"
    )


def _form_js(component: Component, options: CompileOptions) -> str:
    return (
        f"\n{_element(component, options)}.addEventListener('submit', function (e) {{\n"
        "    e.preventDefault();\n"
        "    var formData = new FormData(this);\n"
        "    console.log('Form submitted:', Object.fromEntries(formData));\n"
        "});\n"
    )


FRAGMENTS: Dict[str, Callable[[Component, CompileOptions], str]] = {
    "button": _button_js,
    "form": _form_js,
}


def component_js(component: Component, options: Optional[CompileOptions] = None) -> str:
    emit = FRAGMENTS.get(component.type)
    return emit(component, resolve(options)) if emit else ""


def generate_js(components: Iterable[Component], options: Optional[CompileOptions] = None) -> str:
    options = resolve(options)
    parts = [BASE_JS]
    parts.extend(component_js(c, options) for c in iter_components(components))
    return "".join(parts)
