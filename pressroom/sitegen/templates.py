"""
Page Templates
==============

Named HTML templates with ``{{key}}`` placeholders.

Substitution is one left-to-right pass: bound keys are replaced, unbound keys
stay as literal text (or raise in strict mode), and replacement values are
never re-scanned for placeholders.
"""

import os
import re

from ..core.errors import TemplateNotFound, MissingTemplateVariable

PLACEHOLDER = re.compile(r'\{\{([A-Za-z0-9_-]+)\}\}')

BUNDLED_TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'templates')


def render(template, bindings, strict=False):
    """Replace every {{key}} in template with bindings[key]."""
    missing = []

    def substitute(match):
        key = match.group(1)
        if key in bindings:
            return str(bindings[key])
        missing.append(key)
        return match.group(0)

    result = PLACEHOLDER.sub(substitute, template)
    if strict and missing:
        raise MissingTemplateVariable(missing)
    return result


class TemplateLoader:
    """Reads ``{name}.html`` from one directory."""

    def __init__(self, templates_dir=None, strict=False):
        self.templates_dir = templates_dir or BUNDLED_TEMPLATES_DIR
        self.strict = strict

    def path_for(self, name):
        return os.path.join(self.templates_dir, f"{name}.html")

    def load(self, name):
        path = self.path_for(name)
        if not os.path.isfile(path):
            raise TemplateNotFound(path)
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()

    def render(self, name, bindings):
        return render(self.load(name), bindings, strict=self.strict)
