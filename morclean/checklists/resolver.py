from __future__ import annotations

import logging
from typing import Optional

from morclean.checklists.templates import DEFAULT_TEMPLATES, Template, TemplateSet, load_templates_file
from morclean.config import load_settings
from morclean.filters.rules import ServiceTag

LOGGER = logging.getLogger(__name__)


def resolve(tag: ServiceTag, templates: TemplateSet = DEFAULT_TEMPLATES) -> Template:
    """Checklist template for `tag`. Never raises; falls back to Standard."""
    template = templates.get(tag)
    if template is None:
        LOGGER.warning("no checklist template for tag=%s; using Standard", tag)
        return templates.get(ServiceTag.STANDARD, DEFAULT_TEMPLATES[ServiceTag.STANDARD])
    return template


_ACTIVE: Optional[TemplateSet] = None


def active_templates() -> TemplateSet:
    """Template set for this process: the YAML override if configured, else the built-ins.

    The API and CLI call this at startup, so a bad override file stops the
    process there; afterwards the same set is reused.
    """
    global _ACTIVE
    if _ACTIVE is None:
        path = load_settings().templates_file
        if path:
            LOGGER.info("loading checklist templates from %s", path)
            _ACTIVE = load_templates_file(path)
        else:
            _ACTIVE = DEFAULT_TEMPLATES
    return _ACTIVE
