from .templates import DEFAULT_TEMPLATES, Section, Template, TemplateSet, load_templates_file
from .resolver import active_templates, resolve

__all__ = [
    "DEFAULT_TEMPLATES",
    "Section",
    "Template",
    "TemplateSet",
    "load_templates_file",
    "active_templates",
    "resolve",
]
