"""
Placeholder substitution for templated content values.

Contact values may embed jinja2 placeholders that are filled from the content
record, e.g. a profile URL pattern:

    >>> resolve_placeholders("github.com/{{ github }}", {"github": "janedoe"})
    'github.com/janedoe'

Text without placeholders is returned untouched, and so is any template that
fails to render (unknown variable or syntax error).
"""

from typing import Any, Dict

from jinja2 import Environment, StrictUndefined, TemplateError

from folio.contexts.content.logger import _log_debug

# Catches silent failures: an unknown variable leaves the text as written
_ENV = Environment(undefined=StrictUndefined, autoescape=False, keep_trailing_newline=True)


def has_placeholders(text: str) -> bool:
    return "{{" in text or "{%" in text


def resolve_placeholders(text: str, context: Dict[str, Any]) -> str:
    """
    Render jinja2 placeholders in text against context.

    Args:
        text: Literal or templated text
        context: Values available to the template

    Returns:
        Rendered text, or the original text when it cannot be rendered
    """
    if not text or not has_placeholders(text):
        return text

    try:
        return _ENV.from_string(text).render(**context)
    except TemplateError as e:
        _log_debug(f"Left placeholder unresolved in {text!r}: {e}")
        return text
