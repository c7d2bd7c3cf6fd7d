"""Template rendering engine.

Re-exports the renderer stages and display formatters:
    from kolmessage.template import render, format_number, DisplayPolicy
"""

from kolmessage.template.defaults import (
    DEFAULT_MESSAGE_TEMPLATE,
    DEFAULT_TEMPLATE_ID,
    DEFAULT_TEMPLATE_NAME,
)
from kolmessage.template.formatting import (
    DEFAULT_POLICY,
    DisplayPolicy,
    format_number,
    format_percent,
    format_record_for_display,
    unformat_number,
    unformat_percent,
)
from kolmessage.template.renderer import (
    evaluate_conditionals,
    render,
    substitute_placeholders,
)

__all__ = [
    "DEFAULT_MESSAGE_TEMPLATE",
    "DEFAULT_POLICY",
    "DEFAULT_TEMPLATE_ID",
    "DEFAULT_TEMPLATE_NAME",
    "DisplayPolicy",
    "evaluate_conditionals",
    "format_number",
    "format_percent",
    "format_record_for_display",
    "render",
    "substitute_placeholders",
    "unformat_number",
    "unformat_percent",
]
