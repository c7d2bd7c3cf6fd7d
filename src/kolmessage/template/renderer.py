"""Template renderer for outreach messages.

A template is plain text with two kinds of markup:

* placeholders ``{fieldName}``, replaced with display-formatted values;
* conditional blocks ``[if: field|content]`` (kept when the field has a value)
  and ``[if: field=value|content]`` (kept when the field equals ``value``).

Blocks do not nest.  Block content is matched lazily up to the first ``]``,
so ``[if: a|x [if: b|y] z]`` keeps ``x [if: b|y`` and leaves `` z]`` as
literal text.  Conditionals are resolved against the raw record before any
placeholder is substituted.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

import structlog

from kolmessage.domain.types import is_blank
from kolmessage.template.formatting import DEFAULT_POLICY, DisplayPolicy

logger = structlog.get_logger()

CONDITIONAL_BLOCK = re.compile(r"\[if: (\w+)(?:=([^|\]]+))?\|(.*?)\]", re.DOTALL | re.ASCII)
EXCESS_NEWLINES = re.compile(r"(\r?\n){3,}")


def _condition_holds(actual: str | None, expected: str | None) -> bool:
    if expected is not None:
        return (actual or "").strip() == expected.strip()
    return not is_blank(actual)


def evaluate_conditionals(template: str, record: Mapping[str, str | None]) -> str:
    """Resolve every conditional block in *template* against *record*.

    Missing keys read as empty.  After resolution, runs of three or more line
    breaks are collapsed into a single blank line so removed blocks leave no
    gaps.

    Args:
        template: The raw template text.
        record: Raw (unformatted) field values keyed by template key.

    Returns:
        The template with all blocks replaced by their content or removed.
    """

    def resolve(match: re.Match[str]) -> str:
        key, expected, content = match.groups()
        return content if _condition_holds(record.get(key), expected) else ""

    resolved = CONDITIONAL_BLOCK.sub(resolve, template)
    return EXCESS_NEWLINES.sub("\n\n", resolved)


def substitute_placeholders(text: str, display_record: Mapping[str, str | None]) -> str:
    """Replace ``{key}`` with its value for every key in *display_record*.

    Substitution is one pass over *text*: inserted values are never scanned
    for further placeholders, and ``{name}`` tokens for keys not in the
    record stay as literal text.
    """
    if not display_record:
        return text
    pattern = re.compile("|".join(re.escape(f"{{{key}}}") for key in display_record))

    def replace(match: re.Match[str]) -> str:
        return display_record[match.group(0)[1:-1]] or ""

    return pattern.sub(replace, text)


def render(
    template: str,
    record: Mapping[str, str | None],
    policy: DisplayPolicy = DEFAULT_POLICY,
) -> str:
    """Render *template* with *record* into final message text.

    Conditionals use raw values; placeholders use values formatted by
    *policy*.  The result is stripped of surrounding whitespace.

    Args:
        template: The message template.
        record: Raw field values keyed by template key.
        policy: Display formatting rules for placeholder values.

    Returns:
        The rendered message.  An empty template renders as ``""``.
    """
    if not template:
        return ""
    resolved = evaluate_conditionals(template, record)
    message = substitute_placeholders(resolved, policy.format_record(record))
    logger.debug("template_rendered", template_length=len(template), message_length=len(message))
    return message.strip()
