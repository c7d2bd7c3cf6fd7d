"""Display formatting for raw form values.

Raw values are stored the way the user typed them (``"25000"``, ``"15"``,
``"無"``).  Before placeholder substitution the renderer builds a display copy
of the record: amounts get thousands grouping and percentages get a trailing
``%``.  Conditional evaluation never sees the display copy.

Every function here is total: when a value cannot be interpreted it is
returned unchanged.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation

from pydantic import BaseModel, ConfigDict

from kolmessage.domain.types import NONE_VALUE, NUMBER_FIELDS, PERCENT_FIELDS

# Leading decimal literal, the way a lenient float parser reads "1500元" as 1500
_LEADING_NUMBER = re.compile(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))", re.ASCII)
_NON_PERCENT_CHARS = re.compile(r"[^0-9.]", re.ASCII)


def _parse_leading_decimal(value: str) -> Decimal | None:
    match = _LEADING_NUMBER.match(value)
    if match is None:
        return None
    try:
        return Decimal(match.group(1))
    except InvalidOperation:
        return None


class DisplayPolicy(BaseModel):
    """Formatting rules for turning raw record values into display strings.

    Attributes:
        grouping_separator: Thousands separator inserted by ``format_number``
            and stripped by ``unformat_number``.
        percent_suffix: Suffix appended by ``format_percent``.
        number_fields: Record keys formatted as grouped amounts.
        percent_fields: Record keys formatted as percentages.
    """

    model_config = ConfigDict(frozen=True)

    grouping_separator: str = ","
    percent_suffix: str = "%"
    number_fields: tuple[str, ...] = tuple(f.value for f in NUMBER_FIELDS)
    percent_fields: tuple[str, ...] = tuple(f.value for f in PERCENT_FIELDS)

    def unformat_number(self, value: str | None) -> str:
        """Strip grouping separators from a possibly formatted amount."""
        if value is None:
            return ""
        return value.replace(self.grouping_separator, "")

    def format_number(self, value: str | None) -> str:
        """Render an amount with thousands grouping (``"25000"`` -> ``"25,000"``).

        Unset values and values that do not start with an ASCII number are
        returned as-is.  Fractional digits are kept exactly as typed and never
        switch to exponent form.
        """
        if value is None or value in ("", NONE_VALUE):
            return value or ""
        number = _parse_leading_decimal(self.unformat_number(value))
        if number is None:
            return value
        grouped = format(number, ",f")
        if self.grouping_separator != ",":
            grouped = grouped.replace(",", self.grouping_separator)
        return grouped

    def format_percent(self, value: str | None) -> str:
        """Append the percent suffix to a numeric value (``"15"`` -> ``"15%"``)."""
        if value is None or value in ("", NONE_VALUE):
            return value or ""
        if _parse_leading_decimal(value) is None:
            return value
        return f"{value}{self.percent_suffix}"

    def unformat_percent(self, value: str | None) -> str:
        """Reduce a typed percentage to digits and decimal points.

        The sentinel is preserved so a cleared field stays cleared.
        """
        if value is None:
            return ""
        if value.strip() == NONE_VALUE:
            return NONE_VALUE
        return _NON_PERCENT_CHARS.sub("", value)

    def format_record(self, record: Mapping[str, str | None]) -> dict[str, str | None]:
        """Return a display copy of *record*.

        Only keys present in *record* are formatted; missing fields are not
        added.
        """
        display = dict(record)
        for key in self.number_fields:
            if key in display:
                display[key] = self.format_number(display[key])
        for key in self.percent_fields:
            if key in display:
                display[key] = self.format_percent(display[key])
        return display


DEFAULT_POLICY = DisplayPolicy()


def format_number(value: str | None) -> str:
    """Format an amount with the default policy."""
    return DEFAULT_POLICY.format_number(value)


def format_percent(value: str | None) -> str:
    """Format a percentage with the default policy."""
    return DEFAULT_POLICY.format_percent(value)


def unformat_number(value: str | None) -> str:
    """Strip grouping separators with the default policy."""
    return DEFAULT_POLICY.unformat_number(value)


def unformat_percent(value: str | None) -> str:
    """Normalize a typed percentage with the default policy."""
    return DEFAULT_POLICY.unformat_percent(value)


def format_record_for_display(record: Mapping[str, str | None]) -> dict[str, str | None]:
    """Build the display copy of *record* with the default policy."""
    return DEFAULT_POLICY.format_record(record)
