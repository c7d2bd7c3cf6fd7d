"""Command-line message renderer.

Builds a form from the defaults, an optional saved preset, and ``--set``
overrides, then prints the rendered message.  Bad arguments or form values
exit with code 2; a message that cannot be generated exits with code 1.

Usage::

    python -m kolmessage.cli --contact Amy --kol "小明" --preset B
    kolmessage-render --contact Amy --kol 小明 --set bonusAmount=5000 --format json
    kolmessage-render --contact Amy --kol 小明 --template-file offer.txt
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import structlog
from pydantic import ValidationError

from kolmessage.app import configure_logging
from kolmessage.domain.errors import KOLMessageError
from kolmessage.domain.models import KOLFormData, TemplatePreset
from kolmessage.domain.types import FormField
from kolmessage.generator import generate_message
from kolmessage.presets.schema import close_presets_db, init_presets_db
from kolmessage.presets.store import KeyValueStore, PresetStore, TemplatePresetStore


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for message rendering.

    Returns:
        A configured :class:`argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(description="Render a KOL outreach message")

    parser.add_argument("--contact", type=str, help="Contact person (required)")
    parser.add_argument("--kol", type=str, help="KOL name (required)")
    parser.add_argument(
        "--preset",
        type=str,
        help="Apply a saved deal preset by id (e.g., A, B, C)",
    )
    parser.add_argument(
        "--set",
        action="append",
        default=[],
        metavar="FIELD=VALUE",
        dest="assignments",
        help=f"Override a form field; fields: {', '.join(f.value for f in FormField)}",
    )
    parser.add_argument(
        "--template-file",
        type=Path,
        help="Render this template file instead of a saved template",
    )
    parser.add_argument(
        "--template-id",
        type=str,
        help="Render a saved template by id (default: the first saved template)",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["text", "json"],
        default="text",
        dest="output_format",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--db",
        type=str,
        default="data/presets.db",
        help="Path to presets database (default: data/presets.db)",
    )

    return parser


def parse_assignments(assignments: list[str]) -> dict[str, str]:
    """Parse ``FIELD=VALUE`` pairs into a record.

    Raises:
        ValueError: If a pair has no ``=`` or names an unknown field.
    """
    known = {f.value for f in FormField}
    record: dict[str, str] = {}
    for item in assignments:
        key, sep, value = item.partition("=")
        if not sep:
            msg = f"Expected FIELD=VALUE, got {item!r}"
            raise ValueError(msg)
        if key not in known:
            msg = f"Unknown field {key!r}"
            raise ValueError(msg)
        record[key] = value
    return record


def build_form(
    args: argparse.Namespace,
    preset_store: PresetStore,
) -> KOLFormData:
    """Combine defaults, preset, contact details and overrides into a form."""
    form = KOLFormData()
    if args.preset:
        form = preset_store.apply(args.preset, form)

    overrides = parse_assignments(args.assignments)
    if args.contact is not None:
        overrides[FormField.CONTACT_PERSON.value] = args.contact
    if args.kol is not None:
        overrides[FormField.KOL_NAME.value] = args.kol
    return KOLFormData.from_record({**form.to_record(), **overrides})


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, render the message, and print it.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=logging.WARNING)

    db_path = Path(args.db)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = init_presets_db(db_path)

    try:
        kv = KeyValueStore(conn)
        preset_store = PresetStore(kv)
        template_store = TemplatePresetStore(kv)

        try:
            form = build_form(args, preset_store)
        except (ValueError, ValidationError, KOLMessageError) as exc:
            parser.error(str(exc))

        if args.template_file is not None:
            template: TemplatePreset | None = TemplatePreset(
                id=args.template_file.stem,
                name=args.template_file.name,
                template=args.template_file.read_text(encoding="utf-8"),
            )
        elif args.template_id:
            template = template_store.get(args.template_id)
        else:
            template = template_store.active

        try:
            message = generate_message(form, template)
        except KOLMessageError as exc:
            print(str(exc), file=sys.stderr)
            return 1

        if args.output_format == "json":
            payload = {"message": message, "form": form.to_record()}
            print(json.dumps(payload, ensure_ascii=False, indent=2))
        else:
            print(message)
        return 0
    finally:
        close_presets_db(conn)


if __name__ == "__main__":
    sys.exit(main())
