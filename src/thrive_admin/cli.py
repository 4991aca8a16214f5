from __future__ import annotations

import argparse
import json
import os

from .config import ConfigError
from .exceptions import ApiError
from .reconciler import DISCOUNT_SCHEMA, SCHEMAS, normalize_many
from .session import AdminSession
from .ui.detail_view import DetailView
from .ui.feedback import Feedback, render_notice
from .ui.listing_view import ListView
from .ui.table_printer import print_record, print_table

ENTITIES = tuple(SCHEMAS)


def _default_int(env_key: str, fallback: int) -> int:
    raw = os.getenv(env_key)
    if raw is None:
        return fallback
    try:
        return int(raw)
    except ValueError:
        return fallback


def _print_feedback(feedback: Feedback) -> None:
    if feedback.banner is not None:
        print(render_notice(feedback.banner))
    for notice in feedback.drain():
        print(render_notice(notice))


def cmd_list(args: argparse.Namespace, session: AdminSession) -> int:
    client, schema = session.resource(args.entity)
    view = ListView(
        client,
        schema,
        page_size=args.page_size,
        filters={"search": args.search, "category": args.category, "vendor": args.vendor, "type": args.type},
    )
    page = view.load_page(args.page)
    if page is None or page.failed:
        _print_feedback(view.feedback)
        return 1
    rows = [record.model_dump() for record in view.visible]
    if args.json:
        print(json.dumps([record.to_view() for record in view.visible], indent=2, default=str))
    else:
        title = f"{args.entity} page {page.page}/{page.total_pages} (total {page.total})"
        print_table(title, rows, schema.list_columns)
    return 0


def cmd_show(args: argparse.Namespace, session: AdminSession) -> int:
    client, schema = session.resource(args.entity)
    view = DetailView(client, schema, args.record_id)
    record = view.load()
    _print_feedback(view.feedback)
    if record is None:
        return 1
    if args.json:
        print(json.dumps(record.to_view(), indent=2, default=str))
    else:
        labels = [(spec.logical_name, spec.display_label) for spec in schema.fields]
        print_record(f"{schema.name} {args.record_id}", record.model_dump(), labels)
    return 0


def cmd_delete(args: argparse.Namespace, session: AdminSession) -> int:
    client, schema = session.resource(args.entity)
    view = ListView(client, schema)
    deleted = view.delete(args.record_id)
    _print_feedback(view.feedback)
    return 0 if deleted else 1


def cmd_vendor_discounts(args: argparse.Namespace, session: AdminSession) -> int:
    rows = session.vendors().list_discounts(args.vendor_id)
    discounts = normalize_many(rows, DISCOUNT_SCHEMA)
    print_table(
        f"discounts for vendor {args.vendor_id}",
        [record.model_dump() for record in discounts],
        DISCOUNT_SCHEMA.list_columns,
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="THRIVE admin console")
    parser.add_argument("--env-file", default=None)
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List one page of records")
    list_parser.add_argument("entity", choices=ENTITIES)
    list_parser.add_argument("--page", type=int, default=1)
    list_parser.add_argument("--page-size", type=int, default=_default_int("THRIVE_DEFAULT_PAGE_SIZE", 20))
    list_parser.add_argument("--search")
    list_parser.add_argument("--category")
    list_parser.add_argument("--vendor")
    list_parser.add_argument("--type")
    list_parser.add_argument("--json", action="store_true")
    list_parser.set_defaults(func=cmd_list)

    show_parser = subparsers.add_parser("show", help="Show one record")
    show_parser.add_argument("entity", choices=ENTITIES)
    show_parser.add_argument("record_id")
    show_parser.add_argument("--json", action="store_true")
    show_parser.set_defaults(func=cmd_show)

    delete_parser = subparsers.add_parser("delete", help="Delete one record")
    delete_parser.add_argument("entity", choices=ENTITIES)
    delete_parser.add_argument("record_id")
    delete_parser.set_defaults(func=cmd_delete)

    discounts_parser = subparsers.add_parser("vendor-discounts", help="List the discounts of a vendor")
    discounts_parser.add_argument("vendor_id")
    discounts_parser.set_defaults(func=cmd_vendor_discounts)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        session = AdminSession.from_env(args.env_file)
    except ConfigError as exc:
        print(json.dumps({"error": "CONFIG_ERROR", "message": str(exc)}, indent=2))
        return 2
    try:
        return args.func(args, session)
    except ApiError as exc:
        print(json.dumps({"error": exc.code, "message": exc.message, "status": exc.status_code}, indent=2))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
