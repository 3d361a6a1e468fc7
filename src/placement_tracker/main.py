import argparse
import logging
import sys
from datetime import date, datetime
from typing import Optional

import dateparser

from .models import Result, Stage, ValidationError
from .render import render_html, render_summary, render_table
from .settings import Settings, load_settings
from .storage import JsonFileStorage, StorageError
from .store import ApplicationStore

def build_store(cfg: Settings) -> ApplicationStore:
    store = ApplicationStore(
        JsonFileStorage(cfg.storage_path),
        key=cfg.storage_key,
        today=cfg.today,
        seed=cfg.seed_examples,
    )
    store.load()
    return store

def parse_applied_date(text: Optional[str], now: datetime, timezone: str) -> Optional[date]:
    """Read a user-entered date relative to ``now`` in the tracker's timezone."""
    if not text:
        return now.date()
    parsed = dateparser.parse(text, settings={
        "PREFER_DATES_FROM": "past",
        "RELATIVE_BASE": now.replace(tzinfo=None),
        "TIMEZONE": timezone,
        "RETURN_AS_TIMEZONE_AWARE": False,
    })
    return parsed.date() if parsed else None

def ask_confirmation(_record) -> bool:
    try:
        answer = input("Are you sure you want to delete this application? [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")

def cmd_add(args, cfg: Settings, store: ApplicationStore) -> int:
    applied = parse_applied_date(args.date, cfg.now(), cfg.timezone.zone)
    if applied is None:
        print(f"[ERROR] Could not understand date {args.date!r}")
        return 1
    try:
        record = store.add(args.company, args.role, args.stage, args.result, applied)
    except ValidationError as e:
        print("Please fill all required fields!")
        print(f"[ERROR] {e}")
        return 1
    print(f"Application for {record.company_name} added successfully!")
    return 0

def cmd_list(args, cfg: Settings, store: ApplicationStore) -> int:
    print(render_table(store))
    return 0

def cmd_delete(args, cfg: Settings, store: ApplicationStore) -> int:
    confirm = None if args.yes or not cfg.confirm_deletes else ask_confirmation
    if not store.delete(args.id, confirm=confirm):
        print("Deletion cancelled.")
        return 0
    print("Application deleted successfully!")
    return 0

def cmd_summary(args, cfg: Settings, store: ApplicationStore) -> int:
    print(render_summary(store.summary()))
    return 0

def cmd_export(args, cfg: Settings, store: ApplicationStore) -> int:
    try:
        with open(args.path, "w", encoding="utf-8") as f:
            f.write(render_html(store, store.summary()))
    except OSError as e:
        print(f"[ERROR] cannot write {args.path}: {e}")
        return 1
    print(f"[EXPORT] {len(store)} applications written to {args.path}")
    return 0

def cmd_reset(args, cfg: Settings, store: ApplicationStore) -> int:
    store.storage.remove_item(store.key)
    print("[RESET] Stored applications cleared; examples are restored on next run")
    return 0

COMMANDS = {
    "add": cmd_add,
    "list": cmd_list,
    "delete": cmd_delete,
    "summary": cmd_summary,
    "export": cmd_export,
    "reset": cmd_reset,
}

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Placement application tracker")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="Record a new application")
    add.add_argument("--company", required=True, help="Company name")
    add.add_argument("--role", required=True, help="Role applied for")
    add.add_argument("--stage", required=True, choices=[s.value for s in Stage])
    add.add_argument("--result", required=True, choices=[r.value for r in Result])
    add.add_argument("--date", help="Date applied (defaults to today; e.g. 2026-10-01, 'yesterday')")

    sub.add_parser("list", help="List applications")

    delete = sub.add_parser("delete", help="Delete an application by id")
    delete.add_argument("id", type=int)
    delete.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")

    sub.add_parser("summary", help="Show summary counts")

    export = sub.add_parser("export", help="Write an HTML page with the summary and table")
    export.add_argument("path")

    sub.add_parser("reset", help="Clear stored applications")
    return parser

def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    cfg = load_settings()
    try:
        store = build_store(cfg)
        return COMMANDS[args.command](args, cfg, store)
    except StorageError as e:
        print(f"[ERROR] {e}")
        return 1

if __name__ == "__main__":
    sys.exit(main())
