#!/usr/bin/env python3
"""
Armory ledger management CLI.

Usage:
    python manage.py serve       Start the API server
    python manage.py migrate     Apply pending schema migrations
    python manage.py status      Show migration status
    python manage.py verify      Run database integrity checks
"""

import argparse
import asyncio
import sys
from pathlib import Path

from armory.config import configure_logging, get_settings


def cmd_serve(args: argparse.Namespace) -> int:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "armory.api.main:app",
        host=args.host or settings.api.host,
        port=args.port or settings.api.port,
        reload=args.reload,
    )
    return 0


def cmd_migrate(args: argparse.Namespace) -> int:
    from armory.infrastructure.storage.sqlite.migrations import initialize_database

    results = asyncio.run(
        initialize_database(args.db_path, create_backup_before=not args.no_backup)
    )
    if not results:
        print("Database is up to date.")
    for result in results:
        status = "SUCCESS" if result.success else "FAILED"
        print(f"[{status}] v{result.version}: {result.name} ({result.execution_time_ms}ms)")
        if result.error:
            print(f"         Error: {result.error}")
    return 0 if all(r.success for r in results) else 1


def cmd_status(args: argparse.Namespace) -> int:
    from armory.infrastructure.storage.sqlite.migrations import get_migration_status

    status = asyncio.run(get_migration_status(args.db_path))
    print(f"Database exists: {status['exists']}")
    print(f"Current version: {status.get('current_version') or 'N/A'}")
    print(f"Applied migrations: {status.get('applied_migrations', [])}")
    print(f"Pending migrations: {status.get('pending_migrations', [])}")
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    from armory.infrastructure.storage.sqlite.migrations import verify_schema_integrity

    checks = asyncio.run(verify_schema_integrity(args.db_path))
    for check in checks:
        print(f"[{check['status']}] {check['check']}")
        if check["status"] != "PASS":
            for key, value in check.items():
                if key not in ("check", "status"):
                    print(f"       {key}: {value}")
    return 0 if all(c["status"] == "PASS" for c in checks) else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Armory ledger management CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Start the API server")
    serve.add_argument("--host", help="Bind address (default from settings)")
    serve.add_argument("--port", type=int, help="Port (default from settings)")
    serve.add_argument("--reload", action="store_true", help="Auto-reload on changes")
    serve.set_defaults(func=cmd_serve)

    for name, func, help_text in (
        ("migrate", cmd_migrate, "Apply pending schema migrations"),
        ("status", cmd_status, "Show migration status"),
        ("verify", cmd_verify, "Run database integrity checks"),
    ):
        command = sub.add_parser(name, help=help_text)
        command.add_argument(
            "--db-path",
            type=Path,
            help="Database path (default from settings)",
        )
        command.set_defaults(func=func)
        if name == "migrate":
            command.add_argument(
                "--no-backup",
                action="store_true",
                help="Skip backup before migrations",
            )

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
