"""Command-line interface for running and preparing the expense API."""

from __future__ import annotations

import argparse

from . import __version__, database
from .entities import ExpenseEntity, UserEntity
from .logging import configure_logging
from .settings import get_settings

DESCRIPTION = "Expense tracking REST API"


def _add_serve_subparser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
) -> None:
    settings = get_settings()
    serve = subparsers.add_parser("serve", help="Run the HTTP server with uvicorn")
    serve.add_argument("--host", default=settings.host, help="Interface to bind")
    serve.add_argument("--port", type=int, default=settings.port, help="Port to listen on")
    serve.add_argument(
        "--reload",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Restart the server when source files change",
    )


def _add_init_db_subparser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
) -> None:
    subparsers.add_parser("init-db", help="Create database tables")


def _add_seed_subparser(
    subparsers: argparse._SubParsersAction[argparse.ArgumentParser],
) -> None:
    subparsers.add_parser("seed", help="Create tables and insert the demo users and expenses")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="expense-api", description=DESCRIPTION)
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--json-logs",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Emit logs as one JSON object per line",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)
    _add_serve_subparser(sub)
    _add_init_db_subparser(sub)
    _add_seed_subparser(sub)
    return parser


def _handle_serve(args: argparse.Namespace) -> None:
    import uvicorn

    uvicorn.run(
        "expense_api.server:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
    )


def _handle_init_db(_: argparse.Namespace) -> None:
    database.init_db()
    print(f"[expense-api] init-db url={database.engine.url.render_as_string(hide_password=True)}")


def _handle_seed(_: argparse.Namespace) -> None:
    database.init_db()
    with database.session_scope() as session:
        users = UserEntity.ensure_seed(session)
        expenses = ExpenseEntity.ensure_seed(session)
    print(f"[expense-api] seed users={users} expenses={expenses}")


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(json_logs=bool(args.json_logs))
    if args.cmd == "serve":
        _handle_serve(args)
    elif args.cmd == "init-db":
        _handle_init_db(args)
    elif args.cmd == "seed":
        _handle_seed(args)


if __name__ == "__main__":
    main()
