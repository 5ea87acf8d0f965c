from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from dsassign.adapters import (
    DriverNotFoundError,
    LoginDataError,
    load_driver_plugins,
    load_login_data,
    open_connections,
)
from dsassign.app import assign_expr, assign_resource, assign_table
from dsassign.common.logging import configure_logging
from dsassign.config import ConfigurationError, get_assign_config, get_login_data_path
from dsassign.domain.dispatch import NullProgressReporter
from dsassign.domain.errors import AggregateError, DispatchError, ResolutionError
from dsassign.domain.expressions import quote

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from dsassign.adapters import LoginData
    from dsassign.domain.ports.connection import Connection

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Assign a symbol in several remote sessions")
    parser.add_argument(
        "--logindata",
        type=Path,
        help="JSON login data file (defaults to $DSASSIGN_LOGINDATA)",
    )
    parser.add_argument(
        "--servers",
        nargs="+",
        help="Restrict the assignment to these servers of the login data",
    )
    parser.add_argument(
        "--sync",
        action="store_true",
        help="Use blocking calls even where a connection supports asynchronous ones",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not report progress",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    table = subparsers.add_parser("table", help="Assign a table")
    table.add_argument("symbol", help="Name of the symbol to assign")
    table.add_argument(
        "table",
        nargs="?",
        help="Fully qualified table name (defaults to the 'table' column of the login data)",
    )
    table.add_argument(
        "--variables",
        nargs="+",
        help="Names of the variables to extract",
    )
    table.add_argument(
        "--missings",
        action="store_true",
        help="Push missing values from the data repository",
    )
    table.add_argument(
        "--identifiers",
        type=str,
        help="Name of the identifiers mapping to use",
    )
    table.add_argument(
        "--id-name",
        type=str,
        help="Name of the column that will hold the entity identifiers",
    )

    resource = subparsers.add_parser("resource", help="Assign a resource")
    resource.add_argument("symbol", help="Name of the symbol to assign")
    resource.add_argument(
        "resource",
        nargs="?",
        help="Fully qualified resource name (defaults to the 'resource' column of the login data)",
    )

    expr = subparsers.add_parser("expr", help="Assign the result of an expression")
    expr.add_argument("symbol", help="Name of the symbol to assign")
    expr.add_argument("expression", help="Expression evaluated by each remote session")

    return parser.parse_args(list(argv))


def _load_login_data(args: argparse.Namespace) -> LoginData:
    path = args.logindata if args.logindata is not None else get_login_data_path()
    return load_login_data(path).select(args.servers)


def _run(
    args: argparse.Namespace,
    login_data: LoginData,
    connections: dict[str, Connection],
) -> None:
    asynchronous = False if args.sync else None
    progress = NullProgressReporter() if args.no_progress else None

    if args.command == "table":
        assign_table(
            connections,
            args.symbol,
            args.table or login_data.target_rows("table"),
            variables=args.variables,
            missings=args.missings,
            identifiers=args.identifiers,
            id_name=args.id_name,
            asynchronous=asynchronous,
            progress=progress,
        )
    elif args.command == "resource":
        assign_resource(
            connections,
            args.symbol,
            args.resource or login_data.target_rows("resource"),
            asynchronous=asynchronous,
            progress=progress,
        )
    elif args.command == "expr":
        assign_expr(
            connections,
            args.symbol,
            quote(args.expression),
            asynchronous=asynchronous,
            progress=progress,
        )
    else:
        raise ValueError(f"Unsupported command: {args.command}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        config = get_assign_config()
        configure_logging(level=config.log_level)
        parsed_args = _parse_args(args_list)
        load_driver_plugins()
        login_data = _load_login_data(parsed_args)
        connections = open_connections(login_data)
    except (ConfigurationError, LoginDataError, DriverNotFoundError, ValueError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        _run(parsed_args, login_data, connections)
    except (ResolutionError, ValueError):
        log.exception("Invalid assignment request")
        sys.exit(2)
    except AggregateError as exc:
        for record in exc.records:
            log.error(  # noqa: TRY400
                "%s failed at %s: %s", record.connection, record.stage, record.message
            )
        sys.exit(1)
    except DispatchError:
        log.exception("Assignment failed")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point: load `.env`, trap Ctrl+C, then run :func:`main`."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
