"""
CLI main entry point for the z/OSMF client.

Thin wrapper around the engine - no business logic here.
"""

import argparse
import asyncio
import logging
import sys

from zos_engine import (
    CompareOptions,
    CompareRunner,
    DisplayMode,
    SourceKind,
    SourceSpec,
    ZosClientError,
    apiml_logout,
    archive_workflow,
    delete_archived_workflow,
    delete_workflow,
)
from zos_engine.config import Config
from zos_engine.logging_config import setup_logging

from .output import print_comparison, print_error, print_message, print_workflow_archived

logger = logging.getLogger(__name__)

# Kind of each side for every compare command
COMPARE_COMMANDS = {
    "data-set": (SourceKind.DATA_SET, SourceKind.DATA_SET),
    "uss-file": (SourceKind.USS_FILE, SourceKind.USS_FILE),
    "spool-dd": (SourceKind.SPOOL_DD, SourceKind.SPOOL_DD),
    "local-file-data-set": (SourceKind.LOCAL_FILE, SourceKind.DATA_SET),
    "local-file-uss-file": (SourceKind.LOCAL_FILE, SourceKind.USS_FILE),
    "local-file-spool-dd": (SourceKind.LOCAL_FILE, SourceKind.SPOOL_DD),
}


def build_parser() -> argparse.ArgumentParser:
    """
    Build the command-line parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="zos-client",
        description="Compare z/OS content, manage z/OSMF workflows and log out of API ML.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s compare data-set "SYS1.PARMLIB(ERRC)" "SYS1.PARMLIB(ERRC)"
  %(prog)s compare local-file-uss-file ./a.txt /u/ibmuser/a.txt --no-seqnum
  %(prog)s workflows archive 0123-456789-abc-def
  %(prog)s auth logout

Connection settings are read from ZOSMF_HOST, ZOSMF_PORT, ZOSMF_USER,
ZOSMF_PASSWORD, ZOSMF_TOKEN_TYPE and ZOSMF_TOKEN_VALUE.
        """,
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: LOG_LEVEL env var or WARNING)",
    )

    commands = parser.add_subparsers(dest="group", required=True)

    compare = commands.add_parser("compare", help="Compare the content of two sources")
    compare_types = compare.add_subparsers(dest="command", required=True)
    for name, (first, second) in COMPARE_COMMANDS.items():
        sub = compare_types.add_parser(name, help=f"Compare {first.value} with {second.value}")
        sub.add_argument("first", help=f"First {first.value} to compare")
        sub.add_argument("second", help=f"Second {second.value} to compare")
        _add_compare_options(sub)

    workflows = commands.add_parser("workflows", help="Manage z/OSMF workflows")
    workflow_actions = workflows.add_subparsers(dest="command", required=True)
    for name, help_text in (
        ("archive", "Archive a workflow instance"),
        ("delete", "Delete a workflow instance"),
        ("delete-archived", "Delete an archived workflow"),
    ):
        sub = workflow_actions.add_parser(name, help=help_text)
        sub.add_argument("workflow_key", help="Workflow key")
        sub.add_argument(
            "--zosmf-version",
            type=str,
            default=None,
            help="z/OSMF REST API version (default: 1.0)",
        )

    auth = commands.add_parser("auth", help="Manage API ML authentication")
    auth_actions = auth.add_subparsers(dest="command", required=True)
    auth_actions.add_parser("logout", help="Invalidate the API ML token of the session")

    return parser


def _add_compare_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-b", "--binary", action="store_true", help="Transfer the first side in binary mode")
    parser.add_argument(
        "--binary2",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Transfer the second side in binary mode (default: same as the first side)",
    )
    parser.add_argument("-e", "--encoding", default=None, help="Encoding of the first side")
    parser.add_argument("--encoding2", default=None, help="Encoding of the second side")
    parser.add_argument("-r", "--record", action="store_true", help="Transfer data sets in record mode")
    parser.add_argument("-v", "--volume", default=None, help="Volume of the first data set")
    parser.add_argument("--volume2", default=None, help="Volume of the second data set")
    parser.add_argument(
        "--seqnum",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Include the 8-character sequence number field (default: included)",
    )
    parser.add_argument(
        "--context-lines",
        type=int,
        default=3,
        help="Number of context lines around each change (default: 3)",
    )
    parser.add_argument(
        "--browser-view",
        action="store_true",
        help="Open the diff in a browser instead of the terminal",
    )
    parser.add_argument(
        "--response-timeout",
        type=int,
        default=None,
        help="Seconds z/OSMF may take before it times out the request",
    )


def build_sources(args: argparse.Namespace) -> tuple[SourceSpec, SourceSpec]:
    """
    Create the two compared sides from parsed arguments.

    For local file commands the transfer options apply to the remote side.
    Otherwise the second side falls back to the first side's options.
    """
    first_kind, second_kind = COMPARE_COMMANDS[args.command]
    if first_kind == SourceKind.LOCAL_FILE:
        first = SourceSpec(kind=first_kind, name=args.first)
        second = SourceSpec(
            kind=second_kind,
            name=args.second,
            binary=args.binary,
            encoding=args.encoding,
            record=args.record,
            volume=args.volume,
        )
        return first, second

    first = SourceSpec(
        kind=first_kind,
        name=args.first,
        binary=args.binary,
        encoding=args.encoding,
        record=args.record,
        volume=args.volume,
    )
    second = SourceSpec(
        kind=second_kind,
        name=args.second,
        binary=args.binary if args.binary2 is None else args.binary2,
        encoding=args.encoding2 or args.encoding,
        record=args.record,
        volume=args.volume2,
    )
    return first, second


async def dispatch(args: argparse.Namespace, config: Config) -> None:
    """
    Run the command selected on the command line.

    Args:
        args: Parsed arguments
        config: Connection configuration
    """
    config.validate()
    session = config.to_session()

    if args.group == "compare":
        first, second = build_sources(args)
        options = CompareOptions(
            strip_sequence_numbers=not args.seqnum,
            context_lines=args.context_lines,
            display_mode=DisplayMode.BROWSER if args.browser_view else DisplayMode.TERMINAL,
            response_timeout=args.response_timeout,
            colorize=sys.stdout.isatty(),
        )
        result = await CompareRunner(session=session).compare(first, second, options)
        print_comparison(result)

    elif args.group == "workflows":
        if args.command == "archive":
            archived = await archive_workflow(session, args.workflow_key, args.zosmf_version)
            print_workflow_archived(archived)
        elif args.command == "delete":
            await delete_workflow(session, args.workflow_key, args.zosmf_version)
            print_message(f"Workflow {args.workflow_key} deleted.")
        else:
            await delete_archived_workflow(session, args.workflow_key, args.zosmf_version)
            print_message(f"Archived workflow {args.workflow_key} deleted.")

    elif args.group == "auth":
        await apiml_logout(session)
        print_message("Logout successful. The authentication token has been revoked.")


def main(argv: list[str] | None = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    config = Config.from_env()
    setup_logging(args.log_level or config.log_level)

    try:
        asyncio.run(dispatch(args, config))
    except ZosClientError as e:
        logger.debug("Command failed", exc_info=True)
        print_error(e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
