"""Command-line entry point: run one command on a remote host."""

import argparse
import asyncio
import getpass
import logging
import os
import sys

from sshexec.bridges import AsyncSSHClient, SSHClient
from sshexec.config import Settings
from sshexec.models import ExecResult
from sshexec.utils.console import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_COMMAND_FAILED = 1
EXIT_CONNECT_FAILED = 2


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sshexec",
        description="Run a command on a remote host over SSH.",
    )
    parser.add_argument("host", help="Remote host name or address")
    parser.add_argument("command", help="Command line to run remotely")
    parser.add_argument("-p", "--port", type=int, default=22)
    parser.add_argument("-u", "--user", default="root")
    parser.add_argument(
        "-t",
        "--timeout",
        type=int,
        default=settings.command_timeout,
        help="Command deadline in seconds, 0 for none",
    )
    parser.add_argument(
        "--connect-timeout",
        type=int,
        default=settings.connect_timeout,
        help="Connect timeout in seconds",
    )
    parser.add_argument(
        "--async",
        dest="use_async",
        action="store_true",
        help="Use the asyncio client",
    )
    return parser


def _read_password(user: str, host: str) -> str:
    password = os.getenv("SSHEXEC_PASSWORD")
    if password is not None:
        return password
    return getpass.getpass(f"{user}@{host}'s password: ")


def _report(result: ExecResult) -> int:
    sys.stdout.write(result.stdout)
    sys.stderr.write(result.stderr)
    if result.ok:
        return EXIT_OK
    logger.error("Command failed: %s", result.error)
    return EXIT_COMMAND_FAILED


def run_sync(args: argparse.Namespace, settings: Settings, password: str) -> int:
    with SSHClient(settings=settings) as ssh:
        ssh.set_timeout(args.connect_timeout)
        error = ssh.connect(args.host, args.port, args.user, password)
        if error:
            logger.error("%s", error)
            return EXIT_CONNECT_FAILED
        return _report(ssh.exec(args.command, timeout=args.timeout))


async def run_async(args: argparse.Namespace, settings: Settings, password: str) -> int:
    async with AsyncSSHClient(settings=settings) as ssh:
        ssh.set_timeout(args.connect_timeout)
        error = await ssh.connect(args.host, args.port, args.user, password)
        if error:
            logger.error("%s", error)
            return EXIT_CONNECT_FAILED
        return _report(await ssh.exec(args.command, timeout=args.timeout))


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the command and return the exit code."""
    settings = Settings.from_env()
    args = build_parser(settings).parse_args(argv)
    configure_logging(settings.log_level, settings.log_colors)

    password = _read_password(args.user, args.host)
    if args.use_async:
        return asyncio.run(run_async(args, settings, password))
    return run_sync(args, settings, password)


if __name__ == "__main__":
    sys.exit(main())
