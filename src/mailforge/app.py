# =============================================================================
# mailforge Command Line
# =============================================================================
# Thin argparse front end over the library:
#
#   mailforge build --from me@example.com --to you@example.com \
#       --subject "Report" --body-file report.html --html \
#       --inline logo=logo.png --attach report.pdf -o message.eml
#
#   mailforge send --account work --to you@example.com --subject Hi --body Hello
#
# `build` writes the assembled MIME bytes; `send` delivers them through the
# configured SMTP account.
# =============================================================================

import argparse
import asyncio
import logging
import mimetypes
import sys
from pathlib import Path

from mailforge import __version__, __app_name__
from mailforge.config import ComposeConfig, Config, ConfigError, print_paths
from mailforge.core import AttachmentPart, InlineResourcePart, MailType, Message
from mailforge.mime import MailError, MessageAssembler
from mailforge.smtp import SMTPClient, SMTPError

logger = logging.getLogger(__name__)


# =============================================================================
# Argument Parsing
# =============================================================================

def parse_inline_spec(value: str) -> tuple[str, Path]:
    """
    Parse an --inline argument of the form CID=PATH.

    Raises:
        argparse.ArgumentTypeError: If the value is not CID=PATH.
    """
    cid, sep, path = value.partition("=")
    if not sep or not cid or not path:
        raise argparse.ArgumentTypeError(f"expected CID=PATH, got {value!r}")
    return cid, Path(path)


def _add_message_arguments(parser: argparse.ArgumentParser) -> None:
    """Options shared by the build and send commands."""
    parser.add_argument(
        "--account",
        help="Configured account to use (default: general.default_account)",
    )
    parser.add_argument(
        "--from",
        dest="from_addr",
        help="Sender address (default: the account's email)",
    )
    parser.add_argument(
        "--to",
        action="append",
        required=True,
        help="Recipient address (repeat for several recipients)",
    )
    parser.add_argument("--subject", default="", help="Subject line")

    body = parser.add_mutually_exclusive_group(required=True)
    body.add_argument("--body", help="Message body text")
    body.add_argument("--body-file", type=Path, help="Read the message body from a UTF-8 file")

    parser.add_argument(
        "--html",
        action="store_true",
        help="Send the body as text/html (default: compose.mail_type)",
    )
    parser.add_argument(
        "--attach",
        action="append",
        default=[],
        metavar="PATH",
        help="Attach a file (repeatable)",
    )
    parser.add_argument(
        "--inline",
        action="append",
        default=[],
        type=parse_inline_spec,
        metavar="CID=PATH",
        help="Embed a file referenced from the HTML as cid:CID (repeatable)",
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser."""
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description="mailforge: assemble and send MIME email messages",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--paths",
        action="store_true",
        help="Print configuration paths and exit",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (default: XDG config location)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode (verbose logging)",
    )

    commands = parser.add_subparsers(dest="command")

    build = commands.add_parser("build", help="Write the assembled message bytes")
    _add_message_arguments(build)
    build.add_argument(
        "-o", "--output",
        type=Path,
        help="Write to this file instead of stdout",
    )

    send = commands.add_parser("send", help="Send the message over SMTP")
    _add_message_arguments(send)
    send.add_argument(
        "--password-stdin",
        action="store_true",
        help="Read the SMTP password from stdin instead of the keyring",
    )

    return parser


# =============================================================================
# Message Construction
# =============================================================================

def guess_content_type(path: Path | str, compose: ComposeConfig) -> str:
    """Content type for a file, or "" to let the assembler default it."""
    if not compose.guess_content_types:
        return ""
    mime_type, _ = mimetypes.guess_type(str(path))
    return mime_type or ""


def build_message(args: argparse.Namespace, config: Config) -> Message:
    """
    Build a Message from parsed command-line arguments.

    Attachments are passed as file references and read by the assembler;
    inline resources are read here since they must carry their bytes.

    Raises:
        ConfigError: If no sender is given and no account is configured.
        OSError: If the body file or an inline file cannot be read.
    """
    from_addr = args.from_addr or config.get_account(args.account).email

    if args.body_file is not None:
        body = args.body_file.read_text(encoding="utf-8")
    else:
        body = args.body

    kind = MailType.HTML if args.html else config.compose.kind

    attachments = tuple(
        AttachmentPart.from_file(path, guess_content_type(path, config.compose))
        for path in args.attach
    )

    inline = tuple(
        InlineResourcePart(
            content_id=cid,
            name=path.name,
            content_type=guess_content_type(path, config.compose),
            body=path.read_bytes(),
        )
        for cid, path in args.inline
    )

    return Message(
        from_addr=from_addr,
        to=tuple(args.to),
        subject=args.subject,
        body=body,
        kind=kind,
        attachments=attachments,
        inline=inline,
    )


# =============================================================================
# Commands
# =============================================================================

def run_build(args: argparse.Namespace, config: Config) -> int:
    """Assemble the message and write it to --output or stdout."""
    payload = MessageAssembler().assemble(build_message(args, config))

    if args.output:
        args.output.write_bytes(payload)
        logger.info(f"Wrote {len(payload)} bytes to {args.output}")
    else:
        sys.stdout.buffer.write(payload)
        sys.stdout.buffer.flush()
    return 0


async def run_send(args: argparse.Namespace, config: Config) -> int:
    """Assemble the message and deliver it through the configured account."""
    account = config.get_account(args.account)
    message = build_message(args, config)

    password = None
    if args.password_stdin:
        password = sys.stdin.readline().rstrip("\r\n")

    client = SMTPClient(account, password=password)
    await client.connect()
    try:
        await client.send(message)
    finally:
        await client.disconnect()

    print(f"Sent to {', '.join(message.to)}")
    return 0


# =============================================================================
# CLI Entry Point
# =============================================================================

def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for mailforge.

    Returns:
        Exit code (0 for success, 1 for errors, 2 for usage errors).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.paths:
        print_paths()
        return 0

    if args.command is None:
        parser.print_help()
        return 2

    try:
        config = Config.load(args.config)
        if args.command == "build":
            return run_build(args, config)
        return asyncio.run(run_send(args, config))
    except (MailError, ConfigError, SMTPError, OSError) as e:
        print(f"{__app_name__}: error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
