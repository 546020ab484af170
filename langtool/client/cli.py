"""Command line interface.

Usage:
    # Check a text, a file or stdin
    langtool check --text "Some phrase with a smal mistake."
    langtool check notes.txt README.txt
    cat notes.txt | langtool check --language en-US

    # Annotated document (markup is skipped by the server)
    langtool check --data '{"annotation": [{"text": "A "}, {"markup": "<b>"}]}'

    # Server information
    langtool languages
    langtool ping

    # Personal dictionaries (premium)
    langtool words --username me@example.com --api-key KEY
    langtool words --username me@example.com --api-key KEY add colour
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

import aiohttp
from pydantic import ValidationError

from .annotate import annotate
from .clients import ServerClient
from .config import (
    API_KEY_ENV,
    DEFAULT_HOSTNAME,
    DEFAULT_MAX_LENGTH,
    DEFAULT_MAX_SUGGESTIONS,
    DEFAULT_SPLIT_PATTERN,
    HOSTNAME_ENV,
    PORT_ENV,
    USERNAME_ENV,
    ServerConfig,
)
from .core import (
    DispatchMode,
    InvalidValueError,
    LanguageToolError,
    Level,
    parse_language_code,
    parse_port,
    parse_word,
)
from .models import (
    CheckRequest,
    Data,
    LoginArgs,
    WordsAddRequest,
    WordsDeleteRequest,
    WordsRequest,
)
from .runtime.chunking import DispatchPolicy, RetryPolicy, SplitPolicy

logger = logging.getLogger(__name__)

_ESCAPES = {"\\n": "\n", "\\t": "\t", "\\r": "\r"}


def _arg_type(parse: Callable[[str], str]) -> Callable[[str], str]:
    """Turn a validation helper into an argparse ``type``."""

    def convert(value: str) -> str:
        try:
            return parse(value)
        except InvalidValueError as e:
            raise argparse.ArgumentTypeError(str(e)) from e

    convert.__name__ = parse.__name__
    return convert


def _unescape(value: str) -> str:
    """Interpret ``\\n``, ``\\t`` and ``\\r`` typed literally on the command line."""
    for escaped, char in _ESCAPES.items():
        value = value.replace(escaped, char)
    return value


def _csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError("The value should be a positive integer")
    return number


def _existing_file(value: str) -> Path:
    path = Path(value)
    if not path.is_file():
        raise argparse.ArgumentTypeError(f"invalid filename (got '{value}', does not exist)")
    return path


def _add_login_options(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("login options")
    group.add_argument(
        "--username",
        "-u",
        default=os.environ.get(USERNAME_ENV),
        help=f"Your username as used to log in at languagetool.org (env {USERNAME_ENV})",
    )
    group.add_argument(
        "--api-key",
        "-k",
        default=os.environ.get(API_KEY_ENV),
        help=f"Your API key (env {API_KEY_ENV})",
    )


def _add_request_options(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("request options")
    group.add_argument(
        "--language",
        "-l",
        type=_arg_type(parse_language_code),
        default="auto",
        help='Language code like "en-US", or "auto" (default)',
    )
    group.add_argument("--username", "-u", help="Premium username")
    group.add_argument("--api-key", "-k", help="Premium API key")
    group.add_argument("--dicts", type=_csv, help="Comma-separated dictionaries to use")
    group.add_argument(
        "--mother-tongue",
        type=_arg_type(parse_language_code),
        help="Native language, enables false friends checks",
    )
    group.add_argument(
        "--preferred-variants",
        type=_csv,
        help="Comma-separated variants used with language auto, e.g. en-GB,de-AT",
    )
    group.add_argument("--enabled-rules", type=_csv, help="Comma-separated rule IDs to enable")
    group.add_argument("--disabled-rules", type=_csv, help="Comma-separated rule IDs to disable")
    group.add_argument(
        "--enabled-categories", type=_csv, help="Comma-separated category IDs to enable"
    )
    group.add_argument(
        "--disabled-categories", type=_csv, help="Comma-separated category IDs to disable"
    )
    group.add_argument(
        "--enabled-only",
        action="store_true",
        help="Only the rules and categories given with --enabled-* are active",
    )
    group.add_argument(
        "--level",
        choices=[level.value for level in Level],
        default=Level.DEFAULT.value,
        help="Rule level: default or picky",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the ``langtool`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="langtool",
        description="Check text with a LanguageTool server",
    )
    parser.add_argument(
        "--hostname",
        "-H",
        default=os.environ.get(HOSTNAME_ENV, DEFAULT_HOSTNAME),
        help=f"Server hostname (env {HOSTNAME_ENV}, default {DEFAULT_HOSTNAME})",
    )
    parser.add_argument(
        "--port",
        "-p",
        type=_arg_type(parse_port),
        default=os.environ.get(PORT_ENV, ""),
        help=f"Server port, empty or 4 digits (env {PORT_ENV})",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    check = commands.add_parser("check", help="Check text, annotated data, files or stdin")
    source = check.add_mutually_exclusive_group()
    source.add_argument("--text", "-t", help="Text to check")
    source.add_argument("--data", "-d", help="Annotated document, as JSON, to check")
    check.add_argument(
        "files",
        nargs="*",
        type=_existing_file,
        help="Files to check (stdin is read when no input is given)",
    )
    check.add_argument("--raw", "-r", action="store_true", help="Print the JSON response")
    check.add_argument(
        "--max-length",
        type=_positive_int,
        default=DEFAULT_MAX_LENGTH,
        help="Target maximum number of characters sent per request",
    )
    check.add_argument(
        "--split-pattern",
        type=_unescape,
        default=DEFAULT_SPLIT_PATTERN,
        help="Text is only split right after this pattern (default: blank line)",
    )
    check.add_argument(
        "--hard-limit",
        action="store_true",
        help="Cut segments longer than --max-length instead of sending them whole",
    )
    check.add_argument(
        "--max-suggestions",
        type=int,
        default=DEFAULT_MAX_SUGGESTIONS,
        help="Replacements shown per match, a non-positive value shows all",
    )
    check.add_argument(
        "--sequential",
        action="store_true",
        help="Send fragments one after the other instead of concurrently",
    )
    check.add_argument(
        "--max-concurrency",
        type=_positive_int,
        help="Maximum number of fragments checked at the same time",
    )
    check.add_argument(
        "--retries",
        type=int,
        default=0,
        help="Retries of a fragment when the server is overloaded",
    )
    check.add_argument(
        "--retry-delay", type=float, default=1.0, help="Seconds between retries"
    )
    _add_request_options(check)

    commands.add_parser("languages", aliases=["lang"], help="List supported languages")
    commands.add_parser("ping", help="Ping the server and print the delay")

    words = commands.add_parser("words", help="List, add or delete words of your dictionaries")
    words.add_argument("--offset", type=int, help="Offset in the word list")
    words.add_argument("--limit", type=_positive_int, help="Maximum number of words")
    words.add_argument("--dicts", type=_csv, help="Comma-separated dictionaries to list")
    _add_login_options(words)
    actions = words.add_subparsers(dest="action")
    for name, help_text in (("add", "Add a word"), ("delete", "Delete a word")):
        action = actions.add_parser(name, help=help_text)
        action.add_argument("word", type=_arg_type(parse_word), help="Word without whitespace")
        action.add_argument("--dict", dest="dictionary", help="Dictionary name")

    return parser


def build_request(args: argparse.Namespace) -> CheckRequest:
    """Build the request options shared by every input of ``check``."""
    return CheckRequest(
        language=args.language,
        username=args.username,
        api_key=args.api_key,
        dicts=args.dicts,
        mother_tongue=args.mother_tongue,
        preferred_variants=args.preferred_variants,
        enabled_rules=args.enabled_rules,
        disabled_rules=args.disabled_rules,
        enabled_categories=args.enabled_categories,
        disabled_categories=args.disabled_categories,
        enabled_only=args.enabled_only,
        level=Level(args.level),
    )


def build_policies(args: argparse.Namespace) -> tuple[SplitPolicy, DispatchPolicy]:
    split_policy = SplitPolicy(
        max_length=args.max_length,
        pattern=args.split_pattern,
        allow_oversize=not args.hard_limit,
    )
    retry = None
    if args.retries > 0:
        retry = RetryPolicy(max_attempts=args.retries + 1, delay=args.retry_delay)
    dispatch_policy = DispatchPolicy(
        mode=DispatchMode.SEQUENTIAL if args.sequential else DispatchMode.CONCURRENT,
        max_concurrency=args.max_concurrency,
        retry=retry,
    )
    return split_policy, dispatch_policy


def _login(args: argparse.Namespace) -> LoginArgs:
    if not args.username or not args.api_key:
        raise InvalidValueError(
            f"words commands need --username and --api-key "
            f"(or {USERNAME_ENV} and {API_KEY_ENV})"
        )
    return LoginArgs(username=args.username, api_key=args.api_key)


def _inputs(args: argparse.Namespace, base: CheckRequest) -> list[tuple[CheckRequest, str | None]]:
    if args.files:
        return [(base.with_text(path.read_text(encoding="utf-8")), str(path)) for path in args.files]
    if args.data is not None:
        return [(base.with_data(Data.from_json(args.data)), None)]
    if args.text is not None:
        return [(base.with_text(args.text), None)]
    return [(base.with_text(sys.stdin.read()), None)]


async def run_check(client: ServerClient, args: argparse.Namespace) -> None:
    client.max_suggestions = args.max_suggestions
    split_policy, dispatch_policy = build_policies(args)

    for request, origin in _inputs(args, build_request(args)):
        text = request.try_get_text()
        if not text:
            logger.warning("Skipping empty input %s", origin or "")
            continue

        response = await client.check_text(request, split_policy, dispatch_policy)
        if args.raw:
            print(response.to_json())
        else:
            print(annotate(response, text, origin))


async def run_words(client: ServerClient, args: argparse.Namespace) -> None:
    login = _login(args)
    if args.action == "add":
        result = await client.words_add(
            WordsAddRequest(word=args.word, login=login, dictionary=args.dictionary)
        )
    elif args.action == "delete":
        result = await client.words_delete(
            WordsDeleteRequest(word=args.word, login=login, dictionary=args.dictionary)
        )
    else:
        result = await client.words(
            WordsRequest(login=login, offset=args.offset, limit=args.limit, dicts=args.dicts)
        )
    print(result.model_dump_json(by_alias=True, indent=2))


async def run(args: argparse.Namespace) -> None:
    config = ServerConfig(hostname=args.hostname, port=args.port)
    async with ServerClient(config) as client:
        if args.command == "check":
            await run_check(client, args)
        elif args.command in ("languages", "lang"):
            languages = await client.languages()
            print(json.dumps([lang.model_dump(by_alias=True) for lang in languages], indent=2))
        elif args.command == "ping":
            delay = await client.ping()
            print(f"PONG! Delay: {delay:.0f} ms")
        elif args.command == "words":
            await run_words(client, args)


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the ``langtool`` command.

    Returns:
        Process exit status
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    has_source = args.command == "check" and (args.text is not None or args.data is not None)
    if has_source and args.files:
        parser.error("FILES cannot be combined with --text or --data")
    configure_logging(args.verbose)

    try:
        asyncio.run(run(args))
    except (LanguageToolError, ValidationError, aiohttp.ClientError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
