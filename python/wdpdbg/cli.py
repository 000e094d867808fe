"""wdp-client CLI entry point."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List

from .commands import CommandQueue, parse_call
from .config import DEFAULT_HOST, DEFAULT_PAGE, DEFAULT_PORT, DEFAULT_URL, ClientConfig, default_log_level
from .endpoint import Endpoint
from .pages import PageListError, fetch_pages, render_page_table
from .runner import CommandRunner
from .transport import TransportConfig, TransportError, WebSocketTransport

LOG = logging.getLogger("wdpdbg.cli")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wdp-client",
        description="Send commands to a remote debugging page and log the replies",
    )
    parser.add_argument("--host", default=DEFAULT_HOST, help="Debugging proxy host")
    parser.add_argument("-p", "--port", type=int, default=DEFAULT_PORT, help="Debugging proxy port")
    parser.add_argument("--page", type=int, default=DEFAULT_PAGE, help="Page number to attach to")
    parser.add_argument("--url", default=DEFAULT_URL, help="URL to navigate the page to")
    parser.add_argument(
        "-m",
        "--method",
        dest="commands",
        action="append",
        default=[],
        metavar="CALL",
        help="Extra command as 'Namespace.Method [JSON-params]' (repeatable)",
    )
    parser.add_argument("--no-navigate", action="store_true", help="Do not send Page.navigate first")
    parser.add_argument("--list", action="store_true", help="List inspectable pages and exit")
    parser.add_argument("-d", "--trace", action="store_true", help="Trace websocket frames")
    parser.add_argument("--log-level", default=default_log_level(), help="Logging level (default INFO)")
    return parser


def config_from_args(args: argparse.Namespace) -> ClientConfig:
    return ClientConfig(
        host=args.host,
        port=args.port,
        page=args.page,
        url=args.url,
        navigate=not args.no_navigate,
        commands=list(args.commands),
        log_level=args.log_level,
        trace=args.trace,
    )


def build_queue(config: ClientConfig) -> CommandQueue:
    calls = []
    if config.navigate:
        calls.append(("Page.navigate", {"url": config.url}))
    for text in config.commands:
        calls.append(parse_call(text))
    return CommandQueue.from_calls(calls)


def main(argv: List[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.port <= 0 or args.port > 65535:
        parser.error(f"port out of range: {args.port}")
    if args.page < 0:
        parser.error(f"page must not be negative: {args.page}")
    config = config_from_args(args)
    try:
        queue = build_queue(config)
    except ValueError as exc:
        parser.error(str(exc))
    _configure_logging(config.log_level)
    endpoint = Endpoint.from_config(config)

    if args.list:
        return _list_pages(endpoint)

    transport = WebSocketTransport(endpoint.url, TransportConfig(trace=config.trace))
    runner = CommandRunner(transport, queue)
    try:
        runner.run()
    except TransportError as exc:
        LOG.error("%s", exc)
        return 1
    return 0


def _list_pages(endpoint: Endpoint) -> int:
    try:
        pages = fetch_pages(endpoint)
    except PageListError as exc:
        LOG.error("%s", exc)
        return 1
    print(render_page_table(pages))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
