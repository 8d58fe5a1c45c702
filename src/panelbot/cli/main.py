"""
Command line entry point.

Usage:
    panelbot db <slug>[:<selector>] [<from>] [<to>] [<key>=<value> ...]
    panelbot list [<tag>]
    panelbot search <query>

Replies are printed, or posted to Slack with --slack-channel.
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Sequence

from panelbot.bot import CommandBot
from panelbot.cli import ux
from panelbot.clients.slack import SlackNotifier
from panelbot.config import Settings, get_settings
from panelbot.core.errors import ConfigurationError, ExitCode, main_with_error_handling
from panelbot.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="panelbot",
        description="Fetch Grafana dashboard panels as images",
    )
    parser.add_argument("--log-level", help="Log level (default from PANELBOT_LOG_LEVEL)")
    parser.add_argument("--slack", action="store_true", help="Post replies to the default Slack channel")
    parser.add_argument("--slack-channel", help="Post replies to this Slack channel")

    subparsers = parser.add_subparsers(dest="command", required=True)

    db_parser = subparsers.add_parser("db", help="Render panels of a dashboard")
    db_parser.add_argument(
        "tokens",
        nargs=argparse.REMAINDER,
        help="<slug>[:<selector>] [<from>] [<to>] [<key>=<value> ...]",
    )

    list_parser = subparsers.add_parser("list", help="List dashboards")
    list_parser.add_argument("tag", nargs="?", help="Only dashboards with this tag")

    search_parser = subparsers.add_parser("search", help="Search dashboards by title")
    search_parser.add_argument("query", nargs="+", help="Search text")

    return parser


def command_text(args: argparse.Namespace) -> str:
    if args.command == "db":
        return " ".join(["db", *args.tokens])
    if args.command == "list":
        return f"list {args.tag}" if args.tag else "list"
    return " ".join(["search", *args.query])


async def run_command(
    settings: Settings,
    text: str,
    *,
    slack: bool = False,
    slack_channel: str | None = None,
) -> int:
    bot = CommandBot.from_settings(settings)
    notifier = None
    channel = slack_channel or settings.slack_default_channel
    if slack:
        if not channel or not settings.slack_bot_token:
            raise ConfigurationError(
                "Slack output needs a channel and PANELBOT_SLACK_BOT_TOKEN",
                {"channel": channel or ""},
            )
        notifier = SlackNotifier(settings.slack_bot_token, timeout=settings.http_timeout)

    async for message in bot.handle(text):
        if notifier is not None:
            await notifier.post_message(channel, message)
        else:
            ux.reply(message)
    return ExitCode.SUCCESS


@main_with_error_handling()
def run(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(args.log_level or settings.log_level)

    try:
        return asyncio.run(
            run_command(
                settings,
                command_text(args),
                slack=args.slack or bool(args.slack_channel),
                slack_channel=args.slack_channel,
            )
        )
    except ConfigurationError as exc:
        ux.error(exc.message)
        raise


def main(argv: Sequence[str] | None = None) -> None:
    raise SystemExit(run(argv))


if __name__ == "__main__":
    main()
