"""
DailyScry command line.

Fetches a random card, renders it and posts it to the selected channels.
Without a channel flag the rendered card is printed instead.

Usage:
    dailyscry [--mastodon] [--telegram] [--dry-run] [-v | -q]
"""

import argparse
import asyncio
import logging
from collections.abc import Sequence

from dailyscry.clients.images import download_images
from dailyscry.clients.mastodon import MastodonClient
from dailyscry.clients.scryfall import ScryfallClient
from dailyscry.clients.telegram import TelegramClient
from dailyscry.config import Settings, load_settings
from dailyscry.models.failure import DailyScryError, PublishChainError
from dailyscry.rendering.card import RenderedCard, render_card
from dailyscry.services.card_source import random_card
from dailyscry.services.publisher import (
    format_for_stdout,
    publish_to_mastodon,
    publish_to_telegram,
)

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="dailyscry",
        description="Post a random Magic: The Gathering card",
    )
    parser.add_argument("--mastodon", action="store_true", help="Post to mastodon")
    parser.add_argument("--telegram", action="store_true", help="Post to telegram")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Run the command without posting anything",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="More log output (-v info, -vv debug)",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="count",
        default=0,
        help="Less log output",
    )
    return parser


def log_level(verbosity: int) -> int:
    """Map the -v/-q balance to a logging level, WARNING being the default."""
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    if verbosity == 0:
        return logging.WARNING
    return logging.ERROR


def configure_logging(verbosity: int) -> None:
    logging.basicConfig(level=log_level(verbosity), format=LOG_FORMAT)


async def post_to_mastodon(
    settings: Settings,
    rendered: RenderedCard,
    images: list[bytes],
    link: str,
) -> None:
    client = MastodonClient(
        settings.mastodon_url,  # type: ignore[arg-type]
        settings.mastodon_access_token,  # type: ignore[arg-type]
    )
    await client.verify_credentials()

    logger.debug("creating mastodon post...")
    thread = await publish_to_mastodon(
        rendered, images, link, client, settings.mastodon_character_limit
    )
    print(f"Posted to {settings.mastodon_url}: status {thread.root_id}")


async def post_to_telegram(
    settings: Settings,
    rendered: RenderedCard,
    images: list[bytes],
    link: str,
) -> None:
    client = TelegramClient(
        settings.telegram_token,  # type: ignore[arg-type]
        settings.telegram_chat_id,  # type: ignore[arg-type]
    )

    logger.debug("creating telegram post...")
    await publish_to_telegram(rendered, images, link, client, settings.telegram_character_limit)
    print(f"Posted to {settings.telegram_chat_id}")


async def run(args: argparse.Namespace) -> None:
    """
    Run one posting cycle.

    Rendering happens before any image is downloaded or post published,
    so a card that cannot be rendered leaves no trace on the channels.

    Raises:
        DailyScryError: On any classified failure
    """
    settings = load_settings()

    # Fail on missing channel settings before doing any work
    if args.mastodon and not args.dry_run:
        settings.check_mastodon_config()
    if args.telegram and not args.dry_run:
        settings.check_telegram_config()

    card = await random_card(settings, ScryfallClient())
    link = card.scryfall_uri or ""
    logger.info("link to card %s", link)

    rendered = render_card(card)
    logger.info("got card texts")
    logger.debug("card texts %r", rendered.texts)

    if not args.mastodon and not args.telegram:
        print(format_for_stdout(rendered, link))
        return

    if args.dry_run:
        logger.debug("this was a dry run, exiting")
        return

    images = await download_images(card, settings.image_path)

    if args.mastodon:
        await post_to_mastodon(settings, rendered, images, link)
    if args.telegram:
        await post_to_telegram(settings, rendered, images, link)


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose - args.quiet)

    if args.dry_run:
        print("dry run...")

    try:
        asyncio.run(run(args))
    except PublishChainError as e:
        published = e.published_ids
        logger.error(
            "thread broken after %d post(s): %s",
            len(published),
            ", ".join(published) or "none",
        )
        logger.error("%s", e.to_detail().model_dump_json())
        return 1
    except DailyScryError as e:
        logger.error("%s", e.to_detail().model_dump_json())
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
