"""Interactive shell for the short link registry.

The shell is a thin menu loop around ShortLinkMemoryDAO: it reads the
user's choices from stdin, prints results to stdout and reports evictions
through ConsoleEvictionNotifier. The owner identity is kept in a small file
so the same user keeps their links listed across menu actions.

Usage:
    $ tempshortener --config config.yml --owner-id-file ~/.tempshortener_id
"""

import os
import argparse
import logging
from collections.abc import Callable
from typing import TypeAlias
from pathlib import Path

from tempshortener.cli import constants
from tempshortener.cli.helpers import load_or_create_owner_id, open_in_browser
from tempshortener.dao.base import ShortLinkBaseDAO
from tempshortener.dao.memory import ShortLinkMemoryDAO
from tempshortener.constants import ENV
from tempshortener.exceptions import TempShortenerError
from tempshortener.notifications import ConsoleEvictionNotifier
from tempshortener.utils import app_env, initialize_logging, load_settings


logger = logging.getLogger(__name__)

Prompt: TypeAlias = Callable[[str], str]


def create_short_link(dao: ShortLinkBaseDAO, owner_id: str, prompt: Prompt = input) -> None:
    target = prompt('Enter URL: ').strip()
    raw_limit = prompt('Click limit: ').strip()

    try:
        click_limit = int(raw_limit)
    except ValueError:
        print(f'Error: click limit must be a whole number (given: {raw_limit!r}).')
        return

    try:
        shortcode = dao.create(target, owner_id, click_limit)
    except TempShortenerError as e:
        print(f'Error: {e}')
    else:
        print(f'Short link created: {shortcode}')


def open_short_link(
    dao: ShortLinkBaseDAO,
    owner_id: str,
    prompt: Prompt = input,
    opener: Callable[[str], bool] = open_in_browser,
) -> None:
    shortcode = prompt('Enter short link code: ').strip()

    try:
        target = dao.consume(shortcode, owner_id)
    except TempShortenerError as e:
        print(f'Error: {e}')
        return

    print(f'Following link: {target}')
    if not opener(target):
        print(f'Unable to launch a browser. Open this URL manually: {target}')


def list_my_links(dao: ShortLinkBaseDAO, owner_id: str) -> None:
    links = dao.list_by_owner(owner_id)
    if not links:
        print(constants.NO_LINKS)
        return

    print('\n=== Your links ===')
    for link in links:
        print(f'Short link code: {link.shortcode}')
        print(f' URL: {link.target}')
        print(f' Clicks: {link.click_count}/{link.click_limit}')
        print(f' Expires at: {link.expires_at.isoformat(timespec="seconds")}')


def show_stats(dao: ShortLinkBaseDAO, owner_id: str) -> None:
    print(f'Total links: {dao.count()}')
    print(f'Your links: {dao.count_by_owner(owner_id)}')


def run(dao: ShortLinkBaseDAO, owner_id: str, prompt: Prompt = input) -> None:
    """Run the menu loop until the user exits (or stdin is closed)

    The registry is shut down on the way out in every case.
    """
    print(constants.BANNER)
    print(f' Your user id: {owner_id}\n')

    try:
        while True:
            try:
                choice = prompt(constants.MENU).strip()
            except EOFError:
                break

            if choice == constants.CREATE:
                create_short_link(dao, owner_id, prompt)
            elif choice == constants.OPEN:
                open_short_link(dao, owner_id, prompt)
            elif choice == constants.LIST:
                list_my_links(dao, owner_id)
            elif choice == constants.STATS:
                show_stats(dao, owner_id)
            elif choice == constants.EXIT:
                break
            else:
                print(constants.INVALID_CHOICE)
            print()
    finally:
        print(constants.GOODBYE)
        dao.shutdown()


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Steps:
        - Parse CLI arguments
        - Initialize logging and resolve settings
        - Load (or create) the owner identity
        - Run the menu loop
    """
    parser = argparse.ArgumentParser(
        prog='tempshortener',
        description='Create and open short links with a click limit and a 12 hour lifetime',
    )
    parser.add_argument(
        '--config',
        default=None,
        help='YAML configuration file (default: $TEMPSHORTENER_CONFIG, if set)',
    )
    parser.add_argument(
        '--owner-id-file',
        default=None,
        help='File holding your user id (default: user_id.txt in the working directory)',
    )
    parser.add_argument(
        '--log-level',
        default=None,
        help='Log level (default: $LOG_LEVEL or WARNING)',
    )

    args = parser.parse_args(argv)

    initialize_logging(args.log_level or os.getenv(ENV.App.LOG_LEVEL, 'WARNING'))
    settings = load_settings(args.config)

    owner_id_file = Path(args.owner_id_file) if args.owner_id_file else settings.owner_id_file
    owner_id = load_or_create_owner_id(owner_id_file)

    dao = ShortLinkMemoryDAO.from_settings(settings, notifier=ConsoleEvictionNotifier())
    logger.debug('Starting interactive shell for owner %s (env: %s).', owner_id, app_env())
    run(dao, owner_id)


if __name__ == '__main__':
    main()
