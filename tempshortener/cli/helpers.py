"""Helpers for the interactive shell.

Functions:
    load_or_create_owner_id(path: Path) -> str
        Read the persisted owner identity, or create and persist a new one
    open_in_browser(url: str) -> bool
        Open a URL in the default web browser
"""

import logging
import uuid
import webbrowser
from pathlib import Path


logger = logging.getLogger(__name__)


def load_or_create_owner_id(path: Path) -> str:
    """Read the owner identity from `path`, creating it on first use.

    If the file can't be read or written, a fresh (unsaved) identity is returned.

    Args:
        path (Path): file holding the owner id

    Returns:
        str: the owner id

    Example:
        >>> load_or_create_owner_id(Path('user_id.txt'))
        '3f1c9a7e-0d2b-4c55-9a0e-5b8f2f1d6e44'
    """
    try:
        if path.is_file():
            owner_id = path.read_text(encoding='utf-8').strip()
            if owner_id:
                return owner_id

        owner_id = str(uuid.uuid4())
        path.write_text(owner_id, encoding='utf-8')
        logger.debug('Created new owner id file %s.', path)
        return owner_id
    except OSError:
        logger.warning('Owner id file %s is not accessible. Using a temporary owner id.', path, exc_info=True)
        return str(uuid.uuid4())


def open_in_browser(url: str) -> bool:
    """Open `url` in the default browser. Return False if no browser could be used."""
    try:
        return webbrowser.open(url)
    except webbrowser.Error:
        logger.warning('Failed to launch browser for %s.', url, exc_info=True)
        return False
