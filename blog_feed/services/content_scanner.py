"""Content repository scanner.

This module enumerates the content files of a directory and reads them.
"""

import logging
from pathlib import Path
from typing import List, Union

from blog_feed.exceptions import ContentDirectoryError
from blog_feed.models.schemas import RawContentFile


logger = logging.getLogger(__name__)


def scan_content_dir(directory: Union[str, Path], extension: str = ".md") -> List[RawContentFile]:
    """Read every content file with the given extension in a directory.

    The scan is not recursive. Files are returned in name order so that
    downstream tie-breaking is deterministic.

    Args:
        directory: Directory holding the content files
        extension: File extension to keep (e.g. ".md")

    Returns:
        List of RawContentFile objects

    Raises:
        ContentDirectoryError: If the directory is missing or cannot be listed
    """
    directory = Path(directory)

    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise ContentDirectoryError(e.errno, f"Cannot read content directory: {e.strerror or e}", str(directory))

    files = []
    for entry in entries:
        if not entry.name.endswith(extension) or not entry.is_file():
            continue

        try:
            text = entry.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping unreadable content file {entry}: {e}")
            continue

        files.append(RawContentFile(path=entry, text=text))

    logger.debug(f"Scanned {len(files)} content files in {directory}")
    return files
