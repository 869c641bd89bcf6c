import logging
import os

import pytest


@pytest.fixture(autouse=True)
def reset_wordscan_logger():
    """Drop handlers bound to a previous test's captured stderr."""
    logger = logging.getLogger("wordscan")
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def write_tree(root, files):
    """Create ``{relative path: bytes or str}`` under ``root``."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            content = content.encode("utf-8")
        path.write_bytes(content)
    return root


running_as_root = hasattr(os, "geteuid") and os.geteuid() == 0
