# sandbox/workspace.py
"""
Scratch directories for a single execution.

Every run gets its own directory (random suffix from tempfile) and the directory
is removed recursively when the run is over, whatever happened inside it.
"""

import logging
import os
import shutil
import tempfile
from contextlib import contextmanager
from typing import Iterator

logger = logging.getLogger(__name__)

WORKSPACE_PREFIX = "codesurfer-"


@contextmanager
def scratch_workspace() -> Iterator[str]:
    path = tempfile.mkdtemp(prefix=WORKSPACE_PREFIX)
    logger.debug("Created workspace %s", path)
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)
        logger.debug("Removed workspace %s", path)


def write_file(workspace: str, name: str, content: str) -> str:
    path = os.path.join(workspace, name)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
    return path
