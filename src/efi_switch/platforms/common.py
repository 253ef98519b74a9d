import logging
import os
import shutil
import subprocess
from typing import List

logger = logging.getLogger(__name__)


def is_admin() -> bool:
    try:
        return os.geteuid() == 0
    except AttributeError:
        return False


def which(cmd: str) -> str | None:
    return shutil.which(cmd)


def run(cmd: List[str]) -> subprocess.CompletedProcess:
    """Run a command and capture its text output."""
    logger.debug('Running %s', ' '.join(cmd))
    return subprocess.run(cmd, capture_output=True, text=True)
