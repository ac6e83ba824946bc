import logging
from pathlib import Path

from .errors import RomNotFound

log = logging.getLogger(__name__)


def load_rom(path):
    path = Path(path)
    if not path.is_file():
        raise RomNotFound(path)
    log.info("Loading ROM: %s", path)
    return path.read_bytes()
