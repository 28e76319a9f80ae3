import logging
import os
import urllib.request

from zipfile import ZipFile
from io import BytesIO

URL_BASE = 'https://noto-website-2.storage.googleapis.com/pkgs/'

logger = logging.getLogger(__name__)


def _unzip(font, archive, dest):
    with ZipFile(archive) as zipfile:
        if font not in zipfile.namelist():
            raise KeyError(f'Expected font file {font} not present in downloaded zip archive.')
        zipfile.extract(font, dest)


def _download(font_path):
    font = os.path.basename(font_path)
    logger.info(f'Downloading font `{font}`.')
    with urllib.request.urlopen(f'{URL_BASE}{font}.zip') as resp:
        _unzip(font, BytesIO(resp.read()), os.path.dirname(font_path) or '.')


def maybe_download(font_paths):
    """Download the Noto fonts among ``font_paths`` that are not on disk yet.

    Returns the paths that were fetched.
    """
    missing = [path for path in font_paths if not os.path.isfile(path)]
    for path in missing:
        _download(path)
    return missing
