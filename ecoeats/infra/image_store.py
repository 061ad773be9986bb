"""Local binary store for generated product images, keyed by pantry item id."""
import base64
import binascii
import logging
import re
from pathlib import Path
from typing import Dict, Iterable, Optional

logger = logging.getLogger(__name__)

DATA_URL_PATTERN = re.compile(r'^data:(image/[A-Za-z0-9.+-]+);base64,(.*)$', re.S)


def decode_data_url(data_url: str) -> tuple[str, bytes]:
    '''Splits a base64 data URL into (mime type, raw bytes). Raises ValueError when malformed.'''
    match = DATA_URL_PATTERN.match(data_url or '')
    if not match:
        raise ValueError("Not a base64 image data URL")
    try:
        return match.group(1), base64.b64decode(match.group(2), validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e


class FileImageStore:
    def __init__(self, directory: Path):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, item_id: str) -> Path:
        return self.directory / f"{re.sub(r'[^A-Za-z0-9_-]', '_', item_id)}.bin"

    def store(self, item_id: str, data_url: str) -> None:
        mime, raw = decode_data_url(data_url)
        path = self._path(item_id)
        path.write_bytes(mime.encode() + b'\n' + raw)
        logger.debug(f"Stored image for {item_id} ({len(raw)} bytes)")

    def get(self, item_id: str) -> Optional[str]:
        '''Returns the image as a data URL, or None if nothing is stored.'''
        path = self._path(item_id)
        if not path.exists():
            return None
        mime, _, raw = path.read_bytes().partition(b'\n')
        return f"data:{mime.decode()};base64,{base64.b64encode(raw).decode()}"

    def delete(self, item_id: str) -> None:
        self._path(item_id).unlink(missing_ok=True)

    def delete_many(self, item_ids: Iterable[str]) -> None:
        for item_id in item_ids:
            self.delete(item_id)


class MemoryImageStore:
    def __init__(self):
        self.images: Dict[str, str] = {}

    def store(self, item_id: str, data_url: str) -> None:
        decode_data_url(data_url)
        self.images[item_id] = data_url

    def get(self, item_id: str) -> Optional[str]:
        return self.images.get(item_id)

    def delete(self, item_id: str) -> None:
        self.images.pop(item_id, None)

    def delete_many(self, item_ids: Iterable[str]) -> None:
        for item_id in item_ids:
            self.delete(item_id)


__all__ = ['FileImageStore', 'MemoryImageStore', 'decode_data_url']
