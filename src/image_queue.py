import os
import uuid
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional
from utils.image_utils import read_image_bytes, truncate_display_name
from src.logger import debug, warning


@dataclass
class ImageItem:
    """One queued image: its bytes, original name and a stable id"""
    data: bytes
    display_name: str
    mime_type: str
    item_id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def short_name(self) -> str:
        return truncate_display_name(self.display_name)

    @classmethod
    def from_path(cls, path: str) -> Optional['ImageItem']:
        """Build an item from a file, None if its type is not accepted or it can't be read"""
        try:
            result = read_image_bytes(path)
        except OSError as e:
            warning(f"Could not read {path}: {e}")
            return None
        if result is None:
            debug(f"Rejected unsupported file: {os.path.basename(path)}")
            return None
        mime_type, data = result
        return cls(data=data, display_name=os.path.basename(path), mime_type=mime_type)


class ImageQueue:
    """Ordered images awaiting conversion; list order is display order"""

    def __init__(self):
        self._items: List[ImageItem] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ImageItem]:
        return iter(list(self._items))

    def __getitem__(self, index: int) -> ImageItem:
        return self._items[index]

    def is_empty(self) -> bool:
        return not self._items

    def items(self) -> List[ImageItem]:
        """Snapshot of the current order"""
        return list(self._items)

    def extend(self, items: Iterable[ImageItem]):
        self._items.extend(items)

    def index_of(self, item_id: str) -> Optional[int]:
        for i, item in enumerate(self._items):
            if item.item_id == item_id:
                return i
        return None

    def remove_at(self, index: int) -> ImageItem:
        """Remove by position, checked against the queue as it is now"""
        if not 0 <= index < len(self._items):
            raise IndexError(f"queue index {index} out of range for {len(self._items)} items")
        return self._items.pop(index)

    def remove(self, item_id: str) -> Optional[ImageItem]:
        index = self.index_of(item_id)
        if index is None:
            return None
        return self._items.pop(index)
