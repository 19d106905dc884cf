"""Client-side accumulation of files chosen for a draft."""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Union

from mailrelay.core.config import settings
from mailrelay.models.email import DEFAULT_CONTENT_TYPE
from mailrelay.shared.formatting import format_file_size

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectedFile:
    """A file picked by the user, held in memory until the draft is sent."""

    name: str
    data: bytes = field(repr=False)
    content_type: str = DEFAULT_CONTENT_TYPE

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "SelectedFile":
        path = Path(path)
        guessed, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            data=path.read_bytes(),
            content_type=guessed or DEFAULT_CONTENT_TYPE,
        )


class AttachmentCollector:
    """Ordered list of selected files with a single shared error message.

    Files above the ceiling are left out of the list and raise the error; the
    rest of the same selection is still appended. ``error`` always describes
    the latest ``add_files`` call only.
    """

    def __init__(self, *, max_file_size: Optional[int] = None):
        self.max_file_size = max_file_size if max_file_size is not None else settings.MAX_ATTACHMENT_SIZE
        self._files: List[SelectedFile] = []
        self.error = ""

    @property
    def files(self) -> List[SelectedFile]:
        return list(self._files)

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self):
        return iter(list(self._files))

    @property
    def size_error_message(self) -> str:
        return (
            "One or more files exceed the maximum allowed size "
            f"({format_file_size(self.max_file_size)})"
        )

    def add_files(self, selection: Iterable[SelectedFile]) -> List[SelectedFile]:
        """Append the acceptable files of ``selection`` and return them.

        The selection is consumed entirely, so choosing the same file again
        later (for instance after removing it) adds it once more.
        """
        accepted: List[SelectedFile] = []
        rejected = 0
        for selected in selection:
            if selected.size > self.max_file_size:
                rejected += 1
                logger.debug(
                    "Skipping %s: %d bytes is above the %d byte ceiling",
                    selected.name,
                    selected.size,
                    self.max_file_size,
                )
                continue
            accepted.append(selected)

        self._files.extend(accepted)
        self.error = self.size_error_message if rejected else ""
        return accepted

    def remove_file(self, index: int) -> SelectedFile:
        if index < 0 or index >= len(self._files):
            raise IndexError(f"No attachment at position {index}")
        removed = self._files.pop(index)
        if not self._files:
            self.error = ""
        return removed

    def clear(self) -> None:
        self._files.clear()
        self.error = ""


__all__ = ["AttachmentCollector", "SelectedFile"]
