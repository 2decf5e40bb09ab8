"""
File manager: collects write requests for a whole run, then resolves and
writes them.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List

from .mergers import MergerRegistry
from .requests import RequestKey, WriteRequest
from .writers import WriterRegistry


class FileManager:
    """Buffers every contributed request until `write_all`.

    Conflicts can only be decided once all items have contributed, so nothing
    is written while requests are still being added.
    """

    def __init__(
        self,
        output_dir: Path,
        mergers: MergerRegistry | None = None,
        writers: WriterRegistry | None = None,
    ):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.output_dir = Path(output_dir)
        self.mergers = mergers if mergers is not None else MergerRegistry.default()
        self.writers = writers if writers is not None else WriterRegistry.default()
        self._requests: List[WriteRequest] = []

    @property
    def pending(self) -> int:
        return len(self._requests)

    def add_requests(self, requests: Iterable[WriteRequest]) -> None:
        self._requests.extend(requests)

    def clear(self) -> None:
        self._requests = []

    def group_requests(self) -> Dict[RequestKey, List[WriteRequest]]:
        """Group pending requests by (type, path), in first-seen order."""
        groups: Dict[RequestKey, List[WriteRequest]] = {}
        for request in self._requests:
            groups.setdefault(request.key, []).append(request)
        return groups

    def resolve(self) -> List[WriteRequest]:
        """Reduce every group to the one request that will be written."""
        return [self.mergers.resolve(group) for group in self.group_requests().values()]

    def write_all(self) -> List[Path]:
        """Resolve and write everything collected so far.

        Returns:
            Paths of the files written, in write order
        """
        self.logger.info(f"Processing {len(self._requests)} write requests")
        resolved = self.resolve()

        written: List[Path] = []
        for request in resolved:
            target = self.writers.write(request, self.output_dir)
            if target is not None:
                written.append(target)

        self.logger.info(f"Wrote {len(written)} files ({len(resolved)} after merging)")
        self.clear()
        return written
