from __future__ import annotations

from typing import Protocol, Sequence

from ..punches.model import PunchInsert
from .model import AfdFile


class AfdFileRepository(Protocol):
    def record_import(self, afd_file: AfdFile, punches: Sequence[PunchInsert]) -> int:
        """Store the file row and its punches in one transaction.

        Every punch is linked to the new file id, which is returned.
        """

        raise NotImplementedError

    def list_recent(self, *, limit: int = 200) -> Sequence[AfdFile]:
        raise NotImplementedError
