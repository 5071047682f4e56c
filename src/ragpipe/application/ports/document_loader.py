"""Document loader port."""

from pathlib import Path
from typing import Protocol

from ragpipe.application.dto.reports import LoadReport


class DocumentLoader(Protocol):
    """Port for reading documents from a file, directory or glob pattern."""

    def load(self, target: str | Path) -> LoadReport: ...
