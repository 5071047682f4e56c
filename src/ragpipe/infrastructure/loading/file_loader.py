"""File-system document loader: files, directories and glob patterns."""

import glob
from collections.abc import Callable, Iterable
from pathlib import Path

import structlog

from ragpipe.application.dto.reports import LoadFailure, LoadReport
from ragpipe.domain.entities import Document
from ragpipe.domain.exceptions import (
    DocumentParseError,
    NotFoundError,
    RagPipeError,
    UnsupportedFormatError,
)
from ragpipe.infrastructure.document_parsers import ParseResult, is_supported, parse_file

logger = structlog.get_logger()

_GLOB_CHARS = ("*", "?", "[")


class FileSystemDocumentLoader:
    """Load documents with partial-failure semantics.

    A missing path raises NotFoundError, and so does a glob matching nothing.
    A single file of unknown type raises UnsupportedFormatError. Inside a batch
    (directory or glob), unsupported and unparseable files are recorded in the
    report and skipped.
    """

    def __init__(self, parse: Callable[[bytes, str | None], ParseResult] = parse_file) -> None:
        self._parse = parse

    def load(self, target: str | Path) -> LoadReport:
        """Load every document matched by target."""
        target_str = str(target)
        if isinstance(target, str) and any(c in target_str for c in _GLOB_CHARS):
            paths = self._glob(target_str)
            if not paths:
                raise NotFoundError("No files match pattern", target_str)
            return self._load_batch(paths)

        path = Path(target)
        if not path.exists():
            raise NotFoundError("Path does not exist", target_str)
        if path.is_dir():
            return self._load_batch(self._walk(path))
        if not is_supported(path.name):
            raise UnsupportedFormatError(
                f"Unsupported file type: {path.suffix or 'none'}", target_str
            )
        return self._load_batch([path])

    def load_file(self, path: Path) -> Document:
        """Read and parse one file. Raises on any failure."""
        source = str(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise DocumentParseError(f"Cannot read file: {e}", source) from e
        try:
            result = self._parse(data, path.name)
        except RagPipeError:
            raise
        except Exception as e:
            raise DocumentParseError(f"Cannot parse file: {e}", source) from e
        if not result.text.strip():
            raise DocumentParseError("No text could be extracted", source)
        return Document(
            source=source,
            text=result.text,
            metadata={**result.metadata, "source": source},
        )

    def _load_batch(self, paths: Iterable[Path]) -> LoadReport:
        report = LoadReport()
        for path in paths:
            try:
                report.documents.append(self.load_file(path))
            except RagPipeError as e:
                if e.identifier is None:
                    e.identifier = str(path)
                report.failures.append(LoadFailure(source=str(path), error=e))
                logger.warning(
                    "document_load_failed",
                    source=str(path),
                    error=e.message,
                    error_type=type(e).__name__,
                )
        logger.info(
            "documents_loaded",
            document_count=len(report.documents),
            failure_count=len(report.failures),
        )
        return report

    @staticmethod
    def _glob(pattern: str) -> list[Path]:
        return sorted(Path(p) for p in glob.glob(pattern, recursive=True) if Path(p).is_file())

    @staticmethod
    def _walk(root: Path) -> list[Path]:
        """All non-hidden files under root, in sorted order."""
        return sorted(
            p
            for p in root.rglob("*")
            if p.is_file() and not any(part.startswith(".") for part in p.relative_to(root).parts)
        )
