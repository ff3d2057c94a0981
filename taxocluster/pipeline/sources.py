"""
Document sources for the clustering pipeline.

Each source turns some input (in-memory strings, text/HTML/PDF files)
into a list of document strings. merge_as_list() flattens several
sources into the ordered sequence consumed by ClusterBuilder.build().

Unreadable files are logged and contribute no documents; a run never
aborts because one input file is broken.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, List, Union

import fitz  # PyMuPDF
from bs4 import BeautifulSoup

from taxocluster.utils.file_utils import read_text
from taxocluster.utils.logging_config import get_logger

logger = get_logger("pipeline.sources")

PathLike = Union[str, Path]


class DataSource(ABC):
    """A producer of document strings."""

    @abstractmethod
    def load(self) -> List[str]:
        """Return the documents of this source, in order."""


class TextSource(DataSource):
    """Documents already held in memory."""

    def __init__(self, texts: Iterable[str]):
        self.texts = list(texts)

    def load(self) -> List[str]:
        return list(self.texts)


class TextFileSource(DataSource):
    """
    A plain text file.

    The whole file is one document, or one document per non-blank line
    when split_lines is set.
    """

    def __init__(self, path: PathLike, split_lines: bool = False):
        self.path = Path(path)
        self.split_lines = split_lines

    def load(self) -> List[str]:
        try:
            text = read_text(self.path)
        except OSError as e:
            logger.error(f"Failed to read {self.path}: {e}",
                         extra={"path": str(self.path), "error_type": "read_error"})
            return []
        if text is None:
            logger.error(f"Text file not found: {self.path}",
                         extra={"path": str(self.path), "error_type": "not_found"})
            return []
        if self.split_lines:
            return [line.strip() for line in text.splitlines() if line.strip()]
        return [text]


class HTMLSource(DataSource):
    """Visible text of an HTML file, one document per file."""

    # Elements to strip before extraction
    STRIP_TAGS = ["script", "style", "noscript", "iframe", "svg",
                  "nav", "header", "footer"]

    def __init__(self, path: PathLike):
        self.path = Path(path)

    def load(self) -> List[str]:
        try:
            html = read_text(self.path)
        except OSError as e:
            logger.error(f"Failed to read {self.path}: {e}",
                         extra={"path": str(self.path), "error_type": "read_error"})
            return []
        if html is None:
            logger.error(f"HTML file not found: {self.path}",
                         extra={"path": str(self.path), "error_type": "not_found"})
            return []
        return [self.html_to_text(html)]

    @classmethod
    def html_to_text(cls, html: str) -> str:
        soup = BeautifulSoup(html, "html.parser")
        for el in soup.find_all(cls.STRIP_TAGS):
            el.decompose()
        lines = (line.strip() for line in soup.get_text("\n").splitlines())
        return "\n".join(line for line in lines if line)


class PDFSource(DataSource):
    """Text of every page of a PDF file, joined into one document."""

    def __init__(self, path: PathLike):
        self.path = Path(path)

    def load(self) -> List[str]:
        if not self.path.exists():
            logger.error(f"PDF not found: {self.path}",
                         extra={"path": str(self.path), "error_type": "not_found"})
            return []
        try:
            doc = fitz.open(str(self.path))
        except Exception as e:
            logger.error(f"Failed to open PDF {self.path.name}: {e}",
                         extra={"path": str(self.path), "error_type": "pdf_error"})
            return []

        try:
            pages = [doc[i].get_text("text") for i in range(len(doc))]
        except Exception as e:
            logger.error(f"Error reading PDF {self.path.name}: {e}",
                         extra={"path": str(self.path), "error_type": "pdf_error"})
            return []
        finally:
            doc.close()
        return ["\n\n".join(p for p in pages if p.strip())]


SUFFIX_SOURCES = {
    ".html": HTMLSource,
    ".htm": HTMLSource,
    ".pdf": PDFSource,
}


def source_for_path(path: PathLike, split_lines: bool = False) -> DataSource:
    """Pick a source by file suffix; anything unknown is read as plain text."""
    path = Path(path)
    source_cls = SUFFIX_SOURCES.get(path.suffix.lower())
    if source_cls is None:
        return TextFileSource(path, split_lines=split_lines)
    return source_cls(path)


def merge_as_list(sources: Iterable[DataSource]) -> List[str]:
    """Flatten sources into one ordered document list, dropping blank documents."""
    merged: List[str] = []
    for source in sources:
        docs = [d for d in source.load() if d and d.strip()]
        logger.debug(f"{type(source).__name__}: {len(docs)} documents")
        merged.extend(docs)
    return merged
