"""
Best-effort plain-text extraction for uploaded assignment files.

``extract_text`` never raises: any reader failure is logged and yields an
empty string so the document is analysed as empty.
"""

from __future__ import annotations

import io
import logging
import xml.etree.ElementTree as ET
import zipfile
from html.parser import HTMLParser
from pathlib import Path, PurePosixPath
from typing import Callable, Dict, List

from docx import Document as DocxDocument
from docx.opc.exceptions import PackageNotFoundError
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from .models import Document

logger = logging.getLogger(__name__)

# File types accepted as assignment uploads.
SUPPORTED_INPUT_EXTENSIONS = {".txt", ".text", ".pdf", ".docx", ".epub"}


class ExtractionError(RuntimeError):
    """Raised when a binary document cannot be converted to text."""


def extract_text(data: bytes, extension: str) -> str:
    """Return plain text for the given file bytes, or "" when unreadable."""
    reader = _READERS.get(_normalize_extension(extension), _read_plain_text)
    try:
        return reader(data)
    except Exception as exc:
        logger.warning("Text extraction failed for %s input: %s", extension or "unknown", exc)
        return ""


def load_document(path: Path, doc_id: str | None = None) -> Document:
    """Read a file from disk and wrap its extracted text in a Document."""
    data = path.read_bytes()
    doc_id = doc_id or path.name
    return Document(
        doc_id=doc_id,
        text=extract_text(data, path.suffix),
        byte_size=len(data),
        source_name=doc_id,
    )


def _normalize_extension(extension: str) -> str:
    normalized = (extension or "").lower().strip()
    if normalized and not normalized.startswith("."):
        normalized = "." + normalized
    return ".txt" if normalized == ".text" else normalized


def _read_plain_text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def _read_pdf(data: bytes) -> str:
    try:
        reader = PdfReader(io.BytesIO(data))
        return "\n".join(page.extract_text() or "" for page in reader.pages)
    except PdfReadError as exc:
        raise ExtractionError(f"Invalid PDF document: {exc}") from exc


def _read_docx(data: bytes) -> str:
    try:
        document = DocxDocument(io.BytesIO(data))
    except (PackageNotFoundError, zipfile.BadZipFile) as exc:
        raise ExtractionError(f"Invalid DOCX document: {exc}") from exc
    return "\n".join(paragraph.text for paragraph in document.paragraphs)


def _read_epub(data: bytes) -> str:
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            chapters = _epub_spine(archive) or _epub_text_members(archive)
            texts: List[str] = []
            for member in chapters:
                try:
                    markup = archive.read(member).decode("utf-8", errors="ignore")
                except KeyError:
                    continue
                text = _html_to_text(markup)
                if text:
                    texts.append(text)
            return "\n\n".join(texts).strip()
    except zipfile.BadZipFile as exc:
        raise ExtractionError("Invalid EPUB archive") from exc


def _epub_spine(archive: zipfile.ZipFile) -> List[str]:
    """Chapter members in reading order, as listed by the OPF spine."""
    try:
        container = ET.fromstring(archive.read("META-INF/container.xml"))
    except (KeyError, ET.ParseError) as exc:
        raise ExtractionError("EPUB container.xml is missing or malformed") from exc
    rootfile = container.find(".//{*}rootfile")
    opf_path = rootfile.attrib.get("full-path") if rootfile is not None else None
    if not opf_path:
        raise ExtractionError("EPUB container.xml does not name a package file")

    try:
        package = ET.fromstring(archive.read(opf_path))
    except (KeyError, ET.ParseError):
        return []

    hrefs: Dict[str, str] = {}
    for item in package.iterfind(".//{*}manifest/{*}item"):
        media_type = item.attrib.get("media-type", "").lower()
        if item.attrib.get("id") and item.attrib.get("href") and _is_text_media(media_type):
            hrefs[item.attrib["id"]] = item.attrib["href"]

    base = PurePosixPath(opf_path).parent
    members: List[str] = []
    for itemref in package.iterfind(".//{*}spine/{*}itemref"):
        href = hrefs.get(itemref.attrib.get("idref", ""))
        if href:
            members.append((base / href).as_posix() if str(base) not in ("", ".") else href)
    return members


def _epub_text_members(archive: zipfile.ZipFile) -> List[str]:
    suffixes = {".xhtml", ".html", ".htm", ".txt"}
    return [name for name in archive.namelist() if PurePosixPath(name).suffix.lower() in suffixes]


def _is_text_media(media_type: str) -> bool:
    return media_type.startswith(("application/xhtml", "text/html", "text/plain"))


class _HTMLTextExtractor(HTMLParser):
    """Collects text content, breaking lines at block-level elements."""

    BLOCK_TAGS = {"p", "div", "br", "li", "section", "article", "h1", "h2", "h3", "h4", "h5", "h6"}

    def __init__(self) -> None:
        super().__init__()
        self._lines: List[List[str]] = [[]]

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag == "br":
            self._break()

    def handle_endtag(self, tag: str) -> None:
        if tag in self.BLOCK_TAGS:
            self._break()

    def handle_data(self, data: str) -> None:
        if data.strip():
            self._lines[-1].append(data.strip())

    def _break(self) -> None:
        if self._lines[-1]:
            self._lines.append([])

    def get_text(self) -> str:
        return "\n".join(" ".join(parts) for parts in self._lines if parts)


def _html_to_text(markup: str) -> str:
    parser = _HTMLTextExtractor()
    parser.feed(markup)
    parser.close()
    return parser.get_text()


_READERS: Dict[str, Callable[[bytes], str]] = {
    ".txt": _read_plain_text,
    ".pdf": _read_pdf,
    ".docx": _read_docx,
    ".epub": _read_epub,
}
