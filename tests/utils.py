from __future__ import annotations

import zipfile
from pathlib import Path

from docx import Document as DocxDocument

CONTAINER_XML = """<?xml version="1.0"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="OEBPS/content.opf" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

REPEATED_TEXT = "The cat sat on the mat. The cat sat on the mat. The cat sat on the mat."


def xhtml_body(text: str) -> str:
    return f"<html xmlns='http://www.w3.org/1999/xhtml'><body><p>{text}</p></body></html>"


def write_minimal_epub(
    path: Path, chapters: list[str], include_spine: bool = True
) -> None:
    """Create a minimal EPUB file with the provided XHTML chapters."""
    manifest = "".join(
        f'<item id="chap{idx}" href="chapter{idx}.xhtml" media-type="application/xhtml+xml"/>'
        for idx in range(1, len(chapters) + 1)
    )
    itemrefs = "".join(
        f'<itemref idref="chap{idx}"/>' for idx in range(1, len(chapters) + 1)
    )
    spine = f"<spine>{itemrefs}</spine>" if include_spine else "<spine/>"
    opf = (
        '<?xml version="1.0" encoding="utf-8"?>'
        '<package version="3.0" xmlns="http://www.idpf.org/2007/opf">'
        f"<manifest>{manifest}</manifest>{spine}</package>"
    )
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("mimetype", "application/epub+zip", compress_type=zipfile.ZIP_STORED)
        zf.writestr("META-INF/container.xml", CONTAINER_XML)
        zf.writestr("OEBPS/content.opf", opf)
        for idx, chapter in enumerate(chapters, start=1):
            zf.writestr(f"OEBPS/chapter{idx}.xhtml", chapter)


def write_minimal_docx(path: Path, paragraphs: list[str]) -> None:
    """Create a DOCX file containing one paragraph per entry."""
    document = DocxDocument()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    document.save(str(path))


def write_minimal_pdf(path: Path, text: str) -> None:
    """Create a one-page PDF that draws ``text`` in Helvetica."""
    stream = f"BT /F1 12 Tf 72 720 Td ({text}) Tj ET".encode("latin-1")
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Resources << /Font << /F1 5 0 R >> >> /Contents 4 0 R >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    body = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, obj in enumerate(objects, start=1):
        offsets.append(len(body))
        body += b"%d 0 obj\n" % number + obj + b"\nendobj\n"
    xref_at = len(body)
    body += b"xref\n0 %d\n0000000000 65535 f \n" % (len(objects) + 1)
    for offset in offsets:
        body += b"%010d 00000 n \n" % offset
    body += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (
        len(objects) + 1,
        xref_at,
    )
    path.write_bytes(bytes(body))
