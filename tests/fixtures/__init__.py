"""
Test fixtures for document trees.

Sample relative paths under a document root:
- QUALIFYING: parent folder is a 4-5 digit article, filename carries a print version
- NON_QUALIFYING: PDFs the path grammar rejects
- IGNORED: files without a document extension (never parsed)
"""

import os
from pathlib import Path

QUALIFYING = {
    "12345/drawing.02007.pdf": ("12345", "007"),
    "12345/drawing.02008.pdf": ("12345", "008"),
    "1234/sheet.10056.pdf": ("1234", "056"),
    "plant/A/5000/part.10042_rev2.PDF": ("5000", "042"),
}

NON_QUALIFYING = [
    "123/drawing.02007.pdf",  # article folder too short
    "123456/drawing.02007.pdf",  # article folder too long
    "12345/sub/drawing.02007.pdf",  # article is not the parent folder
    "12345/drawing.pdf",  # no print version
    "12345/drawing.0207.pdf",  # print version too short
    "loose.02007.pdf",  # no article folder
]

IGNORED = [
    "12345/drawing.02007.docx",
    "12345/notes.txt",
]


def build_document_tree(root: Path, relative_paths) -> list[Path]:
    """Create empty files under ``root`` and return their paths."""
    created = []
    for rel in relative_paths:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"%PDF-1.4\n")
        created.append(path)
    return created


def build_undecodable_file(folder: Path, name: bytes = b"\xff.02008.pdf") -> bytes:
    """Create a file whose name is not valid UTF-8 and return its byte path.

    Raises OSError on filesystems that only accept UTF-8 names.
    """
    folder.mkdir(parents=True, exist_ok=True)
    path = os.path.join(os.fsencode(folder), name)
    with open(path, "wb") as f:
        f.write(b"%PDF-1.4\n")
    return path

