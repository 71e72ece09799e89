"""
Identifier extraction.

Two grammars, both pure (no I/O, no logging):

Path grammar (strict), used while indexing:
- Article: the parent directory of the file is exactly 4-5 digits,
  e.g. ``.../12345/drawing.02007.pdf``.
- Print version: the filename contains a dot, two digits, then the three
  digits of the version, then anything up to a document extension,
  e.g. ``drawing.02007.pdf`` -> ``007``, ``part.10042_rev.pdf`` -> ``042``.

Query grammar (loose), used for typed or spreadsheet input:
- Leading digits are the article.
- An optional parenthesized token is a candidate version: ``1234(056)``.
- A following run of digits overrides the parenthesized token:
  ``1234(a) 099`` -> version ``099``.
"""

import re
from functools import lru_cache
from typing import Iterable

from ..schemas import ArticleRecord

DEFAULT_EXTENSIONS = (".pdf",)

# Parent directory of the file name is the article folder. Both separators are
# accepted so Windows paths stored in the index parse on any host.
ARTICLE_PATTERN = re.compile(r"(?:^|[\\/])(\d{4,5})[\\/][^\\/]*$")

# Leading digits, optional "(token)", optional trailing digits
QUERY_PATTERN = re.compile(r"(\d+)(?:\((\w*)\))?\s*(\d*)")


@lru_cache(maxsize=16)
def _version_pattern(extensions: tuple[str, ...]) -> re.Pattern[str]:
    ext_group = "|".join(re.escape(ext) for ext in extensions)
    return re.compile(r"\.\d{2}(\d{3})[^\\/]*(?:" + ext_group + r")$", re.IGNORECASE)


def extract_article(path: str) -> str:
    """Article number from the file's parent directory, or ""."""
    match = ARTICLE_PATTERN.search(path)
    return match.group(1) if match else ""


def extract_print_version(path: str, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> str:
    """Print version from the filename suffix, or ""."""
    match = _version_pattern(tuple(extensions)).search(path)
    return match.group(1) if match else ""


def extract_from_path(
    path: str, extensions: Iterable[str] = DEFAULT_EXTENSIONS
) -> ArticleRecord | None:
    """
    Derive an index record from a document path.

    Args:
        path: File path (absolute in practice)
        extensions: Recognized document extensions, with leading dot

    Returns:
        ArticleRecord, or None unless both article and print version were found
    """
    path = str(path)
    article = extract_article(path)
    version = extract_print_version(path, extensions)

    if article and version:
        return ArticleRecord(article_id=article, print_version=version, file_path=path)
    return None


def extract_from_query(text: str) -> tuple[str, str]:
    """
    Derive (article, print_version) from free-form user input.

    Returns ("", "") when the input does not start with digits. The version
    may be empty, or a non-numeric token taken from the parentheses.
    """
    match = QUERY_PATTERN.match((text or "").strip())
    if not match:
        return ("", "")

    article = match.group(1)
    # Trailing digits win over the parenthesized token
    version = match.group(3) or match.group(2) or ""
    return (article, version)
