"""
File helpers
- PDF -> text extraction (pypdf)
- Uploaded-file guards (extension / size)
"""
from __future__ import annotations

import os
import re
from typing import IO, List, Optional, Union

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from prepwise.api.utils.common_utils import get_logger

_log = get_logger("file")

PDF_MAX_TEXT_PAGES = int(os.getenv("FILEUTILS_PDF_MAX_TEXT_PAGES", "20"))

_WS_RE = re.compile(r"[ \t]+\n")
_MULTI_NL = re.compile(r"\n{3,}")


def _normalize_text(s: str) -> str:
    if not s:
        return ""
    s = s.replace("\r\n", "\n").replace("\r", "\n")
    s = _WS_RE.sub("\n", s)
    s = _MULTI_NL.sub("\n\n", s)
    return s.strip()


def is_pdf_upload(upload) -> bool:
    name = (getattr(upload, "name", "") or "").lower()
    content_type = (getattr(upload, "content_type", "") or "").lower()
    return name.endswith(".pdf") or content_type == "application/pdf"


def extract_pdf_text(source: Union[str, IO[bytes]], max_pages: Optional[int] = PDF_MAX_TEXT_PAGES) -> str:
    """
    Extract text from a PDF path or binary stream.
    Unreadable documents yield an empty string.
    """
    try:
        reader = PdfReader(source)
    except (PyPdfError, OSError, ValueError) as e:
        _log.warning(f"PDF open failed: {e}")
        return ""

    n = len(reader.pages)
    limit = min(n, max_pages) if max_pages else n
    buf: List[str] = []
    for i in range(limit):
        try:
            buf.append((reader.pages[i].extract_text() or "").strip())
        except (PyPdfError, KeyError, ValueError) as e:
            _log.warning(f"PDF page {i} skipped: {e}")
            continue
    return _normalize_text("\n".join(buf))
