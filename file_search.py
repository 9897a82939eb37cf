"""
Keyword search over a single text file.

The read step reports its outcome as a tagged ``ReadOutcome`` instead of
raising, and ``search_file`` maps each tag to the message returned to clients.
"""

import json
import os
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import List, Dict, Any, Optional

import aiofiles

from search_errors import SearchError
from logging_config import get_logger

log = get_logger(__name__)


class ReadStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    IO_ERROR = "io_error"


@dataclass(frozen=True)
class ReadOutcome:
    status: ReadStatus
    content: str = ""
    detail: Optional[str] = None


@dataclass
class SearchMatch:
    lineNumber: int
    content: str


@dataclass
class SearchResult:
    filePath: str
    keyword: str
    caseSensitive: bool
    matches: List[SearchMatch] = field(default_factory=list)
    success: bool = True

    @property
    def totalMatches(self) -> int:
        return len(self.matches)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "filePath": self.filePath,
            "keyword": self.keyword,
            "caseSensitive": self.caseSensitive,
            "totalMatches": self.totalMatches,
            "matches": [asdict(match) for match in self.matches],
        }


def to_json(payload: Dict[str, Any]) -> str:
    """Serialize a response payload the way every content block carries it."""
    return json.dumps(payload, indent=2, ensure_ascii=False)


async def read_text_file(file_path: str, encoding: str = "utf-8") -> ReadOutcome:
    """Read a whole file as text, reporting failures as a tagged outcome."""
    try:
        async with aiofiles.open(file_path, "r", encoding=encoding, newline="") as file:
            content = await file.read()
    except FileNotFoundError:
        return ReadOutcome(ReadStatus.NOT_FOUND)
    except PermissionError:
        return ReadOutcome(ReadStatus.PERMISSION_DENIED)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        # IsADirectoryError and paths with embedded NUL bytes land here too
        return ReadOutcome(ReadStatus.IO_ERROR, detail=str(e))
    return ReadOutcome(ReadStatus.OK, content=content)


def scan_lines(content: str, keyword: str, case_sensitive: bool = False) -> List[SearchMatch]:
    """Return one match per line containing keyword, in line order.

    Lines are split on line feeds only, so a file ending in a newline yields a
    trailing empty element that never matches a non-empty keyword.
    """
    needle = keyword if case_sensitive else keyword.lower()
    matches = []
    for line_number, line in enumerate(content.split("\n"), 1):
        haystack = line if case_sensitive else line.lower()
        if needle in haystack:
            matches.append(SearchMatch(lineNumber=line_number, content=line))
    return matches


def _failure_message(outcome: ReadOutcome, file_path: str) -> str:
    if outcome.status is ReadStatus.NOT_FOUND:
        return f"File not found: {file_path}"
    if outcome.status is ReadStatus.PERMISSION_DENIED:
        return f"Permission denied: {file_path}"
    return f"Error reading file: {outcome.detail}"


async def search_file(file_path: str, keyword: str, case_sensitive: bool = False,
                      encoding: str = "utf-8") -> SearchResult:
    """Search file_path for keyword.

    Raises:
        SearchError: the file is missing, unreadable, or fails to decode.
    """
    outcome = await read_text_file(file_path, encoding)
    if outcome.status is not ReadStatus.OK:
        raise SearchError(_failure_message(outcome, file_path), file_path, keyword)

    matches = scan_lines(outcome.content, keyword, case_sensitive)
    log.debug("Found %d matches for %r in %s", len(matches), keyword, file_path)
    return SearchResult(
        filePath=os.path.abspath(file_path),
        keyword=keyword,
        caseSensitive=case_sensitive,
        matches=matches,
    )
