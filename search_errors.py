"""Exception types raised by the file search server."""

from typing import Dict

from pydantic import ValidationError


class FileSearchServerError(Exception):
    """Base class for errors raised by the server."""


class UnknownToolError(FileSearchServerError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class InvalidArgumentsError(FileSearchServerError):
    """Tool arguments failed validation. No I/O has been attempted."""

    def __init__(self, validation_error: ValidationError):
        self.validation_error = validation_error
        problems = []
        for err in validation_error.errors():
            location = ".".join(str(part) for part in err["loc"]) or "arguments"
            problems.append(f"{location}: {err['msg']}")
        super().__init__("Invalid arguments: " + "; ".join(problems))


class SearchError(FileSearchServerError):
    """A search failed while reading the target file."""

    def __init__(self, message: str, file_path: str, keyword: str):
        self.message = message
        self.file_path = file_path
        self.keyword = keyword
        super().__init__(message)

    def to_payload(self) -> Dict[str, str]:
        return {
            "error": self.message,
            "filePath": self.file_path,
            "keyword": self.keyword,
        }
