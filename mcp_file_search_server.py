#!/usr/bin/env python3
"""
File Search MCP Server
Exposes a single ``search_file`` tool over stdio: find every line of a text
file that contains a keyword and return the lines with their line numbers.
"""

import asyncio
import logging
import os
import signal
from typing import List, Dict, Any, Optional

import anyio
import mcp
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
import mcp.server.stdio
import mcp.types as types
from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, ValidationError

from file_search import search_file, to_json
from logging_config import get_logger, setup_logging
from search_errors import InvalidArgumentsError, SearchError, UnknownToolError
from server_settings import ServerSettings, get_settings

log = get_logger(__name__)

TOOL_NAME = "search_file"
TOOL_DESCRIPTION = (
    "Search for a keyword in a specified file and return all matching lines with line numbers"
)


class SearchRequest(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    file_path: StrictStr = Field(..., alias="filePath", description="Path to the file to search in")
    keyword: StrictStr = Field(..., description="Keyword to search for in the file")
    case_sensitive: StrictBool = Field(
        default=False, alias="caseSensitive", description="Whether the search should be case-sensitive"
    )


SEARCH_FILE_TOOL = types.Tool(
    name=TOOL_NAME,
    description=TOOL_DESCRIPTION,
    inputSchema={
        "type": "object",
        "properties": {
            "filePath": {"type": "string", "description": "Path to the file to search in"},
            "keyword": {"type": "string", "description": "Keyword to search for in the file"},
            "caseSensitive": {
                "type": "boolean",
                "description": "Whether the search should be case-sensitive (default: false)",
                "default": False,
            },
        },
        "required": ["filePath", "keyword"],
    },
)


def parse_arguments(arguments: Optional[Dict[str, Any]]) -> SearchRequest:
    """Validate raw tool arguments into a SearchRequest."""
    try:
        return SearchRequest.model_validate(arguments or {})
    except ValidationError as e:
        raise InvalidArgumentsError(e) from e


class FileSearchServer:
    """MCP server exposing the search_file tool."""

    def __init__(self, settings: Optional[ServerSettings] = None):
        self.settings = settings or get_settings()
        self.server = Server(self.settings.server_name, version=self.settings.server_version)
        self._setup_handlers()

    def _setup_handlers(self):
        """Register the MCP list/call handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> List[types.Tool]:
            return self.list_tools()

        # SearchRequest is the only argument validation layer
        @self.server.call_tool(validate_input=False)
        async def handle_call_tool(name: str, arguments: Dict[str, Any]) -> types.CallToolResult:
            return await self.call_tool(name, arguments)

    def list_tools(self) -> List[types.Tool]:
        return [SEARCH_FILE_TOOL]

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> types.CallToolResult:
        """Run a tool call.

        Unknown tool names and invalid arguments raise, and the SDK reports them
        as protocol errors. Failures while reading the file come back as an
        error result carrying the JSON error payload.
        """
        if name != TOOL_NAME:
            log.warning("Rejected call to unknown tool %r", name)
            raise UnknownToolError(name)

        request = parse_arguments(arguments)
        log.debug("search_file filePath=%r keyword=%r caseSensitive=%s",
                  request.file_path, request.keyword, request.case_sensitive)

        try:
            result = await search_file(
                request.file_path,
                request.keyword,
                request.case_sensitive,
                encoding=self.settings.encoding,
            )
        except SearchError as e:
            log.warning("search_file failed: %s", e.message)
            return types.CallToolResult(
                content=[types.TextContent(type="text", text=to_json(e.to_payload()))],
                isError=True,
            )

        return types.CallToolResult(
            content=[types.TextContent(type="text", text=to_json(result.to_payload()))],
        )

    def initialization_options(self) -> InitializationOptions:
        return InitializationOptions(
            server_name=self.settings.server_name,
            server_version=self.settings.server_version,
            capabilities=self.server.get_capabilities(
                notification_options=NotificationOptions(),
                experimental_capabilities={},
            ),
        )

    async def run_stdio(self):
        """Serve over stdio until the client disconnects or an interrupt arrives."""
        async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
            async with anyio.create_task_group() as tg:
                await tg.start(_exit_on_interrupt, (read_stream, write_stream))
                log.info("File Search MCP server running on stdio")
                await self.server.run(read_stream, write_stream, self.initialization_options())
                tg.cancel_scope.cancel()


async def _exit_on_interrupt(streams, *, task_status=anyio.TASK_STATUS_IGNORED):
    """Close the transport and exit 0 on SIGINT or SIGTERM.

    The stdio reader blocks in a worker thread that cannot be cancelled, so the
    process exits directly instead of unwinding the transport's task group.
    """
    with anyio.open_signal_receiver(signal.SIGINT, signal.SIGTERM) as signals:
        task_status.started()
        async for signum in signals:
            log.info("Received %s, shutting down", signal.Signals(signum).name)
            for stream in streams:
                await stream.aclose()
            logging.shutdown()
            os._exit(0)


async def main():
    """Main entry point for the MCP server."""
    settings = get_settings()
    setup_logging(settings.log_level)
    server = FileSearchServer(settings)
    await server.run_stdio()


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
