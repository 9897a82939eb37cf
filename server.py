from typing import Annotated

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field, StrictBool, StrictStr

from file_search import search_file as run_search, to_json
from logging_config import setup_logging
from search_errors import SearchError
from server_settings import get_settings

settings = get_settings()

app = FastMCP(settings.server_name)


@app.tool()
async def search_file(
    filePath: Annotated[StrictStr, Field(description="Path to the file to search in")],
    keyword: Annotated[StrictStr, Field(description="Keyword to search for in the file")],
    caseSensitive: Annotated[
        StrictBool, Field(description="Whether the search should be case-sensitive (default: false)")
    ] = False,
) -> str:
    """Search for a keyword in a specified file and return all matching lines with line numbers"""
    try:
        result = await run_search(filePath, keyword, caseSensitive, encoding=settings.encoding)
    except SearchError as e:
        raise ToolError(to_json(e.to_payload())) from e
    return to_json(result.to_payload())


def run():
    setup_logging(settings.log_level)
    app.run(transport="http", host=settings.http_host, port=settings.http_port)


if __name__ == "__main__":
    run()
