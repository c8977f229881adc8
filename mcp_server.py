#!/usr/bin/env python3
"""
MCP Server for the TestLink result seeker.
Provides tools for matching JUnit reports against a TestLink catalog.
"""

import json
import logging

from fastmcp import FastMCP

import core
from testlink_results.config import get_port

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# FastMCP server
mcp = FastMCP("testlink-result-seeker")


@mcp.tool(
    name="seek_results",
    description="""Match JUnit reports in a build directory against a TestLink catalog.
        Args:
            directory: Build directory to search for reports
            catalog_file: YAML/JSON file listing the catalog test cases
            include_pattern: Comma-separated glob includes (default: TEST-*.xml)
            key_custom_field: Custom field holding the matching key
            seeker: "testcases", "classes" or "suites" (default: testcases)
    """
)
async def seek_results(
    directory: str,
    catalog_file: str,
    include_pattern: str = None,
    key_custom_field: str = None,
    seeker: str = None
) -> str:
    try:
        result = core.seek_results(directory, catalog_file, include_pattern,
                                   key_custom_field, seeker)
        return json.dumps(result, indent=2, default=str)
    except Exception as e:
        logger.error(f"Error in seek_results: {str(e)}")
        return json.dumps({"error": str(e), "results": [], "total": 0})


@mcp.tool(
    name="parse_report",
    description="""Parse one JUnit XML report and list its suites and test cases.
        Args:
            path: Report file
    """
)
async def parse_report(path: str) -> str:
    try:
        return json.dumps(core.parse_report(path), indent=2)
    except Exception as e:
        logger.error(f"Error in parse_report: {str(e)}")
        return json.dumps({"error": str(e), "suites": []})


if __name__ == "__main__":
    port = get_port()
    logger.info(f"Starting MCP server on port {port}")
    mcp.run(transport="sse", host="0.0.0.0", port=port)
