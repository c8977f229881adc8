#!/usr/bin/env python3
"""
Core operations shared between MCP server and CLI.
Contains the business logic for seeking results and parsing reports.
"""

import logging
from typing import Optional

from testlink_results.catalog import load_catalog
from testlink_results.config import (
    SEEKER_KINDS,
    get_include_pattern,
    get_key_custom_field,
    get_seeker_kind,
)
from testlink_results.junit_parser import JUnitParser
from testlink_results.models import ExecutionStatus
from testlink_results.seeker import (
    JUnitSuiteSeeker,
    JUnitTestCaseSeeker,
    ResultSeeker,
    class_name_key,
)
from testlink_results.wrapper import TestCaseWrapper

logger = logging.getLogger(__name__)


def make_seeker(kind: str, include_pattern: str, catalog, key_custom_field: str) -> ResultSeeker:
    """Create the seeker for ``kind`` (one of testcases, classes, suites)."""
    if kind == "testcases":
        return JUnitTestCaseSeeker(include_pattern, catalog, key_custom_field)
    if kind == "classes":
        return JUnitTestCaseSeeker(include_pattern, catalog, key_custom_field,
                                   key_function=class_name_key)
    if kind == "suites":
        return JUnitSuiteSeeker(include_pattern, catalog, key_custom_field)
    raise ValueError(f"Unknown seeker '{kind}', expected one of {', '.join(SEEKER_KINDS)}")


def results_to_dict(results: dict[int, TestCaseWrapper], include_content: bool = False) -> dict:
    """Summarize a result map for JSON output."""
    counts = {status.name: 0 for status in ExecutionStatus}
    for wrapper in results.values():
        counts[wrapper.execution_status.name] += 1
    return {
        "total": len(results),
        "counts": counts,
        "results": [results[tc_id].to_dict(include_content) for tc_id in sorted(results)],
    }


def seek_results(
    directory: str,
    catalog_file: str,
    include_pattern: Optional[str] = None,
    key_custom_field: Optional[str] = None,
    seeker: Optional[str] = None,
    include_content: bool = False
) -> dict:
    """
    Match the reports under a directory against a TestLink catalog.

    Args:
        directory: Build directory to search for reports
        catalog_file: YAML/JSON file listing the catalog test cases
        include_pattern: Comma-separated glob includes (config default if not specified)
        key_custom_field: Custom field holding the key (config default if not specified)
        seeker: testcases, classes or suites (config default if not specified)
        include_content: Include base64 attachment content in the output

    Returns:
        dict with per-status counts and one entry per matched test case
    """
    include_pattern = include_pattern or get_include_pattern()
    key_custom_field = key_custom_field or get_key_custom_field()
    kind = seeker or get_seeker_kind()

    catalog = load_catalog(catalog_file)
    results = make_seeker(kind, include_pattern, catalog, key_custom_field).seek(directory)
    logger.info(f"Seeker '{kind}' matched {len(results)} of {len(catalog)} test cases")

    output = results_to_dict(results, include_content)
    output["source"] = {
        "directory": str(directory),
        "include_pattern": include_pattern,
        "key_custom_field": key_custom_field,
        "seeker": kind,
    }
    return output


def parse_report(path: str) -> dict:
    """Parse a single JUnit report and describe its suites."""
    suites = JUnitParser().parse(path)
    return {
        "path": str(path),
        "suites": [
            {
                "name": s.name,
                "hostname": s.hostname,
                "timestamp": s.timestamp,
                "tests": s.tests,
                "failures": s.failures,
                "errors": s.errors,
                "test_cases": [
                    {
                        "name": tc.full_name,
                        "failures": len(tc.failures),
                        "errors": len(tc.errors),
                    }
                    for tc in s.test_cases
                ],
            }
            for s in suites
        ],
    }
