"""
Seekers: scan a build directory for JUnit reports and turn them into
TestLink execution results keyed by catalog test case id.
"""

import dataclasses
import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, Protocol

from .catalog import KeyIndex
from .file_scanner import scan
from .junit_parser import JUnitParser, ParserError, ReportParser
from .models import CatalogTestCase, ExecutionStatus, TestCase, TestSuite
from .status import merge_status, notes_of, status_of, suite_notes_of, suite_status_of
from .wrapper import Attachment, AttachmentReadError, TestCaseWrapper, attachment_for

logger = logging.getLogger(__name__)

Scanner = Callable[[Path, str], list[str]]


class SeekerError(Exception):
    """Raised when a directory cannot be searched for results at all."""


class ResultSeeker(Protocol):
    """Contract shared by all result seekers."""

    def seek(self, directory) -> dict[int, TestCaseWrapper]: ...


def qualified_name_key(test_case: TestCase) -> str:
    return test_case.full_name


def class_name_key(test_case: TestCase) -> str:
    return test_case.class_name


class _ResultFolder:
    """Accumulates matches into one wrapper per catalog test case."""

    def __init__(self, log: logging.Logger):
        self.logger = log
        self.results: dict[int, TestCaseWrapper] = {}
        self._attachments: dict[str, Optional[Attachment]] = {}
        self._attached: set[tuple[int, str]] = set()

    def fold(self, test_case: CatalogTestCase, status: ExecutionStatus, notes: str,
             record, report: str, report_path: Path):
        wrapper = self.results.get(test_case.id)
        if wrapper is None:
            wrapper = TestCaseWrapper(test_case)
            self.results[test_case.id] = wrapper
        wrapper.set_execution_status(merge_status(wrapper.execution_status, status))
        wrapper.append_notes(notes)
        wrapper.add_record(record)

        if (test_case.id, report) in self._attached:
            return
        self._attached.add((test_case.id, report))
        attachment = self._attachment(report, report_path)
        if attachment is not None:
            wrapper.add_attachment(dataclasses.replace(attachment))

    def _attachment(self, report: str, report_path: Path) -> Optional[Attachment]:
        if report not in self._attachments:
            try:
                self._attachments[report] = attachment_for(report_path, os.path.basename(report))
            except AttachmentReadError as e:
                self.logger.warning(f"Not attaching {report_path}: {e.cause}")
                self._attachments[report] = None
        return self._attachments[report]


def _list_reports(directory, include_pattern: str, scanner: Scanner) -> list[str]:
    try:
        return list(scanner(Path(directory), include_pattern))
    except Exception as e:
        raise SeekerError(f"Failed to scan {directory} for '{include_pattern}': {e}") from e


def _parse_reports(directory, reports: Iterable[str], parser: ReportParser,
                   log: logging.Logger) -> Iterator[tuple[str, Path, list[TestSuite]]]:
    """Parse reports in order, skipping the ones that cannot be parsed."""
    for report in reports:
        path = Path(directory) / report
        try:
            suites = parser.parse(path)
        except ParserError as e:
            log.warning(f"Skipping malformed {parser.name} report {path}: {e.cause}")
            continue
        except OSError as e:
            log.warning(f"Skipping unreadable report {path}: {e}")
            continue
        except Exception as e:
            raise SeekerError(f"Failed to process report {path}: {e}") from e
        log.debug(f"Parsed {len(suites)} suites from {path}")
        yield report, path, suites


class JUnitTestCaseSeeker:
    """
    Matches every JUnit test case against the catalog.

    The key of a test case is computed by ``key_function``, its fully
    qualified name (``classname.name``) by default. With ``class_name_key``
    all methods of a test class feed the same catalog test case.
    """

    def __init__(self, include_pattern: str, catalog: Iterable[CatalogTestCase],
                 key_custom_field: str, log: Optional[logging.Logger] = None,
                 parser: Optional[ReportParser] = None, scanner: Optional[Scanner] = None,
                 key_function: Callable[[TestCase], str] = qualified_name_key):
        self.include_pattern = include_pattern
        self.catalog = tuple(catalog)
        self.key_custom_field = key_custom_field
        self.logger = log or logger
        self.parser = parser or JUnitParser(self.logger)
        self.scanner = scanner or scan
        self.key_function = key_function

    def seek(self, directory) -> dict[int, TestCaseWrapper]:
        """
        Search ``directory`` for reports and build the result map.

        Raises:
            SeekerError: If the directory cannot be scanned
        """
        reports = _list_reports(directory, self.include_pattern, self.scanner)
        index = KeyIndex(self.catalog, self.key_custom_field, self.logger)
        folder = _ResultFolder(self.logger)

        for report, path, suites in _parse_reports(directory, reports, self.parser, self.logger):
            for suite in suites:
                for tc in suite.test_cases:
                    key = self.key_function(tc)
                    found = index.find(key)
                    if found is None:
                        self.logger.debug(f"No test case with {self.key_custom_field}='{key}'")
                        continue
                    folder.fold(found, status_of(tc), notes_of(tc), tc, report, path)

        self.logger.info(f"Found results for {len(folder.results)} test cases "
                         f"in {len(reports)} reports under {directory}")
        return folder.results


class JUnitSuiteSeeker:
    """Matches every JUnit test suite, by suite name, against the catalog."""

    def __init__(self, include_pattern: str, catalog: Iterable[CatalogTestCase],
                 key_custom_field: str, log: Optional[logging.Logger] = None,
                 parser: Optional[ReportParser] = None, scanner: Optional[Scanner] = None):
        self.include_pattern = include_pattern
        self.catalog = tuple(catalog)
        self.key_custom_field = key_custom_field
        self.logger = log or logger
        self.parser = parser or JUnitParser(self.logger)
        self.scanner = scanner or scan

    def seek(self, directory) -> dict[int, TestCaseWrapper]:
        reports = _list_reports(directory, self.include_pattern, self.scanner)
        index = KeyIndex(self.catalog, self.key_custom_field, self.logger)
        folder = _ResultFolder(self.logger)

        for report, path, suites in _parse_reports(directory, reports, self.parser, self.logger):
            for suite in suites:
                found = index.find(suite.name)
                if found is None:
                    self.logger.debug(f"No test case with {self.key_custom_field}='{suite.name}'")
                    continue
                folder.fold(found, suite_status_of(suite), suite_notes_of(suite), suite, report, path)

        self.logger.info(f"Found results for {len(folder.results)} test cases "
                         f"in {len(reports)} reports under {directory}")
        return folder.results
