"""JUnit XML report parser.

Turns one report file (Ant/Maven Surefire style ``TEST-*.xml``) into a list
of :class:`TestSuite` records. Only input that is not well-formed XML raises
:class:`ParserError`; anything well-formed is parsed leniently, with missing
attributes replaced by empty strings or zero.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Optional, Protocol, Union

from .models import Error, Failure, TestCase, TestSuite

logger = logging.getLogger(__name__)


class ParserError(Exception):
    """Raised when a report file is not well-formed enough to parse."""

    def __init__(self, path, cause: Exception):
        super().__init__(f"Failed to parse report {path}: {cause}")
        self.path = path
        self.cause = cause


class ReportParser(Protocol):
    """Contract shared by all report format parsers."""

    name: str

    def parse(self, path: Union[str, Path]) -> list[TestSuite]: ...


class JUnitParser:
    """Parser for JUnit XML reports."""

    name = "JUnit"

    def __init__(self, log: Optional[logging.Logger] = None):
        self.logger = log or logger

    def parse(self, path: Union[str, Path]) -> list[TestSuite]:
        """
        Parse a JUnit report file.

        Args:
            path: Report file to read

        Returns:
            Suites found in the document, in document order. Empty when the
            document holds no suite (empty file or unrelated root element).

        Raises:
            ParserError: If the file is not well-formed XML or declares an
                unknown encoding
            OSError: If the file cannot be read
        """
        with open(path, 'rb') as f:
            data = f.read()

        if not data.strip():
            self.logger.debug(f"Report {path} is empty")
            return []

        try:
            root = ET.fromstring(data)
        except (ET.ParseError, LookupError, ValueError) as e:
            raise ParserError(path, e) from e

        if root.tag == 'testsuite':
            return [self._parse_suite(root, path)]
        if root.tag == 'testsuites':
            return [self._parse_suite(el, path) for el in root.findall('testsuite')]

        self.logger.debug(f"Report {path} has no test suite (root element <{root.tag}>)")
        return []

    def _parse_suite(self, el: ET.Element, path) -> TestSuite:
        suite = TestSuite(
            name=el.get('name', ''),
            hostname=el.get('hostname', ''),
            timestamp=el.get('timestamp', ''),
            tests=el.get('tests', ''),
            failures=self._count(el, 'failures', path),
            errors=self._count(el, 'errors', path),
            time=el.get('time', ''),
            system_out=_child_text(el, 'system-out'),
            system_err=_child_text(el, 'system-err'),
        )
        for tc in el.findall('testcase'):
            suite.test_cases.append(self._parse_test_case(tc))
        return suite

    def _parse_test_case(self, el: ET.Element) -> TestCase:
        test_case = TestCase(
            name=el.get('name', ''),
            class_name=el.get('classname', ''),
            time=el.get('time', ''),
            system_out=_child_text(el, 'system-out'),
            system_err=_child_text(el, 'system-err'),
        )
        for child in el:
            if child.tag == 'failure':
                test_case.failures.append(Failure(
                    message=child.get('message'),
                    type=child.get('type'),
                    text=''.join(child.itertext()),
                ))
            elif child.tag == 'error':
                test_case.errors.append(Error(
                    message=child.get('message'),
                    type=child.get('type'),
                    text=''.join(child.itertext()),
                ))
        return test_case

    def _count(self, el: ET.Element, attr: str, path) -> int:
        value = el.get(attr, '').strip()
        if not value:
            return 0
        try:
            return int(value)
        except ValueError:
            self.logger.debug(f"Ignoring non-numeric {attr}={value!r} in {path}")
            return 0


def _child_text(el: ET.Element, tag: str) -> Optional[str]:
    child = el.find(tag)
    if child is None:
        return None
    return ''.join(child.itertext())
