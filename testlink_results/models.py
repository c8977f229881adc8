"""
Data models for TestLink catalog entries and parsed JUnit reports.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ExecutionStatus(Enum):
    """Execution status of a TestLink test case (values are TestLink's codes)."""
    NOT_RUN = "n"
    PASSED = "p"
    FAILED = "f"
    BLOCKED = "b"


@dataclass(frozen=True)
class CustomField:
    """A TestLink custom field attached to a catalog test case."""
    name: str
    value: str


@dataclass(frozen=True)
class CatalogTestCase:
    """A test case declared in TestLink for the current run."""
    id: int
    name: str
    custom_fields: tuple[CustomField, ...] = ()
    external_id: Optional[str] = None

    def custom_field(self, name: str) -> Optional[CustomField]:
        """Return the first custom field called ``name``, if any."""
        for cf in self.custom_fields:
            if cf.name == name:
                return cf
        return None


@dataclass
class Failure:
    """A <failure> element of a JUnit test case."""
    message: Optional[str] = None
    type: Optional[str] = None
    text: str = ""


@dataclass
class Error:
    """An <error> element of a JUnit test case."""
    message: Optional[str] = None
    type: Optional[str] = None
    text: str = ""


@dataclass
class TestCase:
    """Represents a single <testcase> of a JUnit report."""
    __test__ = False

    name: str = ""
    class_name: str = ""
    time: str = ""
    failures: list[Failure] = field(default_factory=list)
    errors: list[Error] = field(default_factory=list)
    system_out: Optional[str] = None
    system_err: Optional[str] = None

    @property
    def full_name(self) -> str:
        if not self.class_name:
            return self.name
        return f"{self.class_name}.{self.name}"

    def remove_failure(self, failure: Failure) -> bool:
        return _remove_identical(self.failures, failure)

    def remove_error(self, error: Error) -> bool:
        return _remove_identical(self.errors, error)


@dataclass
class TestSuite:
    """Represents a <testsuite> (one report document, usually)."""
    __test__ = False

    name: str = ""
    hostname: str = ""
    timestamp: str = ""
    tests: str = ""
    failures: int = 0
    errors: int = 0
    time: str = ""
    system_out: Optional[str] = None
    system_err: Optional[str] = None
    test_cases: list[TestCase] = field(default_factory=list)

    def remove_test_case(self, test_case: TestCase) -> bool:
        return _remove_identical(self.test_cases, test_case)


def _remove_identical(items: list, item) -> bool:
    # Match by identity: two records may carry identical fields.
    for i, candidate in enumerate(items):
        if candidate is item:
            del items[i]
            return True
    return False
