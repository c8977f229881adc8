import logging
from pathlib import Path

import pytest

from testlink_results.models import CatalogTestCase, CustomField

RESOURCES = Path(__file__).resolve().parent / "resources"

KEY_FIELD = "testCustomField"

PASSED_XML = """<?xml version="1.0" encoding="UTF-8"?>
<testsuite name="a.b" tests="1" failures="0" errors="0">
  <testcase classname="a.b" name="C" />
</testsuite>
"""

FAILED_XML = """<?xml version="1.0" encoding="UTF-8"?>
<testsuite name="a.b" tests="1" failures="1" errors="0">
  <testcase classname="a.b" name="C">
    <failure message="expected 1 but was 2" type="AssertionError">AssertionError: expected 1 but was 2
    at a.b.C(C.java:10)</failure>
  </testcase>
</testsuite>
"""

BLOCKED_XML = """<?xml version="1.0" encoding="UTF-8"?>
<testsuite name="a.b" tests="1" failures="0" errors="1">
  <testcase classname="a.b" name="C">
    <error message="connection refused" type="java.net.ConnectException">java.net.ConnectException: connection refused</error>
  </testcase>
</testsuite>
"""


def _catalog_entry(tc_id: int, key: str, name: str = None, field: str = KEY_FIELD) -> CatalogTestCase:
    return CatalogTestCase(id=tc_id, name=name or f"TC {tc_id}",
                           custom_fields=(CustomField(field, key),))


@pytest.fixture
def catalog_entry():
    return _catalog_entry


@pytest.fixture
def reports() -> dict:
    return {"passed": PASSED_XML, "failed": FAILED_XML, "blocked": BLOCKED_XML}


@pytest.fixture
def resources() -> Path:
    return RESOURCES


@pytest.fixture
def write_report(tmp_path):
    """Write an XML report below tmp_path and return its path."""
    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def capture_logger():
    log = logging.getLogger("tests.capture")
    log.setLevel(logging.DEBUG)
    return log
