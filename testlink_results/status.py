"""Derive TestLink execution status and notes from parsed JUnit records."""

from typing import Optional

from .models import ExecutionStatus, TestCase, TestSuite


def status_of(test_case: TestCase) -> ExecutionStatus:
    """Errors block a test case, failures fail it, otherwise it passed."""
    if test_case.errors:
        return ExecutionStatus.BLOCKED
    if test_case.failures:
        return ExecutionStatus.FAILED
    return ExecutionStatus.PASSED


def suite_status_of(suite: TestSuite) -> ExecutionStatus:
    """Status of a whole suite, falling back to its counters."""
    if suite.errors > 0 or any(tc.errors for tc in suite.test_cases):
        return ExecutionStatus.BLOCKED
    if suite.failures > 0 or any(tc.failures for tc in suite.test_cases):
        return ExecutionStatus.FAILED
    return ExecutionStatus.PASSED


def merge_status(current: Optional[ExecutionStatus], new: ExecutionStatus) -> ExecutionStatus:
    """
    Fold a newly seen status into the one already recorded.

    Any failure evidence wins over a pass, a pass never clears a failure,
    and between FAILED and BLOCKED the later one wins.
    """
    if current is None or current == ExecutionStatus.NOT_RUN:
        return new
    if new == ExecutionStatus.PASSED:
        return current
    return new


def _render(message: Optional[str], type_: Optional[str], text: Optional[str]) -> str:
    return '\n'.join(part for part in (message, type_, text) if part)


def notes_of(test_case: TestCase) -> str:
    """Failure blocks first, then error blocks, separated by a blank line."""
    blocks = [_render(f.message, f.type, f.text) for f in test_case.failures]
    blocks += [_render(e.message, e.type, e.text) for e in test_case.errors]
    return '\n\n'.join(b for b in blocks if b)


def suite_notes_of(suite: TestSuite) -> str:
    header = [
        ('name', suite.name),
        ('hostname', suite.hostname),
        ('timestamp', suite.timestamp),
        ('tests', suite.tests),
        ('failures', str(suite.failures)),
        ('errors', str(suite.errors)),
        ('system-out', suite.system_out),
        ('system-err', suite.system_err),
    ]
    blocks = ['\n'.join(f"{label}: {value}" for label, value in header if value)]
    blocks += [notes_of(tc) for tc in suite.test_cases]
    return '\n\n'.join(b for b in blocks if b)
