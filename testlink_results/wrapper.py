"""Wrapper pairing a TestLink catalog test case with its computed result."""

import base64
import os
from dataclasses import dataclass
from typing import Any, Optional

from .models import CatalogTestCase, ExecutionStatus


class AttachmentReadError(Exception):
    """Raised when a file cannot be read for attaching."""

    def __init__(self, path, cause: Exception):
        super().__init__(f"Failed to read attachment {path}: {cause}")
        self.path = path
        self.cause = cause


@dataclass
class Attachment:
    """A file to upload along with an execution, content base64 encoded."""
    file_name: str
    content: str
    file_type: str = "text/xml"
    title: Optional[str] = None
    description: Optional[str] = None

    def decode(self) -> bytes:
        return base64.b64decode(self.content)


def encode_file(path) -> str:
    """Return the base64 encoded content of a file."""
    try:
        with open(path, 'rb') as f:
            data = f.read()
    except OSError as e:
        raise AttachmentReadError(path, e) from e
    return base64.b64encode(data).decode('ascii')


def attachment_for(path, file_name: Optional[str] = None) -> Attachment:
    """Build an attachment from a report file on disk."""
    name = file_name or os.path.basename(str(path))
    return Attachment(file_name=name, content=encode_file(path), title=name,
                      description=f"Test report {name}")


class TestCaseWrapper:
    """
    A catalog test case decorated with execution status, notes and
    attachments, plus the parsed records that produced them.
    """

    __test__ = False

    def __init__(self, test_case: CatalogTestCase):
        if test_case is None:
            raise ValueError("TestCaseWrapper requires a test case")
        self.test_case = test_case
        self.execution_status = ExecutionStatus.NOT_RUN
        self.notes = ""
        self.attachments: list[Attachment] = []
        self._records: list[Any] = []

    @property
    def id(self) -> int:
        return self.test_case.id

    @property
    def name(self) -> str:
        return self.test_case.name

    @property
    def records(self) -> tuple:
        return tuple(self._records)

    def key_custom_field_value(self, field_name: str) -> Optional[str]:
        cf = self.test_case.custom_field(field_name)
        return cf.value if cf else None

    def set_execution_status(self, status: ExecutionStatus):
        self.execution_status = status

    def append_notes(self, text: str):
        if not text:
            return
        self.notes = f"{self.notes}\n\n{text}" if self.notes else text

    def add_attachment(self, attachment: Attachment):
        self.attachments.append(attachment)

    def add_record(self, record: Any):
        self._records.append(record)

    def to_dict(self, include_content: bool = False) -> dict:
        attachments = []
        for a in self.attachments:
            item = {"file_name": a.file_name, "file_type": a.file_type, "encoded_size": len(a.content)}
            if include_content:
                item["content"] = a.content
            attachments.append(item)
        return {
            "id": self.id,
            "name": self.name,
            "status": self.execution_status.name,
            "notes": self.notes,
            "attachments": attachments,
        }

    def __repr__(self):
        return f"TestCaseWrapper(id={self.id}, status={self.execution_status.name})"
