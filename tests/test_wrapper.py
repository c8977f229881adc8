import base64

import pytest

from testlink_results.models import CatalogTestCase, CustomField, ExecutionStatus
from testlink_results.wrapper import (
    Attachment,
    AttachmentReadError,
    TestCaseWrapper,
    attachment_for,
    encode_file,
)


@pytest.fixture
def catalog_tc():
    return CatalogTestCase(id=4, name="Mix", custom_fields=(CustomField("testCustomField", "a.b.C"),))


def test_wrapper_requires_test_case():
    with pytest.raises(ValueError):
        TestCaseWrapper(None)


def test_new_wrapper_is_not_run(catalog_tc):
    wrapper = TestCaseWrapper(catalog_tc)

    assert wrapper.id == 4
    assert wrapper.name == "Mix"
    assert wrapper.execution_status == ExecutionStatus.NOT_RUN
    assert wrapper.notes == ""
    assert wrapper.attachments == []
    assert wrapper.records == ()
    assert wrapper.key_custom_field_value("testCustomField") == "a.b.C"
    assert wrapper.key_custom_field_value("missing") is None


def test_wrapper_mutators(catalog_tc):
    wrapper = TestCaseWrapper(catalog_tc)

    wrapper.set_execution_status(ExecutionStatus.FAILED)
    wrapper.append_notes("first")
    wrapper.append_notes("")
    wrapper.append_notes("second")
    wrapper.add_attachment(Attachment(file_name="r.xml", content="PHgvPg=="))
    wrapper.add_record("raw")

    assert wrapper.execution_status == ExecutionStatus.FAILED
    assert wrapper.notes == "first\n\nsecond"
    assert [a.file_name for a in wrapper.attachments] == ["r.xml"]
    assert wrapper.records == ("raw",)


def test_to_dict(catalog_tc):
    wrapper = TestCaseWrapper(catalog_tc)
    wrapper.set_execution_status(ExecutionStatus.BLOCKED)
    wrapper.add_attachment(Attachment(file_name="r.xml", content="PHgvPg=="))

    data = wrapper.to_dict()

    assert data["status"] == "BLOCKED"
    assert data["attachments"] == [{"file_name": "r.xml", "file_type": "text/xml", "encoded_size": 8}]
    assert wrapper.to_dict(include_content=True)["attachments"][0]["content"] == "PHgvPg=="


def test_encode_file_round_trip(tmp_path):
    payload = bytes(range(256)) + "<testsuite/>\n".encode("utf-8")
    path = tmp_path / "TEST-bin.xml"
    path.write_bytes(payload)

    encoded = encode_file(path)

    assert base64.b64decode(encoded) == payload
    assert attachment_for(path).decode() == payload


def test_attachment_for_names(tmp_path):
    path = tmp_path / "TEST-x.xml"
    path.write_text("<testsuite/>", encoding="utf-8")

    attachment = attachment_for(path)

    assert attachment.file_name == "TEST-x.xml"
    assert attachment.title == "TEST-x.xml"
    assert attachment_for(path, "renamed.xml").file_name == "renamed.xml"


def test_encode_missing_file(tmp_path):
    with pytest.raises(AttachmentReadError) as excinfo:
        encode_file(tmp_path / "missing.xml")

    assert isinstance(excinfo.value.cause, OSError)
