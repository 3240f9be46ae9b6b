import pytest
from pydantic import ValidationError

from app.schemas.common import ContentCreate, ContentStatusUpdate, StatusDescriptorOut
from app.state_machine.taxonomy import UNKNOWN_DESCRIPTOR, ContentStatus


def test_content_create_rejects_invalid_year():
    with pytest.raises(ValidationError):
        ContentCreate(kind="document", title="x", author="dr.x", year=99)


def test_content_create_accepts_minimal_valid():
    out = ContentCreate(kind="video", title="Heart basics", author="dr.x")
    assert out.kind.value == "video"
    assert out.media_url is None


def test_status_update_only_accepts_canonical_targets():
    assert ContentStatusUpdate(target="verified").target is ContentStatus.verified
    with pytest.raises(ValidationError):
        ContentStatusUpdate(target="approved")


def test_descriptor_out_from_unknown_marker():
    out = StatusDescriptorOut.model_validate(UNKNOWN_DESCRIPTOR)
    assert out.status is None
    assert out.recognized is False
    assert out.severity.value == "neutral"
