import pytest
from pydantic import ValidationError

from app.core.config import Settings
from app.state_machine.taxonomy import ContentStatus


def test_legacy_alias_map_parses_pairs():
    settings = Settings(env="test", legacy_status_aliases="published=verified, declined = rejected,")
    assert settings.legacy_status_alias_map == {
        "published": ContentStatus.verified,
        "declined": ContentStatus.rejected,
    }


def test_legacy_alias_target_must_be_canonical():
    with pytest.raises(ValidationError):
        Settings(env="test", legacy_status_aliases="published=live")


def test_legacy_alias_entry_must_have_separator():
    with pytest.raises(ValidationError):
        Settings(env="test", legacy_status_aliases="published")


def test_default_content_status_must_be_canonical():
    with pytest.raises(ValidationError):
        Settings(env="test", default_content_status="approved")


def test_auth_token_required_outside_tests():
    with pytest.raises(ValidationError):
        Settings(env="prod", api_auth_enabled=True, api_auth_token=None)


def test_legacy_alias_may_not_remap_canonical_status():
    with pytest.raises(ValidationError):
        Settings(env="test", legacy_status_aliases="pending=verified")


def test_legacy_alias_identity_entry_is_allowed():
    settings = Settings(env="test", legacy_status_aliases="pending=pending")
    assert settings.legacy_status_alias_map == {"pending": ContentStatus.pending}
