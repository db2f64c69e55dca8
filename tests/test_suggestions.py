"""Test suggestion models, avatar coercion, and prefix filtering."""

import pytest

from socialtext.errors import UnsupportedAvatarTypeError
from socialtext.suggestions import (
    Hashtag,
    Mention,
    RemoteAvatar,
    ResourceAvatar,
    filter_suggestions,
    to_avatar,
)


class TestAvatar:
    def test_none(self):
        assert to_avatar(None) is None

    def test_resource_id(self):
        assert to_avatar(42) == ResourceAvatar(42)

    def test_url(self):
        assert to_avatar("https://example.com/a.png") == RemoteAvatar("https://example.com/a.png")

    def test_already_tagged(self):
        avatar = RemoteAvatar("u")
        assert to_avatar(avatar) is avatar

    @pytest.mark.parametrize("value", [1.5, True, b"bytes", ["x"]])
    def test_unsupported(self, value):
        with pytest.raises(UnsupportedAvatarTypeError):
            to_avatar(value)


class TestMention:
    def test_avatar_coerced(self):
        mention = Mention("jane", "Jane Doe", 7)
        assert mention.avatar == ResourceAvatar(7)
        assert mention.key == "jane"

    def test_bad_avatar_rejected(self):
        with pytest.raises(UnsupportedAvatarTypeError):
            Mention("jane", avatar=3.0)


class TestFilter:
    def test_prefix_case_insensitive(self):
        items = [Mention("Jane"), Mention("john"), Mention("bob")]
        assert filter_suggestions(items, "j") == [Mention("Jane"), Mention("john")]

    def test_empty_prefix_keeps_all(self):
        tags = [Hashtag("python", 3), Hashtag("rust")]
        assert filter_suggestions(tags, "") == tags

    def test_no_match(self):
        assert filter_suggestions([Hashtag("python")], "go") == []
