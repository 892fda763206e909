"""Tests for glob compilation and the relatedness decision."""

import pytest

from matching.matcher import (
    file_name_matches,
    glob_to_regex,
    has_strong_context,
    is_app_related,
    is_generic_signature,
    signature_matches,
    strong_path_signatures,
)
from matching.signatures import signatures

PATTERNS = ["app", "com*app*desktop", "com*app"]
BUNDLE_ID = "com.test.app"
# "test" appears inside "contest" as a plain substring but not as a word,
# so that directory corroborates generic matches without being a strong
# path match itself.
APP_NAME = "Test"
INSTALL_PATH = "/Applications/Test.app"
CONTEXT_DIR = "/Users/me/Library/Caches/contest"
NEUTRAL_DIR = "/Users/me/Library/Caches/other"


def related(file_path: str, patterns=PATTERNS) -> bool:
    return is_app_related(patterns, BUNDLE_ID, APP_NAME, file_path, INSTALL_PATH)


class TestGlobToRegex:
    """Tests for glob_to_regex()."""

    def test_plain_signature_matches_whole_words_only(self) -> None:
        pattern = glob_to_regex("app")
        assert pattern.search("app")
        assert pattern.search("my app folder")
        assert not pattern.search("webapp")

    def test_wildcard_matches_any_separator_style(self) -> None:
        pattern = glob_to_regex("com*test*app")
        assert pattern.search("com.test.app.plist")
        assert pattern.search("com-test_app")
        assert pattern.search("comtestapp")

    def test_wildcard_does_not_skip_word_characters(self) -> None:
        assert not glob_to_regex("com*app*desktop").search("com*nottheapp*desktop")

    def test_wildcard_signature_is_not_anchored(self) -> None:
        assert glob_to_regex("com*test").search("xxxxxcom*testxxxx")

    def test_question_mark_matches_one_character(self) -> None:
        pattern = glob_to_regex("a?c")
        assert pattern.fullmatch("abc")
        assert not pattern.fullmatch("abbc")

    def test_metacharacters_are_escaped(self) -> None:
        pattern = glob_to_regex("1+1")
        assert pattern.search("x 1+1 y")
        assert not pattern.search("111")

    def test_case_insensitive(self) -> None:
        assert glob_to_regex("slack").search("Slack Helper")


class TestGenericSignature:
    """Tests for is_generic_signature()."""

    @pytest.mark.parametrize("signature", ["app", "code", "x", ".plist", "install", "macos"])
    def test_generic(self, signature: str) -> None:
        assert is_generic_signature(signature)

    @pytest.mark.parametrize("signature", ["slack", "a*b", "com*app", "outlook"])
    def test_specific(self, signature: str) -> None:
        assert not is_generic_signature(signature)


class TestStrongContext:
    """Tests for strong_path_signatures() and has_strong_context()."""

    def test_strong_signatures(self) -> None:
        assert strong_path_signatures("com.test.app", "Test") == [
            "com*test*app",
            "test",
            "test.app",
        ]

    def test_empty_inputs_produce_no_strong_signatures(self) -> None:
        assert strong_path_signatures("", "") == []

    def test_bundle_id_directory_has_context(self) -> None:
        assert has_strong_context("/Library/Caches/com.test.app", BUNDLE_ID, APP_NAME)

    def test_literal_app_name_substring_has_context(self) -> None:
        assert has_strong_context(CONTEXT_DIR, BUNDLE_ID, APP_NAME)

    def test_unrelated_directory_has_no_context(self) -> None:
        assert not has_strong_context(NEUTRAL_DIR, BUNDLE_ID, APP_NAME)


class TestSignatureMatches:
    """Tests for the generic/specific rule in signature_matches()."""

    def test_generic_needs_full_cover_and_context(self) -> None:
        assert signature_matches("app", "app", parent_has_context=True)

    def test_generic_without_context_fails(self) -> None:
        assert not signature_matches("app", "app", parent_has_context=False)

    def test_generic_partial_cover_fails(self) -> None:
        assert not signature_matches("app", "app*helper", parent_has_context=True)

    def test_specific_matches_anywhere_without_context(self) -> None:
        assert signature_matches("com*app", "xx*com*app*yy", parent_has_context=False)


class TestFileNameMatches:
    """Tests for file_name_matches() on bare names."""

    def test_specific_signature_matches_bare_name(self) -> None:
        assert file_name_matches(PATTERNS, "com-app-desktop-1.2.3")

    def test_generic_signature_needs_parent_context(self) -> None:
        assert not file_name_matches(PATTERNS, "app")
        assert file_name_matches(PATTERNS, "app", parent_context=lambda: True)

    def test_parent_context_is_asked_once(self) -> None:
        calls = []

        def context() -> bool:
            calls.append(1)
            return False

        assert not file_name_matches(["app", "x", "zzz"], "app", parent_context=context)
        assert calls == [1]

    def test_parent_context_not_asked_for_specific_hit(self) -> None:
        def context() -> bool:
            raise AssertionError("parent context should not be needed")

        assert file_name_matches(["com*app"], "com-app", parent_context=context)

    def test_name_stripped_to_nothing(self) -> None:
        assert not file_name_matches(PATTERNS, ".plist", parent_context=lambda: True)


class TestIsAppRelated:
    """Tests for is_app_related()."""

    def test_entry_inside_install_path_is_related(self) -> None:
        assert is_app_related(set(), "", "", INSTALL_PATH + "/Contents/MacOS/Test", INSTALL_PATH)

    def test_install_path_itself_is_related(self) -> None:
        assert is_app_related(set(), "", "", INSTALL_PATH, INSTALL_PATH)

    def test_generic_name_with_corroborating_parent(self) -> None:
        assert related(f"{CONTEXT_DIR}/app")

    def test_generic_name_without_corroborating_parent(self) -> None:
        """Counter-example: the same file under an unrelated directory."""
        assert not related(f"{NEUTRAL_DIR}/app")

    def test_generic_name_not_covering_whole_segment(self) -> None:
        """Counter-example: corroborating parent but only a partial match."""
        assert not related(f"{CONTEXT_DIR}/app-helper")

    def test_different_app_name(self) -> None:
        assert not related(f"{NEUTRAL_DIR}/nottheapp")

    def test_different_bundle_id(self) -> None:
        assert not related(f"{NEUTRAL_DIR}/com*nottheapp*desktop")
        assert not related(f"{NEUTRAL_DIR}/co*app*desktop")

    def test_specific_signature(self) -> None:
        assert related(f"{NEUTRAL_DIR}/com*app*desktop")

    @pytest.mark.parametrize(
        "noise", ["-1.2.3", "-2022.2", "-a7293542-411f-400f-ac18-fb93c61bb5b6"]
    )
    def test_specific_signature_with_noise(self, noise: str) -> None:
        assert related(f"{NEUTRAL_DIR}/com*app*desktop{noise}")

    @pytest.mark.parametrize(
        "noise", ["-1.2.3", "-2022.2", "-a7293542-411f-400f-ac18-fb93c61bb5b6"]
    )
    def test_generic_signature_with_noise(self, noise: str) -> None:
        """Noise is stripped before the full-cover check."""
        assert related(f"{CONTEXT_DIR}/app{noise}")

    @pytest.mark.parametrize(
        "file_name",
        ["com*test*appxxxxxxxx", "xxxxxxxxcom*test*app", "xxxxxcom*test*appxxxx"],
    )
    def test_bundle_id_inside_long_name(self, file_name: str) -> None:
        assert related(f"{NEUTRAL_DIR}/{file_name}")

    def test_bundle_id_in_parent_directory(self) -> None:
        """Strong path match: the leaf name says nothing about the app."""
        assert related("/Users/me/Library/Containers/com.test.app/Data/prefs.db")


class TestRealSignatures:
    """is_app_related() with signatures generated from a real app."""

    APP = "Slack"
    BUNDLE = "com.tinyspeck.slackmacgap"

    def check(self, path: str) -> bool:
        return is_app_related(
            signatures(self.APP, self.BUNDLE),
            self.BUNDLE,
            self.APP,
            path,
            "/Applications/Slack.app",
        )

    def test_preferences_plist(self) -> None:
        assert self.check("/Users/me/Library/Preferences/com.tinyspeck.slackmacgap.plist")

    def test_application_support_folder(self) -> None:
        assert self.check("/Users/me/Library/Application Support/Slack")

    def test_installer_download(self) -> None:
        assert self.check("/Users/me/Downloads/Slack-4.33.90-macOS.dmg")

    def test_similar_name_is_not_related(self) -> None:
        assert not self.check("/Users/me/Library/Caches/slackware-notes.txt")

    def test_other_vendor_product_is_not_related(self) -> None:
        assert not self.check("/Users/me/Library/Preferences/com.apple.finder.plist")
