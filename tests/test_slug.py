"""Tests for branch name sanitizing."""

from ghp_core.utils.slug import sanitize_for_branch_name


class TestSanitizeForBranchName:
    """Tests for the sanitize_for_branch_name function."""

    def test_basic_text(self):
        """Simple text is lowercased and spaces become hyphens."""
        assert sanitize_for_branch_name("Hello World") == "hello-world"

    def test_special_characters_become_hyphens(self):
        """Special characters are replaced and runs collapsed."""
        assert sanitize_for_branch_name("Fix Login Bug!") == "fix-login-bug"
        assert sanitize_for_branch_name("What's up?") == "what-s-up"
        assert sanitize_for_branch_name("a_b/c") == "a-b-c"

    def test_leading_trailing_hyphens_removed(self):
        """Leading and trailing hyphens are stripped."""
        assert sanitize_for_branch_name("  --hello--  ") == "hello"

    def test_non_ascii_replaced(self):
        """Non-ASCII letters are not transliterated."""
        assert sanitize_for_branch_name("café au lait") == "caf-au-lait"

    def test_truncated_to_fifty(self):
        """Results are at most 50 characters."""
        assert len(sanitize_for_branch_name("word " * 30)) == 50

    def test_empty_result(self):
        """All-special-character input produces empty string."""
        assert sanitize_for_branch_name("@#$%") == ""
