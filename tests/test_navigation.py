import pytest

from playcore.logging_config import StateError
from playcore.navigation import NavigationStack, normalize_prefix, trailing_component


class TestNormalizePrefix:
    """Tests for prefix normalization."""

    def test_appends_separator(self):
        assert normalize_prefix("/media") == "/media/"

    def test_keeps_existing_separator(self):
        assert normalize_prefix("/media/") == "/media/"

    def test_root(self):
        assert normalize_prefix("/") == "/"

    def test_empty_path(self):
        with pytest.raises(StateError):
            normalize_prefix("")

    def test_trailing_component(self):
        assert trailing_component("/media/Movies/") == "Movies"
        assert trailing_component("/media/comics.cbz#/") == "comics.cbz#"


class TestNavigationStack:
    """Tests for NavigationStack push/pop."""

    def test_push_makes_current(self):
        """Test that push puts the new prefix at index 0."""
        stack = NavigationStack("/media")
        stack.push("/media/Movies")

        assert stack.current() == "/media/Movies/"
        assert stack.as_list() == ["/media/Movies/", "/media/"]
        assert stack.depth == 2

    def test_pop_returns_segment(self):
        """Test that pop names the directory we came from."""
        stack = NavigationStack("/media/")
        stack.push("/media/Movies/")

        result = stack.pop()

        assert result.segment == "Movies"
        assert result.at_root is True
        assert stack.current() == "/media/"

    def test_pop_not_at_root(self):
        stack = NavigationStack("/media/")
        stack.push("/media/Movies/")
        stack.push("/media/Movies/Film/")

        result = stack.pop()

        assert result.segment == "Film"
        assert result.at_root is False

    def test_push_pop_round_trip(self):
        """Test that push then pop restores the previous stack."""
        stack = NavigationStack("/media/")
        stack.push("/media/Movies/")
        before = stack.as_list()

        stack.push("/media/Movies/Film")
        result = stack.pop()

        assert stack.as_list() == before
        assert result.segment == "Film"

    def test_pop_at_root_is_illegal(self):
        """Test that the root can't be popped."""
        stack = NavigationStack("/media/")

        with pytest.raises(StateError):
            stack.pop()

        assert stack.as_list() == ["/media/"]

    def test_empty_stack(self):
        stack = NavigationStack()

        assert len(stack) == 0
        with pytest.raises(StateError):
            stack.current()
        with pytest.raises(StateError):
            stack.pop()

    def test_reset(self):
        """Test that reset leaves exactly the new root."""
        stack = NavigationStack("/media/")
        stack.push("/media/Movies/")

        stack.reset("/mnt/usb")

        assert stack.as_list() == ["/mnt/usb/"]

    def test_peek(self):
        stack = NavigationStack("/media/")
        stack.push("/media/Music/")

        assert stack.peek(0) == "/media/Music/"
        assert stack.peek(1) == "/media/"
        with pytest.raises(StateError):
            stack.peek(2)

    def test_copy_is_independent(self):
        stack = NavigationStack("/media/")
        clone = stack.copy()
        clone.push("/media/Music/")

        assert stack.as_list() == ["/media/"]
        assert clone.depth == 2

    def test_deep_stack(self):
        stack = NavigationStack("/")
        for i in range(100):
            stack.push(f"/d{i}")

        assert stack.depth == 101
        assert stack.current() == "/d99/"
