"""Tests for the ordered argument list."""

from ffdiag.command.arguments import ArgumentList


class TestAppend:
    """Tests for ArgumentList.append and friends."""

    def test_append_variadic_tokens(self):
        """Several tokens are appended in call order."""
        args = ArgumentList()
        args.append("-i", "input.mkv")
        assert args.get() == ["-i", "input.mkv"]

    def test_append_single_sequence_is_flattened(self):
        """A single list argument is flattened into tokens."""
        args = ArgumentList()
        args.append(["-c:v", "libx264"])
        args.append(("-crf", "23"))
        assert args.get() == ["-c:v", "libx264", "-crf", "23"]

    def test_get_is_concatenation_of_appends(self):
        """get() equals all appended tokens in call order, duplicates kept."""
        args = ArgumentList()
        args.append("-y")
        args.append(["-map", "0:v"])
        args.append("-map", "0:a")
        args.append_one("-y")
        args.append_many(iter(["out.mkv"]))
        assert args.get() == ["-y", "-map", "0:v", "-map", "0:a", "-y", "out.mkv"]

    def test_append_nothing(self):
        """Appending no tokens leaves the list unchanged."""
        args = ArgumentList(["-y"])
        args.append()
        assert args.get() == ["-y"]

    def test_clear(self):
        """clear() empties the list."""
        args = ArgumentList(["-y", "-nostdin"])
        args.clear()
        assert args.get() == []
        assert len(args) == 0

    def test_get_returns_copy(self):
        """Mutating the result of get() does not change the list."""
        args = ArgumentList(["-y"])
        args.get().append("-n")
        assert args.get() == ["-y"]


class TestFind:
    """Tests for ArgumentList.find."""

    def test_find_returns_following_tokens(self):
        """find() returns the count tokens after the first occurrence."""
        args = ArgumentList(["a", "x", "b", "c", "d"])
        assert args.find("x", 2) == ["b", "c"]

    def test_find_absent_returns_none(self):
        """find() returns None when the token is absent."""
        args = ArgumentList(["a", "b"])
        assert args.find("x", 1) is None

    def test_find_zero_count(self):
        """find() with no count returns an empty list for a present token."""
        args = ArgumentList(["-y"])
        assert args.find("-y") == []

    def test_find_uses_first_occurrence(self):
        """Only the first occurrence is considered."""
        args = ArgumentList(["-map", "0:v", "-map", "0:a"])
        assert args.find("-map", 1) == ["0:v"]

    def test_find_past_end(self):
        """find() returns fewer tokens when the list ends early."""
        args = ArgumentList(["a", "x", "b"])
        assert args.find("x", 5) == ["b"]


class TestRemove:
    """Tests for ArgumentList.remove."""

    def test_remove_token_and_following(self):
        """remove() deletes the token and count following tokens."""
        args = ArgumentList(["a", "x", "b", "c", "d"])
        args.remove("x", 2)
        assert args.get() == ["a", "d"]

    def test_remove_absent_is_noop(self):
        """remove() does nothing when the token is absent."""
        args = ArgumentList(["a", "b"])
        args.remove("x", 1)
        assert args.get() == ["a", "b"]

    def test_remove_only_first_occurrence(self):
        """Later occurrences are kept."""
        args = ArgumentList(["-y", "a", "-y"])
        args.remove("-y")
        assert args.get() == ["a", "-y"]


class TestClone:
    """Tests for ArgumentList.clone."""

    def test_clone_is_independent(self):
        """Changes to a clone do not affect the original, and vice versa."""
        original = ArgumentList(["-i", "in.mkv"])
        cloned = original.clone()

        cloned.append("-y")
        original.remove("-i", 1)

        assert cloned.get() == ["-i", "in.mkv", "-y"]
        assert original.get() == []

    def test_equality(self):
        """Lists compare equal to lists and ArgumentLists with the same tokens."""
        args = ArgumentList(["-y"])
        assert args == ["-y"]
        assert args == args.clone()
        assert args != ArgumentList(["-n"])
