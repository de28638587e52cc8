"""Ordered ffmpeg argument list.

ArgumentList collects command-line tokens in insertion order and supports
the small amount of structural editing needed while assembling a command:
looking up the values that follow an option, and removing an option
together with its values.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence


class ArgumentList:
    """Mutable ordered list of command-line tokens.

    Duplicates are allowed and insertion order is significant. Every
    instance owns its tokens; use clone() to get an independent copy.

    Example:
        args = ArgumentList()
        args.append("-i", "input.mkv")
        args.append(["-c:v", "libx264"])
        args.find("-c:v", 1)  # ["libx264"]
    """

    def __init__(self, tokens: Iterable[str] | None = None) -> None:
        self._tokens: list[str] = list(tokens) if tokens is not None else []

    def append(self, *tokens: str | Sequence[str]) -> None:
        """Append tokens to the list.

        A single list or tuple argument is flattened, so ``append(["-y"])``
        and ``append("-y")`` are equivalent. Several arguments are appended
        one by one, in order.

        Args:
            *tokens: Tokens to append, or a single sequence of tokens.
        """
        if len(tokens) == 1 and isinstance(tokens[0], (list, tuple)):
            self.append_many(tokens[0])
        else:
            self.append_many(tokens)  # type: ignore[arg-type]

    def append_one(self, token: str) -> None:
        """Append a single token."""
        self._tokens.append(token)

    def append_many(self, tokens: Iterable[str]) -> None:
        """Append every token of an iterable, in order."""
        self._tokens.extend(tokens)

    def clear(self) -> None:
        """Remove all tokens."""
        self._tokens = []

    def get(self) -> list[str]:
        """Return the tokens as a new list."""
        return list(self._tokens)

    def find(self, token: str, count: int = 0) -> list[str] | None:
        """Find the tokens following the first occurrence of ``token``.

        Args:
            token: Token to look for.
            count: Number of following tokens to return.

        Returns:
            Up to ``count`` tokens following ``token``, or None if
            ``token`` is not in the list.
        """
        try:
            index = self._tokens.index(token)
        except ValueError:
            return None
        return self._tokens[index + 1 : index + 1 + (count or 0)]

    def remove(self, token: str, count: int = 0) -> None:
        """Remove the first occurrence of ``token`` and the ``count`` tokens after it.

        Does nothing if ``token`` is not in the list.
        """
        try:
            index = self._tokens.index(token)
        except ValueError:
            return
        del self._tokens[index : index + 1 + (count or 0)]

    def clone(self) -> ArgumentList:
        """Return an independent copy of this list."""
        return ArgumentList(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._tokens))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ArgumentList):
            return self._tokens == other._tokens
        if isinstance(other, list):
            return self._tokens == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"ArgumentList({self._tokens!r})"
