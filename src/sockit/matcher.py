"""Conformance testing and value extraction.

Literals must appear exactly at the cursor, in order. A parameter binds the
text between the preceding literal and the next occurrence of the following
literal; when that occurrence leads to a dead end later on, the next
occurrence is tried, so every parameter captures the shortest text that lets
the rest of the input match. The whole input must be consumed.

The walk keeps its choice points on an explicit stack, so template length is
not bounded by the interpreter's recursion limit.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from sockit.models import DOES_NOT_CONFORM, MatchResult, Segment


def match_segments(segments: Sequence[Segment], text: str) -> MatchResult:
    """Match text against a compiled segment sequence."""
    values = _Walk(segments, text).run()
    if values is None:
        return DOES_NOT_CONFORM
    return MatchResult(values=tuple(values))


@dataclass
class _Choice:
    """A parameter at index starting at start, currently bound up to end."""

    index: int
    start: int
    ends: Iterator[int]
    end: int = -1


class _Walk:
    def __init__(self, segments: Sequence[Segment], text: str) -> None:
        self.segments = segments
        self.text = text
        # (segment index, cursor) states already known not to lead to a match
        self.dead: set[tuple[int, int]] = set()

    def run(self) -> list[str] | None:
        choices: list[_Choice] = []
        index, cursor = 0, 0
        while not self._advance(index, cursor, choices):
            resumed = self._backtrack(choices)
            if resumed is None:
                return None
            index, cursor = resumed
        return [self.text[c.start:c.end] for c in choices]

    def _advance(self, index: int, cursor: int, choices: list[_Choice]) -> bool:
        """Walk forward from (index, cursor), taking the first end of each parameter."""
        segments = self.segments
        while index < len(segments):
            if (index, cursor) in self.dead:
                return False

            segment = segments[index]
            if not segment.is_parameter:
                if not self.text.startswith(segment.text, cursor):
                    self.dead.add((index, cursor))
                    return False
                index += 1
                cursor += len(segment.text)
                continue

            if index + 1 == len(segments):
                # The last parameter takes the rest.
                choices.append(_Choice(index, cursor, iter(()), len(self.text)))
                return True

            choice = _Choice(index, cursor, self._boundaries(segments[index + 1], cursor))
            end = next(choice.ends, None)
            if end is None:
                self.dead.add((index, cursor))
                return False
            choice.end = end
            choices.append(choice)
            index, cursor = index + 1, end

        return cursor == len(self.text)

    def _backtrack(self, choices: list[_Choice]) -> tuple[int, int] | None:
        """Move the innermost parameter with untried ends to its next end."""
        while choices:
            choice = choices[-1]
            self.dead.add((choice.index + 1, choice.end))
            end = next(choice.ends, None)
            if end is not None:
                choice.end = end
                return choice.index + 1, end
            choices.pop()
            self.dead.add((choice.index, choice.start))
        return None

    def _boundaries(self, following: Segment, cursor: int) -> Iterator[int]:
        """Yield candidate end positions for a parameter, shortest first."""
        if following.is_parameter:
            # Adjacent parameters have no delimiter between them.
            yield from range(cursor, len(self.text) + 1)
            return

        position = self.text.find(following.text, cursor)
        while position != -1:
            yield position
            position = self.text.find(following.text, position + 1)
