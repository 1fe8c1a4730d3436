"""
Command stream: flattens a parsed program into atomic commands, one per pull.

The cursor is an explicit stack of frames rather than a generator, so the
host can look at where it is, count what has run and drop it at any time.
"""
from dataclasses import dataclass
from typing import List, Optional, Tuple
from core.commands import Command, Repeat, Block


@dataclass
class Frame:
    """One level of nesting: a block, the next index in it and the passes left."""
    body: List[Command]
    index: int = 0
    remaining: int = 1


def count_atomic(block: List[Command]) -> int:
    """Number of atomic commands a block flattens to, without expanding it."""
    total = 0
    for command in block:
        if isinstance(command, Repeat):
            if command.count > 0:
                total += command.count * count_atomic(command.body)
        elif isinstance(command, Block):
            total += count_atomic(command.body)
        else:
            total += 1
    return total


class CommandStream:
    """Pull-based cursor over a command block."""

    def __init__(self, program: List[Command]):
        self._stack: List[Frame] = [Frame(program)]
        self.steps_taken = 0

    def __iter__(self):
        return self

    def __next__(self) -> Command:
        command = self.next_command()
        if command is None:
            raise StopIteration
        return command

    def next_command(self) -> Optional[Command]:
        """Advance to the next atomic command, or None when exhausted."""
        while self._stack:
            frame = self._stack[-1]

            if frame.index >= len(frame.body):
                frame.remaining -= 1
                if frame.remaining > 0:
                    frame.index = 0
                else:
                    self._stack.pop()
                continue

            command = frame.body[frame.index]
            frame.index += 1

            if isinstance(command, Repeat):
                if command.count > 0 and command.body:
                    self._stack.append(Frame(command.body, 0, command.count))
                continue

            if isinstance(command, Block):
                if command.body:
                    self._stack.append(Frame(command.body))
                continue

            self.steps_taken += 1
            return command

        return None

    @property
    def done(self) -> bool:
        return not self._stack

    @property
    def depth(self) -> int:
        """Current nesting depth; 1 at top level, 0 once exhausted."""
        return len(self._stack)

    def snapshot(self) -> List[Tuple[int, int]]:
        """(index, remaining passes) per frame, outermost first."""
        return [(frame.index, frame.remaining) for frame in self._stack]

    def close(self):
        """Abandon the stream; further pulls report exhaustion."""
        self._stack.clear()
