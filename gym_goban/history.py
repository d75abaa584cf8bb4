from typing import NamedTuple

from gym_goban.errors import GobanInvariantError

SENTINEL_NDX = -1


class HistoryEntry(NamedTuple):
    ndx: int
    cause: object


class HistoryLog:
    """
    LIFO log of (group handle, cause stone) pairs.
    A sentinel entry sits at the bottom so peek() is always safe; its cause is
    the goban's off-board stone, which is never played.
    """

    def __init__(self, sentinel_stone):
        self.sentinel = HistoryEntry(SENTINEL_NDX, sentinel_stone)
        self._entries = [self.sentinel]

    def push(self, ndx, cause):
        self._entries.append(HistoryEntry(ndx, cause))

    def peek(self):
        return self._entries[-1]

    def pop(self):
        if len(self._entries) <= 1:
            raise GobanInvariantError('Pop on an empty history log')
        return self._entries.pop()

    def top_caused_by(self, stone):
        """
        :return: the top entry if it was caused by the given stone, else None
        """
        entry = self._entries[-1]
        if entry.cause is stone and entry.ndx != SENTINEL_NDX:
            return entry
        return None

    def clear(self):
        del self._entries[1:]

    def __len__(self):
        return len(self._entries) - 1

    def __iter__(self):
        return iter(self._entries[1:])

    def __str__(self):
        return '[' + ', '.join(f'#{e.ndx}<-{e.cause.as_move()}' for e in self) + ']'
