import logging

import numpy as np

from gym_goban import govars, notation, state_utils
from gym_goban.errors import GobanInvariantError
from gym_goban.group import Group
from gym_goban.history import HistoryLog
from gym_goban.stone import Stone

logger = logging.getLogger(__name__)


class MoveResult:
    """Result of a stone placement."""

    def __init__(self, stone, color, captures=0, suicide=False, merged_mark=0, killed_mark=0):
        """
        :param stone: the stone that was put down
        :param color: color played
        :param captures: number of enemy stones captured by the move
        :param suicide: whether the stone's own group died from the move
        :param merged_mark: length of the merged log before the move
        :param killed_mark: length of the killed log before the move
        """
        self.stone = stone
        self.color = color
        self.captures = captures
        self.suicide = suicide
        # Entries above the marks are the ones this move pushed
        self.merged_mark = merged_mark
        self.killed_mark = killed_mark

    @property
    def move(self):
        return self.stone.as_move()

    def __str__(self):
        s = f'{govars.color_name(self.color)} {self.move}'
        if self.captures:
            s += f' captures {self.captures}'
        if self.suicide:
            s += ' (suicide)'
        return s


class Goban:
    """
    Owns the grid of stones, the arena of groups and the history stacks used to
    undo merges (merged_groups) and captures (killed_groups), plus the garbage
    list of retired group slots waiting to be recycled.
    """

    def __init__(self, size=19):
        if not 2 <= size <= notation.MAX_SIZE:
            raise ValueError(f'Board size must be between 2 and {notation.MAX_SIZE}')
        self.size = size
        self.grid = [[Stone(self, i, j) for j in range(size)] for i in range(size)]
        for i in range(size):
            for j in range(size):
                self.grid[i][j].neighbors = [self.grid[i + di][j + dj]
                                             for di, dj in [(0, 1), (1, 0), (0, -1), (-1, 0)]
                                             if 0 <= i + di < size and 0 <= j + dj < size]
        self.off_board = Stone(self, -1, -1)
        self.groups = []
        self.garbage_groups = []
        self.merged_groups = HistoryLog(self.off_board)
        self.killed_groups = HistoryLog(self.off_board)
        self.moves = []
        self.prisoners = {govars.BLACK: 0, govars.WHITE: 0}

    @property
    def group_count(self):
        """
        Total number of group slots ever created (mostly for debug)
        """
        return len(self.groups)

    def clear(self):
        while self.moves:
            self.undo()

    def stone_at(self, i, j) -> Stone:
        if not (0 <= i < self.size and 0 <= j < self.size):
            raise ValueError(f'Invalid position: ({i}, {j})')
        return self.grid[i][j]

    def stone(self, coordinate) -> Stone:
        """
        :param coordinate: (i, j) or a move like 'h8'
        """
        if isinstance(coordinate, str):
            coords = notation.move_to_coords(coordinate, self.size)
            if coords is None:
                raise ValueError('A pass has no stone')
            return self.grid[coords[0]][coords[1]]
        return self.stone_at(*coordinate)

    def color_at(self, coordinate):
        return self.stone(coordinate).color

    def group_at(self, coordinate):
        return self.stone(coordinate).group

    def alive_groups(self):
        return [g for g in self.groups if g.is_alive()]

    def is_empty_board(self):
        return all(s.is_empty() for row in self.grid for s in row)

    def retire_group(self, group):
        self.garbage_groups.append(group.ndx)
        logger.debug('Group going to recycle bin: %s', group)

    def place(self, color, coordinate) -> MoveResult:
        stone = self.stone(coordinate)
        return self.play(color, stone.i, stone.j)

    def play(self, color, i, j) -> MoveResult:
        if color not in (govars.BLACK, govars.WHITE):
            raise ValueError(f'Invalid color: {color}')
        stone = self.stone_at(i, j)
        if not stone.is_empty():
            raise GobanInvariantError(f'{stone.as_move()} is already occupied')

        result = MoveResult(stone, color, merged_mark=len(self.merged_groups),
                            killed_mark=len(self.killed_groups))
        stone.color = color
        allies = stone.unique_allies(color)
        if not allies:
            group = Group.recycle_new(self, stone, len(stone.empties()))
            stone.group_id = group.ndx
        else:
            group = allies[0]
            stone.group_id = group.ndx
            group.connect_stone(stone)

        # Kill before merging so the merged subgroups get the right live-count
        for enemy in stone.unique_enemies(color):
            enemy.attacked_by(stone)
            if enemy.killed_by is stone:
                result.captures += len(enemy.stones)
        for ally in allies[1:]:
            group.merge(ally, stone)

        if group.lives == 0:
            result.suicide = True
            self.prisoners[govars.opponent(color)] += len(group.stones)
            group.die_from(stone)
        self.prisoners[color] += result.captures
        self.moves.append(result)
        logger.debug('Played %s', result)
        return result

    def undo(self, stone=None):
        """
        Takes back the last move; if given, stone must be the last stone played
        """
        if not self.moves:
            raise GobanInvariantError('Nothing to undo')
        result = self.moves[-1]
        if stone is not None and stone is not result.stone:
            raise GobanInvariantError(f'Undo of {stone} but last move was {result}')
        self.moves.pop()
        stone = result.stone

        if result.suicide:
            # The stone's own group comes back first, with the stone's point as its only life
            Group.resuscitate_from(stone, self, result.killed_mark)
            self.prisoners[govars.opponent(result.color)] -= len(stone.group.stones)
        group = stone.group
        group.unmerge_from(stone, result.merged_mark)
        group.disconnect_stone(stone, on_merge=result.suicide)
        for enemy in stone.unique_enemies(result.color):
            enemy.not_attacked_anymore(stone)
        stone.die()
        # Captured groups come back once their killer's point is vacated
        Group.resuscitate_from(stone, self, result.killed_mark)
        self.prisoners[result.color] -= result.captures
        logger.debug('Took back %s', result)

    def is_suicide(self, color, coordinate):
        stone = self.stone(coordinate)
        if not stone.is_empty():
            return False
        for s in stone.neighbors:
            if s.is_empty():
                return False
            if s.color == color and s.group.lives > 1:
                return False
            if s.color != color and s.group.lives == 1:
                return False
        return True

    def invalid_moves(self, color):
        """
        :return: (size, size) boolean array of occupied or suicide points for color
        """
        invalid = np.zeros((self.size, self.size), dtype=bool)
        for i in range(self.size):
            for j in range(self.size):
                invalid[i, j] = not self.grid[i][j].is_empty() or self.is_suicide(color, (i, j))
        return invalid

    def valid_moves(self, color):
        return [self.grid[i][j].as_move() for i, j in np.argwhere(~self.invalid_moves(color))]

    def assert_consistent(self):
        """
        Checks every alive group against a brute-force flood fill of the board.
        """
        planes = state_utils.board_planes(self)
        labels = state_utils.group_labels(planes)
        liberties = state_utils.liberty_map(planes)
        seen = set()
        for group in self.alive_groups():
            locs = {(s.i, s.j) for s in group.stones}
            stone = group.stones[0]
            label = labels[group.color][stone.i, stone.j]
            expected = {tuple(loc) for loc in np.argwhere(labels[group.color] == label)}
            if locs != expected or any(s.group is not group or s.color != group.color for s in group.stones):
                raise GobanInvariantError(f'Group stones drifted: {group}')
            if group.lives != liberties[stone.i, stone.j]:
                raise GobanInvariantError(
                    f'Lives drifted: {group} has {liberties[stone.i, stone.j]} liberties')
            seen |= locs
        occupied = {tuple(loc) for loc in np.argwhere(np.sum(planes, axis=0) > 0)}
        if seen != occupied:
            raise GobanInvariantError(f'Stones without an alive group: {sorted(occupied - seen)}')

    def __str__(self):
        lines = []
        for j in reversed(range(self.size)):
            row = ''.join(govars.COLOR_CHARS[self.grid[i][j].color] for i in range(self.size))
            lines.append(f'{j + 1:>2} {row}')
        lines.append('   ' + notation.COLUMNS[:self.size])
        return '\n'.join(lines)
