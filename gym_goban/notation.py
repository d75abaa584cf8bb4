"""
Move notation used by controllers: column letter + row number (e.g. `h8`),
or `pass`. Column `a` is i == 0, row `1` is j == 0.
"""

COLUMNS = 'abcdefghijklmnopqrstuvwxyz'
PASS = 'pass'
MAX_SIZE = 25


def coords_to_move(i, j):
    if i < 0 or j < 0 or i >= len(COLUMNS):
        raise ValueError(f'No move notation for ({i}, {j})')
    return f'{COLUMNS[i]}{j + 1}'


def move_to_coords(move: str, size: int):
    """
    :param move: `h8`, `pass`, case insensitive
    :param size: board size, used for bound checking
    :return: (i, j) or None for a pass
    """
    move = move.strip().lower()
    if move == PASS:
        return None
    if len(move) < 2 or move[0] not in COLUMNS or not move[1:].isdigit():
        raise ValueError(f'Invalid move notation: {move!r}')
    i = COLUMNS.index(move[0])
    j = int(move[1:]) - 1
    if not (0 <= i < size and 0 <= j < size):
        raise ValueError(f'Move {move} is off a {size}x{size} board')
    return i, j


def action_to_move(action1d, size):
    if action1d == size ** 2:
        return PASS
    return coords_to_move(action1d // size, action1d % size)


def move_to_action(move, size):
    coords = move_to_coords(move, size)
    if coords is None:
        return size ** 2
    return size * coords[0] + coords[1]


def parse_moves(moves):
    """
    Splits a comma separated list like "d4,i7,pass" into moves
    """
    return [m.strip() for m in moves.split(',') if m.strip()]
