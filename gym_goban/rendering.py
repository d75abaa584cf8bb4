from gym_goban import govars, notation


def board_str(goban, turn=None, game_state=None):
    """
    Box drawing of the board, columns labelled with letters and rows with
    numbers (row 1 at the bottom), like the move notation.
    """
    board_str = ''

    size = goban.size
    for j in reversed(range(size)):
        board_str += '{}\t'.format(j + 1)
        for i in range(size):
            color = goban.grid[i][j].color
            if color != govars.EMPTY:
                board_str += '○' if color == govars.BLACK else '●'
                if i != size - 1:
                    if j == 0 or j == size - 1:
                        board_str += '═'
                    else:
                        board_str += '─'
            else:
                if j == size - 1:
                    if i == 0:
                        board_str += '╔═'
                    elif i == size - 1:
                        board_str += '╗'
                    else:
                        board_str += '╤═'
                elif j == 0:
                    if i == 0:
                        board_str += '╚═'
                    elif i == size - 1:
                        board_str += '╝'
                    else:
                        board_str += '╧═'
                else:
                    if i == 0:
                        board_str += '╟─'
                    elif i == size - 1:
                        board_str += '╢'
                    else:
                        board_str += '┼─'
        board_str += '\n'
    board_str += '\t'
    for i in range(size):
        board_str += notation.COLUMNS[i].ljust(2, ' ')
    board_str += '\n'

    if turn is not None:
        board_str += '\tTurn: {}, Game State (ONGOING|PASSED|END): {}\n'.format(
            govars.color_name(turn).upper(), game_state or 'ONGOING')
    board_str += '\tBlack Prisoners: {}, White Prisoners: {}\n'.format(goban.prisoners[govars.BLACK],
                                                                        goban.prisoners[govars.WHITE])
    return board_str


def groups_str(goban):
    """
    One line per alive group, for debugging
    """
    return '\n'.join(str(group) for group in goban.alive_groups())
