import numpy as np
from scipy import ndimage
from sklearn import preprocessing

from gym_goban import govars

surround_struct = np.array([[0, 1, 0],
                            [1, 0, 1],
                            [0, 1, 0]])


def board_planes(goban):
    """
    :return: (2, SIZE, SIZE) array, black stones in channel BLACK and white ones in channel WHITE
    """
    planes = np.zeros((2, goban.size, goban.size))
    for row in goban.grid:
        for stone in row:
            if not stone.is_empty():
                planes[stone.color, stone.i, stone.j] = 1
    return planes


def group_labels(planes):
    """
    Flood fill of each color, recomputed from scratch
    :return: (2, SIZE, SIZE) int array, 0 for no group
    """
    labels = np.zeros(planes.shape, dtype=int)
    for player in [govars.BLACK, govars.WHITE]:
        labels[player], _ = ndimage.label(planes[player])
    return labels


def liberty_map(planes):
    """
    :return: (SIZE, SIZE) array holding, on every stone, the number of distinct
    empty points adjacent to its group
    """
    empties = 1 - np.sum(planes, axis=0)
    libs = np.zeros(planes.shape[1:], dtype=int)
    labels = group_labels(planes)
    for player in [govars.BLACK, govars.WHITE]:
        for label in range(1, labels[player].max() + 1):
            group = labels[player] == label
            liberties = empties * ndimage.binary_dilation(group, surround_struct)
            libs[group] = np.count_nonzero(liberties)
    return libs


def compute_invalid_moves(planes, player):
    """
    Moves `player` cannot make (no ko rule):
    1.) Occupied locations
    2.) Surrounded locations where player cannot kill and where every adjacent
        group of player's has only this liberty left
    """
    all_pieces = np.sum(planes[[govars.BLACK, govars.WHITE]], axis=0)
    empties = 1 - all_pieces

    possible_invalid_array = np.zeros(planes.shape[1:])
    definite_valids_array = np.zeros(planes.shape[1:])

    labels = group_labels(planes)
    for owner in [govars.BLACK, govars.WHITE]:
        for label in range(1, labels[owner].max() + 1):
            group = labels[owner] == label
            liberties = empties * ndimage.binary_dilation(group, surround_struct)
            single = np.count_nonzero(liberties) == 1
            # Filling the last liberty of our group or attacking a healthy enemy group
            # may be suicide; the opposite cases are always fine
            if (owner == player) == single:
                possible_invalid_array += liberties
            else:
                definite_valids_array += liberties

    surrounded = ndimage.convolve(all_pieces, surround_struct, mode='constant', cval=1) == 4
    invalid_moves = all_pieces + possible_invalid_array * (definite_valids_array == 0) * surrounded
    return invalid_moves > 0


def random_weighted_action(move_weights):
    """
    Assumes all invalid moves have weight 0
    Action is 1D
    Expected shape is (NUM OF MOVES, )
    """
    move_weights = preprocessing.normalize(move_weights[np.newaxis], norm='l1')
    return np.random.choice(np.arange(len(move_weights[0])), p=move_weights[0])


def random_action(state):
    """
    Assumed to be (NUM_CHNLS, BOARD_SIZE, BOARD_SIZE)
    Action is 1D
    """
    invalid_moves = state[govars.INVD_CHNL].flatten()
    invalid_moves = np.append(invalid_moves, 0)
    move_weights = 1 - invalid_moves

    return random_weighted_action(move_weights)
