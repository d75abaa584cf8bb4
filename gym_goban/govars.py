EMPTY = -1

BLACK = 0
WHITE = 1
TURN_CHNL = 2
INVD_CHNL = 3
PASS_CHNL = 4
DONE_CHNL = 5

NUM_CHNLS = 6

COLOR_NAMES = {EMPTY: 'empty', BLACK: 'black', WHITE: 'white'}
COLOR_CHARS = {EMPTY: '+', BLACK: '@', WHITE: 'O'}


def opponent(color):
    return 1 - color


def color_name(color):
    return COLOR_NAMES[color]
