import logging

import gym
import numpy as np

from gym_goban import govars, notation, rendering, state_utils
from gym_goban.goban import Goban

logger = logging.getLogger(__name__)


class GobanEnv(gym.Env):
    metadata = {'render_modes': ['ansi', 'human']}
    govars = govars

    def __init__(self, size, debug=False, render_mode=None):
        '''
        @param debug: check the whole board structure against a brute force
            recomputation after every step and undo
        '''
        self.size = size
        self.debug = debug
        self.render_mode = render_mode
        self.goban = Goban(size)
        # One entry per step: the move result, or None for a pass
        self.history = []
        self.turn = govars.BLACK
        self.passes = 0
        self.observation_space = gym.spaces.Box(np.float32(0), np.float32(1),
                                                shape=(govars.NUM_CHNLS, size, size), dtype=np.float32)
        self.action_space = gym.spaces.Discrete(size ** 2 + 1)

    def reset(self, seed=None, options=None):
        '''
        Reset goban, turn and passes, return state and info
        '''
        super().reset(seed=seed)
        self.goban.clear()
        self.history = []
        self.turn = govars.BLACK
        self.passes = 0
        return self.state(), self.info()

    def to_action1d(self, action):
        if isinstance(action, str):
            return notation.move_to_action(action, self.size)
        if isinstance(action, (tuple, list, np.ndarray)):
            if not (0 <= action[0] < self.size and 0 <= action[1] < self.size):
                raise Exception('Not within bounds: {}'.format(action))
            return self.size * action[0] + action[1]
        if action is None:
            return self.size ** 2
        return int(action)

    def step(self, action):
        '''
        Assumes the correct player is making a move. Black goes first.
        return observation, reward, terminated, truncated, info
        '''
        if self.game_ended():
            raise Exception('Attempt to step at {} after game is over'.format(action))
        action1d = self.to_action1d(action)
        if not 0 <= action1d <= self.size ** 2:
            raise Exception('Not within bounds: {}'.format(action))

        reward = 0.0
        if action1d == self.size ** 2:
            self.passes += 1
            self.history.append(None)
        else:
            i, j = divmod(action1d, self.size)
            if self.invalid_moves()[i, j]:
                raise Exception('Invalid move: {}'.format(notation.coords_to_move(i, j)))
            result = self.goban.play(self.turn, i, j)
            self.history.append(result)
            self.passes = 0
            reward = float(result.captures if self.turn == govars.BLACK else -result.captures)
        logger.debug('Step %s by %s', notation.action_to_move(action1d, self.size), govars.color_name(self.turn))

        self.turn = govars.opponent(self.turn)
        if self.debug:
            self.goban.assert_consistent()
            logger.debug('Groups:\n%s', rendering.groups_str(self.goban))
        return self.state(), reward, self.game_ended(), False, self.info()

    def undo(self):
        '''
        Takes back the last step (move or pass)
        '''
        if not self.history:
            raise Exception('Nothing to undo')
        result = self.history.pop()
        if result is None:
            self.passes -= 1
        else:
            self.goban.undo(result.stone)
            self.passes = 0
            # Count the passes made right before the move we took back
            for step in reversed(self.history):
                if step is not None:
                    break
                self.passes += 1
        self.turn = govars.opponent(self.turn)
        if self.debug:
            self.goban.assert_consistent()
        return self.state()

    def load_moves(self, moves):
        '''
        Plays a comma separated list of moves like "d4,i7,pass"
        '''
        for move in notation.parse_moves(moves):
            self.step(move)

    def game_ended(self):
        return self.passes >= 2

    def prev_player_passed(self):
        return self.passes >= 1

    def invalid_moves(self):
        return self.goban.invalid_moves(self.turn)

    def valid_moves(self):
        # The last action (pass) is always valid
        if self.game_ended():
            return np.zeros(self.size ** 2 + 1)
        return np.append(1 - self.invalid_moves().flatten(), 1)

    def uniform_random_action(self):
        return state_utils.random_weighted_action(self.valid_moves())

    def state(self):
        state = np.zeros((govars.NUM_CHNLS, self.size, self.size), dtype=np.float32)
        state[[govars.BLACK, govars.WHITE]] = state_utils.board_planes(self.goban)
        state[govars.TURN_CHNL] = self.turn
        state[govars.INVD_CHNL] = self.invalid_moves()
        state[govars.PASS_CHNL] = self.prev_player_passed()
        state[govars.DONE_CHNL] = self.game_ended()
        return state

    def info(self):
        """
        :return: Debugging info for the state
        """
        return {
            'turn': self.turn,
            'prisoners': dict(self.goban.prisoners),
            'last_move': self.last_move(),
        }

    def last_move(self):
        if not self.history:
            return None
        result = self.history[-1]
        return notation.PASS if result is None else result.move

    def __str__(self):
        if self.game_ended():
            game_state = 'END'
        elif self.prev_player_passed():
            game_state = 'PASSED'
        else:
            game_state = 'ONGOING'
        return rendering.board_str(self.goban, self.turn, game_state)

    def render(self):
        if self.render_mode == 'human':
            print(self.__str__())
        else:
            return self.__str__()
