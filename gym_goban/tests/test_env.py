import unittest

import gym
import numpy as np

from gym_goban import govars, rendering, state_utils
from gym_goban.envs import GobanEnv


class TestGobanEnv(unittest.TestCase):

    def setUp(self):
        self.env = GobanEnv(size=7, debug=True, render_mode='ansi')
        self.env.reset()

    def test_make(self):
        env = gym.make('gym_goban:goban-v0', size=7)
        state, info = env.reset()
        self.assertEqual(state.shape, (govars.NUM_CHNLS, 7, 7))
        self.assertEqual(np.count_nonzero(state), 0)
        self.assertEqual(info['turn'], govars.BLACK)

        state, reward, terminated, truncated, info = env.step((0, 0))
        # One black stone, white's turn everywhere and one invalid point
        self.assertEqual(np.count_nonzero(state), 51)
        self.assertEqual(reward, 0)
        self.assertFalse(terminated)
        self.assertFalse(truncated)
        self.assertEqual(info['last_move'], 'a1')
        env.close()

    def test_state_channels(self):
        state, _, _, _, _ = self.env.step('c3')
        self.assertEqual(state[govars.BLACK, 2, 2], 1)
        self.assertEqual(np.count_nonzero(state[govars.WHITE]), 0)
        self.assertTrue((state[govars.TURN_CHNL] == 1).all())
        self.assertEqual(state[govars.INVD_CHNL, 2, 2], 1)

        state, _, _, _, _ = self.env.step(None)
        self.assertTrue((state[govars.PASS_CHNL] == 1).all())
        self.assertTrue((state[govars.TURN_CHNL] == 0).all())
        self.assertEqual(np.count_nonzero(state[govars.DONE_CHNL]), 0)

    def test_actions(self):
        self.env.step(7 * 1 + 2)
        self.assertEqual(self.env.goban.color_at('b3'), govars.BLACK)
        self.env.step([3, 3])
        self.assertEqual(self.env.goban.color_at('d4'), govars.WHITE)
        self.env.step('e5')
        self.assertEqual(self.env.last_move(), 'e5')
        with self.assertRaises(Exception):
            self.env.step((7, 0))
        with self.assertRaises(Exception):
            self.env.step(50)

    def test_two_passes_end_game(self):
        self.env.step('pass')
        self.assertTrue(self.env.prev_player_passed())
        _, _, terminated, _, _ = self.env.step('pass')
        self.assertTrue(terminated)
        self.assertTrue(self.env.game_ended())
        self.assertEqual(np.count_nonzero(self.env.valid_moves()), 0)
        with self.assertRaises(Exception):
            self.env.step('d4')

    def test_invalid_moves_raise(self):
        self.env.load_moves('a2,pass,b1')
        with self.assertRaises(Exception):
            self.env.step('a2')
        # a1 is suicide for white
        with self.assertRaises(Exception):
            self.env.step('a1')
        self.assertEqual(self.env.invalid_moves()[0, 0], 1)
        self.assertTrue(self.env.goban.stone('a1').is_empty())
        self.assertEqual(self.env.turn, govars.WHITE)

    def test_rewards(self):
        self.env.load_moves('a1,a2,e5')
        _, reward, _, _, info = self.env.step('b1')
        self.assertEqual(reward, -1)
        self.assertEqual(info['prisoners'][govars.WHITE], 1)

        _, reward, _, _, _ = self.env.step('c1')
        self.assertEqual(reward, 0)
        # a1 is fine for white to fill, suicide for black
        self.assertEqual(self.env.invalid_moves()[0, 0], 0)
        self.assertTrue(self.env.goban.is_suicide(govars.BLACK, 'a1'))

    def test_black_capture_reward(self):
        self.env.load_moves('b1,a1')
        _, reward, _, _, _ = self.env.step('a2')
        self.assertEqual(reward, 1)
        self.assertTrue(self.env.goban.stone('a1').is_empty())

    def test_undo(self):
        self.env.load_moves('c3,pass,pass')
        self.assertTrue(self.env.game_ended())
        self.env.undo()
        self.assertFalse(self.env.game_ended())
        self.assertTrue(self.env.prev_player_passed())
        self.assertEqual(self.env.turn, govars.BLACK)
        self.env.undo()
        self.assertFalse(self.env.prev_player_passed())
        self.assertEqual(self.env.turn, govars.WHITE)
        self.env.undo()
        self.assertTrue(self.env.goban.is_empty_board())
        self.assertEqual(self.env.turn, govars.BLACK)
        with self.assertRaises(Exception):
            self.env.undo()

    def test_undo_restores_trailing_passes(self):
        self.env.load_moves('pass,c3')
        self.assertFalse(self.env.prev_player_passed())
        state = self.env.undo()
        self.assertTrue(self.env.prev_player_passed())
        self.assertTrue((state[govars.PASS_CHNL] == 1).all())
        self.assertEqual(self.env.last_move(), 'pass')

    def test_reset_clears_board(self):
        self.env.load_moves('a1,b1,c1')
        state, info = self.env.reset()
        self.assertEqual(np.count_nonzero(state), 0)
        self.assertTrue(self.env.goban.is_empty_board())
        self.assertIsNone(info['last_move'])
        self.assertEqual(info['prisoners'], {govars.BLACK: 0, govars.WHITE: 0})

    def test_random_games(self):
        np.random.seed(0)
        for _ in range(3):
            self.env.reset()
            for _ in range(200):
                if self.env.game_ended():
                    break
                action = self.env.uniform_random_action()
                self.assertEqual(self.env.valid_moves()[action], 1)
                self.env.step(action)
            while self.env.history:
                self.env.undo()
            self.assertTrue(self.env.goban.is_empty_board())

    def test_random_action_from_state(self):
        np.random.seed(1)
        state, _, _, _, _ = self.env.step('d4')
        for _ in range(20):
            action = state_utils.random_action(state)
            self.assertNotEqual(action, 3 * 7 + 3)
            self.assertTrue(0 <= action <= 49)

    def test_groups_str(self):
        self.env.load_moves('a1,b1,a2')
        self.assertEqual(rendering.groups_str(self.env.goban),
                         '{group #0 of 2 black stones [a1,a2], lives:2}\n'
                         '{group #1 of 1 white stones [b1], lives:2}')

    def test_render(self):
        self.env.load_moves('a1,pass')
        out = self.env.render()
        self.assertIn('Turn: BLACK', out)
        self.assertIn('PASSED', out)
        self.assertIn('Black Prisoners: 0', out)
        self.assertIn('○', out)


if __name__ == '__main__':
    unittest.main()
