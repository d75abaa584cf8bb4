import time
import unittest

import gym
import numpy as np
from tqdm import tqdm

from gym_goban import govars
from gym_goban.goban import Goban


class Efficiency(unittest.TestCase):
    boardsize = 9
    iterations = 64

    def setUp(self) -> None:
        self.env = gym.make('gym_goban:goban-v0', size=self.boardsize)

    def testRandTrajs(self):
        durs = []
        num_steps = []
        for _ in tqdm(range(self.iterations)):
            start = time.time()
            self.env.reset()

            max_steps = 2 * self.boardsize ** 2
            s = 0
            for s in range(max_steps):
                valid_moves = self.env.valid_moves()
                # Do not pass if possible
                if np.sum(valid_moves) > 1:
                    valid_moves[-1] = 0
                probs = valid_moves / np.sum(valid_moves)
                a = np.random.choice(np.arange(self.boardsize ** 2 + 1), p=probs)
                _, _, terminated, _, _ = self.env.step(a)
                if terminated:
                    break
            num_steps.append(s)

            end = time.time()

            dur = end - start
            durs.append(dur)

        avg_time = np.mean(durs)
        std_time = np.std(durs)
        avg_steps = np.mean(num_steps)
        print(f"Rand Trajs: {avg_time:.3f} AVG SEC, {std_time:.3f} STD SEC, {avg_steps:.1f} AVG STEPS", flush=True)

    def testPlayUndo(self):
        durs = []
        goban = Goban(self.boardsize)
        for _ in tqdm(range(self.iterations)):
            start = time.time()
            for s in range(self.boardsize ** 2):
                color = govars.BLACK if s % 2 == 0 else govars.WHITE
                empties = [(stone.i, stone.j) for row in goban.grid for stone in row if stone.is_empty()]
                if not empties:
                    break
                goban.play(color, *empties[np.random.randint(len(empties))])
            goban.clear()
            end = time.time()

            dur = end - start
            durs.append(dur)

        avg_time = np.mean(durs)
        std_time = np.std(durs)
        print(f"Play and undo: {avg_time:.3f} AVG, {std_time:.3f} STD", flush=True)


if __name__ == '__main__':
    unittest.main()
