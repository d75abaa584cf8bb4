import unittest

from gym_goban.errors import GobanInvariantError
from gym_goban.goban import Goban
from gym_goban.history import SENTINEL_NDX, HistoryLog


class TestHistoryLog(unittest.TestCase):

    def setUp(self):
        self.goban = Goban(5)
        self.log = HistoryLog(self.goban.off_board)

    def test_empty_log(self):
        self.assertEqual(len(self.log), 0)
        self.assertEqual(self.log.peek().ndx, SENTINEL_NDX)
        self.assertIsNone(self.log.top_caused_by(self.goban.off_board))
        with self.assertRaises(GobanInvariantError):
            self.log.pop()

    def test_lifo(self):
        c3 = self.goban.stone('c3')
        d4 = self.goban.stone('d4')
        self.log.push(0, c3)
        self.log.push(1, c3)
        self.log.push(2, d4)
        self.assertEqual(len(self.log), 3)
        self.assertIsNone(self.log.top_caused_by(c3))
        self.assertEqual(self.log.top_caused_by(d4), (2, d4))
        self.assertEqual(self.log.pop().ndx, 2)
        self.assertEqual(self.log.top_caused_by(c3).ndx, 1)
        self.assertEqual([e.ndx for e in self.log], [0, 1])
        self.assertEqual(str(self.log), '[#0<-c3, #1<-c3]')

    def test_clear_keeps_sentinel(self):
        self.log.push(0, self.goban.stone('a1'))
        self.log.clear()
        self.assertEqual(len(self.log), 0)
        self.assertIs(self.log.peek(), self.log.sentinel)


if __name__ == '__main__':
    unittest.main()
