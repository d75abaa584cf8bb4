import argparse
import logging

import gym

# Arguments
parser = argparse.ArgumentParser(description='Demo Goban Environment')
parser.add_argument('--boardsize', type=int, default=7)
parser.add_argument('--debug', action='store_true', help='check the board structure after every step')
args = parser.parse_args()

logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)

# Initialize environment
goban_env = gym.make('gym_goban:goban-v0', size=args.boardsize, debug=args.debug, render_mode='human')
goban_env.reset()
env = goban_env.unwrapped

# Game loop: moves like "c3", "pass", or "undo" to take back the last two steps
done = False
while not done:
    env.render()
    move = input('Your move: ').strip()
    if move == 'undo':
        if len(env.history) >= 2:
            env.undo()
            env.undo()
        continue
    try:
        state, reward, done, truncated, info = goban_env.step(move)
    except Exception as e:
        print(e)
        continue

    if env.game_ended():
        break
    action = env.uniform_random_action()
    state, reward, done, truncated, info = goban_env.step(action)
env.render()
