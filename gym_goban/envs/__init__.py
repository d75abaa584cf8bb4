from gym_goban.envs.goban_env import GobanEnv
