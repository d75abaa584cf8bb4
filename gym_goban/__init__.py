from gym.envs.registration import register

register(
    id='goban-v0',
    entry_point='gym_goban.envs:GobanEnv',
)
