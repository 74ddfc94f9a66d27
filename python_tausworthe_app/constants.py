# Limits of the generator family
MAX_REGISTER_WIDTH = 15
MAX_WINDOW_WIDTH = 15
MAX_PERIOD = 2 ** MAX_REGISTER_WIDTH - 1

# Default parameter sets (tap distance, register width, window width)
DEFAULT_PARAMS_1 = (9, 10, 15)
DEFAULT_PARAMS_2 = (3, 10, 15)
