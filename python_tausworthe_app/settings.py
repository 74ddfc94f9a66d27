from constants import DEFAULT_PARAMS_1, DEFAULT_PARAMS_2
from enums import ZeroPolicy
from parameters import GeneratorParameters


class Settings:
    def __init__(self):
        self._params_1 = GeneratorParameters.from_tuple(DEFAULT_PARAMS_1)
        self._params_2 = GeneratorParameters.from_tuple(DEFAULT_PARAMS_2)
        self._i_count = None
        self._b_normal = False
        self._zero_policy = ZeroPolicy.RAISE
        self._d_alpha = 0.05
        self._i_bins = 10
        self._i_lag = 1
        self._i_threads = 1
        self._b_validate = True

    def set_params_1(self, params):
        self._params_1 = params

    def get_params_1(self):
        return self._params_1

    def set_params_2(self, params):
        self._params_2 = params

    def get_params_2(self):
        return self._params_2

    def set_count(self, i_count):
        self._i_count = i_count

    def get_count(self):
        return self._i_count

    def set_normal(self, b_is_need_normal):
        self._b_normal = b_is_need_normal

    def is_normal(self):
        return self._b_normal

    def set_zero_policy(self, e_zero_policy):
        self._zero_policy = e_zero_policy

    def get_zero_policy(self):
        return self._zero_policy

    def set_alpha(self, d_alpha):
        self._d_alpha = d_alpha

    def get_alpha(self):
        return self._d_alpha

    def set_bins(self, i_bins):
        self._i_bins = i_bins

    def get_bins(self):
        return self._i_bins

    def set_lag(self, i_lag):
        self._i_lag = i_lag

    def get_lag(self):
        return self._i_lag

    def set_threads(self, i_threads):
        self._i_threads = i_threads

    def get_threads(self):
        return self._i_threads

    def set_validate(self, b_is_need_validate):
        self._b_validate = b_is_need_validate

    def is_validate(self):
        return self._b_validate

    def get_param_sets(self):
        """Parameter sets of all uniform streams the run needs."""
        if self._b_normal:
            return [self._params_1, self._params_2]
        return [self._params_1]

    def print(self):
        print(f"Generator 1: {self._params_1.label()}")
        if self._b_normal:
            print(f"Generator 2: {self._params_2.label()}")
            print(f"Zero policy: {self._zero_policy.value}")
        if self._i_count is None:
            print("Deviates: all complete windows")
        else:
            print(f"Deviates: {self._i_count}")
        print(f"Significance level: {self._d_alpha}")
        print(f"Chi-square bins: {self._i_bins}")
        print(f"Threads: {self._i_threads}")
