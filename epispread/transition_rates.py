import numbers

import numpy as np

class TransitionRates:
    """
    Container for the two rate constants of the contagion process.

    Args
    ----

    transmission_rate (float): Rate at which a single infected neighbor infects a
                               non-infected node (often referred to as tau).

    recovery_rate (float): Rate at which an infected node recovers (gamma).

    The infection rate of a node is transmission_rate times its number of
    infected neighbors; there is no other rate model.
    """
    def __init__(self, transmission_rate, recovery_rate):

        self.transmission_rate = self.__check_rate(transmission_rate, 'transmission_rate')
        self.recovery_rate     = self.__check_rate(recovery_rate, 'recovery_rate')

    def __check_rate(self, rate, name):
        if isinstance(rate, bool) or not isinstance(rate, numbers.Real):
            raise ValueError(
                    self.__class__.__name__
                    + ": " + name + " must be a real number, got "
                    + rate.__class__.__name__)

        rate = float(rate)
        if not np.isfinite(rate) or rate < 0:
            raise ValueError(
                    self.__class__.__name__
                    + ": " + name + " must be finite and non-negative, got "
                    + str(rate))

        return rate

    def __repr__(self):
        return "{}(transmission_rate={}, recovery_rate={})".format(
                self.__class__.__name__, self.transmission_rate, self.recovery_rate)
