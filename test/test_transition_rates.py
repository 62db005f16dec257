import numpy as np
import pytest

from epispread import TransitionRates

def test_rates_are_stored_as_floats():
    transition_rates = TransitionRates(transmission_rate=1, recovery_rate=np.float32(0.5))

    assert transition_rates.transmission_rate == 1.0
    assert transition_rates.recovery_rate == 0.5
    assert isinstance(transition_rates.recovery_rate, float)

def test_zero_rates_are_allowed():
    transition_rates = TransitionRates(transmission_rate=0.0, recovery_rate=0.0)

    assert transition_rates.transmission_rate == 0.0
    assert transition_rates.recovery_rate == 0.0

@pytest.mark.parametrize("rate", [-0.1, np.nan, np.inf, "0.3", None, True])
def test_invalid_transmission_rate(rate):
    with pytest.raises(ValueError, match="TransitionRates"):
        TransitionRates(transmission_rate=rate, recovery_rate=0.1)

@pytest.mark.parametrize("rate", [-1, -np.inf, [0.1]])
def test_invalid_recovery_rate(rate):
    with pytest.raises(ValueError, match="recovery_rate"):
        TransitionRates(transmission_rate=0.1, recovery_rate=rate)
