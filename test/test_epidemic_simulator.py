import networkx as nx
import numpy as np

from epispread import ContactNetwork, TransitionRates, EpidemicSimulator

def make_simulator(verbose):
    network = ContactNetwork.from_networkx_graph(nx.random_regular_graph(4, 60, seed=2))
    return EpidemicSimulator(network, TransitionRates(0.6, 0.2), verbose=verbose)

def test_run_prints_status_report(capsys):
    simulator = make_simulator(verbose=True)

    trajectory = simulator.run([0, 1], 5.0, rng=4)
    output = capsys.readouterr().out

    assert "[ Status report ]" in output
    assert "Kinetic simulation" in output
    assert "Infected: {:d}".format(trajectory[-1].infected) in output

def test_quiet_run_prints_nothing(capsys):
    simulator = make_simulator(verbose=False)

    simulator.run([0, 1], 5.0, rng=4)

    assert capsys.readouterr().out == ""

def test_realizations_are_independent_and_reproducible():
    simulator = make_simulator(verbose=False)

    first = simulator.run_realizations([0], 5.0, n_realizations=4, seed=123)
    second = simulator.run_realizations([0], 5.0, n_realizations=4, seed=123)

    assert len(first) == 4
    assert all(np.array_equal(a.times, b.times) for a, b in zip(first, second))
    assert len({tuple(trajectory.times.tolist()) for trajectory in first}) == 4

def test_extinction_warning(capsys):
    network = ContactNetwork.from_edges([(0, 1)])
    simulator = EpidemicSimulator(network, TransitionRates(0.0, 1.0))

    simulator.run([0], 1e6, rng=0)

    assert "went extinct" in capsys.readouterr().out
