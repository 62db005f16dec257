import numbers
from collections import namedtuple

import numpy as np
from numba import njit

from .epidemic_state import EpidemicState
from .trajectory import Trajectory
from .utilities import make_random_generator

INFECTION = 'infection'
RECOVERY  = 'recovery'

Event = namedtuple("Event", ["kind", "node"])

@njit
def select_by_cumulative_rate(at_risk_nodes, infected_neighbors, transmission_rate, target):
    """
    Walk the cumulative infection rate of the at-risk nodes and return the
    first node whose cumulative rate exceeds `target`. If rounding leaves the
    final cumulative sum at or below `target`, the last candidate is returned.
    """
    cumulative_rate = 0.0

    for i in range(at_risk_nodes.size):
        node = at_risk_nodes[i]
        cumulative_rate += transmission_rate * infected_neighbors[node]
        if target < cumulative_rate:
            return node

    return at_risk_nodes[at_risk_nodes.size - 1]

def draw_waiting_time(total_rate, rng):
    """
    Draw the time to the next event, `Δt ~ Exp(total_rate)`, by inversion.
    """
    return -np.log(1.0 - rng.random()) / total_rate

def draw_event(state, rng):
    """
    Choose the class and the target of the next event with probability
    proportional to its rate.

    Args
    ----

    state (EpidemicState): the current state; must have a positive total rate.

    rng (numpy.random.Generator): the run's random source.

    Recovery occupies [0, total_recovery_rate) of the drawn range and infection
    the remainder. Every infected node recovers at the same rate, so the
    recovering node is uniform over the infected set.
    """
    ledger = state.ledger
    r = rng.random() * ledger.total_rate

    if r < ledger.total_recovery_rate or ledger.total_infection_rate <= 0:
        index = rng.integers(state.infected_count)
        return Event(RECOVERY, state.infected_node_at(index))

    at_risk_nodes, infected_neighbors = state.at_risk_arena()
    node = select_by_cumulative_rate(at_risk_nodes,
                                     infected_neighbors,
                                     ledger.transmission_rate,
                                     r - ledger.total_recovery_rate)

    return Event(INFECTION, int(node))

def apply_event(state, event):
    """
    Apply `event` to `state` and return the state.
    """
    if event.kind == INFECTION:
        return state.apply_infection(event.node)
    elif event.kind == RECOVERY:
        return state.apply_recovery(event.node)
    else:
        raise ValueError("apply_event: unknown event kind " + repr(event.kind))

def gillespie_step(state, time, horizon, rng):
    """
    Advance `state` by one event of the Gillespie algorithm.

    Args
    ----

    state (EpidemicState): the state to advance; it is mutated in place.

    time (float): the current simulation time.

    horizon (float): the time the run may not go beyond.

    rng (numpy.random.Generator): the run's random source.

    Returns (new_time, event) when an event was applied, or None when the
    total rate is zero or the next event would happen after `horizon`. In the
    latter case the state is left untouched.
    """
    total_rate = state.ledger.total_rate

    if total_rate <= 0:
        return None

    new_time = time + draw_waiting_time(total_rate, rng)

    if new_time > horizon:
        return None

    event = draw_event(state, rng)
    apply_event(state, event)

    return new_time, event

def check_horizon(horizon):
    if isinstance(horizon, bool) or not isinstance(horizon, numbers.Real):
        raise ValueError("run_simulation: horizon must be a real number, got "
                         + horizon.__class__.__name__)

    if not np.isfinite(horizon) or horizon <= 0:
        raise ValueError("run_simulation: horizon must be finite and positive, got "
                         + str(horizon))

    return float(horizon)

def run_simulation(contact_network,
                   transition_rates,
                   initial_infected,
                   horizon,
                   rng = None):
    """
    Simulate one realization of the contagion process.

    Args
    ----

    contact_network (ContactNetwork): the static contact network.

    transition_rates (TransitionRates): transmission and recovery rates.

    initial_infected (iterable of int): nodes infected at time 0.

    horizon (float): the maximum simulation time.

    rng (numpy.random.Generator, int or None): random source or seed.

    Returns the run's Trajectory, which starts with the state at time 0 and has
    one record per applied event. The run ends when the total rate is zero or
    the next event would fall after `horizon`.
    """
    trajectory, _ = simulate_until_done(contact_network,
                                        transition_rates,
                                        initial_infected,
                                        horizon,
                                        rng)
    return trajectory

def simulate_until_done(contact_network,
                        transition_rates,
                        initial_infected,
                        horizon,
                        rng = None):
    """
    Same as `run_simulation`, but also return the final EpidemicState.
    """
    horizon = check_horizon(horizon)
    state = EpidemicState.from_initial_infected(contact_network,
                                                transition_rates,
                                                initial_infected)
    rng = make_random_generator(rng)

    time = 0.0
    trajectory = Trajectory(state.node_count)
    trajectory.record(time, state.infected_count)

    while True:
        step = gillespie_step(state, time, horizon, rng)
        if step is None:
            break

        time, _ = step
        trajectory.record(time, state.infected_count)

    return trajectory, state


class KineticModel:
    """
    Kinetic Monte-Carlo (Gillespie) solver for a contagion on a fixed network.

    Every call to `simulate` starts from a fresh EpidemicState; nothing is
    carried over between calls except the read-only contact network and the
    rates.
    """
    def __init__(self,
                 contact_network,
                 transition_rates):
        """
        Args
        -----
        contact_network (ContactNetwork): The contact network

        transition_rates (TransitionRates): Transmission rate per infected
                                            neighbor and recovery rate per
                                            infected node
        """
        self.contact_network = contact_network
        self.transition_rates = transition_rates

        self.final_state = None

    def simulate(self, initial_infected, horizon, rng=None):
        """
        Runs the Gillespie solver on the contact network.

        Args
        ----

        initial_infected (iterable of int) : the initially infected nodes

        horizon (float) : the maximum simulation time

        rng (numpy.random.Generator, int or None) : random source or seed
        """
        trajectory, self.final_state = simulate_until_done(self.contact_network,
                                                           self.transition_rates,
                                                           initial_infected,
                                                           horizon,
                                                           rng)
        return trajectory
