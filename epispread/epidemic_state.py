import numpy as np
from numba import njit

from .contact_network import ContactNetwork
from .transition_rates import TransitionRates

#
# Kernels operating on the raw state arrays. `indptr` and `indices` describe
# the contact network in compressed sparse row form.
#
# The infected and at-risk sets are both stored as arenas: a dense prefix
# `nodes[:size]` plus `positions[node]`, the index of `node` in the prefix
# (-1 for non-members). Removal swaps the last member into the hole.
#

@njit
def count_infected_neighbors(indptr, indices, infected):
    """
    Count the infected neighbors of every node. This is the only full scan
    over the network.
    """
    node_count = indptr.size - 1
    counts = np.zeros(node_count, dtype=np.int64)

    for node in range(node_count):
        for k in range(indptr[node], indptr[node + 1]):
            if infected[indices[k]]:
                counts[node] += 1

    return counts

@njit
def arena_add(nodes, positions, size, node):
    positions[node] = size
    nodes[size] = node
    return size + 1

@njit
def arena_remove(nodes, positions, size, node):
    hole = positions[node]
    last = nodes[size - 1]

    nodes[hole] = last
    positions[last] = hole
    positions[node] = -1

    return size - 1

@njit
def build_arenas(infected,
                 infected_neighbors,
                 infected_nodes,
                 infected_positions,
                 at_risk_nodes,
                 at_risk_positions):
    """
    Fill both arenas from the infected mask and the neighbor counts.
    Returns (n_infected, n_at_risk, infection_pressure).
    """
    n_infected = 0
    n_at_risk = 0
    infection_pressure = 0

    for node in range(infected.size):
        if infected[node]:
            n_infected = arena_add(infected_nodes, infected_positions, n_infected, node)
        elif infected_neighbors[node] > 0:
            n_at_risk = arena_add(at_risk_nodes, at_risk_positions, n_at_risk, node)
            infection_pressure += infected_neighbors[node]

    return n_infected, n_at_risk, infection_pressure

@njit
def infect_node(indptr,
                indices,
                node,
                infected,
                infected_neighbors,
                infected_nodes,
                infected_positions,
                n_infected,
                at_risk_nodes,
                at_risk_positions,
                n_at_risk,
                infection_pressure):
    """
    Move `node` into the infected set and raise the infection pressure on
    each of its neighbors by one. Returns the updated
    (n_infected, n_at_risk, infection_pressure).
    """
    if at_risk_positions[node] >= 0:
        n_at_risk = arena_remove(at_risk_nodes, at_risk_positions, n_at_risk, node)
        infection_pressure -= infected_neighbors[node]

    infected[node] = True
    n_infected = arena_add(infected_nodes, infected_positions, n_infected, node)

    for k in range(indptr[node], indptr[node + 1]):
        neighbor = indices[k]
        infected_neighbors[neighbor] += 1

        if not infected[neighbor]:
            if at_risk_positions[neighbor] < 0:
                n_at_risk = arena_add(at_risk_nodes, at_risk_positions, n_at_risk, neighbor)
            infection_pressure += 1

    return n_infected, n_at_risk, infection_pressure

@njit
def recover_node(indptr,
                 indices,
                 node,
                 infected,
                 infected_neighbors,
                 infected_nodes,
                 infected_positions,
                 n_infected,
                 at_risk_nodes,
                 at_risk_positions,
                 n_at_risk,
                 infection_pressure):
    """
    Remove `node` from the infected set and lower the infection pressure on
    each of its neighbors by one. The recovered node is susceptible again and
    is at risk at once if any of its neighbors are still infected. Returns
    the updated (n_infected, n_at_risk, infection_pressure).
    """
    infected[node] = False
    n_infected = arena_remove(infected_nodes, infected_positions, n_infected, node)

    for k in range(indptr[node], indptr[node + 1]):
        neighbor = indices[k]
        infected_neighbors[neighbor] -= 1

        if not infected[neighbor]:
            infection_pressure -= 1
            if infected_neighbors[neighbor] == 0:
                n_at_risk = arena_remove(at_risk_nodes, at_risk_positions, n_at_risk, neighbor)

    if infected_neighbors[node] > 0:
        n_at_risk = arena_add(at_risk_nodes, at_risk_positions, n_at_risk, node)
        infection_pressure += infected_neighbors[node]

    return n_infected, n_at_risk, infection_pressure


class RateLedger:
    """
    Aggregate event rates of one run.

    The ledger keeps two running integers, the number of infected nodes and
    the infection pressure (the sum of infected-neighbor counts over all
    at-risk nodes), and derives the three totals from them:

        total_infection_rate = transmission_rate * infection_pressure
        total_recovery_rate  = recovery_rate * infected_count
        total_rate           = total_infection_rate + total_recovery_rate
    """
    def __init__(self, transmission_rate, recovery_rate, infected_count=0, infection_pressure=0):
        self.transmission_rate = transmission_rate
        self.recovery_rate = recovery_rate
        self.infected_count = infected_count
        self.infection_pressure = infection_pressure

    def update(self, infected_count, infection_pressure):
        self.infected_count = int(infected_count)
        self.infection_pressure = int(infection_pressure)

    @property
    def total_infection_rate(self):
        return self.transmission_rate * self.infection_pressure

    @property
    def total_recovery_rate(self):
        return self.recovery_rate * self.infected_count

    @property
    def total_rate(self):
        return self.total_infection_rate + self.total_recovery_rate

    @classmethod
    def recompute(cls, state):
        """
        Rebuild the ledger of `state` from scratch, counting infected
        neighbors by a full scan instead of using any cached value.

        Input:
            state (EpidemicState): state to audit

        Output:
            ledger (RateLedger): a freshly computed ledger
        """
        network = state.contact_network
        infected = state.infected_mask()
        counts = count_infected_neighbors(network.indptr, network.indices, infected)

        at_risk = ~infected & (counts > 0)

        return cls(state.ledger.transmission_rate,
                   state.ledger.recovery_rate,
                   infected_count = int(np.count_nonzero(infected)),
                   infection_pressure = int(counts[at_risk].sum()))

    def __repr__(self):
        return "{}(total_infection_rate={}, total_recovery_rate={})".format(
                self.__class__.__name__, self.total_infection_rate, self.total_recovery_rate)


class EpidemicState:
    """
    Infection state of one simulation run: which nodes are infected, which
    non-infected nodes have at least one infected neighbor (at risk), and the
    rate ledger that goes with them.

    A state is owned by exactly one run. The contact network it refers to is
    only read.
    """

    @classmethod
    def from_initial_infected(
            cls,
            contact_network,
            transition_rates,
            initial_infected):
        """
        Build the state of a run at time zero

        Input:
            contact_network (ContactNetwork): the static contact network
            transition_rates (TransitionRates): transmission and recovery rates
            initial_infected (iterable of int): initially infected nodes;
                                                duplicates collapse

        Output:
            state (EpidemicState): initialized state
        """
        if not isinstance(contact_network, ContactNetwork):
            raise ValueError(
                    cls.__name__
                    + ": expected a ContactNetwork, got "
                    + contact_network.__class__.__name__)

        if not isinstance(transition_rates, TransitionRates):
            raise ValueError(
                    cls.__name__
                    + ": expected TransitionRates, got "
                    + transition_rates.__class__.__name__)

        node_count = contact_network.get_node_count()
        initial_infected = cls.__check_initial_infected(initial_infected, node_count)

        infected = np.zeros(node_count, dtype=np.bool_)
        infected[initial_infected] = True

        return cls(contact_network, transition_rates, infected)

    @classmethod
    def __check_initial_infected(cls, initial_infected, node_count):
        try:
            nodes = np.asarray(list(initial_infected))
        except (TypeError, ValueError):
            raise ValueError(
                    cls.__name__
                    + ": initial infected nodes must be an iterable of integer labels, got "
                    + initial_infected.__class__.__name__)

        if nodes.size == 0:
            raise ValueError(
                    cls.__name__
                    + ": the initial infected set is empty")

        if nodes.ndim != 1 or not np.issubdtype(nodes.dtype, np.integer):
            raise ValueError(
                    cls.__name__
                    + ": initial infected nodes must be integer labels")

        if nodes.min() < 0 or nodes.max() >= node_count:
            raise ValueError(
                    cls.__name__
                    + ": initial infected nodes must lie in 0.."
                    + str(node_count - 1))

        return np.unique(nodes)

    def __init__(
            self,
            contact_network,
            transition_rates,
            infected):
        """
        Constructor

        Input:
            contact_network (ContactNetwork): the static contact network
            transition_rates (TransitionRates): transmission and recovery rates
            infected (np.array): (n_nodes,) boolean mask of infected nodes
        """
        self.contact_network = contact_network

        node_count = contact_network.get_node_count()
        self.__infected = np.array(infected, dtype=np.bool_)
        self.__infected_neighbors = count_infected_neighbors(contact_network.indptr,
                                                             contact_network.indices,
                                                             self.__infected)

        self.__infected_nodes     = np.zeros(node_count, dtype=np.int64)
        self.__infected_positions = np.full(node_count, -1, dtype=np.int64)
        self.__at_risk_nodes      = np.zeros(node_count, dtype=np.int64)
        self.__at_risk_positions  = np.full(node_count, -1, dtype=np.int64)

        n_infected, n_at_risk, infection_pressure = build_arenas(self.__infected,
                                                                 self.__infected_neighbors,
                                                                 self.__infected_nodes,
                                                                 self.__infected_positions,
                                                                 self.__at_risk_nodes,
                                                                 self.__at_risk_positions)
        self.__n_at_risk = n_at_risk

        self.ledger = RateLedger(transition_rates.transmission_rate,
                                 transition_rates.recovery_rate,
                                 infected_count = int(n_infected),
                                 infection_pressure = int(infection_pressure))

    @property
    def node_count(self):
        return self.__infected.size

    @property
    def infected_count(self):
        return self.ledger.infected_count

    @property
    def susceptible_count(self):
        return self.node_count - self.infected_count

    @property
    def at_risk_count(self):
        return self.__n_at_risk

    def infected_mask(self):
        """
        Output:
            infected (np.array): (n_nodes,) copy of the boolean infected mask
        """
        return self.__infected.copy()

    def infected_nodes(self):
        """
        Output:
            infected_nodes (set): labels of the infected nodes
        """
        return set(self.__infected_nodes[:self.infected_count].tolist())

    def at_risk_nodes(self):
        """
        Output:
            at_risk_nodes (set): labels of the at-risk nodes
        """
        return set(self.__at_risk_nodes[:self.__n_at_risk].tolist())

    def is_infected(self, node):
        return bool(self.__infected[node])

    def is_at_risk(self, node):
        return bool(self.__at_risk_positions[node] >= 0)

    def infected_neighbor_count(self, node):
        return int(self.__infected_neighbors[node])

    def infection_rate_of(self, node):
        """
        Get the cached infection rate of an at-risk node

        Input:
            node (int): an at-risk node

        Output:
            rate (float): transmission rate times the number of infected neighbors;
                          0 for every at-risk node when the transmission rate is 0
        """
        if not self.is_at_risk(node):
            raise ValueError(
                    self.__class__.__name__
                    + ": node " + str(node) + " is not at risk")

        return self.ledger.transmission_rate * self.__infected_neighbors[node]

    def infected_node_at(self, index):
        """Return the infected node stored at `index` of the infected arena."""
        return int(self.__infected_nodes[index])

    def at_risk_arena(self):
        """
        Read-only view of the at-risk arena, for weighted selection

        Output:
            at_risk_nodes (np.array): (n_at_risk,) at-risk node labels
            infected_neighbors (np.array): (n_nodes,) infected-neighbor counts
        """
        nodes = self.__at_risk_nodes[:self.__n_at_risk]
        counts = self.__infected_neighbors
        nodes.flags.writeable = False
        return nodes, counts

    def apply_infection(self, node):
        """
        Infect `node`; O(degree(node)).
        """
        if self.__infected[node]:
            raise ValueError(
                    self.__class__.__name__
                    + ": node " + str(node) + " is already infected")

        network = self.contact_network
        n_infected, self.__n_at_risk, infection_pressure = infect_node(network.indptr,
                                                                       network.indices,
                                                                       node,
                                                                       self.__infected,
                                                                       self.__infected_neighbors,
                                                                       self.__infected_nodes,
                                                                       self.__infected_positions,
                                                                       self.ledger.infected_count,
                                                                       self.__at_risk_nodes,
                                                                       self.__at_risk_positions,
                                                                       self.__n_at_risk,
                                                                       self.ledger.infection_pressure)
        self.ledger.update(n_infected, infection_pressure)

        return self

    def apply_recovery(self, node):
        """
        Recover `node`; O(degree(node)).
        """
        if not self.__infected[node]:
            raise ValueError(
                    self.__class__.__name__
                    + ": node " + str(node) + " is not infected")

        network = self.contact_network
        n_infected, self.__n_at_risk, infection_pressure = recover_node(network.indptr,
                                                                        network.indices,
                                                                        node,
                                                                        self.__infected,
                                                                        self.__infected_neighbors,
                                                                        self.__infected_nodes,
                                                                        self.__infected_positions,
                                                                        self.ledger.infected_count,
                                                                        self.__at_risk_nodes,
                                                                        self.__at_risk_positions,
                                                                        self.__n_at_risk,
                                                                        self.ledger.infection_pressure)
        self.ledger.update(n_infected, infection_pressure)

        return self

    def copy(self):
        """
        Copy the state; the copy shares the (read-only) contact network only.
        """
        clone = EpidemicState.__new__(EpidemicState)
        clone.contact_network = self.contact_network
        clone.__infected           = self.__infected.copy()
        clone.__infected_neighbors = self.__infected_neighbors.copy()
        clone.__infected_nodes     = self.__infected_nodes.copy()
        clone.__infected_positions = self.__infected_positions.copy()
        clone.__at_risk_nodes      = self.__at_risk_nodes.copy()
        clone.__at_risk_positions  = self.__at_risk_positions.copy()
        clone.__n_at_risk          = self.__n_at_risk
        clone.ledger = RateLedger(self.ledger.transmission_rate,
                                  self.ledger.recovery_rate,
                                  infected_count = self.ledger.infected_count,
                                  infection_pressure = self.ledger.infection_pressure)
        return clone
