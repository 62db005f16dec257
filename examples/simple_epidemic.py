import argparse

import networkx as nx
import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from epispread import ContactNetwork, TransitionRates, EpidemicSimulator
from epispread.epiplots import plot_trajectory, plot_ensemble
from epispread.utilities import print_start_of, print_end_of, print_info_module


print_start_of(__name__)
################################################################################
parser = argparse.ArgumentParser()

# network ######################################################################
parser.add_argument('--network-type', type=str, default='BA', choices=['BA', 'ER', 'RR'])
parser.add_argument('--network-node-count', type=int, default=100)
parser.add_argument('--network-ba-m', type=int, default=2)
parser.add_argument('--network-er-probability', type=float, default=0.1)
parser.add_argument('--network-rr-degree', type=int, default=4)

# epidemic #####################################################################
parser.add_argument('--transmission-rate', type=float, default=0.3)
parser.add_argument('--recovery-rate', type=float, default=0.1)
parser.add_argument('--initial-infections', type=int, default=3)
parser.add_argument('--max-time', type=float, default=50.0)

# realizations #################################################################
parser.add_argument('--realizations', type=int, default=10)
parser.add_argument('--seed', type=int, default=42)
parser.add_argument('--figure-path', type=str, default='simple_epidemic.png')

args = parser.parse_args()

#
# Create an example network
#

if args.network_type == 'BA':
    graph = nx.barabasi_albert_graph(args.network_node_count, args.network_ba_m, seed=args.seed)
elif args.network_type == 'ER':
    graph = nx.gnp_random_graph(args.network_node_count, args.network_er_probability, seed=args.seed)
else:
    graph = nx.random_regular_graph(args.network_rr_degree, args.network_node_count, seed=args.seed)

contact_network = ContactNetwork.from_networkx_graph(graph)

print_info_module(__name__,
                  "{} network: {:d} nodes, {:d} edges".format(args.network_type,
                                                              contact_network.get_node_count(),
                                                              contact_network.get_edge_count()))

#
# Seed an infection and run
#

rng = np.random.default_rng(args.seed)
initial_infected = rng.choice(contact_network.get_node_count(),
                              size=args.initial_infections,
                              replace=False)

transition_rates = TransitionRates(transmission_rate = args.transmission_rate,
                                   recovery_rate = args.recovery_rate)

epidemic_simulator = EpidemicSimulator(contact_network, transition_rates)

trajectory = epidemic_simulator.run(initial_infected, args.max_time, rng=rng)
summary = trajectory.summarize()

print_info_module(__name__, "peak infected:", summary.peak_infected,
                  "at time {:.3f}".format(summary.peak_time))
print_info_module(__name__, "final infected:", summary.final_infected,
                  "after", summary.event_count, "events")

trajectories = epidemic_simulator.run_realizations(initial_infected,
                                                   args.max_time,
                                                   args.realizations,
                                                   seed=args.seed)

#
# Plot
#

fig, axes = plt.subplots(1, 2, figsize=(12, 4))
plot_trajectory(trajectory, ax=axes[0])
plot_ensemble(trajectories, ax=axes[1])
fig.savefig(args.figure_path)

################################################################################
print_end_of(__name__)
