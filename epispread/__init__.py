# Files in this project:
#

# Static contact network stored in compressed sparse row form
from .contact_network import ContactNetwork

# Transmission rate per infected neighbor and recovery rate per infected node
from .transition_rates import TransitionRates

# Infected and at-risk sets of one run, with the aggregate rates that go with them
from .epidemic_state import EpidemicState, RateLedger

# Abstraction for a stochastic "kinetic" model of an epidemic
# on a network, and the Gillespie steps it is built from.
from .kinetic_model import KineticModel, Event, INFECTION, RECOVERY
from .kinetic_model import draw_waiting_time, draw_event, apply_event, gillespie_step, run_simulation

# Time series of susceptible and infected counts produced by one run
from .trajectory import Trajectory, TrajectoryRecord, TrajectorySummary

# Status reports, wall times and independent realizations
from .epidemic_simulator import EpidemicSimulator
