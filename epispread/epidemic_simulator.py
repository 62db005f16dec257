from timeit import default_timer as timer

from .kinetic_model import KineticModel
from .utilities import spawn_random_generators, print_info_module, print_warning_module

class EpidemicSimulator:
    """
    Simulates epidemics and reports on them.
    """
    def __init__(self,
                 contact_network,
                 transition_rates,
                 verbose = True):
        """
        Build a tool that simulates epidemics.

        Args
        ----

        contact_network (ContactNetwork): Static network of contacts between
                                          community members.

        transition_rates (TransitionRates): Transmission and recovery rates.

        verbose (bool): Whether to print status reports and wall times.
        """
        self.contact_network = contact_network
        self.kinetic_model = KineticModel(contact_network = contact_network,
                                          transition_rates = transition_rates)
        self.verbose = verbose

        self.trajectory = None

    def run(self, initial_infected, stop_time, rng = None):
        """
        Run the kinetic model from `initial_infected` until `stop_time` or
        until no event can happen any more.
        """
        start_kinetic_simulation = timer()

        self.trajectory = self.kinetic_model.simulate(initial_infected, stop_time, rng)

        end_kinetic_simulation = timer()

        if self.verbose:
            self.report_statuses()
            print("[ Wall time ]       Kinetic simulation: {:.4f} s".format(end_kinetic_simulation - start_kinetic_simulation))

            if self.trajectory.infected[-1] == 0:
                print_warning_module(__name__,
                                     "outbreak went extinct at time {:.3f}".format(self.trajectory.times[-1]))

        return self.trajectory

    def run_realizations(self, initial_infected, stop_time, n_realizations, seed = None):
        """
        Run `n_realizations` independent realizations that share the contact
        network, each with its own random generator spawned from `seed`.
        """
        generators = spawn_random_generators(seed, n_realizations)

        trajectories = []
        start_realizations = timer()

        for rng in generators:
            trajectories.append(self.kinetic_model.simulate(initial_infected, stop_time, rng))

        end_realizations = timer()

        if self.verbose:
            print_info_module(__name__,
                              "{:d} realizations in {:.4f} s".format(n_realizations,
                                                                    end_realizations - start_realizations))

        return trajectories

    def report_statuses(self):

        state = self.kinetic_model.final_state
        record = self.trajectory[-1]

        print("")
        print("[ Status report ]                 Time: {:.3f}".format(record.time))
        print("                           Susceptible: {:d}".format(record.susceptible))
        print("                              Infected: {:d}".format(record.infected))
        print("                               At risk: {:d}".format(state.at_risk_count))
        print("                                Events: {:d}".format(len(self.trajectory) - 1))
        print("")
