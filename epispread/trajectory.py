from collections import namedtuple

import numpy as np

TrajectoryRecord = namedtuple("TrajectoryRecord", ["time", "susceptible", "infected"])

TrajectorySummary = namedtuple("TrajectorySummary",
                               ["peak_infected",
                                "peak_time",
                                "final_infected",
                                "final_time",
                                "event_count"])

class Trajectory:
    """
    Append-only record of (time, susceptible count, infected count) for one run.

    The first record is the state at time 0; afterwards there is one record per
    applied event. Times never decrease.
    """
    def __init__(self, node_count):
        self.node_count = node_count

        self.__times = []
        self.__susceptible = []
        self.__infected = []

    def record(self, time, infected_count):
        """
        Append a record

        Input:
            time (float): simulation time of the record
            infected_count (int): number of infected nodes at `time`

        Output:
            None
        """
        if self.__times and time < self.__times[-1]:
            raise ValueError(
                    self.__class__.__name__
                    + ": time " + str(time) + " is earlier than the last record "
                    + str(self.__times[-1]))

        self.__times.append(float(time))
        self.__susceptible.append(self.node_count - int(infected_count))
        self.__infected.append(int(infected_count))

    def __len__(self):
        return len(self.__times)

    def __iter__(self):
        return map(TrajectoryRecord._make,
                   zip(self.__times, self.__susceptible, self.__infected))

    def __getitem__(self, index):
        return TrajectoryRecord(self.__times[index],
                                self.__susceptible[index],
                                self.__infected[index])

    @property
    def times(self):
        return np.array(self.__times)

    @property
    def susceptible(self):
        return np.array(self.__susceptible, dtype=int)

    @property
    def infected(self):
        return np.array(self.__infected, dtype=int)

    def get_statuses_at(self, time):
        """
        Get the counts in force at `time`; the trajectory is piecewise constant
        between records.

        Input:
            time (float): a time no earlier than the first record

        Output:
            record (TrajectoryRecord): the last record at or before `time`,
                                       stamped with `time`
        """
        if not self.__times or time < self.__times[0]:
            raise ValueError(
                    self.__class__.__name__
                    + ": no record at or before time " + str(time))

        index = np.searchsorted(self.__times, time, side='right') - 1

        return TrajectoryRecord(time, self.__susceptible[index], self.__infected[index])

    def summarize(self):
        """
        Summary statistics of the run

        Output:
            summary (TrajectorySummary): peak infected count and the time it
                                         was first reached, final infected
                                         count and time, number of events
        """
        if not self.__times:
            raise ValueError(
                    self.__class__.__name__
                    + ": cannot summarize an empty trajectory")

        peak_index = int(np.argmax(self.__infected))

        return TrajectorySummary(peak_infected = self.__infected[peak_index],
                                 peak_time = self.__times[peak_index],
                                 final_infected = self.__infected[-1],
                                 final_time = self.__times[-1],
                                 event_count = len(self.__times) - 1)
