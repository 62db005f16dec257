import matplotlib.pyplot as plt
from tqdm.autonotebook import tqdm


COLORS_OF_STATUSES = {
        'S': 'C0',
        'I': 'C1',
}


def plot_trajectory(
        trajectory,
        ax=None,
        figsize=(8, 4),
        **kwargs):
    """
    Plot susceptible and infected counts of one run as step functions

    Input:
        trajectory (Trajectory): the run to plot
        ax (matplotlib.axes.Axes): axes to draw on; a new figure if None
        **kwargs: passed to ax.step

    Output:
        ax (matplotlib.axes.Axes): the axes drawn on
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)

    ax.step(trajectory.times, trajectory.susceptible, where='post',
            color=COLORS_OF_STATUSES['S'], label='Susceptible', **kwargs)
    ax.step(trajectory.times, trajectory.infected, where='post',
            color=COLORS_OF_STATUSES['I'], label='Infected', **kwargs)

    ax.set_xlabel('time')
    ax.set_ylabel('nodes')
    ax.legend(loc='best')

    return ax


def plot_ensemble(
        trajectories,
        ax=None,
        figsize=(8, 4),
        alpha=0.3,
        leave=False):
    """
    Overlay the infected counts of several independent runs

    Input:
        trajectories (list): list of Trajectory objects
        ax (matplotlib.axes.Axes): axes to draw on; a new figure if None
        alpha (float): line transparency
        leave (bool): keep the progress bar after plotting

    Output:
        ax (matplotlib.axes.Axes): the axes drawn on
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)

    for trajectory in tqdm(trajectories, desc='Plotting realizations', leave=leave):
        ax.step(trajectory.times, trajectory.infected, where='post',
                color=COLORS_OF_STATUSES['I'], alpha=alpha)

    ax.set_xlabel('time')
    ax.set_ylabel('infected')

    return ax
