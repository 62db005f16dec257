import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from epispread import Trajectory
from epispread.epiplots import plot_trajectory, plot_ensemble

def make_trajectory(infected_counts):
    trajectory = Trajectory(node_count=5)
    for time, infected in enumerate(infected_counts):
        trajectory.record(float(time), infected)
    return trajectory

def test_plot_trajectory_draws_both_counts():
    ax = plot_trajectory(make_trajectory([1, 2, 3, 2]))

    assert len(ax.get_lines()) == 2
    assert [text.get_text() for text in ax.get_legend().get_texts()] == ['Susceptible', 'Infected']
    plt.close('all')

def test_plot_ensemble_draws_every_realization():
    fig, ax = plt.subplots()

    returned = plot_ensemble([make_trajectory([1, 0]), make_trajectory([1, 2, 1])], ax=ax)

    assert returned is ax
    assert len(ax.get_lines()) == 2
    plt.close('all')
