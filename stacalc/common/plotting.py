''' Common functions for plotting results '''

from contextlib import contextmanager
import numpy as np
import matplotlib.pyplot as plt


# Common plot parameters, usage: "with mpl.style.context(plotstyle):"
plotstyle = {'figure.figsize': (8, 5), 'font.size': 12}


class ReportPlot:
    ''' Context manager for adding figures to report. Ensures figure is closed
        so it doesn't display twice in Jupyter and is properly garbage collected.

        Use via plot_figure() function to chain with plt.style.context.
    '''
    def __enter__(self):
        self._fig = plt.figure()
        return self._fig

    def __exit__(self, exc_type, exc_val, exc_trace):
        plt.close(self._fig)


@contextmanager
def plot_figure():
    ''' Context manager for adding plots to Reports with the defined style.

        Usage:
            with plot_figure() as fig:
                ... # Plot stuff to figure
    '''
    with plt.style.context(plotstyle), ReportPlot() as fig:
        yield fig


def initplot(plot=None):
    ''' Initialize a Figure and Axis to plot on.

        Args:
            plot: plt.Figure, plt.Axis, or None. If None, new figure and
                axis will be created. If Figure or Axis, the Figure AND Axis
                will be returned.

        Returns:
            fig: plt.Figure instance
            ax: plt.Axes instance
    '''
    if plot is None:
        fig = plt.gcf()
        fig.clf()
        ax = fig.add_subplot(1, 1, 1)
    elif hasattr(plot, 'gca'):
        fig = plot
        fig.clf()
        ax = fig.add_subplot(1, 1, 1)
    else:
        ax = plot
        fig = ax.figure
    return fig, ax


def plot_density(x, y, discrete=False, plot=None, xlabel='x', ylabel='f(x)'):
    ''' Plot a PDF as a line, or a PMF as stems

        Args:
            x, y (arrays): Points to plot
            discrete (bool): Plot as probability mass (stems)
            plot (plt.Figure or plt.Axes): Where to plot
    '''
    fig, ax = initplot(plot)
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if discrete:
        ax.vlines(x, 0, y, color='C0')
        ax.plot(x, y, marker='o', ls='', color='C0')
    else:
        ax.plot(x, y, color='C0')
        ax.fill_between(x, y, alpha=.2, color='C0')
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    finite = y[np.isfinite(y)]
    ax.set_ylim(bottom=min(0, finite.min()) if len(finite) else 0)
    return fig, ax
