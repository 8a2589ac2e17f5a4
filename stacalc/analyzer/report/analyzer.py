''' Report the results of analyzing a user-entered distribution '''

import numpy as np
import sympy

from ...common import report, plotting
from ..numeric import evaluate


class ReportAnalysis:
    ''' Output for the distribution analyzer

        Args:
            results: AnalysisResults instance
    '''
    def __init__(self, results):
        self.results = results
        self.plot = PlotAnalysis(self.results)

    def function(self, **kwargs):
        ''' Report the function and domain as entered '''
        r = report.Report(**kwargs)
        r.add('Function: ', report.Math.from_latex(f'f(x) = {self.results.display}'), end='')
        r.newline()
        r.add('Domain: ', report.Math.from_latex(self.results.domain.latex()), end='')
        r.newline()
        return r

    def validation(self, **kwargs):
        ''' Report the total probability check '''
        r = report.Report(**kwargs)
        val = self.results.validation
        label = 'Sum' if self.results.kind == 'discrete' else 'Integral'
        rows = [['Type', 'Discrete (PMF)' if self.results.kind == 'discrete' else 'Continuous (PDF)'],
                [f'{label} over domain', report.Number(val.total)],
                ['Valid distribution', 'Yes' if val.isvalid else 'No']]
        if not val.isvalid:
            rows.append(['Normalization constant', report.Number(val.constant)])
        r.table(rows, ['Property', 'Value'])
        if not val.isvalid:
            r.txt('The function does not sum or integrate to 1 over the domain. '
                  'Moments below are computed for the normalized function c·f(x).\n\n')
        return r

    def moments(self, **kwargs):
        ''' Report mean, second moment, variance and any extra moments '''
        r = report.Report(**kwargs)
        m = self.results.moments
        rows = [[report.Math.from_latex('E[X]'), report.Number(m.mean)],
                [report.Math.from_latex('E[X^2]'), report.Number(m.second)],
                [report.Math.from_latex('Var(X)'), report.Number(m.variance)],
                [report.Math.from_latex(r'\sigma'), report.Number(m.std)]]
        for order, value in self.results.custom.items():
            rows.append([report.Math.from_latex(f'E[X^{{{order}}}]'), report.Number(value)])
        r.table(rows, ['Moment', 'Value'])
        return r

    def probabilities(self, **kwargs):
        ''' Report P(X=k), P(X<=k) and P(X>k) for the requested values of k '''
        r = report.Report(**kwargs)
        rows = [[f'{k:g}', report.Number(p), report.Number(cdf), report.Number(sf)]
                for k, (p, cdf, sf) in self.results.probabilities.items()]
        r.table(rows, ['k', 'P(X=k)', 'P(X≤k)', 'P(X>k)'])
        return r

    def distribution(self, **kwargs):
        ''' Report the recognized distribution, or the generic MGF definition '''
        r = report.Report(**kwargs)
        match = self.results.match
        if match is None:
            r.txt('Not recognized as a standard distribution. The MGF is defined as\n\n')
            if self.results.generic_mgf is not None:
                r.add(report.Math.from_latex('M_X(t) = ' + sympy.latex(self.results.generic_mgf)), end='\n\n')
            return r

        r.hdr(match.name, level=3)
        r.add(report.Math.from_latex(match.notation), end='\n\n')
        r.add(report.Math.from_latex('f(x) = ' + sympy.latex(match.pdf)), end='\n\n')
        r.add(report.Math.from_latex('M_X(t) = ' + sympy.latex(match.mgf)), end='\n\n')
        if match.pgf is not None:
            r.add(report.Math.from_latex('G_X(t) = ' + sympy.latex(match.pgf)), end='\n\n')
        return r

    def cdf(self, **kwargs):
        ''' Report the symbolic CDF, when it was found '''
        r = report.Report(**kwargs)
        if self.results.cdf is not None:
            r.add(report.Math.from_latex('F(x) = ' + sympy.latex(self.results.cdf)), end='\n\n')
        elif self.results.kind == 'continuous':
            r.txt('No closed-form CDF was found.\n\n')
        return r

    def summary(self, **kwargs):
        ''' Summary of the whole analysis '''
        r = report.Report(**kwargs)
        r.hdr('Distribution Analysis', level=2)
        r.append(self.function(**kwargs))
        if not self.results.analyzed:
            r.txt(self.results.guidance + '\n\n')
            return r

        r.hdr('Validation', level=3)
        r.append(self.validation(**kwargs))
        r.hdr('Moments', level=3)
        r.append(self.moments(**kwargs))
        if self.results.probabilities:
            r.hdr('Probabilities', level=3)
            r.append(self.probabilities(**kwargs))
        r.hdr('Distribution', level=3)
        r.append(self.distribution(**kwargs))
        if self.results.kind == 'continuous':
            r.hdr('Cumulative Distribution Function', level=3)
            r.append(self.cdf(**kwargs))
        return r

    def all(self, **kwargs):
        ''' Summary plus plot of the function '''
        r = self.summary(**kwargs)
        if self.results.analyzed:
            with plotting.plot_figure() as fig:
                self.plot.density(fig=fig)
                r.plot(fig)
        return r


class PlotAnalysis:
    ''' Plot the analyzed function

        Args:
            results: AnalysisResults instance
    '''
    def __init__(self, results):
        self.results = results

    def points(self, npoints=200, span=10):
        ''' Points to plot the function. Infinite bounds are cut off at
            span away from the finite bound (or the mean).
        '''
        domain = self.results.domain
        if domain.kind == 'discrete':
            x = np.asarray(domain.values, dtype=float)
        else:
            center = 0.
            if self.results.moments is not None and np.isfinite(self.results.moments.mean):
                center = self.results.moments.mean
            lo = domain.lo if np.isfinite(domain.lo) else min(center, domain.hi) - span
            hi = domain.hi if np.isfinite(domain.hi) else max(center, domain.lo) + span
            x = np.linspace(lo, hi, npoints)
        y = np.array([evaluate(self.results.expr, xi) for xi in x])
        return x, y

    def density(self, fig=None, **kwargs):
        ''' Plot the PDF or PMF over the domain

            Args:
                fig (plt.Figure): maptlotlib figure to plot on
        '''
        x, y = self.points(**kwargs)
        discrete = self.results.kind == 'discrete'
        return plotting.plot_density(x, y, discrete=discrete, plot=fig,
                                     ylabel='P(X=x)' if discrete else 'f(x)')
