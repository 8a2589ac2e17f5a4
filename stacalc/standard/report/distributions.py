''' Report properties of a standard distribution model '''

import numpy as np
import sympy

from ...common import report, plotting


class ReportStandard:
    ''' Output for a standard distribution model

        Args:
            model: StandardModel instance
    '''
    def __init__(self, model):
        self.model = model

    def properties(self, **kwargs):
        ''' Table of parameters, mean and variance '''
        rows = [[name, f'{value:g}'] for name, value in self.model.params.items()]
        rows.extend([['Mean', report.Number(self.model.mean())],
                     ['Variance', report.Number(self.model.var())],
                     ['Standard Deviation', report.Number(self.model.std())]])
        r = report.Report(**kwargs)
        r.table(rows, ['Property', 'Value'])
        return r

    def generating(self, **kwargs):
        ''' MGF (and PGF for discrete models) '''
        r = report.Report(**kwargs)
        r.add(report.Math.from_latex('M_X(t) = ' + sympy.latex(self.model.mgf())), end='\n\n')
        if self.model.pgf() is not None:
            r.add(report.Math.from_latex('G_X(t) = ' + sympy.latex(self.model.pgf())), end='\n\n')
        return r

    def probabilities(self, xvalues=None, qvalues=None, **kwargs):
        ''' Table of pdf/cdf at x values and quantiles at probabilities q '''
        r = report.Report(**kwargs)
        if xvalues:
            label = 'P(X=x)' if self.model.discrete else 'f(x)'
            rows = [[f'{xval:g}', report.Number(self.model.pdf(xval)),
                     report.Number(self.model.cdf(xval)), report.Number(self.model.sf(xval))]
                    for xval in xvalues]
            r.table(rows, ['x', label, 'P(X≤x)', 'P(X>x)'])
        if qvalues:
            rows = [[f'{q:g}', report.Number(self.model.ppf(q))] for q in qvalues]
            r.table(rows, ['q', 'Quantile'])
        return r

    def summary(self, **kwargs):
        ''' Summary of the model properties '''
        r = report.Report(**kwargs)
        r.hdr(f'{self.model.name.title()} Distribution', level=2)
        if self.model.helpstr():
            r.txt(self.model.helpstr() + '\n\n')
        r.append(self.properties(**kwargs))
        r.append(self.generating(**kwargs))
        return r

    def all(self, xvalues=None, qvalues=None, **kwargs):
        ''' Summary, requested probabilities, and a plot of the pdf/pmf '''
        r = self.summary(**kwargs)
        r.append(self.probabilities(xvalues, qvalues, **kwargs))
        with plotting.plot_figure() as fig:
            self.plot(fig=fig)
            r.plot(fig)
        return r

    def plot(self, fig=None):
        ''' Plot the pdf or pmf over most of its probability '''
        xvals = np.asarray(self.model.support(), dtype=float)
        yvals = [self.model.pdf(xval) for xval in xvals]
        return plotting.plot_density(xvals, yvals, discrete=self.model.discrete, plot=fig,
                                     ylabel='P(X=x)' if self.model.discrete else 'f(x)')
