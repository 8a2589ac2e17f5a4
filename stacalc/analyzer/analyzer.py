''' Analyze a user-entered PDF or PMF: check that it is a valid distribution,
    compute its moments and probabilities, and try to recognize it.
'''
import logging
import re
import numpy as np

from ..common import uparser
from ..common.config import AnalyzerSettings
from . import numeric
from .ranges import parse_range
from .recognize import identify
from .symbolic import SymbolicEngine
from .results import ValidationResult, MomentSet, AnalysisResults


class DomainMismatchError(ValueError):
    ''' The function diverges on the given domain, so the analysis can't be done '''


def _mass(expr, rng, settings):
    ''' Sum or integrate expr over the domain '''
    if rng.kind == 'discrete':
        return numeric.summate(expr, rng.values)
    return numeric.integrate(expr, rng.lo, rng.hi, steps=settings.steps, surrogate=settings.surrogate)


def _normalize(value, validation):
    ''' Divide by the total mass when the function is not a valid distribution '''
    if validation.isvalid:
        return value
    with np.errstate(all='ignore'):
        return float(np.float64(value) / np.float64(validation.total))


def check_domain(expr, rng):
    ''' Raise DomainMismatchError if expr is an exponential decay (e^-x, 2e^(-2x), ...)
        on a continuous domain that extends to -infinity, where it grows without bound.
        Exponents with a power of x, like the normal e^(-x^2/2), are fine.
    '''
    if rng.kind != 'continuous' or rng.lo != -np.inf:
        return

    f = uparser.to_evaluable(expr)
    for match in re.finditer(r'exp\(', f):
        close = uparser._matching_paren(f, match.end()-1)
        arg = f[match.end():close] if close > 0 else f[match.end():]
        if arg.startswith('-') and 'x' in arg and '^' not in arg:
            raise DomainMismatchError(
                f'The function {uparser.to_display(expr)} decays exponentially and grows without '
                'bound as x goes to -infinity, so it cannot be a PDF on this domain. '
                'Exponential-type densities are usually defined for x > 0: try "0 < x < infinity".')


def validate(expr, rng, settings=None):
    ''' Check that expr sums or integrates to 1 over the domain.

        Args:
            expr (string): Function of x
            rng (DiscreteRange or ContinuousRange): Domain
            settings (AnalyzerSettings): Tolerance and integration settings

        Returns:
            ValidationResult
    '''
    settings = AnalyzerSettings() if settings is None else settings
    total = _mass(uparser.to_evaluable(expr), rng, settings)
    isvalid = bool(abs(total - 1) < settings.tolerance)
    return ValidationResult(total, isvalid)


def custom_moment(expr, rng, validation, r, settings=None):
    ''' Compute the r-th raw moment E[X^r].

        The function is divided by validation.total when it is not a valid
        distribution, treating it as an unnormalized PDF/PMF.
    '''
    settings = AnalyzerSettings() if settings is None else settings
    f = uparser.to_evaluable(expr)
    return _normalize(_mass(f'x^({r})*({f})', rng, settings), validation)


def moments(expr, rng, validation, settings=None):
    ''' Compute mean, second moment and variance.

        Args:
            expr (string): Function of x
            rng (DiscreteRange or ContinuousRange): Domain
            validation (ValidationResult): Result of validate() for the same function
            settings (AnalyzerSettings): Integration settings

        Returns:
            MomentSet
    '''
    settings = AnalyzerSettings() if settings is None else settings
    f = uparser.to_evaluable(expr)
    mean = _normalize(_mass(f'x*({f})', rng, settings), validation)
    second = _normalize(_mass(f'x^2*({f})', rng, settings), validation)
    return MomentSet(mean, second, second - mean**2)


def point_probability(expr, rng, validation, k, settings=None):
    ''' P(X = k). Always 0 for continuous distributions. '''
    if rng.kind != 'discrete':
        return 0.
    f = uparser.to_evaluable(expr)
    return _normalize(numeric.summate(f, [v for v in rng.values if v == k]), validation)


def cumulative_probability(expr, rng, validation, k, settings=None):
    ''' P(X <= k) '''
    settings = AnalyzerSettings() if settings is None else settings
    f = uparser.to_evaluable(expr)
    if rng.kind == 'discrete':
        total = numeric.summate(f, [v for v in rng.values if v <= k])
    elif k <= rng.lo:
        total = 0.
    else:
        total = numeric.integrate(f, rng.lo, min(k, rng.hi), steps=settings.steps, surrogate=settings.surrogate)
    return _normalize(total, validation)


class DistAnalyzer:
    ''' Distribution analyzer for a function and domain typed by the user

        Args:
            function (string): PDF or PMF as a function of x, e.g. "2e^(-2x)"
            domain (string): Domain, e.g. "0 < x < infinity" or "0,1,2,3"
            settings (AnalyzerSettings): Tolerances and integration settings
    '''
    def __init__(self, function, domain, settings=None):
        self.function = function
        self.settings = AnalyzerSettings() if settings is None else settings
        self.expr = uparser.to_evaluable(function)
        self.display = uparser.to_display(function)
        self.domain = parse_range(domain)
        self.symbolic = SymbolicEngine(enabled=self.settings.symbolic)
        self._validation = None

    @property
    def validation(self):
        ''' Total mass check, computed on first use '''
        if self._validation is None:
            self._validation = validate(self.expr, self.domain, self.settings)
        return self._validation

    def moment(self, r):
        ''' E[X^r] '''
        return custom_moment(self.expr, self.domain, self.validation, r, self.settings)

    def probability(self, k):
        ''' P(X = k) '''
        return point_probability(self.expr, self.domain, self.validation, k, self.settings)

    def cumulative(self, k):
        ''' P(X <= k) '''
        return cumulative_probability(self.expr, self.domain, self.validation, k, self.settings)

    def survival(self, k):
        ''' P(X > k) '''
        return 1 - self.cumulative(k)

    def calculate(self, moments_r=None, probs=None):
        ''' Run the full analysis

            Args:
                moments_r (list): Additional moment orders r to compute E[X^r]
                probs (list): Values k to compute P(X=k), P(X<=k) and P(X>k)

            Returns:
                AnalysisResults
        '''
        result = AnalysisResults(self.function, self.expr, self.display, self.domain)
        try:
            check_domain(self.expr, self.domain)
        except DomainMismatchError as err:
            logging.info('Not analyzing %s: %s', self.function, err)
            result.guidance = str(err)
            return result

        result.validation = self.validation
        if not result.validation.isvalid:
            logging.info('%s has total mass %s, normalizing', self.function, result.validation.total)
        result.moments = moments(self.expr, self.domain, self.validation, self.settings)
        for r in (moments_r or []):
            result.custom[r] = self.moment(r)
        for k in (probs or []):
            result.probabilities[k] = (self.probability(k), self.cumulative(k), self.survival(k))

        result.match = identify(self.expr, self.domain, self.settings)
        constant = 1 if self.validation.isvalid else self.validation.constant
        result.cdf = self.symbolic.cdf(self.expr, self.domain, constant)
        if result.match is None:
            result.generic_mgf = self.symbolic.generic_mgf(self.expr, self.domain)
        return result
