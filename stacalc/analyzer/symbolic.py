''' Symbolic derivations (antiderivative, CDF, MGF setup) using sympy.

    Symbolic integration is optional: sympy can fail, refuse (returning an
    unevaluated Integral), or be switched off in the settings. Every
    derivation here returns None in those cases and the analysis goes on
    with numerical results only.
'''
import logging
from tokenize import TokenError
import numpy as np
import sympy

from ..common import uparser


x, t = sympy.symbols('x t')
u = sympy.Symbol('u')

_SYMBOLIC_ERRORS = (ValueError, TypeError, AttributeError, NotImplementedError,
                    RecursionError, TokenError, sympy.SympifyError, sympy.PolynomialError)


def _bound(value):
    ''' Domain bound as sympy number '''
    if value == np.inf:
        return sympy.oo
    elif value == -np.inf:
        return -sympy.oo
    return sympy.nsimplify(value, tolerance=1E-10, rational=True)


class SymbolicEngine:
    ''' Optional symbolic integration capability

        Args:
            enabled (bool): Allow symbolic derivations. When False every
                derivation returns None.
    '''
    def __init__(self, enabled=True):
        self.enabled = enabled

    @property
    def available(self):
        ''' Symbolic derivation can be attempted '''
        return bool(self.enabled)

    def _sympify(self, expr):
        ''' Evaluable function string to sympy, or None '''
        if isinstance(expr, sympy.Basic):
            return expr
        return uparser.parse_math(uparser.to_evaluable(expr), raiseonerr=False)

    def _integrate(self, func, *limits):
        ''' sympy.integrate guarded against failure. None if not solved. '''
        try:
            result = sympy.integrate(func, *limits)
        except _SYMBOLIC_ERRORS as exc:
            logging.info('Symbolic integration of %s failed: %s', func, exc)
            return None
        if result.has(sympy.Integral):
            return None
        return result

    def antiderivative(self, expr, var='x'):
        ''' Indefinite integral of expr with respect to var

            Args:
                expr (string or sympy): Function to integrate
                var (string): Variable of integration

            Returns:
                Sympy expression, or None if it could not be found
        '''
        if not self.available:
            return None
        func = self._sympify(expr)
        if func is None:
            return None
        return self._integrate(func, sympy.Symbol(var))

    def cdf(self, expr, rng, constant=1):
        ''' Symbolic CDF F(x) = c * integral of f from the lower bound to x

            Args:
                expr (string or sympy): Density function of x
                rng (ContinuousRange): Domain. Discrete domains return None.
                constant (float): Normalization constant c

            Returns:
                Sympy expression of x, or None if it could not be found
        '''
        if not self.available or rng.kind != 'continuous':
            return None
        func = self._sympify(expr)
        if func is None:
            return None
        result = self._integrate(func.subs(x, u), (u, _bound(rng.lo), x))
        if result is None or result.has(sympy.nan, sympy.zoo):
            return None
        if constant != 1 and np.isfinite(constant):
            result = _bound(constant) * result
        try:
            return sympy.simplify(result)
        except _SYMBOLIC_ERRORS:
            return result

    def generic_mgf(self, expr, rng):
        ''' Unevaluated definition E[e^{tX}] of the MGF, as an integral or sum.
            Used for display when the distribution is not recognized.
        '''
        func = self._sympify(expr)
        if func is None:
            func = sympy.Function('f')(x)
        if rng.kind == 'discrete':
            values = np.asarray(rng.values, dtype=float)
            if np.all(values == np.round(values)) and np.array_equal(values, values[0] + np.arange(len(values))):
                return sympy.Sum(sympy.exp(t*x) * func, (x, _bound(values[0]), _bound(values[-1])))
            # Listed values that are not a run of consecutive integers
            terms = [sympy.exp(t*v) * func.subs(x, v) for v in map(_bound, values)]
            return sympy.Add(*terms, evaluate=False)
        return sympy.Integral(sympy.exp(t*x) * func, (x, _bound(rng.lo), _bound(rng.hi)))
