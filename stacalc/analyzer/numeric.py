''' Numerical integration and summation of user functions of x.

    Evaluation problems never raise here. A function that can't be parsed or
    evaluated gives nan, and individual samples that come out inf or nan
    (e.g. 1/x at x=0) are counted as zero.
'''
import logging
from tokenize import TokenError
import numpy as np
from scipy.integrate import simpson

from ..common import uparser


_EVAL_ERRORS = (ValueError, TypeError, NameError, AttributeError, KeyError,
                ZeroDivisionError, OverflowError, TokenError)


def _sample(expr, x):
    ''' Evaluate expr at array x. Non-finite samples are replaced with 0. '''
    x = np.asarray(x, dtype=float)
    with np.errstate(all='ignore'):
        y = uparser.callf(expr, {'x': x})
        y = np.broadcast_to(np.asarray(y), x.shape)
        if np.iscomplexobj(y):
            y = np.where(np.isreal(y), y.real, np.nan)
        y = np.asarray(y, dtype=float)
    return np.where(np.isfinite(y), y, 0.)


def evaluate(expr, x):
    ''' Evaluate expr at a single value of x. Returns nan on failure. '''
    try:
        with np.errstate(all='ignore'):
            y = uparser.callf(expr, {'x': np.float64(x)})
        return float(np.real_if_close(y))
    except _EVAL_ERRORS as exc:
        logging.info('Cannot evaluate %s at x=%s: %s', expr, x, exc)
        return np.nan


def integrate(expr, lower, upper, steps=10000, surrogate=100):
    ''' Integrate expr over x from lower to upper using composite Simpson's rule.

        Args:
            expr (string): Evaluable function of x
            lower, upper (float): Integration limits, may be infinite.
                Gives 0 when lower >= upper after replacing infinite limits.
            steps (int): Number of Simpson intervals (rounded up to even)
            surrogate (float): Infinite limits are replaced by -surrogate or
                +surrogate. Mass in the tails beyond this is ignored.

        Returns:
            Value of the integral, or nan if expr can't be evaluated
    '''
    if np.isinf(lower):
        lower = np.sign(lower) * surrogate
    if np.isinf(upper):
        upper = np.sign(upper) * surrogate
    if lower >= upper:
        # Empty interval, including a finite bound beyond the surrogate limit
        return 0.
    steps = max(2, int(steps))
    steps += steps % 2
    x = np.linspace(lower, upper, steps+1)
    try:
        y = _sample(expr, x)
    except _EVAL_ERRORS as exc:
        logging.info('Cannot integrate %s: %s', expr, exc)
        return np.nan
    return float(simpson(y, x=x))


def summate(expr, values):
    ''' Sum expr evaluated at each of the discrete values of x.

        Returns:
            Value of the sum, or nan if expr can't be evaluated
    '''
    if len(values) == 0:
        return 0.
    try:
        y = _sample(expr, values)
    except _EVAL_ERRORS as exc:
        logging.info('Cannot sum %s: %s', expr, exc)
        return np.nan
    return float(np.sum(y))
