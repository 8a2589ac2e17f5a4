''' Recognize standard distributions from the way the function is written.

    This is pattern matching on the normalized function string, not algebra.
    "2*exp(-2*x)" on 0<x<inf is recognized as Exponential(2), but an equivalent
    function written differently (e.g. "exp(log(2)-2x)") will not be. Rules are
    tried in order and the first one that matches wins.
'''
from collections import namedtuple
import re
import numpy as np
import sympy

from ..common import uparser
from ..common.config import AnalyzerSettings
from . import numeric
from .results import DistributionMatch


Rule = namedtuple('Rule', ['family', 'domain', 'signal', 'extract'])

x, t = sympy.symbols('x t')
NUM = r'(\d+\.?\d*(?:/\d+\.?\d*)?|\.\d+)'


def _num(text):
    ''' Convert a matched number (possibly a simple fraction like 1/3) to float '''
    if text is None:
        return None
    try:
        if '/' in text:
            num, den = text.split('/')
            return float(num) / float(den)
        return float(text)
    except (ValueError, ZeroDivisionError):
        return None


def _search(pattern, text, transform=None):
    ''' Return the first matched number in text, optionally transformed '''
    match = re.search(pattern, text)
    if match is None:
        return None
    value = _num(match.group(1))
    if value is None or transform is None:
        return value
    return transform(value)


def _first(*values):
    ''' First value that is not None '''
    for v in values:
        if v is not None:
            return v
    return None


def _exp_argument(f):
    ''' Argument of the first exp(...) in f, or empty string '''
    start = f.find('exp(')
    if start < 0:
        return ''
    close = uparser._matching_paren(f, start+3)
    return f[start+4:close] if close > 0 else f[start+4:]


def _decay_rate(arg):
    ''' Rate b from an exponent written as -b*x, -bx, -x, or -x/c '''
    return _first(
        _search(rf'^-{NUM}\*?x$', arg),
        1. if arg == '-x' else None,
        _search(rf'^-x/{NUM}$', arg, lambda v: 1/v),
        _search(rf'^-x/\({NUM}\)$', arg, lambda v: 1/v))


def _sym(value, name):
    ''' Parameter as a sympy number, or a symbol when it could not be extracted '''
    if value is None:
        return sympy.Symbol(name, positive=True)
    return sympy.nsimplify(value, tolerance=1E-10, rational=True)


def _tex(value, name):
    return sympy.latex(_sym(value, name))


def _discrete(rng):
    return rng.kind == 'discrete' and len(rng.values) > 0


def _half_line(rng):
    return rng.kind == 'continuous' and rng.lo == 0 and rng.hi == np.inf


# Poisson
def _poisson_domain(rng):
    return _discrete(rng) and len(rng.values) >= 11 and rng.first == 0


def _poisson_signal(f, rng, settings):
    return 'factorial(' in f and 'exp(' in f


def _poisson(f, rng):
    lam = _first(_search(rf'exp\(-{NUM}\)', f), _search(rf'{NUM}\^x', f))
    L = _sym(lam, 'lambda')
    return DistributionMatch(
        name='Poisson Distribution',
        family='poisson',
        notation=f'X \\sim Poi(\\lambda = {_tex(lam, "lambda")})',
        params={'lambda': lam},
        pdf=L**x * sympy.exp(-L) / sympy.factorial(x),
        mgf=sympy.exp(L*(sympy.exp(t) - 1)),
        pgf=sympy.exp(L*(t - 1)))


# Binomial
def _binomial_domain(rng):
    return _discrete(rng) and rng.first == 0 and len(rng.values) > 1


def _binomial_signal(f, rng, settings):
    return '^' in f and '(1-' in f


def _binomial(f, rng):
    n = int(max(rng.values))
    p = _first(_search(rf'\(1-{NUM}\)', f), _search(rf'{NUM}\^x', f))
    P = _sym(p, 'p')
    return DistributionMatch(
        name='Binomial Distribution',
        family='binomial',
        notation=f'X \\sim Bin(n = {n}, p = {_tex(p, "p")})',
        params={'n': n, 'p': p},
        pdf=sympy.binomial(n, x) * P**x * (1-P)**(n-x),
        mgf=(1 - P + P*sympy.exp(t))**n,
        pgf=(1 - P + P*t)**n)


# Geometric
def _geometric_domain(rng):
    return _discrete(rng) and rng.first == 1


def _geometric_signal(f, rng, settings):
    return '^' in f and ('(x-1)' in f or 'x' in f)


def _geometric(f, rng):
    p = _first(_search(rf'^{NUM}\*', f),
               _search(rf'\(1-{NUM}\)', f),
               _search(rf'{NUM}\^\(x-1\)', f, lambda v: 1-v))
    P = _sym(p, 'p')
    return DistributionMatch(
        name='Geometric Distribution',
        family='geometric',
        notation=f'X \\sim Geo(p = {_tex(p, "p")})',
        params={'p': p},
        pdf=P * (1-P)**(x-1),
        mgf=P*sympy.exp(t) / (1 - (1-P)*sympy.exp(t)),
        pgf=P*t / (1 - (1-P)*t))


# Beta
def _beta_domain(rng):
    return rng.kind == 'continuous' and rng.lo == 0 and rng.hi == 1


def _beta_signal(f, rng, settings):
    return 'x^' in f and '(1-x)' in f


def _beta(f, rng):
    a = _search(rf'x\^\(?{NUM}', f, lambda v: v+1)
    b = _first(_search(rf'\(1-x\)\^\(?{NUM}', f, lambda v: v+1),
               2. if '(1-x)' in f else None)
    A, B = _sym(a, 'alpha'), _sym(b, 'beta')
    return DistributionMatch(
        name='Beta Distribution',
        family='beta',
        notation=f'X \\sim Beta(\\alpha = {_tex(a, "alpha")}, \\beta = {_tex(b, "beta")})',
        params={'alpha': a, 'beta': b},
        pdf=sympy.gamma(A+B) / (sympy.gamma(A)*sympy.gamma(B)) * x**(A-1) * (1-x)**(B-1),
        mgf=sympy.hyper([A], [A+B], t))


# Exponential
def _exponential_signal(f, rng, settings):
    return 'exp(' in f and 'x*exp' not in f and 'x^' not in f


def _exponential(f, rng):
    lam = _first(_num(f.split('exp(')[0].replace('*', '') or None),
                 _decay_rate(_exp_argument(f)))
    L = _sym(lam, 'lambda')
    return DistributionMatch(
        name='Exponential Distribution',
        family='exponential',
        notation=f'X \\sim Exp(\\lambda = {_tex(lam, "lambda")})',
        params={'lambda': lam},
        pdf=L * sympy.exp(-L*x),
        mgf=L / (L - t))


# Gamma
def _gamma_signal(f, rng, settings):
    return ('x^' in f or 'x*exp' in f) and 'exp(' in f


def _gamma(f, rng):
    a = _first(_search(rf'x\^\(?{NUM}', f, lambda v: v+1),
               2. if 'x*exp' in f else None)
    b = _decay_rate(_exp_argument(f))
    A, B = _sym(a, 'alpha'), _sym(b, 'beta')
    return DistributionMatch(
        name='Gamma Distribution',
        family='gamma',
        notation=f'X \\sim Gamma(\\alpha = {_tex(a, "alpha")}, \\beta = {_tex(b, "beta")})',
        params={'alpha': a, 'beta': b},
        pdf=B**A * x**(A-1) * sympy.exp(-B*x) / sympy.gamma(A),
        mgf=(B / (B - t))**A)


# Normal
def _normal_domain(rng):
    return rng.kind == 'continuous' and rng.lo == -np.inf and rng.hi == np.inf


def _normal_signal(f, rng, settings):
    return 'exp(' in f and ('x^2' in f or re.search(r'\(x[+-][^()]*\)\^2', f) is not None)


def _normal(f, rng):
    arg = _exp_argument(f)
    mu = _first(_search(rf'\(x-{NUM}\)\^2', arg),
                _search(rf'\(x\+{NUM}\)\^2', arg, lambda v: -v),
                0. if 'x^2' in arg else None)
    sigma = _first(_search(rf'/\(2\*{NUM}\^2\)$', arg),
                   _search(rf'/\(2\*{NUM}\)$', arg, np.sqrt),
                   _search(rf'/{NUM}$', arg, lambda v: np.sqrt(v/2)),
                   _search(rf'^-{NUM}\*', arg, lambda v: np.sqrt(1/(2*v))),
                   np.sqrt(.5) if re.fullmatch(r'-\(?x[^/*]*\^2', arg) else None)
    M = sympy.nsimplify(mu) if mu is not None else sympy.Symbol('mu', real=True)
    S = _sym(sigma, 'sigma')
    return DistributionMatch(
        name='Normal Distribution',
        family='normal',
        notation=(f'X \\sim N(\\mu = {sympy.latex(M)}, '
                  f'\\sigma^2 = {sympy.latex(S**2)})'),
        params={'mu': mu, 'sigma': sigma},
        pdf=sympy.exp(-(x-M)**2 / (2*S**2)) / (S*sympy.sqrt(2*sympy.pi)),
        mgf=sympy.exp(M*t + S**2*t**2/2))


# Uniform
def _uniform_domain(rng):
    return rng.kind == 'continuous' and rng.bounded and rng.hi > rng.lo


def _uniform_signal(f, rng, settings):
    height = numeric.evaluate(f, (rng.lo + rng.hi) / 2)
    return bool(abs(height - 1/(rng.hi - rng.lo)) < settings.uniform_tolerance)


def _uniform(f, rng):
    a, b = _sym(rng.lo, 'a'), _sym(rng.hi, 'b')
    return DistributionMatch(
        name='Uniform Distribution',
        family='uniform',
        notation=f'X \\sim U({sympy.latex(a)}, {sympy.latex(b)})',
        params={'a': rng.lo, 'b': rng.hi},
        pdf=sympy.Integer(1) / (b - a),
        mgf=(sympy.exp(b*t) - sympy.exp(a*t)) / (t*(b - a)))


RULES = [
    Rule('poisson', _poisson_domain, _poisson_signal, _poisson),
    Rule('binomial', _binomial_domain, _binomial_signal, _binomial),
    Rule('geometric', _geometric_domain, _geometric_signal, _geometric),
    Rule('beta', _beta_domain, _beta_signal, _beta),
    Rule('exponential', _half_line, _exponential_signal, _exponential),
    Rule('gamma', _half_line, _gamma_signal, _gamma),
    Rule('normal', _normal_domain, _normal_signal, _normal),
    Rule('uniform', _uniform_domain, _uniform_signal, _uniform),
]


def identify(expr, rng, settings=None):
    ''' Identify a standard distribution from the function and its domain.

        Args:
            expr (string): Function of x, as typed or already normalized
            rng (DiscreteRange or ContinuousRange): Domain of the function
            settings (AnalyzerSettings): Tolerances used by the rules

        Returns:
            DistributionMatch for the first rule that matches, or None
    '''
    settings = AnalyzerSettings() if settings is None else settings
    f = uparser.to_evaluable(expr)
    for rule in RULES:
        if rule.domain(rng) and rule.signal(f, rng, settings):
            return rule.extract(f, rng)
    return None
