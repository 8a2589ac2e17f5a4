''' Test recognizing standard distributions from typed functions '''
import numpy as np
import sympy

from stacalc.analyzer import identify, parse_range
from stacalc.analyzer.ranges import ContinuousRange, DiscreteRange


t = sympy.Symbol('t')
halfline = ContinuousRange(0, np.inf)
realline = ContinuousRange(-np.inf, np.inf)


def test_exponential():
    match = identify('2*exp(-2*x)', halfline)
    assert match.family == 'exponential'
    assert match.name == 'Exponential Distribution'
    assert np.isclose(match.params['lambda'], 2)
    assert sympy.simplify(match.mgf - 2/(2-t)) == 0
    assert match.pgf is None

    assert np.isclose(identify('2e^(-2x)', parse_range('x>0')).params['lambda'], 2)
    assert np.isclose(identify('e^-x', halfline).params['lambda'], 1)
    assert np.isclose(identify('e^(-x/3)/3', halfline).params['lambda'], 1/3)
    assert np.isclose(identify('0.5e^(-0.5x)', parse_range('0 to infinity')).params['lambda'], .5)


def test_symbolic_parameter():
    ''' Parameters that aren't numbers are shown as symbols '''
    match = identify('k*exp(-k*x)', halfline)
    assert match.family == 'exponential'
    assert match.params['lambda'] is None
    assert sympy.Symbol('lambda', positive=True) in match.mgf.free_symbols


def test_gamma():
    match = identify('x*e^(-x)', halfline)
    assert match.family == 'gamma'
    assert np.isclose(match.params['alpha'], 2)
    assert np.isclose(match.params['beta'], 1)

    match = identify('4x^2e^(-2x)', halfline)
    assert match.family == 'gamma'
    assert np.isclose(match.params['alpha'], 3)
    assert np.isclose(match.params['beta'], 2)


def test_poisson():
    match = identify('e^(-3)*3^x/x!', DiscreteRange(list(range(16))))
    assert match.family == 'poisson'
    assert np.isclose(match.params['lambda'], 3)
    assert match.pgf is not None

    # Too few values for Poisson
    assert identify('e^(-3)*3^x/x!', DiscreteRange([0, 1, 2])) is None


def test_binomial():
    match = identify('binomial(10,x)*0.3^x*(1-0.3)^(10-x)', parse_range('0,1,2,3,4,5,6,7,8,9,10'))
    assert match.family == 'binomial'
    assert match.params['n'] == 10
    assert np.isclose(match.params['p'], .3)
    assert match.pgf is not None


def test_geometric():
    match = identify('0.25*(0.75)^(x-1)', parse_range('1,2,3,4,5,6,7,8'))
    assert match.family == 'geometric'
    assert np.isclose(match.params['p'], .25)


def test_beta():
    match = identify('12x^2(1-x)', parse_range('0<x<1'))
    assert match.family == 'beta'
    assert np.isclose(match.params['alpha'], 3)
    assert np.isclose(match.params['beta'], 2)

    match = identify('x^2(1-x)^3', parse_range('0<x<1'))
    assert np.isclose(match.params['beta'], 4)


def test_normal():
    match = identify('e^(-x^2/2)/sqrt(2pi)', realline)
    assert match.family == 'normal'
    assert np.isclose(match.params['mu'], 0)
    assert np.isclose(match.params['sigma'], 1)

    match = identify('e^(-(x-3)^2/8)/sqrt(8pi)', realline)
    assert np.isclose(match.params['mu'], 3)
    assert np.isclose(match.params['sigma'], 2)

    match = identify('exp(-(x-1)^2/(2*4))/sqrt(8*pi)', realline)
    assert np.isclose(match.params['mu'], 1)
    assert np.isclose(match.params['sigma'], 2)


def test_uniform():
    match = identify('0.25', parse_range('0<x<4'))
    assert match.family == 'uniform'
    assert match.params['a'] == 0
    assert match.params['b'] == 4
    assert identify('1/4', parse_range('0<x<4')).family == 'uniform'

    # Uniform on [0, 1] is checked after beta
    assert identify('1', parse_range('0<x<1')).family == 'uniform'


def test_no_match():
    assert identify('x^3+1', parse_range('0<x<1')) is None
    assert identify('x/6', parse_range('0,1,2,3')) is None
    assert identify('0.3', parse_range('0<x<4')) is None
