''' Test cases for uparser.py.
    Usage: run py.test from root folder.
'''
import pytest
import numpy
import sympy

from stacalc.common import uparser


def test_parse_math_ok():
    ''' Test parse_math. These should evaluate ok, no exception raised. '''
    uparser.parse_math('1+1')
    uparser._parse_math('2*6+cos(30)', fns=['cos'])
    uparser.parse_math('2**2')
    uparser.parse_math('(10+5)/3')
    uparser.parse_math('factorial(x)*gamma(x)')
    uparser.parse_math('binomial(10, x)*0.5^10')


def test_parse_math_fail():
    ''' Test parse_math. These should raise ValueError. '''
    with pytest.raises(ValueError):
        uparser.parse_math('import os')   # imports disabled

    with pytest.raises(ValueError):
        uparser.parse_math('print("ABC")')  # builtin functions disabled

    with pytest.raises(ValueError):
        uparser.parse_math('os.system("ls")')  # non-allowed function

    with pytest.raises(ValueError):
        uparser.parse_math('().__class__')     # Hack to get at base classes

    with pytest.raises(ValueError):
        uparser.parse_math('lambda x: x+1')   # Lambdas disabled

    with pytest.raises(ValueError):
        uparser.parse_math('numpy.pi')  # Attributes disabled

    with pytest.raises(ValueError):
        uparser.parse_math('2*f', name='f')  # Name parameter, can't be recursive

    with pytest.raises(ValueError):
        uparser.parse_math('sqrt(-1)')  # Imaginary numbers not supported

    assert uparser.parse_math('import os', raiseonerr=False) is None


def test_call():
    ''' Test callf function, verify results are same as plain math. '''
    x = numpy.array([1., 2., 3.])
    assert numpy.allclose(uparser.callf('x^2', {'x': x}), x**2)
    assert numpy.allclose(uparser.callf('exp(-x)', {'x': x}), numpy.exp(-x))
    assert numpy.allclose(uparser.callf('factorial(x)', {'x': x}), [1, 2, 6])
    assert numpy.isclose(uparser.callf('2*x', {'x': 4}), 8)


def test_evaluable():
    ''' Test rewriting typed functions into evaluable form '''
    assert uparser.to_evaluable('2x') == '2*x'
    assert uparser.to_evaluable('3(x+1)') == '3*(x+1)'
    assert uparser.to_evaluable('2e^(-2x)') == '2*exp(-2*x)'
    assert uparser.to_evaluable('e^-x') == 'exp(-x)'
    assert uparser.to_evaluable('2 E^-2x') == '2*exp(-2*x)'
    assert uparser.to_evaluable('e^(-x^2/2)') == 'exp(-x^2/2)'
    assert uparser.to_evaluable('xe^-x') == 'x*exp(-x)'
    assert uparser.to_evaluable('x!') == 'factorial(x)'
    assert uparser.to_evaluable('e^(-2)*2^x/x!') == 'exp(-2)*2^x/factorial(x)'
    assert uparser.to_evaluable('(x+1)!') == 'factorial(x+1)'
    assert uparser.to_evaluable('x(1-x)') == 'x*(1-x)'
    assert uparser.to_evaluable('(1-x)(1+x)') == '(1-x)*(1+x)'
    assert uparser.to_evaluable('x**2') == 'x^2'

    # Identifiers with digits and scientific notation are left alone
    assert uparser.to_evaluable('log10(x)') == 'log10(x)'
    assert uparser.to_evaluable('1e-3*x') == '1e-3*x'


def test_evaluable_idempotent():
    ''' Normalizing twice gives the same string '''
    for expr in ['2e^(-2x)', 'e^-4 4^x/x!', 'x^2(1-x)^3', '12x^2(1-x)', '0.5^x*(1-0.5)^(10-x)',
                 'e^(-(x-3)^2/8)/sqrt(8pi)', '1/6', 'xe^-x', '3(x+1)']:
        once = uparser.to_evaluable(expr)
        assert uparser.to_evaluable(once) == once
        assert 'e^' not in once
        assert '!' not in once


def test_evaluable_parses():
    ''' Normalized functions can be evaluated '''
    f = uparser.to_evaluable('2e^(-2x)')
    assert numpy.isclose(uparser.callf(f, {'x': 1.}), 2*numpy.exp(-2))
    f = uparser.to_evaluable('x^2(1-x)')
    assert numpy.isclose(uparser.callf(f, {'x': .5}), .125)
    f = uparser.to_evaluable('e^(-2)*2^x/x!')
    assert numpy.isclose(uparser.callf(f, {'x': 2.}), 2*numpy.exp(-2))


def test_evaluable_groups():
    ''' Juxtaposition after a closed group or factorial, signed group exponents '''
    assert uparser.to_evaluable('(1-x)x') == '(1-x)*x'
    assert uparser.to_evaluable('(x+1)2') == '(x+1)*2'
    assert uparser.to_evaluable('x!(10-x)!') == 'factorial(x)*factorial(10-x)'
    assert uparser.to_evaluable('e^-(x+1)') == 'exp(-(x+1))'
    assert uparser.to_evaluable('e^+(x)') == 'exp(x)'

    assert numpy.isclose(uparser.callf(uparser.to_evaluable('(1-x)x'), {'x': .5}), .25)
    assert numpy.isclose(uparser.callf(uparser.to_evaluable('(x+1)2'), {'x': 1.}), 4)
    assert numpy.isclose(uparser.callf(uparser.to_evaluable('e^-(x+1)'), {'x': 1.}), numpy.exp(-2))
    f = uparser.to_evaluable('10!/(x!(10-x)!)')
    assert numpy.isclose(uparser.callf(f, {'x': 3.}), 120)
    assert uparser.to_evaluable(f) == f


def test_display():
    ''' Test display form of functions '''
    assert uparser.to_display('2*exp(-2*x)') == '2·e^{-2·x}'
    assert uparser.to_display('x^10') == 'x^{10}'
    assert uparser.to_display('x ^ 2') == 'x^{2}'
    assert uparser.to_display('exp(-x)/2') == 'e^{-x}/2'
