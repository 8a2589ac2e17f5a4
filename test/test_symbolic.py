''' Test symbolic derivations '''
import sympy

from stacalc.analyzer import SymbolicEngine, parse_range


x, t = sympy.symbols('x t')


def test_antiderivative():
    engine = SymbolicEngine()
    assert engine.available
    F = engine.antiderivative('2e^(-2x)')
    assert sympy.simplify(F + sympy.exp(-2*x)) == 0

    F = engine.antiderivative('3x^2')
    assert sympy.simplify(F - x**3) == 0

    # Other variable of integration
    F = engine.antiderivative('2t', var='t')
    assert sympy.simplify(F - t**2) == 0


def test_antiderivative_none():
    ''' Disabled engine, unparseable input, or unsolved integrals give None '''
    assert not SymbolicEngine(enabled=False).available
    assert SymbolicEngine(enabled=False).antiderivative('2x') is None
    assert SymbolicEngine().antiderivative('(x+') is None
    assert SymbolicEngine().antiderivative('x^x') is None


def test_generic_mgf_discrete():
    ''' Consecutive integers give a Sum, other value lists an explicit sum of terms '''
    engine = SymbolicEngine()
    mgf = engine.generic_mgf('x/6', parse_range('0,1,2,3'))
    assert isinstance(mgf, sympy.Sum)
    assert sympy.simplify(mgf.doit().subs(t, 0)) == 1

    mgf = engine.generic_mgf('x/9', parse_range('1,3,5'))
    assert not mgf.has(sympy.Sum)
    assert mgf.has(sympy.exp(5*t))
    assert not mgf.has(sympy.exp(2*t))
    assert sympy.simplify(mgf.subs(t, 0)) == 1

    mgf = engine.generic_mgf('1/2', parse_range('0.5,1.5'))
    assert not mgf.has(sympy.Sum)
    assert sympy.simplify(mgf - (sympy.exp(t/2) + sympy.exp(3*t/2))/2) == 0
