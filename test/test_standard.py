''' Test standard distribution models '''
import pytest
import numpy as np
import sympy

from stacalc.standard import get_model, from_config, Binomial, Normal


t = sympy.Symbol('t')


def test_binomial():
    b = get_model('binomial', n=10, p=.5)
    assert np.isclose(b.pdf(5), 0.24609, atol=1E-5)
    assert np.isclose(b.cdf(5), 0.62305, atol=1E-5)
    assert np.isclose(b.sf(5), 1-0.62305, atol=1E-5)
    assert b.pdf(2.5) == 0
    assert b.pdf(11) == 0
    assert b.cdf(-1) == 0
    assert np.isclose(b.cdf(10), 1)
    assert b.ppf(.5) == 5
    assert b.mean() == 5
    assert b.var() == 2.5
    assert np.isclose(b.interval(5, 5), b.pdf(5))
    assert np.isclose(b.interval(4, 6), b.pdf(4) + b.pdf(5) + b.pdf(6))
    assert b.support() == list(range(11))
    assert sympy.expand(b.pgf() - ((1+t)/2)**10) == 0


def test_binomial_large_n():
    ''' Large n stays finite (binomial coefficient beyond float range) '''
    b = get_model('binomial', n=2000, p=.5)
    assert np.isclose(b.pdf(1000), 1/np.sqrt(np.pi*1000), rtol=1E-3)
    assert .5 < b.cdf(1000) < .52
    assert np.isclose(b.cdf(1000) + b.sf(1000), 1)
    assert b.ppf(.5) == 1000
    assert np.isclose(sum(b.pdf(k) for k in b.support()), 1)

    b = get_model('binomial', n=5, p=0)
    assert np.isclose(b.pdf(0), 1)
    assert np.isclose(b.cdf(0), 1)
    b = get_model('binomial', n=5, p=1)
    assert np.isclose(b.pdf(5), 1)
    assert np.isclose(b.cdf(4), 0)


def test_poisson():
    p = get_model('poi', lam=2)
    assert np.isclose(p.pdf(0), np.exp(-2))
    assert np.isclose(p.cdf(2), 5*np.exp(-2))
    assert p.ppf(.5) == 2
    assert p.mean() == 2 and p.var() == 2
    assert np.isclose(sum(p.pdf(k) for k in range(50)), 1)


def test_geometric():
    g = get_model('geometric', p=.25)
    assert g.pdf(0) == 0
    assert np.isclose(g.pdf(1), .25)
    assert np.isclose(g.cdf(3), 1 - .75**3)
    assert g.ppf(1 - .75**3) == 3
    assert np.isclose(g.mean(), 4)
    assert np.isclose(g.var(), 12)


def test_normal():
    n = get_model('normal', mu=0, sigma=1)
    assert np.isclose(n.cdf(1.96), .975, atol=.001)
    assert np.isclose(n.cdf(0), .5)
    assert np.isclose(n.pdf(0), 1/np.sqrt(2*np.pi))
    assert np.isclose(n.ppf(.975), 1.959964, atol=1E-6)
    assert np.isclose(n.ppf(.01), -2.326348, atol=1E-6)   # Lower tail region
    assert np.isclose(n.ppf(.99), 2.326348, atol=1E-6)    # Upper tail region
    assert n.ppf(0) == -np.inf
    assert np.isclose(n.interval(-1, 1), .6827, atol=1E-4)

    n = Normal(mu=10, sigma=2)
    assert np.isclose(n.ppf(n.cdf(13)), 13, atol=1E-6)
    assert n.var() == 4
    assert sympy.simplify(n.mgf() - sympy.exp(10*t + 2*t**2)) == 0
    assert n.pgf() is None


def test_exponential():
    e = get_model('exponential', lam=2)
    assert np.isclose(e.cdf(1), 1 - np.exp(-2))
    assert np.isclose(e.ppf(.5), np.log(2)/2)
    assert e.pdf(-1) == 0
    assert e.mean() == .5
    assert sympy.simplify(e.mgf() - 2/(2-t)) == 0


def test_gamma():
    g = get_model('gamma', alpha=2, beta=1)
    assert np.isclose(g.cdf(1), 1 - 2/np.e)
    assert np.isclose(g.pdf(1), np.exp(-1))
    assert np.isclose(g.ppf(g.cdf(1.5)), 1.5)
    assert g.mean() == 2 and g.var() == 2

    # alpha=1 is exponential
    g = get_model('gamma', alpha=1, beta=3)
    assert np.isclose(g.pdf(0), 3)
    assert np.isclose(g.cdf(1), 1 - np.exp(-3))


def test_invalid():
    ''' Invalid parameters raise ValueError '''
    with pytest.raises(ValueError):
        get_model('binomial', n=10, p=1.5)
    with pytest.raises(ValueError):
        get_model('binomial', n=2.5, p=.5)
    with pytest.raises(ValueError):
        get_model('normal', mu=0, sigma=0)
    with pytest.raises(ValueError):
        get_model('poisson', lam=-1)
    with pytest.raises(ValueError):
        get_model('gamma', alpha=1)     # Missing beta
    with pytest.raises(ValueError):
        get_model('normal', mu=0, sigma=1, k=2)
    with pytest.raises(ValueError):
        get_model('normal', mu='abc', sigma=1)
    with pytest.raises(ValueError):
        get_model('cauchy', a=1)


def test_config():
    b = Binomial(n=10, p=.3)
    config = b.get_config()
    assert config == {'dist': 'binomial', 'n': 10, 'p': .3}
    b2 = from_config(config)
    assert b2.params == b.params
    assert isinstance(b2, Binomial)


def test_report():
    ''' Reports are generated without error '''
    b = get_model('binomial', n=10, p=.5)
    md = b.report.summary().get_md(mathfmt='text')
    assert 'Binomial Distribution' in md
    assert '2.500' in md    # Variance
    md = b.report.all(xvalues=[5], qvalues=[.5]).get_md(mathfmt='text', figfmt='text')
    assert '0.2461' in md
