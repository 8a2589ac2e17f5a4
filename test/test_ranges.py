''' Test parsing domain strings '''
import numpy as np

from stacalc.analyzer.ranges import parse_range, DiscreteRange, ContinuousRange


def test_discrete():
    ''' Lists of values are discrete, in the order entered '''
    rng = parse_range('0,1,2,3')
    assert isinstance(rng, DiscreteRange)
    assert rng.kind == 'discrete'
    assert rng.values == [0, 1, 2, 3]

    assert parse_range('x = 1, 2, 3').values == [1, 2, 3]
    assert parse_range('3, 1, 2, 2').values == [3, 1, 2, 2]   # Order and duplicates kept
    assert parse_range('-1, 0.5, 2').values == [-1, .5, 2]
    assert parse_range('{1, 2, 3, 4, 5, 6}').values == [1, 2, 3, 4, 5, 6]


def test_interval():
    ''' Double inequalities '''
    assert parse_range('0<x<1') == ContinuousRange(0, 1)
    assert parse_range('0 < x < 5') == ContinuousRange(0, 5)
    assert parse_range('-2 <= x <= 2') == ContinuousRange(-2, 2)
    assert parse_range('0 ≤ x ≤ 1') == ContinuousRange(0, 1)
    assert parse_range('0<x<infinity') == ContinuousRange(0, np.inf)
    assert parse_range('-inf < x < inf') == ContinuousRange(-np.inf, np.inf)
    assert parse_range('-∞<x<∞') == ContinuousRange(-np.inf, np.inf)
    assert parse_range('<x<') == ContinuousRange(-np.inf, np.inf)


def test_reversed():
    ''' Reversed finite bounds are swapped '''
    rng = parse_range('5<x<2')
    assert rng.lo == 2 and rng.hi == 5


def test_half_line():
    ''' Single inequalities '''
    assert parse_range('x>0') == ContinuousRange(0, np.inf)
    assert parse_range('x >= 2') == ContinuousRange(2, np.inf)
    assert parse_range('x<3') == ContinuousRange(-np.inf, 3)
    assert parse_range('x <= -1') == ContinuousRange(-np.inf, -1)
    assert parse_range('0<x') == ContinuousRange(0, np.inf)
    assert parse_range('5>x') == ContinuousRange(-np.inf, 5)
    assert parse_range('x>abc') == ContinuousRange(-np.inf, np.inf)   # Unparseable bound


def test_infinity_words():
    assert parse_range('0 to infinity') == ContinuousRange(0, np.inf)
    assert parse_range('all real numbers, -inf to inf') == ContinuousRange(-np.inf, np.inf)


def test_fallback():
    ''' Unrecognized text is the whole real line '''
    rng = parse_range('anything')
    assert rng.kind == 'continuous'
    assert rng.lo == -np.inf and rng.hi == np.inf
    assert parse_range('') == ContinuousRange(-np.inf, np.inf)


def test_latex():
    assert parse_range('0<x<infinity').latex() == '0 < x < \\infty'
    assert parse_range('0,1,2').latex() == 'x = 0, 1, 2'
    assert parse_range('0.5<x<1').latex() == '0.5 < x < 1'
    assert parse_range(','.join(str(i) for i in range(20))).latex() == 'x = 0, 1, 2, \\ldots, 18, 19'
