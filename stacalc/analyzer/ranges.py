''' Parse the domain (support) of a user-entered distribution.

    Domains are typed by students in free form: "0 < x < infinity", "x >= 2",
    "0,1,2,3", "x = 1, 2, 3". Anything with an inequality or infinity is a
    continuous interval, anything else is a list of discrete values. Text that
    can't be understood falls back to the whole real line instead of failing.
'''
import re
from dataclasses import dataclass, field
import numpy as np


_INFINITY = ('infinity', 'inf', '∞')
_LEADING_FLOAT = re.compile(r'[+-]?(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?')


@dataclass
class DiscreteRange:
    ''' Explicit set of values X can take, in the order entered '''
    values: list = field(default_factory=list)

    @property
    def kind(self):
        return 'discrete'

    @property
    def first(self):
        return self.values[0]

    def latex(self):
        ''' Domain as latex, e.g. x = 0, 1, 2 '''
        vals = [_fmt(v) for v in self.values]
        if len(vals) > 6:
            vals = vals[:3] + ['\\ldots'] + vals[-2:]
        return 'x = ' + ', '.join(vals)


@dataclass
class ContinuousRange:
    ''' Interval lo < x < hi. Either end may be infinite. '''
    lo: float = -np.inf
    hi: float = np.inf

    def __post_init__(self):
        if np.isfinite(self.lo) and np.isfinite(self.hi) and self.lo > self.hi:
            self.lo, self.hi = self.hi, self.lo

    @property
    def kind(self):
        return 'continuous'

    @property
    def bounded(self):
        ''' Both ends finite '''
        return bool(np.isfinite(self.lo) and np.isfinite(self.hi))

    def latex(self):
        ''' Domain as latex, e.g. 0 < x < \\infty '''
        return f'{_fmt(self.lo)} < x < {_fmt(self.hi)}'


def _fmt(value):
    ''' Format a bound or value for display '''
    if value == np.inf:
        return '\\infty'
    elif value == -np.inf:
        return '-\\infty'
    elif float(value).is_integer():
        return str(int(value))
    return f'{value:g}'


def _has_infinity(text):
    return any(token in text for token in _INFINITY)


def _parse_float(text):
    ''' Parse the leading number in text, ignoring whatever follows (like "2)").
        Returns None if text does not start with a number.
    '''
    match = _LEADING_FLOAT.match(text)
    if match is None:
        return None
    return float(match.group(0))


def _bound(text, default):
    ''' Parse one side of an inequality. Infinity tokens take the sign of default. '''
    if _has_infinity(text):
        return default
    value = _parse_float(text)
    return default if value is None else value


def parse_range(rangestr):
    ''' Parse a domain string into a DiscreteRange or ContinuousRange.

        Args:
            rangestr (string): Domain as typed, e.g. "0<x<1", "x>0",
                "0 to infinity", or "1,2,3,4,5,6"

        Returns:
            DiscreteRange or ContinuousRange. Unrecognized text gives
            the unbounded ContinuousRange(-inf, inf).
    '''
    s = re.sub(r'\s+', '', str(rangestr)).lower()
    s = s.replace('<=', '<').replace('>=', '>').replace('≤', '<').replace('≥', '>')

    if '<' in s or '>' in s or _has_infinity(s):
        if '<x<' in s:
            left, right = s.split('<x<', 1)
            return ContinuousRange(_bound(left, -np.inf), _bound(right, np.inf))
        elif 'x>' in s:
            return ContinuousRange(_bound(s.split('x>', 1)[1], -np.inf), np.inf)
        elif 'x<' in s:
            return ContinuousRange(-np.inf, _bound(s.split('x<', 1)[1], np.inf))
        elif '<x' in s:
            return ContinuousRange(_bound(s.split('<x', 1)[0], -np.inf), np.inf)
        elif '>x' in s:
            return ContinuousRange(-np.inf, _bound(s.split('>x', 1)[0], np.inf))
        elif _has_infinity(s) and '0' in s:
            return ContinuousRange(0, np.inf)   # "0 to infinity"
        return ContinuousRange(-np.inf, np.inf)

    s = re.sub(r'[^0-9,.\-]', '', s)
    values = [_parse_float(token) for token in s.split(',')]
    values = [v for v in values if v is not None]
    if values:
        return DiscreteRange(values)
    return ContinuousRange(-np.inf, np.inf)
