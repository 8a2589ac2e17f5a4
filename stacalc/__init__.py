'''
STACALC - Probability Distribution Calculator

Check that a typed function is a valid PDF or PMF, compute its moments,
recognize standard distributions, and work with the standard distributions
directly from their parameters.
'''

from .version import __version__, __date__

from .common.config import AnalyzerSettings
from .analyzer import DistAnalyzer, parse_range, identify
from .standard import get_model

__all__ = ['__version__', '__date__', 'AnalyzerSettings', 'DistAnalyzer', 'parse_range',
           'identify', 'get_model']
