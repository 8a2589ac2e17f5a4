''' Distribution Analyzer checks a student-entered PDF or PMF, computes its
    moments and probabilities, and recognizes standard distributions from the
    way the function is written.
'''

from .ranges import DiscreteRange, ContinuousRange, parse_range
from .numeric import integrate, summate, evaluate
from .recognize import identify
from .symbolic import SymbolicEngine
from .analyzer import (DistAnalyzer, DomainMismatchError, check_domain, validate, moments,
                       custom_moment, point_probability, cumulative_probability)
