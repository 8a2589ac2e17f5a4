''' Results of analyzing a user-entered distribution '''

from typing import Optional, Union
from dataclasses import dataclass, field
import numpy as np
import sympy

from ..common import reporter
from .ranges import DiscreteRange, ContinuousRange
from .report.analyzer import ReportAnalysis


@dataclass
class ValidationResult:
    ''' Total probability of the function over its domain

        Attributes:
            total: Sum (discrete) or integral (continuous) of f over the domain
            isvalid: Whether total is within tolerance of 1
    '''
    total: float
    isvalid: bool

    @property
    def constant(self):
        ''' Normalization constant c such that c*f is a valid distribution '''
        if self.total == 0 or not np.isfinite(self.total):
            return np.nan
        return 1 / self.total


@dataclass
class MomentSet:
    ''' Moments of the (normalized) distribution. All values are numerical approximations.

        Attributes:
            mean: E[X]
            second: E[X^2]
            variance: E[X^2] - E[X]^2
    '''
    mean: float
    second: float
    variance: float

    @property
    def std(self):
        ''' Standard deviation, nan if the variance came out negative '''
        return float(np.sqrt(self.variance)) if self.variance >= 0 else np.nan


@dataclass
class DistributionMatch:
    ''' A standard distribution recognized from the function's form

        Attributes:
            name: Full name, e.g. "Exponential Distribution"
            family: Short tag, e.g. "exponential"
            notation: Latex notation, e.g. "X \\sim Exp(2)"
            params: Extracted parameters. None where the parameter could not
                be read from the function (the formulas then use a symbol).
            mgf: Moment generating function as sympy expression of t
            pdf: PDF/PMF as sympy expression of x
            pgf: Probability generating function of t (discrete only) or None
    '''
    name: str
    family: str
    notation: str
    params: dict
    mgf: sympy.Expr
    pdf: sympy.Expr
    pgf: Optional[sympy.Expr] = None


@reporter.reporter(ReportAnalysis)
@dataclass
class AnalysisResults:
    ''' Everything computed for one function/domain pair

        Attributes:
            function: Function as entered
            expr: Evaluable form of the function
            display: Display form of the function
            domain: Parsed domain
            validation: Total mass check
            moments: Mean, second moment and variance
            match: Recognized standard distribution, or None
            cdf: Symbolic CDF (continuous) or None when unavailable
            generic_mgf: Unevaluated E[e^{tX}] integral or sum, for when no
                distribution is recognized
            guidance: Message explaining why the function was not analyzed
                (domain does not suit the function). Numerical fields are None.
            custom: Extra moments E[X^r], keyed by r
            probabilities: Follow-up queries keyed by k, each a tuple of
                P(X=k), P(X<=k) and P(X>k)
    '''
    function: str
    expr: str
    display: str
    domain: Union[DiscreteRange, ContinuousRange]
    validation: Optional[ValidationResult] = None
    moments: Optional[MomentSet] = None
    match: Optional[DistributionMatch] = None
    cdf: Optional[sympy.Expr] = None
    generic_mgf: Optional[sympy.Expr] = None
    guidance: Optional[str] = None
    custom: dict = field(default_factory=dict)
    probabilities: dict = field(default_factory=dict)

    @property
    def kind(self):
        ''' 'discrete' or 'continuous' '''
        return self.domain.kind

    @property
    def analyzed(self):
        ''' The numerical analysis was performed '''
        return self.guidance is None
