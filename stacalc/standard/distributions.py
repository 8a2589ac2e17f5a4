''' Standard Distribution Models

Closed-form calculators for the standard distributions of an introductory
statistics course, defined directly from their parameters. Each model gives
the pdf (or pmf), cdf, quantiles, mean and variance, and the generating
functions as sympy expressions.

Use get_model(), given a distribution name and its parameters, to return an
instance of the model.
'''

import numpy as np
import sympy
from scipy import special

from ..common import reporter
from .report.distributions import ReportStandard


x, t = sympy.symbols('x t')


def get_model(name, **params):
    ''' Get an instance of a standard distribution model.

        Args:
            name (string): Name of the distribution, e.g. 'normal', 'binomial', 'poi'
            params: Parameters of the distribution (see each model's argnames)

        Raises:
            ValueError: for an unknown distribution or invalid parameters
    '''
    key = name.lower().strip()
    if key not in _aliases:
        raise ValueError(f'Unknown distribution "{name}". Use one of {", ".join(sorted(_models))}')
    return _aliases[key](**params)


def from_config(config):
    ''' Load a model from a config dictionary '''
    config = config.copy()
    name = config.pop('dist', 'normal')
    return get_model(name, **config)


def _check(valid, message):
    if not valid:
        raise ValueError(message)


def _inverse_normal(q):
    ''' Inverse of the standard normal CDF using Acklam's rational approximation
        (relative error below 1.15E-9).
    '''
    a = [-3.969683028665376e+01, 2.209460984245205e+02, -2.759285104469687e+02,
         1.383577518672690e+02, -3.066479806614716e+01, 2.506628277459239e+00]
    b = [-5.447609879822406e+01, 1.615858368580409e+02, -1.556989798598866e+02,
         6.680131188771972e+01, -1.328068155288572e+01]
    c = [-7.784894002430293e-03, -3.223964580411365e-01, -2.400758277161838e+00,
         -2.549732539343734e+00, 4.374664141464968e+00, 2.938163982698783e+00]
    d = [7.784695709041462e-03, 3.224671290700398e-01, 2.445134137142996e+00,
         3.754408661907416e+00]
    plow = 0.02425
    phigh = 1 - plow

    if q <= 0:
        return -np.inf
    elif q >= 1:
        return np.inf
    elif q < plow:
        r = np.sqrt(-2*np.log(q))
        return ((((((c[0]*r+c[1])*r+c[2])*r+c[3])*r+c[4])*r+c[5]) /
                ((((d[0]*r+d[1])*r+d[2])*r+d[3])*r+1))
    elif q > phigh:
        r = np.sqrt(-2*np.log(1-q))
        return -((((((c[0]*r+c[1])*r+c[2])*r+c[3])*r+c[4])*r+c[5]) /
                 ((((d[0]*r+d[1])*r+d[2])*r+d[3])*r+1))
    r = q - 0.5
    s = r*r
    return ((((((a[0]*s+a[1])*s+a[2])*s+a[3])*s+a[4])*s+a[5])*r /
            (((((b[0]*s+b[1])*s+b[2])*s+b[3])*s+b[4])*s+1))


@reporter.reporter(ReportStandard)
class StandardModel:
    ''' Base class for standard distribution models

        Subclasses define `name`, `argnames`, `discrete`, and the
        distribution functions.
    '''
    name = ''
    argnames = []
    discrete = False

    def __init__(self, **params):
        unknown = set(params) - set(self.argnames)
        if unknown:
            raise ValueError(f'Unknown parameter(s) {", ".join(sorted(unknown))} for {self.name}. '
                             f'Expected {", ".join(self.argnames)}')
        missing = set(self.argnames) - set(params)
        if missing:
            raise ValueError(f'Missing parameter(s) {", ".join(sorted(missing))} for {self.name}')
        try:
            self.params = {k: float(v) for k, v in params.items()}
        except (TypeError, ValueError) as exc:
            raise ValueError(f'Parameters of {self.name} must be numbers') from exc
        self.check_params()

    def __repr__(self):
        args = ', '.join(f'{k}={v:g}' for k, v in self.params.items())
        return f'{self.__class__.__name__}({args})'

    def check_params(self):
        ''' Raise ValueError if the parameters are out of range '''

    def get_config(self):
        ''' Get configuration dictionary describing this model '''
        config = {'dist': self.name}
        config.update(self.params)
        return config

    def pdf(self, x):
        ''' Probability density (continuous) or mass (discrete) at x '''
        raise NotImplementedError

    def cdf(self, x):
        ''' P(X <= x) '''
        raise NotImplementedError

    def ppf(self, q):
        ''' Quantile: smallest x with cdf(x) >= q '''
        raise NotImplementedError

    def sf(self, x):
        ''' Survival function P(X > x) '''
        return 1 - self.cdf(x)

    def interval(self, a, b):
        ''' P(a <= X <= b) '''
        if b < a:
            return 0.
        if self.discrete:
            return self.cdf(b) - self.cdf(np.ceil(a) - 1)
        return self.cdf(b) - self.cdf(a)

    def mean(self):
        raise NotImplementedError

    def var(self):
        raise NotImplementedError

    def std(self):
        return float(np.sqrt(self.var()))

    def mgf(self):
        ''' Moment generating function as sympy expression of t '''
        raise NotImplementedError

    def pgf(self):
        ''' Probability generating function as sympy expression of t. None for continuous models. '''
        return None

    def support(self):
        ''' Range of x values for plotting (list of values for discrete models) '''
        lo, hi = self.ppf(.001), self.ppf(.999)
        return np.linspace(lo, hi, 200)

    def helpstr(self):
        return ''

    def _sym(self, name):
        return sympy.nsimplify(self.params[name], tolerance=1E-10, rational=True)


class Binomial(StandardModel):
    ''' Binomial distribution, number of successes in n trials '''
    name = 'binomial'
    argnames = ['n', 'p']
    discrete = True

    def check_params(self):
        n, p = self.params['n'], self.params['p']
        _check(n >= 0 and float(n).is_integer(), 'Binomial n must be a non-negative integer')
        _check(0 <= p <= 1, 'Binomial p must be between 0 and 1')
        self.params['n'] = int(n)

    def pdf(self, x):
        n, p = self.params['n'], self.params['p']
        if x < 0 or x > n or not float(x).is_integer():
            return 0.
        # Log form so large n doesn't overflow the binomial coefficient
        logc = special.gammaln(n+1) - special.gammaln(x+1) - special.gammaln(n-x+1)
        return float(np.exp(logc + special.xlogy(x, p) + special.xlog1py(n-x, -p)))

    def cdf(self, x):
        n, p = self.params['n'], self.params['p']
        if x < 0:
            return 0.
        k = int(np.floor(x))
        if k >= n:
            return 1.
        return float(special.betainc(n-k, k+1, 1-p))

    def ppf(self, q):
        total = 0.
        for k in range(self.params['n']+1):
            total += self.pdf(k)
            if total >= q - 1E-12:
                return k
        return self.params['n']

    def mean(self):
        return self.params['n'] * self.params['p']

    def var(self):
        return self.params['n'] * self.params['p'] * (1-self.params['p'])

    def mgf(self):
        n, p = self.params['n'], self._sym('p')
        return (1 - p + p*sympy.exp(t))**n

    def pgf(self):
        n, p = self.params['n'], self._sym('p')
        return (1 - p + p*t)**n

    def support(self):
        return list(range(self.params['n']+1))

    def helpstr(self):
        return 'Binomial distribution with n trials and probability of success p. P(X=x) = C(n,x) p^x (1-p)^(n-x)'


class Poisson(StandardModel):
    ''' Poisson distribution with rate lambda '''
    name = 'poisson'
    argnames = ['lam']
    discrete = True

    def check_params(self):
        _check(self.params['lam'] > 0, 'Poisson lambda must be positive')

    def pdf(self, x):
        lam = self.params['lam']
        if x < 0 or not float(x).is_integer():
            return 0.
        # Log form so large x doesn't overflow the factorial
        return float(np.exp(x*np.log(lam) - lam - special.gammaln(x+1)))

    def cdf(self, x):
        if x < 0:
            return 0.
        return float(special.gammaincc(np.floor(x)+1, self.params['lam']))

    def ppf(self, q):
        if q >= 1:
            return np.inf
        k = 0
        while self.cdf(k) < q - 1E-12:
            k += 1
        return k

    def mean(self):
        return self.params['lam']

    def var(self):
        return self.params['lam']

    def mgf(self):
        lam = self._sym('lam')
        return sympy.exp(lam*(sympy.exp(t) - 1))

    def pgf(self):
        lam = self._sym('lam')
        return sympy.exp(lam*(t - 1))

    def support(self):
        return list(range(self.ppf(.999)+1))

    def helpstr(self):
        return 'Poisson distribution with rate lam. P(X=x) = lam^x e^(-lam) / x!'


class Geometric(StandardModel):
    ''' Geometric distribution, number of trials up to and including the first success '''
    name = 'geometric'
    argnames = ['p']
    discrete = True

    def check_params(self):
        _check(0 < self.params['p'] <= 1, 'Geometric p must be in (0, 1]')

    def pdf(self, x):
        p = self.params['p']
        if x < 1 or not float(x).is_integer():
            return 0.
        return float(p * (1-p)**(x-1))

    def cdf(self, x):
        if x < 1:
            return 0.
        return float(1 - (1-self.params['p'])**np.floor(x))

    def ppf(self, q):
        p = self.params['p']
        if p == 1 or q <= 0:
            return 1
        elif q >= 1:
            return np.inf
        return max(1, int(np.ceil(np.log(1-q) / np.log(1-p) - 1E-9)))

    def mean(self):
        return 1 / self.params['p']

    def var(self):
        p = self.params['p']
        return (1-p) / p**2

    def mgf(self):
        p = self._sym('p')
        return p*sympy.exp(t) / (1 - (1-p)*sympy.exp(t))

    def pgf(self):
        p = self._sym('p')
        return p*t / (1 - (1-p)*t)

    def support(self):
        return list(range(1, self.ppf(.999)+1))

    def helpstr(self):
        return 'Geometric distribution on 1, 2, 3, ... with probability of success p. P(X=x) = p (1-p)^(x-1)'


class Normal(StandardModel):
    ''' Normal distribution with mean mu and standard deviation sigma '''
    name = 'normal'
    argnames = ['mu', 'sigma']

    def check_params(self):
        _check(self.params['sigma'] > 0, 'Normal sigma must be positive')

    def pdf(self, x):
        mu, sigma = self.params['mu'], self.params['sigma']
        return float(np.exp(-(x-mu)**2 / (2*sigma**2)) / (sigma * np.sqrt(2*np.pi)))

    def cdf(self, x):
        mu, sigma = self.params['mu'], self.params['sigma']
        return float(0.5 * (1 + special.erf((x-mu) / (sigma*np.sqrt(2)))))

    def ppf(self, q):
        return self.params['mu'] + self.params['sigma'] * _inverse_normal(q)

    def mean(self):
        return self.params['mu']

    def var(self):
        return self.params['sigma']**2

    def mgf(self):
        mu, sigma = self._sym('mu'), self._sym('sigma')
        return sympy.exp(mu*t + sigma**2*t**2/2)

    def helpstr(self):
        return 'Normal distribution with mean mu and standard deviation sigma.'


class Exponential(StandardModel):
    ''' Exponential distribution with rate lambda '''
    name = 'exponential'
    argnames = ['lam']

    def check_params(self):
        _check(self.params['lam'] > 0, 'Exponential lambda must be positive')

    def pdf(self, x):
        lam = self.params['lam']
        return float(lam * np.exp(-lam*x)) if x >= 0 else 0.

    def cdf(self, x):
        return float(1 - np.exp(-self.params['lam']*x)) if x > 0 else 0.

    def ppf(self, q):
        if q >= 1:
            return np.inf
        return float(-np.log(1-q) / self.params['lam']) if q > 0 else 0.

    def mean(self):
        return 1 / self.params['lam']

    def var(self):
        return 1 / self.params['lam']**2

    def mgf(self):
        lam = self._sym('lam')
        return lam / (lam - t)

    def support(self):
        return np.linspace(0, self.ppf(.999), 200)

    def helpstr(self):
        return 'Exponential distribution with rate lam. f(x) = lam e^(-lam x), x > 0'


class Gamma(StandardModel):
    ''' Gamma distribution with shape alpha and rate beta '''
    name = 'gamma'
    argnames = ['alpha', 'beta']

    def check_params(self):
        _check(self.params['alpha'] > 0, 'Gamma alpha must be positive')
        _check(self.params['beta'] > 0, 'Gamma beta must be positive')

    def pdf(self, x):
        a, b = self.params['alpha'], self.params['beta']
        if x < 0:
            return 0.
        elif x == 0:
            return b if a == 1 else 0.
        return float(np.exp(a*np.log(b) + (a-1)*np.log(x) - b*x - special.gammaln(a)))

    def cdf(self, x):
        if x <= 0:
            return 0.
        return float(special.gammainc(self.params['alpha'], self.params['beta']*x))

    def ppf(self, q):
        return float(special.gammaincinv(self.params['alpha'], q) / self.params['beta'])

    def mean(self):
        return self.params['alpha'] / self.params['beta']

    def var(self):
        return self.params['alpha'] / self.params['beta']**2

    def mgf(self):
        a, b = self._sym('alpha'), self._sym('beta')
        return (b / (b - t))**a

    def support(self):
        return np.linspace(0, self.ppf(.999), 200)

    def helpstr(self):
        return ('Gamma distribution with shape alpha and rate beta. '
                'f(x) = beta^alpha x^(alpha-1) e^(-beta x) / Gamma(alpha), x > 0')


_models = {m.name: m for m in [Binomial, Poisson, Geometric, Normal, Exponential, Gamma]}
_aliases = dict(_models)
_aliases.update({'bin': Binomial, 'binom': Binomial, 'poi': Poisson, 'geo': Geometric, 'geom': Geometric,
                 'norm': Normal, 'gaussian': Normal, 'exp': Exponential, 'expo': Exponential,
                 'expon': Exponential})
