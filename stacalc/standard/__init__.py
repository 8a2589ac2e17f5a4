''' Standard distributions (Binomial, Poisson, Geometric, Normal, Exponential,
    Gamma) calculated directly from their parameters.
'''

from .distributions import (get_model, from_config, StandardModel, Binomial, Poisson,
                            Geometric, Normal, Exponential, Gamma)
