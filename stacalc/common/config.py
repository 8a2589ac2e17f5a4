''' Settings for the distribution analyzer.

    The validity tolerance and the finite stand-in for infinite integration
    limits were tuned by hand and don't suit every density (heavy tails need a
    larger surrogate), so they can be changed and saved to a yaml file.
'''
import logging
from dataclasses import dataclass, asdict, fields
import numpy as np
import yaml


# pyYaml can't serialize numpy float64 for some reason. Add custom representer.
def np64_representer(dumper: yaml.Dumper, data: np.float64):
    ''' Represent numpy float64 as yaml '''
    return dumper.represent_float(float(data))  # Just convert to regular float.


def npi64_representer(dumper: yaml.Dumper, data: np.int64):
    ''' Represent numpy int64 as yaml '''
    return dumper.represent_int(int(data))


yaml.add_representer(np.float64, np64_representer)
yaml.add_representer(np.int64, npi64_representer)


@dataclass
class AnalyzerSettings:
    ''' Tunable parameters of the analysis

        Attributes:
            tolerance: Total mass within this distance of 1 is a valid distribution
            surrogate: Infinite integration limits are replaced by +/- surrogate
            steps: Number of Simpson intervals for numerical integration
            uniform_tolerance: Allowed difference between f((a+b)/2) and 1/(b-a)
                when recognizing a uniform distribution
            symbolic: Attempt symbolic (sympy) derivation of the CDF
            sigfigs: Significant figures in reports
    '''
    tolerance: float = 0.05
    surrogate: float = 100.
    steps: int = 10000
    uniform_tolerance: float = 0.01
    symbolic: bool = True
    sigfigs: int = 4

    def __post_init__(self):
        defaults = {f.name: f.default for f in fields(self)}
        for name, check in (('tolerance', lambda v: v > 0),
                            ('surrogate', lambda v: v > 0),
                            ('steps', lambda v: v >= 2),
                            ('uniform_tolerance', lambda v: v > 0),
                            ('sigfigs', lambda v: v >= 1)):
            value = getattr(self, name)
            default = defaults[name]
            try:
                value = type(default)(value)
                valid = check(value) and np.isfinite(value)
            except (TypeError, ValueError):
                valid = False
            if not valid:
                logging.warning('Invalid setting %s = %s. Using %s.', name, getattr(self, name), default)
                value = default
            setattr(self, name, value)
        self.symbolic = bool(self.symbolic)

    def get_config(self):
        ''' Get configuration dictionary '''
        return asdict(self)

    def load_config(self, config):
        ''' Load values from the configuration dictionary. Unknown keys are ignored. '''
        names = [f.name for f in fields(self)]
        for key, value in config.items():
            if key in names:
                setattr(self, key, value)
            else:
                logging.warning('Unknown setting %s', key)
        self.__post_init__()

    @classmethod
    def from_config(cls, config):
        ''' Create new settings from the config dictionary '''
        settings = cls()
        settings.load_config(config)
        return settings

    def save_config(self, fname):
        ''' Save configuration to file.

            Args:
                fname: File name or open file object to write configuration to
        '''
        out = yaml.dump(self.get_config(), default_flow_style=False)
        try:
            fname.write(out)
        except AttributeError:
            with open(fname, 'w', encoding='utf-8') as f:
                f.write(out)

    @classmethod
    def from_configfile(cls, fname):
        ''' Read and parse the configuration file.

            Args:
                fname: File name or open file object to read configuration from

            Returns:
                New AnalyzerSettings instance
        '''
        try:
            yml = fname.read()  # fname is file object
        except AttributeError:
            with open(fname, 'r', encoding='utf-8') as fobj:  # fname is string
                yml = fobj.read()

        try:
            config = yaml.safe_load(yml)
        except yaml.YAMLError as exc:
            raise ValueError(f'Cannot read settings file {fname}') from exc

        if not isinstance(config, dict):
            raise ValueError(f'Settings file {fname} must contain a mapping')
        return cls.from_config(config)
