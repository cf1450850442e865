"""
EAN Run Package

Everything needed to run the evolutionary loop: configuration, the comparison
and evaluation functions that drive tournaments, the log book and the trial.

Modules:
    config:     Config class (INI configuration)
    comparison: direct/inverse comparison functions
    evaluation: BackpropEvaluation class
    logbook:    LogBook class
    trial:      Trial class (microbial genetic algorithm)
"""

from ean.run.comparison import comparison_functions, direct_comparison, inverse_comparison
from ean.run.config     import Config
from ean.run.evaluation import BackpropEvaluation
from ean.run.logbook    import LogBook
from ean.run.trial      import Trial

__all__ = ['BackpropEvaluation',
           'Config',
           'LogBook',
           'Trial',
           'comparison_functions',
           'direct_comparison',
           'inverse_comparison']
