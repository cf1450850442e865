"""
EAN Comparison Module

A comparison function decides the winner of a tournament: given the scores
of two genomes, it returns True when the first score beats the second one.

Functions:
    direct_comparison:  The higher score wins (fitness-like scores)
    inverse_comparison: The lower score wins (error-like scores)
"""

from types  import MappingProxyType
from typing import Callable

ComparisonFunction = Callable[[float, float], bool]

def direct_comparison(score1: float, score2: float) -> bool:
    return score1 > score2

def inverse_comparison(score1: float, score2: float) -> bool:
    return score1 < score2

comparison_functions = MappingProxyType({
    "direct" : direct_comparison,
    "inverse": inverse_comparison,
    })
