"""
Models Package

AdaBoost over axis-aligned decision stumps and its abstract base class.
"""

from .stump_components import (
    AdaBoostStumps,
    DecisionStump,
    Axis,
    Polarity,
    StumpFitter,
    WeightDistribution,
    fit_stump,
    run_adaboost,
    predict_ensemble,
    ensemble_margins,
    AdaBoostStumpError,
    InvalidInputError,
    DegenerateFitError,
    WeightCollapseError,
    EnsembleFallbackWarning
)
from .base import BoostingClassifierBase

__all__ = [
    'AdaBoostStumps',
    'DecisionStump',
    'Axis',
    'Polarity',
    'StumpFitter',
    'WeightDistribution',
    'fit_stump',
    'run_adaboost',
    'predict_ensemble',
    'ensemble_margins',
    'AdaBoostStumpError',
    'InvalidInputError',
    'DegenerateFitError',
    'WeightCollapseError',
    'EnsembleFallbackWarning',
    'BoostingClassifierBase'
]
