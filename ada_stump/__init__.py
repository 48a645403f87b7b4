"""
ada_stump

AdaBoost with horizontal / vertical decision stumps on labelled 2D points.
"""

from .models import (
    AdaBoostStumps,
    DecisionStump,
    Axis,
    Polarity,
    StumpFitter,
    WeightDistribution,
    fit_stump,
    run_adaboost,
    AdaBoostStumpError,
    InvalidInputError,
    DegenerateFitError,
    WeightCollapseError,
    EnsembleFallbackWarning
)

__version__ = "0.1.0"

__all__ = [
    'AdaBoostStumps',
    'DecisionStump',
    'Axis',
    'Polarity',
    'StumpFitter',
    'WeightDistribution',
    'fit_stump',
    'run_adaboost',
    'AdaBoostStumpError',
    'InvalidInputError',
    'DegenerateFitError',
    'WeightCollapseError',
    'EnsembleFallbackWarning'
]
