"""
Stump Components Package

This package contains the components of the AdaBoost implementation:
the decision stump record, the grid-search stump fitter, the training
weight distribution and the boosting core.
"""

from .exceptions import (
    AdaBoostStumpError,
    InvalidInputError,
    DegenerateFitError,
    WeightCollapseError,
    EnsembleFallbackWarning
)
from .decision_stump import DecisionStump, Axis, Polarity
from .data_transforms import (
    _validate_points,
    _validate_labels,
    _validate_weights,
    _validate_training_data,
    _normalize_array,
    _compute_confidence
)
from .stump_fitter import StumpFitter, fit_stump
from .weight_distribution import WeightDistribution
from .adaboost_core import (
    AdaBoostStumps,
    run_adaboost,
    staged_ensemble_scores,
    ensemble_decision,
    predict_ensemble,
    ensemble_margins
)

__all__ = [
    'AdaBoostStumpError',
    'InvalidInputError',
    'DegenerateFitError',
    'WeightCollapseError',
    'EnsembleFallbackWarning',
    'DecisionStump',
    'Axis',
    'Polarity',
    '_validate_points',
    '_validate_labels',
    '_validate_weights',
    '_validate_training_data',
    '_normalize_array',
    '_compute_confidence',
    'StumpFitter',
    'fit_stump',
    'WeightDistribution',
    'AdaBoostStumps',
    'run_adaboost',
    'staged_ensemble_scores',
    'ensemble_decision',
    'predict_ensemble',
    'ensemble_margins'
]
