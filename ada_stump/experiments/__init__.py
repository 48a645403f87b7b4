"""
Experiments Package

End-to-end AdaBoost experiments on synthetic data.
"""

from .run_adaboost import run_adaboost_experiment, run_model_comparison

__all__ = [
    'run_adaboost_experiment',
    'run_model_comparison'
]
