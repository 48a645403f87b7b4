"""
Utils Package

Evaluation and visualization helpers for boosting experiments.
"""

from .evaluation import staged_evaluation, evaluate_model, summarize_results
from .visualization import (
    create_results_directory,
    save_experiment_config,
    load_experiment_config,
    plot_dataset,
    plot_stumps_on_data,
    plot_stump_errors,
    plot_error_curves,
    plot_min_margins,
    create_summary_report
)

__all__ = [
    'staged_evaluation',
    'evaluate_model',
    'summarize_results',
    'create_results_directory',
    'save_experiment_config',
    'load_experiment_config',
    'plot_dataset',
    'plot_stumps_on_data',
    'plot_stump_errors',
    'plot_error_curves',
    'plot_min_margins',
    'create_summary_report'
]
