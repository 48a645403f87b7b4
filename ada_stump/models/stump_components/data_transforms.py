"""
Data Transform Utilities

This module contains validation and normalisation helpers shared by the
stump fitter and the boosting loop.
"""

import numbers
from typing import Tuple, Optional

import numpy as np
from sklearn.utils.validation import check_array

from .exceptions import InvalidInputError


def _validate_points(X) -> np.ndarray:
    """
    Validate a point set and return it as a float array of shape (n_samples, 2).

    Parameters:
    -----------
    X : array-like, shape=(n_samples, 2)
        Point coordinates (x1, x2)

    Returns:
    --------
    X : np.ndarray
        Validated points
    """
    try:
        X = check_array(X, dtype=np.float64, ensure_2d=True)
    except ValueError as e:
        raise InvalidInputError(f"Invalid point set: {e}") from e

    if X.shape[1] != 2:
        raise InvalidInputError(f"Points must have 2 coordinates, got shape {X.shape}")

    return X


def _validate_labels(y, n_samples: int) -> np.ndarray:
    """
    Validate a label vector of +1 / -1 values.

    Parameters:
    -----------
    y : array-like, shape=(n_samples,)
        Labels
    n_samples : int
        Expected number of labels

    Returns:
    --------
    y : np.ndarray
        Labels as float array
    """
    try:
        y = np.asarray(y, dtype=np.float64).ravel()
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Labels must be numeric: {e}") from e

    if y.shape[0] != n_samples:
        raise InvalidInputError(f"X ({n_samples} samples) and y ({y.shape[0]} samples) have different numbers of samples")

    invalid = ~np.isin(y, (-1.0, 1.0))
    if np.any(invalid):
        raise InvalidInputError(f"Labels must be +1 or -1, got {np.unique(y[invalid])}")

    return y


def _validate_weights(weights, n_samples: int) -> np.ndarray:
    """
    Validate a non-negative weight vector with a positive total.

    Parameters:
    -----------
    weights : array-like, shape=(n_samples,)
        Per-point weights
    n_samples : int
        Expected number of weights

    Returns:
    --------
    weights : np.ndarray
        Weights as float array
    """
    try:
        weights = np.asarray(weights, dtype=np.float64).ravel()
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Weights must be numeric: {e}") from e

    if weights.shape[0] != n_samples:
        raise InvalidInputError(f"weights ({weights.shape[0]}) and X ({n_samples} samples) have different lengths")

    if not np.all(np.isfinite(weights)) or np.any(weights < 0):
        raise InvalidInputError("Weights must be finite and non-negative")

    if np.sum(weights) <= 0:
        raise InvalidInputError("Weights must have a positive sum")

    return weights


def _validate_positive_int(value, name: str) -> int:
    """
    Validate an integer parameter that must be at least 1.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
        raise InvalidInputError(f"{name} must be an integer >= 1, got {value!r}")
    return int(value)


def _validate_training_data(X, y, weights: Optional[np.ndarray] = None) -> Tuple[np.ndarray, np.ndarray, Optional[np.ndarray]]:
    """
    Validate points, labels and (optionally) weights together.

    Returns:
    --------
    X, y, weights : tuple
        Validated arrays (weights is None if not given)
    """
    X = _validate_points(X)
    y = _validate_labels(y, X.shape[0])
    if weights is not None:
        weights = _validate_weights(weights, X.shape[0])
    return X, y, weights


def _normalize_array(values: np.ndarray) -> np.ndarray:
    """
    Normalize a non-negative array so that it sums to 1.

    Parameters:
    -----------
    values : array-like
        Array to normalize

    Returns:
    --------
    normalized : array-like
        values / sum(values)
    """
    total = np.sum(values)
    return values / total


def _compute_confidence(epsilon: float) -> float:
    """
    Compute the voting weight alpha = 0.5 * ln((1 - eps) / eps).
    """
    return 0.5 * np.log((1.0 - epsilon) / epsilon)
