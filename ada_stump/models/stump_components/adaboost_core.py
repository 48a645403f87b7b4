"""
AdaBoost Core Module

This module contains the AdaBoostStumps class that drives the stump fitter
round by round, reweights the training distribution and combines the stumps
into a weighted-vote classifier.
"""

import numpy as np
from typing import Optional, Iterator, List, Dict, Sequence, Tuple, Any
from datetime import datetime
import json
import time
import warnings

from ..base import BoostingClassifierBase
from .decision_stump import DecisionStump, Axis
from .stump_fitter import StumpFitter
from .weight_distribution import WeightDistribution
from .data_transforms import _validate_points, _validate_labels, _validate_positive_int
from .exceptions import DegenerateFitError, EnsembleFallbackWarning


def staged_ensemble_scores(stumps: Sequence[DecisionStump], X: np.ndarray) -> Iterator[Tuple[int, np.ndarray]]:
    """
    Yield (k, weighted vote of the first k stumps) for k = 1..len(stumps).

    Parameters:
    -----------
    stumps : sequence of DecisionStump
        Ensemble in creation order
    X : array-like, shape=(n_samples, 2)
        Points to score

    Yields:
    -------
    k : int
        Prefix length
    scores : array-like, shape=(n_samples,)
        sum_j alpha_j * polarity_j * sign(coord_j - threshold_j) over the prefix
    """
    X = _validate_points(X)
    scores = np.zeros(X.shape[0])
    for k, stump in enumerate(stumps, start=1):
        scores = scores + stump.confidence * stump.predict(X)
        yield k, scores


def ensemble_decision(stumps: Sequence[DecisionStump], X: np.ndarray) -> np.ndarray:
    """
    Weighted vote of an ensemble prefix.
    """
    X = _validate_points(X)
    scores = np.zeros(X.shape[0])
    for stump in stumps:
        scores += stump.confidence * stump.predict(X)
    return scores


def predict_ensemble(stumps: Sequence[DecisionStump], X: np.ndarray) -> np.ndarray:
    """
    Predict {+1, -1} labels with an ensemble prefix. A zero vote maps to -1.
    """
    return np.where(ensemble_decision(stumps, X) > 0, 1, -1)


def ensemble_margins(stumps: Sequence[DecisionStump], X: np.ndarray, y: np.ndarray) -> np.ndarray:
    """
    Normalised margins y * f(x) / sum(alpha) of an ensemble prefix.
    """
    X = _validate_points(X)
    y = _validate_labels(y, X.shape[0])
    alpha_sum = float(sum(stump.confidence for stump in stumps))
    if alpha_sum <= 0:
        return np.zeros(X.shape[0])
    return y * ensemble_decision(stumps, X) / alpha_sum


class AdaBoostStumps(BoostingClassifierBase):
    """
    AdaBoost with axis-aligned decision stumps

    Each round fits the best stump on the current weight distribution,
    appends it to the ensemble and reweights the training points with the
    exponential rule before normalising the distribution back to 1.
    """

    def __init__(self,
                 n_estimators: int = 20,
                 resolution: int = 100,
                 track_weights: bool = False,
                 verbose: bool = False):
        """
        Initialize AdaBoostStumps

        Parameters:
        -----------
        n_estimators : int
            Number of boosting rounds
        resolution : int
            Number of grid intervals per axis for the stump search
        track_weights : bool
            Whether to keep the weight distribution after every round
        verbose : bool
            Whether to print one line per round
        """
        super().__init__(
            n_estimators=n_estimators,
            resolution=resolution,
            verbose=verbose
        )
        self.track_weights = track_weights

        # Initialize storage
        self.stumps_ = None
        self.weight_distribution_ = None
        self.stump_logs_ = []

    def fit(self, X: np.ndarray, y: np.ndarray, **kwargs) -> 'AdaBoostStumps':
        """
        Fit the ensemble

        Parameters:
        -----------
        X : array-like, shape=(n_samples, 2)
            Training points
        y : array-like, shape=(n_samples,)
            Training labels in {+1, -1}
        **kwargs : dict
            Additional parameters

        Returns:
        --------
        self : AdaBoostStumps
            Fitted model
        """
        n_estimators = _validate_positive_int(self.n_estimators, "n_estimators")
        X, y = self._validate_input(X, y)

        fitter = StumpFitter(resolution=self.resolution)
        distribution = WeightDistribution.uniform(X.shape[0], track_history=self.track_weights)

        self.stumps_ = []
        self.stump_logs_ = []
        self.weight_distribution_ = distribution

        # Main boosting loop
        for round_index in range(n_estimators):
            start_time = time.time()

            try:
                stump = fitter.fit(X, y, distribution.weights)
            except DegenerateFitError as e:
                e.round_index = round_index
                raise

            if not isinstance(stump.axis, Axis):
                warnings.warn(
                    f"Round {round_index + 1} produced a stump without a valid axis; "
                    f"stopping with {len(self.stumps_)} stumps",
                    EnsembleFallbackWarning
                )
                break

            self.stumps_.append(stump)
            misclassified = distribution.update(stump, X, y)
            elapsed_time = time.time() - start_time

            self.stump_logs_.append({
                'round': round_index + 1,
                **stump.to_dict(),
                'n_misclassified': int(np.sum(misclassified)),
                'weight_max': float(np.max(distribution.weights)),
                'weight_min': float(np.min(distribution.weights)),
                'weight_entropy': distribution.entropy(),
                'elapsed_time': elapsed_time
            })

            if self.verbose:
                print(f"Round {round_index + 1}/{n_estimators}, axis={stump.axis.name.lower()}, "
                      f"threshold={stump.threshold:.4f}, polarity={stump.polarity.value:+d}, "
                      f"epsilon={stump.training_error:.6f}, alpha={stump.confidence:.6f}, "
                      f"Time: {elapsed_time:.2f}s")

        return self

    def _check_fitted(self) -> None:
        if self.stumps_ is None:
            raise ValueError("Model has not been fitted yet")

    def _prefix(self, n_stumps: Optional[int]) -> List[DecisionStump]:
        """
        Return the first n_stumps stumps (all of them when None)
        """
        self._check_fitted()
        if n_stumps is None:
            return self.stumps_
        if not 1 <= n_stumps <= len(self.stumps_):
            raise ValueError(f"n_stumps must be between 1 and {len(self.stumps_)}, got {n_stumps}")
        return self.stumps_[:n_stumps]

    def decision_function(self, X: np.ndarray, n_stumps: Optional[int] = None) -> np.ndarray:
        """
        Weighted vote sum_j alpha_j * polarity_j * sign(coord_j - threshold_j)

        Parameters:
        -----------
        X : array-like, shape=(n_samples, 2)
            Input points
        n_stumps : int, optional
            Number of leading stumps to use

        Returns:
        --------
        scores : array-like, shape=(n_samples,)
            Weighted votes
        """
        return ensemble_decision(self._prefix(n_stumps), X)

    def predict(self, X: np.ndarray, n_stumps: Optional[int] = None) -> np.ndarray:
        return predict_ensemble(self._prefix(n_stumps), X)

    def staged_decision_function(self, X: np.ndarray) -> Iterator[Tuple[int, np.ndarray]]:
        """
        Lazily yield (k, scores) for every prefix length k
        """
        self._check_fitted()
        return staged_ensemble_scores(self.stumps_, X)

    def staged_predict(self, X: np.ndarray) -> Iterator[Tuple[int, np.ndarray]]:
        for k, scores in self.staged_decision_function(X):
            yield k, np.where(scores > 0, 1, -1)

    def margins(self, X: np.ndarray, y: np.ndarray, n_stumps: Optional[int] = None) -> np.ndarray:
        return ensemble_margins(self._prefix(n_stumps), X, y)

    def staged_margins(self, X: np.ndarray, y: np.ndarray) -> Iterator[Tuple[int, np.ndarray]]:
        """
        Lazily yield (k, margins) for every prefix length k

        Parameters:
        -----------
        X : array-like, shape=(n_samples, 2)
            Input points
        y : array-like, shape=(n_samples,)
            True labels

        Yields:
        -------
        k : int
            Prefix length
        margins : array-like, shape=(n_samples,)
            y * f_k(x) / sum of the first k confidences
        """
        X, y = self._validate_input(X, y)
        alpha_sum = 0.0
        for k, scores in self.staged_decision_function(X):
            alpha_sum += self.stumps_[k - 1].confidence
            if alpha_sum > 0:
                yield k, y * scores / alpha_sum
            else:
                yield k, np.zeros(X.shape[0])

    @property
    def weights_(self) -> np.ndarray:
        """Final training weight distribution"""
        self._check_fitted()
        return self.weight_distribution_.weights

    def get_params(self) -> Dict[str, Any]:
        params = super().get_params()
        params['track_weights'] = self.track_weights
        return params

    def get_stump_logs(self) -> List[Dict]:
        """
        Get per-round logs

        Returns:
        --------
        logs : List[Dict]
            One dict per boosting round
        """
        return [log.copy() for log in self.stump_logs_]

    def save_logs_to_json(self, file_path: str) -> None:
        """
        Save per-round logs to JSON file

        Parameters:
        -----------
        file_path : str
            Path to save the JSON file
        """
        all_logs = self.get_stump_logs()

        # Add timestamp
        for log in all_logs:
            log['timestamp'] = datetime.now().isoformat()

        with open(file_path, 'w') as f:
            json.dump(all_logs, f, ensure_ascii=False, indent=4)

        if self.verbose:
            print(f"Stump logs saved to {file_path}")

    def print_training_summary(self) -> None:
        """
        Print training summary
        """
        self._check_fitted()
        print(f"\n=== AdaBoostStumps Training Summary ===")
        print(f"Stumps: {len(self.stumps_)}")
        print(f"Resolution: {self.resolution}")

        if self.stumps_:
            errors = [stump.training_error for stump in self.stumps_]
            n_horizontal = sum(1 for stump in self.stumps_ if stump.axis is Axis.HORIZONTAL)
            print(f"Horizontal / vertical: {n_horizontal} / {len(self.stumps_) - n_horizontal}")
            print(f"Epsilon - Avg: {np.mean(errors):.4f}, Min: {np.min(errors):.4f}, Max: {np.max(errors):.4f}")
            print(f"Total confidence: {sum(stump.confidence for stump in self.stumps_):.4f}")


def run_adaboost(X: np.ndarray, y: np.ndarray, rounds: int, resolution: int = 100) -> List[DecisionStump]:
    """
    Run `rounds` boosting rounds and return the ensemble.

    Parameters:
    -----------
    X : array-like, shape=(n_samples, 2)
        Training points
    y : array-like, shape=(n_samples,)
        Labels in {+1, -1}
    rounds : int
        Number of boosting rounds
    resolution : int, default=100
        Number of grid intervals per axis

    Returns:
    --------
    stumps : list of DecisionStump
        Ensemble in creation order
    """
    model = AdaBoostStumps(n_estimators=rounds, resolution=resolution)
    return list(model.fit(X, y).stumps_)
