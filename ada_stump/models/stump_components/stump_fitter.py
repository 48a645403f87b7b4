"""
Stump Fitter

This module handles the search for the best axis-aligned decision stump
under a weight distribution, including the candidate grid, weighted error
computation and the tie-breaking between the four candidates evaluated at
each sweep position.
"""

import numpy as np
from typing import Tuple, Optional

from .decision_stump import DecisionStump, Axis, Polarity
from .data_transforms import (
    _validate_training_data,
    _validate_positive_int,
    _normalize_array,
    _compute_confidence
)
from .exceptions import DegenerateFitError


class StumpFitter:
    """
    決定株の探索を担当するクラス

    各軸の値域を resolution 等分し、最小値から半ステップ手前を起点として
    resolution + 1 個の掃引位置を調べます。各位置で 4 つの候補
    （2 軸 x 2 極性）の重み付き誤差を計算し、最小誤差の切り株を返します。

    Attributes:
    -----------
    resolution : int
        格子の分割数（大きいほど閾値の解像度が上がる）
    """

    def __init__(self, resolution: int = 100):
        self.resolution = _validate_positive_int(resolution, "resolution")

    def fit(self, X: np.ndarray, y: np.ndarray, weights: np.ndarray) -> DecisionStump:
        """
        重み分布の下で最良の切り株を探索

        Parameters:
        -----------
        X : array-like, shape=(n_samples, 2)
            入力点
        y : array-like, shape=(n_samples,)
            {+1, -1} のラベル
        weights : array-like, shape=(n_samples,)
            各点の重み（総和は 1 でなくてもよい）

        Returns:
        --------
        stump : DecisionStump
            重み付き誤差が最小の切り株
        """
        X, y, weights = _validate_training_data(X, y, weights)
        weights = _normalize_array(weights)

        horz_thresholds = self._sweep_positions(X[:, 0])
        vert_thresholds = self._sweep_positions(X[:, 1])

        if horz_thresholds is None and vert_thresholds is None:
            raise DegenerateFitError("All points share the same coordinates; no split is possible")

        horz_errors, horz_polarities = self._calculate_axis_errors(X[:, 0], y, weights, horz_thresholds)
        vert_errors, vert_polarities = self._calculate_axis_errors(X[:, 1], y, weights, vert_thresholds)

        best_stump = self._search_best_stump(
            horz_errors, horz_polarities, horz_thresholds,
            vert_errors, vert_polarities, vert_thresholds
        )

        if best_stump.training_error <= 0.0 or best_stump.training_error >= 1.0:
            raise DegenerateFitError(
                f"Best stump has weighted error {best_stump.training_error}; confidence is not finite",
                training_error=best_stump.training_error
            )

        return best_stump

    def _sweep_positions(self, coords: np.ndarray) -> Optional[np.ndarray]:
        """
        一つの軸の掃引位置を生成

        Returns:
        --------
        thresholds : array-like, shape=(resolution + 1,) or None
            掃引位置（値域が 0 の軸では None）
        """
        value_range = np.max(coords) - np.min(coords)
        if value_range <= 0:
            return None

        step = value_range / self.resolution
        start = np.min(coords) - step / 2
        return start + np.arange(self.resolution + 1) * step

    def _calculate_axis_errors(
        self,
        coords: np.ndarray,
        y: np.ndarray,
        weights: np.ndarray,
        thresholds: Optional[np.ndarray]
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        各掃引位置で一つの軸の 2 候補を評価し、良い方を残す

        Parameters:
        -----------
        coords : array-like, shape=(n_samples,)
            軸上の座標
        y : array-like, shape=(n_samples,)
            ラベル
        weights : array-like, shape=(n_samples,)
            正規化済みの重み
        thresholds : array-like or None
            掃引位置

        Returns:
        --------
        errors : array-like, shape=(resolution + 1,)
            各位置の最小重み付き誤差（軸が使えない場合は inf）
        polarities : array-like, shape=(resolution + 1,)
            各位置で選ばれた極性（+1 / -1）
        """
        n_positions = self.resolution + 1
        if thresholds is None:
            return np.full(n_positions, np.inf), np.ones(n_positions, dtype=int)

        # (閾値, 点) ごとの (座標 - 閾値) * ラベル
        products = (coords[np.newaxis, :] - thresholds[:, np.newaxis]) * y[np.newaxis, :]

        # 「閾値より大きい => +1」での誤差とその逆極性での誤差
        right_errors = (products < 0).astype(np.float64) @ weights
        left_errors = (products > 0).astype(np.float64) @ weights

        positive_wins = right_errors <= left_errors
        errors = np.where(positive_wins, right_errors, left_errors)
        polarities = np.where(positive_wins, 1, -1)

        return errors, polarities

    def _search_best_stump(
        self,
        horz_errors: np.ndarray,
        horz_polarities: np.ndarray,
        horz_thresholds: Optional[np.ndarray],
        vert_errors: np.ndarray,
        vert_polarities: np.ndarray,
        vert_thresholds: Optional[np.ndarray]
    ) -> DecisionStump:
        """
        掃引位置を左から順に走査して最良の切り株を選ぶ

        同じ位置では水平（x1）が同点で優先され、位置をまたぐ同点は
        先に見つかったものが残ります。
        """
        best_error = np.inf
        best = None

        for i in range(self.resolution + 1):
            if horz_errors[i] <= vert_errors[i]:
                candidate = (Axis.HORIZONTAL, horz_thresholds[i], horz_polarities[i], horz_errors[i])
            else:
                candidate = (Axis.VERTICAL, vert_thresholds[i], vert_polarities[i], vert_errors[i])

            if best_error > candidate[3]:
                best_error = candidate[3]
                best = candidate

        axis, threshold, polarity, error = best
        error = float(error)
        confidence = _compute_confidence(error) if 0.0 < error < 1.0 else np.nan

        return DecisionStump(
            axis=axis,
            threshold=float(threshold),
            polarity=Polarity(int(polarity)),
            confidence=float(confidence),
            training_error=error
        )


def fit_stump(X: np.ndarray, y: np.ndarray, weights: np.ndarray, resolution: int = 100) -> DecisionStump:
    """
    Fit a single decision stump on a weighted point set.

    Parameters:
    -----------
    X : array-like, shape=(n_samples, 2)
        Points
    y : array-like, shape=(n_samples,)
        Labels in {+1, -1}
    weights : array-like, shape=(n_samples,)
        Weight distribution over the points
    resolution : int, default=100
        Number of grid intervals per axis

    Returns:
    --------
    stump : DecisionStump
        Best stump on the grid
    """
    return StumpFitter(resolution=resolution).fit(X, y, weights)
