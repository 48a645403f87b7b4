"""
Weight Distribution

This module contains the per-point importance distribution that the boosting
loop reweights after every round.
"""

import numpy as np
from typing import List

from .decision_stump import DecisionStump
from .data_transforms import _validate_positive_int
from .exceptions import WeightCollapseError


class WeightDistribution:
    """
    訓練点の重み分布を管理するクラス

    誤分類された点の重みを exp(alpha) 倍、正しく分類された点の重みを
    exp(-alpha) 倍し、総和が 1 になるよう正規化します。

    Attributes:
    -----------
    weights : array-like, shape=(n_samples,)
        現在の重み（総和 1）
    track_history : bool
        各ラウンド後の重みを記録するかどうか
    history : list of array-like
        初期分布と各ラウンド後の重み（track_history=True の場合）
    """

    def __init__(self, weights: np.ndarray, track_history: bool = False):
        self.weights = np.array(weights, dtype=np.float64)
        self.track_history = track_history
        self.history: List[np.ndarray] = []
        self.normalize()

    @classmethod
    def uniform(cls, n_samples: int, track_history: bool = False) -> 'WeightDistribution':
        """
        1/N の一様分布で初期化

        Parameters:
        -----------
        n_samples : int
            点の数
        track_history : bool, default=False
            重みの履歴を記録するかどうか
        """
        n_samples = _validate_positive_int(n_samples, "n_samples")
        return cls(np.full(n_samples, 1.0 / n_samples), track_history=track_history)

    def update(self, stump: DecisionStump, X: np.ndarray, y: np.ndarray) -> np.ndarray:
        """
        切り株の結果に従って重みを更新

        Parameters:
        -----------
        stump : DecisionStump
            このラウンドで学習した切り株
        X : array-like, shape=(n_samples, 2)
            訓練点
        y : array-like, shape=(n_samples,)
            訓練ラベル

        Returns:
        --------
        misclassified : array-like, shape=(n_samples,)
            誤分類された点のマスク
        """
        misclassified = stump.misclassified_mask(X, y)

        factors = np.where(misclassified, np.exp(stump.confidence), np.exp(-stump.confidence))
        self.weights = self.weights * factors
        self.normalize()

        return misclassified

    def normalize(self) -> None:
        """総和が 1 になるように正規化"""
        total = np.sum(self.weights)
        if not np.isfinite(total) or total <= 0:
            raise WeightCollapseError(f"Cannot normalize weights with total {total}")

        self.weights = self.weights / total

        if self.track_history:
            self.history.append(self.weights.copy())

    def entropy(self) -> float:
        """
        分布のエントロピー（重みの集中度の目安）
        """
        nonzero = self.weights[self.weights > 0]
        return float(-np.sum(nonzero * np.log(nonzero)))

    def __len__(self) -> int:
        return self.weights.shape[0]
