"""
Decision Stump Implementation

This module contains the DecisionStump record that represents a single
axis-aligned weak classifier in the boosted ensemble.
"""

from enum import Enum
from typing import Dict, Any, NamedTuple
import numpy as np


class Axis(Enum):
    """
    分割に使う座標軸

    HORIZONTAL は x1（列 0）、VERTICAL は x2（列 1）で分割します。
    """
    HORIZONTAL = 0
    VERTICAL = 1

    @property
    def column(self) -> int:
        return self.value


class Polarity(Enum):
    """閾値より大きい側を +1 と分類するか -1 と分類するか"""
    POSITIVE = 1
    NEGATIVE = -1


class DecisionStump(NamedTuple):
    """
    軸平行な決定株（弱学習器）

    Attributes:
    -----------
    axis : Axis
        分割に使用する軸
    threshold : float
        選択した軸上の分割座標
    polarity : Polarity
        閾値より大きい座標の点に与えるラベルの符号
    confidence : float
        投票重み alpha = 0.5 * ln((1 - eps) / eps)
    training_error : float
        学習時の重み付き誤分類率 eps
    """
    axis: Axis
    threshold: float
    polarity: Polarity
    confidence: float
    training_error: float

    def _offsets(self, X: np.ndarray) -> np.ndarray:
        return X[:, self.axis.column] - self.threshold

    def predict(self, X: np.ndarray) -> np.ndarray:
        """
        切り株単体での予測

        Parameters:
        -----------
        X : array-like, shape=(n_samples, 2)
            入力点

        Returns:
        --------
        predictions : array-like, shape=(n_samples,)
            {-1, 0, +1} の予測（閾値上の点は 0）
        """
        return self.polarity.value * np.sign(self._offsets(X))

    def misclassified_mask(self, X: np.ndarray, y: np.ndarray) -> np.ndarray:
        """
        誤分類された点のマスク

        閾値上の点は誤差に数えないため、正しく分類されたものとして扱います。

        Parameters:
        -----------
        X : array-like, shape=(n_samples, 2)
            入力点
        y : array-like, shape=(n_samples,)
            {+1, -1} のラベル

        Returns:
        --------
        mask : array-like, shape=(n_samples,)
            誤分類なら True
        """
        return self.polarity.value * self._offsets(X) * y < 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'axis': self.axis.name.lower(),
            'threshold': float(self.threshold),
            'polarity': self.polarity.value,
            'confidence': float(self.confidence),
            'training_error': float(self.training_error)
        }

    def __str__(self) -> str:
        side = '>' if self.polarity is Polarity.POSITIVE else '<'
        coord = 'x1' if self.axis is Axis.HORIZONTAL else 'x2'
        return (f"Stump({coord} {side} {self.threshold:.4f} => +1, "
                f"alpha={self.confidence:.4f}, eps={self.training_error:.4f})")
