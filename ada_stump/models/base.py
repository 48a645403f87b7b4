"""
ブースティング分類器の基底クラスモジュール

このモジュールは、2 次元の点集合に対する二値ブースティング分類器の
抽象基底クラスを提供します。すべての実装はこのクラスを継承します。
"""

from abc import ABC, abstractmethod
import numpy as np
from typing import Dict, List, Tuple, Optional, Any
from sklearn.metrics import accuracy_score

from .stump_components.data_transforms import _validate_points, _validate_labels


class BoostingClassifierBase(ABC):
    """
    二値ブースティング分類器の抽象基底クラス

    このクラスは、すべてのブースティング実装に共通するインターフェースを
    定義します。ラベルは {+1, -1} です。

    Attributes:
    -----------
    n_estimators : int
        ブースティングのラウンド数（弱学習器の数）
    resolution : int
        切り株探索の格子分割数
    verbose : bool
        学習中の進捗を表示するかどうか
    """

    def __init__(self,
                 n_estimators: int = 20,
                 resolution: int = 100,
                 verbose: bool = False,
                 **kwargs):
        """
        初期化メソッド

        Parameters:
        -----------
        n_estimators : int, default=20
            ブースティングのラウンド数
        resolution : int, default=100
            切り株探索の格子分割数
        verbose : bool, default=False
            学習中の進捗を表示するかどうか
        **kwargs : dict
            追加のパラメータ
        """
        self.n_estimators = n_estimators
        self.resolution = resolution
        self.verbose = verbose

        # 追加のパラメータを設定
        for key, value in kwargs.items():
            setattr(self, key, value)

    @abstractmethod
    def fit(self, X: np.ndarray, y: np.ndarray, **kwargs) -> 'BoostingClassifierBase':
        """
        ラベル付き点集合でモデルを学習

        Parameters:
        -----------
        X : array-like, shape=(n_samples, 2)
            入力点
        y : array-like, shape=(n_samples,)
            {+1, -1} のラベル
        **kwargs : dict
            追加のパラメータ

        Returns:
        --------
        self : BoostingClassifierBase
            学習済みモデル
        """
        pass

    @abstractmethod
    def predict(self, X: np.ndarray, n_stumps: Optional[int] = None) -> np.ndarray:
        """
        学習済みモデルで予測

        Parameters:
        -----------
        X : array-like, shape=(n_samples, 2)
            入力点
        n_stumps : int, optional
            使用する先頭の弱学習器の数（省略時はすべて）

        Returns:
        --------
        y_pred : array-like, shape=(n_samples,)
            {+1, -1} の予測ラベル
        """
        pass

    @abstractmethod
    def margins(self, X: np.ndarray, y: np.ndarray, n_stumps: Optional[int] = None) -> np.ndarray:
        """
        各点のマージン y * f(x) / sum(alpha)
        """
        pass

    def _validate_input(self, X: np.ndarray, y: Optional[np.ndarray] = None) -> Tuple[np.ndarray, Optional[np.ndarray]]:
        """
        入力データの検証と前処理

        Parameters:
        -----------
        X : array-like
            入力点
        y : array-like, optional
            ラベル

        Returns:
        --------
        X : np.ndarray
            検証・変換後の入力点
        y : np.ndarray or None
            検証・変換後のラベル
        """
        X = _validate_points(X)

        if y is not None:
            y = _validate_labels(y, X.shape[0])

        return X, y

    def evaluate(self, X: np.ndarray, y: np.ndarray,
                 metrics: List[str] = ['accuracy', 'error_rate']) -> Dict[str, Any]:
        """
        モデルの評価

        Parameters:
        -----------
        X : array-like, shape=(n_samples, 2)
            入力点
        y : array-like, shape=(n_samples,)
            真のラベル
        metrics : list of str, default=['accuracy', 'error_rate']
            使用する評価指標のリスト

        Returns:
        --------
        results : dict
            各評価指標の値
        """
        # 入力検証
        X, y = self._validate_input(X, y)

        # 予測
        y_pred = self.predict(X)

        # 結果格納用辞書
        results = {}

        for metric in metrics:
            if metric.lower() == 'accuracy':
                results['accuracy'] = accuracy_score(y, y_pred)

            elif metric.lower() == 'correct':
                # 正解数
                results['correct'] = int(np.sum(y_pred == y))

            elif metric.lower() == 'errors':
                # 誤分類数
                results['errors'] = int(np.sum(y_pred != y))

            elif metric.lower() == 'error_rate':
                results['error_rate'] = 1.0 - accuracy_score(y, y_pred)

            elif metric.lower() == 'min_margin':
                results['min_margin'] = float(np.min(self.margins(X, y)))

            else:
                raise ValueError(f"Unknown metric: {metric}")

        return results

    def get_params(self) -> Dict[str, Any]:
        """
        モデルパラメータの取得

        Returns:
        --------
        params : dict
            モデルパラメータ
        """
        return {
            'n_estimators': self.n_estimators,
            'resolution': self.resolution,
            'verbose': self.verbose
        }

    def set_params(self, **params) -> 'BoostingClassifierBase':
        """
        モデルパラメータの設定

        Parameters:
        -----------
        **params : dict
            設定するパラメータ

        Returns:
        --------
        self : BoostingClassifierBase
            パラメータを更新したモデル
        """
        for key, value in params.items():
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                raise ValueError(f"Invalid parameter: {key}")
        return self
