"""
Exceptions

This module defines the errors raised while fitting decision stumps and
running the boosting loop.
"""

from typing import Optional


class AdaBoostStumpError(Exception):
    """ada_stump の例外の基底クラス"""


class InvalidInputError(AdaBoostStumpError, ValueError):
    """
    学習開始前に拒否される不正な入力

    空の点集合、点・ラベル・重みの長さ不一致、{+1, -1} 以外のラベル、
    負の重み、1 未満の resolution などで送出されます。
    """


class DegenerateFitError(AdaBoostStumpError):
    """
    最良の切り株の重み付き誤差が 0 または 1 になった場合の例外

    alpha = 0.5 * ln((1 - eps) / eps) が有限にならないため、
    非有限値を以降の重み更新に流さずにここで停止します。

    Attributes:
    -----------
    training_error : float or None
        検出された重み付き誤差
    round_index : int or None
        ブースティング中に発生した場合のラウンド番号（0 始まり）
    """

    def __init__(self, message: str, training_error: Optional[float] = None,
                 round_index: Optional[int] = None):
        super().__init__(message)
        self.training_error = training_error
        self.round_index = round_index


class WeightCollapseError(AdaBoostStumpError):
    """重み分布の総和が正の有限値でなくなり正規化できない場合の例外"""


class EnsembleFallbackWarning(RuntimeWarning):
    """有効な軸を持たない切り株によりブースティングを打ち切った場合の警告"""
