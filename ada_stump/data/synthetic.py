"""
人工データ生成モジュール

このモジュールは、正方形 [-2, 2] x [-2, 2] 上のラベル付き 2 次元点集合を
生成する関数を提供します。
"""

import numpy as np
from typing import Tuple, Optional
from sklearn.model_selection import train_test_split


# 点を一様に配置する範囲
BOX_LIMITS = (-2.0, 2.0)

# "circle" パターンの半径
CIRCLE_RADIUS = 1.2

PATTERNS = ("circle", "quadrant", "halfplane")


def _label_points(X: np.ndarray, pattern: str) -> np.ndarray:
    """
    パターンに従って {+1, -1} のラベルを付与

    Parameters:
    -----------
    X : array-like, shape=(n_samples, 2)
        点
    pattern : str
        "circle", "quadrant", "halfplane" のいずれか

    Returns:
    --------
    y : array-like, shape=(n_samples,)
        ラベル
    """
    if pattern == "circle":
        positive = X[:, 0] ** 2 + X[:, 1] ** 2 < CIRCLE_RADIUS ** 2
    elif pattern == "quadrant":
        positive = (X[:, 0] > 0) & (X[:, 1] > 0)
    elif pattern == "halfplane":
        positive = X[:, 0] > 0
    else:
        raise ValueError(f"Unknown pattern: {pattern}. Available patterns: {PATTERNS}")

    return np.where(positive, 1, -1)


def generate_sample(n_samples: int = 400, pattern: str = "circle", noise: float = 0.0,
                    random_state: Optional[int] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    ラベル付きの点集合を生成

    Parameters:
    -----------
    n_samples : int, default=400
        点の数
    pattern : str, default="circle"
        ラベル付けのパターン
    noise : float, default=0.0
        各ラベルを反転させる確率
    random_state : int, optional
        乱数シード

    Returns:
    --------
    X : array-like, shape=(n_samples, 2)
        点の座標
    y : array-like, shape=(n_samples,)
        {+1, -1} のラベル
    """
    if n_samples < 1:
        raise ValueError(f"n_samples must be >= 1, got {n_samples}")
    if not 0.0 <= noise < 1.0:
        raise ValueError(f"noise must be in [0, 1), got {noise}")

    if random_state is not None:
        np.random.seed(random_state)

    # 正方形内に一様に点を配置
    X = np.random.uniform(BOX_LIMITS[0], BOX_LIMITS[1], size=(n_samples, 2))
    y = _label_points(X, pattern)

    # ラベルノイズ
    if noise > 0:
        flip = np.random.rand(n_samples) < noise
        y[flip] = -y[flip]

    return X, y


def generate_synthetic_data(n_train: int = 400, n_test: int = 100, pattern: str = "circle",
                            noise: float = 0.0, random_state: Optional[int] = None) -> Tuple:
    """
    訓練データとテストデータを生成

    Parameters:
    -----------
    n_train : int, default=400
        訓練点の数
    n_test : int, default=100
        テスト点の数
    pattern : str, default="circle"
        ラベル付けのパターン
    noise : float, default=0.0
        ラベル反転の確率
    random_state : int, optional
        乱数シード

    Returns:
    --------
    X_train : array-like, shape=(n_train, 2)
        訓練用の点
    y_train : array-like, shape=(n_train,)
        訓練用ラベル
    X_test : array-like, shape=(n_test, 2)
        テスト用の点
    y_test : array-like, shape=(n_test,)
        テスト用ラベル
    """
    X, y = generate_sample(n_train + n_test, pattern=pattern, noise=noise, random_state=random_state)

    X_train, X_test, y_train, y_test = train_test_split(
        X, y, test_size=n_test, random_state=random_state
    )

    return X_train, y_train, X_test, y_test


def generate_grid_quadrant_data(n_per_axis: int = 4) -> Tuple[np.ndarray, np.ndarray]:
    """
    格子上の第 1 象限パターン（x1 > 0 かつ x2 > 0 で +1）

    一つの切り株では分離できないが、切り株の重み付き投票では分離できる
    決定的なデータセットです。

    Parameters:
    -----------
    n_per_axis : int, default=4
        各軸の格子点数（2 以上の偶数）

    Returns:
    --------
    X : array-like, shape=(n_per_axis ** 2, 2)
        格子点
    y : array-like, shape=(n_per_axis ** 2,)
        ラベル
    """
    if n_per_axis < 2 or n_per_axis % 2 != 0:
        raise ValueError(f"n_per_axis must be an even number >= 2, got {n_per_axis}")

    coords = np.linspace(-1.5, 1.5, n_per_axis)
    x1, x2 = np.meshgrid(coords, coords)
    X = np.column_stack([x1.ravel(), x2.ravel()])

    return X, _label_points(X, "quadrant")
