"""
評価ユーティリティモジュール

このモジュールは、アンサンブルの先頭 t 個の切り株で構成した分類器の
正解数・誤分類数・誤分類率・最小マージンを t ごとに集計する関数を
提供します。
"""

import numpy as np
import pandas as pd
from typing import Dict, List, Any

from ..models.base import BoostingClassifierBase


def staged_evaluation(model: BoostingClassifierBase, X: np.ndarray, y: np.ndarray) -> pd.DataFrame:
    """
    切り株の数ごとの評価

    Parameters:
    -----------
    model : AdaBoostStumps
        学習済みモデル
    X : array-like, shape=(n_samples, 2)
        入力点
    y : array-like, shape=(n_samples,)
        真のラベル

    Returns:
    --------
    df : pandas.DataFrame
        列 n_stumps, correct, errors, error_rate, min_margin
    """
    X, y = model._validate_input(X, y)
    n_samples = X.shape[0]

    rows = []
    for (k, y_pred), (_, margins) in zip(model.staged_predict(X), model.staged_margins(X, y)):
        correct = int(np.sum(y_pred == y))
        rows.append({
            'n_stumps': k,
            'correct': correct,
            'errors': n_samples - correct,
            'error_rate': (n_samples - correct) / n_samples,
            'min_margin': float(np.min(margins))
        })

    return pd.DataFrame(rows, columns=['n_stumps', 'correct', 'errors', 'error_rate', 'min_margin'])


def evaluate_model(model: BoostingClassifierBase, X: np.ndarray, y: np.ndarray) -> Dict[str, Any]:
    """
    すべての切り株を使った分類器の評価

    Returns:
    --------
    results : dict
        accuracy, correct, errors, error_rate, min_margin
    """
    return model.evaluate(X, y, metrics=['accuracy', 'correct', 'errors', 'error_rate', 'min_margin'])


def summarize_results(n_stumps: int, train_results: Dict[str, Any], test_results: Dict[str, Any],
                      n_train: int, n_test: int) -> List[str]:
    """
    実験結果の要約文を作成

    Parameters:
    -----------
    n_stumps : int
        使用した切り株の数
    train_results : dict
        訓練データでの評価結果（evaluate_model の戻り値）
    test_results : dict
        テストデータでの評価結果
    n_train : int
        訓練点の数
    n_test : int
        テスト点の数

    Returns:
    --------
    lines : list of str
        表示用の要約文
    """
    return [
        f"The final combined classifier used {n_stumps} weak learners/stumps.",
        f"It classified {train_results['correct']} points out of {n_train} correctly in the training set.",
        f"Further, it classified {test_results['correct']} points out of {n_test} correctly in the testing set."
    ]
