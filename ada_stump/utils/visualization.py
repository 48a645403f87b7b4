"""
実験結果の保存・可視化ユーティリティモジュール

このモジュールは、AdaBoost 実験の結果（データ、切り株、誤差曲線、
最小マージン）を保存・可視化するためのユーティリティ関数を提供します。
"""

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
import os
import json
from typing import Dict, Optional, Any, Sequence
import datetime

from ..models.stump_components.decision_stump import DecisionStump, Axis, Polarity


# 切り株を描画する範囲（データ生成の正方形と同じ）
PLOT_LIMITS = (-2.0, 2.0)

# (軸, 極性) ごとの線の色
STUMP_COLORS = {
    (Axis.HORIZONTAL, Polarity.POSITIVE): 'green',
    (Axis.HORIZONTAL, Polarity.NEGATIVE): 'red',
    (Axis.VERTICAL, Polarity.POSITIVE): 'cyan',
    (Axis.VERTICAL, Polarity.NEGATIVE): 'magenta'
}


def create_results_directory(base_dir: str = "results") -> str:
    """
    実験結果を保存するディレクトリを作成

    Parameters:
    -----------
    base_dir : str, default="results"
        基本ディレクトリ名

    Returns:
    --------
    results_dir : str
        作成された結果ディレクトリのパス
    """
    # タイムスタンプを含むディレクトリ名を生成
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    results_dir = os.path.join(base_dir, f"experiment_{timestamp}")

    # ディレクトリを作成
    os.makedirs(results_dir, exist_ok=True)

    # サブディレクトリを作成
    os.makedirs(os.path.join(results_dir, "figures"), exist_ok=True)
    os.makedirs(os.path.join(results_dir, "raw_data"), exist_ok=True)

    return results_dir


def save_experiment_config(config: Dict, results_dir: str) -> str:
    """
    実験設定を保存

    Parameters:
    -----------
    config : dict
        実験設定
    results_dir : str
        結果ディレクトリのパス

    Returns:
    --------
    path : str
        保存したファイルのパス
    """
    path = os.path.join(results_dir, "experiment_config.json")
    with open(path, 'w') as f:
        json.dump(config, f, indent=2)
    return path


def load_experiment_config(path: str) -> Dict[str, Any]:
    """
    保存した実験設定を読み込み
    """
    with open(path, 'r') as f:
        return json.load(f)


def plot_dataset(X: np.ndarray, y: np.ndarray,
                 title: str = "Training data: legend shows actual labels for points",
                 save_path: Optional[str] = None) -> None:
    """
    ラベル付き点集合の散布図

    Parameters:
    -----------
    X : array-like, shape=(n_samples, 2)
        点
    y : array-like, shape=(n_samples,)
        ラベル
    title : str
        プロットのタイトル
    save_path : str, optional
        保存先のパス
    """
    plt.figure(figsize=(8, 8))
    _scatter_labels(X, y)
    plt.title(title)
    plt.xlabel('$x_1$')
    plt.ylabel('$x_2$')
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')

    plt.close()


def _scatter_labels(X: np.ndarray, y: np.ndarray) -> None:
    df = pd.DataFrame({'x1': X[:, 0], 'x2': X[:, 1], 'label': np.where(y > 0, '+1', '-1')})
    sns.scatterplot(
        data=df, x='x1', y='x2', hue='label', style='label',
        hue_order=['+1', '-1'], style_order=['+1', '-1'],
        palette={'+1': 'blue', '-1': 'black'}, markers={'+1': 'o', '-1': 'D'}, s=15
    )
    plt.legend(loc='upper right')


def plot_stumps_on_data(X: np.ndarray, y: np.ndarray, stumps: Sequence[DecisionStump],
                        title: str = "Data with stumps: * marker shows the direction in which a stump is active",
                        save_path: Optional[str] = None) -> None:
    """
    点集合に切り株を重ねて描画

    x1 で分割する切り株は縦線、x2 で分割する切り株は横線で描き、
    * マーカーで +1 と判定する側を示します。

    Parameters:
    -----------
    X : array-like, shape=(n_samples, 2)
        点
    y : array-like, shape=(n_samples,)
        ラベル
    stumps : sequence of DecisionStump
        描画する切り株
    title : str
        プロットのタイトル
    save_path : str, optional
        保存先のパス
    """
    lo, hi = PLOT_LIMITS
    marker_pos = hi - 0.05

    plt.figure(figsize=(8, 8))
    _scatter_labels(X, y)

    for stump in stumps:
        color = STUMP_COLORS[(stump.axis, stump.polarity)]
        offset = 0.02 * stump.polarity.value
        if stump.axis is Axis.HORIZONTAL:
            plt.plot([stump.threshold, stump.threshold], [lo, hi], color=color, linewidth=1)
            plt.plot(stump.threshold + offset, marker_pos, '*', markersize=5, color=color)
        else:
            plt.plot([lo, hi], [stump.threshold, stump.threshold], color=color, linewidth=1)
            plt.plot(marker_pos, stump.threshold + offset, '*', markersize=5, color=color)

    plt.title(title)
    plt.xlabel('$x_1$')
    plt.ylabel('$x_2$')
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')

    plt.close()


def plot_stump_errors(stumps: Sequence[DecisionStump],
                      title: str = r"Weighted error rate $\epsilon_t$ of the stump generated at iteration number t",
                      save_path: Optional[str] = None) -> None:
    """
    各ラウンドの切り株の重み付き誤差 epsilon_t をプロット
    """
    rounds = np.arange(1, len(stumps) + 1)
    errors = [stump.training_error for stump in stumps]

    plt.figure(figsize=(10, 6))
    plt.plot(rounds, errors, marker='o')
    plt.xlabel('stump number t')
    plt.ylabel(r'$\epsilon_t$')
    plt.title(title)
    plt.grid(True, linestyle='--', alpha=0.7)

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')

    plt.close()


def plot_error_curves(train_df: pd.DataFrame, test_df: pd.DataFrame, rate: bool = False,
                      title: Optional[str] = None, save_path: Optional[str] = None) -> None:
    """
    訓練・テストの誤分類数（または誤分類率）を切り株の数ごとにプロット

    Parameters:
    -----------
    train_df : pandas.DataFrame
        訓練データの staged_evaluation
    test_df : pandas.DataFrame
        テストデータの staged_evaluation
    rate : bool, default=False
        True なら誤分類率、False なら誤分類数
    title : str, optional
        プロットのタイトル
    save_path : str, optional
        保存先のパス
    """
    column = 'error_rate' if rate else 'errors'
    if title is None:
        title = ("Percentage/rate of errors based on classifier built by combining t stumps" if rate
                 else "Number of errors based on classifier built by combining t stumps")

    df = pd.concat([
        train_df[['n_stumps', column]].assign(dataset='train'),
        test_df[['n_stumps', column]].assign(dataset='test')
    ], ignore_index=True)

    plt.figure(figsize=(10, 6))
    sns.lineplot(data=df, x='n_stumps', y=column, hue='dataset', marker='o')
    plt.xlabel('stumps used t')
    plt.ylabel('rate of errors' if rate else 'number of errors')
    plt.title(title)
    plt.grid(True, linestyle='--', alpha=0.7)

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')

    plt.close()


def plot_min_margins(train_df: pd.DataFrame, test_df: Optional[pd.DataFrame] = None,
                     title: str = "Minimum margin based on classifier built by combining t stumps",
                     save_path: Optional[str] = None) -> None:
    """
    最小マージンを切り株の数ごとにプロット
    """
    plt.figure(figsize=(10, 6))
    plt.plot(train_df['n_stumps'], train_df['min_margin'], marker='o', label='minimum train margin')
    if test_df is not None:
        plt.plot(test_df['n_stumps'], test_df['min_margin'], marker='s', label='minimum test margin')
    plt.axhline(0.0, color='gray', linewidth=0.8)
    plt.xlabel('stumps used t')
    plt.ylabel('min margin')
    plt.title(title)
    plt.legend()
    plt.grid(True, linestyle='--', alpha=0.7)

    if save_path:
        plt.savefig(save_path, dpi=300, bbox_inches='tight')

    plt.close()


def create_summary_report(results: Dict, results_dir: str) -> str:
    """
    実験結果の要約レポートを作成

    Parameters:
    -----------
    results : dict
        run_adaboost_experiment の結果
    results_dir : str
        結果ディレクトリのパス

    Returns:
    --------
    path : str
        レポートのパス
    """
    config = results['config']
    train_df = pd.DataFrame(results['train_staged'])
    test_df = pd.DataFrame(results['test_staged'])

    report = []

    # ヘッダー
    report.append("# AdaBoost 実験結果要約レポート")
    report.append(f"実行日時: {datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")

    # 設定
    report.append("## 1. 実験設定")
    report.append("\n| パラメータ | 値 |")
    report.append("| --- | --- |")
    for key, value in config.items():
        report.append(f"| {key} | {value} |")

    # 切り株
    report.append("\n## 2. 切り株")
    report.append("\n| t | 軸 | 閾値 | 極性 | alpha | epsilon |")
    report.append("| --- | --- | --- | --- | --- | --- |")
    for t, stump in enumerate(results['stumps'], start=1):
        report.append(f"| {t} | {stump['axis']} | {stump['threshold']:.4f} | {stump['polarity']:+d} | "
                      f"{stump['confidence']:.4f} | {stump['training_error']:.4f} |")

    # 誤差
    report.append("\n## 3. 切り株の数ごとの誤分類")
    report.append("\n| t | 訓練誤分類数 | 訓練誤分類率 | テスト誤分類数 | テスト誤分類率 | 訓練最小マージン |")
    report.append("| --- | --- | --- | --- | --- | --- |")
    for (_, train_row), (_, test_row) in zip(train_df.iterrows(), test_df.iterrows()):
        report.append(f"| {int(train_row['n_stumps'])} | {int(train_row['errors'])} | {train_row['error_rate']:.4f} | "
                      f"{int(test_row['errors'])} | {test_row['error_rate']:.4f} | {train_row['min_margin']:.4f} |")

    # 結論
    report.append("\n## 4. 結論\n")
    for line in results['summary']:
        report.append(f"- {line}")

    path = os.path.join(results_dir, "summary_report.md")
    with open(path, 'w') as f:
        f.write('\n'.join(report))

    return path
