"""
AdaBoost 実験モジュール

このモジュールは、人工データの生成、切り株アンサンブルの学習、
訓練・テストデータでの評価、図とレポートの保存を行う実験スクリプトを
提供します。また、格子探索の切り株と scikit-learn の AdaBoostClassifier
（深さ 1 の決定木）との比較実験も提供します。
"""

import pandas as pd
import time
import os
from typing import Dict, Any

from sklearn.ensemble import AdaBoostClassifier
from sklearn.tree import DecisionTreeClassifier
from sklearn.metrics import accuracy_score

from ..models.stump_components.adaboost_core import AdaBoostStumps
from ..data.synthetic import generate_synthetic_data
from ..utils.evaluation import staged_evaluation, evaluate_model, summarize_results
from ..utils.visualization import (
    create_results_directory,
    save_experiment_config,
    plot_dataset,
    plot_stumps_on_data,
    plot_stump_errors,
    plot_error_curves,
    plot_min_margins,
    create_summary_report
)


def run_adaboost_experiment(train_size: int = 400,
                            test_size: int = 100,
                            n_stumps: int = 20,
                            resolution: int = 100,
                            pattern: str = "circle",
                            noise: float = 0.0,
                            random_state: int = 42,
                            output_dir: str = "results",
                            save_figures: bool = True,
                            verbose: bool = True) -> Dict[str, Any]:
    """
    AdaBoost 実験を実行

    Parameters:
    -----------
    train_size : int, default=400
        訓練点の数
    test_size : int, default=100
        テスト点の数
    n_stumps : int, default=20
        生成する切り株（弱学習器）の数
    resolution : int, default=100
        切り株探索の格子分割数
    pattern : str, default="circle"
        データのラベル付けパターン
    noise : float, default=0.0
        ラベル反転の確率
    random_state : int, default=42
        乱数シード
    output_dir : str, default="results"
        結果の出力ディレクトリ
    save_figures : bool, default=True
        図を保存するかどうか
    verbose : bool, default=True
        進捗を表示するかどうか

    Returns:
    --------
    results : dict
        設定、切り株、切り株の数ごとの評価、要約、出力パス
    """
    config = {
        'train_size': train_size,
        'test_size': test_size,
        'n_stumps': n_stumps,
        'resolution': resolution,
        'pattern': pattern,
        'noise': noise,
        'random_state': random_state
    }

    # 結果ディレクトリを作成
    results_dir = create_results_directory(output_dir)
    save_experiment_config(config, results_dir)

    # データ生成
    X_train, y_train, X_test, y_test = generate_synthetic_data(
        n_train=train_size, n_test=test_size, pattern=pattern, noise=noise, random_state=random_state
    )

    # 学習
    model = AdaBoostStumps(n_estimators=n_stumps, resolution=resolution, verbose=verbose)
    start_time = time.time()
    model.fit(X_train, y_train)
    train_time = time.time() - start_time

    model.save_logs_to_json(os.path.join(results_dir, "raw_data", "stump_logs.json"))

    # 切り株の数ごとの評価
    train_staged = staged_evaluation(model, X_train, y_train)
    test_staged = staged_evaluation(model, X_test, y_test)

    staged = train_staged.merge(test_staged, on='n_stumps', suffixes=('_train', '_test'))
    staged.to_csv(os.path.join(results_dir, "raw_data", "staged_evaluation.csv"), index=False)

    # 最終分類器の評価
    train_eval = evaluate_model(model, X_train, y_train)
    test_eval = evaluate_model(model, X_test, y_test)
    summary = summarize_results(len(model.stumps_), train_eval, test_eval, len(y_train), len(y_test))

    results = {
        'config': config,
        'results_dir': results_dir,
        'train_time': train_time,
        'stumps': [stump.to_dict() for stump in model.stumps_],
        'train_staged': train_staged.to_dict(orient='list'),
        'test_staged': test_staged.to_dict(orient='list'),
        'train_evaluation': train_eval,
        'test_evaluation': test_eval,
        'summary': summary
    }

    if save_figures:
        figures_dir = os.path.join(results_dir, "figures")
        plot_dataset(X_train, y_train,
                     save_path=os.path.join(figures_dir, "training_data.png"))
        plot_stumps_on_data(X_train, y_train, model.stumps_,
                            title="Training data with stumps: * marker shows the direction in which a stump is active",
                            save_path=os.path.join(figures_dir, "training_data_stumps.png"))
        plot_dataset(X_test, y_test,
                     title="Testing data: legend shows actual labels for points",
                     save_path=os.path.join(figures_dir, "testing_data.png"))
        plot_stumps_on_data(X_test, y_test, model.stumps_,
                            title="Testing data with stumps: * marker shows the direction in which a stump is active",
                            save_path=os.path.join(figures_dir, "testing_data_stumps.png"))
        plot_stump_errors(model.stumps_,
                          save_path=os.path.join(figures_dir, "stump_errors.png"))
        plot_error_curves(train_staged, test_staged, rate=False,
                          save_path=os.path.join(figures_dir, "error_counts.png"))
        plot_error_curves(train_staged, test_staged, rate=True,
                          save_path=os.path.join(figures_dir, "error_rates.png"))
        plot_min_margins(train_staged,
                         save_path=os.path.join(figures_dir, "min_margins.png"))

    results['report_path'] = create_summary_report(results, results_dir)

    if verbose:
        for line in summary:
            print(line)

    return results


def run_model_comparison(train_size: int = 400,
                         test_size: int = 100,
                         n_stumps: int = 20,
                         resolution: int = 100,
                         pattern: str = "circle",
                         noise: float = 0.0,
                         random_state: int = 42,
                         verbose: bool = True) -> pd.DataFrame:
    """
    格子探索の切り株アンサンブルと scikit-learn の AdaBoost を比較

    Parameters:
    -----------
    train_size : int, default=400
        訓練点の数
    test_size : int, default=100
        テスト点の数
    n_stumps : int, default=20
        弱学習器の数
    resolution : int, default=100
        切り株探索の格子分割数
    pattern : str, default="circle"
        データのラベル付けパターン
    noise : float, default=0.0
        ラベル反転の確率
    random_state : int, default=42
        乱数シード
    verbose : bool, default=True
        結果を表示するかどうか

    Returns:
    --------
    comparison : pandas.DataFrame
        モデルごとの訓練・テスト正解率と訓練時間
    """
    X_train, y_train, X_test, y_test = generate_synthetic_data(
        n_train=train_size, n_test=test_size, pattern=pattern, noise=noise, random_state=random_state
    )

    models = {
        'AdaBoostStumps': AdaBoostStumps(n_estimators=n_stumps, resolution=resolution),
        'sklearn.AdaBoostClassifier': AdaBoostClassifier(
            DecisionTreeClassifier(max_depth=1),
            n_estimators=n_stumps,
            random_state=random_state
        )
    }

    rows = []
    for model_name, model in models.items():
        if verbose:
            print(f"\nEvaluating {model_name}...")

        # 学習時間を計測
        start_time = time.time()
        model.fit(X_train, y_train)
        train_time = time.time() - start_time

        train_accuracy = accuracy_score(y_train, model.predict(X_train))
        test_accuracy = accuracy_score(y_test, model.predict(X_test))

        rows.append({
            'model': model_name,
            'train_accuracy': train_accuracy,
            'test_accuracy': test_accuracy,
            'train_time': train_time
        })

        if verbose:
            print(f"  Train time: {train_time:.4f}s")
            print(f"  Train accuracy: {train_accuracy:.4f}")
            print(f"  Test accuracy: {test_accuracy:.4f}")

    return pd.DataFrame(rows)


if __name__ == "__main__":
    # デフォルト設定で実験を実行
    run_adaboost_experiment(output_dir="results", random_state=42)
    run_model_comparison(random_state=42)
