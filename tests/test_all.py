"""
ada_stump 実装のテストと動作確認用スクリプト

このスクリプトは、データ生成・評価・可視化・実験スクリプトの各
コンポーネントをテストし、基本的な動作確認を行います。
"""

import os
import tempfile

import numpy as np
import pandas as pd
import pytest

from ada_stump.models.stump_components import AdaBoostStumps, DegenerateFitError
from ada_stump.data.synthetic import generate_sample, generate_synthetic_data, generate_grid_quadrant_data
from ada_stump.utils.evaluation import staged_evaluation, evaluate_model, summarize_results
from ada_stump.utils.visualization import (
    create_results_directory,
    save_experiment_config,
    load_experiment_config,
    plot_dataset,
    plot_stumps_on_data,
    plot_stump_errors,
    plot_error_curves,
    plot_min_margins
)
from ada_stump.experiments.run_adaboost import run_adaboost_experiment, run_model_comparison


def test_data_generation():
    """データ生成モジュールのテスト"""
    X_train, y_train, X_test, y_test = generate_synthetic_data(
        n_train=80, n_test=20, pattern="circle", random_state=42
    )
    assert X_train.shape == (80, 2)
    assert y_train.shape == (80,)
    assert X_test.shape == (20, 2)
    assert y_test.shape == (20,)
    assert set(np.unique(np.concatenate([y_train, y_test]))) <= {-1, 1}
    assert np.all(np.abs(X_train) <= 2.0)

    # 同じシードなら同じデータ
    X_again, y_again, _, _ = generate_synthetic_data(
        n_train=80, n_test=20, pattern="circle", random_state=42
    )
    np.testing.assert_array_equal(X_train, X_again)
    np.testing.assert_array_equal(y_train, y_again)

    # パターンごとのラベル
    X, y = generate_sample(200, pattern="quadrant", random_state=0)
    np.testing.assert_array_equal(y == 1, (X[:, 0] > 0) & (X[:, 1] > 0))
    X, y = generate_sample(200, pattern="halfplane", random_state=0)
    np.testing.assert_array_equal(y == 1, X[:, 0] > 0)

    with pytest.raises(ValueError, match="Unknown pattern"):
        generate_sample(10, pattern="spiral")


def test_label_noise():
    """ラベルノイズのテスト"""
    X, clean = generate_sample(500, pattern="circle", random_state=3)
    _, noisy = generate_sample(500, pattern="circle", noise=0.2, random_state=3)

    flipped = np.mean(clean != noisy)
    assert 0.1 < flipped < 0.3


def test_grid_quadrant_data():
    X, y = generate_grid_quadrant_data(4)

    assert X.shape == (16, 2)
    assert np.sum(y == 1) == 4
    with pytest.raises(ValueError):
        generate_grid_quadrant_data(3)


def test_halfplane_data_is_degenerate():
    """一つの切り株で分離できるデータでは最初のラウンドで停止する"""
    X, y = generate_sample(50, pattern="halfplane", random_state=5)

    # 格子の刻みを正負の点の隙間の半分以下にする
    gap = X[y == 1, 0].min() - X[y == -1, 0].max()
    resolution = int(np.ceil(2 * np.ptp(X[:, 0]) / gap)) + 1

    with pytest.raises(DegenerateFitError):
        AdaBoostStumps(n_estimators=3, resolution=resolution).fit(X, y)


def test_staged_evaluation():
    """切り株の数ごとの評価のテスト"""
    X_train, y_train, X_test, y_test = generate_synthetic_data(
        n_train=100, n_test=40, pattern="circle", random_state=1
    )
    model = AdaBoostStumps(n_estimators=6, resolution=40).fit(X_train, y_train)

    df = staged_evaluation(model, X_test, y_test)

    assert list(df.columns) == ['n_stumps', 'correct', 'errors', 'error_rate', 'min_margin']
    assert df['n_stumps'].tolist() == [1, 2, 3, 4, 5, 6]
    assert (df['correct'] + df['errors'] == 40).all()
    np.testing.assert_allclose(df['error_rate'], df['errors'] / 40)

    final = evaluate_model(model, X_test, y_test)
    assert final['correct'] == df['correct'].iloc[-1]
    assert final['min_margin'] == pytest.approx(df['min_margin'].iloc[-1])

    lines = summarize_results(6, evaluate_model(model, X_train, y_train), final, 100, 40)
    assert lines[0] == "The final combined classifier used 6 weak learners/stumps."
    assert "out of 40 correctly in the testing set." in lines[2]


def test_visualization(tmp_path):
    """可視化ユーティリティのテスト"""
    X_train, y_train, X_test, y_test = generate_synthetic_data(
        n_train=60, n_test=20, pattern="quadrant", random_state=2
    )
    model = AdaBoostStumps(n_estimators=4, resolution=20).fit(X_train, y_train)
    train_df = staged_evaluation(model, X_train, y_train)
    test_df = staged_evaluation(model, X_test, y_test)

    paths = {
        'data': tmp_path / "data.png",
        'stumps': tmp_path / "stumps.png",
        'errors': tmp_path / "errors.png",
        'counts': tmp_path / "counts.png",
        'rates': tmp_path / "rates.png",
        'margins': tmp_path / "margins.png"
    }
    plot_dataset(X_train, y_train, save_path=str(paths['data']))
    plot_stumps_on_data(X_train, y_train, model.stumps_, save_path=str(paths['stumps']))
    plot_stump_errors(model.stumps_, save_path=str(paths['errors']))
    plot_error_curves(train_df, test_df, rate=False, save_path=str(paths['counts']))
    plot_error_curves(train_df, test_df, rate=True, save_path=str(paths['rates']))
    plot_min_margins(train_df, test_df, save_path=str(paths['margins']))

    for path in paths.values():
        assert path.is_file()


def test_experiment_config_roundtrip(tmp_path):
    results_dir = create_results_directory(str(tmp_path))
    config = {'train_size': 50, 'test_size': 10, 'n_stumps': 3, 'resolution': 20,
              'pattern': 'circle', 'noise': 0.0, 'random_state': 0}

    path = save_experiment_config(config, results_dir)

    assert os.path.isdir(os.path.join(results_dir, "figures"))
    assert load_experiment_config(path) == config


def test_experiment_pipeline(tmp_path):
    """実験スクリプトのテスト"""
    results = run_adaboost_experiment(
        train_size=60, test_size=20, n_stumps=5, resolution=20,
        random_state=0, output_dir=str(tmp_path), save_figures=True, verbose=False
    )
    results_dir = results['results_dir']

    assert len(results['stumps']) == 5
    assert len(results['train_staged']['n_stumps']) == 5
    assert len(results['summary']) == 3
    for name in ["experiment_config.json", "summary_report.md"]:
        assert os.path.isfile(os.path.join(results_dir, name))
    for name in ["stump_logs.json", "staged_evaluation.csv"]:
        assert os.path.isfile(os.path.join(results_dir, "raw_data", name))
    assert len(os.listdir(os.path.join(results_dir, "figures"))) == 8

    staged = pd.read_csv(os.path.join(results_dir, "raw_data", "staged_evaluation.csv"))
    assert {'errors_train', 'errors_test', 'min_margin_train'} <= set(staged.columns)

    # 保存した設定から同じ実験を再現できる
    config = load_experiment_config(os.path.join(results_dir, "experiment_config.json"))
    again = run_adaboost_experiment(**config, output_dir=str(tmp_path), save_figures=False, verbose=False)
    assert again['stumps'] == results['stumps']


def test_model_comparison():
    """scikit-learn の AdaBoost との比較実験のテスト"""
    comparison = run_model_comparison(
        train_size=80, test_size=20, n_stumps=5, resolution=30, random_state=0, verbose=False
    )

    assert comparison['model'].tolist() == ['AdaBoostStumps', 'sklearn.AdaBoostClassifier']
    assert ((comparison['test_accuracy'] >= 0) & (comparison['test_accuracy'] <= 1)).all()


def test_directory_structure():
    """ディレクトリ構造のテスト"""
    root_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    package_dir = os.path.join(root_dir, 'ada_stump')

    required_files = [
        'pyproject.toml',
        'ada_stump/__init__.py',
        'ada_stump/models/__init__.py',
        'ada_stump/models/base.py',
        'ada_stump/models/stump_components/__init__.py',
        'ada_stump/models/stump_components/adaboost_core.py',
        'ada_stump/models/stump_components/stump_fitter.py',
        'ada_stump/data/synthetic.py',
        'ada_stump/experiments/run_adaboost.py',
        'ada_stump/utils/evaluation.py',
        'ada_stump/utils/visualization.py'
    ]

    assert os.path.isdir(package_dir)
    for file_name in required_files:
        assert os.path.isfile(os.path.join(root_dir, file_name)), file_name


def run_all_tests():
    """すべてのテストを実行"""
    print("=== ada_stump 実装テスト開始 ===")

    with tempfile.TemporaryDirectory() as tmp_dir:
        from pathlib import Path
        tmp_path = Path(tmp_dir)

        tests = [
            (test_directory_structure, ()),
            (test_data_generation, ()),
            (test_label_noise, ()),
            (test_grid_quadrant_data, ()),
            (test_halfplane_data_is_degenerate, ()),
            (test_staged_evaluation, ()),
            (test_visualization, (tmp_path,)),
            (test_experiment_config_roundtrip, (tmp_path,)),
            (test_experiment_pipeline, (tmp_path,)),
            (test_model_comparison, ())
        ]
        for test, args in tests:
            print(f"\n=== テスト: {test.__name__} ===")
            test(*args)
            print(f"{test.__name__} 成功")

    print("\n=== ada_stump 実装テスト完了 ===")


if __name__ == "__main__":
    run_all_tests()
