"""
ブースティングループ・重み分布・予測のテスト
"""

import json
import warnings

import numpy as np
import pytest

from ada_stump.models.stump_components import (
    AdaBoostStumps,
    StumpFitter,
    WeightDistribution,
    DecisionStump,
    Axis,
    Polarity,
    run_adaboost,
    predict_ensemble,
    ensemble_margins,
    InvalidInputError,
    DegenerateFitError,
    WeightCollapseError,
    EnsembleFallbackWarning
)
from ada_stump.data.synthetic import generate_sample, generate_grid_quadrant_data


# 外れ値 (-3, 0.5, +1) 以外は x1 の切り株で分離できる
OUTLIER_X = np.array([
    [-2.0, 0.0], [-1.8, 1.0], [-1.6, 0.0], [-1.4, 1.0],
    [1.0, 0.0], [2.0, 1.0], [-3.0, 0.5]
])
OUTLIER_Y = np.array([-1, -1, -1, -1, 1, 1, 1])


def test_weights_sum_to_one_after_every_round():
    X, y = generate_sample(100, pattern="circle", noise=0.05, random_state=0)

    model = AdaBoostStumps(n_estimators=15, resolution=50, track_weights=True).fit(X, y)
    history = model.weight_distribution_.history

    assert len(history) == len(model.stumps_) + 1
    np.testing.assert_allclose(history[0], np.full(100, 0.01))
    for weights in history:
        assert np.sum(weights) == pytest.approx(1.0, abs=1e-9)
        assert np.all(weights > 0)


def test_outlier_weight_increases_after_one_round():
    model = AdaBoostStumps(n_estimators=1, resolution=100).fit(OUTLIER_X, OUTLIER_Y)
    stump = model.stumps_[0]

    assert stump.axis is Axis.HORIZONTAL
    assert stump.polarity is Polarity.POSITIVE
    assert stump.training_error == pytest.approx(1 / 7)
    np.testing.assert_array_equal(
        stump.misclassified_mask(OUTLIER_X, OUTLIER_Y),
        [False, False, False, False, False, False, True]
    )

    # exp(alpha) = sqrt(6) なので誤分類側に重みの半分が載る
    weights = model.weights_
    assert weights[6] == pytest.approx(0.5)
    np.testing.assert_allclose(weights[:6], np.full(6, 1 / 12))
    assert weights[6] > 1 / 7
    assert np.all(weights[:6] < 1 / 7)


def test_weight_update_follows_exponential_rule():
    X, y = generate_sample(30, pattern="quadrant", noise=0.1, random_state=8)
    distribution = WeightDistribution.uniform(30)
    stump = StumpFitter(resolution=20).fit(X, y, distribution.weights)

    misclassified = distribution.update(stump, X, y)

    expected = np.where(misclassified, np.exp(stump.confidence), np.exp(-stump.confidence)) / 30
    np.testing.assert_allclose(distribution.weights, expected / expected.sum())
    # 更新後の分布では直前の切り株の誤差はちょうど 1/2
    assert np.sum(distribution.weights[misclassified]) == pytest.approx(0.5)


def test_ensemble_prefix_is_deterministic():
    X_short, y_short = generate_sample(120, pattern="circle", random_state=7)
    X_long, y_long = generate_sample(120, pattern="circle", random_state=7)

    short = run_adaboost(X_short, y_short, rounds=6, resolution=40)
    long = run_adaboost(X_long, y_long, rounds=11, resolution=40)

    assert len(short) == 6
    assert len(long) == 11
    assert short == long[:6]


def test_training_error_reaches_zero_on_quadrant_grid():
    X, y = generate_grid_quadrant_data(4)

    model = AdaBoostStumps(n_estimators=100, resolution=100).fit(X, y)

    np.testing.assert_array_equal(model.predict(X), y)
    assert np.min(model.margins(X, y)) > 0


def test_degenerate_round_is_surfaced_without_appending():
    X = np.array([[1.0, 1.0], [1.0, -1.0], [-1.0, 1.0], [-1.0, -1.0]])
    y = np.array([1, 1, -1, -1])
    model = AdaBoostStumps(n_estimators=5)

    with pytest.raises(DegenerateFitError) as excinfo:
        model.fit(X, y)

    assert excinfo.value.round_index == 0
    assert model.stumps_ == []


def test_invalid_stump_stops_boosting_with_warning(monkeypatch):
    X, y = generate_sample(20, pattern="circle", random_state=1)

    def fake_fit(self, X, y, weights):
        return DecisionStump(axis=None, threshold=0.0, polarity=Polarity.POSITIVE,
                             confidence=0.5, training_error=0.25)

    monkeypatch.setattr(StumpFitter, "fit", fake_fit)

    model = AdaBoostStumps(n_estimators=3)
    with pytest.warns(EnsembleFallbackWarning):
        model.fit(X, y)

    assert model.stumps_ == []
    np.testing.assert_allclose(model.weights_, np.full(20, 0.05))


def test_weight_collapse_is_detected():
    with pytest.raises(WeightCollapseError):
        WeightDistribution(np.zeros(3))

    with pytest.raises(WeightCollapseError):
        WeightDistribution(np.array([np.inf, 1.0]))


def test_staged_scores_match_prefix_scores():
    X, y = generate_sample(80, pattern="circle", noise=0.05, random_state=2)
    X_new, y_new = generate_sample(25, pattern="circle", random_state=3)
    model = AdaBoostStumps(n_estimators=8, resolution=40).fit(X, y)

    staged = list(model.staged_decision_function(X_new))
    assert [k for k, _ in staged] == list(range(1, 9))

    for k, scores in staged:
        np.testing.assert_allclose(scores, model.decision_function(X_new, n_stumps=k))

    for (k, labels), (_, margins) in zip(model.staged_predict(X_new), model.staged_margins(X_new, y_new)):
        np.testing.assert_array_equal(labels, model.predict(X_new, n_stumps=k))
        np.testing.assert_allclose(margins, model.margins(X_new, y_new, n_stumps=k))


def test_prediction_is_weighted_vote():
    stumps = [
        DecisionStump(Axis.HORIZONTAL, 0.0, Polarity.POSITIVE, 1.0, 0.1),
        DecisionStump(Axis.VERTICAL, 0.0, Polarity.NEGATIVE, 0.4, 0.3)
    ]
    X = np.array([[1.0, 1.0], [-1.0, -1.0], [-1.0, 1.0]])
    y = np.array([1, -1, 1])

    # 票: 1.0 - 0.4, -1.0 + 0.4, -1.0 - 0.4
    np.testing.assert_array_equal(predict_ensemble(stumps, X), [1, -1, -1])
    np.testing.assert_allclose(ensemble_margins(stumps, X, y), np.array([0.6, 0.6, -1.4]) / 1.4)


def test_zero_vote_predicts_negative():
    stumps = [DecisionStump(Axis.HORIZONTAL, 0.0, Polarity.POSITIVE, 1.0, 0.1)]

    np.testing.assert_array_equal(predict_ensemble(stumps, np.array([[0.0, 5.0]])), [-1])


def test_predict_does_not_touch_weights():
    X, y = generate_sample(50, pattern="circle", random_state=6)
    model = AdaBoostStumps(n_estimators=4, resolution=30).fit(X, y)
    before = model.weights_.copy()

    model.predict(X)
    list(model.staged_margins(X, y))

    np.testing.assert_array_equal(model.weights_, before)


def test_unfitted_model_raises():
    model = AdaBoostStumps()

    with pytest.raises(ValueError, match="not been fitted"):
        model.predict(np.zeros((2, 2)))


def test_n_stumps_out_of_range():
    X, y = generate_sample(40, pattern="circle", random_state=9)
    model = AdaBoostStumps(n_estimators=3, resolution=20).fit(X, y)

    with pytest.raises(ValueError):
        model.predict(X, n_stumps=0)
    with pytest.raises(ValueError):
        model.predict(X, n_stumps=4)


@pytest.mark.parametrize("params", [{'n_estimators': 0}, {'resolution': 0}, {'n_estimators': 1.5}])
def test_invalid_parameters_are_rejected(params):
    X, y = generate_sample(20, pattern="circle", random_state=1)

    with pytest.raises(InvalidInputError):
        AdaBoostStumps(**params).fit(X, y)


def test_params_roundtrip():
    model = AdaBoostStumps(n_estimators=7, resolution=33)

    assert model.get_params() == {
        'n_estimators': 7, 'resolution': 33, 'verbose': False, 'track_weights': False
    }
    assert model.set_params(n_estimators=9).n_estimators == 9
    with pytest.raises(ValueError, match="Invalid parameter"):
        model.set_params(learning_rate=0.1)


def test_evaluate_metrics():
    X, y = generate_sample(60, pattern="circle", random_state=12)
    model = AdaBoostStumps(n_estimators=10, resolution=30).fit(X, y)

    results = model.evaluate(X, y, metrics=['accuracy', 'error_rate', 'correct', 'errors', 'min_margin'])

    assert results['accuracy'] + results['error_rate'] == pytest.approx(1.0)
    assert results['correct'] + results['errors'] == 60
    assert -1.0 <= results['min_margin'] <= 1.0
    with pytest.raises(ValueError, match="Unknown metric"):
        model.evaluate(X, y, metrics=['mse'])


def test_stump_logs_are_saved(tmp_path):
    X, y = generate_sample(50, pattern="quadrant", random_state=13)
    model = AdaBoostStumps(n_estimators=5, resolution=25).fit(X, y)
    path = tmp_path / "stump_logs.json"

    model.save_logs_to_json(str(path))

    with open(path) as f:
        logs = json.load(f)
    assert [log['round'] for log in logs] == [1, 2, 3, 4, 5]
    assert {'axis', 'threshold', 'polarity', 'confidence', 'training_error',
            'n_misclassified', 'weight_max', 'weight_min', 'timestamp'} <= set(logs[0])
    # 保存時のタイムスタンプはモデル内のログに書き込まれない
    assert 'timestamp' not in model.get_stump_logs()[0]


def test_verbose_output(capsys):
    X, y = generate_sample(30, pattern="circle", random_state=14)
    model = AdaBoostStumps(n_estimators=2, resolution=10, verbose=True).fit(X, y)
    model.print_training_summary()

    out = capsys.readouterr().out
    assert "Round 1/2" in out
    assert "Round 2/2" in out
    assert "Training Summary" in out


def test_no_warnings_on_regular_fit():
    X, y = generate_sample(40, pattern="circle", random_state=15)

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        AdaBoostStumps(n_estimators=5, resolution=20).fit(X, y)
