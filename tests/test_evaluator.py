import pytest

from cancer_cv.evaluation import (
    ConfusionMatrix,
    MetricTriple,
    aggregate,
    confusion,
    evaluate_fold,
    metrics_from_confusion,
)


def _labels(tp, fp, fn, tn):
    y_true = ["M"] * tp + ["B"] * fp + ["M"] * fn + ["B"] * tn
    y_pred = ["M"] * tp + ["M"] * fp + ["B"] * fn + ["B"] * tn
    return y_true, y_pred


def test_reference_confusion_matrix():
    y_true, y_pred = _labels(tp=50, fp=2, fn=1, tn=61)
    cm = confusion(y_true, y_pred)

    assert (cm.tp, cm.fp, cm.fn, cm.tn) == (50, 2, 1, 61)
    assert cm.total == 114

    m = metrics_from_confusion(cm)
    assert m.accuracy == pytest.approx(111 / 114)
    assert m.sensitivity == pytest.approx(50 / 51)
    assert m.specificity == pytest.approx(61 / 63)
    assert m.as_percentages() == {
        "accuracy": 97.37,
        "sensitivity": 98.04,
        "specificity": 96.83,
    }


def test_benign_as_positive_swaps_the_rates():
    y_true, y_pred = _labels(tp=50, fp=2, fn=1, tn=61)
    malignant = metrics_from_confusion(confusion(y_true, y_pred))
    benign = metrics_from_confusion(confusion(y_true, y_pred, positive="B", negative="M"))

    assert benign.accuracy == pytest.approx(malignant.accuracy)
    assert benign.sensitivity == pytest.approx(malignant.specificity)
    assert benign.specificity == pytest.approx(malignant.sensitivity)


def test_table_is_predicted_by_actual():
    cm = ConfusionMatrix(tp=5, fp=1, fn=2, tn=7)
    assert cm.as_table() == [[5, 1], [2, 7]]


def test_single_predicted_class_is_zero_padded():
    y_true = ["M", "M", "B", "B", "B"]
    y_pred = ["B"] * 5
    cm = confusion(y_true, y_pred)

    assert (cm.tp, cm.fp, cm.fn, cm.tn) == (0, 0, 2, 3)
    assert cm.total == len(y_true)
    m = metrics_from_confusion(cm)
    assert m.sensitivity == 0.0
    assert m.specificity == 1.0
    assert m.accuracy == pytest.approx(0.6)


def test_fold_without_actual_positives():
    cm = confusion(["B", "B", "B"], ["B", "M", "B"])
    m = metrics_from_confusion(cm)
    assert m.sensitivity == 1.0
    assert m.specificity == pytest.approx(2 / 3)


@pytest.mark.parametrize("counts", [
    (10, 0, 0, 10),
    (10, 3, 0, 7),
    (9, 0, 1, 10),
    (0, 4, 6, 0),
    (1, 1, 1, 1),
])
def test_metric_properties(counts):
    tp, fp, fn, tn = counts
    m = metrics_from_confusion(ConfusionMatrix(tp, fp, fn, tn))
    assert m.accuracy == pytest.approx((tp + tn) / (tp + fp + fn + tn))
    assert 0.0 <= m.sensitivity <= 1.0
    assert 0.0 <= m.specificity <= 1.0
    assert (m.sensitivity == 1.0) == (fn == 0)


def test_length_mismatch_fails():
    with pytest.raises(ValueError, match="differ in length"):
        confusion(["M", "B"], ["M"])


def test_unexpected_label_fails():
    with pytest.raises(ValueError, match="outside the expected pair"):
        confusion(["M", "B"], ["M", "X"])


def test_empty_matrix_cannot_be_scored():
    with pytest.raises(ValueError):
        metrics_from_confusion(confusion([], []))


def test_aggregate_is_order_independent():
    results = [
        evaluate_fold(0, *_labels(10, 0, 0, 10)),
        evaluate_fold(1, *_labels(8, 2, 1, 9)),
        evaluate_fold(2, *_labels(5, 1, 5, 9)),
    ]
    forward = aggregate(results)
    backward = aggregate(reversed(results))
    assert forward.accuracy == pytest.approx(backward.accuracy)
    assert forward.sensitivity == pytest.approx(backward.sensitivity)
    assert forward.specificity == pytest.approx(backward.specificity)
    assert forward.accuracy == pytest.approx((1.0 + 17 / 20 + 14 / 20) / 3)


def test_mean_of_nothing_fails():
    with pytest.raises(ValueError):
        MetricTriple.mean([])


def test_fold_results_are_immutable():
    result = evaluate_fold(0, ["M", "B"], ["M", "B"])
    with pytest.raises(AttributeError):
        result.metrics.accuracy = 0.5
