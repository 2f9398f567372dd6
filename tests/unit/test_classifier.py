from __future__ import annotations

from enum import Enum

import pytest

from docsieve.classifiers.base import Classifier
from docsieve.extractor import CallableExtractor
from docsieve.types import Sample
from tests.unit.conftest import sample_train


class Topic(str, Enum):
    GOOD = "good"
    BAD = "bad"


class ConstantClassifier(Classifier):
    """Classifier whose scores are fixed per category, for exercising ``decide``."""

    def __init__(self, scores: dict[str, float]) -> None:
        super().__init__()
        self._scores = scores
        for category in scores:
            self.train("", category)

    def score(self, item: str, category: str) -> float:
        return self._scores[category]


def test_feature_counts_after_training() -> None:
    classifier = Classifier()
    classifier.train("the quick brown fox jumps over the lazy dog", "good")
    classifier.train("make quick money in the online casino", "bad")

    assert classifier.feature_count("quick", "good") == 1.0
    assert classifier.feature_count("quick", "bad") == 1.0
    assert classifier.feature_count("dog", "good") == 1.0
    assert classifier.feature_count("dog", "bad") == 0.0


def test_feature_count_unknown_feature_or_category_is_zero() -> None:
    classifier = Classifier()
    classifier.train("the quick brown fox", "good")

    assert classifier.feature_count("missing", "good") == 0.0
    assert classifier.feature_count("quick", "never-trained") == 0.0
    assert isinstance(classifier.feature_count("quick", "good"), float)


def test_repeated_training_accumulates() -> None:
    classifier = Classifier()
    previous = 0.0
    for _ in range(5):
        classifier.train("quick quick brown", "good")
        current = classifier.feature_count("quick", "good")
        assert current >= previous
        previous = current

    assert classifier.feature_count("quick", "good") == 5.0
    assert classifier.category_count("good") == 5.0


def test_category_totals_and_order() -> None:
    classifier = sample_train(Classifier())

    assert classifier.categories() == ("good", "bad")
    assert classifier.category_count("good") == 3.0
    assert classifier.category_count("bad") == 2.0
    assert classifier.category_count("other") == 0.0
    assert classifier.total_count() == 5.0
    assert classifier.is_trained() is True


def test_untrained_classifier_is_empty() -> None:
    classifier = Classifier()
    assert classifier.categories() == ()
    assert classifier.total_count() == 0.0
    assert classifier.is_trained() is False
    assert classifier.vocabulary_size() == 0


def test_feature_probability() -> None:
    classifier = sample_train(Classifier())

    assert classifier.feature_probability("quick", "good") == pytest.approx(2 / 3)
    assert classifier.feature_probability("quick", "bad") == pytest.approx(0.5)
    assert classifier.feature_probability("quick", "unseen") == 0.0


def test_feature_probability_is_bounded() -> None:
    classifier = sample_train(Classifier())
    features = ["the", "quick", "money", "water", "missing"]
    for feature in features:
        for category in ("good", "bad", "unseen"):
            assert 0.0 <= classifier.feature_probability(feature, category) <= 1.0


def test_weighted_probability_matches_reference_value() -> None:
    classifier = Classifier()
    classifier.train("the quick brown fox jumps over the lazy dog", "good")
    classifier.train("make quick money in the online casino", "bad")

    prob = classifier.weighted_probability("money", "good", classifier.feature_probability)
    assert prob == pytest.approx(0.25)


def test_weighted_probability_unseen_feature_returns_assumed_prob() -> None:
    classifier = sample_train(Classifier())

    prob = classifier.weighted_probability("zebra", "good", classifier.feature_probability)
    assert prob == 0.5

    custom = classifier.weighted_probability(
        "zebra", "good", classifier.feature_probability, weight=3.0, assumed_prob=0.2
    )
    assert custom == 0.2

    instance_default = Classifier(weight=3.0, assumed_prob=0.7)
    instance_default.train("quick rabbit", "good")
    assert (
        instance_default.weighted_probability("zebra", "good", instance_default.feature_probability)
        == 0.7
    )


def test_weighted_probability_converges_to_basic_probability() -> None:
    classifier = Classifier()
    for _ in range(2000):
        classifier.train("alpha", "good")
    classifier.train("beta", "bad")

    basic = classifier.feature_probability("alpha", "good")
    weighted = classifier.weighted_probability("alpha", "good", classifier.feature_probability)
    assert basic == 1.0
    assert weighted == pytest.approx(basic, abs=1e-3)


def test_weighted_probability_uses_instance_defaults() -> None:
    classifier = Classifier(weight=2.0, assumed_prob=0.1)
    classifier.train("alpha", "good")

    assert classifier.weighted_probability("omega", "good", classifier.feature_probability) == (
        pytest.approx(0.1)
    )
    # (2 * 0.1 + 1 * 1.0) / (2 + 1)
    assert classifier.weighted_probability("alpha", "good", classifier.feature_probability) == (
        pytest.approx(0.4)
    )


@pytest.mark.parametrize("prf", [None, "feature_probability"])
def test_weighted_probability_requires_probability_function(prf) -> None:
    classifier = sample_train(Classifier())
    with pytest.raises(ValueError):
        classifier.weighted_probability("quick", "good", prf)


@pytest.mark.parametrize(
    "kwargs",
    [{"weight": 0.0}, {"weight": -1.0}, {"assumed_prob": 1.5}, {"assumed_prob": -0.1}],
)
def test_constructor_validates_estimator_settings(kwargs) -> None:
    with pytest.raises(ValueError):
        Classifier(**kwargs)


def test_custom_extractor_is_used_for_training() -> None:
    classifier = Classifier(CallableExtractor(lambda document: document.split(",")))
    classifier.train("red,green,red", "colour")

    assert classifier.feature_count("red", "colour") == 1.0
    assert classifier.feature_count("green", "colour") == 1.0
    assert classifier.vocabulary_size() == 2


def test_enum_categories_are_supported() -> None:
    classifier = Classifier()
    classifier.train("quick rabbit", Topic.GOOD)
    classifier.train("cheap money", Topic.BAD)

    assert classifier.categories() == (Topic.GOOD, Topic.BAD)
    assert classifier.feature_count("quick", Topic.GOOD) == 1.0


def test_train_many_consumes_samples() -> None:
    classifier = Classifier()
    trained = classifier.train_many(
        [Sample(text="quick rabbit", category="good"), Sample(text="cheap pills", category="bad")]
    )
    assert trained == 2
    assert classifier.total_count() == 2.0


def test_base_score_is_abstract() -> None:
    classifier = sample_train(Classifier())
    with pytest.raises(NotImplementedError):
        classifier.classify("quick rabbit")


def test_decide_picks_highest_score() -> None:
    classifier = ConstantClassifier({"good": 0.2, "bad": 0.6})
    assert classifier.classify("anything", default="unknown") == "bad"


def test_decide_keeps_first_maximum_on_ties() -> None:
    classifier = ConstantClassifier({"good": 0.4, "bad": 0.4})
    assert classifier.classify("anything") == "good"


def test_decide_returns_none_when_nothing_scores() -> None:
    classifier = ConstantClassifier({"good": 0.0, "bad": 0.0})
    assert classifier.classify("anything", default="unknown") is None


def test_decide_falls_back_when_threshold_not_met() -> None:
    classifier = ConstantClassifier({"good": 0.3, "bad": 0.2})
    assert classifier.classify("anything", default="unknown") == "good"

    classifier.thresholds["good"] = 2.0
    assert classifier.get_threshold("good") == 2.0
    assert classifier.classify("anything", default="unknown") == "unknown"

    classifier.thresholds["good"] = 1.4
    assert classifier.classify("anything", default="unknown") == "good"


def test_threshold_of_losing_category_is_ignored() -> None:
    classifier = ConstantClassifier({"good": 0.3, "bad": 0.2})
    classifier.thresholds["bad"] = 100.0
    assert classifier.classify("anything", default="unknown") == "good"


def test_unset_threshold_defaults_to_zero() -> None:
    classifier = Classifier()
    assert classifier.get_threshold("anything") == 0.0


def test_predict_reports_scores_and_confidence() -> None:
    classifier = ConstantClassifier({"good": 0.2, "bad": 0.6})
    prediction = classifier.predict("anything", default="unknown")

    assert prediction.category == "bad"
    assert prediction.confidence == pytest.approx(0.6)
    assert dict(prediction.scores) == {"good": 0.2, "bad": 0.6}


def test_predict_without_winner_has_zero_confidence() -> None:
    classifier = ConstantClassifier({"good": 0.3, "bad": 0.2})
    classifier.thresholds["good"] = 5.0
    prediction = classifier.predict("anything", default="unknown")

    assert prediction.category == "unknown"
    assert prediction.confidence == 0.0


def test_predict_fallback_to_known_category_reports_zero_confidence() -> None:
    classifier = ConstantClassifier({"good": 0.3, "bad": 0.2})
    classifier.thresholds["good"] = 2.0
    prediction = classifier.predict("anything", default="bad")

    assert prediction.category == "bad"
    assert prediction.confidence == 0.0
    assert classifier.classify("anything", default="bad") == "bad"


def test_predict_winner_equal_to_default_keeps_its_score() -> None:
    classifier = ConstantClassifier({"good": 0.3, "bad": 0.2})
    prediction = classifier.predict("anything", default="good")

    assert prediction.category == "good"
    assert prediction.confidence == pytest.approx(0.3)


def test_select_reports_whether_a_category_was_decided() -> None:
    classifier = ConstantClassifier({"good": 0.3, "bad": 0.2})
    assert classifier.select({"good": 0.3, "bad": 0.2}) == ("good", True)

    classifier.thresholds["good"] = 2.0
    assert classifier.select({"good": 0.3, "bad": 0.2}) == (None, False)
    assert classifier.select({"good": 0.0, "bad": 0.0}) == (None, True)
