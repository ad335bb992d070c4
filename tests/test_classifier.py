import pytest

from doorcam.analysis.classifier import LABEL_CATEGORIES, classify
from doorcam.analysis.models import EventCategory


@pytest.mark.parametrize(
    "label,expected",
    [
        ("person", EventCategory.PERSON),
        ("car", EventCategory.VEHICLE),
        ("truck", EventCategory.VEHICLE),
        ("bus", EventCategory.VEHICLE),
        ("cat", EventCategory.ANIMAL),
        ("dog", EventCategory.ANIMAL),
        ("bird", EventCategory.ANIMAL),
        ("backpack", EventCategory.PACKAGE),
        ("handbag", EventCategory.PACKAGE),
        ("suitcase", EventCategory.PACKAGE),
    ],
)
def test_known_labels(label, expected):
    assert classify(label) == expected


@pytest.mark.parametrize("label", ["bicycle", "umbrella", "", "Person", "CAR"])
def test_unknown_or_differently_cased_labels_fall_through_to_movement(label):
    assert classify(label) == EventCategory.MOVEMENT


def test_every_category_except_movement_has_labels():
    mapped = set(LABEL_CATEGORIES.values())
    assert mapped == set(EventCategory) - {EventCategory.MOVEMENT}
