import pytest

from doorcam.analysis.models import EventCategory
from doorcam.analysis.time_patterns import analyze_time_patterns


def test_example_patterns(example_observations):
    patterns = analyze_time_patterns(example_observations)

    assert [p.hour for p in patterns] == [6, 9]
    six, nine = patterns
    assert six.event_count == 2
    assert six.dominant_category == EventCategory.PERSON
    assert six.average_confidence == pytest.approx(0.85)
    assert nine.event_count == 1
    assert nine.dominant_category == EventCategory.VEHICLE


def test_empty_hours_are_omitted(make_obs):
    patterns = analyze_time_patterns([make_obs("cat", 0.5, 23, 0), make_obs("dog", 0.5, 1, 0)])
    assert [p.hour for p in patterns] == [1, 23]


def test_dominant_category_is_most_frequent(make_obs):
    observations = [
        make_obs("car", 0.6, 8, 0),
        make_obs("person", 0.9, 8, 1),
        make_obs("person", 0.9, 8, 2),
        make_obs("handbag", 0.7, 8, 3),
    ]
    (pattern,) = analyze_time_patterns(observations)
    assert pattern.dominant_category == EventCategory.PERSON
    assert pattern.event_count == 4
    assert pattern.average_confidence == pytest.approx(0.775)


def test_dominant_category_tie_goes_to_first_encountered(make_obs):
    car_first = [make_obs("car", 0.6, 7, 10), make_obs("person", 0.9, 7, 5)]
    person_first = list(reversed(car_first))

    assert analyze_time_patterns(car_first)[0].dominant_category == EventCategory.VEHICLE
    assert analyze_time_patterns(person_first)[0].dominant_category == EventCategory.PERSON


def test_no_observations():
    assert analyze_time_patterns([]) == []
