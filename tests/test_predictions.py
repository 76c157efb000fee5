import datetime as dt
import random

from cashcast_core.domain.models import CashEvent, Prediction
from cashcast_core.services.predictions import generate_predictions, group_by_run


def _event(event_id: str, value: float, date: dt.date) -> CashEvent:
    return CashEvent(id=event_id, label=f"Event {event_id}", value=value, date=date)


def _key(p: Prediction):
    return (p.run, p.occurs_on, p.value)


def test_only_future_events_produce_predictions(today):
    events = [
        _event("past", 100.0, today - dt.timedelta(days=1)),
        _event("future", 200.0, today + dt.timedelta(days=5)),
    ]
    predictions = generate_predictions(events, 2, 0, 0, "test-seed", today=today)
    assert len(predictions) == 2
    assert all(p.value == 200.0 for p in predictions)


def test_event_dated_today_is_included(today):
    predictions = generate_predictions([_event("now", 50.0, today)], 3, 0, 0, today=today)
    assert [p.occurs_on for p in predictions] == [today] * 3


def test_one_prediction_per_event_and_run(today):
    events = [
        _event("1", 100.0, today + dt.timedelta(days=1)),
        _event("2", 200.0, today + dt.timedelta(days=2)),
    ]
    predictions = generate_predictions(events, 3, 0, 0, "my-seed", today=today)
    assert len(predictions) == 6
    assert sorted(p.run for p in predictions) == [0, 0, 1, 1, 2, 2]


def test_value_variance_spreads_values(today):
    events = [_event("1", 1000.0, today + dt.timedelta(days=5))]
    values = [p.value for p in generate_predictions(events, 10, 0, 20, "my-seed", today=today)]
    assert len(set(values)) > 1
    assert all(800.0 <= v <= 1200.0 for v in values)


def test_date_variance_spreads_dates(today):
    target = today + dt.timedelta(days=10)
    predictions = generate_predictions([_event("1", 1000.0, target)], 10, 5, 0, "my-seed", today=today)
    offsets = {(p.occurs_on - target).days for p in predictions}
    assert len(offsets) > 1
    assert all(-5 <= o <= 5 for o in offsets)


def test_same_seed_is_reproducible_and_order_independent(today):
    events = [_event(str(i), 100.0 * (i + 1), today + dt.timedelta(days=i * 3)) for i in range(6)]
    first = generate_predictions(events, 5, 4, 15, "repeat", today=today)
    second = generate_predictions(events, 5, 4, 15, "repeat", today=today)
    assert first == second

    shuffled = list(events)
    random.Random(3).shuffle(shuffled)
    reordered = generate_predictions(shuffled, 5, 4, 15, "repeat", today=today)
    assert sorted(first, key=_key) == sorted(reordered, key=_key)


def test_predictions_do_not_depend_on_other_events(today):
    rent = _event("rent", -1400.0, today + dt.timedelta(days=10))
    alone = generate_predictions([rent], 4, 3, 10, "solo", today=today)
    together = generate_predictions(
        [_event("salary", 3000.0, today + dt.timedelta(days=2)), rent], 4, 3, 10, "solo", today=today
    )
    assert alone == [p for p in together if p.value < 0]


def test_different_seeds_give_different_draws(today):
    events = [_event("1", 1000.0, today + dt.timedelta(days=5))]
    a = generate_predictions(events, 5, 5, 20, "alpha", today=today)
    b = generate_predictions(events, 5, 5, 20, "beta", today=today)
    assert [p.value for p in a] != [p.value for p in b]


def test_empty_inputs_give_no_predictions(today):
    assert generate_predictions([], 20, 10, 20, today=today) == []
    assert generate_predictions([_event("1", 10.0, today)], 0, 10, 20, today=today) == []


def test_group_by_run_keeps_input_order():
    day = dt.date(2025, 1, 1)
    predictions = [
        Prediction(run=0, occurs_on=day, value=100.0),
        Prediction(run=1, occurs_on=day, value=200.0),
        Prediction(run=0, occurs_on=day, value=300.0),
        Prediction(run=2, occurs_on=day, value=400.0),
        Prediction(run=1, occurs_on=day, value=500.0),
    ]
    grouped = group_by_run(predictions)
    assert sorted(grouped) == [0, 1, 2]
    assert [p.value for p in grouped[0]] == [100.0, 300.0]
    assert [p.value for p in grouped[1]] == [200.0, 500.0]
    assert len(grouped[2]) == 1
    assert group_by_run([]) == {}
