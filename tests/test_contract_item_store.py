from __future__ import annotations

import datetime as dt
import random
import unittest

from weekgrid.store import ItemStore
from weekgrid.validate import InvalidItemSpec


def _spec(day: dt.date, start: int = 540, dur: int = 60, **extra) -> dict:
    out = {"day": day, "start_time_mins": start, "duration_mins": dur}
    out.update(extra)
    return out


class TestItemStoreContract(unittest.TestCase):
    def test_buckets_stay_sorted_for_any_insert_order(self) -> None:
        store = ItemStore()
        days = [dt.date(2024, 12, d) for d in (30, 2, 17, 2, 28, 1, 30)]
        for d in days:
            store.add_item(_spec(d))

        self.assertEqual(list(store.days), sorted(set(days)))
        self.assertEqual(len(store.buckets), len(set(days)))
        self.assertEqual(len(store), len(days))

    def test_random_insert_orders_keep_buckets_sorted_and_lookup_exact(self) -> None:
        rng = random.Random(20241228)
        base = dt.date(2024, 1, 1)
        for _ in range(25):
            store = ItemStore()
            expected: dict = {}
            for _ in range(rng.randint(1, 60)):
                d = base + dt.timedelta(days=rng.randint(0, 400))
                it = store.add_item(_spec(d, start=len(expected.get(d, [])) * 30, dur=rng.randint(1, 240)))
                expected.setdefault(d, []).append(it)

                self.assertEqual(list(store.days), sorted(expected))
                self.assertEqual([b.day for b in store.buckets], sorted(expected))
                self.assertEqual(list(store.lookup(d)), expected[d])
            self.assertEqual(list(store), [it for d in sorted(expected) for it in expected[d]])

    def test_bulk_load_over_many_days_stays_consistent(self) -> None:
        store = ItemStore()
        base = dt.date(2000, 1, 1)
        offsets = list(range(5000))
        random.Random(7).shuffle(offsets)
        with store.changes():
            for n in offsets:
                store.add_item(_spec(base + dt.timedelta(days=n)))

        self.assertEqual(store.revision, 1)
        self.assertEqual(len(store.days), 5000)
        self.assertEqual(list(store.days), [base + dt.timedelta(days=n) for n in range(5000)])
        for n in (0, 1234, 4999):
            (it,) = store.lookup(base + dt.timedelta(days=n))
            self.assertEqual(it.day, base + dt.timedelta(days=n))
        got = list(store.items_between(base + dt.timedelta(days=10), base + dt.timedelta(days=13)))
        self.assertEqual([it.day for it in got], [base + dt.timedelta(days=n) for n in (10, 11, 12)])

        store.purge()
        self.assertEqual(store.days, ())
        store.add_item(_spec(base))
        self.assertEqual(store.days, (base,))

    def test_buckets_are_detached_copies(self) -> None:
        store = ItemStore()
        d = dt.date(2024, 12, 28)
        a = store.add_item(_spec(d))
        (bucket,) = store.buckets
        bucket.items.clear()
        bucket.items.append(a)
        bucket.items.append(a)

        self.assertEqual(store.lookup(d), (a,))
        self.assertEqual(len(store.buckets[0].items), 1)
        self.assertEqual(store.revision, 1)

    def test_lookup_returns_items_for_date_in_insertion_order(self) -> None:
        store = ItemStore()
        d = dt.date(2024, 12, 28)
        a = store.add_item(_spec(d, start=600))
        store.add_item(_spec(d + dt.timedelta(days=1)))
        b = store.add_item(_spec(d, start=540))

        got = store.lookup(d)
        self.assertEqual(len(got), 2)
        self.assertIs(got[0], a)
        self.assertIs(got[1], b)
        self.assertEqual(store.lookup(dt.datetime(2024, 12, 28, 15, 45)), got)
        self.assertEqual(store.lookup(dt.date(2025, 1, 1)), ())

    def test_datetime_day_is_truncated_to_calendar_date(self) -> None:
        store = ItemStore()
        it = store.add_item(_spec(dt.datetime(2024, 12, 28, 23, 59)))
        self.assertEqual(it.day, dt.date(2024, 12, 28))
        self.assertNotIsInstance(it.day, dt.datetime)

    def test_ids_are_generated_per_store(self) -> None:
        s1 = ItemStore()
        s2 = ItemStore()
        d = dt.date(2024, 12, 28)
        self.assertEqual(s1.add_item(_spec(d)).id, "item-1")
        self.assertEqual(s1.add_item(_spec(d)).id, "item-2")
        self.assertEqual(s2.add_item(_spec(d)).id, "item-1")

    def test_caller_ids_are_kept_and_generated_ids_skip_them(self) -> None:
        store = ItemStore()
        d = dt.date(2024, 12, 28)
        store.add_item(_spec(d, id="item-1"))
        auto = store.add_item(_spec(d))
        self.assertEqual(auto.id, "item-2")
        self.assertIsNotNone(store.get("item-1"))

        with self.assertRaises(InvalidItemSpec):
            store.add_item(_spec(d, id="item-1"))
        self.assertEqual(len(store), 2)

    def test_invalid_spec_adds_nothing_and_signals_nothing(self) -> None:
        store = ItemStore()
        d = dt.date(2024, 12, 28)
        bad = [
            _spec(d, dur=0),
            _spec(d, dur=-30),
            _spec(d, start=1440),
            _spec(d, start=-1),
            {"start_time_mins": 540, "duration_mins": 60},
        ]
        for spec in bad:
            with self.assertRaises(InvalidItemSpec):
                store.add_item(spec)
        self.assertEqual(len(store), 0)
        self.assertEqual(store.days, ())
        self.assertEqual(store.revision, 0)

    def test_add_item_accepts_keyword_arguments(self) -> None:
        store = ItemStore()
        it = store.add_item(day=dt.date(2024, 12, 28), start_time_mins=540, duration_mins=90, data={"agent": "a"})
        self.assertEqual(it.end_time_mins, 629)
        self.assertEqual(it.data, {"agent": "a"})

    def test_each_add_outside_a_bracket_signals_once(self) -> None:
        store = ItemStore()
        calls = []
        store.subscribe(lambda: calls.append(store.revision))
        d = dt.date(2024, 12, 28)
        store.add_item(_spec(d))
        store.add_item(_spec(d, start=600))
        self.assertEqual(calls, [1, 2])

    def test_nested_brackets_flush_exactly_once(self) -> None:
        store = ItemStore()
        calls = []
        store.subscribe(lambda: calls.append(len(store)))
        d = dt.date(2024, 12, 1)

        store.begin_changes()
        for i in range(50):
            store.add_item(_spec(d + dt.timedelta(days=i % 10), start=(i % 20) * 30))
        store.begin_changes()
        store.add_item(_spec(d))
        store.end_changes()
        self.assertEqual(calls, [])
        self.assertTrue(store.in_changes)
        store.end_changes()

        self.assertFalse(store.in_changes)
        self.assertEqual(calls, [51])
        self.assertEqual(store.revision, 1)

    def test_empty_bracket_does_not_signal(self) -> None:
        store = ItemStore()
        with store.changes():
            pass
        self.assertEqual(store.revision, 0)

    def test_changes_context_releases_depth_on_error(self) -> None:
        store = ItemStore()
        d = dt.date(2024, 12, 28)
        with self.assertRaises(InvalidItemSpec):
            with store.changes():
                store.add_item(_spec(d))
                with store.changes():
                    store.add_item(_spec(d, dur=0))
        self.assertFalse(store.in_changes)
        self.assertEqual(store.revision, 1)
        self.assertEqual(len(store), 1)

        # Depth is back to zero: a plain add signals immediately again.
        store.add_item(_spec(d, start=600))
        self.assertEqual(store.revision, 2)

    def test_end_changes_without_begin_raises(self) -> None:
        store = ItemStore()
        with self.assertRaises(RuntimeError):
            store.end_changes()

    def test_remove_keeps_bucket_and_purge_clears_everything(self) -> None:
        store = ItemStore()
        d = dt.date(2024, 12, 28)
        a = store.add_item(_spec(d))
        other = ItemStore().add_item(_spec(d))

        self.assertFalse(store.remove_item(other))
        self.assertTrue(store.remove_item(a))
        self.assertFalse(store.remove_item(a))
        self.assertEqual(store.days, (d,))
        self.assertEqual(store.lookup(d), ())
        self.assertIsNone(store.first_day())

        store.add_item(_spec(d))
        store.purge()
        self.assertEqual(store.days, ())
        self.assertEqual(len(store), 0)
        self.assertEqual(store.add_item(_spec(d)).id, "item-1")

    def test_items_between_is_half_open(self) -> None:
        store = ItemStore()
        for day in (1, 2, 3, 4):
            store.add_item(_spec(dt.date(2024, 12, day)))
        got = [it.day.day for it in store.items_between(dt.date(2024, 12, 2), dt.date(2024, 12, 4))]
        self.assertEqual(got, [2, 3])


if __name__ == "__main__":
    unittest.main(verbosity=2)
