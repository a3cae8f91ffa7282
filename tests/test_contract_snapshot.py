from __future__ import annotations

import datetime as dt
import json
import unittest

from weekgrid.config import SchedulerConfig
from weekgrid.render.snapshot import build_snapshot, dumps_snapshot
from weekgrid.render.text import render_text
from weekgrid.scheduler import WeeklyScheduler

SAT = dt.date(2024, 12, 28)


class TestSnapshotContract(unittest.TestCase):
    def _scheduler(self) -> WeeklyScheduler:
        sch = WeeklyScheduler(SchedulerConfig(enabled_start_date=dt.date(2024, 12, 24)))
        with sch.changes():
            self.a = sch.add_item(day=SAT, start_time_mins=540, duration_mins=60, caption="Dentist", data={"when": dt.date(2024, 1, 2)})
            self.b = sch.add_item(day=dt.date(2024, 12, 24), start_time_mins=600, duration_mins=90)
        sch.toggle(self.b)
        return sch

    def test_snapshot_shape(self) -> None:
        sch = self._scheduler()
        snap = build_snapshot(sch)

        view = snap["view"]
        self.assertEqual(view["start_date"], "2024-12-23")
        self.assertEqual((view["start_time_mins"], view["end_time_mins"]), (540, 690))
        self.assertEqual(view["granularity_mins"], 30)
        self.assertRegex(view["key"], r"^[0-9a-f]{8}$")

        self.assertEqual(len(snap["slots"]), len(sch.time_slots))
        self.assertEqual(snap["slots"][2]["label"], "09")
        self.assertEqual(snap["slots"][0]["label"], "")

        self.assertEqual([d["date"] for d in snap["days"]], [d.isoformat() for d in sch.window.view_dates()])
        enabled = {d["date"]: d["enabled"] for d in snap["days"]}
        self.assertFalse(enabled["2024-12-23"])
        self.assertTrue(enabled["2024-12-24"])

        sat = next(d for d in snap["days"] if d["date"] == "2024-12-28")
        items = [c["item"] for c in sat["cells"] if c["item"]]
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0]["caption"], "Dentist")
        self.assertIsNone(items[0]["rank"])

        tue = next(d for d in snap["days"] if d["date"] == "2024-12-24")
        cell = next(c for c in tue["cells"] if c["item"])
        self.assertEqual(cell["span"], 3)
        self.assertEqual(cell["item"]["rank"], 1)
        self.assertEqual(cell["item"]["caption"], "10:00 - 11:30")

        self.assertEqual(snap["selection"], {"max": 2, "ids": [self.b.id]})

    def test_view_key_tracks_page(self) -> None:
        sch = self._scheduler()
        k1 = build_snapshot(sch)["view"]["key"]
        self.assertEqual(build_snapshot(sch)["view"]["key"], k1)
        sch.change_view_page(1)
        self.assertNotEqual(build_snapshot(sch)["view"]["key"], k1)

    def test_dumps_is_valid_json(self) -> None:
        snap = build_snapshot(self._scheduler())
        back = json.loads(dumps_snapshot(snap))
        self.assertEqual(back["view"], snap["view"])
        sat = next(d for d in back["days"] if d["date"] == "2024-12-28")
        item = next(c["item"] for c in sat["cells"] if c["item"])
        self.assertEqual(item["data"], {"when": "2024-01-02"})

        with self.assertRaises(TypeError):
            dumps_snapshot([])  # type: ignore[arg-type]

    def test_text_render(self) -> None:
        txt = render_text(build_snapshot(self._scheduler()))
        lines = txt.splitlines()
        self.assertIn("Mon 2024-12-23*", lines[0])
        self.assertIn("Sat 2024-12-28", lines[0])
        self.assertTrue(any("Dentist" in ln for ln in lines))
        self.assertTrue(any("#1 10:00 - 11:30" in ln for ln in lines))
        self.assertEqual(lines[-1], "selected: item-2 (max 2)")


if __name__ == "__main__":
    unittest.main(verbosity=2)
