import json
import tempfile
import unittest
from pathlib import Path

import pendulum

from daybook.repository.agenda import AgendaRepository

DAY = pendulum.date(2024, 3, 5)
T1 = pendulum.datetime(2024, 3, 5, 18, 0, tz="UTC")
T2 = pendulum.datetime(2024, 3, 5, 9, 30, tz="UTC")


class RecordingScheduler:
    def __init__(self) -> None:
        self.calls: list[tuple[pendulum.DateTime, str, str]] = []

    def __call__(self, at: pendulum.DateTime, title: str, body: str) -> None:
        self.calls.append((at, title, body))


class AgendaTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.data_path = Path(self._tmp.name)
        self.agenda_path = self.data_path / "Agenda.json"
        self.week_notes_path = self.data_path / "WeekNotes.json"
        self.repo = self.new_repo()

    def new_repo(self) -> AgendaRepository:
        return AgendaRepository(self.agenda_path, self.week_notes_path)

    def stored(self) -> dict:
        return json.loads(self.agenda_path.read_text(encoding="utf-8"))


class TestAgendaReminders(AgendaTestCase):
    def test_earliest_note_reminder_wins_and_is_recomputed(self) -> None:
        first = self.repo.add_note(DAY, "buy milk", "other", reminder=T1)
        second = self.repo.add_note(DAY, "call mom", "other", reminder=T2)
        self.assertEqual(self.repo.entry(DAY)["reminder"], T2)

        self.repo.delete_note(DAY, second["id"])
        self.assertEqual(self.repo.entry(DAY)["reminder"], T1)

        self.repo.delete_note(DAY, first["id"])
        self.assertIsNone(self.repo.entry(DAY))
        self.assertEqual(self.stored(), {})

    def test_note_without_reminder_keeps_day_reminder(self) -> None:
        self.repo.add_note(DAY, "buy milk", "other", reminder=T1)
        self.repo.add_note(DAY, "no alert", "work")
        self.assertEqual(self.repo.entry(DAY)["reminder"], T1)

    def test_add_note_blends_with_day_reminder(self) -> None:
        self.repo.update_day_text(DAY, "dentist", None, reminder=T2)
        self.repo.add_note(DAY, "later", "health", reminder=T1)
        self.assertEqual(self.repo.entry(DAY)["reminder"], T2)

    def test_update_note_recomputes_from_notes_only(self) -> None:
        self.repo.update_day_text(DAY, "dentist", None, reminder=T2)
        note = self.repo.add_note(DAY, "later", "health", reminder=T1)

        self.repo.update_note(DAY, note["id"], "much later", "work", reminder=T1.add(hours=1))

        entry = self.repo.entry(DAY)
        self.assertEqual(entry["reminder"], T1.add(hours=1))
        self.assertEqual(entry["notes"][0]["text"], "much later")
        self.assertEqual(entry["notes"][0]["category"], "work")
        self.assertEqual(entry["notes"][0]["id"], note["id"])

    def test_update_note_clearing_last_reminder_clears_day_reminder(self) -> None:
        note = self.repo.add_note(DAY, "buy milk", "other", reminder=T1)
        self.repo.update_note(DAY, note["id"], "buy milk", "other", reminder=None)
        self.assertNotIn("reminder", self.repo.entry(DAY))
        self.assertNotIn("reminder", self.stored()["2024-03-05"])

    def test_day_text_reminder_overload(self) -> None:
        self.repo.update_day_text(DAY, "dentist", None, reminder=T1)
        self.repo.update_day_text(DAY, "dentist at 6", None)
        self.assertEqual(self.repo.entry(DAY)["reminder"], T1)

        self.repo.update_day_text(DAY, "dentist at 6", None, remove_reminder=True)
        self.assertNotIn("reminder", self.repo.entry(DAY))

    def test_scheduler_receives_owning_note(self) -> None:
        scheduler = RecordingScheduler()
        self.repo.scheduler = scheduler

        self.repo.add_note(DAY, "buy milk", "other", reminder=T1)
        self.repo.add_note(DAY, "call mom", "personal", reminder=T2)
        self.repo.add_note(DAY, "no alert", "work")

        self.assertEqual(len(scheduler.calls), 2)
        self.assertEqual(scheduler.calls[0][0], T1)
        self.assertEqual(scheduler.calls[0][2], "buy milk")
        self.assertEqual(scheduler.calls[1][0], T2)
        self.assertEqual(scheduler.calls[1][2], "call mom")
        self.assertIn("2024-03-05", scheduler.calls[1][1])

    def test_later_note_reminder_is_scheduled(self) -> None:
        scheduler = RecordingScheduler()
        self.repo.scheduler = scheduler

        self.repo.add_note(DAY, "call mom", "personal", reminder=T2)
        self.repo.add_note(DAY, "buy milk", "other", reminder=T1)

        self.assertEqual(
            [(at, body) for at, _, body in scheduler.calls],
            [(T2, "call mom"), (T1, "buy milk")],
        )
        self.assertEqual(self.repo.entry(DAY)["reminder"], T2)

    def test_delete_hands_new_day_reminder_to_scheduler(self) -> None:
        scheduler = RecordingScheduler()
        self.repo.scheduler = scheduler
        first = self.repo.add_note(DAY, "call mom", "personal", reminder=T2)
        self.repo.add_note(DAY, "buy milk", "other", reminder=T1)
        scheduler.calls.clear()

        self.repo.delete_note(DAY, first["id"])

        self.assertEqual(self.repo.entry(DAY)["reminder"], T1)
        self.assertEqual([(at, body) for at, _, body in scheduler.calls], [(T1, "buy milk")])

    def test_delete_of_later_note_schedules_nothing(self) -> None:
        scheduler = RecordingScheduler()
        self.repo.scheduler = scheduler
        self.repo.add_note(DAY, "call mom", "personal", reminder=T2)
        later = self.repo.add_note(DAY, "buy milk", "other", reminder=T1)
        scheduler.calls.clear()

        self.repo.delete_note(DAY, later["id"])

        self.assertEqual(scheduler.calls, [])

    def test_update_note_schedules_edited_note(self) -> None:
        scheduler = RecordingScheduler()
        self.repo.scheduler = scheduler
        early = self.repo.add_note(DAY, "call mom", "personal", reminder=T2)
        late = self.repo.add_note(DAY, "buy milk", "other", reminder=T1)
        scheduler.calls.clear()

        self.repo.update_note(DAY, late["id"], "buy oat milk", "other", T1)
        self.assertEqual([(at, body) for at, _, body in scheduler.calls], [(T1, "buy oat milk")])

        scheduler.calls.clear()
        self.repo.update_note(DAY, early["id"], "call mom", "personal", None)
        self.assertEqual([(at, body) for at, _, body in scheduler.calls], [(T1, "buy oat milk")])
        self.assertEqual(self.repo.entry(DAY)["reminder"], T1)

    def test_scheduler_not_called_without_reminder(self) -> None:
        scheduler = RecordingScheduler()
        self.repo.scheduler = scheduler
        self.repo.add_note(DAY, "no alert", "work")
        self.repo.update_day_text(DAY, "text", None)
        self.assertEqual(scheduler.calls, [])

    def test_reminders_between(self) -> None:
        self.repo.add_note(DAY, "a", "other", reminder=T1)
        self.repo.add_note(DAY.add(days=1), "b", "other", reminder=T2.add(days=1))
        self.repo.add_note(DAY.add(days=30), "c", "other", reminder=T1.add(days=30))

        reminders = self.repo.reminders_between(T2, T2.add(days=7))
        self.assertEqual(
            reminders, [("2024-03-05", T1), ("2024-03-06", T2.add(days=1))]
        )


class TestAgendaNormalization(AgendaTestCase):
    def test_blank_day_text_is_absent(self) -> None:
        self.repo.update_day_text(DAY, "   \n", None)
        self.assertIsNone(self.repo.entry(DAY))
        self.assertEqual(self.stored(), {})

    def test_hourly_blank_removes_slot(self) -> None:
        self.repo.set_hourly(DAY, 9, "standup")
        self.repo.set_hourly(DAY, 14, "  review  ")
        self.assertEqual(self.repo.hourly_text(DAY, 14), "review")
        self.assertEqual(self.stored()["2024-03-05"]["hourly"], {"14": "review", "9": "standup"})

        self.repo.set_hourly(DAY, 14, None)
        self.repo.set_hourly(DAY, 9, "  ")
        self.assertIsNone(self.repo.hourly_text(DAY, 9))
        self.assertIsNone(self.repo.entry(DAY))

    def test_hourly_absent_when_last_slot_cleared(self) -> None:
        self.repo.update_day_text(DAY, "keep me", None)
        self.repo.set_hourly(DAY, 9, "standup")
        self.repo.set_hourly(DAY, 9, "  ")
        entry = self.repo.entry(DAY)
        self.assertNotIn("hourly", entry)
        self.assertNotIn("hourly", self.stored()["2024-03-05"])

    def test_period_delay_false_is_absent(self) -> None:
        self.repo.update_day_text(DAY, "keep me", None)
        self.repo.set_period_delay(DAY, True)
        self.assertTrue(self.repo.is_period_delayed(DAY))
        self.assertIs(self.stored()["2024-03-05"]["periodDelayed"], True)

        self.repo.set_period_delay(DAY, False)
        self.assertFalse(self.repo.is_period_delayed(DAY))
        self.assertNotIn("periodDelayed", self.stored()["2024-03-05"])

    def test_round_trip_through_a_new_instance(self) -> None:
        self.repo.update_day_text(DAY, "day text", b"\x00\x01ink", reminder=T1)
        self.repo.add_note(DAY, "buy milk", "finance", reminder=T2)
        self.repo.set_hourly(DAY, 8, "gym")
        self.repo.set_period_delay(DAY, True)
        self.repo.set_hourly(DAY.add(days=1), 10, " ")
        self.repo.set_period_delay(DAY.add(days=2), False)

        reloaded = self.new_repo()
        self.assertEqual(reloaded.day_keys(), ["2024-03-05"])
        self.assertEqual(reloaded.entry(DAY), self.repo.entry(DAY))
        self.assertEqual(reloaded.entry(DAY)["drawing_data"], b"\x00\x01ink")
        self.assertEqual(reloaded.notes(DAY)[0]["category"], "finance")

    def test_wire_format(self) -> None:
        self.repo.update_day_text(DAY, "day text", b"ink", reminder=T1)
        note = self.repo.add_note(DAY, "buy milk", "other")
        self.repo.set_hourly(DAY, 9, "standup")

        stored_entry = self.stored()["2024-03-05"]
        self.assertEqual(
            sorted(stored_entry.keys()),
            ["drawingData", "hourly", "notes", "reminder", "text"],
        )
        self.assertEqual(stored_entry["drawingData"], "aW5r")
        stored_note = stored_entry["notes"][0]
        self.assertEqual(stored_note["id"], note["id"])
        self.assertEqual(sorted(stored_note.keys()), ["category", "createdAt", "id", "text"])


class TestAgendaNotFound(AgendaTestCase):
    def test_delete_unknown_note_leaves_file_unchanged(self) -> None:
        self.repo.add_note(DAY, "buy milk", "other", reminder=T1)
        before = self.agenda_path.read_bytes()

        self.repo.delete_note(DAY, "00000000-0000-0000-0000-000000000000")
        self.repo.delete_note(DAY.add(days=1), "00000000-0000-0000-0000-000000000000")

        self.assertEqual(self.agenda_path.read_bytes(), before)
        self.assertEqual(len(self.repo.notes(DAY)), 1)

    def test_update_unknown_note_is_noop(self) -> None:
        self.repo.add_note(DAY, "buy milk", "other")
        before = self.agenda_path.read_bytes()
        self.repo.update_note(DAY, "missing", "x", "work", T1)
        self.repo.update_note(DAY.add(days=1), "missing", "x", "work", T1)
        self.assertEqual(self.agenda_path.read_bytes(), before)
        self.assertNotIn("reminder", self.repo.entry(DAY))

    def test_notes_preserve_insertion_order(self) -> None:
        for text in ("one", "two", "three"):
            self.repo.add_note(DAY, text, "other")
        self.assertEqual([note["text"] for note in self.repo.notes(DAY)], ["one", "two", "three"])


class TestAgendaStorageFailures(AgendaTestCase):
    def test_corrupt_file_starts_empty(self) -> None:
        self.agenda_path.write_text('{"2024-03-05": {"notes": [{"id": 1}]}}', encoding="utf-8")
        self.assertIsNone(self.new_repo().entry(DAY))

    def test_failed_write_keeps_previous_state(self) -> None:
        self.agenda_path.mkdir()
        repo = self.new_repo()

        repo.add_note(DAY, "buy milk", "other", reminder=T1)
        self.assertIsNone(repo.entry(DAY))
        repo.set_hourly(DAY, 9, "standup")
        self.assertIsNone(repo.hourly_text(DAY, 9))

    def test_reload_from_disk_replaces_state(self) -> None:
        self.repo.add_note(DAY, "buy milk", "other")
        other = self.new_repo()
        other.set_hourly(DAY, 9, "standup")

        self.assertIsNone(self.repo.hourly_text(DAY, 9))
        self.repo.reload_from_disk()
        self.assertEqual(self.repo.hourly_text(DAY, 9), "standup")
        self.assertEqual(len(self.repo.notes(DAY)), 1)

    def test_reload_from_corrupt_file_keeps_state(self) -> None:
        self.repo.add_note(DAY, "buy milk", "other")
        self.agenda_path.write_text("garbage", encoding="utf-8")
        self.repo.reload_from_disk()
        self.assertEqual(len(self.repo.notes(DAY)), 1)


class TestWeekNotes(AgendaTestCase):
    def test_week_note_shared_across_the_week(self) -> None:
        self.repo.set_week_note(pendulum.date(2024, 3, 4), "  plan trip ")
        self.assertEqual(self.repo.week_note(pendulum.date(2024, 3, 10)), "plan trip")
        self.assertIsNone(self.repo.week_note(pendulum.date(2024, 3, 11)))
        self.assertEqual(
            json.loads(self.week_notes_path.read_text(encoding="utf-8")),
            {"2024-W10": "plan trip"},
        )

    def test_blank_week_note_removes_key(self) -> None:
        self.repo.set_week_note(DAY, "plan trip")
        self.repo.set_week_note(DAY, "   ")
        self.assertIsNone(self.repo.week_note(DAY))
        self.assertIsNone(self.new_repo().week_note(DAY))


class TestSearchNotes(AgendaTestCase):
    def test_case_insensitive_search_in_day_order(self) -> None:
        self.repo.add_note(DAY.add(days=1), "Buy MILK", "other")
        self.repo.add_note(DAY, "milkshake", "personal")
        self.repo.add_note(DAY, "call mom", "personal")

        results = self.repo.search_notes("milk")
        self.assertEqual([key for key, _ in results], ["2024-03-05", "2024-03-06"])
        self.assertEqual(results[1][1]["text"], "Buy MILK")


if __name__ == "__main__":
    unittest.main(verbosity=2)
