"""Tracker session tests."""

from __future__ import annotations

from datetime import date

import pytest

from database.manager import DatabaseReadError, MemoryDocumentStore
from models.enums import Category, StatusLevel
from models.record import ValidationError
from services.auth import AuthError, AuthProvider
from services.tracker_session import TrackerSession

TODAY = date(2024, 1, 10)


def test_session_loads_today_from_defaults(session: TrackerSession) -> None:
    assert session.tracking_enabled
    assert session.today_record.date == "2024-01-10"
    assert session.today_record.academic.goal == 2
    assert session.last_render is not None


def test_session_merges_persisted_today_record() -> None:
    store = MemoryDocumentStore({"alice": {"history": {
        "2024-01-10": {"academic": {"progress": 1, "goal": 3}},
    }}})
    session = TrackerSession(store, auth=AuthProvider("alice"), today_provider=lambda: TODAY)
    assert session.today_record.academic.progress == 1
    assert session.today_record.academic.goal == 3
    assert session.today_record.physical.goal == 30


def test_update_tracker_persists_and_accumulates(session: TrackerSession, memory_store) -> None:
    session.update_tracker("academic", 1)
    session.update_tracker("academic", "0.5")

    stored = memory_store.read("alice")["history"]["2024-01-10"]
    assert stored["academic"] == {"progress": 1.5, "goal": 2}
    assert session.notifications.last.text == "Logged 0.5 Hrs for academic!"
    assert session.notifications.last.level is StatusLevel.SUCCESS


@pytest.mark.parametrize("value", ["abc", 0, -2, None, float("nan")])
def test_invalid_goal_is_rejected_without_saving(session: TrackerSession, memory_store, value) -> None:
    with pytest.raises(ValidationError):
        session.update_goal("physical", value)

    assert session.today_record.physical.goal == 30
    assert memory_store.read("alice") is None
    assert session.notifications.last.level is StatusLevel.ERROR


def test_invalid_progress_is_rejected(session: TrackerSession, memory_store) -> None:
    with pytest.raises(ValidationError):
        session.update_tracker("character", "-1")
    assert session.today_record.character.progress == 0
    assert memory_store.read("alice") is None


def test_goal_update_survives_reset(session: TrackerSession, memory_store) -> None:
    session.update_goal("academic", 5)
    session.update_tracker("academic", 3)
    session.toggle_social_check()
    session.toggle_mindset()

    record = session.reset_daily_progress()

    assert record.academic.to_dict() == {"progress": 0, "goal": 5}
    assert record.character.social_check is False
    assert record.mindset.is100 is False
    stored = memory_store.read("alice")["history"]["2024-01-10"]
    assert stored["academic"] == {"progress": 0, "goal": 5}
    assert session.notifications.last.text == "Daily progress reset! New day, new opportunities!"


def test_toggles(session: TrackerSession) -> None:
    assert session.toggle_mindset() is True
    assert session.notifications.last.text == "Mindset: BELIEVE 100% affirmed!"
    assert session.toggle_mindset() is False
    assert session.toggle_social_check() is True
    assert session.today_record.character.social_check is True


def test_write_failure_keeps_local_state(session: TrackerSession, memory_store) -> None:
    memory_store.fail_writes = True

    session.update_tracker("physical", 20)

    assert session.today_record.physical.progress == 20
    assert session.history.record_on("2024-01-10").physical.progress == 20
    errors = [m for m in session.notifications.recent() if m.level is StatusLevel.ERROR]
    assert errors and errors[-1].text.startswith("Save failed:")

    # next mutation retries the whole history
    memory_store.fail_writes = False
    session.update_tracker("physical", 5)
    assert memory_store.read("alice")["history"]["2024-01-10"]["physical"]["progress"] == 25


def test_remote_change_replaces_history_and_rerenders(session: TrackerSession, memory_store) -> None:
    generation = session.render_generation

    memory_store.write("alice", {"history": {
        "2024-01-09": {"academic": {"progress": 2, "goal": 2}},
        "2024-01-10": {"physical": {"progress": 30, "goal": 30}},
    }})

    assert session.render_generation > generation
    assert not session.is_current(generation)
    assert session.today_record.physical.progress == 30
    assert len(session.history) == 2
    assert session.last_render["charts"]["academic"]["currentSeries"][-2] == 100


def test_identity_change_discards_state(memory_store) -> None:
    memory_store.write("bob", {"history": {"2024-01-10": {"academic": {"progress": 1, "goal": 2}}}})
    auth = AuthProvider("alice")
    session = TrackerSession(memory_store, auth=auth, today_provider=lambda: TODAY)
    session.update_tracker("academic", 2)

    auth.sign_in("bob")
    assert session.user_id == "bob"
    assert session.today_record.academic.progress == 1

    # alice's further writes no longer reach bob's session
    memory_store.write("alice", {"history": {}})
    assert session.today_record.academic.progress == 1

    auth.sign_out()
    assert not session.tracking_enabled
    with pytest.raises(AuthError):
        session.toggle_mindset()


def test_day_rollover_starts_new_record(memory_store) -> None:
    current = {"day": date(2024, 1, 10)}
    session = TrackerSession(memory_store, auth=AuthProvider("alice"),
                             today_provider=lambda: current["day"])
    session.update_goal("academic", 4)
    session.update_tracker("academic", 4)

    current["day"] = date(2024, 1, 11)
    session.update_tracker("physical", 10)

    history = memory_store.read("alice")["history"]
    assert history["2024-01-10"]["academic"] == {"progress": 4, "goal": 4}
    assert history["2024-01-11"]["academic"] == {"progress": 0, "goal": 2}
    assert history["2024-01-11"]["physical"]["progress"] == 10


def test_unreadable_history_disables_tracking(tmp_path) -> None:
    from database.manager import JsonDocumentStore

    store = JsonDocumentStore(tmp_path)
    (tmp_path / "userGrowthHistory" / "user_alice.json").write_text("{", encoding="utf-8")
    session = TrackerSession(store, auth=AuthProvider("alice"), today_provider=lambda: TODAY)

    assert not session.tracking_enabled
    assert session.notifications.last.text.startswith("Database Error:")
    with pytest.raises(DatabaseReadError):
        session.update_tracker("academic", 1)


def test_non_object_document_disables_tracking(tmp_path) -> None:
    from database.manager import JsonDocumentStore

    store = JsonDocumentStore(tmp_path)
    (tmp_path / "userGrowthHistory" / "user_alice.json").write_text('["x"]', encoding="utf-8")
    session = TrackerSession(store, auth=AuthProvider("alice"), today_provider=lambda: TODAY)

    assert not session.tracking_enabled
    assert session.notifications.last.text.startswith("Database Error:")


def test_malformed_document_loads_as_empty_history() -> None:
    store = MemoryDocumentStore({"alice": ["x"]})
    session = TrackerSession(store, auth=AuthProvider("alice"), today_provider=lambda: TODAY)

    assert session.tracking_enabled
    assert len(session.history) == 0
    assert session.today_record.academic.goal == 2


def test_render_after_day_rollover_shows_new_day(memory_store) -> None:
    current = {"day": TODAY}
    session = TrackerSession(memory_store, auth=AuthProvider("alice"),
                             today_provider=lambda: current["day"])
    session.update_tracker("academic", 1)

    current["day"] = date(2024, 1, 11)
    payload = session.render()

    assert payload["today"]["date"] == "2024-01-11"
    assert payload["today"]["cards"]["academic"]["progress"] == 0
    assert payload["windows"]["current"]["end"] == "2024-01-11"


def test_save_keeps_record_day_across_midnight(memory_store) -> None:
    days = [TODAY]

    def provider() -> date:
        return days.pop(0) if len(days) > 1 else days[0]

    session = TrackerSession(memory_store, auth=AuthProvider("alice"), today_provider=provider)
    session.today_record.add_progress(Category.PHYSICAL, 5)

    # the record is resolved on the 10th, the clock passes midnight right after
    days[:] = [TODAY, date(2024, 1, 11)]
    assert session.save() is True

    history = memory_store.read("alice")["history"]
    assert history["2024-01-10"]["physical"]["progress"] == 5
    assert session.today_record.date == "2024-01-11"


def test_sign_out_reports_status(memory_store) -> None:
    auth = AuthProvider()
    session = TrackerSession(memory_store, auth=auth, today_provider=lambda: TODAY)
    assert session.notifications.last is None

    auth.sign_in("alice")
    auth.sign_out()

    assert not session.tracking_enabled
    assert session.notifications.last.text == "Successfully logged out."
    assert session.notifications.last.level is StatusLevel.SUCCESS


def test_set_analysis_period(session: TrackerSession) -> None:
    payload = session.set_analysis_period("month")
    assert payload["period"] == "month"
    assert payload["windows"]["current"]["length"] == 30
    assert session.is_current(payload["generation"])
    with pytest.raises(ValueError):
        session.set_analysis_period("fortnight")
