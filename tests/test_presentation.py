"""Presentation adapter tests."""

from __future__ import annotations

from database.history import HistoryStore
from models.enums import Category
from models.record import materialize
from services.analysis import analyze
from ui.charts import ChartPresenter, build_chart_series, build_summary
from ui.messages import goal_updated_message, progress_logged_message, summary_message
from ui.progress import progress_bar, progress_text, tracker_cards


def test_summary_rounds_only_at_presentation() -> None:
    store = HistoryStore({"2024-01-01": {
        "academic": {"progress": 4, "goal": 2},
        "physical": {"progress": 10, "goal": 30},
        "character": {"progress": 0, "goal": 10},
    }})
    result = analyze(store, "all", "2024-01-01")
    summary = build_summary(result)

    assert summary == {
        "currentLabel": "Recent Half",
        "previousLabel": "Earlier Half",
        "currentAvg": 44,
        "previousAvg": 0,
        "delta": 44,
        "direction": "up",
    }
    assert isinstance(result.current.overall_average, float)


def test_chart_series_keep_gaps() -> None:
    store = HistoryStore({"2024-01-01": {}, "2024-01-02": {}, "2024-01-03": {}})
    charts = build_chart_series(analyze(store, "all", "2024-01-03"))

    academic = charts["academic"]
    assert academic["labels"] == ["Jan 2", "Jan 3"]
    assert academic["currentSeries"] == [0, 0]
    assert academic["previousSeries"] == [0, None]
    assert set(charts) == {"academic", "physical", "character"}


def test_presenter_payload_shape() -> None:
    payload = ChartPresenter().present(analyze(HistoryStore(), "week", "2024-01-07"), generation=3)

    assert payload["generation"] == 3
    assert payload["period"] == "week"
    assert payload["windows"]["current"] == {
        "start": "2024-01-01",
        "end": "2024-01-07",
        "length": 7,
        "designation": "current",
    }
    assert payload["summary"]["currentLabel"] == "This Week"
    assert len(payload["charts"]["physical"]["currentSeries"]) == 7


def test_progress_texts() -> None:
    record = materialize({"academic": {"progress": 3, "goal": 2}, "physical": {"progress": 7.5, "goal": 30}})
    assert progress_text(record.academic) == "3 / 2 (100%)"
    assert progress_text(record.physical) == "7.5 / 30 (25%)"
    assert progress_bar(50, length=4) == "🟩🟩⬜️⬜️ 50%"


def test_tracker_cards() -> None:
    record = materialize({"mindset": {"is100": True}}, "2024-01-01")
    view = tracker_cards(record)

    assert view["date_display"] == "Mon, Jan 1, 2024"
    assert view["cards"]["mindset"]["button"] == "BELIEVE 100% Locked"
    assert view["cards"]["character"]["social_check_text"] == "✓"
    assert view["cards"]["academic"]["reached"] is False


def test_messages() -> None:
    assert goal_updated_message(Category.PHYSICAL, 45.0) == "Goal for physical updated to 45 Min."
    assert progress_logged_message(Category.ACADEMIC, 1.5) == "Logged 1.5 Hrs for academic!"
    text = summary_message({
        "currentLabel": "This Week",
        "previousLabel": "Last Week",
        "currentAvg": 50,
        "previousAvg": 40,
        "delta": 10,
    })
    assert "This Week: 50%" in text
    assert "+10%" in text
