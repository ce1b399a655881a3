"""Server-rendered calendar page and its form actions."""

from __future__ import annotations

from datetime import date

from habitgrid.blueprints.calendar.view import DISABLED_TITLE, build_calendar_page
from habitgrid.services.habits import build_month_view

from tests.conftest import FIXED_TODAY


def _html(response) -> str:
    return response.get_data(as_text=True)


class TestMonthPage:
    def test_root_redirects_to_calendar(self, client):
        response = client.get("/")
        assert response.status_code == 302
        assert response.headers["Location"].endswith("/calendar/")

    def test_renders_current_month(self, client):
        html = _html(client.get("/calendar/"))

        assert "January 2025" in html
        assert "1 &bull; Wed" in html
        assert "31 &bull; Fri" in html
        assert "0 habits" in html
        assert "Avg: 0%" in html

    def test_navigation_links(self, client):
        html = _html(client.get("/calendar/?year=2025&month=0"))
        assert "year=2024" in html and "month=11" in html
        assert "month=1\"" in html

    def test_last_supported_month_renders(self, client):
        response = client.get("/calendar/?year=9999&month=11")
        assert response.status_code == 200
        assert "December 9999" in _html(response)
        assert "31 &bull; Fri" in _html(response)

    def test_out_of_range_month_is_normalized(self, client):
        assert "March 2024" in _html(client.get("/calendar/?year=2023&month=14"))

    def test_pills_show_day_states(self, client, app_repo):
        habit = app_repo.create("Stretch", date(2025, 1, 10))
        app_repo.mark_date(habit.id, date(2025, 1, 11), True)

        html = _html(client.get("/calendar/"))

        assert ">1 habit</span>" in html
        assert 'class="habit-pill disabled"' in html
        assert 'class="habit-pill done"' in html
        assert 'class="habit-pill missed"' in html
        assert 'class="habit-pill today"' in html
        assert 'class="habit-pill future"' in html
        assert DISABLED_TITLE in html
        assert "Done: 1" in html


class TestFormActions:
    def test_add_habit(self, client, app_repo):
        response = client.post(
            "/calendar/habits",
            data={"name": "Read", "start_day": "3", "goal": "", "year": "2025", "month": "0"},
        )

        assert response.status_code == 302
        [habit] = app_repo.list_all()
        assert habit.name == "Read"
        assert habit.start_date == date(2025, 1, 3)

    def test_add_habit_flashes_confirmation(self, client):
        html = _html(
            client.post(
                "/calendar/habits", data={"name": "Read", "year": "2025", "month": "0"}, follow_redirects=True
            )
        )
        assert "Added habit" in html
        assert "Read" in html

    def test_add_blank_name_flashes_error(self, client, app_repo):
        html = _html(
            client.post(
                "/calendar/habits", data={"name": "  ", "year": "2025", "month": "0"}, follow_redirects=True
            )
        )

        assert "Failed to add habit: name is required" in html
        assert app_repo.list_all() == []

    def test_toggle_marks_and_redirects_to_marked_month(self, client, app_repo):
        habit = app_repo.create("Read", date(2024, 12, 1))

        response = client.post(
            f"/calendar/habits/{habit.id}/toggle",
            data={"date": "2024-12-31", "done": "1", "year": "2025", "month": "0"},
        )

        assert response.status_code == 302
        assert "year=2024" in response.headers["Location"]
        assert "month=11" in response.headers["Location"]
        assert app_repo.get_by_id(habit.id).status["2024-12-31"].value == "done"

    def test_toggle_done_day_back_to_missed(self, client, app_repo):
        habit = app_repo.create("Read", date(2025, 1, 1))
        app_repo.mark_date(habit.id, date(2025, 1, 5), True)

        client.post(
            f"/calendar/habits/{habit.id}/toggle",
            data={"date": "2025-01-05", "done": "0", "year": "2025", "month": "0"},
        )

        assert app_repo.get_by_id(habit.id).status["2025-01-05"].value == "missed"

    def test_toggle_unknown_habit_flashes_error(self, client):
        html = _html(
            client.post(
                "/calendar/habits/999/toggle",
                data={"date": "2025-01-05", "done": "1", "year": "2025", "month": "0"},
                follow_redirects=True,
            )
        )
        assert "Failed to update habit status: not found" in html

    def test_delete_habit(self, client, app_repo):
        habit = app_repo.create("Read", date(2025, 1, 1))

        html = _html(
            client.post(
                f"/calendar/habits/{habit.id}/delete",
                data={"year": "2025", "month": "0"},
                follow_redirects=True,
            )
        )

        assert "Habit deleted." in html
        assert app_repo.list_all() == []

    def test_summary_chart_is_png(self, client, app_repo):
        habit = app_repo.create("Read", date(2025, 1, 1))
        app_repo.mark_date(habit.id, date(2025, 1, 2), True)

        response = client.get("/calendar/summary.png?year=2025&month=0")

        assert response.status_code == 200
        assert response.mimetype == "image/png"
        assert response.data.startswith(b"\x89PNG")


class TestCalendarPage:
    def test_page_layout(self, stub_habit):
        habit = stub_habit(date(2025, 1, 10), {date(2025, 1, 10): "done"}, name="Stretch")
        payload = build_month_view([habit], 2025, 0, today=FIXED_TODAY)

        page = build_calendar_page(payload, today=FIXED_TODAY)

        assert page.month_label == "January 2025"
        assert len(page.cells) == 31
        assert (page.prev_year, page.prev_month) == (2024, 11)
        assert (page.next_year, page.next_month) == (2025, 1)
        assert page.habit_count_label == "1 habit"
        assert [cell.day for cell in page.cells if cell.is_today] == [15]

    def test_pill_toggle_direction(self, stub_habit):
        habit = stub_habit(date(2025, 1, 10), {date(2025, 1, 10): "done"})
        page = build_calendar_page(build_month_view([habit], 2025, 0, today=FIXED_TODAY), today=FIXED_TODAY)

        disabled = page.cells[0].pills[0]
        done = page.cells[9].pills[0]
        missed = page.cells[10].pills[0]

        assert not disabled.clickable
        assert disabled.title == DISABLED_TITLE
        assert done.clickable and done.next_done is False
        assert missed.next_done is True
        assert missed.iso_date == "2025-01-11"

    def test_empty_month(self):
        page = build_calendar_page(build_month_view([], 2024, 1, today=FIXED_TODAY), today=FIXED_TODAY)
        assert len(page.cells) == 29
        assert page.habit_count_label == "0 habits"
        assert page.average_progress == 0
        assert page.summary == {"done": 0, "missed": 0, "pending": 0}
