import pytest
from fastapi.testclient import TestClient

from whattimeisit.config.settings import get_settings
from whattimeisit.web.main import app

SUMMER_QUERY = "date=2023-06-01&startHour=9&timezones=UTC&timezones=America/New_York"


@pytest.fixture(autouse=True)
def local_timezone(monkeypatch):
    monkeypatch.setenv("DEFAULT_TIMEZONE", "Europe/Berlin")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def client():
    return TestClient(app)


def test_index_renders_one_row_per_timezone(client):
    response = client.get(f"/?{SUMMER_QUERY}")
    assert response.status_code == 200
    body = response.text
    assert 'data-zone="UTC"' in body
    assert 'data-zone="America/New_York"' in body
    assert "What time is it on 6/1/2023?" in body
    assert "Starting at 9" in body
    assert '<td class="hour day">09</td>' in body
    assert '<td class="hour night">05</td>' in body


def test_index_remove_links_drop_only_that_zone(client):
    body = client.get(f"/?{SUMMER_QUERY}").text
    assert 'href="/?date=2023-06-01&amp;startHour=9&amp;timezones=America%2FNew_York"' in body
    assert 'href="/?date=2023-06-01&amp;startHour=9&amp;timezones=UTC"' in body


def test_index_marks_daylight_saving_rows(client):
    body = client.get(f"/?{SUMMER_QUERY}").text
    assert body.count('class="daylight"') == 1


def test_index_defaults_without_query(client):
    body = client.get("/").text
    assert 'data-zone="Europe/Berlin"' in body
    assert 'data-zone="UTC"' in body


def test_index_ignores_malformed_input(client):
    response = client.get("/?date=garbage&startHour=noon&timezones=Not/AZone")
    assert response.status_code == 200
    assert 'data-zone="Not/AZone"' not in response.text
    assert 'data-zone="Europe/Berlin"' in response.text


def test_add_redirects_with_appended_zone(client):
    response = client.get(f"/add?{SUMMER_QUERY}&timezone=Asia/Tokyo", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == (
        "/?date=2023-06-01&startHour=9&timezones=UTC&timezones=America%2FNew_York&timezones=Asia%2FTokyo"
    )


@pytest.mark.parametrize("proposed", ["UTC", "Atlantis/Capital", ""])
def test_add_duplicate_or_unknown_keeps_url(client, proposed):
    response = client.get(f"/add?{SUMMER_QUERY}&timezone={proposed}", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == (
        "/?date=2023-06-01&startHour=9&timezones=UTC&timezones=America%2FNew_York"
    )


def test_add_without_selection_starts_from_defaults(client):
    response = client.get("/add?timezone=Asia/Tokyo", follow_redirects=False)
    assert response.headers["location"] == (
        "/?timezones=Europe%2FBerlin&timezones=UTC&timezones=Asia%2FTokyo"
    )


def test_grid_api_matches_page(client):
    response = client.get(f"/api/grid?{SUMMER_QUERY}")
    assert response.status_code == 200
    payload = response.json()
    assert payload["date"] == "2023-06-01"
    assert payload["start_hour"] == 9
    assert payload["timezones"] == ["UTC", "America/New_York"]
    utc_row, ny_row = payload["rows"]
    assert utc_row["cells"][0]["label"] == "09"
    assert ny_row["cells"][0]["label"] == "05"
    assert ny_row["is_daylight_saving"] is True
    assert utc_row["is_daylight_saving"] is False
    assert len(ny_row["cells"]) == 24
    assert ny_row["remove_url"] == "/?date=2023-06-01&startHour=9&timezones=UTC"


def test_timezone_options_include_utc(client):
    payload = client.get("/api/meta/timezones").json()
    assert {"value": "UTC", "label": "UTC (UTC)"} in payload["timezones"]
    assert payload["default_timezone"] == "Europe/Berlin"


def test_health_reports_registry(client):
    payload = client.get("/health").json()
    assert payload["status"] == "ok"
    assert payload["zone_count"] > 1
    assert payload["default_timezone"] == "Europe/Berlin"


@pytest.mark.parametrize(
    "query",
    [
        "date=9999-12-31&startHour=0&timezones=Asia/Tokyo",
        "date=9999-12-31&startHour=23&timezones=UTC",
        "date=0001-01-01&startHour=0&timezones=America/New_York",
    ],
)
def test_index_survives_dates_at_calendar_limits(query):
    client = TestClient(app, raise_server_exceptions=False)
    response = client.get(f"/?{query}")
    assert response.status_code == 200
    assert client.get(f"/api/grid?{query}").status_code == 200


def test_form_does_not_repeat_stray_add_field(client):
    body = client.get(f"/?{SUMMER_QUERY}&timezone=Asia/Tokyo").text
    assert 'type="hidden" name="timezone"' not in body


def test_add_uses_last_submitted_selection(client):
    response = client.get(
        f"/add?{SUMMER_QUERY}&timezone=Asia/Tokyo&timezone=Europe/Paris", follow_redirects=False
    )
    assert response.headers["location"] == (
        "/?date=2023-06-01&startHour=9&timezones=UTC&timezones=America%2FNew_York&timezones=Europe%2FParis"
    )
