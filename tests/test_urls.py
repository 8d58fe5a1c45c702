from urllib.parse import parse_qsl, urlsplit

from panelbot.dashboards.models import TimeRange
from panelbot.dashboards.urls import build_link_url, build_panel_urls, build_render_url

HOST = "https://grafana.example.com"


def test_render_url_format():
    url = build_render_url(HOST, "dashboard-solo", "web", 4, TimeRange("now-1d", "now"), ["host=a"])

    assert url == (
        "https://grafana.example.com/render/dashboard-solo/db/web/"
        "?panelId=4&width=1000&height=500&from=now-1d&to=now&var-host=a"
    )


def test_link_url_format():
    url = build_link_url(HOST, "web", 4, TimeRange("now-1d", "now"), ["host=a", "dc=b"])

    assert url == (
        "https://grafana.example.com/dashboard/db/web/"
        "?panelId=4&fullscreen&from=now-1d&to=now&var-host=a&var-dc=b"
    )


def test_legacy_render_segment():
    url = build_render_url(HOST, "dashboard/solo", "web", 1, TimeRange())

    assert url.startswith("https://grafana.example.com/render/dashboard/solo/db/web/?panelId=1&")
    assert url.endswith("&from=now-6h&to=now")


def test_trailing_slash_on_host():
    urls = build_panel_urls(HOST + "/", "dashboard-solo", "web", 1, TimeRange())

    assert urls.render_url.startswith("https://grafana.example.com/render/")
    assert urls.link_url.startswith("https://grafana.example.com/dashboard/")


def test_render_url_query_parameters_survive_parsing():
    variables = ["host=web-01", "dc=eu", "host=web-02"]
    url = build_render_url(HOST, "dashboard-solo", "db1", 42, TimeRange("now-8d", "now-1d"), variables)

    params = parse_qsl(urlsplit(url).query)

    assert ("panelId", "42") in params
    assert ("from", "now-8d") in params
    assert ("to", "now-1d") in params
    assert [p for p in params if p[0].startswith("var-")] == [
        ("var-host", "web-01"),
        ("var-dc", "eu"),
        ("var-host", "web-02"),
    ]


def test_slug_is_percent_encoded_in_paths():
    urls = build_panel_urls(HOST, "dashboard-solo", "foo?x", 1, TimeRange())

    assert urls.render_url.startswith(f"{HOST}/render/dashboard-solo/db/foo%3Fx/?panelId=1&")
    assert urls.link_url.startswith(f"{HOST}/dashboard/db/foo%3Fx/?panelId=1&")
