import httpx
import pytest
import respx
from httpx import Response

from panelbot.clients.grafana import GrafanaClient, normalize_dashboard, normalize_search
from panelbot.core.errors import DashboardServiceError, FetchError
from panelbot.dashboards.models import RENDER_SEGMENT_CURRENT, RENDER_SEGMENT_LEGACY

HOST = "https://grafana.example.com"


class TestNormalizeDashboard:
    def test_current_shape(self, dashboard_payload):
        definition = normalize_dashboard(dashboard_payload)

        assert definition.render_segment == RENDER_SEGMENT_CURRENT
        assert [len(row.panels) for row in definition.rows] == [3, 2]
        assert definition.rows[0].panels[2].title == "Swap Usage"
        assert definition.templating[0].name == "host"
        assert definition.templating[0].current_value == "web-01"

    def test_legacy_model_shape(self, legacy_dashboard_payload):
        definition = normalize_dashboard(legacy_dashboard_payload)

        assert definition.render_segment == RENDER_SEGMENT_LEGACY
        assert definition.panel_count == 2
        assert definition.templating[0].current_value == "prod"

    def test_message_is_service_error(self):
        with pytest.raises(DashboardServiceError, match="Dashboard not found"):
            normalize_dashboard({"message": "Dashboard not found"})

    def test_flat_panels_become_one_row(self):
        definition = normalize_dashboard(
            {"dashboard": {"panels": [{"id": 1, "title": "a"}, {"id": 2, "title": "b"}]}}
        )

        assert len(definition.rows) == 1
        assert definition.panel_count == 2

    def test_missing_fields_default(self):
        definition = normalize_dashboard(
            {
                "dashboard": {
                    "rows": [{"panels": [{"type": "text"}]}, {}],
                    "templating": {"list": [{"name": "svc", "current": {"value": ["a", "b"]}}]},
                }
            }
        )

        panel = definition.rows[0].panels[0]
        assert (panel.id, panel.title) == (0, "")
        assert definition.rows[1].panels == ()
        assert definition.templating[0].current_value == "a+b"

    def test_non_object_payload(self):
        with pytest.raises(FetchError):
            normalize_dashboard(["not", "a", "dashboard"])


class TestNormalizeSearch:
    def test_bare_list_with_uri(self):
        result = normalize_search(
            [
                {"uri": "db/web-frontend", "title": "Web Frontend", "tags": ["web"]},
                {"slug": "backend", "title": "Backend"},
            ]
        )

        assert [(d.slug, d.title) for d in result] == [
            ("web-frontend", "Web Frontend"),
            ("backend", "Backend"),
        ]
        assert result[0].tags == ("web",)

    def test_dashboards_field(self):
        result = normalize_search({"dashboards": [{"slug": "ops", "title": "Ops"}]})

        assert [d.slug for d in result] == ["ops"]

    def test_folders_are_skipped(self):
        result = normalize_search(
            [
                {"type": "dash-folder", "title": "Folder", "uid": "f1"},
                {"type": "dash-db", "uri": "db/ops", "title": "Ops"},
            ]
        )

        assert [d.slug for d in result] == ["ops"]

    def test_message_is_service_error(self):
        with pytest.raises(DashboardServiceError):
            normalize_search({"message": "Unauthorized"})


@pytest.mark.asyncio
async def test_fetch_dashboard_sends_auth_headers(dashboard_payload):
    client = GrafanaClient(HOST, "secret-key")

    with respx.mock:
        route = respx.get(f"{HOST}/api/dashboards/db/graphite-carbon-metrics").mock(
            return_value=Response(200, json=dashboard_payload)
        )

        definition = await client.fetch_dashboard("graphite-carbon-metrics")

        request = route.calls.last.request
        assert request.headers["Accept"] == "application/json"
        assert request.headers["Authorization"] == "Bearer secret-key"
        assert definition.panel_count == 5


@pytest.mark.asyncio
async def test_fetch_dashboard_without_api_key_omits_authorization(dashboard_payload):
    client = GrafanaClient(HOST)

    with respx.mock:
        route = respx.get(f"{HOST}/api/dashboards/db/web").mock(
            return_value=Response(200, json=dashboard_payload)
        )

        await client.fetch_dashboard("web")

        assert "Authorization" not in route.calls.last.request.headers


@pytest.mark.asyncio
async def test_fetch_dashboard_not_found_message():
    client = GrafanaClient(HOST, "secret-key")

    with respx.mock:
        respx.get(f"{HOST}/api/dashboards/db/missing").mock(
            return_value=Response(404, json={"message": "Dashboard not found"})
        )

        with pytest.raises(DashboardServiceError, match="Dashboard not found"):
            await client.fetch_dashboard("missing")


@pytest.mark.asyncio
async def test_fetch_dashboard_transport_error_no_retry():
    client = GrafanaClient(HOST)

    with respx.mock:
        route = respx.get(f"{HOST}/api/dashboards/db/web")
        route.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(FetchError):
            await client.fetch_dashboard("web")

        assert route.call_count == 1


@pytest.mark.asyncio
async def test_fetch_dashboard_unparsable_body():
    client = GrafanaClient(HOST)

    with respx.mock:
        respx.get(f"{HOST}/api/dashboards/db/web").mock(
            return_value=Response(502, text="<html>Bad Gateway</html>")
        )

        with pytest.raises(FetchError):
            await client.fetch_dashboard("web")


@pytest.mark.asyncio
async def test_search_dashboards_passes_query_and_tag():
    client = GrafanaClient(HOST, "secret-key")

    with respx.mock:
        route = respx.get(f"{HOST}/api/search").mock(
            return_value=Response(200, json=[{"uri": "db/ops", "title": "Ops"}])
        )

        result = await client.search_dashboards(query="ops", tag="prod")

        params = route.calls.last.request.url.params
        assert params["query"] == "ops"
        assert params["tag"] == "prod"
        assert [d.slug for d in result] == ["ops"]


@pytest.mark.asyncio
async def test_list_dashboards_without_tag():
    client = GrafanaClient(HOST)

    with respx.mock:
        route = respx.get(f"{HOST}/api/search").mock(
            return_value=Response(200, json={"dashboards": [{"slug": "ops", "title": "Ops"}]})
        )

        result = await client.list_dashboards()

        assert "tag" not in route.calls.last.request.url.params
        assert [(d.slug, d.title) for d in result] == [("ops", "Ops")]


@pytest.mark.asyncio
async def test_fetch_image_returns_bytes_and_content_type():
    client = GrafanaClient(HOST, "secret-key")
    render_url = f"{HOST}/render/dashboard-solo/db/web/?panelId=1&width=1000&height=500&from=now-6h&to=now"

    with respx.mock:
        route = respx.get(url__startswith=f"{HOST}/render/").mock(
            return_value=Response(200, content=b"\x89PNG", headers={"Content-Type": "image/png"})
        )

        body, content_type = await client.fetch_image(render_url)

        assert body == b"\x89PNG"
        assert content_type == "image/png"
        assert route.calls.last.request.headers["Authorization"] == "Bearer secret-key"


@pytest.mark.asyncio
async def test_fetch_image_non_200_is_fetch_error():
    client = GrafanaClient(HOST)

    with respx.mock:
        respx.get(url__startswith=f"{HOST}/render/").mock(return_value=Response(500))

        with pytest.raises(FetchError):
            await client.fetch_image(f"{HOST}/render/dashboard-solo/db/web/?panelId=1")


class TestMalformedDashboard:
    def test_non_object_rows_are_skipped(self):
        definition = normalize_dashboard(
            {"dashboard": {"rows": [None, "x", {"panels": [{"id": 1, "title": "a"}]}]}}
        )

        assert len(definition.rows) == 1
        assert definition.panel_count == 1

    def test_non_object_panels_take_no_ordinal(self):
        definition = normalize_dashboard(
            {"dashboard": {"rows": [{"panels": ["x", None, {"id": 7, "title": "Load"}]}]}}
        )

        assert [p.title for p in definition.rows[0].panels] == ["Load"]

    def test_non_object_template_entries_are_skipped(self):
        definition = normalize_dashboard(
            {
                "dashboard": {
                    "templating": ["x", {"name": "env", "current": "prod"}, {"name": "dc"}],
                }
            }
        )

        assert [(v.name, v.current_value) for v in definition.templating] == [
            ("env", ""),
            ("dc", ""),
        ]

    @pytest.mark.parametrize(
        "payload",
        [
            {"dashboard": ["not", "an", "object"]},
            {"model": "text"},
            {"dashboard": {"rows": {"panels": []}}},
            {"dashboard": {"rows": [{"panels": "x"}]}},
            {"dashboard": {"templating": "x"}},
        ],
    )
    def test_wrong_container_types_are_fetch_errors(self, payload):
        with pytest.raises(FetchError, match="Unexpected dashboard payload"):
            normalize_dashboard(payload)

    def test_search_entry_with_odd_fields(self):
        result = normalize_search([{"uri": 5, "slug": "ops", "title": "Ops", "tags": "prod"}])

        assert [(d.slug, d.tags) for d in result] == [("ops", ())]


@pytest.mark.asyncio
async def test_fetch_dashboard_encodes_slug():
    client = GrafanaClient(HOST)

    with respx.mock:
        route = respx.get(url__startswith=f"{HOST}/api/dashboards/db/").mock(
            return_value=Response(200, json={"dashboard": {}})
        )

        await client.fetch_dashboard("foo?x")

        url = route.calls.last.request.url
        assert url.raw_path == b"/api/dashboards/db/foo%3Fx"
        assert not url.query
