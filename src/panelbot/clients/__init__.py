from panelbot.clients.grafana import GrafanaClient
from panelbot.clients.image_proxy import ImageProxyClient
from panelbot.clients.slack import SlackNotifier

__all__ = ["GrafanaClient", "ImageProxyClient", "SlackNotifier"]
