from panelbot.delivery.base import DeliveryStrategy
from panelbot.delivery.dispatcher import DeliveryDispatcher, select_strategy
from panelbot.delivery.s3 import S3Strategy
from panelbot.delivery.strategies import ImageProxyStrategy, PassThroughStrategy

__all__ = [
    "DeliveryDispatcher",
    "DeliveryStrategy",
    "ImageProxyStrategy",
    "PassThroughStrategy",
    "S3Strategy",
    "select_strategy",
]
