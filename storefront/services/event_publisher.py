# storefront/services/event_publisher.py
from typing import Protocol

import redis
from redis.exceptions import RedisError

from storefront.domain.errors import InfrastructureError
from storefront.domain.order import Order
from storefront.domain.schemas import OrderCreatedEvent
from storefront.utils.settings import (
    REDIS_URL,
    REDIS_SOCKET_TIMEOUT,
    ORDER_CREATED_TOPIC,
    EVENT_STREAM_MAXLEN,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class EventPublisher(Protocol):
    def publish_order_created(self, order: Order) -> None: ...


class RedisStreamPublisher:
    """
    Publikacja zdarzeń do redis streams.
    -topic = nazwa strumienia
    -wpis ma pola key (id zamówienia) i value (JSON)
    -jedna próba, bez retry: dostarczanie at-least-once zapewnia grupa konsumentów
    """

    def __init__(self, client: redis.Redis | None = None, url: str | None = None):
        self.redis = client or redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
            socket_timeout=REDIS_SOCKET_TIMEOUT,
            socket_connect_timeout=REDIS_SOCKET_TIMEOUT,
        )

    def publish(self, topic: str, key: str, value: str) -> str:
        try:
            #XADD order.created MAXLEN ~ 100000 * key <id> value <json>
            entry_id = self.redis.xadd(
                topic,
                {"key": key, "value": value},
                maxlen=EVENT_STREAM_MAXLEN,
                approximate=True,
            )
        except RedisError as e:
            raise InfrastructureError(f"failed to publish to {topic}") from e

        logger.info(f"Event published to {topic} key={key} entry={entry_id}")
        return entry_id

    def publish_order_created(self, order: Order) -> None:
        payload = OrderCreatedEvent.from_order(order).model_dump_json()
        self.publish(ORDER_CREATED_TOPIC, order.id, payload)
