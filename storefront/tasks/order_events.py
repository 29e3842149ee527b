# storefront/tasks/order_events.py
from typing import Callable

import redis
from redis.exceptions import ResponseError

from storefront.celery_worker import celery_app
from storefront.domain.schemas import OrderCreatedEvent
from storefront.utils.settings import (
    REDIS_URL,
    REDIS_SOCKET_TIMEOUT,
    ORDER_CREATED_TOPIC,
    ORDER_EVENTS_GROUP,
    ORDER_EVENTS_CONSUMER,
    ORDER_EVENTS_BATCH,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def handle_order_created(event: OrderCreatedEvent) -> None:
    """
    W prawdziwym systemie wysłałby email/SMS/push.
    Teraz tylko loguje.
    """
    logger.info(
        f"[NOTIFICATION] User {event.user_id}: order {event.id} placed, "
        f"{len(event.items)} items, total {event.total:.2f}"
    )


class OrderEventConsumer:
    """
    Czytanie order.created przez grupę konsumentów redis streams.
    XACK tylko po udanej obsłudze, nieudane zostają w pending i wracają
    przy następnym pollu (at-least-once).
    """

    def __init__(
        self,
        client: redis.Redis | None = None,
        handler: Callable[[OrderCreatedEvent], None] = handle_order_created,
        topic: str = ORDER_CREATED_TOPIC,
        group: str = ORDER_EVENTS_GROUP,
        consumer: str = ORDER_EVENTS_CONSUMER,
    ):
        self.redis = client or redis.Redis.from_url(
            REDIS_URL,
            decode_responses=True,
            socket_timeout=REDIS_SOCKET_TIMEOUT,
        )
        self.handler = handler
        self.topic = topic
        self.group = group
        self.consumer = consumer

    def ensure_group(self) -> None:
        try:
            self.redis.xgroup_create(self.topic, self.group, id="0", mkstream=True)
            logger.info(f"Consumer group {self.group} created on {self.topic}")
        except ResponseError as e:
            # grupa już istnieje
            if "BUSYGROUP" not in str(e):
                raise

    def poll(self, count: int = ORDER_EVENTS_BATCH) -> int:
        handled = 0
        #najpierw własne pending (po błędzie), potem nowe wpisy
        for start in ("0", ">"):
            response = self.redis.xreadgroup(
                self.group, self.consumer, {self.topic: start}, count=count
            )
            for _stream, entries in response or []:
                for entry_id, fields in entries:
                    if self._process(entry_id, fields):
                        handled += 1
        return handled

    def _process(self, entry_id: str, fields: dict | None) -> bool:
        if not fields:
            # wpis usunięty przez MAXLEN, został tylko w pending
            self.redis.xack(self.topic, self.group, entry_id)
            return False
        try:
            event = OrderCreatedEvent.model_validate_json(fields["value"])
            self.handler(event)
        except Exception as e:
            logger.error(f"Error processing {self.topic} entry {entry_id} (key={fields.get('key')}): {e}")
            return False

        self.redis.xack(self.topic, self.group, entry_id)
        return True


@celery_app.task(name="storefront.tasks.order_events.consume_order_events_task")
def consume_order_events_task():
    consumer = OrderEventConsumer()
    consumer.ensure_group()
    handled = consumer.poll()
    if handled:
        logger.info(f"Handled {handled} order events")
    return handled
