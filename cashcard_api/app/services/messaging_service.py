"""
RabbitMQ publish/subscribe demo.

A topic exchange ``spring-boot-exchange`` is bound to the non-durable
queue ``spring-boot`` with the pattern ``foo.bar.#``, so every message
published with a routing key starting with ``foo.bar.`` lands in the
queue.  ``run_demo`` declares that topology, registers a ``Receiver``
as consumer, publishes one greeting and waits until it arrives.
"""

import asyncio
import logging
from typing import List, Optional, Tuple

import aio_pika

from cashcard_api.app.core.config import settings

logger = logging.getLogger(__name__)

EXCHANGE_NAME = "spring-boot-exchange"
QUEUE_NAME = "spring-boot"
BINDING_KEY = "foo.bar.#"
ROUTING_KEY = "foo.bar.baz"
DEMO_MESSAGE = "Hello from RabbitMQ!"


class Receiver:
    """Consumer that records messages and sets ``received`` on the first one."""

    def __init__(self) -> None:
        self.messages: List[str] = []
        self.received = asyncio.Event()

    def receive_message(self, message: str) -> None:
        logger.info("Received <%s>", message)
        self.messages.append(message)
        self.received.set()

    async def process(self, msg: aio_pika.abc.AbstractIncomingMessage) -> None:
        async with msg.process():
            self.receive_message(msg.body.decode())


async def declare_topology(
    channel: aio_pika.abc.AbstractChannel,
) -> Tuple[aio_pika.abc.AbstractExchange, aio_pika.abc.AbstractQueue]:
    exchange = await channel.declare_exchange(EXCHANGE_NAME, aio_pika.ExchangeType.TOPIC)
    queue = await channel.declare_queue(QUEUE_NAME, durable=False)
    await queue.bind(exchange, routing_key=BINDING_KEY)
    return exchange, queue


async def send_message(
    exchange: aio_pika.abc.AbstractExchange,
    message: str = DEMO_MESSAGE,
    routing_key: str = ROUTING_KEY,
) -> None:
    logger.info("Sending message...")
    await exchange.publish(aio_pika.Message(body=message.encode()), routing_key=routing_key)


async def run_demo(
    url: Optional[str] = None,
    receiver: Optional[Receiver] = None,
    timeout: float = 10.0,
) -> Receiver:
    """Publish ``DEMO_MESSAGE`` and wait for ``receiver`` to consume it.

    Raises ``asyncio.TimeoutError`` when nothing arrives within
    ``timeout`` seconds.  The connection is closed in every case.
    """
    receiver = receiver or Receiver()
    connection = await aio_pika.connect_robust(url or settings.rabbitmq_url)
    try:
        channel = await connection.channel()
        exchange, queue = await declare_topology(channel)
        await queue.consume(receiver.process)
        await send_message(exchange)
        await asyncio.wait_for(receiver.received.wait(), timeout)
    finally:
        await connection.close()
    return receiver
