"""Event publishers for tenant change messages."""
from typing import Optional

import httpx

from tenant_api.core.config import Settings
from tenant_api.core.enums import EventAction
from tenant_api.core.exceptions import PublishError
from tenant_api.core.logging import get_logger
from tenant_api.events.messages import ChangeMessage


logger = get_logger(__name__)


class EventPublisher:
    """Delivers change messages on `<prefix>.<topic>.<action>.<scope>` subjects.

    Delivery is best effort: one attempt per message, failures raise
    PublishError and are never retried here.
    """

    def __init__(self, subject_prefix: str = "com.infratographer.events"):
        self.subject_prefix = subject_prefix

    def subject(self, action: EventAction, topic: str, scope: str) -> str:
        return ".".join([self.subject_prefix, topic, EventAction(action).value, scope])

    async def publish(self, action: EventAction, topic: str, scope: str, message: ChangeMessage) -> None:
        raise NotImplementedError

    async def publish_create(self, topic: str, scope: str, message: ChangeMessage) -> None:
        await self.publish(EventAction.CREATE, topic, scope, message)

    async def publish_update(self, topic: str, scope: str, message: ChangeMessage) -> None:
        await self.publish(EventAction.UPDATE, topic, scope, message)

    async def publish_delete(self, topic: str, scope: str, message: ChangeMessage) -> None:
        await self.publish(EventAction.DELETE, topic, scope, message)

    async def close(self) -> None:
        pass


class LoggingEventPublisher(EventPublisher):
    """Used when no event gateway is configured: messages are logged and dropped."""

    async def publish(self, action: EventAction, topic: str, scope: str, message: ChangeMessage) -> None:
        subject = self.subject(action, topic, scope)
        logger.info(
            f"EVENTS_URL not set. Dropping message for {message.resource_urn}",
            extra={"subject": subject, "actor": message.actor},
        )


class HTTPEventPublisher(EventPublisher):
    """POSTs each message as JSON to an HTTP event gateway."""

    def __init__(
        self,
        url: str,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        subject_prefix: str = "com.infratographer.events",
        client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(subject_prefix)
        self.url = url
        self.api_key = api_key
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout)

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def publish(self, action: EventAction, topic: str, scope: str, message: ChangeMessage) -> None:
        subject = self.subject(action, topic, scope)
        body = {"subject": subject, "message": message.to_wire()}

        try:
            response = await self.client.post(self.url, json=body, headers=self._headers())
        except httpx.HTTPError as e:
            raise PublishError(f"failed to publish {subject}: {type(e).__name__}: {e}") from e

        if response.is_error:
            raise PublishError(
                f"event gateway rejected {subject} with status {response.status_code}: {response.text}"
            )

        logger.debug(f"Published {subject} for {message.resource_urn}", extra={"subject": subject})

    async def close(self) -> None:
        if self._owns_client:
            await self.client.aclose()


def build_event_publisher(settings: Settings) -> EventPublisher:
    """Pick the publisher implied by configuration."""
    if not settings.EVENTS_URL:
        return LoggingEventPublisher(settings.EVENTS_SUBJECT_PREFIX)

    return HTTPEventPublisher(
        url=settings.EVENTS_URL,
        api_key=settings.EVENTS_API_KEY,
        timeout=settings.EVENTS_TIMEOUT,
        subject_prefix=settings.EVENTS_SUBJECT_PREFIX,
    )
