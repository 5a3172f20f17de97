"""
FastAPI integration for TopicRouter.
Exposes subscribe, unsubscribe and route over an HTTP API.
"""

from collections.abc import Sequence

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, Field

from topic_router.domain.errors import RoutingValidationError
from topic_router.infrastructure.topic_router import TopicRouter
from topic_router.infrastructure.topic_trie import TopicTrie
from topic_router.utils.subscription_id import new_subscription_id


class SubscribePayload(BaseModel):
    """Request payload for registering a subscription."""

    subscription_id: str | None = None
    patterns: list[str] = Field(min_length=1)


class SubscribeResponse(BaseModel):
    """Response after registering a subscription."""

    subscription_id: str
    patterns: list[str]


class UnsubscribeResponse(BaseModel):
    """Response after removing patterns from a subscription."""

    subscription_id: str
    removed: int


class RoutePayload(BaseModel):
    """Request payload for routing a published topic."""

    topic: str


class RouteResponse(BaseModel):
    """Subscriptions a topic should be delivered to."""

    topic: str
    subscription_ids: list[str]


class MatchPayload(BaseModel):
    """Request payload for a one-off topic/pattern check."""

    topic: str
    pattern: str


class MatchResponse(BaseModel):
    """Result of a one-off topic/pattern check."""

    matches: bool


def _invalid(e: RoutingValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=e.to_dict(),
    )


class RoutingRouter:
    """
    FastAPI router for TopicRouter integration.

    Example usage:
        ```python
        from fastapi import FastAPI
        from topic_router.api import RoutingRouter

        app = FastAPI()
        topic_router = TopicRouter(RoutingConfig.from_env())

        routing_router = RoutingRouter(topic_router, prefix="/routing")
        app.include_router(routing_router.router)

        # Now you can POST to /routing/subscriptions and /routing/route
        ```
    """

    def __init__(
        self,
        topic_router: TopicRouter,
        prefix: str = "",
        tags: Sequence[str] | None = None,
    ):
        """
        Initialize the router.

        Args:
            topic_router: The TopicRouter instance to expose.
            prefix: URL prefix for the routes (e.g., "/routing").
            tags: OpenAPI tags for documentation.
        """
        if tags is None:
            tags = ["Routing"]

        self.topic_router = topic_router
        self.router = APIRouter(prefix=prefix, tags=list(tags))
        self._setup_routes()

    def _setup_routes(self) -> None:
        """Setup the API routes."""

        @self.router.post(
            "/subscriptions",
            response_model=SubscribeResponse,
            status_code=status.HTTP_201_CREATED,
            summary="Register a subscription",
            description="Register one or more patterns for a subscription id.",
        )
        async def subscribe(payload: SubscribePayload) -> SubscribeResponse:
            """
            Register patterns for a subscription.

            Args:
                payload: Subscription id (generated if omitted) and patterns.

            Returns:
                The subscription id and the patterns now registered for it.

            Raises:
                HTTPException: 422 if any pattern is malformed.
            """
            subscription_id = payload.subscription_id or new_subscription_id()
            try:
                self.topic_router.subscribe_many(subscription_id, payload.patterns)
            except RoutingValidationError as e:
                raise _invalid(e) from e

            patterns = sorted(p.value for p in self.topic_router.patterns_for(subscription_id))
            return SubscribeResponse(subscription_id=subscription_id, patterns=patterns)

        @self.router.delete(
            "/subscriptions/{subscription_id}",
            response_model=UnsubscribeResponse,
            summary="Remove a subscription",
            description="Remove one pattern, or every pattern when none is given.",
        )
        async def unsubscribe(
            subscription_id: str, pattern: str | None = None
        ) -> UnsubscribeResponse:
            """
            Remove patterns from a subscription.

            Args:
                subscription_id: The subscription to modify.
                pattern: Optional single pattern to remove.

            Returns:
                Number of patterns removed.

            Raises:
                HTTPException: 422 if the pattern is malformed.
            """
            if pattern is None:
                removed = self.topic_router.unsubscribe_all(subscription_id)
            else:
                try:
                    removed = int(self.topic_router.unsubscribe(subscription_id, pattern))
                except RoutingValidationError as e:
                    raise _invalid(e) from e
            return UnsubscribeResponse(subscription_id=subscription_id, removed=removed)

        @self.router.post(
            "/route",
            response_model=RouteResponse,
            summary="Route a topic",
            description="Return the subscriptions a published topic should be delivered to.",
        )
        async def route(payload: RoutePayload) -> RouteResponse:
            try:
                subscription_ids = self.topic_router.route(payload.topic)
            except RoutingValidationError as e:
                raise _invalid(e) from e
            return RouteResponse(topic=payload.topic, subscription_ids=subscription_ids)

        @self.router.post(
            "/match",
            response_model=MatchResponse,
            summary="Match a topic against a pattern",
            description="Check one topic against one pattern without registering it.",
        )
        async def match(payload: MatchPayload) -> MatchResponse:
            try:
                result = self.topic_router.matches(payload.topic, payload.pattern)
            except RoutingValidationError as e:
                raise _invalid(e) from e
            return MatchResponse(matches=result)

        @self.router.get(
            "/status",
            response_model=dict[str, int],
            summary="Get routing status",
            description="Get subscription, entry and index node counts.",
        )
        async def get_routing_status() -> dict[str, int]:
            """
            Get routing status.

            Returns:
                Counts of subscriptions, (subscription, pattern) entries and index nodes.
            """
            index = self.topic_router.index
            return {
                "subscriptions": self.topic_router.subscription_count,
                "entries": len(index),
                "nodes": index.node_count() if isinstance(index, TopicTrie) else 0,
            }


def create_routing_router(
    topic_router: TopicRouter,
    prefix: str = "",
    tags: Sequence[str] | None = None,
) -> APIRouter:
    """
    Convenience function to create a FastAPI router for a TopicRouter.

    Args:
        topic_router: The TopicRouter instance.
        prefix: URL prefix for the routes.
        tags: OpenAPI tags.

    Returns:
        Configured APIRouter instance.

    Example:
        ```python
        from fastapi import FastAPI

        app = FastAPI()

        router = create_routing_router(TopicRouter(), prefix="/api/routing")
        app.include_router(router)
        ```
    """
    return RoutingRouter(topic_router, prefix, tags).router
