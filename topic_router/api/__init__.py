"""HTTP API adapters for the topic router."""

from .fastapi_integration import RoutingRouter, create_routing_router

__all__ = [
    "RoutingRouter",
    "create_routing_router",
]
