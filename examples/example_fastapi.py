"""
Example FastAPI application exposing the topic router.

Run with:
    uvicorn examples.example_fastapi:app --reload

Then:
    curl -X POST localhost:8000/routing/subscriptions \
        -H 'Content-Type: application/json' \
        -d '{"patterns": ["signal.email.*"]}'
    curl -X POST localhost:8000/routing/route \
        -H 'Content-Type: application/json' \
        -d '{"topic": "signal.email.sent"}'
"""

import logging

import uvicorn
from fastapi import FastAPI

from topic_router.api import create_routing_router
from topic_router.domain.routing_config import RoutingConfig
from topic_router.infrastructure.topic_router import TopicRouter

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

topic_router = TopicRouter(RoutingConfig.from_env())

app = FastAPI(title="Topic Router", version="0.1.0")
app.include_router(create_routing_router(topic_router, prefix="/routing"))


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Topic router is running"}


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
