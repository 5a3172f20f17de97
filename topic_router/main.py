import logging
import time

from topic_router.domain.errors import RoutingValidationError
from topic_router.domain.routing_config import RoutingConfig
from topic_router.infrastructure.topic_router import TopicRouter

logger = logging.getLogger(__name__)


def main() -> None:
    """
    Demonstrates subscribing with wildcard patterns and routing published
    topics to the matching subscriptions.
    """
    router = TopicRouter(RoutingConfig.from_env())

    # 1. Register subscriptions
    subscriptions = {
        "email_inbox": ["signal.email.*"],
        "slack_everything": ["signal.slack.**"],
        "all_received": ["**.received"],
        "audit": ["signal.**", "action.**"],
    }
    for subscription_id, patterns in subscriptions.items():
        router.subscribe_many(subscription_id, patterns)

    # 2. Route published topics
    topics = [
        "signal.email.sent",
        "signal.email.received",
        "signal.slack.channel.message",
        "action.slack.send",
        "system.health",
    ]
    for topic in topics:
        logger.info("%-32s -> %s", topic, router.route(topic))

    # 3. Malformed input is reported, not routed
    for bad in ["signal..email", "signal.*", "x" * 300]:
        try:
            router.route(bad)
        except RoutingValidationError as e:
            logger.info("Rejected (%s): %s", e.kind, e.reason)

    # 4. Unsubscribe
    router.unsubscribe_all("audit")
    logger.info("After removing 'audit': %s", router.route("action.slack.send"))


def main_with_benchmark(num_patterns: int = 10_000, num_lookups: int = 10_000) -> None:
    """
    Registers many patterns and times lookups against them.
    """
    print("\n" + "=" * 80)
    print("ROUTING BENCHMARK")
    print("=" * 80)

    router = TopicRouter()

    start = time.perf_counter()
    for i in range(num_patterns):
        router.subscribe(f"sub_{i}", f"bench.tenant{i % 100}.stream{i}.*")
    router.subscribe("sub_all", "bench.**")
    elapsed = time.perf_counter() - start
    print(f"Registered {num_patterns + 1} patterns in {elapsed:.3f}s")

    start = time.perf_counter()
    for i in range(num_lookups):
        router.route_set(f"bench.tenant{i % 100}.stream{i % num_patterns}.event")
    elapsed = time.perf_counter() - start
    per_topic = elapsed / num_lookups * 1e6
    print(f"Routed {num_lookups} topics in {elapsed:.3f}s ({per_topic:.1f} us/topic)")


if __name__ == "__main__":
    import sys

    # Configure logging
    logging.basicConfig(
        level=logging.WARNING,  # Set to WARNING for benchmark to reduce noise
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    if len(sys.argv) > 1 and sys.argv[1] == "--benchmark":
        main_with_benchmark()
    else:
        logging.basicConfig(level=logging.INFO, force=True)
        logging.info("Running topic routing demo...")
        logging.info("(Use --benchmark flag for a performance test)")
        main()
        logging.info("Demo finished.")
