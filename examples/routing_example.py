"""
Topic Routing Example

This example demonstrates how to use the topic router to:
1. Validate topics and patterns
2. Check a single topic against a pattern
3. Register subscriptions with wildcard patterns
4. Route published topics to subscriptions
"""

from topic_router import (
    RoutingValidationError,
    TopicRouter,
    get_matching_topics,
    matches,
    new_subscription_id,
    validate_pattern,
)


def main() -> None:
    """Main execution function."""
    print("=" * 60)
    print("Topic Routing Example")
    print("=" * 60)
    print()

    # 1. Validation
    print("1. Validating patterns:")
    for raw in ["signal.*.received", "**.error", "signal.*foo", "a..b"]:
        try:
            pattern = validate_pattern(raw)
            print(f"   {raw:<20} ok (depth={pattern.depth}, literal={pattern.is_literal})")
        except RoutingValidationError as e:
            print(f"   {raw:<20} rejected: {e.kind} at position {e.position}")
    print()

    # 2. Pairwise matching
    print("2. Pairwise matching:")
    print(f"   signal.email matches signal.*        -> {matches('signal.email', 'signal.*')}")
    print(f"   signal matches signal.**             -> {matches('signal', 'signal.**')}")
    print(f"   a.x.b.y.c matches a.**.b.**.c        -> {matches('a.x.b.y.c', 'a.**.b.**.c')}")
    available = {"signal.email.sent", "signal.slack.sent", "action.email.send"}
    matched = sorted(get_matching_topics("*.email.*", available))
    print(f"   topics matching *.email.*            -> {matched}")
    print()

    # 3. Subscriptions
    print("3. Registering subscriptions:")
    router = TopicRouter()
    generated = new_subscription_id()
    router.subscribe("email_inbox", "signal.email.*")
    router.subscribe_many("audit", ["signal.**", "action.**"])
    router.subscribe(generated, "**.received")
    for subscription_id in ["email_inbox", "audit", generated]:
        patterns = sorted(p.value for p in router.patterns_for(subscription_id))
        print(f"   {subscription_id}: {patterns}")
    print()

    # 4. Routing
    print("4. Routing topics:")
    for topic in ["signal.email.received", "action.slack.send", "system.health"]:
        print(f"   {topic:<24} -> {router.route(topic)}")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()
