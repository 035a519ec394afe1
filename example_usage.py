"""
Example walkthrough of the game-events SDK.

Reads the API key from GAME_EVENTS_API_KEY (or game_events_config.json).
"""

from game_events import (
    Client,
    Session,
    GameEventsError,
    build_event,
    get_client_config,
    get_logging_config,
    setup_logging,
    stop_logging,
)

if __name__ == "__main__":
    setup_logging(debug=get_logging_config().debug)
    config = get_client_config()
    client = Client.from_config(config)

    # A standalone event, without a session
    client.log_event(build_event(event="app_start", user_id="python_user_123", session_id="python_session_456"))

    session = Session("python_user_123", "python_session_456")
    session.set_user_property("platform", "python")
    session.set_user_property("subscription_type", "premium")
    session.set_user_property("level", 10)

    session.push_event("level_started")
    session.push_event("level_completed", {"level_id": 5, "score": 1500, "difficulty": "hard"})
    session.push_event("purchase", {"item_id": "sword_legendary", "price": 9.99, "currency": "USD"})

    moved = client.log_session(session, max_count=100)
    print(f"Moved {moved} events from session, pending: {client.pending_events_count()}")

    try:
        while client.pending_events_count():
            response = client.flush_batch(config.batch_size)
            print(f"Success! Response: {response}")
    except GameEventsError as exc:
        print(f"Error: {exc}")
    finally:
        client.close()
        stop_logging()

    print(f"Pending events after flush: {client.pending_events_count()}")
