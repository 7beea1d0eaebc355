"""Debug Adapter Protocol streams, framing, TCP transport and message types."""

__version__ = "1.65.0"

__all__ = [
    "content_stream",
    "io",
    "network",
    "protocol_events",
    "protocol_requests",
    "protocol_responses",
    "protocol_types",
    "serialization",
    "types",
]