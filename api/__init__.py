"""HTTP and WebSocket surface for the rules engine."""
