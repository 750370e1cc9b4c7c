"""HTTP API exposing pool operations and swap building."""
