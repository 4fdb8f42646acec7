"""Build tooling for the A Big Stick blog: RSS feed generation and checks."""
