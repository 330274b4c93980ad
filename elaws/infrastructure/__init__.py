"""Infrastructure layer: transport, parsing, logging and CLI."""
