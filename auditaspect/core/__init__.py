"""Core building blocks: configuration, result types, errors, container."""
