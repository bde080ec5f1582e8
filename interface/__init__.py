"""Hosting surfaces for the engine: terminal game (cli) and REST service (api)."""
