"""Configuration for the LCX market-data client."""
