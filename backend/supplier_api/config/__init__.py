"""Configuration: constants, tiers and the service vocabulary."""
