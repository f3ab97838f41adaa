"""Configuration, logging, errors and the database handle."""
