"""Public hydration API."""

from .hydrate import hydrate, hydrate_file, hydrate_string

__all__ = ["hydrate", "hydrate_file", "hydrate_string"]
