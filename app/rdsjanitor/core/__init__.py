"""Core services: configuration, paths, theming, logging and classification."""
