"""Core configuration, data sources and infrastructure."""
