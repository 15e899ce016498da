"""Calendar data pipeline services."""
