"""Multi-round player auction engine."""
