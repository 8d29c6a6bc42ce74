"""Game engine, models and the local Flask server."""
