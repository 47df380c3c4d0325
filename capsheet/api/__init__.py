"""capsheet REST API."""
