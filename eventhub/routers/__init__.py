"""HTTP routers for the EventHub client application."""
