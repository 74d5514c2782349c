"""Feature modules for bot-permissions."""
