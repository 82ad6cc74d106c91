"""Shadow-file storage for marked documents."""
