"""File storage collaborator (metadata in SQL, bytes on disk)."""
