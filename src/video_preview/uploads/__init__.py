"""Upload interception for video files."""
