"""Video preview service.

Intercepts uploads and posts of a chat platform, validates video attachments
and derives JPEG previews with ffmpeg on a bounded background worker pool.
"""
