"""Domain services used by the API routers.

Services hold the logic that does not belong in a request handler: calls to
external collaborators (Gemini, S3, remote images) and pure helpers for
hashtags, timetables and study-timer arithmetic.
"""
