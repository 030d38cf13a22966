"""
Routers module - HTTP endpoint handlers organized by feature.

- booking: GET / (login page or event list) and POST / (book a room)
- auth: OAuth callback and logout
"""
