"""
handlers/ - Presentation Layer
================================
HTTP handlers. Each handler receives a request, delegates to the
appropriate Repository, and translates the result into an HTTP response.
No business logic lives here.
"""
