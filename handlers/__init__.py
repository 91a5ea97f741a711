"""
handlers/ - Presentation Layer
================================
Console handlers. Each handler reads input from the user,
delegates to the appropriate Service, and prints the response.
No business logic lives here.
"""
