"""
repositories/ - Data Access Layer
==================================
The repository holds every SQL statement run against the "Users" table
and turns rows into User domain objects.
"""
