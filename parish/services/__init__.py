"""
Use cases for the parish site.

Service modules sit between the routers and the JSON repository: they apply
the content rules (defaults, ordering, publication flags) and raise
``parish.services.errors`` exceptions that routers turn into HTTP responses.
Routers should call these services instead of touching the data files.
"""
