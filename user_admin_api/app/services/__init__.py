"""
Service layer abstraction.

Services perform the data operations the controllers delegate to.
They raise on failure and never build HTTP responses themselves.
"""
