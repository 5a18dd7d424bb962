"""
Types for data proxied from the external REST service
"""

import strawberry


@strawberry.type(name="PersonREST")
class PersonREST:
    name: str
    id: strawberry.ID
    email: str
