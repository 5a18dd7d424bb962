"""Resolver package for the GraphQL schema.

Resolvers receive their collaborators through ``info.context["services"]``
and the caller's identity through ``info.context["auth"]``.
"""
