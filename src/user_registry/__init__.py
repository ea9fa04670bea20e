"""User Registry package.

User identity and session authorization: registration, credential and token
authentication, and owner-only profile edits. Organized like a feature module
(users) with a thin Flask controller layer over service/repository layers.
"""
