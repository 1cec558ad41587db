"""
High-level use cases for the blog API.

Each service orchestrates one typed repository and adds the entity's rules
(name uniqueness, existence checks, cascade delete). Routers call these
services instead of touching a storage backend directly.
"""
