"""
Core utilities shared across the blog API.

This package hosts configuration, the error taxonomy and logging setup.
Repositories, services and routers depend on these primitives instead of
reading os.environ or defining their own exception types.
"""
