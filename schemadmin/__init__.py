"""Schema-driven admin UI presenter layer."""
