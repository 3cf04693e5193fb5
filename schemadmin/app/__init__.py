"""Presenter and runtime wiring package for the admin UI."""
