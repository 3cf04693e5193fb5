"""Adapter package for external I/O implementations.

Purpose:
    Collect concrete implementations for domain ports (collection REST API,
    in-memory test double, settings file, NiceGUI dialogs) used by use cases
    and presenters.

Dependencies:
    Individual submodules depend on ``requests``, ``nicegui``, filesystem APIs,
    and domain protocol definitions. Import submodules directly so optional UI
    dependencies are only loaded where needed.

Call context:
    Imported by ``schemadmin.app.controller`` (runtime wiring) and by tests.
"""
