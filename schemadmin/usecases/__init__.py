"""Use-case layer wrapping data-access ports for the presenters.

Each module exposes one awaitable ``execute`` over a blocking port, translating
adapter failures into ``UseCaseError`` so presenters handle a single error type.
"""
