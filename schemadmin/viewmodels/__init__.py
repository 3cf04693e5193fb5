"""ViewModel package for UI state.

Call context:
    Presenters in ``schemadmin/app`` own instances of these state objects and
    mutate them; views only read them.

Dependencies:
    Modules in this package depend on domain types only. I/O adapters and
    use-case orchestration remain outside.
"""

from .form_state import FormState
from .list_state import ListState

__all__ = ["FormState", "ListState"]
