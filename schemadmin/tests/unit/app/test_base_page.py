from __future__ import annotations

from schemadmin.app.base_page import DEFAULT_ERROR_MESSAGE, error_message
from schemadmin.domain.ports import ConfirmRequest, Decision, Severity, UseCaseError
from schemadmin.tests.unit.app.helpers import make_page, run


def test_error_message_normalization() -> None:
    assert error_message("  disk full ") == "disk full"
    assert error_message(UseCaseError("X", "from use case")) == "from use case"
    assert error_message(RuntimeError("plain")) == "plain"
    assert error_message(None) == DEFAULT_ERROR_MESSAGE
    assert error_message("") == DEFAULT_ERROR_MESSAGE


def test_show_error_opens_acknowledge_only_dialog() -> None:
    page = make_page()

    run(page.show_error(UseCaseError("NOT_FOUND", "gone")))

    request = page.dialogs.requests[0]
    assert request == ConfirmRequest(
        message="gone", title="Error", confirm_label="OK", cancel_label=None, severity=Severity.DANGER
    )


def test_confirm_dialog_maps_decision_to_bool() -> None:
    page = make_page(answers=[True, False])

    assert run(page.show_confirm_dialog("Proceed?")) is True
    assert run(page.show_confirm_dialog("Proceed?")) is False
    assert run(page.request_confirmation(ConfirmRequest(message="again"))) is Decision.CONFIRMED


def test_loading_flags_and_inline_keys() -> None:
    page = make_page()
    page.set_loading(True)
    page.show_inline_loading("delete")
    page.show_inline_loading("delete")

    assert page.loading is True
    assert page.is_inline_loading("delete")

    page.hide_inline_loading("delete")
    page.hide_inline_loading("missing")
    assert not page.is_inline_loading("delete")


def test_toasts_and_navigation_are_forwarded() -> None:
    page = make_page()
    page.show_toast("hello")
    page.show_toast("careful", Severity.WARNING)
    page.navigate("/collections/articles")
    page.guard_unload(True)

    assert page.toasts.messages == [("hello", Severity.INFO), ("careful", Severity.WARNING)]
    assert page.navigator.paths == ["/collections/articles"]
    assert page.navigator.guards == [True]
