from __future__ import annotations

import asyncio

from schemadmin.app.list_presenter import ListPresenter
from schemadmin.domain.ports import UseCaseError
from schemadmin.tests.unit.app.helpers import (
    FindRecorder,
    ManualTimers,
    article_registry,
    make_page,
    rows,
    run,
    use_case,
)


def _presenter(find, count=None, *, limit=2):
    return ListPresenter(
        page=make_page(),
        schemas=article_registry(),
        find_objects=find,
        count_objects=count or use_case(return_value=0),
        delete_object=use_case(),
        limit=limit,
        scheduler=ManualTimers().scheduler(),
    )


def _ids(presenter):
    return [obj["id"] for obj in presenter.state.objects]


def test_first_page_replaces_and_next_pages_append() -> None:
    find = FindRecorder([rows("a", "b"), rows("c")])
    presenter = _presenter(find, use_case(return_value=3))

    async def scenario():
        await presenter.initialize("articles")
        assert _ids(presenter) == ["a", "b"]
        assert presenter.has_more is True
        await presenter.load_more()

    run(scenario())

    assert _ids(presenter) == ["a", "b", "c"]
    assert presenter.state.count == 3
    assert presenter.state.current == 2
    assert presenter.has_more is False
    first, second = find.calls[0][1], find.calls[1][1]
    assert (first.skip, first.limit) == (0, 2)
    assert (second.skip, second.limit) == (2, 2)
    assert second.sort == {"createdAt": -1}


def test_load_more_is_ignored_while_a_load_is_in_flight() -> None:
    find = FindRecorder([rows("a", "b"), rows("c", "d")])
    presenter = _presenter(find, use_case(return_value=10))

    async def scenario():
        await presenter.initialize("articles")
        find.gate = asyncio.Event()
        pending = asyncio.get_running_loop().create_task(presenter.load_more())
        await asyncio.sleep(0)
        assert presenter.state.loading is True
        assert presenter.page.loading is True
        await presenter.load_more()
        find.gate.set()
        await pending

    run(scenario())

    assert len(find.calls) == 2
    assert presenter.state.current == 2
    assert _ids(presenter) == ["a", "b", "c", "d"]
    assert presenter.state.loading is False
    assert presenter.page.loading is False


def test_count_failure_keeps_rows_and_reports_error() -> None:
    find = FindRecorder([rows("a")])
    count = use_case(side_effect=UseCaseError("COUNT_FAILED", "count unavailable"))
    presenter = _presenter(find, count)

    run(presenter.initialize("articles"))

    assert _ids(presenter) == ["a"]
    assert presenter.state.count == 0
    assert presenter.state.loading is False
    assert presenter.page.dialogs.errors == ["count unavailable"]


def test_find_failure_shows_error_and_clears_loading() -> None:
    find = use_case(side_effect=UseCaseError("REQUEST_TIMEOUT", "Request timed out. Check connection."))
    count = use_case(return_value=0)
    presenter = _presenter(find, count)

    run(presenter.initialize("articles"))

    assert presenter.state.objects == []
    assert presenter.state.loading is False
    assert presenter.page.loading is False
    count.execute.assert_not_awaited()
    assert presenter.page.dialogs.errors == ["Request timed out. Check connection."]
    assert presenter.page.dialogs.requests[0].title == "Error"


def test_reset_keeps_query_inputs() -> None:
    presenter = _presenter(FindRecorder([rows("a", "b")]), use_case(return_value=5))

    async def scenario():
        await presenter.initialize("articles")
        presenter.select_all()
        presenter.state.search = "foo"
        presenter.state.filters = {"views": 3}
        presenter.state.current = 4
        presenter.reset()

    run(scenario())

    state = presenter.state
    assert (state.current, state.objects, state.selected) == (1, [], [])
    assert state.search == "foo"
    assert state.filters == {"views": 3}
    assert state.sort == {"createdAt": -1}


def test_results_arriving_after_dispose_are_discarded() -> None:
    gate = asyncio.Event()
    find = FindRecorder([rows("a")], gate=gate)
    count = use_case(return_value=1)
    presenter = _presenter(find, count)

    async def scenario():
        pending = asyncio.get_running_loop().create_task(presenter.initialize("articles"))
        await asyncio.sleep(0)
        presenter.dispose()
        gate.set()
        await pending

    run(scenario())

    assert presenter.state.objects == []
    count.execute.assert_not_awaited()
    assert presenter.page.dialogs.requests == []


def test_reinitialize_for_another_collection_drops_old_results() -> None:
    gate = asyncio.Event()
    find = FindRecorder([rows("old"), rows("new")], gate=gate)
    presenter = _presenter(find, use_case(return_value=1))

    async def scenario():
        first = asyncio.get_running_loop().create_task(presenter.initialize("articles"))
        await asyncio.sleep(0)
        second = asyncio.get_running_loop().create_task(presenter.initialize("products"))
        await asyncio.sleep(0)
        gate.set()
        await asyncio.gather(first, second)

    run(scenario())

    assert presenter.collection == "products"
    assert _ids(presenter) == ["new"]
    assert [call[0] for call in find.calls] == ["articles", "products"]


def test_apply_filters_and_sort_reload_from_page_one() -> None:
    find = FindRecorder([rows("a", "b"), rows("c"), rows("d"), rows("e")])
    presenter = _presenter(find, use_case(return_value=9))

    async def scenario():
        await presenter.initialize("articles")
        await presenter.load_more()
        await presenter.apply_filters({"views": {"$gt": 10}})
        await presenter.apply_sort({"title": 1})

    run(scenario())

    filtered, sorted_query = find.calls[2][1], find.calls[3][1]
    assert filtered.skip == 0
    assert filtered.where == {"views": {"$gt": 10}}
    assert sorted_query.sort == {"title": 1}
    assert _ids(presenter) == ["e"]


def test_failed_load_more_is_retried_for_the_same_page() -> None:
    find = use_case(
        side_effect=[
            rows("a", "b"),
            UseCaseError("REQUEST_TIMEOUT", "Request timed out. Check connection."),
            rows("c", "d"),
        ]
    )
    presenter = _presenter(find, use_case(return_value=10))

    async def scenario():
        await presenter.initialize("articles")
        await presenter.load_more()
        assert presenter.state.current == 1
        assert _ids(presenter) == ["a", "b"]
        await presenter.load_more()

    run(scenario())

    skips = [c.args[1].skip for c in find.execute.await_args_list]
    assert skips == [0, 2, 2]
    assert presenter.state.current == 2
    assert _ids(presenter) == ["a", "b", "c", "d"]
    assert presenter.page.dialogs.errors == ["Request timed out. Check connection."]
