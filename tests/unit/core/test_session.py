"""
Unit tests for the session state manager.

Runs against FakeTreeService through the real client, and inspects the
ConsoleDisplay frame a user would see after each action.
"""

import asyncio

import pytest

from arborview.core.session import (
    LOAD_ERROR,
    NO_TREES,
    SELECT_TREE,
    TREE_EMPTY,
    SessionManager,
    SessionState,
    parse_value,
)
from arborview.core.errors import InvalidValue
from arborview.core.types import ChildSide, NodeColor, ResultBanner, TreeVariant, VisualNode


def run_session(service, display, steps, confirm=lambda question: True, state=None):
    """Run ``steps(session)`` inside a session and return the session."""
    async def scenario():
        async with service.client() as client:
            session = SessionManager(client, display, confirm, state=state)
            await steps(session)
            return session
    return asyncio.run(scenario())


def highlighted(display):
    return [n.value for n in display.visualization.walk() if n.is_highlighted]


class TestParseValue:
    @pytest.mark.parametrize("raw, expected", [("5", 5), (" -12 ", -12), ("+3", 3), (7, 7)])
    def test_accepts_integers(self, raw, expected):
        assert parse_value(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", "12abc", "1.5", "1e3", "\u0661\u0662", "9" * 5000, None, True, 2.0])
    def test_rejects_everything_else(self, raw):
        with pytest.raises(InvalidValue):
            parse_value(raw)


class TestSessionState:
    def test_selecting_another_tree_drops_banner(self):
        state = SessionState(selected_tree_id="1", active_banner=ResultBanner(found=True, value=1))
        state.select("2")
        assert state.active_banner is None

    def test_reselecting_same_tree_keeps_banner(self):
        banner = ResultBanner(found=True, value=1)
        state = SessionState(selected_tree_id="1", active_banner=banner)
        state.select("1")
        assert state.active_banner is banner


class TestScenario:
    def test_create_insert_renders_server_shape(self, service, display):
        async def steps(session):
            await session.create_tree(TreeVariant.BINARY)
            for value in ("5", "3", "8"):
                await session.insert(value)

        session = run_session(service, display, steps)

        root = display.visualization
        assert isinstance(root, VisualNode)
        assert root.value == 5
        assert root.child(ChildSide.LEFT).value == 3
        assert root.child(ChildSide.RIGHT).value == 8
        assert session.state.selected_tree_id == "1"
        assert display.selected_id == "1"

    def test_search_found_and_not_found(self, service, display):
        tree_id = service.add_tree("binary", [5, 3, 8])

        async def found(session):
            await session.list_trees()
            await session.select_tree(tree_id)
            await session.search("3")

        session = run_session(service, display, found)
        assert display.banner.message == "Found 3 in the tree!"
        assert highlighted(display) == [3]

        async def missing(session):
            await session.search("99")

        run_session(service, display, missing, state=session.state)
        assert display.banner.message == "Value 99 not found in the tree."
        assert highlighted(display) == []

    def test_second_search_replaces_banner(self, service, display):
        tree_id = service.add_tree("binary", [5, 3])

        async def steps(session):
            await session.select_tree(tree_id)
            await session.search("5")
            await session.search("4")

        session = run_session(service, display, steps)

        assert session.state.active_banner == ResultBanner(found=False, value=4)
        assert display.banner == session.state.active_banner
        display.render()
        output = display.console.file.getvalue()
        assert output.count("in the tree") == 1

    def test_search_reports_tree_modification(self, service, display):
        tree_id = service.add_tree("splay", [5, 3])

        async def steps(session):
            await session.list_trees()
            await session.select_tree(tree_id)
            await session.search(3)

        run_session(service, display, steps)
        assert display.banner.message == "Found 3 in the tree! (Tree structure updated)"

    def test_confirmed_delete_resets_everything(self, service, display):
        tree_id = service.add_tree("binary", [1])

        async def steps(session):
            await session.list_trees()
            await session.select_tree(tree_id)
            await session.search("1")
            await session.delete_tree()

        session = run_session(service, display, steps)

        assert session.state.selected_tree_id is None
        assert session.state.active_banner is None
        assert display.selected_id is None
        assert display.banner is None
        assert display.visualization == SELECT_TREE
        assert display.trees == []
        display.render()
        output = display.console.file.getvalue()
        assert "Current tree: None" in output
        assert NO_TREES in output


class TestFreshFetch:
    @pytest.mark.parametrize("operation", ["insert", "remove", "search"])
    def test_fetch_follows_every_mutation(self, service, display, operation):
        tree_id = service.add_tree("binary", [4])

        async def steps(session):
            await session.select_tree(tree_id)
            service.requests.clear()
            await getattr(session, operation)("4")

        run_session(service, display, steps)

        assert service.requests[0] == ("POST", f"/trees/{tree_id}/{operation}")
        assert service.requests[-1] == ("GET", f"/trees/{tree_id}")

    def test_view_reflects_server_not_local_guess(self, service, display):
        tree_id = service.add_tree("binary", [4])

        async def steps(session):
            await session.select_tree(tree_id)
            # Someone else changes the tree between our actions
            service.trees[tree_id]["keys"].append(9)
            await session.insert("2")

        run_session(service, display, steps)
        assert sorted(n.value for n in display.visualization.walk()) == [2, 4, 9]


class TestValidation:
    @pytest.mark.parametrize("operation", ["insert", "remove", "search"])
    def test_no_selection_warns_without_request(self, service, display, operation):
        async def steps(session):
            assert await getattr(session, operation)("5") is False

        run_session(service, display, steps)
        assert display.warnings == ["Please select a tree first"]
        assert service.requests == []

    @pytest.mark.parametrize("operation", ["insert", "remove", "search"])
    def test_bad_number_warns_without_request(self, service, display, operation):
        tree_id = service.add_tree("binary")

        async def steps(session):
            await session.select_tree(tree_id)
            service.requests.clear()
            assert await getattr(session, operation)("seven") is False

        run_session(service, display, steps)
        assert display.warnings == ["Please enter a valid number"]
        assert service.requests == []

    @pytest.mark.parametrize("operation", ["insert", "remove", "search"])
    def test_oversized_number_warns_without_request(self, service, display, operation):
        tree_id = service.add_tree("binary", [5])

        async def steps(session):
            await session.select_tree(tree_id)
            service.requests.clear()
            assert await getattr(session, operation)("9" * 5000) is False

        run_session(service, display, steps)
        assert display.warnings == ["Please enter a valid number"]
        assert service.requests == []
        assert display.visualization.value == 5

    def test_delete_without_selection_warns(self, service, display):
        async def steps(session):
            assert await session.delete_tree() is False

        run_session(service, display, steps)
        assert display.warnings == ["Please select a tree first"]
        assert service.requests == []

    def test_declined_delete_sends_nothing(self, service, display):
        tree_id = service.add_tree("binary")

        async def steps(session):
            await session.select_tree(tree_id)
            assert await session.delete_tree() is False

        session = run_session(service, display, steps, confirm=lambda question: False)
        assert ("DELETE", f"/trees/{tree_id}") not in service.requests
        assert session.state.selected_tree_id == tree_id


class TestFailures:
    def test_unknown_tree_selects_optimistically_and_shows_error(self, service, display):
        async def steps(session):
            assert await session.select_tree("404") is False

        session = run_session(service, display, steps)
        assert session.state.selected_tree_id == "404"
        assert display.visualization == LOAD_ERROR

    def test_empty_tree_placeholder(self, service, display):
        tree_id = service.add_tree("binary")

        async def steps(session):
            await session.select_tree(tree_id)

        run_session(service, display, steps)
        assert display.visualization == TREE_EMPTY

    def test_malformed_snapshot_is_never_partially_rendered(self, service, display):
        tree_id = service.add_tree("binary", [1])
        service.snapshot_overrides[tree_id] = {"nodes": [{"key": 1, "left": 5, "right": -1}]}

        async def steps(session):
            assert await session.select_tree(tree_id) is False

        run_session(service, display, steps)
        assert display.visualization == LOAD_ERROR

    def test_list_failure_keeps_previous_list(self, service, display):
        service.add_tree("binary")

        async def steps(session):
            await session.list_trees()
            service.add_tree("avl")
            service.failing.add(("GET", "/trees"))
            assert await session.list_trees() is False

        session = run_session(service, display, steps)
        assert [t.id for t in session.state.trees] == ["1"]
        assert [t.id for t in display.trees] == ["1"]

    def test_create_failure_keeps_selection(self, service, display):
        tree_id = service.add_tree("binary")

        async def steps(session):
            await session.select_tree(tree_id)
            service.failing.add(("POST", "/trees"))
            assert await session.create_tree(TreeVariant.AVL) is False

        session = run_session(service, display, steps)
        assert session.state.selected_tree_id == tree_id

    def test_mutation_failure_keeps_previous_view(self, service, display):
        tree_id = service.add_tree("binary", [1])

        async def steps(session):
            await session.select_tree(tree_id)
            service.failing.add(("POST", f"/trees/{tree_id}/insert"))
            assert await session.insert("2") is False

        run_session(service, display, steps)
        assert display.visualization.value == 1
        assert display.visualization.size == 1

    def test_render_fetch_failure_shows_error_placeholder(self, service, display):
        tree_id = service.add_tree("binary", [1])

        async def steps(session):
            await session.select_tree(tree_id)
            service.failing.add(("GET", f"/trees/{tree_id}"))
            assert await session.insert("2") is False

        run_session(service, display, steps)
        assert display.visualization == LOAD_ERROR


class TestVariants:
    def test_red_black_colors_from_list_variant(self, service, display):
        tree_id = service.add_tree("red_black", [5, 3])

        async def steps(session):
            await session.list_trees()
            await session.select_tree(tree_id)

        run_session(service, display, steps)
        root = display.visualization
        assert root.color == NodeColor.BLACK
        assert root.children[0].color == NodeColor.RED

    def test_red_black_from_snapshot_type_when_list_not_loaded(self, service, display):
        tree_id = service.add_tree("red_black", [5])

        async def steps(session):
            await session.select_tree(tree_id)

        run_session(service, display, steps)
        assert display.visualization.color == NodeColor.BLACK

    def test_binary_list_variant_suppresses_colors(self, service, display):
        tree_id = service.add_tree("binary", [5])
        service.snapshot_overrides[tree_id] = {"nodes": [{"key": 5, "left": -1, "right": -1, "color": "red"}]}

        async def steps(session):
            await session.list_trees()
            await session.select_tree(tree_id)

        run_session(service, display, steps)
        assert display.visualization.color is None

    def test_selecting_new_tree_clears_banner_and_highlight(self, service, display):
        first = service.add_tree("binary", [1])
        second = service.add_tree("binary", [1])

        async def steps(session):
            await session.select_tree(first)
            await session.search("1")
            await session.select_tree(second)

        session = run_session(service, display, steps)
        assert session.state.active_banner is None
        assert display.banner is None
        assert highlighted(display) == []
