"""
Unit tests for sqlhighscores/gui/viewmodels.py (no toolkit dependency).

ViewModels are pure-Python state containers over a real ScoreStore.

Coverage plan
─────────────
parse_score_value    → valid / invalid input
ScoreFormViewModel   → new vs edit, to_score
ScoreListViewModel   → refresh, add, edit, cancel, validation, delete, selection
"""

import pytest


@pytest.fixture
def store(tmp_path):
    from sqlhighscores.store.db import ScoreStore
    s = ScoreStore(db_path=str(tmp_path / "vm.db")).open()
    yield s
    s.close()


@pytest.fixture
def vm(store):
    from sqlhighscores.gui.viewmodels import ScoreListViewModel
    return ScoreListViewModel(store)


# ─────────────────────────────────────────────────────────────────────────────
# 1. parse_score_value
# ─────────────────────────────────────────────────────────────────────────────

class TestParseScoreValue:

    @pytest.mark.parametrize("text, expected", [("10", 10), (" 42 ", 42), ("-7", -7), ("+3", 3)])
    def test_accepts_integers(self, text, expected):
        from sqlhighscores.gui.viewmodels import parse_score_value
        assert parse_score_value(text) == expected

    @pytest.mark.parametrize("text", ["", "   ", "abc", "1.5", "10 points"])
    def test_rejects_non_integers(self, text):
        from sqlhighscores.exceptions import ScoreValidationError
        from sqlhighscores.gui.viewmodels import parse_score_value
        with pytest.raises(ScoreValidationError):
            parse_score_value(text)

    def test_validation_error_is_a_value_error(self):
        from sqlhighscores.gui.viewmodels import parse_score_value
        with pytest.raises(ValueError):
            parse_score_value("x")


# ─────────────────────────────────────────────────────────────────────────────
# 2. ScoreFormViewModel
# ─────────────────────────────────────────────────────────────────────────────

class TestScoreFormViewModel:

    def test_default_form_is_new_and_empty(self):
        from sqlhighscores.gui.viewmodels import ScoreFormViewModel
        form = ScoreFormViewModel()
        assert form.is_new
        assert (form.name_text, form.value_text) == ("", "")

    def test_new_form_builds_transient_score(self):
        from sqlhighscores.gui.viewmodels import ScoreFormViewModel
        form = ScoreFormViewModel(name_text="Alice", value_text="10")
        score = form.to_score()
        assert score.id is None
        assert (score.name, score.value) == ("Alice", 10)

    def test_for_score_prefills_fields(self):
        from sqlhighscores.gui.viewmodels import ScoreFormViewModel
        from sqlhighscores.store.models import Score
        form = ScoreFormViewModel.for_score(Score(id=3, name="Bob", value=20))
        assert not form.is_new
        assert (form.editing_id, form.name_text, form.value_text) == (3, "Bob", "20")
        assert form.to_score().id == 3


# ─────────────────────────────────────────────────────────────────────────────
# 3. ScoreListViewModel
# ─────────────────────────────────────────────────────────────────────────────

class TestScoreListViewModel:

    def test_initial_state_is_empty(self, vm):
        assert vm.scores == []
        assert vm.selected is None
        assert vm.form is None

    def test_refresh_pulls_sorted_scores(self, vm, store):
        store.create("Alice", 10)
        store.create("Bob", 20)
        vm.refresh()
        assert vm.rows == ["Bob 20", "Alice 10"]

    def test_add_flow_creates_and_refreshes(self, vm):
        form = vm.begin_add()
        form.name_text = "Alice"
        form.value_text = "10"
        saved = vm.submit()
        assert saved.is_persisted
        assert vm.form is None
        assert vm.rows == ["Alice 10"]

    def test_edit_flow_updates_in_place(self, vm, store):
        bob = store.create("Bob", 20)
        form = vm.begin_edit(bob.id)
        assert form.value_text == "20"
        form.value_text = "5"
        saved = vm.submit()
        assert saved.id == bob.id
        assert vm.rows == ["Bob 5"]
        assert store.count() == 1

    def test_begin_edit_missing_raises(self, vm):
        from sqlhighscores.exceptions import ScoreNotFoundError
        with pytest.raises(ScoreNotFoundError):
            vm.begin_edit(999)

    def test_invalid_value_keeps_form_open(self, vm, store):
        from sqlhighscores.exceptions import ScoreValidationError
        form = vm.begin_add()
        form.name_text = "Alice"
        form.value_text = "ten"
        with pytest.raises(ScoreValidationError):
            vm.submit()
        assert vm.form is form
        assert "ten" in vm.last_error
        assert store.count() == 0

    def test_cancel_discards_form(self, vm, store):
        form = vm.begin_add()
        form.name_text = "Alice"
        form.value_text = "10"
        vm.cancel()
        assert vm.form is None
        assert store.count() == 0

    def test_submit_without_form_raises(self, vm):
        with pytest.raises(RuntimeError):
            vm.submit()

    def test_delete_refreshes_and_reports(self, vm, store):
        alice = store.create("Alice", 10)
        store.create("Bob", 20)
        assert vm.delete(alice.id) is True
        assert vm.rows == ["Bob 20"]
        assert vm.delete(alice.id) is False

    def test_selection_cleared_when_record_disappears(self, vm, store):
        alice = store.create("Alice", 10)
        vm.refresh()
        vm.select(vm.scores[0])
        vm.delete(alice.id)
        assert vm.selected is None

    def test_selection_kept_when_record_survives(self, vm, store):
        store.create("Alice", 10)
        bob = store.create("Bob", 20)
        vm.refresh()
        vm.select(vm.scores[0])
        vm.begin_add()
        vm.form.name_text = "Carol"
        vm.form.value_text = "1"
        vm.submit()
        assert vm.selected.id == bob.id

    def test_out_of_range_value_keeps_form_open(self, vm, store):
        from sqlhighscores.exceptions import ScoreValidationError
        form = vm.begin_add()
        form.name_text = "Alice"
        form.value_text = "99999999999999999999"
        with pytest.raises(ScoreValidationError):
            vm.submit()
        assert vm.form is form
        assert "between" in vm.last_error
        assert store.count() == 0
