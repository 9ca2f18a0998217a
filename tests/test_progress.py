import pytest

from progress import UNITS, ProgressStore


def test_mark_and_query(tmp_path):
    store = ProgressStore(tmp_path / 'done.txt')
    assert not store.is_completed('Unit 1: Finite Automata_quiz')
    store.mark_completed('Unit 1: Finite Automata_quiz')
    store.mark_completed('Unit 1: Finite Automata_quiz')
    assert store.is_completed('Unit 1: Finite Automata_quiz')
    assert len(store.completed) == 1


def test_session_saves_and_reloads(tmp_path):
    path = tmp_path / 'done.txt'
    with ProgressStore(path) as store:
        assert store.completed == set()
        store.mark_completed('Unit 4: Turing Machines_simulator')
        store.mark_completed('Unit 2: Regular Languages_theory_0')
    with ProgressStore(path) as store:
        assert store.completed == {'Unit 4: Turing Machines_simulator', 'Unit 2: Regular Languages_theory_0'}


def test_unit_progress_counts_theory_examples_and_extras(tmp_path):
    store = ProgressStore(tmp_path / 'done.txt')
    title = UNITS[0]
    for item in (f'{title}_theory_0', f'{title}_example_1', f'{title}_quiz', 'Unit 9_quiz'):
        store.mark_completed(item)
    assert store.unit_progress(title, theory=2, examples=2) == pytest.approx(3 / 7)
    assert store.unit_progress(title) == pytest.approx(1 / 3)


def test_total_progress_averages_units(tmp_path):
    store = ProgressStore(tmp_path / 'done.txt')
    for extra in ('quiz', 'simulator', 'flashcards'):
        store.mark_completed(f'{UNITS[0]}_{extra}')
    assert store.total_progress() == pytest.approx(1 / len(UNITS))
    assert store.total_progress({UNITS[0]: (1, 0)}) == pytest.approx(0.75 / len(UNITS))


def test_content_items_count_only_when_sizes_are_given(tmp_path):
    store = ProgressStore(tmp_path / 'done.txt')
    store.mark_completed(f'{UNITS[1]}_theory_0')
    assert store.total_progress() == 0
    assert store.total_progress({UNITS[1]: (1, 0)}) == pytest.approx(0.25 / len(UNITS))
