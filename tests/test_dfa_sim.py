import itertools

import pytest

from dfa_sim import DFA, TRAP
from scenarios import ENDS_IN_00


def all_binary_strings(max_len):
    for n in range(max_len + 1):
        for bits in itertools.product('01', repeat=n):
            yield ''.join(bits)


def test_ends_in_00_accepts_exactly_strings_ending_in_00():
    for text in all_binary_strings(7):
        run = ENDS_IN_00.new_run(text).run()
        assert run.accepted == text.endswith('00'), text
        assert run.rejected != run.accepted


def test_step_walks_the_transition_table():
    run = ENDS_IN_00.new_run('100')
    assert run.snapshot() == ('q0', 0)
    assert [run.step().snapshot() for _ in range(3)] == [('q0', 1), ('q1', 2), ('q2', 3)]
    assert run.accepted


def test_verdicts_only_at_end_of_input():
    run = ENDS_IN_00.new_run('00')
    run.step()
    assert not run.accepted and not run.rejected
    assert run.remaining == '0'


def test_step_past_end_is_a_noop():
    run = ENDS_IN_00.new_run('10').run()
    before = run.snapshot()
    run.step()
    run.step()
    assert run.snapshot() == before == ('q1', 2)


def test_empty_input_is_judged_by_the_start_state():
    run = ENDS_IN_00.new_run('')
    assert run.done and run.rejected
    assert list(run.trace()) == []


def test_unknown_symbol_traps_and_rejects():
    run = ENDS_IN_00.new_run('0x00').run()
    assert run.state == TRAP
    assert run.cursor == 4
    assert run.rejected and not run.accepted


def test_partial_dfa_traps_on_missing_transition():
    only_as = DFA({'s'}, {'a', 'b'}, {('s', 'a'): 's'}, 's', {'s'})
    assert only_as.accepts('aaa')
    assert not only_as.accepts('aba')


def test_reset_restores_construction_state():
    run = ENDS_IN_00.new_run('1100')
    fresh = run.snapshot()
    run.run()
    assert run.reset().snapshot() == fresh


def test_runs_are_deterministic():
    first = list(ENDS_IN_00.new_run('1001100').trace())
    second = list(ENDS_IN_00.new_run('1001100').trace())
    assert first == second
    assert len(first) == 7


def test_definitions_are_read_only():
    with pytest.raises(TypeError):
        ENDS_IN_00.transitions['q0', '0'] = 'q2'


def test_check_rejects_unknown_states():
    with pytest.raises(ValueError, match='unknown state'):
        DFA({'q0'}, {'0'}, {('q0', '0'): 'q9'}, 'q0', set()).check()
    with pytest.raises(ValueError, match='Start state'):
        DFA({'q0'}, {'0'}, {}, 'q1', set()).check()


def test_automata_lib_export_agrees():
    exported = ENDS_IN_00.to_automata()
    for text in all_binary_strings(6):
        assert exported.accepts_input(text) == ENDS_IN_00.accepts(text)
    assert len(exported.minify().states) == 3


def test_user_state_named_trap_does_not_make_trapped_runs_accept():
    dfa = DFA({'q', 'Trap'}, {'a', 'b'}, {('q', 'a'): 'q'}, 'q', {'Trap'})
    run = dfa.new_run('ab').run()
    assert run.state is TRAP and str(run.state) == 'Trap'
    assert run.rejected and not run.accepted
    assert not dfa.accepts('ab')
