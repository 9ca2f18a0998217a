import pytest

from pda_sim import END, PDA, PDAStatus, StackOp
from scenarios import ANBN


def test_aabb_is_accepted():
    run = ANBN.new_run('aabb').run()
    assert run.status == PDAStatus.accepted
    assert run.state == 'q2'
    assert run.stack == ('Z0',)


def test_out_of_order_input_is_rejected():
    for text in ('bbaa', 'aba', 'abab', 'aab', 'abb', 'b', 'a'):
        assert ANBN.new_run(text).run().status == PDAStatus.rejected, text


def test_empty_input_accepted_on_first_step():
    run = ANBN.new_run('')
    assert run.status == PDAStatus.ready
    run.step()
    assert run.status == PDAStatus.accepted


def test_stack_depth_counts_leading_as():
    run = ANBN.new_run('aaaabbbb')
    for k in range(1, 5):
        run.step()
        assert len(run.stack) == k + 1
        assert run.top == 'a'
    assert run.status == PDAStatus.running


def test_crash_mid_input_keeps_configuration():
    run = ANBN.new_run('abba')
    run.step().step()
    before = run.snapshot()[:3]
    run.step()
    assert run.status == PDAStatus.rejected
    assert run.snapshot()[:3] == before


def test_step_after_terminal_is_a_noop():
    run = ANBN.new_run('ab').run()
    before = run.snapshot()
    run.step()
    assert run.snapshot() == before


def test_trace_ends_on_terminal_status():
    statuses = [snapshot[-1] for snapshot in ANBN.new_run('ab').trace()]
    assert statuses == [PDAStatus.running, PDAStatus.running, PDAStatus.accepted]


def test_end_rule_into_non_accepting_state_rejects():
    pda = PDA({'p', 'r'}, {('p', END, 'Z0'): ('r', StackOp.none, None)}, 'p', set())
    assert pda.new_run('').run().status == PDAStatus.rejected


def test_popping_the_sentinel_leaves_nothing_to_match():
    pda = PDA({'p'}, {('p', 'x', 'Z0'): ('p', StackOp.pop, None), ('p', END, 'Z0'): ('p', StackOp.none, None)}, 'p', {'p'})
    run = pda.new_run('xx')
    run.step()
    assert run.stack == () and run.top is None
    run.step()
    assert run.status == PDAStatus.rejected


def test_reset_and_determinism():
    run = ANBN.new_run('aaabbb')
    fresh = run.snapshot()
    first = list(run.trace())
    assert run.reset().snapshot() == fresh
    assert list(run.trace()) == first


def test_stack_is_a_read_only_copy():
    run = ANBN.new_run('aabb')
    run.step()
    stack = run.stack
    assert stack == ('Z0', 'a')
    with pytest.raises(AttributeError):
        stack.append('a')
    assert run.run().status == PDAStatus.accepted


def test_scenario_rules_are_read_only():
    with pytest.raises(TypeError):
        ANBN.transitions[('q0', 'b', 'Z0')] = ('q2', StackOp.none, None)
    assert ('q0', 'b', 'Z0') not in ANBN.transitions
