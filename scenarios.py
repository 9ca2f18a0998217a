# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from dataclasses import dataclass
from dfa_sim import DFA
from pda_sim import END, PDA, StackOp
from tm_sim import L, R, TM

@dataclass(frozen=True)
class Scenario:
    ''' A machine definition bundled with the input it is demonstrated on. '''
    name: str
    definition: object
    input: object = ''
    head: int = 0
    description: str = ''

    def new_run(self, input=None, head=None):
        input = self.input if input is None else input
        if isinstance(self.definition, TM):
            return self.definition.new_run(input, self.head if head is None else head)
        return self.definition.new_run(input)

ENDS_IN_00 = DFA(
    states={'q0', 'q1', 'q2'},
    alphabet={'0', '1'},
    transitions={('q0', '0'): 'q1', ('q0', '1'): 'q0',
                 ('q1', '0'): 'q2', ('q1', '1'): 'q0',
                 ('q2', '0'): 'q2', ('q2', '1'): 'q0'},
    start='q0',
    accepting={'q2'})

# L = { aⁿbⁿ | n ≥ 0 }: push the a's, pop one per b, accept on the sentinel once the input is used up.
ANBN = PDA(
    states={'q0', 'q1', 'q2'},
    transitions={('q0', 'a', 'Z0'): ('q0', StackOp.push, 'a'),
                 ('q0', 'a', 'a'): ('q0', StackOp.push, 'a'),
                 ('q0', 'b', 'a'): ('q1', StackOp.pop, None),
                 ('q1', 'b', 'a'): ('q1', StackOp.pop, None),
                 ('q0', END, 'Z0'): ('q2', StackOp.none, None),
                 ('q1', END, 'Z0'): ('q2', StackOp.none, None)},
    start='q0',
    accepting={'q2'})

# Run right to the end of a binary string, write '#', run back left and stop on the first digit.
APPEND_MARKER = TM(
    states={'q0', 'q1', 'q2'},
    transitions={('q0', '0'): ('0', R, 'q0'), ('q0', '1'): ('1', R, 'q0'), ('q0', 'B'): ('#', L, 'q1'),
                 ('q1', '0'): ('0', L, 'q1'), ('q1', '1'): ('1', L, 'q1'), ('q1', 'B'): ('B', R, 'q2')},
    start='q0',
    halting={'q2': True})
APPEND_MARKER_TAPE = 'B101BBB'

SCENARIOS = {s.name: s for s in (
    Scenario('ends_in_00', ENDS_IN_00, '10100', description="DFA accepting strings ending in '00'"),
    Scenario('anbn', ANBN, 'aabb', description='Pushdown automaton for { aⁿbⁿ | n ≥ 0 }'),
    Scenario('append_marker', APPEND_MARKER, APPEND_MARKER_TAPE, head=1,
             description="Goes to the end of a binary string, writes '#', and returns to the start"),
)}
