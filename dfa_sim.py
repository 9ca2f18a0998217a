# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from dataclasses import dataclass
from fsm_common import Run, bad_line, definition_lines, split_rule
from types import MappingProxyType
import logging

class _Trap(str):
    __slots__ = ()

# Absorbing, non-accepting state entered on any undefined transition. Prints as 'Trap' but is its own object,
# so a user state of that name never makes a trapped run accept.
TRAP = _Trap('Trap')

@dataclass(frozen=True)
class DFA:
    '''
    A deterministic finite automaton. "transitions" maps (state, symbol) to a state and may be partial:
    a missing entry behaves as an edge into the implicit TRAP state.
    '''
    states: frozenset
    alphabet: frozenset
    transitions: MappingProxyType
    start: str
    accepting: frozenset

    def __post_init__(self):
        object.__setattr__(self, 'states', frozenset(self.states))
        object.__setattr__(self, 'alphabet', frozenset(self.alphabet))
        object.__setattr__(self, 'transitions', MappingProxyType(dict(self.transitions)))
        object.__setattr__(self, 'accepting', frozenset(self.accepting))

    def new_run(self, input=''):
        return DFARun(self, input)

    def accepts(self, input):
        return DFARun(self, input).run().accepted

    def check(self):
        ''' Raise ValueError if the definition is inconsistent. The engine itself never calls this. '''
        if self.start not in self.states:
            raise ValueError(f'Start state {self.start!r} is not a state')
        if not self.accepting <= self.states:
            raise ValueError(f'Accepting states {sorted(self.accepting - self.states)} are not states')
        if TRAP in self.states:
            raise ValueError(f'{TRAP!r} is reserved for the implicit trap state')
        for (q, s), t in self.transitions.items():
            if q not in self.states or t not in self.states:
                raise ValueError(f'Transition {q} {s} -> {t} mentions an unknown state')
            if s not in self.alphabet:
                raise ValueError(f'Transition {q} {s} -> {t} reads a symbol outside the alphabet')
        return self

    def to_automata(self):
        ''' Return an equivalent automata-lib DFA, completed with an explicit trap state. '''
        from automata.fa import dfa
        states = self.states | {TRAP}
        transitions = {q: {s: self.transitions.get((q, s), TRAP) for s in self.alphabet} for q in states}
        return dfa.DFA(states=set(states), input_symbols=set(self.alphabet), transitions=transitions,
                       initial_state=self.start, final_states=set(self.accepting))

    @classmethod
    def from_text(cls, text):
        start, states, alphabet, accepting, transitions = None, set(), set(), set(), {}
        for lineno, tokens in definition_lines(text, 'dfa'):
            match tokens:
                case ['start', q]:
                    start = q
                case ['accept', *qs]:
                    accepting.update(qs)
                case ['states', *qs]:
                    states.update(qs)
                case ['alphabet', *ss]:
                    alphabet.update(ss)
                case _:
                    match split_rule(lineno, tokens):
                        case [q, s], [t]:
                            if (q, s) in transitions:
                                raise ValueError(f'Line {lineno}: transition specified twice: {(q, s)}')
                            transitions[q, s] = t
                            states.update((q, t))
                            alphabet.add(s)
                        case _:
                            raise bad_line(lineno, tokens)
        if start is None:
            raise ValueError('DFA definition has no start state')
        states.add(start)
        states.update(accepting)
        return cls(states, alphabet, transitions, start, accepting).check()

    def __str__(self):
        lines = ['dfa', f'start {self.start}']
        if self.accepting:
            lines.append('accept ' + ' '.join(sorted(self.accepting)))
        lines.append('states ' + ' '.join(sorted(self.states)))
        lines.append('alphabet ' + ' '.join(sorted(self.alphabet)))
        lines.extend(f'{q} {s} -> {t}' for (q, s), t in self.transitions.items())
        return '\n'.join(lines)

class DFARun(Run):
    ''' One execution of a DFA over an input. accepted/rejected are derived on every read, never stored. '''
    __slots__ = ('dfa', 'input', 'state', 'cursor')

    def __init__(self, dfa, input=''):
        self.dfa = dfa
        self.input = input if isinstance(input, str) else tuple(input)
        self.reset()

    def reset(self):
        self.state, self.cursor = self.dfa.start, 0
        return self

    @property
    def done(self):
        return self.cursor >= len(self.input)

    @property
    def accepted(self):
        return self.done and self.state is not TRAP and self.state in self.dfa.accepting

    @property
    def rejected(self):
        return self.done and not self.accepted

    @property
    def remaining(self):
        return self.input[self.cursor:]

    def step(self):
        # Stepping at the end of the input is a no-op.
        if self.done:
            return self
        symbol = self.input[self.cursor]
        target = self.dfa.transitions.get((self.state, symbol))
        if target is None:
            logging.getLogger(__name__).debug('No transition from %s on %r: trapped', self.state, symbol)
            self.state, self.cursor = TRAP, len(self.input)
        else:
            self.state = target
            self.cursor += 1
        return self

    def snapshot(self):
        return self.state, self.cursor

    def __str__(self):
        status = 'accepted' if self.accepted else 'rejected' if self.rejected else 'running'
        return f'{self.state} @{self.cursor} [{"".join(map(str, self.remaining))}] {status}'
