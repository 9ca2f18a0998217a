# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from dataclasses import dataclass
from enum import IntEnum
from fsm_common import Run, bad_line, definition_lines, split_rule
from types import MappingProxyType
import logging

# Input-symbol slot of a rule that is consulted only once the input is exhausted.
END = '$'

class StackOp(IntEnum):
    none, push, pop = range(3)

class PDAStatus(IntEnum):
    # Terminal values last: status >= accepted means the run is over.
    ready, running, accepted, rejected = range(4)

@dataclass(frozen=True)
class PDA:
    '''
    A deterministic pushdown automaton with a single active configuration.
    "transitions" maps (state, input symbol or END, stack top) to (next state, StackOp, pushed symbol or None).
    Being a mapping, a definition cannot express a choice between two rules; a genuinely non-deterministic PDA
    would need a set of configurations explored together, which this engine deliberately does not model.
    '''
    states: frozenset
    transitions: MappingProxyType
    start: str
    accepting: frozenset
    stack_start: str = 'Z0'

    def __post_init__(self):
        object.__setattr__(self, 'states', frozenset(self.states))
        object.__setattr__(self, 'transitions', MappingProxyType(dict(self.transitions)))
        object.__setattr__(self, 'accepting', frozenset(self.accepting))

    def new_run(self, input=''):
        return PDARun(self, input)

    def accepts(self, input):
        return PDARun(self, input).run().status == PDAStatus.accepted

    def check(self):
        ''' Raise ValueError if the definition is inconsistent. The engine itself never calls this. '''
        if self.start not in self.states:
            raise ValueError(f'Start state {self.start!r} is not a state')
        if not self.accepting <= self.states:
            raise ValueError(f'Accepting states {sorted(self.accepting - self.states)} are not states')
        for (q, s, top), (t, op, push) in self.transitions.items():
            if q not in self.states or t not in self.states:
                raise ValueError(f'Rule {q} {s} {top} -> {t} mentions an unknown state')
            if (op == StackOp.push) != (push is not None):
                raise ValueError(f'Rule {q} {s} {top} -> {t}: only a push rule names a symbol to push')
        return self

    @classmethod
    def from_text(cls, text):
        start, stack_start, states, accepting, transitions = None, 'Z0', set(), set(), {}
        for lineno, tokens in definition_lines(text, 'pda'):
            match tokens:
                case ['start', q]:
                    start = q
                case ['accept', *qs]:
                    accepting.update(qs)
                case ['states', *qs]:
                    states.update(qs)
                case ['stack', z]:
                    stack_start = z
                case _:
                    lhs, rhs = split_rule(lineno, tokens)
                    match rhs:
                        case [t] | [t, 'none']:
                            op, push = StackOp.none, None
                        case [t, 'pop']:
                            op, push = StackOp.pop, None
                        case [t, 'push', push]:
                            op = StackOp.push
                        case _:
                            raise bad_line(lineno, tokens)
                    if len(lhs) != 3:
                        raise bad_line(lineno, tokens)
                    key = tuple(lhs)
                    if key in transitions:
                        raise ValueError(f'Line {lineno}: rule specified twice: {key}')
                    transitions[key] = (t, op, push)
                    states.update((lhs[0], t))
        if start is None:
            raise ValueError('PDA definition has no start state')
        states.add(start)
        states.update(accepting)
        return cls(states, transitions, start, accepting, stack_start).check()

    def __str__(self):
        lines = ['pda', f'start {self.start}', f'stack {self.stack_start}']
        if self.accepting:
            lines.append('accept ' + ' '.join(sorted(self.accepting)))
        lines.append('states ' + ' '.join(sorted(self.states)))
        for (q, s, top), (t, op, push) in self.transitions.items():
            action = f' push {push}' if op == StackOp.push else ' pop' if op == StackOp.pop else ''
            lines.append(f'{q} {s} {top} -> {t}{action}')
        return '\n'.join(lines)

class PDARun(Run):
    ''' One execution of a PDA. The stack starts holding just the sentinel; "stack" is a read-only copy, top last. '''
    __slots__ = ('pda', 'input', 'state', 'cursor', '_stack', 'status')

    def __init__(self, pda, input=''):
        self.pda = pda
        self.input = input if isinstance(input, str) else tuple(input)
        self.reset()

    def reset(self):
        self.state, self.cursor = self.pda.start, 0
        self._stack = [self.pda.stack_start]
        self.status = PDAStatus.ready
        return self

    @property
    def done(self):
        return self.status >= PDAStatus.accepted

    @property
    def stack(self):
        return tuple(self._stack)

    @property
    def top(self):
        ''' The top of the stack, or None if a rule popped the sentinel. '''
        return self._stack[-1] if self._stack else None

    @property
    def remaining(self):
        return self.input[self.cursor:]

    def step(self):
        if self.done:
            return self
        if self.cursor < len(self.input):
            rule = self.pda.transitions.get((self.state, self.input[self.cursor], self.top))
            if rule is None:
                return self._finish(PDAStatus.rejected, 'no rule for %s', self.input[self.cursor])
            self._apply(rule)
            self.cursor += 1
            self.status = PDAStatus.running
            return self
        rule = self.pda.transitions.get((self.state, END, self.top))
        if rule is None:
            return self._finish(PDAStatus.rejected, 'no end-of-input rule (%s)', END)
        self._apply(rule)
        if self.state in self.pda.accepting:
            return self._finish(PDAStatus.accepted, 'reached %s', self.state)
        return self._finish(PDAStatus.rejected, 'stopped in non-accepting %s', self.state)

    def _apply(self, rule):
        self.state, op, push = rule
        if op == StackOp.push:
            self._stack.append(push)
        elif op == StackOp.pop and self._stack:
            self._stack.pop()

    def _finish(self, status, why, *args):
        logging.getLogger(__name__).debug(f'PDA %s at input position %d: {why}', status.name, self.cursor, *args)
        self.status = status
        return self

    def snapshot(self):
        return self.state, self.cursor, self.stack, self.status

    def __str__(self):
        return f'{self.state} @{self.cursor} [{"".join(map(str, self.remaining))}] stack={" ".join(self.stack)} {self.status.name}'
