# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from dataclasses import dataclass
from enum import IntEnum
from fsm_common import Run, bad_line, definition_lines, split_rule
from types import MappingProxyType
import logging
import re

R, L = range(2)
# Halting state of machines read from the standard text format.
HALT = 'Z'

class TMStatus(IntEnum):
    running, halted_accept, halted_reject = range(3)

@dataclass(frozen=True)
class TM:
    '''
    A single-tape Turing machine. "transitions" maps (state, read) to (write, direction, next state),
    with directions R or L; "halting" maps each halting state to True (accept) or False (reject).
    '''
    states: frozenset
    transitions: MappingProxyType
    start: str
    halting: MappingProxyType
    blank: str = 'B'

    def __post_init__(self):
        object.__setattr__(self, 'states', frozenset(self.states))
        object.__setattr__(self, 'transitions', MappingProxyType(dict(self.transitions)))
        object.__setattr__(self, 'halting', MappingProxyType(dict(self.halting)))

    def new_run(self, tape=(), head=0):
        return TMRun(self, tape, head)

    def transition(self, state, read):
        ''' Return (write, direction, to_state), or None if the machine has no rule. '''
        return self.transitions.get((state, read))

    def transitions_list(self):
        ''' Return tuples (from_state, read, write, direction, to_state). '''
        return [(f, r, w, d, t) for (f, r), (w, d, t) in self.transitions.items()]

    def symbols(self):
        return {self.blank}.union(*[(r, w) for (_, r, w, _, _) in self.transitions_list()])

    def check(self):
        ''' Raise ValueError if the definition is inconsistent. The engine itself never calls this. '''
        if self.start not in self.states:
            raise ValueError(f'Start state {self.start!r} is not a state')
        if not set(self.halting) <= self.states:
            raise ValueError(f'Halting states {sorted(set(self.halting) - self.states)} are not states')
        for f, r, w, d, t in self.transitions_list():
            if f not in self.states or t not in self.states:
                raise ValueError(f'Transition {f} {r} -> {w} {d} {t} mentions an unknown state')
            if d not in (R, L):
                raise ValueError(f'Transition {f} {r} -> {w} {d} {t} has no direction')
        return self

    @classmethod
    def from_text(cls, text):
        ''' Parse either the line format (see __str__) or the standard busy-beaver text format, e.g. "1RB1LC_1RC1RB_...". '''
        if re.fullmatch(r'\s*(?:\d[RL][A-Z]|---)+(?:_(?:\d[RL][A-Z]|---)+)*\s*', text):
            return cls.from_standard_text(text.strip())
        start, blank, states, halting, transitions = None, 'B', set(), {}, {}
        for lineno, tokens in definition_lines(text, 'tm'):
            match tokens:
                case ['start', q]:
                    start = q
                case ['blank', b]:
                    blank = b
                case ['states', *qs]:
                    states.update(qs)
                case ['halt', q] | ['halt', q, 'accept']:
                    halting[q] = True
                case ['halt', q, 'reject']:
                    halting[q] = False
                case _:
                    match split_rule(lineno, tokens):
                        case [f, r], [w, ('R' | 'L') as d, t]:
                            if (f, r) in transitions:
                                raise ValueError(f'Line {lineno}: transition specified twice: {(f, r)}')
                            transitions[f, r] = (w, 'RL'.index(d), t)
                            states.update((f, t))
                        case _:
                            raise bad_line(lineno, tokens)
        if start is None:
            raise ValueError('TM definition has no start state')
        states.add(start)
        states.update(halting)
        return cls(states, transitions, start, halting, blank).check()

    @classmethod
    def from_standard_text(cls, text):
        ''' States are A, B, ...; symbols are 0, 1, ...; "---" halts (into the accepting state Z) after writing 0 and moving right. '''
        tt_rows = text.split('_')
        N, S = len(tt_rows), len(tt_rows[0])//3
        if not all(len(row) == 3*S for row in tt_rows):
            raise ValueError(f'Not in standard TM text format: {text!r}')
        transitions = {}
        for f, row in enumerate(tt_rows):
            for r, (w, d, t) in enumerate(zip(row[::3], row[1::3], row[2::3])):
                transitions[chr(65+f), str(r)] = ('0', R, HALT) if t == '-' else (w, 'RL'.index(d), t)
        states = {chr(65+f) for f in range(N)} | {HALT}
        return cls(states, transitions, 'A', {HALT: True}, '0').check()

    def __str__(self):
        lines = ['tm', f'start {self.start}', f'blank {self.blank}']
        lines.extend(f'halt {q} {"accept" if accept else "reject"}' for q, accept in self.halting.items())
        lines.append('states ' + ' '.join(sorted(self.states)))
        lines.extend(f'{f} {r} -> {w} {"RL"[d]} {t}' for f, r, w, d, t in self.transitions_list())
        return '\n'.join(lines)

class Tape:
    '''
    A tape that is infinite in both directions but materialised on demand: _cells[i] holds position i - origin; "cells" is a read-only copy.
    The window [left, right] only ever grows, one blank cell at a time; unvisited positions read as blank.
    '''
    __slots__ = ('_cells', 'origin', 'blank')

    def __init__(self, symbols=(), blank='B'):
        self._cells, self.origin, self.blank = list(symbols) or [blank], 0, blank

    @property
    def cells(self):
        return tuple(self._cells)

    @property
    def left(self):
        return -self.origin

    @property
    def right(self):
        return len(self._cells) - self.origin - 1

    def reach(self, pos):
        ''' Extend the window with blank cells until it covers "pos". Return the number of cells added. '''
        added = 0
        while pos < self.left:
            self._cells.insert(0, self.blank)
            self.origin += 1
            added += 1
        while pos > self.right:
            self._cells.append(self.blank)
            added += 1
        return added

    def __getitem__(self, pos):
        i = pos + self.origin
        return self._cells[i] if 0 <= i < len(self._cells) else self.blank

    def __setitem__(self, pos, symbol):
        self.reach(pos)
        self._cells[pos + self.origin] = symbol

    def __len__(self):
        return len(self._cells)

    def __iter__(self):
        return iter(self._cells)

    def __str__(self):
        sep = '' if all(len(s) == 1 for s in self._cells) else ' '
        return sep.join(self._cells)

class TMRun(Run):
    '''
    One execution of a TM. "head" is a tape position (possibly negative); head_offset indexes tape.cells.
    A missing transition out of a non-halting state halts and rejects.
    '''
    __slots__ = ('tm', 'initial_tape', 'initial_head', 'tape', 'head', 'state', 'status')

    def __init__(self, tm, tape=(), head=0):
        self.tm = tm
        self.initial_tape, self.initial_head = tuple(tape), head
        self.reset()

    def reset(self):
        self.tape = Tape(self.initial_tape, self.tm.blank)
        self.tape.reach(self.initial_head)
        self.head, self.state = self.initial_head, self.tm.start
        self.status = TMStatus.running
        return self

    @property
    def done(self):
        return self.status != TMStatus.running

    @property
    def head_offset(self):
        return self.head + self.tape.origin

    def step(self):
        if self.done:
            return self
        if self.state in self.tm.halting:
            return self._halt()
        rule = self.tm.transition(self.state, self.tape[self.head])
        if rule is None:
            logging.getLogger(__name__).debug('No transition from %s reading %r at %d', self.state, self.tape[self.head], self.head)
            self.status = TMStatus.halted_reject
            return self
        w, d, self.state = rule
        self.tape[self.head] = w
        self.head += (-1 if d else 1)
        self.tape.reach(self.head)
        if self.state in self.tm.halting:
            self._halt()
        return self

    def _halt(self):
        self.status = TMStatus.halted_accept if self.tm.halting[self.state] else TMStatus.halted_reject
        logging.getLogger(__name__).debug('Halted in %s: %s', self.state, self.status.name)
        return self

    def snapshot(self):
        return self.state, self.head, self.tape.left, self.tape.cells, self.status

    def __str__(self):
        ''' The tape with the state in brackets just before the cell under the head. '''
        i, sep = self.head_offset, ('' if all(len(s) == 1 for s in self.tape) else ' ')
        return f'{sep.join(self.tape.cells[:i])}[{self.state}]{sep.join(self.tape.cells[i:])} {self.status.name}'
