# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
KINDS = ('dfa', 'pda', 'tm')
ARROW = '->'

class Run:
    '''
    Shared driver loop for the step-executors. A subclass provides step(), snapshot() and the "done" property;
    step() must be a no-op once done is true, so callers may over-step safely.
    '''
    __slots__ = ()

    def trace(self, limit=None):
        ''' Step until the run is done (or "limit" steps were taken), yielding a snapshot after each step. '''
        steps = 0
        while not self.done and (limit is None or steps < limit):
            self.step()
            steps += 1
            yield self.snapshot()

    def run(self, limit=None):
        for _ in self.trace(limit):
            pass
        return self

def kind_of(text):
    ''' Return the first significant token of a definition text: its kind keyword, if it has one. '''
    for _, tokens in significant_lines(text):
        return tokens[0]
    raise ValueError('Empty machine definition')

def significant_lines(text):
    ''' Yield (line number, tokens), skipping blank lines and comment lines (those starting with '#'). '''
    for lineno, line in enumerate(text.splitlines(), 1):
        stripped = line.strip()
        if stripped and not stripped.startswith('#'):
            yield lineno, stripped.split()

def definition_lines(text, kind):
    ''' Like significant_lines, but drop the leading kind keyword, and reject a definition of some other kind. '''
    lines = significant_lines(text)
    for lineno, tokens in lines:
        if tokens != [kind]:
            if len(tokens) == 1 and tokens[0] in KINDS:
                raise ValueError(f'Expected a {kind} definition, got {tokens[0]}')
            yield lineno, tokens
        break
    yield from lines

def split_rule(lineno, tokens):
    ''' Split "lhs... -> rhs..." into two token lists. '''
    try:
        i = tokens.index(ARROW)
    except ValueError:
        raise ValueError(f'Line {lineno}: not a rule: {" ".join(tokens)!r}') from None
    return tokens[:i], tokens[i+1:]

def bad_line(lineno, tokens):
    return ValueError(f'Line {lineno}: cannot parse {" ".join(tokens)!r}')
