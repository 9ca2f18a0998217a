#!/usr/bin/env python3
# SPDX-FileCopyrightText: 2025 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from dfa_sim import DFA
from pda_sim import PDA, StackOp
from sys import stdout
from tm_sim import TM
import logging

STATE_COLOR = ((255, 0, 0), (255, 128, 0), (0, 0, 255), (0, 255, 0), (255, 0, 255), (0, 255, 255), (255, 255, 0))

def main(scenario, input=None, head=None, step_limit=10000, table=False, png=False, file=stdout):
    run = scenario.new_run(input, head)
    print(f'== {scenario.name}: {scenario.description}' if scenario.description else f'== {scenario.name}', file=file)
    if table:
        print(pptable(scenario.definition), file=file)
    print(f'{0:>5} {run}', file=file)
    for n, _ in enumerate(run.trace(step_limit), 1):
        print(f'{n:>5} {run}', file=file)
    if not run.done:
        logging.getLogger(__name__).warning('%s did not finish within %d steps', scenario.name, step_limit)
    if png:
        if isinstance(scenario.definition, TM):
            save_png(run.reset(), step_limit, f'trace_{scenario.name}.png')
        else:
            logging.getLogger(__name__).warning('Only Turing machine runs have a space-time diagram; skipping %s', scenario.name)
    return run

def pptable(definition):
    ''' Return the definition as a table: one row per state (DFA, TM) or per rule (PDA). '''
    from tabulate import tabulate
    if isinstance(definition, PDA):
        headers = ['state', 'read', 'top', 'next', 'stack']
        table = []
        for (q, s, top), (t, op, push) in definition.transitions.items():
            table.append([q, s, top, t, f'push {push}' if op == StackOp.push else op.name])
        return tabulate(table, headers=headers)
    if isinstance(definition, DFA):
        symbols = sorted(definition.alphabet)
        cell = lambda q, s: definition.transitions.get((q, s), '---')
        mark = lambda q: ('>' if q == definition.start else '') + ('*' if q in definition.accepting else '')
    elif isinstance(definition, TM):
        symbols = sorted(definition.symbols())
        def cell(q, s):
            rule = definition.transition(q, s)
            return '---' if rule is None else f'{rule[0]}{"RL"[rule[1]]}{rule[2]}'
        mark = lambda q: ('>' if q == definition.start else '') + {True: '+', False: '-'}.get(definition.halting.get(q), '')
    else:
        raise TypeError(f'Not a machine definition: {definition!r}')
    table = [[mark(q) + q] + [cell(q, s) for s in symbols] for q in sorted(definition.states)]
    return tabulate(table, headers=['s'] + symbols)

def save_png(run, step_limit, filename):
    ''' Draw a TM run as a space-time diagram: one row per step, one column per tape cell, the head in its state's color. '''
    from PIL import Image
    rows = [(run.tape.left, run.tape.cells, run.head, run.state)]
    for _ in run.trace(step_limit):
        rows.append((run.tape.left, run.tape.cells, run.head, run.state))
    l, r = run.tape.left, run.tape.right
    symbols = sorted(run.tm.symbols() | {s for (_, cells, _, _) in rows for s in cells})
    shade = {s: (0 if s == run.tm.blank else round(255 * (i+1) / len(symbols)),) * 3 for i, s in enumerate(symbols)}
    state_index = {q: i for i, q in enumerate(sorted(run.tm.states))}
    img = Image.new('RGB', (r-l+1, len(rows)), color='black')
    pix = img.load()
    for row, (left, cells, head, state) in enumerate(rows):
        for i, s in enumerate(cells):
            pix[left-l+i, row] = shade[s]
        pix[head-l, row] = STATE_COLOR[state_index[state] % len(STATE_COLOR)]
    img.save(filename)
    return img

if __name__ == '__main__':
    from sim_args import ArgumentParser, machine_args
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(name)s %(levelname)s: %(message)s')
    ap = ArgumentParser(description='Trace a machine step by step.', parents=[machine_args()])
    ap.add_argument('-N', '--step-limit', help='Stop after this many steps.', type=int, default=10000)
    ap.add_argument('-t', '--table', help='Print the transition table first', action='store_true')
    ap.add_argument('-p', '--png', help='Emit a PNG space-time diagram (TMs only)', action='store_true')
    args = ap.parse_args()
    for scenario in args.machines:
        main(scenario, input=args.input, head=args.head, step_limit=args.step_limit, table=args.table, png=args.png)
