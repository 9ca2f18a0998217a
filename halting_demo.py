#!/usr/bin/env python3
# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from enum import IntEnum
from tm_sim import L, R, TM
import logging
import tqdm

class Verdict(IntEnum):
    halts, loops, undecided = range(3)

# P, as built against an analyser that claimed "P loops": halt at once.
HALTER = TM(states={'q0', 'qh'}, transitions={('q0', 'B'): ('B', R, 'qh')}, start='q0', halting={'qh': True})
# P, as built against an analyser that claimed "P halts": shuffle between two cells forever.
LOOPER = TM(states={'q0', 'q1'}, transitions={('q0', 'B'): ('B', R, 'q1'), ('q1', 'B'): ('B', L, 'q0')}, start='q0', halting={})

def configuration(run):
    ''' Return the run's configuration modulo translation: (state, head relative to the first non-blank cell, non-blank span). '''
    cells, blank = run.tape.cells, run.tm.blank
    used = [i for i, s in enumerate(cells) if s != blank]
    if not used:
        return run.state, 0, ()
    return run.state, run.head_offset - used[0], cells[used[0]:used[-1]+1]

def analyze(tm, tape=(), head=0, step_limit=1000, progress=False):
    '''
    Simulate for at most "step_limit" steps. Report halts if the run stops (accepting or not), loops if a configuration
    repeats (up to translation, so the machine provably runs forever), and undecided otherwise.
    '''
    run = tm.new_run(tape, head)
    seen = {configuration(run)}
    with tqdm.tqdm(total=step_limit, desc='Analyzing', unit='step', disable=not progress) as bar:
        for _ in range(step_limit):
            run.step()
            bar.update()
            if run.done:
                return Verdict.halts
            config = configuration(run)
            if config in seen:
                return Verdict.loops
            seen.add(config)
    return Verdict.undecided

def contrarian(claimed):
    ''' Return the program P that does the opposite of what an analyser claimed about it. '''
    return LOOPER if claimed == Verdict.halts else HALTER

def paradox(claims=(Verdict.halts, Verdict.loops), step_limit=100):
    ''' For each verdict an analyser might give about P, build P against it and analyse P for real. Yield (claimed, actual). '''
    for claimed in claims:
        actual = analyze(contrarian(claimed), step_limit=step_limit)
        logging.getLogger(__name__).info('H says P %s; P %s', claimed.name, actual.name)
        yield claimed, actual

if __name__ == '__main__':
    from sim_args import ArgumentParser, machine_args
    logging.basicConfig(level=logging.INFO, format='%(asctime)s %(name)s %(levelname)s: %(message)s')
    ap = ArgumentParser(description='Bounded halting analysis of Turing machines, and why it cannot be made complete.', parents=[machine_args()])
    ap.add_argument('-N', '--step-limit', help='Give up after this many steps.', type=int, default=1000)
    ap.add_argument('-q', '--quiet', help='No progress bar', action='store_true')
    args = ap.parse_args()

    for scenario in args.machines:
        if not isinstance(scenario.definition, TM):
            continue
        tape = scenario.input if args.input is None else args.input
        head = scenario.head if args.head is None else args.head
        print(scenario.name, analyze(scenario.definition, tape, head, args.step_limit, progress=not args.quiet).name, sep=', ')
    if all(claimed != actual for claimed, actual in paradox()):
        print('PARADOX: whatever H says about P, P does the opposite. A general halting decider is impossible.')
