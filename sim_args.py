# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
from argparse import Action, ArgumentParser
from collections.abc import Sequence
from dfa_sim import DFA
from fsm_common import kind_of
from pda_sim import PDA
from scenarios import SCENARIOS, Scenario
from tm_sim import TM
import os

PARSERS = {'dfa': DFA.from_text, 'pda': PDA.from_text, 'tm': TM.from_text}

def machine_args():
    """Return an ArgumentParser that lets the user name scenarios or definition files, parsed into 'machines': Sequence[Scenario]. """
    ap = ArgumentParser(add_help=False)
    ap.add_argument('-i', '--input', help="Input string (a TM's initial tape); default: each scenario's own")
    ap.add_argument('--head', help='Initial head position (TMs only)', type=int)
    ap.add_argument('machines', help=f'Scenario names ({", ".join(SCENARIOS)}), definition files or standard text TMs',
                    nargs='*', action=_AddMachineList, default=Lineup())
    return ap

class _AddMachineList(Action):
    def __call__(self, parser, namespace, values, option_string=None):
        if values and values is not self.default:
            namespace.machines._names.extend(values)

class Lineup(Sequence):
    ''' The machines named on the command line (all built-in scenarios, if none were), loaded on access. '''
    def __init__(self):
        self._names = []

    def __len__(self):
        return len(self._names or SCENARIOS)

    def __getitem__(self, i):
        return load_scenario((self._names or list(SCENARIOS))[i])

def parse_definition(text):
    ''' Parse a DFA, PDA or TM from its text form, dispatching on the leading kind keyword. '''
    parser = PARSERS.get(kind_of(text), TM.from_text)  # A bare standard text TM has no keyword.
    return parser(text)

def load_scenario(name_or_path):
    try:
        return SCENARIOS[name_or_path]
    except KeyError:
        pass
    if os.path.exists(name_or_path):
        with open(name_or_path) as f:
            definition = parse_definition(f.read())
        return Scenario(os.path.basename(name_or_path), definition)
    try:
        return Scenario(name_or_path, TM.from_standard_text(name_or_path))
    except ValueError:
        raise ValueError(f'Not a scenario, definition file or standard text TM: {name_or_path!r}') from None
