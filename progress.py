# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
import logging
import os

UNITS = (
    'Unit 1: Finite Automata',
    'Unit 2: Regular Languages',
    'Unit 3: Context-Free Grammars',
    'Unit 4: Turing Machines',
    'Unit 5: Computability',
)
# Per unit, besides theory topics and examples: the quiz, the simulator and the flashcards.
EXTRA_ITEMS = ('quiz', 'simulator', 'flashcards')

class ProgressStore:
    '''
    The set of completed item IDs, e.g. "Unit 1: Finite Automata_quiz". Loaded and saved at session boundaries:
    entering the context loads the file (if any), leaving it saves.
    '''
    DEFAULT_PATH = 'completed_items.txt'

    def __init__(self, path=DEFAULT_PATH):
        self._path = path
        self.completed = set()

    def __enter__(self):
        return self.load()

    def __exit__(self, *exc_info):
        self.save()

    def load(self):
        self.completed = set()
        if os.path.exists(self._path):
            with open(self._path) as f:
                self.completed.update(filter(None, (line.rstrip('\n') for line in f)))
        logging.getLogger(__name__).debug('Loaded %d completed items from %s', len(self.completed), self._path)
        return self

    def save(self):
        with open(self._path, 'w') as f:
            for item in sorted(self.completed):
                print(item, file=f)

    def mark_completed(self, item):
        self.completed.add(item)

    def is_completed(self, item):
        return item in self.completed

    def unit_progress(self, title, theory=0, examples=0):
        '''
        Fraction of the unit's items completed: theory topics, examples, quiz, simulator and flashcards.
        The store does not know a unit's content, so the caller passes its theory and example counts;
        with the defaults only the three EXTRA_ITEMS count.
        '''
        items = [f'{title}_theory_{i}' for i in range(theory)] + [f'{title}_example_{i}' for i in range(examples)]
        items += [f'{title}_{extra}' for extra in EXTRA_ITEMS]
        return sum(map(self.is_completed, items)) / len(items)

    def total_progress(self, sizes=None):
        '''
        Mean unit progress over UNITS. "sizes" maps a title to its (theory, examples) counts and must come from the
        caller's course content; a unit missing from it is scored on its EXTRA_ITEMS alone.
        '''
        sizes = sizes or {}
        return sum(self.unit_progress(title, *sizes.get(title, (0, 0))) for title in UNITS) / len(UNITS)
