#!/usr/bin/env python3
# SPDX-FileCopyrightText: 2023 Justin Blanchard <UncombedCoconut@gmail.com>
# SPDX-License-Identifier: Apache-2.0 OR MIT
import logging
import re

DEFAULT_PATTERN = '^a*b+$'

def compile_pattern(pattern):
    ''' Return the compiled pattern, or None if the host regex library rejects it. '''
    try:
        return re.compile(pattern)
    except re.error as e:
        logging.getLogger(__name__).debug('Invalid pattern %r: %s', pattern, e)
        return None

def is_valid_pattern(pattern):
    return compile_pattern(pattern) is not None

def matches(pattern, text):
    ''' True if the pattern matches anywhere in the text; an invalid pattern matches nothing. '''
    regex = compile_pattern(pattern)
    return regex is not None and regex.search(text) is not None

def verdict(pattern, text):
    if not is_valid_pattern(pattern):
        return 'ERROR'
    return 'MATCH' if matches(pattern, text) else 'NO MATCH'

if __name__ == '__main__':
    from argparse import ArgumentParser
    ap = ArgumentParser(description='Test strings against a regular expression.')
    ap.add_argument('-e', '--pattern', help='Regular expression', default=DEFAULT_PATTERN)
    ap.add_argument('texts', help='Strings to test', nargs='*', default=['aaabb'])
    args = ap.parse_args()
    for text in args.texts:
        print(text, verdict(args.pattern, text), sep=', ')
