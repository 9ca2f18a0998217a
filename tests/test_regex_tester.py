from regex_tester import DEFAULT_PATTERN, is_valid_pattern, matches, verdict


def test_default_pattern():
    assert matches(DEFAULT_PATTERN, 'aaabb')
    assert matches(DEFAULT_PATTERN, 'b')
    assert not matches(DEFAULT_PATTERN, 'aaa')
    assert not matches(DEFAULT_PATTERN, 'aba')


def test_match_anywhere_without_anchors():
    assert matches('ab+', 'xxabbbyy')


def test_invalid_pattern_reports_error_instead_of_raising():
    assert not is_valid_pattern('a(b')
    assert not matches('a(b', 'a(b')
    assert verdict('a(b', 'ab') == 'ERROR'
    assert verdict(DEFAULT_PATTERN, 'ab') == 'MATCH'
    assert verdict(DEFAULT_PATTERN, 'ba') == 'NO MATCH'
