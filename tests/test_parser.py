import pytest

from geoconstruct.ast import Action, Span
from geoconstruct.parser import parse_script


def test_parse_all_action_forms():
    text = '''
# two crossing segments
tool line
click 100 100
click 300, 100   # comma optional
click (200, -50.5)
click b2
clear
'''
    script = parse_script(text)

    assert [a.kind for a in script.actions] == ['tool', 'click', 'click', 'click', 'click', 'clear']
    assert script.actions[0].data == {'tool': 'line'}
    assert script.actions[1].data == {'coord': (100.0, 100.0)}
    assert script.actions[2].data == {'coord': (300.0, 100.0)}
    assert script.actions[3].data == {'coord': (200.0, -50.5)}
    assert script.actions[4].data == {'label': 'B2'}
    assert script.actions[1].span == Span(4, 1)
    assert len(script.clicks) == 4


def test_tool_names_are_case_insensitive():
    script = parse_script("TOOL Extend")

    assert script.actions == [Action('tool', Span(1, 1), {'tool': 'extend'})]


def test_unknown_tool_reports_column_pointer():
    text = "tool polygon"
    with pytest.raises(SyntaxError) as excinfo:
        parse_script(text)
    message = str(excinfo.value)
    assert "unknown tool 'polygon'" in message
    lines = message.splitlines()
    assert lines[-2].strip() == text
    assert lines[-1].rstrip().endswith('^')
    assert lines[-1].index('^') == lines[-2].index('p')


@pytest.mark.parametrize(
    'text, fragment',
    [
        ('jump 1 2', "unknown action 'jump'"),
        ('click 1 2 3', "unexpected '3' after action"),
        ('click hello', "'hello' is not a point label"),
        ('click 1 $', 'unexpected character'),
    ],
)
def test_syntax_errors(text, fragment):
    with pytest.raises(SyntaxError) as excinfo:
        parse_script(text)

    assert fragment in str(excinfo.value)


def test_missing_coordinate_raises():
    with pytest.raises(SyntaxError) as excinfo:
        parse_script("click 10")

    assert 'Unexpected end of line' in str(excinfo.value)
