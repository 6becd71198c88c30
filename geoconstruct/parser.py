import re
from typing import List, Optional, Tuple

from .ast import Action, Script, Span
from .labels import parse_label
from .lexer import Token, tokenize_line
from .tools import TOOLS

_ERROR_LOC_RE = re.compile(r"\[line (\d+), col (\d+)\]")


class Cursor:
    def __init__(self, tokens: List[Token]):
        self.toks = tokens
        self.i = 0

    def peek(self):
        return self.toks[self.i] if self.i < len(self.toks) else None

    def match(self, *types: str):
        if self.i < len(self.toks) and self.toks[self.i][0] in types:
            t = self.toks[self.i]
            self.i += 1
            return t
        return None

    def expect(self, *types: str):
        t = self.peek()
        if t and t[0] in types:
            self.i += 1
            return t
        want = '|'.join(types)
        if t:
            raise SyntaxError(f'[line {t[2]}, col {t[3]}] expected {want}, got {t[0]}')
        raise SyntaxError(f'Unexpected end of line: expected {want}')

    def expect_end(self):
        t = self.peek()
        if t:
            raise SyntaxError(f'[line {t[2]}, col {t[3]}] unexpected {t[1]!r} after action')


def parse_number(cur: Cursor) -> float:
    sign = 1.0
    t = cur.match('MINUS', 'PLUS')
    if t and t[0] == 'MINUS':
        sign = -1.0
    return sign * float(cur.expect('NUMBER')[1])


def parse_coord(cur: Cursor) -> Tuple[float, float]:
    paren = cur.match('LPAREN')
    x = parse_number(cur)
    cur.match('COMMA')
    y = parse_number(cur)
    if paren:
        cur.expect('RPAREN')
    return x, y


def parse_action(tokens: List[Token]) -> Optional[Action]:
    if not tokens:
        return None
    cur = Cursor(tokens)
    t0 = cur.expect('ID')
    kw = t0[1].lower()
    span = Span(t0[2], t0[3])

    if kw == 'tool':
        name = cur.expect('ID')
        tool = name[1].lower()
        if tool not in TOOLS:
            raise SyntaxError(
                f"[line {name[2]}, col {name[3]}] unknown tool '{name[1]}' (expected {'|'.join(TOOLS)})"
            )
        action = Action('tool', span, {'tool': tool})
    elif kw == 'clear':
        action = Action('clear', span)
    elif kw == 'click':
        t = cur.peek()
        if t and t[0] == 'ID':
            cur.i += 1
            try:
                parse_label(t[1])
            except ValueError:
                raise SyntaxError(f"[line {t[2]}, col {t[3]}] '{t[1]}' is not a point label") from None
            action = Action('click', span, {'label': t[1].upper()})
        else:
            action = Action('click', span, {'coord': parse_coord(cur)})
    else:
        raise SyntaxError(f"[line {t0[2]}, col {t0[3]}] unknown action '{t0[1]}'")

    cur.expect_end()
    return action


def _augment_syntax_error(err: SyntaxError, line_text: str) -> Optional[SyntaxError]:
    message = str(err)
    if not line_text or "\n" in message:
        return None
    match = _ERROR_LOC_RE.search(message)
    if not match:
        return None
    col = max(int(match.group(2)), 1)
    caret_line = " " * (col - 1) + "^"
    snippet = f"    {line_text.rstrip()}\n    {caret_line}"
    return SyntaxError(f"{message}\n{snippet}")


def parse_script(text: str) -> Script:
    script = Script()
    for i, raw in enumerate(text.splitlines(), start=1):
        try:
            tokens = tokenize_line(raw, i)
            action = parse_action(tokens)
        except SyntaxError as err:
            augmented = _augment_syntax_error(err, raw)
            if augmented is None:
                raise
            raise augmented from None
        if action:
            script.actions.append(action)
    return script
