"""
Analog Literal Compiler

Turns ASCII-art drawings into checked dimensions:

    +--------+
    |        |          -> Rectangle(w=4, h=2)
    |        |
    +--------+

Features:
- Three shapes: lines (I--I or +--+), rectangles and wireframe cuboids
- Every redundant edge of a drawing is measured and cross-checked
- Comments (/* ... */ and // ...) may be written inside a drawing
- Whitespace is free-form
- Bounded, non-recursive recognition (configurable step budget)

Grammar (token level, whitespace and comments removed):
    diagram   ::= line | box
    line      ::= 'I' unit* 'I'
    box       ::= '+' unit* '+'                          (degenerate line)
                | '+' unit* '+' row* '+' unit* '+'         (rectangle)
                | '+' unit* '+' cuboid
    unit      ::= '-' '-'
    row       ::= '|' '|'
    cuboid    ::= '/' '/' '|' ('/' '/' '|')* ['/' '/' '+' ('/' '/' '/')*]
                  '+' unit* '+' ('+' | '|' | '/')
                  (('|' '|' ('+' | '/' | '|'))*) '+' unit* '+'

Example inputs:
    "I------I"                              -> Line(3)
    "+----+ |    | +----+"                  -> Rectangle(w=2, h=1)
    "+----+ / /| +----+ + |    |/ +----+"   -> Cuboid(w=2, h=1, l=1)
"""

from __future__ import annotations
import json
import logging
from dataclasses import dataclass, asdict
from enum import Enum, auto
from typing import List, Optional, Dict, Any, Tuple, Union

logger = logging.getLogger(__name__)

DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


# =============================================================================
# 1. SOURCE LOCATION & ERROR HANDLING
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    line: int
    column: int

    def __str__(self) -> str:
        return f"line {self.line}, col {self.column}"


@dataclass
class SourceFile:
    name: str
    content: str

    def __post_init__(self):
        self.lines = self.content.split('\n')

    def get_line(self, n: int) -> str:
        return self.lines[n - 1] if 1 <= n <= len(self.lines) else ""


class ErrorKind(Enum):
    LEXICAL = auto()
    SYNTAX = auto()
    SEMANTIC = auto()
    RESOURCE = auto()
    WARNING = auto()
    INFO = auto()


@dataclass
class Message:
    kind: ErrorKind
    text: str
    location: Optional[SourceLocation] = None
    hint: Optional[str] = None


class MessageCollector:
    def __init__(self, source: Optional[SourceFile] = None):
        self.source = source
        self.errors: List[Message] = []
        self.warnings: List[Message] = []
        self.infos: List[Message] = []

    def error(self, text: str, loc: Optional[SourceLocation] = None,
              hint: str = None, kind: ErrorKind = ErrorKind.SEMANTIC):
        self.errors.append(Message(kind, text, loc, hint))

    def warn(self, text: str, loc: Optional[SourceLocation] = None):
        self.warnings.append(Message(ErrorKind.WARNING, text, loc))

    def info(self, text: str, loc: Optional[SourceLocation] = None):
        self.infos.append(Message(ErrorKind.INFO, text, loc))

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def format(self, msg: Message) -> str:
        """Render a message with the offending source line and a caret."""
        where = f"{msg.location}: " if msg.location else ""
        out = [f"[{msg.kind.name}] {where}{msg.text}"]
        if msg.location and self.source:
            src = self.source.get_line(msg.location.line)
            if src:
                out.append(f"    {src}")
                out.append("    " + " " * (msg.location.column - 1) + "^")
        if msg.hint:
            out.append(f"    hint: {msg.hint}")
        return '\n'.join(out)


class DiagramError(Exception):
    """Base class for every way a drawing can fail to become a value."""

    kind = ErrorKind.SYNTAX

    def __init__(self, text: str, location: Optional[SourceLocation] = None,
                 hint: Optional[str] = None):
        super().__init__(text)
        self.text = text
        self.location = location
        self.hint = hint

    def __str__(self) -> str:
        if self.location:
            return f"{self.text} ({self.location})"
        return self.text


class MalformedDiagram(DiagramError):
    """The text does not describe any of the three shapes."""

    kind = ErrorKind.LEXICAL


class UnexpectedToken(MalformedDiagram):
    kind = ErrorKind.SYNTAX

    def __init__(self, token: 'Token', state: 'State', expected: Tuple[str, ...]):
        found = "end of input" if token.type is TokenType.EOF else f"'{token.raw}'"
        text = f"Unexpected {found} while reading {state.describe()}"
        hint = f"expected {' or '.join(expected)}" if expected else None
        super().__init__(text, token.location, hint)
        self.token = token
        self.state = state
        self.expected = expected


class DimensionMismatch(DiagramError):
    kind = ErrorKind.SEMANTIC

    def __init__(self, edge: str, expected: int, actual: int, vantage: str = ""):
        where = f" on the {vantage} edge" if vantage else ""
        text = f"{edge.capitalize()} mismatch: measured {expected}, but {actual}{where}"
        hint = f"draw the {edge} with the same number of units everywhere"
        super().__init__(text, None, hint)
        self.edge = edge
        self.expected = expected
        self.actual = actual
        self.vantage = vantage


class RecognitionDepthExceeded(DiagramError):
    kind = ErrorKind.RESOURCE

    def __init__(self, limit: int, location: Optional[SourceLocation] = None):
        super().__init__(f"Diagram needs more than {limit} recognition steps", location,
                         hint="raise max_steps or draw a smaller diagram")
        self.limit = limit


# =============================================================================
# 2. LEXER
# =============================================================================

class TokenType(Enum):
    PLUS = auto()
    DASH = auto()
    PIPE = auto()
    SLASH = auto()
    LINE_MARKER = auto()
    EOF = auto()


@dataclass
class Token:
    type: TokenType
    value: Any
    location: SourceLocation
    raw: str

    def __repr__(self):
        return f"Token({self.type.name}, {self.value!r})"


class Lexer:
    SYMBOLS = {
        '+': TokenType.PLUS,
        '-': TokenType.DASH,
        '|': TokenType.PIPE,
        '/': TokenType.SLASH,
        'I': TokenType.LINE_MARKER,
    }

    def __init__(self, source: SourceFile, messages: MessageCollector):
        self.source = source
        self.messages = messages
        self.content = source.content
        self.pos = 0
        self.line = 1
        self.column = 1

    def loc(self) -> SourceLocation:
        return SourceLocation(self.line, self.column)

    def peek(self, offset: int = 0) -> str:
        idx = self.pos + offset
        return self.content[idx] if idx < len(self.content) else '\0'

    def advance(self) -> str:
        if self.pos >= len(self.content):
            return '\0'
        ch = self.content[self.pos]
        self.pos += 1
        if ch == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def skip_ws(self):
        while True:
            while self.peek() in ' \t\n\r':
                self.advance()
            if self.peek() == '/' and self.peek(1) == '/':
                while self.peek() not in ('\n', '\0'):
                    self.advance()
                continue
            if self.peek() == '/' and self.peek(1) == '*':
                self.skip_block_comment()
                continue
            break

    def skip_block_comment(self):
        start = self.loc()
        depth = 0
        while self.pos < len(self.content):
            if self.peek() == '/' and self.peek(1) == '*':
                depth += 1
                self.advance()
                self.advance()
            elif self.peek() == '*' and self.peek(1) == '/':
                depth -= 1
                self.advance()
                self.advance()
                if depth == 0:
                    return
            else:
                self.advance()
        self.messages.error("Unterminated comment", start,
                            hint="close it with */", kind=ErrorKind.LEXICAL)

    def tokenize(self) -> List[Token]:
        tokens = []
        while self.pos < len(self.content):
            self.skip_ws()
            if self.pos >= len(self.content):
                break
            ch = self.peek()

            if ch in self.SYMBOLS:
                tokens.append(Token(self.SYMBOLS[ch], ch, self.loc(), ch))
                self.advance()
                continue

            # Unknown/invalid character
            loc = self.loc()
            hint = "put annotations inside /* */" if ch.isalnum() else None
            self.messages.error(f"Unexpected character '{ch}'", loc,
                                hint=hint, kind=ErrorKind.LEXICAL)
            self.advance()

        tokens.append(Token(TokenType.EOF, None, self.loc(), ''))
        return tokens


def tokenize(text: str, name: str = "<input>") -> List[Token]:
    """Tokenize ``text``, raising MalformedDiagram on the first lexical error."""
    source = SourceFile(name, text)
    messages = MessageCollector(source)
    tokens = Lexer(source, messages).tokenize()
    if messages.has_errors():
        first = messages.errors[0]
        raise MalformedDiagram(first.text, first.location, first.hint)
    return tokens


# =============================================================================
# 3. RESULT VALUES
# =============================================================================

def _check_dimension(name: str, value: int):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


@dataclass(frozen=True, order=True)
class Line:
    """A 1D length, counted in dash pairs.

    Lines behave like the number they measure: they order, add up to
    longer lines, multiply into plain integers and can size a sequence.

        >>> analog_literal("I----I") + analog_literal("I------I")
        Line(magnitude=5)
        >>> [0] * analog_literal("+----+")
        [0, 0]
    """
    magnitude: int

    def __post_init__(self):
        _check_dimension("magnitude", self.magnitude)

    def __int__(self) -> int:
        return self.magnitude

    def __index__(self) -> int:
        return self.magnitude

    def __add__(self, other):
        if isinstance(other, Line):
            return Line(self.magnitude + other.magnitude)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, Line):
            return self.magnitude * other.magnitude
        if isinstance(other, int) and not isinstance(other, bool):
            return self.magnitude * other
        return NotImplemented

    __rmul__ = __mul__


# No value equality for boxes: which edge was drawn as the width matters.

@dataclass(frozen=True, eq=False)
class Rectangle:
    w: int
    h: int

    def __post_init__(self):
        _check_dimension("w", self.w)
        _check_dimension("h", self.h)

    def area(self) -> int:
        return self.w * self.h


@dataclass(frozen=True, eq=False)
class Cuboid:
    """A 3D box: ``w`` dash pairs wide, ``h`` rows tall, ``l`` slashes deep."""
    w: int
    h: int
    l: int

    def __post_init__(self):
        _check_dimension("w", self.w)
        _check_dimension("h", self.h)
        _check_dimension("l", self.l)

    def volume(self) -> int:
        return self.w * self.h * self.l

    def top(self) -> Rectangle:
        return Rectangle(w=self.w, h=self.l)

    def side(self) -> Rectangle:
        return Rectangle(w=self.l, h=self.h)

    def front(self) -> Rectangle:
        return Rectangle(w=self.w, h=self.h)


Value = Union[Line, Rectangle, Cuboid]


# =============================================================================
# 4. RECOGNIZER
# =============================================================================

class Shape(Enum):
    LINE = auto()
    RECTANGLE = auto()
    CUBOID = auto()


class State(Enum):
    START = auto()
    LINE = auto()
    TOP = auto()
    MID = auto()
    BOTTOM = auto()
    TOP_DEPTH = auto()
    TOP_L_BOTTOM_L = auto()
    MID_WIDTH = auto()
    BOTTOM_HEIGHT = auto()
    BOTTOM_WIDTH = auto()
    DONE = auto()

    def describe(self) -> str:
        return _STATE_DESCRIPTIONS[self]


_STATE_DESCRIPTIONS = {
    State.START: "the start of the diagram",
    State.LINE: "a line",
    State.TOP: "the top edge",
    State.MID: "the rows of a rectangle",
    State.BOTTOM: "the bottom edge of a rectangle",
    State.TOP_DEPTH: "the top face of a cuboid",
    State.TOP_L_BOTTOM_L: "the depth edges of a cuboid",
    State.MID_WIDTH: "the front top edge of a cuboid",
    State.BOTTOM_HEIGHT: "the front face of a cuboid",
    State.BOTTOM_WIDTH: "the bottom edge of a cuboid",
    State.DONE: "past the end of the diagram",
}


@dataclass
class Counters:
    w: int = 0
    h: int = 0
    l: int = 0
    mid_w: int = 0
    bottom_w: int = 0
    bottom_h: int = 0
    bottom_l: int = 0


DEFAULT_MAX_STEPS = 4096


@dataclass(frozen=True)
class RecognizerConfig:
    max_steps: int = DEFAULT_MAX_STEPS

    def __post_init__(self):
        if isinstance(self.max_steps, bool) or not isinstance(self.max_steps, int) \
                or self.max_steps < 1:
            raise ValueError(f"max_steps must be a positive integer, got {self.max_steps!r}")


class DimensionValidator:
    """Cross-checks counters that measure the same edge.

    ``require("width", w, front=mid_w, bottom=bottom_w)`` passes only if every
    keyword counter equals ``w``; the first disagreement raises
    DimensionMismatch. Passed checks are kept in ``checks`` for reporting.
    """

    def __init__(self):
        self.checks: List[Dict[str, Any]] = []

    def require(self, edge: str, reference: int, **vantages: int) -> int:
        for vantage, value in vantages.items():
            if value != reference:
                raise DimensionMismatch(edge, reference, value, vantage)
            self.checks.append({'edge': edge, 'vantage': vantage, 'value': value})
        return reference


WIDTH_UNIT = (TokenType.DASH, TokenType.DASH)
PLUS, PIPE, SLASH = TokenType.PLUS, TokenType.PIPE, TokenType.SLASH


class Recognizer:
    def __init__(self, tokens: List[Token], config: Optional[RecognizerConfig] = None):
        if not tokens or tokens[-1].type is not TokenType.EOF:
            tokens = list(tokens) + [Token(TokenType.EOF, None, SourceLocation(1, 1), '')]
        self.tokens = tokens
        self.config = config or RecognizerConfig()
        self.pos = 0
        self.steps = 0
        self.state = State.START
        self.shape: Optional[Shape] = None
        self.counters = Counters()
        self.validator = DimensionValidator()
        self._handlers = {
            State.START: self._start,
            State.LINE: self._line,
            State.TOP: self._top,
            State.MID: self._mid,
            State.BOTTOM: self._bottom,
            State.TOP_DEPTH: self._top_depth,
            State.TOP_L_BOTTOM_L: self._top_l_bottom_l,
            State.MID_WIDTH: self._mid_width,
            State.BOTTOM_HEIGHT: self._bottom_height,
            State.BOTTOM_WIDTH: self._bottom_width,
        }

    # -- token access ---------------------------------------------------------

    def peek(self, offset: int = 0) -> Token:
        idx = self.pos + offset
        return self.tokens[idx] if idx < len(self.tokens) else self.tokens[-1]

    def check(self, *types: TokenType) -> bool:
        return all(self.peek(i).type is t for i, t in enumerate(types))

    def match(self, *types: TokenType) -> bool:
        if self.check(*types):
            self.pos += len(types)
            return True
        return False

    def match_last(self, tt: TokenType) -> bool:
        """Consume ``tt`` only if it is the final token of the diagram."""
        if self.check(tt, TokenType.EOF):
            self.pos += 1
            return True
        return False

    def unexpected(self, *expected: str) -> UnexpectedToken:
        return UnexpectedToken(self.peek(), self.state, expected)

    # -- driver ---------------------------------------------------------------

    def recognize(self) -> Value:
        self.scan()
        return self.build()

    def scan(self) -> Shape:
        """Run the state machine to DONE, leaving the counters unvalidated."""
        while self.state is not State.DONE:
            self.steps += 1
            if self.steps > self.config.max_steps:
                raise RecognitionDepthExceeded(self.config.max_steps, self.peek().location)
            nxt = self._handlers[self.state]()
            if nxt is not self.state:
                logger.debug("%s -> %s at token %d", self.state.name, nxt.name, self.pos)
            self.state = nxt
        return self.shape

    def build(self) -> Value:
        """Validate the counters of a finished scan and construct the value."""
        if self.state is not State.DONE:
            raise RuntimeError("build() called before scan() finished")
        c = self.counters
        if self.shape is Shape.LINE:
            return Line(c.w)
        if self.shape is Shape.RECTANGLE:
            self.validator.require("width", c.w, bottom=c.bottom_w)
            return Rectangle(w=c.w, h=c.h)
        self.validator.require("width", c.w, front=c.mid_w, bottom=c.bottom_w)
        self.validator.require("height", c.h, bottom=c.bottom_h)
        self.validator.require("length", c.l, bottom=c.bottom_l)
        return Cuboid(w=c.w, h=c.h, l=c.l)

    def _finish(self, shape: Shape) -> State:
        self.shape = shape
        return State.DONE

    # -- dispatcher -----------------------------------------------------------

    def _start(self) -> State:
        if self.match(TokenType.LINE_MARKER):
            return State.LINE
        if self.match(PLUS):
            return State.TOP
        raise self.unexpected("'I'", "'+'")

    # -- 1D ---------------------------------------------------------------------

    def _line(self) -> State:
        if self.match(*WIDTH_UNIT):
            self.counters.w += 1
            return State.LINE
        if self.match_last(TokenType.LINE_MARKER):
            return self._finish(Shape.LINE)
        raise self.unexpected("'--'", "a closing 'I'")

    # -- 2D ---------------------------------------------------------------------

    def _top(self) -> State:
        if self.match(*WIDTH_UNIT):
            self.counters.w += 1
            return State.TOP
        # A top edge with nothing below it is just a line.
        if self.match_last(PLUS):
            return self._finish(Shape.LINE)
        if self.match(PLUS):
            return State.MID
        raise self.unexpected("'--'", "'+'")

    def _mid(self) -> State:
        if self.match(PIPE, PIPE):
            self.counters.h += 1
            return State.MID
        if self.match(PLUS):
            return State.BOTTOM
        if self.counters.h == 0 and self.match(SLASH, SLASH, PIPE):
            self.counters.h = 1
            self.counters.l = 1
            return State.TOP_DEPTH
        if self.counters.h == 0:
            raise self.unexpected("'| |'", "'+'", "'/ / |'")
        raise self.unexpected("'| |'", "'+'")

    def _bottom(self) -> State:
        if self.match(*WIDTH_UNIT):
            self.counters.bottom_w += 1
            return State.BOTTOM
        if self.match_last(PLUS):
            return self._finish(Shape.RECTANGLE)
        raise self.unexpected("'--'", "a final '+'")

    # -- 3D ---------------------------------------------------------------------

    def _top_depth(self) -> State:
        c = self.counters
        if self.match(SLASH, SLASH, PIPE):
            c.h += 1
            c.l += 1
            return State.TOP_DEPTH
        if self.match(SLASH, SLASH, PLUS):
            c.l += 1
            return State.TOP_L_BOTTOM_L
        if self.match(PLUS):
            return State.MID_WIDTH
        raise self.unexpected("'/ / |'", "'/ / +'", "'+'")

    def _top_l_bottom_l(self) -> State:
        if self.match(SLASH, SLASH, SLASH):
            self.counters.l += 1
            self.counters.bottom_l += 1
            return State.TOP_L_BOTTOM_L
        if self.match(PLUS):
            return State.MID_WIDTH
        raise self.unexpected("'/ / /'", "'+'")

    def _mid_width(self) -> State:
        c = self.counters
        if self.match(*WIDTH_UNIT):
            c.mid_w += 1
            return State.MID_WIDTH
        if self.match(PLUS, PLUS):
            return State.BOTTOM_HEIGHT
        if self.match(PLUS, PIPE):
            c.h += 1
            return State.BOTTOM_HEIGHT
        if self.match(PLUS, SLASH):
            c.bottom_l += 1
            return State.BOTTOM_HEIGHT
        raise self.unexpected("'--'", "'+ +'", "'+ |'", "'+ /'")

    def _bottom_height(self) -> State:
        c = self.counters
        if self.match(PIPE, PIPE, PLUS):
            c.bottom_h += 1
            return State.BOTTOM_HEIGHT
        if self.match(PIPE, PIPE, SLASH):
            c.bottom_h += 1
            c.bottom_l += 1
            return State.BOTTOM_HEIGHT
        if self.match(PIPE, PIPE, PIPE):
            c.h += 1
            c.bottom_h += 1
            return State.BOTTOM_HEIGHT
        if self.match(PLUS):
            return State.BOTTOM_WIDTH
        raise self.unexpected("'| | +'", "'| | /'", "'| | |'", "'+'")

    def _bottom_width(self) -> State:
        if self.match(*WIDTH_UNIT):
            self.counters.bottom_w += 1
            return State.BOTTOM_WIDTH
        if self.match_last(PLUS):
            return self._finish(Shape.CUBOID)
        raise self.unexpected("'--'", "a final '+'")


# =============================================================================
# 5. CODE GENERATION
# =============================================================================

class Generator:
    def __init__(self, value: Value, shape: Shape, name: str = "<input>"):
        self.value = value
        self.shape = shape
        self.name = name

    def derived(self) -> Dict[str, Any]:
        v = self.value
        if isinstance(v, Rectangle):
            return {'area': v.area()}
        if isinstance(v, Cuboid):
            return {
                'volume': v.volume(),
                'top': asdict(v.top()),
                'side': asdict(v.side()),
                'front': asdict(v.front()),
            }
        return {}

    def json(self, analysis) -> str:
        return json.dumps({
            'meta': {'name': self.name, 'shape': self.shape.name.lower(),
                     'steps': analysis['steps']},
            'dimensions': asdict(self.value),
            'derived': self.derived(),
            'validation': {'is_valid': analysis['is_valid'],
                           'checks': analysis['checks'],
                           'errors': analysis['errors'],
                           'warnings': analysis['warnings']}
        }, indent=2)


# =============================================================================
# 6. COMPILER DRIVER
# =============================================================================

class AnalogCompiler:
    def __init__(self, name: str = "<input>", config: Optional[RecognizerConfig] = None):
        self.name = name
        self.config = config or RecognizerConfig()
        self.tokens: Optional[List[Token]] = None
        self.messages: Optional[MessageCollector] = None

    def _failed(self, steps: int = 0) -> Dict[str, Any]:
        return {'is_valid': False, 'shape': None, 'dimensions': None, 'steps': steps,
                'checks': [], 'errors': [e.text for e in self.messages.errors],
                'warnings': [w.text for w in self.messages.warnings]}

    def _report(self, exc: DiagramError):
        self.messages.error(exc.text, exc.location, hint=exc.hint, kind=exc.kind)

    def compile(self, code: str, verbose: bool = True):
        if verbose:
            print("=" * 60)
            print("ANALOG LITERAL COMPILER")
            print("=" * 60)

        source = SourceFile(self.name, code)
        self.messages = MessageCollector(source)

        # Lex
        if verbose:
            print("\n[PHASE 1: LEXICAL ANALYSIS]")
        self.tokens = Lexer(source, self.messages).tokenize()
        if verbose:
            print(f"  ✓ {len([t for t in self.tokens if t.type != TokenType.EOF])} tokens")

        if self.messages.has_errors():
            self._print_errors(verbose)
            return None, self._failed(), None

        # Recognize
        if verbose:
            print("\n[PHASE 2: SHAPE RECOGNITION]")
        recognizer = Recognizer(self.tokens, self.config)
        try:
            shape = recognizer.scan()
        except DiagramError as exc:
            self._report(exc)
            self._print_errors(verbose)
            return None, self._failed(recognizer.steps), None
        if verbose:
            print(f"  ✓ {shape.name.capitalize()} in {recognizer.steps} steps")

        # Validate
        if verbose:
            print("\n[PHASE 3: DIMENSION VALIDATION]")
        try:
            value = recognizer.build()
        except DimensionMismatch as exc:
            self._report(exc)
            self._print_errors(verbose)
            return None, self._failed(recognizer.steps), None

        if shape is Shape.LINE and self.tokens[0].type is TokenType.PLUS:
            self.messages.info("Top edge has nothing below it; read as a line")

        analysis = {
            'is_valid': True,
            'shape': shape.name.lower(),
            'dimensions': asdict(value),
            'steps': recognizer.steps,
            'checks': recognizer.validator.checks,
            'errors': [],
            'warnings': [w.text for w in self.messages.warnings],
        }
        if verbose:
            print(f"  ✓ {len(analysis['checks'])} redundant edge(s) agree")
            print(f"  ✓ Validation PASSED: {value!r}")
            for i in self.messages.infos:
                print(f"    [INFO] {i.text}")

        # Generate
        if verbose:
            print("\n[PHASE 4: CODE GENERATION]")
        json_out = Generator(value, shape, self.name).json(analysis)
        if verbose:
            print("  ✓ JSON generated")

        return json_out, analysis, value

    def _print_errors(self, verbose: bool):
        if not verbose:
            return
        print("  ✗ Validation FAILED")
        for e in self.messages.errors:
            for line in self.messages.format(e).split('\n'):
                print(f"    {line}")


def analog_literal(text: str, config: Optional[RecognizerConfig] = None) -> Value:
    """Read one drawing and return the Line, Rectangle or Cuboid it shows.

    Raises a DiagramError subclass when the drawing is malformed, its edges
    disagree, or it needs more steps than ``config.max_steps`` allows.
    """
    return Recognizer(tokenize(text), config).recognize()


# =============================================================================
# 7. TESTS & MAIN
# =============================================================================

RECT_2_BY_3 = """
    +----+
    |    |
    |    |
    |    |
    +----+
"""

CUBE_5_BY_2_BY_4 = """
         +----------+
        /          /|
       /          / |
      /          /  +
     /          /  /
    +----------+  /
    |          | /
    |          |/
    +----------+
"""

CUBE_4_BY_2_BY_2 = """
       +--------+
      /        /|
     /        / |
    +--------+  +
    |        | /
    |        |/
    +--------+
"""

CUBE_4_BY_5_BY_1 = """
      +--------+
     /        /|
    +--------+ |
    |        | |
    |        | |
    |        | |
    |        | +
    |        |/
    +--------+
"""

MINING_RIG = """
                     +------------------------------------------+
                    /                                          /|
                   /                                          / +
                  /                   /**/                   / /
                 /                   /**/                   / /
                /                   /**/                   / /
               /                                          / /
              /                                          / /
             /                                          / /
            /                                          / /
           /                                          / /
          /                                          / /
         /                                          / /
        /                                          / /
       /                                          / /
      /                                          / /
     /                                          / /
    +------------------------------------------+ /
    | /* -= dogecoin-one =- */         /*(o)*/ |/
    +------------------------------------------+
"""


def run_tests():
    """Table-driven suite over whole drawings, valid and broken."""

    tests = [
        # =================================================================
        # CATEGORY 1: Lines
        # =================================================================
        ("Line: Empty markers", "II", True, {'shape': 'line', 'dimensions': {'magnitude': 0}}),
        ("Line: One unit", "I--I", True, {'dimensions': {'magnitude': 1}}),
        ("Line: Three units", "I------I", True, {'dimensions': {'magnitude': 3}}),
        ("Line: Plus terminators", "+------+", True, {'shape': 'line', 'dimensions': {'magnitude': 3}}),
        ("Line: Empty plus", "++", True, {'dimensions': {'magnitude': 0}}),
        ("Line: Spaced out", "I - - - - I", True, {'dimensions': {'magnitude': 2}}),
        ("Line: Odd dash", "I---I", False, None),
        ("Line: Unterminated", "I----", False, None),
        ("Line: Lone marker", "I", False, None),
        ("Line: Trailing tokens", "I--I--", False, None),
        ("Line: Mixed terminators", "I--+", False, None),

        # =================================================================
        # CATEGORY 2: Rectangles
        # =================================================================
        ("Rect: 2x3", RECT_2_BY_3, True, {'shape': 'rectangle', 'dimensions': {'w': 2, 'h': 3}}),
        ("Rect: Single line text", "+--+ |  | +--+", True, {'dimensions': {'w': 1, 'h': 1}}),
        ("Rect: No rows", "+--+ +--+", True, {'dimensions': {'w': 1, 'h': 0}}),
        ("Rect: Zero width", "++ || ++", True, {'dimensions': {'w': 0, 'h': 1}}),
        ("Rect: Annotated", "+------+ | /* ok */ | +------+", True, {'dimensions': {'w': 3, 'h': 1}}),
        ("Rect: Short bottom", "+--------+ |        | +------+", False, None),
        ("Rect: Long bottom", "+----+ |    | +------+", False, None),
        ("Rect: Missing bottom", "+----+ |    | |    |", False, None),
        ("Rect: Truncated bottom", "+----+ |    | +----", False, None),
        ("Rect: Half row", "+----+ |    +----+", False, None),
        ("Rect: Trailing plus", "+--+ |  | +--+ +", False, None),
        ("Rect: Comment after short bottom",
         "+----+\n|    |\n+--+ // TODO: more dashes\n", False, None),

        # =================================================================
        # CATEGORY 3: Cuboids
        # =================================================================
        ("Cube: 5x2x4", CUBE_5_BY_2_BY_4, True,
         {'shape': 'cuboid', 'dimensions': {'w': 5, 'h': 2, 'l': 4}}),
        ("Cube: 4x2x2", CUBE_4_BY_2_BY_2, True, {'dimensions': {'w': 4, 'h': 2, 'l': 2}}),
        ("Cube: 4x5x1", CUBE_4_BY_5_BY_1, True, {'dimensions': {'w': 4, 'h': 5, 'l': 1}}),
        ("Cube: Mining rig", MINING_RIG, True, {'dimensions': {'w': 21, 'h': 1, 'l': 16}}),
        ("Cube: Short front edge", CUBE_4_BY_2_BY_2.replace("+--------+  +", "+------+  +"), False, None),
        ("Cube: Short bottom edge", CUBE_4_BY_2_BY_2.rstrip()[:-3] + "+\n", False, None),
        ("Cube: Missing side row", CUBE_5_BY_2_BY_4.replace("|          |/\n", ""), False, None),
        ("Cube: Slash after rows", "+--+ |  | / / | +--+", False, None),

        # =================================================================
        # CATEGORY 4: Characters & Comments
        # =================================================================
        ("Chars: Empty input", "", False, None),
        ("Chars: Only whitespace", "  \n\t ", False, None),
        ("Chars: Only comment", "/* nothing */", False, None),
        ("Chars: Letter", "I--x--I", False, None),
        ("Chars: Lowercase marker", "i--i", False, None),
        ("Chars: Unterminated comment", "+--+ /* oops", False, None),
        ("Chars: Nested comment", "I-- /* a /* b */ c */ --I", True, {'dimensions': {'magnitude': 2}}),
        ("Chars: Wrong first symbol", "|--|", False, None),
    ]

    print("\n" + "=" * 70)
    print("TEST SUITE")
    print("=" * 70)

    # Group tests by category
    categories = {}
    for test in tests:
        cat = test[0].split(":")[0]
        categories.setdefault(cat, []).append(test)

    total_passed = total_failed = 0
    failed_tests = []

    for cat_name, cat_tests in categories.items():
        print(f"\n[{cat_name}]")
        cat_passed = cat_failed = 0

        for name, code, should_pass, expected in cat_tests:
            _, result, _ = AnalogCompiler(f"<{name}>").compile(code, verbose=False)

            ok = result['is_valid'] == should_pass
            if ok and expected:
                for key, val in expected.items():
                    if result.get(key) != val:
                        ok = False
                        break

            if ok:
                print(f"  ✓ {name}")
                cat_passed += 1
            else:
                print(f"  ✗ {name}")
                print(f"      Expected: {'pass' if should_pass else 'fail'}, "
                      f"Got: {'pass' if result['is_valid'] else 'fail'}")
                if result['errors']:
                    print(f"      Errors: {result['errors'][:2]}")
                cat_failed += 1
                failed_tests.append(name)

        total_passed += cat_passed
        total_failed += cat_failed
        print(f"  [{cat_passed}/{cat_passed + cat_failed} passed]")

    print("\n" + "=" * 70)
    print(f"TOTAL: {total_passed}/{total_passed + total_failed} tests passed")
    if failed_tests:
        print("\nFailed tests:")
        for t in failed_tests:
            print(f"  - {t}")
    print("=" * 70)

    return total_passed, total_failed


def main(argv: Optional[List[str]] = None) -> int:
    import argparse
    import os
    p = argparse.ArgumentParser(description='Analog literal compiler')
    p.add_argument('--test', action='store_true', help='run the built-in test suite')
    p.add_argument('--code', type=str, help='diagram text')
    p.add_argument('--input', type=str, help='file containing one diagram')
    p.add_argument('--output-dir', type=str, default='.')
    p.add_argument('--max-steps', type=int, default=DEFAULT_MAX_STEPS)
    p.add_argument('--debug', action='store_true', help='log every state transition')
    p.add_argument('--quiet', action='store_true', help='suppress phase output')
    args = p.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format=DEFAULT_LOG_FORMAT)

    if args.test:
        _, failed = run_tests()
        return 1 if failed else 0

    try:
        config = RecognizerConfig(max_steps=args.max_steps)
    except ValueError as exc:
        p.error(str(exc))

    name = "cube_5_by_2_by_4"
    code = CUBE_5_BY_2_BY_4
    if args.code is not None:
        name, code = "literal", args.code
    if args.input:
        name = os.path.splitext(os.path.basename(args.input))[0]
        with open(args.input) as f:
            code = f.read()

    json_out, analysis, _ = AnalogCompiler(name, config).compile(code, verbose=not args.quiet)

    if json_out is None:
        return 1

    path = os.path.join(args.output_dir, f"{name}.json")
    with open(path, 'w') as f:
        f.write(json_out)
    if not args.quiet:
        print(f"\n✓ Output saved to {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
